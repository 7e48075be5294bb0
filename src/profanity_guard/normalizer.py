"""Text normalizer — canonicalizes text before lexicon matching.

Defeats the usual evasion tricks while remembering where every normalized
character came from, so matches can be mapped back onto the original text:

    "Fuuuuck"  →  "fuck"       origins: [(0,1), (1,5), (5,6), (6,7)]
    "$h.1.t"   →  "shit"       origins: [(0,1), (1,2), (3,4), (5,6)]

Steps, in order:
  1. lowercase (compatibility-folded, so full-width letters become ASCII)
  2. collapse runs of 3+ identical letters to a single letter
  3. reverse obfuscation (digits, symbols, homoglyphs → real letters), only
     inside tokens that contain a letter of the target script
  4. strip separators wedged between letters of the same alphabet

Whitespace is never removed; it is what keeps distinct words apart.
"""

from __future__ import annotations
import logging
import unicodedata
from dataclasses import dataclass
from functools import lru_cache

from .errors import NormalizationFault
from .obfuscation import OBFUSCATION_MAPS, ObfuscationMap

logger = logging.getLogger(__name__)

# Characters people insert inside words to break up a match
SEPARATORS = frozenset(".-_~^'`\",:;/\\+=|·•")

# Dropped wherever they appear
INVISIBLE = frozenset("\u00ad\u200b\u200c\u200d\u2060\ufeff")

# (character, (original_start, original_end))
_Char = tuple[str, tuple[int, int]]


@dataclass(frozen=True, slots=True)
class NormalizedText:
    """Normalized text plus its correction table back to the original."""
    text: str
    origins: tuple[tuple[int, int], ...]   # one original range per character

    def to_original(self, start: int, end: int) -> tuple[int, int]:
        """Map a normalized [start, end) span to original offsets.

        Origins never decrease, so the union of the contributing ranges is
        simply first-start to last-end.
        """
        return self.origins[start][0], self.origins[end - 1][1]

    def __len__(self) -> int:
        return len(self.text)


@lru_cache(maxsize=4096)
def script_of(ch: str) -> str | None:
    """Script of a letter ("latin", "cyrillic", ...), None for non-letters."""
    if not ch.isalpha():
        return None
    name = unicodedata.name(ch, "")
    return name.split(" ", 1)[0].lower() if name else None


class Normalizer:
    """Normalizes text toward one script's canonical letters."""

    __slots__ = ("_map",)

    def __init__(self, obfuscation: ObfuscationMap) -> None:
        self._map = obfuscation

    @property
    def script(self) -> str:
        return self._map.script

    def normalize(self, text: str) -> NormalizedText:
        if not isinstance(text, str):
            raise NormalizationFault(f"expected str, got {type(text).__name__}")
        try:
            chars = _fold(text)
            chars = _collapse_repeats(chars)
            chars = self._deobfuscate(chars)
            chars = _strip_separators(chars)
        except (TypeError, ValueError, IndexError) as exc:
            raise NormalizationFault(f"cannot normalize text: {exc}") from exc
        return NormalizedText(
            text="".join(c for c, _ in chars),
            origins=tuple(o for _, o in chars),
        )

    def normalize_term(self, term: str) -> str:
        """Normalize a lexicon or whitelist term the same way as input text."""
        return self.normalize(term).text.strip()

    def _deobfuscate(self, chars: list[_Char]) -> list[_Char]:
        reverse = self._map.reverse
        if not reverse:
            return chars
        out: list[_Char] = []
        n = len(chars)
        i = 0
        while i < n:
            if chars[i][0].isspace():
                out.append(chars[i])
                i += 1
                continue
            j = i
            while j < n and not chars[j][0].isspace():
                j += 1
            token = chars[i:j]
            if any(script_of(c) == self._map.script for c, _ in token):
                out.extend(self._substitute(token))
            else:
                out.extend(token)
            i = j
        return out

    def _substitute(self, token: list[_Char]) -> list[_Char]:
        reverse = self._map.reverse
        out: list[_Char] = []
        n = len(token)
        i = 0
        while i < n:
            for length in range(min(self._map.max_form_len, n - i), 0, -1):
                surface = "".join(c for c, _ in token[i:i + length])
                canonical = reverse.get(surface)
                if canonical is not None:
                    out.append((canonical, (token[i][1][0], token[i + length - 1][1][1])))
                    i += length
                    break
            else:
                out.append(token[i])
                i += 1
        return out


def _fold(text: str) -> list[_Char]:
    chars: list[_Char] = []
    for i, ch in enumerate(text):
        folded = unicodedata.normalize("NFKC", ch).lower() if not ch.isascii() else ch.lower()
        for c in folded:
            chars.append((c, (i, i + 1)))
    return chars


def _collapse_repeats(chars: list[_Char]) -> list[_Char]:
    out: list[_Char] = []
    n = len(chars)
    i = 0
    while i < n:
        ch, (start, _) = chars[i]
        j = i + 1
        while j < n and chars[j][0] == ch:
            j += 1
        if j - i >= 3 and ch.isalpha():
            out.append((ch, (start, chars[j - 1][1][1])))
        else:
            out.extend(chars[i:j])
        i = j
    return out


def _strip_separators(chars: list[_Char]) -> list[_Char]:
    out: list[_Char] = []
    n = len(chars)
    i = 0
    while i < n:
        ch = chars[i][0]
        if ch in INVISIBLE:
            i += 1
            continue
        if ch not in SEPARATORS:
            out.append(chars[i])
            i += 1
            continue
        j = i
        while j < n and (chars[j][0] in SEPARATORS or chars[j][0] in INVISIBLE):
            j += 1
        before = script_of(out[-1][0]) if out else None
        after = script_of(chars[j][0]) if j < n else None
        if before is None or before != after:
            out.extend(c for c in chars[i:j] if c[0] not in INVISIBLE)
        i = j
    return out


def raw_text(text: str) -> NormalizedText:
    """Fallback: lowercase only, identity offsets."""
    folded = "".join(c.lower() if len(c.lower()) == 1 else c for c in text)
    return NormalizedText(folded, tuple((i, i + 1) for i in range(len(text))))


@lru_cache(maxsize=None)
def get_normalizer(script: str) -> Normalizer:
    """Shared normalizer for a script; scripts without a map get folding only."""
    return Normalizer(OBFUSCATION_MAPS.get(script) or ObfuscationMap(script, {}))


def normalize_or_raw(normalizer: Normalizer, text: str) -> NormalizedText:
    """Normalize, falling back to the raw text if the normalizer faults."""
    try:
        return normalizer.normalize(text)
    except NormalizationFault as exc:
        logger.warning("Normalization failed, matching raw text instead: %s", exc)
        return raw_text(text)
