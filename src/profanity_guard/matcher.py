"""Lexicon matcher — finds every term of a language pack in normalized text.

Each tier compiles to one lookahead alternation, longest terms first, so a
single pass reports every start position (overlapping occurrences included)
without re-scanning per term.
"""

from __future__ import annotations
import re
from dataclasses import replace
from typing import Iterable, Iterator

from .lexicon import LanguagePack
from .normalizer import NormalizedText, get_normalizer, normalize_or_raw
from .types import TIERS, MatchSpan, Severity


def compile_terms(terms: Iterable[str]) -> re.Pattern | None:
    """One pattern matching any of ``terms`` at every position."""
    ordered = sorted(set(terms), key=lambda t: (-len(t), t))
    if not ordered:
        return None
    return re.compile("(?=(" + "|".join(re.escape(t) for t in ordered) + "))")


def find_all(pattern: re.Pattern, normalized: NormalizedText) -> Iterator[tuple[int, int, str]]:
    """Yield (orig_start, orig_end, matched_term) for every occurrence."""
    for m in pattern.finditer(normalized.text):
        start, end = m.span(1)
        orig_start, orig_end = normalized.to_original(start, end)
        yield orig_start, orig_end, m.group(1)


class LexiconDetector:
    """Detector backed by one language pack."""

    __slots__ = ("pack", "_normalizer", "_patterns")

    def __init__(self, pack: LanguagePack) -> None:
        self.pack = pack
        self._normalizer = get_normalizer(pack.script)
        self._patterns: list[tuple[Severity, re.Pattern]] = []
        for tier in TIERS:
            pattern = compile_terms(pack.terms(tier))
            if pattern is not None:
                self._patterns.append((tier, pattern))

    def detect(self, text: str) -> list[MatchSpan]:
        if not self._patterns:
            return []
        normalized = normalize_or_raw(self._normalizer, text)
        matches: list[MatchSpan] = []
        for tier, pattern in self._patterns:
            for start, end, term in find_all(pattern, normalized):
                matches.append(MatchSpan(
                    start=start,
                    end=end,
                    term=term,
                    tier=tier,
                    language=self.pack.code,
                    source="lexicon",
                ))
        return matches

    def __repr__(self) -> str:
        return f"LexiconDetector({self.pack.code!r}, terms={self.pack.size})"


def merge_matches(matches: list[MatchSpan]) -> list[MatchSpan]:
    """Fold duplicate and nested spans into the span that contains them.

    Identical spans from several packs or detectors count once; a span lying
    inside a longer one ("shit" in "bullshit") is absorbed by it.  The kept
    span takes the most severe tier of everything it absorbed.  Partial
    overlaps are kept as separate matches.
    """
    if not matches:
        return []
    ranked = sorted(matches, key=lambda m: (m.start, -(m.end - m.start), -m.tier.rank))
    kept: list[MatchSpan] = []
    for m in ranked:
        for idx, k in enumerate(kept):
            if k.start <= m.start and m.end <= k.end:
                if m.tier.rank > k.tier.rank:
                    kept[idx] = replace(k, tier=m.tier)
                break
        else:
            kept.append(m)
    return kept
