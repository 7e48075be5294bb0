"""Heuristic detector — better_profanity's English word check.

Runs next to the lexicon for the languages it is enabled for.  The library
judges whole words (and handles its own leetspeak variants); we report the
word's span so it flows through the same whitelist/severity/censor path as
lexicon matches.

The library's list is broad: it flags "kill", "screw" or "cock" on their
own, which are ordinary words in job postings ("cock valve", "Kill the
weeds").  Those words, plus the lexicon whitelist, are removed from its list
through ``whitelist_words``.
"""

from __future__ import annotations
import re
import threading
from typing import Iterable

from better_profanity import Profanity

from .types import MatchSpan, Severity

# Words on the library's list that are everyday vocabulary in task postings
COMMON_WORDS = frozenset({
    "kill", "screw", "screwed", "screwing", "weed", "strip", "hump",
    "knob", "cock", "pussy", "tits", "gay", "sex", "hooker", "erection",
})

# One engine per allow-list; each reads the ~5MB word list once
_engines: dict[frozenset[str], Profanity] = {}
_engines_lock = threading.Lock()

_WORD = re.compile(r"\S+")
_EDGE_PUNCTUATION = "\"'()[]{}<>.,;:?!«»“”„"


def _get_engine(allowed: frozenset[str]) -> Profanity:
    """Lazy-init a better_profanity engine that skips ``allowed`` words."""
    engine = _engines.get(allowed)
    if engine is None:
        with _engines_lock:
            engine = _engines.get(allowed)
            if engine is None:
                engine = Profanity()
                engine.load_censor_words(whitelist_words=sorted(allowed))
                _engines[allowed] = engine
    return engine


class HeuristicDetector:
    """Flags whole words that better_profanity considers profane."""

    __slots__ = ("language", "tier", "allowed")

    def __init__(
        self,
        language: str = "en",
        *,
        tier: Severity = Severity.MODERATE,
        allowed: Iterable[str] = COMMON_WORDS,
    ) -> None:
        if tier is Severity.NONE:
            raise ValueError("heuristic tier must be mild, moderate or severe")
        self.language = language
        self.tier = tier
        self.allowed = frozenset(w.strip().lower() for w in allowed if w.strip())

    def detect(self, text: str) -> list[MatchSpan]:
        engine = _get_engine(self.allowed)
        matches: list[MatchSpan] = []
        for m in _WORD.finditer(text):
            word = m.group()
            core = word.strip(_EDGE_PUNCTUATION)
            if not core or not engine.contains_profanity(core):
                continue
            start = m.start() + (len(word) - len(word.lstrip(_EDGE_PUNCTUATION)))
            matches.append(MatchSpan(
                start=start,
                end=start + len(core),
                term=core.lower(),
                tier=self.tier,
                language=self.language,
                source="heuristic",
            ))
        return matches

    def __repr__(self) -> str:
        return f"HeuristicDetector({self.language!r}, tier={self.tier.value!r})"
