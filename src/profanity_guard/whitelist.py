"""Whitelist filter — drops matches that sit inside a legitimate word.

The classic case is "Scunthorpe": the town name contains a lexicon term,
but every character of that match lies inside an occurrence of the
whitelisted word, so the match is discarded.  Adjacency is not enough; the
match has to be fully contained, and the occurrence must survive censoring.
"""

from __future__ import annotations
import re
from typing import Iterable

from .matcher import compile_terms, find_all
from .normalizer import Normalizer, get_normalizer, normalize_or_raw
from .obfuscation import OBFUSCATION_MAPS
from .types import MatchSpan


class WhitelistFilter:
    """Compiled whitelist, one pattern per script normalizer."""

    __slots__ = ("_patterns",)

    def __init__(self, whitelist: Iterable[str], scripts: Iterable[str] = tuple(OBFUSCATION_MAPS)) -> None:
        terms = sorted(set(whitelist))
        self._patterns: list[tuple[Normalizer, re.Pattern]] = []
        for script in scripts:
            normalizer = get_normalizer(script)
            pattern = compile_terms(t for t in (normalizer.normalize_term(w) for w in terms) if t)
            if pattern is not None:
                self._patterns.append((normalizer, pattern))

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def occurrences(self, text: str) -> list[tuple[int, int]]:
        """Original-text spans of every whitelisted word in ``text``."""
        spans: set[tuple[int, int]] = set()
        for normalizer, pattern in self._patterns:
            normalized = normalize_or_raw(normalizer, text)
            for start, end, _ in find_all(pattern, normalized):
                spans.add((start, end))
        return sorted(spans)

    def apply(self, text: str, matches: list[MatchSpan]) -> list[MatchSpan]:
        """Drop matches that sit inside an intact whitelisted occurrence.

        An occurrence that a kept match only partly overlaps gets masked
        together with that match, so it protects nothing: matches inside
        it are kept too, otherwise they would surface on a re-check of the
        censored text.
        """
        if not matches or not self._patterns:
            return list(matches)
        active = self.occurrences(text)
        while True:
            kept = [m for m in matches if not _inside_any(m, active)]
            intact = [
                (start, end) for start, end in active
                if not any(_straddles(m, start, end) for m in kept)
            ]
            if len(intact) == len(active):
                return kept
            active = intact


def _inside_any(m: MatchSpan, spans: list[tuple[int, int]]) -> bool:
    return any(start <= m.start and m.end <= end for start, end in spans)


def _straddles(m: MatchSpan, start: int, end: int) -> bool:
    """Overlaps [start, end) without lying inside it."""
    return m.start < end and start < m.end and not (start <= m.start and m.end <= end)
