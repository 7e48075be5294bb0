"""Severity classifier — match counts per tier → one overall severity.

Decision list, first rule that holds wins (s/m/d = severe/moderate/mild):

    severe    if s >= SEVERE_SINGLE_COUNT or s + m >= SEVERE_COMBINED_COUNT
    moderate  if s + m >= MODERATE_COMBINED_COUNT
    mild      if s + m + d >= MILD_TOTAL_COUNT
    none      otherwise
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .types import MatchSpan, Severity

SEVERE_SINGLE_COUNT = 1
SEVERE_COMBINED_COUNT = 3
MODERATE_COMBINED_COUNT = 2
MILD_TOTAL_COUNT = 1


@dataclass(frozen=True, slots=True)
class SeverityThresholds:
    """Tunable counts for the decision list."""
    severe_single: int = SEVERE_SINGLE_COUNT
    severe_combined: int = SEVERE_COMBINED_COUNT
    moderate_combined: int = MODERATE_COMBINED_COUNT
    mild_total: int = MILD_TOTAL_COUNT

    def __post_init__(self) -> None:
        for name in ("severe_single", "severe_combined", "moderate_combined", "mild_total"):
            if getattr(self, name) < 1:
                raise ValueError(f"threshold {name} must be >= 1")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "SeverityThresholds":
        if not data:
            return cls()
        known = {k: int(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


DEFAULT_THRESHOLDS = SeverityThresholds()


def classify_counts(
    severe: int,
    moderate: int,
    mild: int,
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> Severity:
    if severe >= thresholds.severe_single or severe + moderate >= thresholds.severe_combined:
        return Severity.SEVERE
    if severe + moderate >= thresholds.moderate_combined:
        return Severity.MODERATE
    if severe + moderate + mild >= thresholds.mild_total:
        return Severity.MILD
    return Severity.NONE


def classify(
    matches: Iterable[MatchSpan],
    thresholds: SeverityThresholds = DEFAULT_THRESHOLDS,
) -> Severity:
    counts = Counter(m.tier for m in matches)
    return classify_counts(
        counts[Severity.SEVERE],
        counts[Severity.MODERATE],
        counts[Severity.MILD],
        thresholds,
    )
