"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class Severity(str, Enum):
    """Totally ordered severity scale.  Tiers reuse the non-``none`` members."""

    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @classmethod
    def parse(cls, value: "Severity | str") -> "Severity":
        """Accept a member or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown severity: {value!r}") from None


_RANK = {
    Severity.NONE: 0,
    Severity.MILD: 1,
    Severity.MODERATE: 2,
    Severity.SEVERE: 3,
}

# Scan order for lexicon tiers, most severe first
TIERS: tuple[Severity, ...] = (Severity.SEVERE, Severity.MODERATE, Severity.MILD)


@dataclass(frozen=True, slots=True)
class MatchSpan:
    """A single offensive-term occurrence, in original-text offsets."""
    start: int
    end: int
    term: str              # canonical lexicon term (or detector's word)
    tier: Severity
    language: str          # e.g. "en", "bg"
    source: str = "lexicon"  # "lexicon" | "heuristic" | "custom"

    def text_in(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(slots=True)
class CheckResult:
    """Result of checking one text."""
    has_profanity: bool
    severity: Severity
    matches: list[MatchSpan] = field(default_factory=list)
    censored_text: str = ""
    locale_used: str = "en"

    @property
    def detected_words(self) -> list[str]:
        return [m.term for m in self.matches]

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_profanity": self.has_profanity,
            "severity": self.severity.value,
            "matches": [
                {
                    "start": m.start,
                    "end": m.end,
                    "term": m.term,
                    "tier": m.tier.value,
                    "language": m.language,
                    "source": m.source,
                }
                for m in self.matches
            ],
            "censored_text": self.censored_text,
            "locale_used": self.locale_used,
        }


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    """Per-call blocking policy for ``Moderator.validate``."""
    allow_mild: bool = False
    block_threshold: Severity = Severity.NONE   # block anything above this

    def __post_init__(self) -> None:
        object.__setattr__(self, "block_threshold", Severity.parse(self.block_threshold))


DEFAULT_POLICY = ValidationPolicy()


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of ``Moderator.validate``."""
    valid: bool
    severity: Severity = Severity.NONE
    error: str | None = None    # translation key, set only when invalid


class Detector(Protocol):
    """Anything that can report offensive spans in raw text."""

    def detect(self, text: str) -> list[MatchSpan]:
        ...
