"""Engine-internal faults.  None of these escape the public ``Moderator`` API."""

from __future__ import annotations


class ModerationError(Exception):
    """Base class for moderation engine faults."""


class LoadError(ModerationError):
    """A language-pack resource is missing or malformed."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class NormalizationFault(ModerationError):
    """The normalizer hit input it could not canonicalize."""


class MatchFault(ModerationError):
    """A single lexicon entry cannot be used for matching."""

    def __init__(self, entry: object, reason: str) -> None:
        super().__init__(f"{entry!r}: {reason}")
        self.entry = entry
        self.reason = reason
