"""Censor — masks matched spans without changing the text's length."""

from __future__ import annotations
from typing import Iterable

from .normalizer import INVISIBLE, SEPARATORS
from .obfuscation import OBFUSCATION_MAPS
from .types import MatchSpan

DEFAULT_MASK_CHAR = "*"


def check_mask_char(mask_char: str) -> str:
    """Reject mask characters that could turn masked text back into a term.

    A mask must be a single character that is not a letter or digit, not an
    obfuscation surface form and not a separator the normalizer strips.
    """
    if not isinstance(mask_char, str) or len(mask_char) != 1:
        raise ValueError(f"mask_char must be a single character, got {mask_char!r}")
    if mask_char.isalnum() or mask_char.isspace():
        raise ValueError(f"mask_char {mask_char!r} must not be alphanumeric or whitespace")
    if mask_char in SEPARATORS or mask_char in INVISIBLE:
        raise ValueError(f"mask_char {mask_char!r} is a separator character")
    for obfuscation in OBFUSCATION_MAPS.values():
        if mask_char in obfuscation.surface_chars:
            raise ValueError(f"mask_char {mask_char!r} is an obfuscated letter in {obfuscation.script}")
    return mask_char


def merge_spans(matches: Iterable[MatchSpan]) -> list[tuple[int, int]]:
    """Sorted, non-overlapping regions covering every match."""
    regions: list[tuple[int, int]] = []
    for start, end in sorted((m.start, m.end) for m in matches):
        if regions and start < regions[-1][1]:
            regions[-1] = (regions[-1][0], max(regions[-1][1], end))
        else:
            regions.append((start, end))
    return regions


def censor(text: str, matches: Iterable[MatchSpan], mask_char: str = DEFAULT_MASK_CHAR) -> str:
    """Replace every matched region with a run of ``mask_char`` of equal length."""
    parts: list[str] = []
    cursor = 0
    for start, end in merge_spans(matches):
        parts.append(text[cursor:start])
        parts.append(mask_char * (end - start))
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)
