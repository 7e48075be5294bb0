"""Obfuscation maps — the surface forms people type instead of real letters.

Each map targets one script: a canonical letter of that script maps to the
digits, symbols and cross-script homoglyphs commonly substituted for it.
The normalizer reverses these (surface form → canonical letter).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ObfuscationMap:
    """Canonical grapheme → obfuscated surface forms, for one script."""

    script: str
    forms: Mapping[str, tuple[str, ...]]
    reverse: Mapping[str, str] = field(init=False, repr=False)
    max_form_len: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        reverse: dict[str, str] = {}
        for canonical, surfaces in self.forms.items():
            for surface in surfaces:
                if not surface:
                    raise ValueError(f"{self.script}: empty surface form for {canonical!r}")
                if surface in reverse and reverse[surface] != canonical:
                    raise ValueError(
                        f"{self.script}: {surface!r} maps to both "
                        f"{reverse[surface]!r} and {canonical!r}"
                    )
                reverse[surface] = canonical
        object.__setattr__(self, "forms", MappingProxyType(dict(self.forms)))
        object.__setattr__(self, "reverse", MappingProxyType(reverse))
        object.__setattr__(self, "max_form_len", max((len(s) for s in reverse), default=0))

    @property
    def surface_chars(self) -> frozenset[str]:
        """Every single character that takes part in some surface form."""
        return frozenset("".join(self.reverse))


# Leetspeak digits/symbols plus Cyrillic letters that look Latin
LATIN_OBFUSCATION = ObfuscationMap("latin", {
    "a": ("@", "4", "а"),
    "b": ("в",),
    "c": ("с", "¢"),
    "e": ("3", "е", "€"),
    "h": ("н",),
    "i": ("1", "!", "і"),
    "j": ("ј",),
    "k": ("к", "|<"),
    "m": ("м",),
    "o": ("0", "о", "()"),
    "p": ("р",),
    "s": ("$", "5", "ѕ"),
    "t": ("7", "т"),
    "x": ("х",),
    "y": ("у",),
})

# Digits/symbols, Latin letters that look Cyrillic, and transliterations
CYRILLIC_OBFUSCATION = ObfuscationMap("cyrillic", {
    "а": ("a", "@"),
    "б": ("6",),
    "в": ("b",),
    "г": ("r",),
    "е": ("e", "ё"),
    "ж": (">|<", "zh"),
    "з": ("3",),
    "і": ("i", "1"),
    "й": ("j",),
    "к": ("k",),
    "м": ("m",),
    "н": ("h",),
    "о": ("o", "0"),
    "п": ("n",),
    "р": ("p",),
    "с": ("c", "$"),
    "т": ("t",),
    "у": ("y", "u"),
    "х": ("x", "}{", "kh"),
    "ч": ("4", "ch"),
    "ш": ("sh",),
    "щ": ("shch",),
    "ю": ("yu",),
    "я": ("ya", "ja"),
})

OBFUSCATION_MAPS: Mapping[str, ObfuscationMap] = MappingProxyType({
    m.script: m for m in (LATIN_OBFUSCATION, CYRILLIC_OBFUSCATION)
})
