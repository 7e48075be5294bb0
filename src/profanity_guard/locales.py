"""Locale resolver — which language packs to run for a requested locale."""

from __future__ import annotations
from typing import Iterable, Mapping

DEFAULT_LANGUAGE = "en"

# Most authoritative first.  Every chain is completed with DEFAULT_LANGUAGE.
LANGUAGE_CHAINS: Mapping[str, tuple[str, ...]] = {
    "en": ("en",),
    "bg": ("bg", "en"),
    "ru": ("ru", "en"),
    "uk": ("uk", "ru", "en"),
}


def primary_language(locale: object) -> str:
    """``"uk_UA.UTF-8"`` → ``"uk"``; anything unusable → ``""``."""
    if not isinstance(locale, str):
        return ""
    code = locale.strip().lower()
    for sep in (".", "@"):
        code = code.split(sep, 1)[0]
    code = code.replace("_", "-").split("-", 1)[0]
    return code if code.isalpha() else ""


def resolve_locale(
    locale: object,
    *,
    default: str = DEFAULT_LANGUAGE,
    chains: Mapping[str, Iterable[str]] = LANGUAGE_CHAINS,
    available: Iterable[str] = (),
) -> list[str]:
    """Ordered, deduplicated language codes for ``locale``, ending with ``default``.

    Codes with a declared chain use it; a code that only has a loaded pack
    (``available``) runs alone before the default.  Never raises.
    """
    code = primary_language(locale)
    if code in chains:
        chain = list(chains[code])
    elif code and code in set(available):
        chain = [code]
    else:
        chain = []

    seen: set[str] = {default}
    out: list[str] = []
    for c in chain:
        if c not in seen:
            seen.add(c)
            out.append(c)
    out.append(default)
    return out
