"""Lexicon store — per-language term lists, partitioned by severity tier.

Packs are YAML resources, one per language, bundled under ``lexicons/``:

    code: bg
    name: Bulgarian
    script: cyrillic
    tiers:
      severe:
        - курва
      moderate:
        - копеле
      mild:
        - глупост
        - {term: "x", always_match: true}   # bypasses the length check

``whitelist.yaml`` next to them lists legitimate words that contain a
lexicon term as a substring.

Terms are normalized at load time with the same normalizer the pack's text
goes through, so ``pu4ka`` in a file and ``pu4ka`` in a message meet in the
same canonical form.  The store is built once per lexicon directory, under
a lock, and is read-only afterwards.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml

from .errors import LoadError, MatchFault, NormalizationFault
from .normalizer import get_normalizer
from .types import TIERS, Severity

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 2
WHITELIST_FILE = "whitelist.yaml"
DEFAULT_SCRIPT = "latin"


@dataclass(frozen=True, slots=True)
class LanguagePack:
    """Immutable, normalized term lists for one language."""
    code: str
    name: str
    script: str
    tiers: Mapping[Severity, tuple[str, ...]]

    @classmethod
    def empty(cls, code: str, script: str = DEFAULT_SCRIPT) -> "LanguagePack":
        return cls(code=code, name=code, script=script,
                   tiers=MappingProxyType({tier: () for tier in TIERS}))

    def terms(self, tier: Severity) -> tuple[str, ...]:
        return self.tiers.get(tier, ())

    @property
    def size(self) -> int:
        return sum(len(t) for t in self.tiers.values())


def build_pack(
    code: str,
    tiers: Mapping[str, Any],
    *,
    name: str | None = None,
    script: str = DEFAULT_SCRIPT,
) -> LanguagePack:
    """Validate and normalize raw tier lists into a LanguagePack.

    Unusable entries are skipped with a warning.  A term listed under more
    than one tier keeps the most severe one.
    """
    normalizer = get_normalizer(script)
    known = {tier.value for tier in TIERS}
    for key in tiers:
        if key not in known:
            logger.warning("Lexicon %s: ignoring unknown tier %r", code, key)

    seen: dict[str, Severity] = {}
    out: dict[Severity, list[str]] = {tier: [] for tier in TIERS}
    for tier in TIERS:
        entries = tiers.get(tier.value) or []
        if not isinstance(entries, (list, tuple)):
            logger.warning("Lexicon %s: tier %r is not a list, skipped", code, tier.value)
            continue
        for entry in entries:
            try:
                term = _parse_entry(entry, normalizer)
            except MatchFault as exc:
                logger.warning("Lexicon %s: skipping entry %s", code, exc)
                continue
            if term in seen:
                if seen[term] is not tier:
                    logger.warning(
                        "Lexicon %s: %r listed as %s and %s, keeping %s",
                        code, term, seen[term].value, tier.value, seen[term].value,
                    )
                continue
            seen[term] = tier
            out[tier].append(term)

    return LanguagePack(
        code=code,
        name=name or code,
        script=script,
        tiers=MappingProxyType({tier: tuple(terms) for tier, terms in out.items()}),
    )


def _parse_entry(entry: Any, normalizer) -> str:
    always_match = False
    if isinstance(entry, dict):
        always_match = bool(entry.get("always_match", False))
        entry = entry.get("term")
    if not isinstance(entry, str):
        raise MatchFault(entry, "term is not a string")
    try:
        term = normalizer.normalize_term(entry)
    except NormalizationFault as exc:
        raise MatchFault(entry, str(exc)) from exc
    if not term:
        raise MatchFault(entry, "empty after normalization")
    if len(term) < MIN_TERM_LENGTH and not always_match:
        raise MatchFault(entry, f"shorter than {MIN_TERM_LENGTH} characters")
    return term


class LexiconStore:
    """Read-only registry of language packs keyed by code, plus the whitelist."""

    __slots__ = ("_packs", "_whitelist")

    def __init__(self, packs: Iterable[LanguagePack] = (), whitelist: Iterable[str] = ()) -> None:
        self._packs: Mapping[str, LanguagePack] = MappingProxyType({p.code: p for p in packs})
        self._whitelist = frozenset(
            w.strip().lower() for w in whitelist if isinstance(w, str) and w.strip()
        )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, Any]],
        *,
        whitelist: Iterable[str] = (),
        scripts: Mapping[str, str] | None = None,
    ) -> "LexiconStore":
        """Build a store from plain dicts: ``{"en": {"severe": [...], ...}}``."""
        scripts = scripts or {}
        packs = [
            build_pack(code, tiers, script=scripts.get(code, DEFAULT_SCRIPT))
            for code, tiers in data.items()
        ]
        return cls(packs, whitelist)

    def get(self, code: str) -> LanguagePack | None:
        return self._packs.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._packs

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self._packs)

    @property
    def whitelist(self) -> frozenset[str]:
        return self._whitelist

    def stats(self) -> dict[str, Any]:
        """Per-pack term counts (for tooling)."""
        return {
            "packs": {
                code: {
                    "name": pack.name,
                    "script": pack.script,
                    **{tier.value: len(pack.terms(tier)) for tier in TIERS},
                }
                for code, pack in self._packs.items()
            },
            "whitelist": len(self._whitelist),
        }


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_yaml(resource) -> Any:
    try:
        with resource.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise LoadError(str(resource), str(exc)) from exc


def load_pack(resource) -> LanguagePack:
    """Load one pack resource.  Malformed resources degrade to an empty pack."""
    code = Path(resource.name).stem.lower()
    try:
        data = _read_yaml(resource)
        if not isinstance(data, dict):
            raise LoadError(resource.name, "expected a mapping at top level")
        code = str(data.get("code") or code).strip().lower()
        tiers = data.get("tiers")
        if not isinstance(tiers, dict):
            raise LoadError(resource.name, "missing 'tiers' mapping")
    except LoadError as exc:
        logger.warning("Language pack %r degraded to empty: %s", code, exc)
        return LanguagePack.empty(code)

    return build_pack(
        code,
        tiers,
        name=data.get("name"),
        script=str(data.get("script") or DEFAULT_SCRIPT).lower(),
    )


def load_whitelist(resource) -> list[str]:
    try:
        data = _read_yaml(resource)
    except LoadError as exc:
        logger.warning("Whitelist not loaded: %s", exc)
        return []
    if isinstance(data, dict):
        data = data.get("whitelist")
    if not isinstance(data, list):
        logger.warning("Whitelist %s: expected a list of terms", resource.name)
        return []
    terms = [w for w in data if isinstance(w, str) and w.strip()]
    if len(terms) != len(data):
        logger.warning("Whitelist %s: skipped %d unusable entries", resource.name, len(data) - len(terms))
    return terms


def _lexicon_root(lexicon_dir: str | Path | None):
    if lexicon_dir is None:
        return resources.files(__package__) / "lexicons"
    return Path(lexicon_dir).expanduser()


def load_store(lexicon_dir: str | Path | None = None) -> LexiconStore:
    """Read every pack and the whitelist from a lexicon directory.

    ``None`` means the lexicons bundled with the package.
    """
    root = _lexicon_root(lexicon_dir)
    if not root.is_dir():
        logger.warning("Lexicon directory %s not found; no packs loaded", root)
        return LexiconStore()

    packs: list[LanguagePack] = []
    whitelist: list[str] = []
    for resource in sorted(root.iterdir(), key=lambda r: r.name):
        if not resource.name.endswith((".yaml", ".yml")):
            continue
        if resource.name == WHITELIST_FILE:
            whitelist.extend(load_whitelist(resource))
        else:
            packs.append(load_pack(resource))

    store = LexiconStore(packs, whitelist)
    logger.debug("Loaded lexicons %s from %s", ", ".join(store.codes), root)
    return store


# Lazy registry: one store per lexicon directory, built under a lock
_stores: dict[str, LexiconStore] = {}
_stores_lock = threading.Lock()


def _store_key(lexicon_dir: str | Path | None) -> str:
    return str(Path(lexicon_dir).expanduser().resolve()) if lexicon_dir is not None else ""


def init_lexicons(lexicon_dir: str | Path | None = None, *, reload: bool = False) -> LexiconStore:
    """Build (or rebuild) the store for a lexicon directory."""
    key = _store_key(lexicon_dir)
    with _stores_lock:
        store = _stores.get(key)
        if store is None or reload:
            store = load_store(lexicon_dir)
            _stores[key] = store
        return store


def get_store(lexicon_dir: str | Path | None = None) -> LexiconStore:
    store = _stores.get(_store_key(lexicon_dir))
    return store if store is not None else init_lexicons(lexicon_dir)
