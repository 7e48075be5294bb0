"""Moderator — the main API.  Lexicon packs per locale, plus an optional
heuristic word check, then whitelist, severity and censoring.

Usage:
    from profanity_guard import Moderator, ValidationPolicy

    moderator = Moderator()        # reusable, thread-safe

    result = moderator.check("This is some bullshit work", "en")
    print(result.severity)         # Severity.SEVERE
    print(result.censored_text)    # "This is some ******** work"

    verdict = moderator.validate(title, "bg", ValidationPolicy(allow_mild=True))
    if not verdict.valid:
        show_error(verdict.error)  # "validation.profanityDetected.severe"

Every public method fails open: an internal fault is logged and the text is
treated as clean.
"""

from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .censor import DEFAULT_MASK_CHAR, censor, check_mask_char
from .heuristic import COMMON_WORDS, HeuristicDetector
from .lexicon import LexiconStore, get_store
from .locales import DEFAULT_LANGUAGE, LANGUAGE_CHAINS, primary_language, resolve_locale
from .matcher import LexiconDetector, merge_matches
from .severity import SeverityThresholds, classify
from .types import (
    DEFAULT_POLICY,
    CheckResult,
    Detector,
    MatchSpan,
    Severity,
    ValidationPolicy,
    ValidationResult,
)
from .whitelist import WhitelistFilter

logger = logging.getLogger(__name__)

ERROR_KEY = "validation.profanityDetected"


@dataclass
class ModeratorConfig:
    """Configuration for the Moderator."""
    default_locale: str = DEFAULT_LANGUAGE   # used when no locale is given
    lexicon_dir: str | None = None           # None = lexicons bundled with the package
    use_heuristic: bool = True               # better_profanity word check
    heuristic_languages: set[str] = field(default_factory=lambda: {"en"})
    heuristic_tier: Severity = Severity.MODERATE
    heuristic_allow: set[str] = field(default_factory=set)  # extra words the heuristic never flags
    mask_char: str = DEFAULT_MASK_CHAR
    thresholds: SeverityThresholds = field(default_factory=SeverityThresholds)
    batch_workers: int = 0                   # > 1 fans batch_check out to threads
    policy: ValidationPolicy = DEFAULT_POLICY  # used by validate() when no policy is passed
    chains: Mapping[str, Iterable[str]] = field(default_factory=lambda: dict(LANGUAGE_CHAINS))
    # Extra detectors for a language code, run right after its lexicon pack
    language_detectors: dict[str, list[Detector]] = field(default_factory=dict)
    # Detectors that run for every locale
    custom_detectors: list[Detector] = field(default_factory=list)


class Moderator:
    """Multi-locale profanity moderation.

    Per language in the resolved chain:
      1. the language's lexicon pack (normalized substring matching)
      2. detectors registered for that language (e.g. the heuristic check)
    then custom detectors, whitelist filtering, span merging, severity
    classification and censoring.
    """

    def __init__(self, config: ModeratorConfig | None = None, *, store: LexiconStore | None = None) -> None:
        self.config = config or ModeratorConfig()
        self._mask_char = check_mask_char(self.config.mask_char)
        self._heuristic_tier = Severity.parse(self.config.heuristic_tier)
        if self._heuristic_tier is Severity.NONE:
            raise ValueError("heuristic_tier must be mild, moderate or severe")
        self._default_language = primary_language(self.config.default_locale) or DEFAULT_LANGUAGE

        self._store = store
        self._whitelist: WhitelistFilter | None = None
        self._init_lock = threading.Lock()

        self._pack_detectors: dict[str, LexiconDetector] = {}
        self._chain_detectors: dict[tuple[str, ...], list[Detector]] = {}
        self._detectors_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, text: str, locale: str | None = None) -> CheckResult:
        """Check one text.  Never raises."""
        try:
            chain = self.resolve(locale)
            if not isinstance(text, str) or not text.strip():
                return _clean_result(text, chain[0])
            return self._check(text, chain)
        except Exception:
            logger.exception("Profanity check failed (locale=%r); treating text as clean", locale)
            return _clean_result(text, primary_language(locale) or self._default_language)

    def validate(
        self,
        text: str,
        locale: str | None = None,
        policy: ValidationPolicy | None = None,
    ) -> ValidationResult:
        """Form-validation helper: is ``text`` acceptable under ``policy``?"""
        policy = policy or self.config.policy
        severity = self.check(text, locale).severity
        try:
            blocked = severity.rank > policy.block_threshold.rank
            if policy.allow_mild and severity is Severity.MILD:
                blocked = False
        except Exception:
            logger.exception("Invalid validation policy %r; accepting text", policy)
            return ValidationResult(valid=True, severity=severity)
        if blocked:
            return ValidationResult(valid=False, severity=severity, error=f"{ERROR_KEY}.{severity.value}")
        return ValidationResult(valid=True, severity=severity)

    def batch_check(self, texts: Iterable[str], locale: str | None = None) -> list[CheckResult]:
        """Check several texts; results keep the input's length and order."""
        try:
            items = list(texts or [])
        except TypeError:
            logger.exception("batch_check expects an iterable of texts, got %r", type(texts).__name__)
            return []

        workers = self.config.batch_workers
        if workers > 1 and len(items) > 1:
            self._ensure_loaded()
            with ThreadPoolExecutor(max_workers=min(workers, len(items))) as pool:
                return list(pool.map(lambda t: self.check(t, locale), items))
        return [self.check(t, locale) for t in items]

    def clean(self, text: str, locale: str | None = None) -> str:
        """Censored copy of ``text`` (unchanged when clean)."""
        return self.check(text, locale).censored_text

    def resolve(self, locale: str | None) -> list[str]:
        """Language codes that will run for ``locale``, most authoritative first."""
        store, _ = self._ensure_loaded()
        return resolve_locale(
            locale if locale else self._default_language,
            default=DEFAULT_LANGUAGE,
            chains=self.config.chains,
            available=store.codes,
        )

    @property
    def store(self) -> LexiconStore:
        return self._ensure_loaded()[0]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check(self, text: str, chain: list[str]) -> CheckResult:
        _, whitelist = self._ensure_loaded()

        found: list[MatchSpan] = []
        for detector in self._detectors_for(chain):
            for m in detector.detect(text):
                if 0 <= m.start < m.end <= len(text):
                    found.append(m)
                else:
                    logger.warning("Dropping out-of-range span %r from %r", m, detector)

        matches = merge_matches(whitelist.apply(text, found))
        severity = classify(matches, self.config.thresholds)
        return CheckResult(
            has_profanity=bool(matches),
            severity=severity,
            matches=matches,
            censored_text=censor(text, matches, self._mask_char) if matches else text,
            locale_used=chain[0],
        )

    def _ensure_loaded(self) -> tuple[LexiconStore, WhitelistFilter]:
        if self._whitelist is None:
            with self._init_lock:
                if self._whitelist is None:
                    if self._store is None:
                        self._store = get_store(self.config.lexicon_dir)
                    self._whitelist = WhitelistFilter(self._store.whitelist)
        return self._store, self._whitelist

    def _detectors_for(self, chain: list[str]) -> list[Detector]:
        key = tuple(chain)
        detectors = self._chain_detectors.get(key)
        if detectors is None:
            with self._detectors_lock:
                detectors = self._chain_detectors.get(key)
                if detectors is None:
                    detectors = self._build_detectors(key)
                    self._chain_detectors[key] = detectors
        return detectors

    def _build_detectors(self, chain: tuple[str, ...]) -> list[Detector]:
        store, _ = self._ensure_loaded()
        detectors: list[Detector] = []
        allowed = COMMON_WORDS | store.whitelist | set(self.config.heuristic_allow)
        for code in chain:
            pack = store.get(code)
            if pack is not None:
                if code not in self._pack_detectors:
                    self._pack_detectors[code] = LexiconDetector(pack)
                detectors.append(self._pack_detectors[code])
            else:
                logger.debug("No language pack for %r", code)
            detectors.extend(self.config.language_detectors.get(code, ()))
            if self.config.use_heuristic and code in self.config.heuristic_languages:
                detectors.append(HeuristicDetector(code, tier=self._heuristic_tier, allowed=allowed))
        detectors.extend(self.config.custom_detectors)
        return detectors


def _clean_result(text: object, locale: str) -> CheckResult:
    return CheckResult(
        has_profanity=False,
        severity=Severity.NONE,
        matches=[],
        censored_text=text if isinstance(text, str) else "",
        locale_used=locale,
    )
