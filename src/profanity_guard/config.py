"""YAML/dict config loader for profanity-guard.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    profanity_guard:
      enabled: true
      default_locale: bg
      lexicon_dir: /etc/myapp/lexicons   # omit for the bundled lexicons
      use_heuristic: true
      heuristic_languages:
        - en
      heuristic_tier: moderate
      heuristic_allow:                    # words the heuristic check never flags
        - nuts
      mask_char: "*"
      batch_workers: 4
      thresholds:
        severe_combined: 3
        moderate_combined: 2
      policy:
        allow_mild: false
        block_threshold: none
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .locales import DEFAULT_LANGUAGE
from .moderator import Moderator, ModeratorConfig
from .severity import SeverityThresholds
from .types import CheckResult, Severity, ValidationPolicy, ValidationResult


class _NoopModerator:
    """Pass-through moderator when moderation is disabled."""

    def __init__(self, default_locale: str = DEFAULT_LANGUAGE) -> None:
        self._locale = default_locale

    def check(self, text: str, locale: str | None = None) -> CheckResult:
        return CheckResult(
            has_profanity=False,
            severity=Severity.NONE,
            censored_text=text if isinstance(text, str) else "",
            locale_used=locale or self._locale,
        )

    def validate(self, text: str, locale: str | None = None, policy: ValidationPolicy | None = None) -> ValidationResult:
        return ValidationResult(valid=True)

    def batch_check(self, texts, locale: str | None = None) -> list[CheckResult]:
        return [self.check(t, locale) for t in texts or []]

    def clean(self, text: str, locale: str | None = None) -> str:
        return text


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "profanity_guard" key or flat
    if "profanity_guard" in data:
        data = data["profanity_guard"] or {}

    policy = data.get("policy") or {}
    return {
        "enabled": data.get("enabled", True),
        "default_locale": data.get("default_locale", DEFAULT_LANGUAGE),
        "lexicon_dir": data.get("lexicon_dir"),
        "use_heuristic": data.get("use_heuristic", True),
        "heuristic_languages": set(data.get("heuristic_languages", ["en"])),
        "heuristic_tier": Severity.parse(data.get("heuristic_tier", "moderate")),
        "heuristic_allow": set(data.get("heuristic_allow") or []),
        "mask_char": data.get("mask_char", "*"),
        "batch_workers": int(data.get("batch_workers", 0)),
        "thresholds": SeverityThresholds.from_dict(data.get("thresholds")),
        "policy": ValidationPolicy(
            allow_mild=bool(policy.get("allow_mild", False)),
            block_threshold=Severity.parse(policy.get("block_threshold", "none")),
        ),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def moderator_config(cfg: dict[str, Any]) -> ModeratorConfig:
    """ModeratorConfig from a normalized config dict."""
    return ModeratorConfig(
        default_locale=cfg["default_locale"],
        lexicon_dir=cfg["lexicon_dir"],
        use_heuristic=cfg["use_heuristic"],
        heuristic_languages=cfg["heuristic_languages"],
        heuristic_tier=cfg["heuristic_tier"],
        heuristic_allow=cfg["heuristic_allow"],
        mask_char=cfg["mask_char"],
        thresholds=cfg["thresholds"],
        batch_workers=cfg["batch_workers"],
        policy=cfg["policy"],
    )


def create_moderator(config: dict[str, Any] | None = None) -> Moderator | _NoopModerator:
    """Create a fully configured moderator from a config dict."""
    config = config or {}
    # Already normalized by load_config / load_from_yaml?
    cfg = config if isinstance(config.get("policy"), ValidationPolicy) else load_config(config)

    if not cfg["enabled"]:
        # Return a pass-through moderator (no moderation)
        return _NoopModerator(cfg["default_locale"])

    return Moderator(moderator_config(cfg))
