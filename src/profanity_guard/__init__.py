"""Profanity Guard — multi-locale profanity moderation for user-submitted text."""

from .moderator import Moderator, ModeratorConfig
from .forms import FormModerator
from .config import create_moderator, load_config, load_from_yaml
from .lexicon import LanguagePack, LexiconStore, init_lexicons
from .locales import resolve_locale
from .severity import SeverityThresholds
from .types import (
    CheckResult, Detector, MatchSpan, Severity,
    ValidationPolicy, ValidationResult, DEFAULT_POLICY,
)

__all__ = [
    "Moderator", "ModeratorConfig",
    "FormModerator",
    "create_moderator", "load_config", "load_from_yaml",
    "LanguagePack", "LexiconStore", "init_lexicons",
    "resolve_locale",
    "SeverityThresholds",
    "CheckResult", "Detector", "MatchSpan", "Severity",
    "ValidationPolicy", "ValidationResult", "DEFAULT_POLICY",
]
__version__ = "0.1.0"
