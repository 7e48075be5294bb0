"""Tests for config loading and the command-line interface."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json

import pytest

from profanity_guard import Moderator, Severity, ValidationPolicy
from profanity_guard.cli import main
from profanity_guard.config import (
    _NoopModerator, create_moderator, load_config, load_from_yaml, moderator_config,
)


# ── Config ───────────────────────────────────────────────────────────

def test_defaults():
    cfg = load_config(None)
    assert cfg["enabled"] is True
    assert cfg["default_locale"] == "en"
    assert cfg["heuristic_languages"] == {"en"}
    assert cfg["heuristic_tier"] is Severity.MODERATE
    assert cfg["heuristic_allow"] == set()
    assert cfg["policy"] == ValidationPolicy()
    assert cfg["thresholds"].moderate_combined == 2


def test_nested_config():
    cfg = load_config({"profanity_guard": {
        "use_heuristic": False,
        "policy": {"allow_mild": True, "block_threshold": "moderate"},
        "thresholds": {"moderate_combined": 3, "unknown": 9},
    }})
    assert cfg["use_heuristic"] is False
    assert cfg["policy"] == ValidationPolicy(allow_mild=True, block_threshold=Severity.MODERATE)
    assert cfg["thresholds"].moderate_combined == 3


def test_invalid_severity_rejected():
    with pytest.raises(ValueError):
        load_config({"heuristic_tier": "catastrophic"})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "moderation.yaml"
    path.write_text(
        "profanity_guard:\n"
        "  default_locale: bg\n"
        "  use_heuristic: false\n"
        "  batch_workers: 4\n"
        "  policy:\n"
        "    allow_mild: true\n",
        encoding="utf-8",
    )
    cfg = load_from_yaml(path)
    assert cfg["default_locale"] == "bg"
    assert cfg["batch_workers"] == 4

    moderator = create_moderator(cfg)
    assert isinstance(moderator, Moderator)
    assert moderator.config.batch_workers == 4
    assert moderator.check("глупост").locale_used == "bg"
    assert moderator.validate("глупост").valid


def test_heuristic_allow_list():
    cfg = load_config({"heuristic_allow": ["nuts", "bolts"]})
    assert moderator_config(cfg).heuristic_allow == {"nuts", "bolts"}


def test_moderator_config_carries_policy():
    cfg = load_config({"policy": {"block_threshold": "mild"}})
    assert moderator_config(cfg).policy.block_threshold is Severity.MILD


def test_disabled_gives_noop():
    moderator = create_moderator({"enabled": False})
    assert isinstance(moderator, _NoopModerator)
    result = moderator.check("This is bullshit", "en")
    assert not result.has_profanity
    assert result.censored_text == "This is bullshit"
    assert moderator.validate("This is bullshit").valid
    assert moderator.clean("This is bullshit") == "This is bullshit"
    assert len(moderator.batch_check(["a", "b"])) == 2


def test_enabled_moderator():
    moderator = create_moderator({"use_heuristic": False})
    assert moderator.check("This is bullshit", "en").severity is Severity.SEVERE


def test_bad_mask_char_in_config():
    with pytest.raises(ValueError):
        create_moderator({"mask_char": "a"})


# ── CLI ──────────────────────────────────────────────────────────────

def run(monkeypatch, capsys, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    code = main(["--no-heuristic"] + argv)
    return code, capsys.readouterr().out


def test_cli_check(monkeypatch, capsys):
    code, out = run(monkeypatch, capsys, ["--locale", "en", "check"], "This is some bullshit work")
    data = json.loads(out)
    assert code == 0
    assert data["severity"] == "severe"
    assert data["censored_text"] == "This is some ******** work"
    assert data["matches"][0]["term"] == "bullshit"


def test_cli_validate(monkeypatch, capsys):
    text = "Тази работа е пълна глупост"
    code, out = run(monkeypatch, capsys, ["--locale", "bg", "validate", "--allow-mild"], text)
    assert code == 0
    assert json.loads(out)["valid"] is True

    code, out = run(monkeypatch, capsys, ["--locale", "bg", "validate"], text)
    assert code == 1
    assert json.loads(out)["error"] == "validation.profanityDetected.mild"


def test_cli_batch(monkeypatch, capsys):
    code, out = run(monkeypatch, capsys, ["--locale", "en", "batch"], '["Clean text", "What the f.u.c.k"]')
    assert code == 0
    assert [r["has_profanity"] for r in json.loads(out)] == [False, True]


def test_cli_batch_rejects_non_array(monkeypatch, capsys):
    code, _ = run(monkeypatch, capsys, ["batch"], '{"text": "hi"}')
    assert code == 2


def test_cli_clean(monkeypatch, capsys):
    code, out = run(monkeypatch, capsys, ["clean"], "Fix my damn sink")
    assert code == 0
    assert out == "Fix my **** sink"


def test_cli_lexicons(monkeypatch, capsys):
    code, out = run(monkeypatch, capsys, ["--locale", "uk", "lexicons"])
    stats = json.loads(out)
    assert code == 0
    assert {"en", "bg", "ru", "uk"} <= set(stats["packs"])
    assert stats["chain"] == ["uk", "ru", "en"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
