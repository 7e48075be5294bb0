"""Tests for lexicon loading and locale resolution."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from concurrent.futures import ThreadPoolExecutor

from profanity_guard.lexicon import (
    LexiconStore, build_pack, get_store, init_lexicons, load_store,
)
from profanity_guard.locales import primary_language, resolve_locale
from profanity_guard.types import TIERS, Severity


# ── Pack building ────────────────────────────────────────────────────

def test_short_and_invalid_entries_skipped():
    pack = build_pack("xx", {"severe": ["a", "ok", {"term": "z", "always_match": True}, 42, ""]})
    assert pack.terms(Severity.SEVERE) == ("ok", "z")


def test_duplicate_keeps_most_severe_tier():
    pack = build_pack("en", {"severe": ["fuck"], "mild": ["fuck", "damn"]})
    assert pack.terms(Severity.SEVERE) == ("fuck",)
    assert pack.terms(Severity.MILD) == ("damn",)


def test_terms_are_normalized():
    pack = build_pack("en", {"severe": ["Sh1t"]})
    assert pack.terms(Severity.SEVERE) == ("shit",)


def test_unknown_tier_ignored():
    pack = build_pack("en", {"extreme": ["fuck"], "mild": "not-a-list"})
    assert pack.size == 0


# ── Loading ──────────────────────────────────────────────────────────

def test_bundled_store():
    store = load_store()
    assert {"en", "bg", "ru", "uk"} <= set(store.codes)
    assert store.get("bg").script == "cyrillic"
    assert "глупост" in store.get("bg").terms(Severity.MILD)
    assert "bullshit" in store.get("en").terms(Severity.SEVERE)
    assert "scunthorpe" in store.whitelist


def test_bundled_terms_are_usable():
    store = load_store()
    for code in store.codes:
        pack = store.get(code)
        assert pack.size > 0
        for tier in TIERS:
            for term in pack.terms(tier):
                assert len(term) >= 2
                assert "*" not in term


def test_malformed_pack_degrades_to_empty(tmp_path):
    (tmp_path / "xx.yaml").write_text("code: xx\ntiers: [oops\n", encoding="utf-8")
    (tmp_path / "zz.yaml").write_text(
        "code: zz\nscript: latin\ntiers:\n  severe:\n    - badword\n", encoding="utf-8"
    )
    (tmp_path / "whitelist.yaml").write_text("whitelist:\n  - badwordy\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    store = load_store(tmp_path)
    assert set(store.codes) == {"xx", "zz"}
    assert store.get("xx").size == 0
    assert store.get("zz").terms(Severity.SEVERE) == ("badword",)
    assert store.whitelist == frozenset({"badwordy"})


def test_missing_directory_gives_empty_store(tmp_path):
    store = load_store(tmp_path / "nope")
    assert store.codes == ()


def test_store_built_once_under_concurrency(tmp_path):
    (tmp_path / "zz.yaml").write_text("tiers:\n  mild:\n    - meh\n", encoding="utf-8")
    with ThreadPoolExecutor(max_workers=8) as pool:
        stores = list(pool.map(lambda _: get_store(tmp_path), range(32)))
    assert len({id(s) for s in stores}) == 1
    assert stores[0].get("zz").terms(Severity.MILD) == ("meh",)


def test_reload_rebuilds_store(tmp_path):
    (tmp_path / "zz.yaml").write_text("tiers:\n  mild:\n    - meh\n", encoding="utf-8")
    first = init_lexicons(tmp_path)
    (tmp_path / "zz.yaml").write_text("tiers:\n  mild:\n    - ugh\n", encoding="utf-8")
    assert init_lexicons(tmp_path) is first
    second = init_lexicons(tmp_path, reload=True)
    assert second is not first
    assert second.get("zz").terms(Severity.MILD) == ("ugh",)


def test_store_from_mapping_and_stats():
    store = LexiconStore.from_mapping(
        {"en": {"severe": ["zorp"], "mild": ["meh"]}},
        whitelist=["Zorple", "  "],
    )
    assert "en" in store
    assert store.whitelist == frozenset({"zorple"})
    stats = store.stats()
    assert stats["packs"]["en"]["severe"] == 1
    assert stats["packs"]["en"]["mild"] == 1
    assert stats["whitelist"] == 1


# ── Locale resolution ────────────────────────────────────────────────

def test_declared_chains():
    assert resolve_locale("en") == ["en"]
    assert resolve_locale("bg") == ["bg", "en"]
    assert resolve_locale("ru") == ["ru", "en"]
    assert resolve_locale("uk") == ["uk", "ru", "en"]


def test_locale_variants_reduced_to_language():
    assert primary_language("uk_UA.UTF-8") == "uk"
    assert primary_language("BG-bg") == "bg"
    assert primary_language("sr@latin") == "sr"
    assert resolve_locale("uk_UA.UTF-8") == ["uk", "ru", "en"]


def test_unknown_or_empty_locale_falls_back():
    assert resolve_locale("xx") == ["en"]
    assert resolve_locale("") == ["en"]
    assert resolve_locale(None) == ["en"]
    assert resolve_locale(123) == ["en"]


def test_available_pack_without_chain():
    assert resolve_locale("de", available=["de", "en"]) == ["de", "en"]
    assert resolve_locale("de", available=["en"]) == ["en"]


def test_custom_chain_keeps_default_last():
    chains = {"mk": ["mk", "en", "bg"]}
    assert resolve_locale("mk", chains=chains) == ["mk", "bg", "en"]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
