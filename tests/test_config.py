"""
Tests for config.py - environment-driven configuration.
"""
from pathlib import Path

import pytest

import config
from config import Config, get_config, reload_config


pytestmark = pytest.mark.usefixtures("clean_env")


def test_defaults():
    cfg = Config()
    assert cfg.corpus.bible_file == Path("bibles/bible.txt")
    assert cfg.corpus.bibles_dir == Path("bibles")
    assert cfg.corpus.synonyms_file == Path("synonyms.txt")
    assert cfg.cross_reference.similarity == 0.3
    assert cfg.cross_reference.ngram is None
    assert cfg.cross_reference.limit is None
    assert not cfg.cross_reference.use_synonyms
    assert cfg.search.use_color


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCRIPTOR_BIBLE_FILE", "/data/kjv.json")
    monkeypatch.setenv("SCRIPTOR_SIMILARITY", "0.15")
    monkeypatch.setenv("SCRIPTOR_NGRAM", "3-gram")
    monkeypatch.setenv("SCRIPTOR_XREF_LIMIT", "10")
    monkeypatch.setenv("NO_COLOR", "1")
    cfg = Config()
    assert cfg.corpus.bible_file == Path("/data/kjv.json")
    assert cfg.cross_reference.similarity == 0.15
    assert cfg.cross_reference.ngram == "3-gram"
    assert cfg.cross_reference.limit == 10
    assert not cfg.search.use_color


def test_singleton_and_reload(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("SCRIPTOR_SEARCH_LIMIT", "5")
    reloaded = reload_config()
    assert reloaded is not first
    assert reloaded.search.limit == 5
    assert config.get_config() is reloaded


def test_to_dict():
    data = Config().to_dict()
    assert data["corpus"]["bible_file"] == "bibles/bible.txt"
    assert data["cross_reference"]["similarity"] == 0.3
    assert "logging" in data
