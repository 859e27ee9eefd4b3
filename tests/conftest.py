"""
SCRIPTOR - Test Configuration

Pytest fixtures and configuration for all tests.
"""
import json
from pathlib import Path
from typing import Dict, List

import pytest

from data.schemas import Verse

SAMPLE_TEXT_HEADER = "KJV\nKing James Version"

@pytest.fixture
def scenario_corpus() -> List[Verse]:
    """Two-verse corpus used by the Jaccard end-to-end scenarios."""
    return [
        Verse("John", 3, 16, "For God so loved the world"),
        Verse("John", 3, 17, "For God sent not his Son into the world"),
    ]

@pytest.fixture
def sample_verses() -> List[Verse]:
    """Small corpus in canonical order."""
    return [
        Verse("Genesis", 1, 1, "In the beginning God created the heaven and the earth."),
        Verse("Genesis", 1, 3, "And God said, Let there be light: and there was light."),
        Verse("Psalms", 18, 2, "The LORD is my rock, and my fortress, and my deliverer"),
        Verse("Psalms", 23, 1, "The LORD is my shepherd; I shall not want."),
        Verse("John", 3, 16, "For God so loved the world"),
        Verse("John", 3, 17, "For God sent not his Son into the world"),
        Verse("John", 11, 35, "Jesus wept."),
        Verse("1 John", 4, 8, "He that loveth not knoweth not God; for God is love."),
    ]

@pytest.fixture
def sample_synonyms() -> Dict[str, List[str]]:
    """Synonym map in the shape produced by the loader."""
    return {
        "god": ["god", "lord", "almighty"],
        "lord": ["lord", "god", "master"],
        "love": ["love", "loved", "loveth", "charity"],
        "shepherd": ["shepherd", "pastor", "keeper"],
    }

@pytest.fixture
def corpus_text(sample_verses) -> str:
    """The sample corpus in the tab-delimited text format."""
    lines = [SAMPLE_TEXT_HEADER]
    lines.extend(f"{v.reference}\t{v.text}" for v in sample_verses)
    return "\n".join(lines) + "\n"

@pytest.fixture
def tmp_data_dir(tmp_path) -> Path:
    """Temporary data directory for tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir

@pytest.fixture
def corpus_file(tmp_data_dir, corpus_text) -> Path:
    """Text-format corpus written to disk."""
    path = tmp_data_dir / "bible.txt"
    path.write_text(corpus_text, encoding="utf-8")
    return path

@pytest.fixture
def json_corpus_file(tmp_data_dir) -> Path:
    """JSON-format corpus written to disk, keys deliberately unsorted."""
    path = tmp_data_dir / "bible.json"
    data = {
        "John": {
            "3": {"17": "For God sent not his Son into the world", "16": "For God so loved the world "},
        },
        "Genesis": {
            "1": {"1": "In the beginning God created the heaven and the earth."},
        },
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path

@pytest.fixture
def synonyms_file(tmp_data_dir) -> Path:
    """Synonyms file with comments and blank lines."""
    path = tmp_data_dir / "synonyms.txt"
    path.write_text(
        "# test thesaurus\n"
        "\n"
        "god: god, lord, almighty\n"
        "love: Love, loved , loveth,, charity\n",
        encoding="utf-8",
    )
    return path

@pytest.fixture
def clean_env(monkeypatch):
    """Remove SCRIPTOR environment overrides and reload the config."""
    import config

    for name in (
        "SCRIPTOR_BIBLE_FILE",
        "SCRIPTOR_BIBLES_DIR",
        "SCRIPTOR_SYNONYMS_FILE",
        "SCRIPTOR_SIMILARITY",
        "SCRIPTOR_NGRAM",
        "SCRIPTOR_XREF_LIMIT",
        "SCRIPTOR_XREF_SYNONYMS",
        "SCRIPTOR_SEARCH_LIMIT",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_config", None)
    yield
    monkeypatch.setattr(config, "_config", None)


# Markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "ml: marks similarity and ranking tests")
    config.addinivalue_line("markers", "property: marks property-based tests using Hypothesis")
    config.addinivalue_line("markers", "cli: marks command-line tests")
