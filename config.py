"""
SCRIPTOR - Configuration

Centralized configuration management for the command-line tool.
Uses environment variables (optionally from a ``.env`` file) with sensible
defaults; command-line options override these values per invocation.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from observability.logging import LoggingConfig
from observability.tracing import TracingConfig

# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def _optional_str(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass
class CorpusConfig:
    """Where the corpus and the synonym thesaurus live."""
    bible_file: Path = field(default_factory=lambda: Path(os.getenv("SCRIPTOR_BIBLE_FILE", "bibles/bible.txt")))
    bibles_dir: Path = field(default_factory=lambda: Path(os.getenv("SCRIPTOR_BIBLES_DIR", "bibles")))
    synonyms_file: Path = field(default_factory=lambda: Path(os.getenv("SCRIPTOR_SYNONYMS_FILE", "synonyms.txt")))


@dataclass
class CrossReferenceConfig:
    """Defaults for cross-reference discovery."""
    similarity: float = field(default_factory=lambda: float(os.getenv("SCRIPTOR_SIMILARITY", "0.3")))
    ngram: Optional[str] = field(default_factory=lambda: _optional_str("SCRIPTOR_NGRAM"))
    limit: Optional[int] = field(default_factory=lambda: _optional_int("SCRIPTOR_XREF_LIMIT"))
    use_synonyms: bool = field(
        default_factory=lambda: os.getenv("SCRIPTOR_XREF_SYNONYMS", "false").lower() == "true"
    )


@dataclass
class SearchConfig:
    """Defaults for keyword search."""
    limit: Optional[int] = field(default_factory=lambda: _optional_int("SCRIPTOR_SEARCH_LIMIT"))
    use_color: bool = field(default_factory=lambda: os.getenv("NO_COLOR", "") == "")


@dataclass
class Config:
    """Main configuration class combining all sub-configs."""
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    cross_reference: CrossReferenceConfig = field(default_factory=CrossReferenceConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "corpus": {
                "bible_file": str(self.corpus.bible_file),
                "bibles_dir": str(self.corpus.bibles_dir),
                "synonyms_file": str(self.corpus.synonyms_file),
            },
            "cross_reference": {
                "similarity": self.cross_reference.similarity,
                "ngram": self.cross_reference.ngram,
                "limit": self.cross_reference.limit,
                "use_synonyms": self.cross_reference.use_synonyms,
            },
            "search": {
                "limit": self.search.limit,
                "use_color": self.search.use_color,
            },
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
        }


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config
