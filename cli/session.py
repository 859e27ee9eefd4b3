"""
SCRIPTOR - CLI Session

Per-invocation state shared by the commands: resolved file paths, the
console, and the lazily loaded corpus and synonym map.
"""
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console

from config import Config
from core.errors import SynonymConfigError
from data.corpus import Corpus, load_corpus
from data.synonyms import load_synonyms
from observability.logging import get_logger


logger = get_logger("scriptor.cli.session")


class Session:
    """Loads the corpus and thesaurus on first use, then reuses them."""

    def __init__(
        self,
        config: Config,
        console: Console,
        corpus_path: Path,
        synonyms_path: Path,
    ):
        self.config = config
        self.console = console
        self.corpus_path = Path(corpus_path)
        self.synonyms_path = Path(synonyms_path)
        self._corpus: Optional[Corpus] = None
        self._synonyms: Optional[Dict[str, List[str]]] = None

    @property
    def corpus(self) -> Corpus:
        if self._corpus is None:
            logger.info("Loading corpus", path=str(self.corpus_path))
            self._corpus = load_corpus(self.corpus_path)
        return self._corpus

    @property
    def synonyms(self) -> Dict[str, List[str]]:
        """
        The synonym map, or an empty one (with a warning) when the file
        cannot be read.
        """
        if self._synonyms is None:
            try:
                self._synonyms = load_synonyms(self.synonyms_path)
            except SynonymConfigError as e:
                logger.warning("Synonyms unavailable", path=str(self.synonyms_path), error=e.message)
                self.console.print(f"Warning: {e.message}", style="yellow")
                for suggestion in e.suggestions:
                    self.console.print(f"  {suggestion}", style="yellow")
                self._synonyms = {}
        return self._synonyms
