"""
SCRIPTOR - Corpus Loaders

Reads a scripture corpus into an ordered, immutable collection of verses.

Two on-disk formats are supported:

1. Plain text, tab-delimited. The first two lines are a header
   (translation abbreviation and full name); each following line is
   ``Book Chapter:Verse<TAB>text``::

       KJV
       King James Version
       Genesis 1:1<TAB>In the beginning God created the heaven and the earth.

2. Nested JSON objects, book -> chapter -> verse -> text::

       {"Genesis": {"1": {"1": "In the beginning God created..."}}}

``load_corpus`` picks the format from the file extension, falling back to
sniffing the first non-whitespace character.
"""
import json
import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from core.errors import CorpusLoadError
from data.schemas import Verse


logger = logging.getLogger("scriptor.data.corpus")

# Header lines preceding the verses in the text format
TEXT_HEADER_LINES = 2

VERSE_LINE_PATTERN = re.compile(
    r"^(?P<book>.+?)\s(?P<chapter>\d+):(?P<verse>\d+)\t(?P<text>.+)$"
)

# Translation shortcuts available on the command line
TRANSLATIONS = {
    "kjv": "King James Version",
    "erv": "English Revised Version",
    "asv": "American Standard Version",
}


# =============================================================================
# CORPUS CONTAINER
# =============================================================================

class Corpus:
    """
    Read-only, ordered collection of verses.

    The verse tuple is never mutated after construction, so a corpus can be
    shared freely between queries.
    """

    def __init__(
        self,
        verses: Sequence[Verse],
        source: Optional[str] = None,
        translation: Optional[str] = None,
        full_name: Optional[str] = None,
    ):
        self._verses: Tuple[Verse, ...] = tuple(verses)
        self.source = source
        self.translation = translation
        self.full_name = full_name

    @property
    def verses(self) -> Tuple[Verse, ...]:
        return self._verses

    def __len__(self) -> int:
        return len(self._verses)

    def __iter__(self) -> Iterator[Verse]:
        return iter(self._verses)

    def __getitem__(self, index: int) -> Verse:
        return self._verses[index]

    def __repr__(self) -> str:
        return f"Corpus(verses={len(self._verses)}, source={self.source!r})"


# =============================================================================
# TEXT FORMAT
# =============================================================================

def parse_text_corpus(content: str) -> Tuple[List[Verse], Optional[str], Optional[str]]:
    """
    Parse the tab-delimited text format.

    Returns:
        Tuple of (verses, translation abbreviation, translation full name)
    """
    lines = content.splitlines()
    translation = lines[0].strip() if len(lines) > 0 else None
    full_name = lines[1].strip() if len(lines) > 1 else None

    verses = []
    skipped = 0
    for line in lines[TEXT_HEADER_LINES:]:
        match = VERSE_LINE_PATTERN.match(line)
        if not match:
            if line.strip():
                skipped += 1
            continue
        verses.append(Verse(
            book=match.group("book"),
            chapter=int(match.group("chapter")),
            verse=int(match.group("verse")),
            text=match.group("text"),
        ))

    if skipped:
        logger.debug("Skipped %d malformed corpus lines", skipped)

    return verses, translation or None, full_name or None


def load_text_corpus(path: Union[str, Path]) -> Corpus:
    """Load a tab-delimited text corpus."""
    path = Path(path)
    content = _read(path)
    verses, translation, full_name = parse_text_corpus(content)
    return Corpus(verses, source=str(path), translation=translation, full_name=full_name)


# =============================================================================
# JSON FORMAT
# =============================================================================

def parse_json_corpus(data: dict) -> List[Verse]:
    """
    Convert a nested ``{book: {chapter: {verse: text}}}`` mapping to verses.

    Verses are sorted by (book, chapter, verse) so the result does not depend
    on key order in the source document.

    Raises:
        CorpusLoadError: if the structure is wrong or a chapter or verse key
            is not an integer
    """
    if not isinstance(data, dict):
        raise CorpusLoadError("Failed to parse JSON: top level must be an object")

    verses = []
    for book, chapters in data.items():
        if not isinstance(chapters, dict):
            raise CorpusLoadError(f"Failed to parse JSON: book '{book}' must map chapters to verses")
        for chapter_key, chapter in chapters.items():
            chapter_num = _parse_number(chapter_key, "chapter")
            if not isinstance(chapter, dict):
                raise CorpusLoadError(
                    f"Failed to parse JSON: chapter '{chapter_key}' of '{book}' must map verses to text"
                )
            for verse_key, text in chapter.items():
                verse_num = _parse_number(verse_key, "verse")
                verses.append(Verse(
                    book=book,
                    chapter=chapter_num,
                    verse=verse_num,
                    text=str(text).strip(),
                ))

    verses.sort(key=lambda v: (v.book, v.chapter, v.verse))
    return verses


def load_json_corpus(path: Union[str, Path]) -> Corpus:
    """Load a nested-JSON corpus."""
    path = Path(path)
    content = _read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CorpusLoadError(f"Failed to parse JSON: {e}", path=str(path), cause=e) from e

    return Corpus(parse_json_corpus(data), source=str(path))


def is_json_format(path: Union[str, Path]) -> bool:
    """Detect JSON by checking whether the first non-whitespace character is ``{``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            while True:
                char = f.read(1)
                if not char:
                    return False
                if not char.isspace():
                    return char == "{"
    except (OSError, UnicodeDecodeError):
        return False


# =============================================================================
# PUBLIC API
# =============================================================================

def load_corpus(path: Union[str, Path]) -> Corpus:
    """
    Load a corpus, detecting its format.

    A ``.json`` extension selects the JSON loader; otherwise the content is
    sniffed and the text loader is the fallback.

    Raises:
        CorpusLoadError: if the file is missing or cannot be parsed
    """
    path = Path(path)
    if path.suffix.lower() == ".json" or is_json_format(path):
        corpus = load_json_corpus(path)
    else:
        corpus = load_text_corpus(path)

    logger.info("Loaded %d verses from %s", len(corpus), path)
    return corpus


def translation_path(name: str, bibles_dir: Union[str, Path] = "bibles") -> Path:
    """Resolve a translation shortcut (``kjv``, ``erv``, ``asv``) to its file."""
    key = name.lower()
    if key not in TRANSLATIONS:
        raise CorpusLoadError(
            f"Unknown translation: {name}",
            suggestions=[f"Valid translations: {', '.join(sorted(TRANSLATIONS))}"],
        )
    return Path(bibles_dir) / f"{key}.txt"


def _parse_number(key: str, kind: str) -> int:
    try:
        return int(key)
    except (TypeError, ValueError) as e:
        raise CorpusLoadError(f"Invalid {kind} number '{key}': {e}", cause=e) from e


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(
            f"Error loading {path}: {e}",
            path=str(path),
            cause=e,
            suggestions=["Please ensure the file exists and has the correct format."],
        ) from e
