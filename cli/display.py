"""
SCRIPTOR - Console Rendering

Rich rendering of verses, search results and cross references.
"""
from typing import Iterable, Optional

from rich.console import Console
from rich.text import Text

from core.errors import ScriptorError
from data.schemas import ScoredCandidate, SearchResult, Verse
from ml.engines.cross_reference import CrossReferenceResult
from ml.metrics.similarity import MetricConfig


REFERENCE_STYLE = "cyan"
HIGHLIGHT_STYLE = "black on yellow"
SCORE_STYLE = "bold yellow"


def make_console(use_color: bool = True) -> Console:
    """Console for command output. Long verses are never hard-wrapped."""
    return Console(
        no_color=not use_color,
        color_system="auto" if use_color else None,
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def verse_text(
    verse: Verse,
    terms: Optional[Iterable[str]] = None,
    case_sensitive: bool = False,
) -> Text:
    """``Book C:V text`` with the reference styled and search terms highlighted."""
    body = Text(verse.text)
    if terms:
        body.highlight_words(
            [t for t in terms if t],
            style=HIGHLIGHT_STYLE,
            case_sensitive=case_sensitive,
        )
    return Text.assemble((verse.reference, REFERENCE_STYLE), " ", body)


def format_score(candidate: ScoredCandidate, metric: MetricConfig) -> str:
    """``42.0%`` for Jaccard scores, ``2 matches`` for n-gram counts."""
    if metric.is_ngram:
        count = int(candidate.score)
        return f"{count} match" if count == 1 else f"{count} matches"
    return f"{candidate.score * 100:.1f}%"


def print_verse(console: Console, verse: Verse) -> None:
    console.print(verse_text(verse))


def print_search_result(console: Console, result: SearchResult, case_sensitive: bool = False) -> None:
    if result.synonyms_applied:
        console.print(f"Searching for '{result.query}' (with synonyms: {', '.join(result.terms)})...")
    else:
        console.print(f"Searching for '{result.query}'...")

    if not result.verses:
        console.print("No results found.", style="red")
        return

    console.print()
    for verse in result.verses:
        console.print(verse_text(verse, result.terms, case_sensitive))
    console.print(f"\nFound {result.count} matching verses.")


def print_cross_references(console: Console, result: CrossReferenceResult) -> None:
    console.print("Source Verse:", style="bold bright_green")
    console.print(verse_text(result.source))
    console.print()

    if result.is_empty:
        console.print(result.note or "No cross-references found.", style="yellow")
        return

    console.print(
        f"Found {len(result)} cross-reference(s) with {result.metric.describe()}:",
        style="bold green",
    )
    if result.use_synonyms:
        console.print("(Using synonym matching)", style="bright_black")
    console.print()

    for candidate in result.candidates:
        line = Text.assemble(
            (format_score(candidate, result.metric), SCORE_STYLE),
            " - ",
            verse_text(candidate.verse),
        )
        console.print(line)
        console.print()


def print_metric_fallback(console: Console, spec: str, metric: MetricConfig) -> None:
    console.print(f"Invalid n-gram specification '{spec}'. Using {metric.describe()} instead.", style="yellow")


def print_error(console: Console, error: ScriptorError) -> None:
    """Red error message followed by any suggestions."""
    console.print(error.message, style="red")
    for suggestion in error.suggestions:
        console.print(f"  {suggestion}", style="yellow")
