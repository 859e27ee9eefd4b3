"""
SCRIPTOR - Interactive Mode

Menu-driven loop over lookup, search, cross references and random verses.
"""
import random
from typing import Optional

from rich.prompt import Confirm, FloatPrompt, Prompt

from cli.display import (
    print_cross_references,
    print_error,
    print_metric_fallback,
    print_search_result,
    print_verse,
)
from cli.session import Session
from core.errors import ScriptorError
from ml.engines.cross_reference import find_cross_references
from ml.engines.search import lookup_verse, random_verse, search_verses
from ml.metrics.similarity import MetricConfig, parse_metric_spec


MENU = """
--- Bible Tool Menu ---
1. Lookup Verse (e.g., Genesis 1:1)
2. Search Text
3. Cross References
4. Random Verse
5. Exit"""


def _lookup(session: Session) -> None:
    reference = Prompt.ask("Enter reference (e.g., John 3:16)", console=session.console)
    print_verse(session.console, lookup_verse(session.corpus, reference))


def _search(session: Session) -> None:
    query = Prompt.ask("Enter search query", console=session.console, default="", show_default=False)
    use_synonyms = Confirm.ask("Use synonyms?", console=session.console, default=False)
    result = search_verses(
        session.corpus,
        query,
        synonyms=session.synonyms if use_synonyms else None,
        use_synonyms=use_synonyms,
    )
    print_search_result(session.console, result)


def _choose_metric(session: Session) -> MetricConfig:
    """Ask for an n-gram size; a blank answer selects Jaccard and asks for its threshold."""
    spec = Prompt.ask(
        "N-gram size (blank for word-overlap similarity)",
        console=session.console,
        default="",
        show_default=False,
    ).strip()
    if spec:
        metric = parse_metric_spec(spec)
        if not metric.is_ngram:
            print_metric_fallback(session.console, spec, metric)
        return metric

    threshold = FloatPrompt.ask(
        "Similarity threshold",
        console=session.console,
        default=session.config.cross_reference.similarity,
    )
    return parse_metric_spec(threshold=threshold)


def _cross_references(session: Session) -> None:
    reference = Prompt.ask("Enter source reference (e.g., John 3:16)", console=session.console)
    metric = _choose_metric(session)
    use_synonyms = Confirm.ask("Use synonyms?", console=session.console, default=False)
    result = find_cross_references(
        session.corpus.verses,
        session.synonyms if use_synonyms else {},
        reference,
        metric,
        use_synonyms=use_synonyms,
        limit=session.config.cross_reference.limit,
    )
    print_cross_references(session.console, result)


def _random(session: Session, rng: random.Random) -> None:
    print_verse(session.console, random_verse(session.corpus, rng))


def run_interactive(session: Session, rng: Optional[random.Random] = None) -> None:
    """Run the menu loop until the user exits or input ends."""
    console = session.console
    rng = rng or random.Random()
    actions = {
        "1": _lookup,
        "2": _search,
        "3": _cross_references,
        "4": lambda s: _random(s, rng),
    }

    console.print("\n=== Interactive Bible Search Tool ===", style="bold bright_cyan")
    while True:
        console.print(MENU)
        try:
            choice = Prompt.ask(">", console=console, default="", show_default=False).strip()
        except (EOFError, KeyboardInterrupt):
            choice = "5"

        if choice == "5":
            console.print("Goodbye!")
            return

        action = actions.get(choice)
        if action is None:
            console.print("Invalid choice, please try again.", style="red")
            continue

        try:
            action(session)
        except ScriptorError as e:
            print_error(console, e)
        except (EOFError, KeyboardInterrupt):
            console.print("Goodbye!")
            return
