"""
SCRIPTOR - Main CLI Application

Command-line interface for verse lookup, keyword search and
cross-reference discovery.
"""
import random
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from cli.display import (
    make_console,
    print_cross_references,
    print_error,
    print_metric_fallback,
    print_search_result,
    print_verse,
)
from cli.interactive import run_interactive
from cli.session import Session
from config import get_config
from core.errors import ScriptorError
from data.corpus import translation_path
from data.synonyms import create_default_synonyms_file
from ml.engines.cross_reference import find_cross_references
from ml.engines.search import lookup_verse, random_verse, search_verses
from ml.metrics.similarity import parse_metric_spec
from ml.synonym_expander import NGramExpansion
from observability.logging import LogContext, get_logger, set_level, setup_logging, shutdown_logging
from observability.tracing import setup_tracing, shutdown_tracing

# Initialize app
app = typer.Typer(
    name="scriptor",
    help="SCRIPTOR - Scripture search and cross-reference discovery",
    add_completion=False,
)

logger = get_logger("scriptor.cli")


@contextmanager
def _handle_errors(ctx: typer.Context) -> Iterator[None]:
    """Tag log events with the command; print SCRIPTOR errors in red and exit with status 1."""
    session: Session = ctx.obj
    with LogContext(command=ctx.info_name):
        try:
            yield
        except ScriptorError as e:
            logger.debug("Command failed", **e.to_dict())
            print_error(session.console, e)
            raise typer.Exit(1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Bible file (text or JSON)"),
    kjv: bool = typer.Option(False, "--kjv", help="Use the King James Version"),
    erv: bool = typer.Option(False, "--erv", help="Use the English Revised Version"),
    asv: bool = typer.Option(False, "--asv", help="Use the American Standard Version"),
    synonyms_file: Optional[Path] = typer.Option(None, "--synonyms-file", help="Synonyms file"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Search the Bible and discover cross references."""
    config = get_config()
    setup_logging(config.logging)
    setup_tracing(config.tracing)
    if verbose:
        set_level("DEBUG")

    console = make_console(use_color=config.search.use_color and not no_color)

    chosen = [name for name, flag in (("kjv", kjv), ("erv", erv), ("asv", asv)) if flag]
    if len(chosen) > 1:
        console.print("Options --kjv, --erv and --asv cannot be combined.", style="red")
        raise typer.Exit(1)

    if chosen:
        corpus_path = translation_path(chosen[0], config.corpus.bibles_dir)
    else:
        corpus_path = file or config.corpus.bible_file

    ctx.obj = Session(
        config=config,
        console=console,
        corpus_path=corpus_path,
        synonyms_path=synonyms_file or config.corpus.synonyms_file,
    )

    if ctx.invoked_subcommand is None:
        interactive(ctx)


@app.command()
def lookup(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Verse reference (e.g., 'John 3:16')"),
):
    """Look up a verse by reference."""
    session: Session = ctx.obj
    with _handle_errors(ctx):
        print_verse(session.console, lookup_verse(session.corpus, reference))


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Words to search for"),
    synonyms: bool = typer.Option(False, "--synonyms", help="Expand the query through the synonyms file"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", "-c", help="Match case exactly"),
    book: Optional[str] = typer.Option(None, "--book", "-b", help="Only search books containing this name"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Maximum results"),
):
    """Search verse text for any of the query's words."""
    session: Session = ctx.obj
    with _handle_errors(ctx):
        result = search_verses(
            session.corpus,
            query,
            synonyms=session.synonyms if synonyms else None,
            use_synonyms=synonyms,
            case_sensitive=case_sensitive,
            book_filter=book,
            limit=limit if limit is not None else session.config.search.limit,
        )
        print_search_result(session.console, result, case_sensitive=case_sensitive)


@app.command("random")
def random_command(
    ctx: typer.Context,
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible pick"),
):
    """Show a random verse."""
    session: Session = ctx.obj
    rng = random.Random(seed) if seed is not None else None
    with _handle_errors(ctx):
        print_verse(session.console, random_verse(session.corpus, rng))


@app.command()
def xref(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Source verse reference (e.g., 'John 3:16')"),
    similarity: Optional[float] = typer.Option(
        None, "--similarity", "-s", help="Jaccard similarity threshold, 0.0-1.0 (default: 0.3)"
    ),
    ngram: Optional[str] = typer.Option(None, "--ngram", "-n", help="Match n-grams instead, e.g. '2-gram'"),
    use_synonyms: bool = typer.Option(False, "--use-synonyms", help="Match words through the synonyms file"),
    cartesian: bool = typer.Option(
        False, "--cartesian", help="Expand n-grams over every combination of synonyms"
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Maximum results"),
):
    """Find cross references for a verse."""
    session: Session = ctx.obj
    defaults = session.config.cross_reference

    spec = ngram or defaults.ngram
    metric = parse_metric_spec(
        spec,
        threshold=similarity if similarity is not None else defaults.similarity,
        expansion=NGramExpansion.CARTESIAN if cartesian else NGramExpansion.INCREMENTAL,
    )
    if spec and not metric.is_ngram:
        print_metric_fallback(session.console, spec, metric)

    use_synonyms = use_synonyms or defaults.use_synonyms
    with _handle_errors(ctx):
        result = find_cross_references(
            session.corpus.verses,
            session.synonyms if use_synonyms else {},
            reference,
            metric,
            use_synonyms=use_synonyms,
            limit=limit if limit is not None else defaults.limit,
        )
        print_cross_references(session.console, result)


@app.command()
def interactive(ctx: typer.Context):
    """Start the interactive menu."""
    session: Session = ctx.obj
    with _handle_errors(ctx):
        corpus = session.corpus
        session.console.print(f"Bible loaded successfully ({len(corpus)} verses).", style="green")
    run_interactive(session)


@app.command("init-synonyms")
def init_synonyms(ctx: typer.Context):
    """Write the default synonyms file and exit."""
    session: Session = ctx.obj
    with _handle_errors(ctx):
        path = create_default_synonyms_file(session.synonyms_path)
    session.console.print(f"Created default synonyms file: {path}", style="green")
    session.console.print("You can now edit this file to customize your synonyms.")


def main():
    """Main entry point."""
    try:
        app()
    finally:
        shutdown_tracing()
        shutdown_logging()


if __name__ == "__main__":
    main()
