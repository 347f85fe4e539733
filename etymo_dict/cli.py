"""Command-line interface for the dictionary lookup."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click
import structlog

from .config import (
    CANDIDATE_MODELS,
    MAX_ATTEMPTS_PER_MODEL,
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    REQUEST_TIMEOUT,
    TARGET_LANGUAGE,
)
from .errors import DictionaryLookupError
from .models import DictionaryEntry, RootWord
from .openai_client import list_models
from .orchestrator import Orchestrator
from .utils import load_terms_from_file

log = structlog.get_logger()


def configure_logging(verbose: bool = False):
    """Configure structlog; console output when verbose, JSON otherwise."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    renderer = structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def format_breakdown(word: RootWord) -> str:
    return "".join(
        click.style(text, fg="yellow", bold=True) if highlighted else text
        for text, highlighted in word.segments()
    )


def format_entry(entry: DictionaryEntry) -> str:
    """Render an entry as plain text for the terminal."""
    header = click.style(entry.term, bold=True)
    if entry.pronunciation:
        header += f"  {entry.pronunciation}"
    lines = [f"{header}  [{entry.kind}]"]
    if entry.corrected_from:
        lines.append(f"  (original search: {entry.corrected_from})")

    for group in entry.meaning_groups:
        if group.part_of_speech:
            lines.append(group.part_of_speech)
        for number, definition in enumerate(group.definitions, 1):
            lines.append(f"  {number}. {definition}")

    explanation = entry.etymology if entry.kind == "word" else entry.origin
    if explanation or entry.morphemes:
        lines.append("")
        lines.append("Etymology:" if entry.kind == "word" else "Origin:")
        for morpheme in entry.morphemes or []:
            lines.append(f"  {morpheme.part}  {morpheme.meaning}")
        if explanation:
            lines.append(f"  {explanation}")

    if entry.examples:
        lines.append("")
        lines.append("Examples:")
        lines.extend(f"  - {example}" for example in entry.examples)

    if entry.kind == "word" and entry.root_words:
        lines.append("")
        lines.append("Root words:")
        for word in entry.root_words:
            lines.append(f"  {word.term}  {format_breakdown(word)}  {word.meaning}".rstrip())
    elif entry.kind == "word" and entry.cognate_fallback:
        lines.append("")
        lines.append("Related words: " + ", ".join(entry.cognate_fallback))

    return "\n".join(lines)


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
def main(verbose: bool):
    """English dictionary backed by a language model."""
    configure_logging(verbose)


@main.command()
@click.argument("terms", nargs=-1)
@click.option(
    "-i", "--input",
    "input_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="File with terms to look up (one per line)"
)
@click.option(
    "--model", "models",
    multiple=True,
    help="Model to try, in order (repeatable; default from CANDIDATE_MODELS)"
)
@click.option(
    "--timeout",
    type=float,
    default=REQUEST_TIMEOUT,
    help="Seconds to wait for each attempt"
)
@click.option(
    "--attempts",
    type=click.IntRange(min=1),
    default=MAX_ATTEMPTS_PER_MODEL,
    help="Attempts per model for transient failures"
)
@click.option(
    "--language",
    default=TARGET_LANGUAGE,
    help="Language for meanings and explanations"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print entries as JSON"
)
def lookup(terms: Tuple[str, ...], input_file: Optional[Path], models: Tuple[str, ...],
           timeout: float, attempts: int, language: str, as_json: bool):
    """Look up English words or idioms."""
    queries: List[str] = list(terms)
    if input_file is not None:
        queries.extend(load_terms_from_file(input_file))
    if not queries:
        raise click.UsageError("Give at least one term or --input file")

    orchestrator = Orchestrator(
        models=models or CANDIDATE_MODELS,
        timeout=timeout,
        max_attempts=attempts,
        target_language=language,
    )

    async def run_lookups():
        # One at a time; each lookup is independent.
        return [await orchestrator.lookup(query) for query in queries]

    results = asyncio.run(run_lookups())

    failures = 0
    for query, result in zip(queries, results):
        if result.success and result.data is not None:
            if as_json:
                click.echo(result.data.model_dump_json(by_alias=True, exclude_none=True, indent=2))
            else:
                click.echo(format_entry(result.data))
                click.echo()
        else:
            failures += 1
            click.echo(f"{query}: {result.error}", err=True)

    if failures:
        raise click.ClickException(f"{failures} of {len(queries)} lookups failed")


@main.command()
def models():
    """List the models available to the configured API key."""
    try:
        names = list_models(OPENAI_API_KEY, OPENAI_BASE_URL)
    except DictionaryLookupError as e:
        raise click.ClickException(str(e))
    for name in names:
        click.echo(name)


if __name__ == "__main__":
    main()
