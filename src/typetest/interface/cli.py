"""typetest CLI: word generation, scoring and a line-based typing test."""

import json
import logging
import math
import sys
import time
from datetime import timedelta
from itertools import zip_longest
from pathlib import Path
from typing import Annotated, Any

import typer

from typetest.application.config import AppConfig, config_path, resolve_config
from typetest.application.factory import get_word_source
from typetest.application.session import TestStatus, TypingTestSession
from typetest.application.stats import MetricsCalculator, TestStats, TestSummary
from typetest.domain.errors import TypetestError
from typetest.domain.words.models import DisplayedWord, WordStatus
from typetest.infrastructure.word_pools import load_passage, read_text_file

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="typetest: typing speed tests in the terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage typetest configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    try:
        return resolve_config(overrides)
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from None


def _fail(error: TypetestError) -> typer.Exit:
    typer.secho(f"Error: {error}", fg="red", err=True)
    return typer.Exit(1)


def _render_line(words: list[DisplayedWord]) -> str:
    colors = {WordStatus.CORRECT: "green", WordStatus.INCORRECT: "red"}
    return " ".join(typer.style(w.text, fg=colors.get(w.status)) for w in words)


def _format_accuracy(accuracy: float) -> str:
    return "n/a" if math.isnan(accuracy) else f"{accuracy:.1f}%"


def _print_summary(summary: TestSummary) -> None:
    typer.echo(f"WPM: {summary.effective_wpm}  Raw: {summary.raw_wpm}")
    typer.echo(f"Accuracy: {_format_accuracy(summary.accuracy)}")
    typer.echo(
        f"Characters: {summary.correct_chars} correct, {summary.incorrect_chars} incorrect"
    )
    typer.echo(f"Words: {summary.correct_words} correct, {summary.incorrect_words} incorrect")
    if summary.missed_words:
        missed = ", ".join(f"{word} ({count})" for word, count in summary.missed_words)
        typer.secho(f"Missed: {missed}", fg="yellow")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for typetest."""
    if verbose > 1:
        logging.getLogger().setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def words(
    lines: Annotated[int, typer.Option(min=1, help="Number of lines to generate.")] = 3,
    width: Annotated[int | None, typer.Option(help="Maximum characters per line.")] = None,
    seed: Annotated[
        int | None, typer.Option(help="Seed for the word sequence. Random if omitted.")
    ] = None,
    pool: Annotated[Path | None, typer.Option(help="Word pool file (.txt or .yaml).")] = None,
    passage: Annotated[Path | None, typer.Option(help="Passage file to replay.")] = None,
):
    """Print lines of practice words."""
    config = _resolve_with_overrides(
        line_width=width, seed=seed, word_pool_file=pool, passage_file=passage
    )
    try:
        source = get_word_source(config)
    except TypetestError as e:
        raise _fail(e) from None

    if not source.is_finite():
        typer.echo(f"Seed: {source.seed}", err=True)

    for _ in range(lines):
        line = source.fill_line(config.line_width)
        if not line:
            break
        typer.echo(" ".join(word.text for word in line))


@app.command()
def score(
    expected: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Text that should have been typed.")
    ],
    actual: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Text that was actually typed.")
    ],
    seconds: Annotated[float, typer.Option(min=0, help="How long the typing took.")] = 60.0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Score a typed text against the expected text, word by word."""
    try:
        expected_words = load_passage(expected).split()
        actual_words = read_text_file(actual).split()
    except TypetestError as e:
        raise _fail(e) from None

    stats = TestStats()
    # Words after the last typed one were never reached; extra typed words
    # have no expected counterpart and are ignored.
    for exp, act in zip_longest(expected_words[: len(actual_words)], actual_words, fillvalue=""):
        stats.submit_word(exp, act)

    elapsed = timedelta(seconds=seconds)
    stats.checkpoint(elapsed)
    summary = MetricsCalculator().summarize(stats, elapsed)

    if json_output:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        _print_summary(summary)


@app.command()
def run(
    seconds: Annotated[int | None, typer.Option(help="Test length in seconds.")] = None,
    width: Annotated[int | None, typer.Option(help="Maximum characters per line.")] = None,
    seed: Annotated[
        int | None, typer.Option(help="Seed for the word sequence. Random if omitted.")
    ] = None,
    pool: Annotated[Path | None, typer.Option(help="Word pool file (.txt or .yaml).")] = None,
    passage: Annotated[Path | None, typer.Option(help="Passage file to type.")] = None,
):
    """[bold green]Run[/bold green] a typing test. Type each line and press Enter."""
    config = _resolve_with_overrides(
        test_length_seconds=seconds,
        line_width=width,
        seed=seed,
        word_pool_file=pool,
        passage_file=passage,
    )
    try:
        source = get_word_source(config)
    except TypetestError as e:
        raise _fail(e) from None

    logger.debug(f"Starting typing test (finite={source.is_finite()}, seed={source.seed})")
    session = TypingTestSession(
        source,
        test_length=timedelta(seconds=config.test_length_seconds),
        line_width=config.line_width,
    )

    while True:
        _play(session, config)
        typer.echo()
        _print_summary(session.summary())

        choice = typer.prompt("[r]etry, [n]ext test or [q]uit", default="q").strip().lower()
        if choice.startswith("r"):
            session.redo()
        elif choice.startswith("n"):
            session.next_test()
        else:
            break


def _play(session: TypingTestSession, config: AppConfig) -> None:
    start = time.monotonic()
    while session.status != TestStatus.COMPLETE:
        typer.echo(_render_line(session.current_line))
        typer.secho(" ".join(w.text for w in session.next_line), dim=True)

        typed = typer.prompt("", default="", show_default=False, prompt_suffix="> ")
        elapsed = timedelta(seconds=time.monotonic() - start)
        typed_words = typed.split()
        if typed_words and session.status == TestStatus.NOT_STARTED:
            session.input_changed(typed_words[0])
        # Words entered after the time ran out don't count
        if elapsed < session.test_length:
            for word in typed_words:
                session.input_changed(word)
                session.submit_word()
        # One checkpoint per line, taken after its words are in
        session.tick(elapsed)

        status = []
        if config.show_timer and not session.word_source.is_finite():
            status.append(f"{session.remaining_seconds}s left")
        if config.show_wpm and session.status != TestStatus.NOT_STARTED:
            status.append(f"{session.stats.effective_wpm(session.elapsed)} WPM")
        if status:
            typer.secho("  ".join(status), fg="cyan")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


@config_app.command("path")
def config_path_cmd():
    """Print the location of the config file."""
    typer.echo(str(config_path()))
