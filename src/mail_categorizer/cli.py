"""Command-line interface for mail-categorizer.

Provides ``run``, ``classify``, ``top-words`` and ``init-config`` commands
with rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    mail-categorizer run --root ./corpus
    mail-categorizer classify --root ./corpus message1.txt message2.txt
    mail-categorizer top-words --limit 10
    mail-categorizer init-config mail-categorizer.toml
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .classifier import MailCategorizer
from .config import DEFAULT_CONFIG_NAME, ConfigError, CorpusLayout
from .evaluation import evaluate
from .models import CategoryTally, EvaluationReport, MailScores, MailType, PreconditionError

console = Console()

# Failures that abort a run; anything else is a bug and keeps its traceback.
FATAL_ERRORS = (OSError, PreconditionError, ConfigError)


def _get_label_style(mail_type: MailType) -> str:
    """Return a rich style string for a label."""
    return {
        MailType.HAM: "bold green",
        MailType.SPAM: "bold red",
    }.get(mail_type, "")


def _configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_layout(config: Path | None, root: Path | None) -> CorpusLayout:
    layout = CorpusLayout.load(config) if config else CorpusLayout()
    if root is not None:
        layout.root = root
    return layout


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(error))}", soft_wrap=True)
    sys.exit(1)


def _train(layout: CorpusLayout) -> MailCategorizer:
    with console.status("[bold blue]Training models...", spinner="dots"):
        return MailCategorizer.train(layout)


config_option = click.option(
    "--config", "-c", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None, help="TOML file describing the corpus layout.",
)
root_option = click.option(
    "--root", "-r", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Corpus root directory (overrides the config file).",
)


@click.group()
@click.version_option(package_name="mail-categorizer")
@click.option("--verbose", "-v", count=True, help="Show progress (-v) or debug output (-vv).")
def main(verbose: int) -> None:
    """📬 mail-categorizer: Naive Bayes ham/spam classification.

    Trains word-frequency models on labeled mail folders and evaluates
    them on a held-out set.
    """
    _configure_logging(verbose)


@main.command()
@config_option
@root_option
@click.option("--output", "-o", type=click.Choice(["rich", "text", "json"]), default="rich",
              help="Output format.")
def run(config: Path | None, root: Path | None, output: str) -> None:
    """Train on the training sets and classify the held-out set.

    Example: mail-categorizer run --root ./corpus
    """
    try:
        layout = _load_layout(config, root)
        categorizer = _train(layout)
        with console.status("[bold blue]Categorizing held-out mail...", spinner="dots"):
            report = evaluate(categorizer, layout)
    except FATAL_ERRORS as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif output == "text":
        click.echo(report.summary())
    else:
        _render_report(report)


@main.command()
@click.argument("files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@root_option
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify(files: tuple[Path, ...], config: Path | None, root: Path | None, output: str) -> None:
    """Train, then score individual mail files.

    Example: mail-categorizer classify --root ./corpus message.txt
    """
    try:
        layout = _load_layout(config, root)
        categorizer = _train(layout)
        results = [(path, categorizer.classify_file(path)) for path in files]
    except FATAL_ERRORS as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(
            [{"file": str(path), **scores.to_dict()} for path, scores in results],
            indent=2,
        ))
    else:
        _render_scores(results)


@main.command("top-words")
@config_option
@root_option
@click.option("--limit", "-n", type=click.IntRange(min=1), default=20,
              help="Number of words to show per label.")
def top_words(config: Path | None, root: Path | None, limit: int) -> None:
    """Show the most frequent training words of each label.

    Example: mail-categorizer top-words --limit 10
    """
    try:
        layout = _load_layout(config, root)
        categorizer = _train(layout)
    except FATAL_ERRORS as e:
        _fail(e)

    for mail_type, model in (
        (MailType.HAM, categorizer.ham_model),
        (MailType.SPAM, categorizer.spam_model),
    ):
        table = Table(title=f"Top {mail_type.value} words", title_style=_get_label_style(mail_type))
        table.add_column("#", justify="right", width=4)
        table.add_column("Word", style="cyan")
        table.add_column("Count", justify="right")
        for i, (word, count) in enumerate(model.most_common(limit), 1):
            table.add_row(str(i), word, str(count))
        console.print(table)


@main.command("init-config")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path),
                default=DEFAULT_CONFIG_NAME)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file.")
def init_config(path: Path, force: bool) -> None:
    """Write a default corpus layout file.

    Example: mail-categorizer init-config mail-categorizer.toml
    """
    if path.exists() and not force:
        _fail(ConfigError(f"{path} already exists (use --force to overwrite)"))

    try:
        CorpusLayout().save(path)
    except OSError as e:
        _fail(e)
    console.print(f"[dim]Wrote default layout to {path}[/]")


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_report(report: EvaluationReport) -> None:
    """Render an EvaluationReport as one table per held-out set."""
    console.print()
    console.print(
        f"[dim]Ham model: {report.ham_total} words ({report.ham_vocabulary} distinct) | "
        f"Spam model: {report.spam_total} words ({report.spam_vocabulary} distinct)[/]"
    )
    for tally in report.tallies.values():
        _render_tally(tally)

    console.print(f"Overall accuracy: [bold]{report.accuracy:.2%}[/]")
    console.print()


def _render_tally(tally: CategoryTally) -> None:
    table = Table(title=f"Categorized {tally.label.value.title()}")
    table.add_column("Bucket", style="cyan", width=10)
    table.add_column("Count", justify="right", width=8)
    table.add_row("Hams", str(tally.ham), style=_get_label_style(MailType.HAM))
    table.add_row("Spams", str(tally.spam), style=_get_label_style(MailType.SPAM))
    table.caption = f"{tally.accuracy:.2%} correct"
    console.print(table)


def _render_scores(results: list[tuple[Path, MailScores]]) -> None:
    table = Table(title="Mail scores", show_lines=False)
    table.add_column("File", style="white")
    table.add_column("Ham", justify="right", width=12)
    table.add_column("Spam", justify="right", width=12)
    table.add_column("Label", justify="center", width=8)

    for path, scores in results:
        label = scores.mail_type
        table.add_row(
            path.name,
            f"{scores.ham:.4f}",
            f"{scores.spam:.4f}",
            f"[{_get_label_style(label)}]{label.value.upper()}[/]",
        )

    console.print(table)


if __name__ == "__main__":
    main()
