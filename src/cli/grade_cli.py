"""
Quiz Grader CLI - grade answers and summarize results from the terminal.

Usage:
    quizgrade grade question.json answer.json          # Grade one answer
    quizgrade grade question.json answer.json --json   # Emit the result as JSON
    quizgrade rating-stats 4 5 3 5 2                   # Summarize raw ratings
    quizgrade dropdown-stats results.json              # Summarize dropdown results
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Local imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from config import get_settings
from src.grading import ConfigurationError, grade_answer
from src.grading.base import DropdownGradingResult
from src.grading.statistics import calculate_rating_statistics, generate_dropdown_statistics
from src.grading.validation import parse_question

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="quizgrade",
    help="Quiz Grader - deterministic auto-grading for quiz answers",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(code=1)


# =============================================================================
# Grading Commands
# =============================================================================


@app.command()
def grade(
    question_file: Annotated[Path, typer.Argument(help="Question JSON file")],
    answer_file: Annotated[Path, typer.Argument(help="Answer JSON file")],
    case_sensitive: Annotated[
        bool, typer.Option("--case-sensitive", help="Dropdown: compare option text case-sensitively")
    ] = False,
    partial_credit: Annotated[
        Optional[bool],
        typer.Option("--partial-credit/--no-partial-credit", help="Override the partial credit policy"),
    ] = None,
    max_score: Annotated[
        float, typer.Option("--max-score", help="Dropdown: score for a correct selection")
    ] = 1.0,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw result as JSON")] = False,
) -> None:
    """Grade a single answer against a question."""
    question_data = _load_json(question_file)
    answer_data = _load_json(answer_file)

    options: dict[str, Any] = {"case_sensitive": case_sensitive, "max_score": max_score}
    if partial_credit is not None:
        options["allow_partial_credit"] = partial_credit

    try:
        question = parse_question(question_data)
        result = grade_answer(question, answer_data, **options)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    style = "green" if result.is_correct else ("yellow" if result.score > 0 else "red")
    title = "CORRECT" if result.is_correct else ("PARTIAL CREDIT" if result.score > 0 else "INCORRECT")
    console.print(Panel(
        f"{escape(result.feedback)}\n\n[dim]Score:[/dim] {result.score:g}",
        title=f"[bold {style}]{title}[/bold {style}]",
        border_style=style,
    ))


# =============================================================================
# Statistics Commands
# =============================================================================


@app.command("rating-stats")
def rating_stats(
    ratings: Annotated[list[int], typer.Argument(help="Ratings to summarize")],
) -> None:
    """Summarize raw ratings (average, median, mode, distribution)."""
    stats = calculate_rating_statistics(ratings)

    table = Table(title="Rating Statistics", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Responses", str(stats.total))
    table.add_row("Average", f"{stats.average:g}")
    table.add_row("Median", f"{stats.median:g}")
    table.add_row("Mode", ", ".join(str(m) for m in stats.mode))
    console.print(table)

    dist = Table(title="Distribution")
    dist.add_column("Rating", style="cyan", justify="right")
    dist.add_column("Count", justify="right")
    for value, count in stats.distribution.items():
        dist.add_row(str(value), str(count))
    console.print(dist)


@app.command("dropdown-stats")
def dropdown_stats(
    results_file: Annotated[Path, typer.Argument(help="JSON list of dropdown grading results")],
    top: Annotated[
        Optional[int], typer.Option("--top", "-n", help="How many common incorrect answers to list")
    ] = None,
) -> None:
    """Summarize a batch of dropdown grading results."""
    data = _load_json(results_file)
    if not isinstance(data, list):
        console.print("[red]Expected a JSON list of results[/red]")
        raise typer.Exit(code=1)

    stats = generate_dropdown_statistics(
        [DropdownGradingResult.from_dict(item) for item in data],
        top_n=top,
    )

    table = Table(title="Dropdown Statistics", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Attempts", str(stats.total_attempts))
    table.add_row("Correct", str(stats.correct_answers))
    table.add_row("Incorrect", str(stats.incorrect_answers))
    table.add_row("Partial credit", str(stats.partial_credit_answers))
    table.add_row("Average score", f"{stats.average_score:g}")
    table.add_row("Accuracy", f"{stats.accuracy_rate:g}%")
    console.print(table)

    if stats.common_incorrect_answers:
        misses = Table(title="Common Incorrect Answers")
        misses.add_column("Option")
        misses.add_column("Count", justify="right")
        for option, count in stats.common_incorrect_answers:
            misses.add_row(escape(option), str(count))
        console.print(misses)


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """Entry point for the CLI."""
    settings = get_settings()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, rotation="10 MB")

    app()


if __name__ == "__main__":
    run()
