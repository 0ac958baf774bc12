import asyncio
import json
import logging
from typing import Optional
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from pixelpeek.analytics.tracker import AnalyticsTracker
from pixelpeek.config import AppConfig, load_config
from pixelpeek.errors import PixelPeekError
from pixelpeek.game.models import Round, RoundOutcome, RoundPhase
from pixelpeek.session.runner import ReplayCase, ReplayRunner
from pixelpeek.session.wiring import create_hint_generator, create_judge, create_machine, create_matcher
from pixelpeek.storage.json_store import JsonStorage

app = typer.Typer(help="PixelPeek: guess the subject of a progressively de-blurred image.")
console = Console()


def _setup(config_file: Optional[str], provider: Optional[str], verbose: bool) -> AppConfig:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )
    try:
        config = load_config(config_file)
    except PixelPeekError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    if provider:
        config.judge.provider = provider
    return config


@app.command()
def play(
    config_file: Optional[str] = typer.Option("pixelpeek.json", "--config", help="Path to configuration"),
    provider: Optional[str] = typer.Option(None, help="Judge/hint provider override (e.g. mock)"),
    category: Optional[str] = typer.Option(None, help="Restrict rounds to one category"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    """
    Plays interactively. Type a guess, :skip for a new image, :quit to stop.
    """
    config = _setup(config_file, provider, verbose)
    asyncio.run(_async_play(config, category))


async def _async_play(config: AppConfig, category: Optional[str]):
    storage = JsonStorage(config.results_dir)
    tracker = AnalyticsTracker(storage)
    try:
        machine = create_machine(config, storage=storage, observers=[tracker])
    except (PixelPeekError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return

    rd = await machine.start_round(category)
    while True:
        if rd.phase == RoundPhase.LOADING:
            console.print("[red]Unable to load an image. Try again later.[/red]")
            break

        _print_round(rd, machine.high_score)
        prompt = "Next round? [Enter / :quit] " if rd.revealed else "Your guess: "
        text = console.input(prompt).strip()

        if text == ":quit":
            break
        if rd.revealed:
            rd = await machine.next_round(category)
        elif text == ":skip":
            console.print(f"[yellow]Skipped. It was: {rd.label}[/yellow]")
            rd = await machine.skip(category)
        else:
            rd = await machine.submit_guess(text)

    _print_statistics(tracker.statistics, machine.high_score)


def _print_round(rd: Round, high_score: int):
    table = Table(show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("Score", f"{rd.score}  (best {high_score})")
    table.add_row("Attempts", f"{rd.attempts}")
    table.add_row("Blur", "█" * (rd.blur // 2) or "clear")
    if rd.category:
        table.add_row("Category", rd.category)
    console.print(table)

    if rd.outcome == RoundOutcome.WON:
        console.print(f"[bold green]Correct! It was: {rd.label}[/bold green]")
    elif rd.outcome == RoundOutcome.LOST:
        console.print(f"[bold red]Game Over! The answer was: {rd.label.upper()}[/bold red]")
    elif rd.hint:
        console.print(f"[magenta]> {rd.hint}[/magenta]")


@app.command()
def check(
    guess: str = typer.Argument(..., help="The player's guess"),
    answer: str = typer.Argument(..., help="The hidden label"),
    description: str = typer.Option("", help="Image description given to the semantic judge"),
    config_file: Optional[str] = typer.Option("pixelpeek.json", "--config", help="Path to configuration"),
    provider: Optional[str] = typer.Option(None, help="Judge provider override (e.g. mock, none)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    """
    Classifies a single guess against an answer and prints the verdict.
    """
    config = _setup(config_file, provider, verbose)
    matcher = create_matcher(config, create_judge(config))
    verdict = asyncio.run(matcher.evaluate(guess, answer, description))

    table = Table(title="Verdict")
    table.add_column("Valid")
    table.add_column("Strategy", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Reasoning")
    table.add_row(
        "[green]yes[/green]" if verdict.is_valid else "[red]no[/red]",
        verdict.strategy.value,
        f"{verdict.confidence:.2f}",
        verdict.reasoning
    )
    console.print(table)


@app.command()
def replay(
    cases_file: str = typer.Argument(..., help="JSON list of {description, label, guesses}"),
    config_file: Optional[str] = typer.Option("pixelpeek.json", "--config", help="Path to configuration"),
    provider: Optional[str] = typer.Option(None, help="Judge/hint provider override (e.g. mock)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")
):
    """
    Replays scripted guesses through the round engine and reports the outcomes.
    """
    config = _setup(config_file, provider, verbose)
    try:
        with open(cases_file, "r") as f:
            cases = [ReplayCase.model_validate(c) for c in json.load(f)]
    except FileNotFoundError:
        console.print(f"[red]Error: {cases_file} not found.[/red]")
        raise typer.Exit(code=1)

    runner = ReplayRunner(
        create_matcher(config, create_judge(config)),
        create_hint_generator(config),
        config.game
    )
    results = asyncio.run(runner.run_all(cases))

    table = Table(title="Replay Results")
    table.add_column("Label", style="cyan")
    table.add_column("Outcome")
    table.add_column("Attempts", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Strategies")
    for r in results:
        outcome = r.outcome.value if r.outcome else "[yellow]UNFINISHED[/yellow]"
        table.add_row(
            r.label,
            outcome,
            str(r.attempts),
            str(r.score),
            " ".join(s.value for s in r.strategies)
        )
    console.print(table)


@app.command()
def stats(
    config_file: Optional[str] = typer.Option("pixelpeek.json", "--config", help="Path to configuration"),
):
    """
    Displays the high score and accumulated statistics.
    """
    config = _setup(config_file, None, False)
    storage = JsonStorage(config.results_dir)
    _print_statistics(storage.load_statistics(), storage.load_high_score())


def _print_statistics(statistics, high_score: int):
    table = Table(title="PixelPeek Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold green")
    table.add_row("High score", str(high_score))
    table.add_row("Games played", str(statistics.games_played))
    table.add_row("Games won", str(statistics.games_won))
    table.add_row("Skipped", str(statistics.games_skipped))
    table.add_row("Average score", str(statistics.average_score))
    table.add_row("Success rate", f"{statistics.success_rate}%")
    console.print(table)


if __name__ == "__main__":
    app()
