"""Typer entry-point wiring for the card table CLI."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import benchmark
from ..games import simulate_game
from ..history import HistoryStore
from ..results import GameSimulation, GameType
from ..scoreboard import GameTotals, Scoreboard
from ..settings import HISTORY_ENV_VAR, Settings, resolve_history_path
from ..sevens import (
    SevensState,
    Status,
    Turn,
    build_sevens_simulation_summary,
    cpu_turn,
    create_sevens_game,
    playable_cards,
    player_step,
    run_to_completion,
)
from ..storage import JsonFileStorage
from .render import render_history, render_sevens, render_simulation


@dataclass(slots=True)
class AppContext:
    """Options shared by every command."""

    history_path: Path


app = typer.Typer(add_completion=False, rich_markup_mode="rich", help="Play card games against a tunable CPU.")
console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_game(value: str) -> GameType:
    try:
        return GameType.parse(value)
    except ValueError as exc:
        choices = ", ".join(game.value for game in GameType)
        raise typer.BadParameter(f"{exc}; choose one of {choices}") from exc


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


def _history_store(ctx: typer.Context) -> HistoryStore:
    app_ctx: AppContext = ctx.obj
    store = HistoryStore(JsonFileStorage(app_ctx.history_path))
    store.hydrate()
    return store


def _record(ctx: typer.Context, simulation: GameSimulation, *, save: bool) -> None:
    if not save:
        return
    entry = _history_store(ctx).add_entry(simulation)
    console.print(f"[dim]Saved to history as {entry.id}[/dim]")


@app.callback()
def main_callback(
    ctx: typer.Context,
    history_file: Optional[Path] = typer.Option(
        None,
        "--history-file",
        envvar=HISTORY_ENV_VAR,
        help="JSON file holding the match history.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    configure_logging(verbose)
    ctx.obj = AppContext(history_path=resolve_history_path(history_file))


@app.command()
def simulate(
    ctx: typer.Context,
    game: str = typer.Argument(..., help="daifugo, oldMaid, sevens, blackjack or poker."),
    difficulty: int = typer.Option(3, "--difficulty", "-d", min=1, max=10, help="CPU difficulty (1-10)."),
    seed: Optional[int] = typer.Option(None, help="Random seed for a reproducible round."),
    save: bool = typer.Option(True, "--save/--no-save", help="Record the result in the history."),
) -> None:
    """Simulate one round of GAME and show the replay."""

    settings = Settings(game=_parse_game(game), difficulty=difficulty)
    simulation = simulate_game(settings.game, settings.difficulty, rng=_rng(seed))
    console.print(render_simulation(simulation))
    _record(ctx, simulation, save=save)


def _prompt_player_move(state: SevensState) -> SevensState:
    options = playable_cards(state.player_hand, state.board)
    console.print(render_sevens(state, options=options))
    while True:
        answer = typer.prompt("Choose a card number or 'p' to pass").strip().lower()
        if answer == "p":
            if not state.can_pass(Turn.PLAYER):
                console.print("[red]No passes left.[/red]")
                continue
            return player_step(state, None)
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return player_step(state, options[int(answer) - 1])
        console.print("[red]Not a valid choice.[/red]")


@app.command()
def sevens(
    ctx: typer.Context,
    difficulty: int = typer.Option(3, "--difficulty", "-d", min=1, max=10, help="CPU difficulty (1-10)."),
    seed: Optional[int] = typer.Option(None, help="Random seed for a reproducible deal."),
    auto: bool = typer.Option(False, "--auto", help="Let the computer play your hand."),
    save: bool = typer.Option(True, "--save/--no-save", help="Record the result in the history."),
) -> None:
    """Play Sevens against the CPU."""

    rng = _rng(seed)
    state = create_sevens_game(Settings(game=GameType.SEVENS, difficulty=difficulty).difficulty, rng=rng)

    if auto:
        state = run_to_completion(state, rng=rng)
    else:
        while state.status is Status.PLAYING:
            if state.turn is Turn.PLAYER:
                state = _prompt_player_move(state)
            else:
                state = cpu_turn(state, rng=rng)
                console.print(f"[cyan]{state.log[-1]}[/cyan]")

    console.print(render_sevens(state, reveal_cpu=True))
    simulation = build_sevens_simulation_summary(state)
    console.print(render_simulation(simulation))
    _record(ctx, simulation, save=save)


@app.command()
def history(
    ctx: typer.Context,
    limit: int = typer.Option(20, min=1, help="Number of entries to show."),
) -> None:
    """List recorded rounds, newest first."""

    store = _history_store(ctx)
    if not store.entries:
        console.print("[dim]No games recorded yet.[/dim]")
        return
    console.print(render_history(store.entries[:limit]))


@app.command("clear-history")
def clear_history(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete every recorded round."""

    if not yes and not typer.confirm("Delete the whole match history?"):
        raise typer.Abort()
    _history_store(ctx).clear()
    console.print("[green]History cleared.[/green]")


def _totals_row(table: Table, label: str, totals: GameTotals) -> None:
    table.add_row(
        label,
        str(totals.played),
        str(totals.wins),
        str(totals.losses),
        str(totals.draws),
        f"{totals.win_rate:.0%}",
    )


@app.command()
def scoreboard(ctx: typer.Context) -> None:
    """Show win/lose/draw totals per game."""

    board = Scoreboard.from_entries(_history_store(ctx).entries)
    table = Table(title="Scoreboard", box=box.DOUBLE_EDGE)
    table.add_column("Game", justify="left")
    table.add_column("Played", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Losses", justify="right")
    table.add_column("Draws", justify="right")
    table.add_column("Win rate", justify="right")
    for totals in board.totals():
        if totals.game is not None:
            _totals_row(table, totals.game.display_name, totals)
    _totals_row(table, "[bold]All games[/bold]", board.overall())
    console.print(table)


@app.command("benchmark")
def benchmark_cli(
    game: str = typer.Option("blackjack", "--game", "-g", help="Game to benchmark."),
    rounds: int = typer.Option(200, min=1, help="Rounds simulated per difficulty."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
) -> None:
    """Measure outcome rates at every difficulty."""

    report = benchmark.run_outcome_benchmark(_parse_game(game), rounds, seed=seed)

    table = Table(title=f"{report.game.display_name} Benchmark", box=box.SIMPLE_HEAVY)
    table.add_column("Level", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Losses", justify="right")
    table.add_column("Draws", justify="right")
    table.add_column("Win rate", justify="right")
    for row in report.rows():
        table.add_row(
            str(row.difficulty),
            str(row.wins),
            str(row.losses),
            str(row.draws),
            f"{row.win_rate:.1%}",
        )
    console.print(table)
    console.print(f"[cyan]Overall player win rate: {report.overall_win_rate():.1%}[/cyan]")


def main() -> None:
    """Entry-point for ``python -m cardtable``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
