"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..results import GameSimulation, HistoryEntry, Outcome
from ..sevens import SevensState
from .views import SevensTableView, event_panel

_SUIT_SYMBOLS = {
    Suit.SPADES: ("♠", "cyan"),
    Suit.HEARTS: ("♥", "red"),
    Suit.DIAMONDS: ("♦", "magenta"),
    Suit.CLUBS: ("♣", "green"),
}

_OUTCOME_STYLES = {
    Outcome.WIN: "[bold green]Win[/bold green]",
    Outcome.LOSE: "[bold red]Lose[/bold red]",
    Outcome.DRAW: "[bold yellow]Draw[/bold yellow]",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_joker:
        return "[magenta]🃏[/magenta]"
    symbol, color = _SUIT_SYMBOLS[card.suit]
    return f"[{color}]{card.rank.value}{symbol}[/{color}]"


def format_cards(cards: Iterable[Card]) -> str:
    labels = [format_card(card) for card in cards]
    return " ".join(labels) if labels else "-"


def format_outcome(outcome: Outcome) -> str:
    return _OUTCOME_STYLES[outcome]


def render_simulation(simulation: GameSimulation, *, title: str | None = None) -> RenderableType:
    """Return a Rich panel describing a finished round."""

    grid = Table.grid(expand=True, padding=(0, 1))
    grid.add_column(justify="left", style="bold")
    grid.add_column(justify="left")
    grid.add_row("Result", format_outcome(simulation.outcome))
    grid.add_row("Difficulty", str(simulation.difficulty))
    grid.add_row("Turns", str(simulation.turns))
    grid.add_row("You", format_cards(simulation.player_hand))
    grid.add_row("CPU", format_cards(simulation.cpu_hand))
    grid.add_row("Table", format_cards(simulation.table_cards))

    breakdown = Table.grid(expand=True)
    breakdown.add_column(justify="left")
    for line in simulation.score_breakdown:
        breakdown.add_row(f"• {line}")

    components: list[RenderableType] = [
        grid,
        Panel(simulation.notes, title="Notes", box=box.SIMPLE, border_style="blue"),
    ]
    if simulation.score_breakdown:
        components.append(Panel(breakdown, title="Breakdown", box=box.SIMPLE, border_style="magenta"))
    return Panel(
        Group(*components),
        title=title or simulation.game.display_name,
        border_style="cyan",
        box=box.ROUNDED,
    )


def render_history(entries: Iterable[HistoryEntry]) -> Table:
    table = Table(title="Match History", box=box.SIMPLE_HEAVY)
    table.add_column("When", justify="left")
    table.add_column("Game", justify="left")
    table.add_column("Level", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("Turns", justify="right")
    table.add_column("Id", justify="left", style="dim")

    for entry in entries:
        when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(
            when,
            entry.game.display_name,
            str(entry.simulation.difficulty),
            format_outcome(entry.outcome),
            str(entry.simulation.turns),
            entry.id,
        )
    return table


def render_sevens(
    state: SevensState,
    *,
    options: Sequence[Card] = (),
    reveal_cpu: bool = False,
    title: str = "Sevens",
) -> RenderableType:
    """Return a Rich panel describing the current Sevens table."""

    view = SevensTableView(
        state=state,
        card_formatter=format_card,
        options=options,
        reveal_cpu=reveal_cpu,
    )
    return Panel(Group(view.render(), event_panel(state.log)), title=title, padding=(0, 1), border_style="cyan")
