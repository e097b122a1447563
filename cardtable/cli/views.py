"""Composable view primitives for the Sevens CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import STANDARD_SUITS, Card, Rank
from ..sevens import SevensState, Status, Turn

_STATUS_TEXT = {
    Status.PLAYING: "Playing",
    Status.PLAYER_WON: "[bold green]You won[/bold green]",
    Status.CPU_WON: "[bold red]CPU won[/bold red]",
    Status.STUCK: "[bold yellow]Stuck[/bold yellow]",
}


@dataclass(slots=True)
class SevensTableView:
    """Renderable summarising a Sevens game in progress."""

    state: SevensState
    card_formatter: Callable[[Card], str]
    options: Sequence[Card] = ()
    reveal_cpu: bool = False

    def _board_table(self) -> Table:
        table = Table(box=box.MINIMAL, expand=True, show_header=True)
        table.add_column("Suit", justify="left", style="bold")
        for rank in Rank.ordered():
            table.add_column(rank.value, justify="center")
        for suit in STANDARD_SUITS:
            row = self.state.board.row(suit)
            cells = [
                self.card_formatter(Card.of(rank, suit)) if placed else "[dim]·[/dim]"
                for rank, placed in zip(Rank.ordered(), row)
            ]
            table.add_row(suit.value.title(), *cells)
        return table

    def _meta_panel(self) -> Panel:
        state = self.state
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        turn = "[yellow]You[/yellow]" if state.turn is Turn.PLAYER else "[cyan]CPU[/cyan]"
        grid.add_row(f"[cyan]Turn[/cyan]: {state.turn_count} ({turn})")
        grid.add_row(f"[cyan]Passes[/cyan]: you {state.player_passes}/{state.player_passes_max}"
                     f" · CPU {state.cpu_passes}/{state.cpu_passes_max}")
        grid.add_row(f"[cyan]Status[/cyan]: {_STATUS_TEXT[state.status]}")
        return Panel(grid, title="Game", box=box.SQUARE, border_style="blue")

    def _hands_table(self) -> Table:
        state = self.state
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Side", justify="left", style="bold")
        table.add_column("Cards", justify="right")
        table.add_column("Hand", justify="left")
        table.add_row("You", str(len(state.player_hand)), " ".join(self.card_formatter(c) for c in state.player_hand))
        cpu_display = (
            " ".join(self.card_formatter(c) for c in state.cpu_hand)
            if self.reveal_cpu
            else f"{len(state.cpu_hand)} cards"
        )
        table.add_row("CPU", str(len(state.cpu_hand)), cpu_display)
        return table

    def _options_table(self) -> Table:
        table = Table.grid(expand=True)
        table.add_column(justify="left")
        for idx, card in enumerate(self.options, start=1):
            table.add_row(f"[bold]{idx}[/bold] Play {self.card_formatter(card)}")
        if self.state.can_pass(Turn.PLAYER):
            table.add_row("[bold]p[/bold] Pass")
        return table

    def render(self) -> RenderableType:
        components: list[RenderableType] = [
            Panel(self._board_table(), title="Board", border_style="green"),
            self._meta_panel(),
            self._hands_table(),
        ]
        if self.state.status is Status.PLAYING and self.state.turn is Turn.PLAYER:
            components.append(Panel(self._options_table(), title="Your move", border_style="yellow"))
        return Group(*components)


def event_panel(lines: Sequence[str], limit: int = 8) -> Panel:
    log_table = Table.grid(expand=True)
    log_table.add_column(justify="left")
    if lines:
        for line in lines[-limit:]:
            log_table.add_row(line)
    else:
        log_table.add_row("[dim]Event log will appear here[/dim]")
    return Panel(log_table, title="Event Log", border_style="magenta", box=box.SIMPLE)
