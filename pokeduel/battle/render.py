"""Rich renderables built from engine snapshots. Read-only: nothing here mutates a session."""
from __future__ import annotations
from typing import Iterable, Optional, Sequence

from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pokeduel.core.types import badge_style, text_style, type_abbreviation
from .models import CONCLUDED, PLAYER, SELECTING, Creature, Side
from .session import SessionSnapshot

BAR_LENGTH = 20
LOG_LINES = 8

def hp_color(current: int, max_hp: int) -> str:
    if max_hp <= 0:
        return "red"
    percent = max(0.0, min(100.0, current / max_hp * 100))
    if percent < 20:
        return "red"
    if percent < 50:
        return "yellow"
    return "green"

def hp_bar(current: int, max_hp: int, width: int = BAR_LENGTH) -> str:
    """Rich markup for an HP bar."""
    if max_hp <= 0:
        return "[red]FAINTED[/red]"
    ratio = max(0.0, min(1.0, current / max_hp))
    filled = int(ratio * width)
    color = hp_color(current, max_hp)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/{color}]"

def type_badge(type_name: str, *, short: bool = False) -> Text:
    label = type_abbreviation(type_name) if short else type_name.upper()
    return Text(f" {label} ", style=badge_style(type_name))

def creature_panel(creature: Creature, hp: int, *, title: str, hit: bool = False) -> Panel:
    body = Text()
    body.append(creature.name, style="bold bright_white")
    body.append("  ")
    body.append_text(type_badge(creature.type))
    body.append(f"\nHP: {hp}/{creature.max_hp}\n")
    body.append_text(Text.from_markup(hp_bar(hp, creature.max_hp)))
    return Panel(
        body,
        title=f"[bright_white bold]{title}[/bright_white bold]",
        box=box.ROUNDED,
        border_style="red" if hit else "bright_white",
        width=36,
        padding=(0, 1),
    )

def log_panel(lines: Sequence[str], limit: int = LOG_LINES) -> Panel:
    shown = list(lines)[-limit:]
    text = Text("\n".join(shown) if shown else "...")
    return Panel(text, title="Battle Log", box=box.ROUNDED, border_style="cyan")

def status_line(snap: SessionSnapshot) -> Text:
    if snap.phase == SELECTING:
        return Text("Choose your Pokemon", style="bold bright_white")
    if snap.phase == CONCLUDED:
        won = snap.winner == PLAYER
        return Text("VICTORY!" if won else "DEFEAT...", style="bold green" if won else "bold red")
    if snap.busy:
        return Text("...", style="dim")
    if snap.turn == PLAYER:
        return Text("What will you do?", style="bold bright_white")
    return Text("Opponent is thinking...", style="italic yellow")

def battle_view(snap: SessionSnapshot) -> Group:
    if snap.player is None or snap.opponent is None:
        return Group(Text("No battle in progress."))
    anim = snap.pending_attack_animation
    opp = creature_panel(snap.opponent, snap.opponent_health or 0, title="OPPONENT",
                         hit=bool(anim and anim.target != PLAYER))
    me = creature_panel(snap.player, snap.player_health or 0, title="YOUR POKEMON",
                        hit=bool(anim and anim.target == PLAYER))
    return Group(
        Align.center(Columns([opp, me], padding=(0, 4))),
        log_panel(snap.log),
        Align.center(status_line(snap)),
    )

def attack_flash(move_type: str, target_name: str) -> Text:
    return Text(f"  ** {move_type.upper()} hit on {target_name} **", style=f"bold {text_style(move_type)}")

def roster_table(roster: Iterable[Creature]) -> Table:
    table = Table(title="Choose your Pokemon", box=box.ROUNDED, header_style="bold bright_yellow")
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("HP", justify="right")
    table.add_column("Moves")
    for i, c in enumerate(roster, start=1):
        table.add_row(str(i), c.name, type_badge(c.type), str(c.max_hp), ", ".join(m.name for m in c.moves))
    return table

def move_table(creature: Creature) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Type")
    table.add_column("Power", justify="right")
    table.add_column("Acc", justify="right")
    for i, m in enumerate(creature.moves, start=1):
        power = "-" if m.power == 0 else str(m.power)
        table.add_row(str(i), m.name, type_badge(m.type, short=True), power, f"{m.accuracy}%")
    return table

def side_name(snap: SessionSnapshot, side: Optional[Side]) -> str:
    if side is None:
        return ""
    c = snap.player if side == PLAYER else snap.opponent
    return c.name if c else ""
