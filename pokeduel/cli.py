"""Terminal front end: pick a creature, trade moves, rematch.

The CLI only reads snapshots and submits moves; all timing runs through the
engine's RealtimeScheduler.
"""
from __future__ import annotations
import argparse
import random
from typing import List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from pokeduel import __version__
from pokeduel.battle.engine import BattleEngine, EngineTimings
from pokeduel.battle.models import CONCLUDED, IN_BATTLE, Creature, Move
from pokeduel.battle.render import attack_flash, battle_view, move_table, roster_table, side_name
from pokeduel.battle.scheduler import RealtimeScheduler
from pokeduel.battle.session import SessionSnapshot
from pokeduel.core.errors import PokeduelError
from pokeduel.core.logging import logger
from pokeduel.data.roster import load_roster
from pokeduel.system.settings import Settings

QUIT = "q"


class LogPrinter:
    """Snapshot listener echoing new log lines and hit flashes as they happen."""

    def __init__(self, console: Console):
        self.console = console
        self.printed = 0
        self.flashing = False

    def __call__(self, snap: SessionSnapshot):
        if len(snap.log) < self.printed:
            self.printed = 0
        for line in snap.log[self.printed:]:
            self.console.print(f"[bright_white]> {line}[/bright_white]")
        self.printed = len(snap.log)
        anim = snap.pending_attack_animation
        if anim and not self.flashing:
            self.console.print(attack_flash(anim.move_type, side_name(snap, anim.target)))
        self.flashing = anim is not None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pokeduel", description="Turn-based Pokemon duel in your terminal")
    p.add_argument("--seed", type=int, default=None, help="seed the battle RNG")
    p.add_argument("--fast", action="store_true", help="skip animation delays")
    p.add_argument("--no-color", action="store_true", help="disable colored output")
    p.add_argument("--log-level", choices=["DEBUG","INFO","WARN","ERROR"], default=None)
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _choose_creature(console: Console, roster: Sequence[Creature]) -> Optional[Creature]:
    console.print(roster_table(roster))
    choices = [str(i) for i in range(1, len(roster) + 1)] + [QUIT]
    pick = Prompt.ask("Pick a number (q to quit)", choices=choices, show_choices=False, console=console)
    if pick == QUIT:
        return None
    return roster[int(pick) - 1]


def _choose_move(console: Console, creature: Creature) -> Optional[Move]:
    console.print(move_table(creature))
    choices = [str(i) for i in range(1, len(creature.moves) + 1)] + [QUIT]
    pick = Prompt.ask("Move (q to forfeit)", choices=choices, show_choices=False, console=console)
    if pick == QUIT:
        return None
    return creature.moves[int(pick) - 1]


def play_match(console: Console, engine: BattleEngine, scheduler: RealtimeScheduler,
               choice: Creature) -> bool:
    """Run one session to the end. Returns True if the player wants a rematch."""
    snap = engine.start_session(choice)
    console.rule(f"{snap.player.name} vs {snap.opponent.name}")
    while engine.snapshot().phase == IN_BATTLE:
        snap = engine.snapshot()
        console.print(battle_view(snap))
        move = _choose_move(console, snap.player)
        if move is None:
            engine.reset_to_selection()
            console.print("[yellow]You forfeited the match.[/yellow]")
            return True
        engine.submit_player_move(move)
        # Returns once the opponent has answered (or the match ended)
        scheduler.run_until_idle()
    snap = engine.snapshot()
    if snap.phase == CONCLUDED:
        console.print(battle_view(snap))
    again = Confirm.ask("Play again?", default=True, console=console)
    engine.reset_to_selection()
    return again


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    if args.log_level:
        settings.data.log_level = args.log_level
    if args.no_color:
        settings.data.color = False
    settings.apply_logging()

    console = Console(no_color=not settings.data.color)
    try:
        roster = load_roster()
    except PokeduelError as e:
        logger.error("RosterInvalid", error=str(e))
        console.print(f"[red]Cannot start: {e}[/red]")
        return 1

    seed = args.seed if args.seed is not None else settings.data.seed
    timings = EngineTimings(0, 0, 0, 0) if args.fast else EngineTimings.from_settings(settings.data)
    scheduler = RealtimeScheduler()
    engine = BattleEngine(roster, scheduler=scheduler, rng=random.Random(seed), timings=timings)
    engine.subscribe(LogPrinter(console))

    console.rule(f"[bold red]Pokemon Battle[/bold red] v{__version__}")
    try:
        while True:
            choice = _choose_creature(console, engine.list_roster())
            if choice is None:
                break
            if not play_match(console, engine, scheduler, choice):
                break
    except (KeyboardInterrupt, EOFError):
        console.print()
    engine.reset_to_selection()
    console.print("Goodbye!")
    return 0
