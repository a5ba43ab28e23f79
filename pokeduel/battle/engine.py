"""Battle engine: turn executor and match state machine.

One :class:`BattleEngine` owns at most one :class:`BattleSession`. Every delay
in a turn (wind-up, hit animation, settle, opponent pause) is a callback on the
engine's :class:`Scheduler`; the engine tracks those handles so a reset can
discard them before they fire against a torn-down session.
"""
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from pokeduel.core.errors import ValidationError
from pokeduel.core.logging import logger
from pokeduel.system.settings import SettingsData
from .ai import OpponentPolicy, RandomPolicy
from .mechanics import (
    HEAL_AMOUNT, NOT_VERY_EFFECTIVE, SUPER_EFFECTIVE, RandomSource, Resolution,
    accuracy_check, resolve,
)
from .models import (
    CONCLUDED, IN_BATTLE, OPPONENT, PLAYER, Creature, Move, Side, other_side,
)
from .scheduler import Scheduler, TimerHandle
from .session import IDLE_SNAPSHOT, AttackAnimation, BattleSession, SessionSnapshot

Listener = Callable[[SessionSnapshot], None]


@dataclass(frozen=True)
class EngineTimings:
    """Delays in seconds between the observable steps of a turn."""
    pre_resolution: float = 0.5
    hit_animation: float = 0.6
    post_resolution: float = 1.0
    opponent: float = 1.0

    @classmethod
    def from_settings(cls, data: SettingsData) -> "EngineTimings":
        return cls(
            pre_resolution=data.pre_resolution_delay,
            hit_animation=data.hit_animation_delay,
            post_resolution=data.post_resolution_delay,
            opponent=data.opponent_delay,
        )


def damage_message(defender: Creature, result: Resolution) -> str:
    msg = f"{defender.name} took {result.damage} damage!"
    if result.is_critical:
        msg += " Critical Hit!"
    if result.effectiveness == SUPER_EFFECTIVE:
        msg += " It's super effective!"
    elif result.effectiveness == NOT_VERY_EFFECTIVE:
        msg += " It's not very effective..."
    return msg


class BattleEngine:
    def __init__(self, roster: Optional[Iterable[Creature]] = None, *,
                 scheduler: Optional[Scheduler] = None,
                 rng: Optional[RandomSource] = None,
                 policy: Optional[OpponentPolicy] = None,
                 timings: Optional[EngineTimings] = None):
        if roster is None:
            from pokeduel.data.roster import load_roster
            roster = load_roster()
        self.roster: Tuple[Creature, ...] = tuple(roster)
        self.scheduler = scheduler or Scheduler()
        self.rng: RandomSource = rng or random.Random()
        self.policy: OpponentPolicy = policy or RandomPolicy()
        self.timings = timings or EngineTimings()
        self._session: Optional[BattleSession] = None
        self._timers: List[TimerHandle] = []
        self._opponent_timer: Optional[TimerHandle] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Presentation-facing API
    # ------------------------------------------------------------------
    def list_roster(self) -> Tuple[Creature, ...]:
        return self.roster

    @property
    def session(self) -> Optional[BattleSession]:
        return self._session

    def snapshot(self) -> SessionSnapshot:
        return self._session.snapshot() if self._session else IDLE_SNAPSHOT

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every mutation."""
        self._listeners.append(listener)
        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return _unsubscribe

    def start_session(self, player_choice: Creature) -> SessionSnapshot:
        if not any(c.id == player_choice.id for c in self.roster):
            raise ValidationError(f"{player_choice.name} is not in the roster")
        candidates = [c for c in self.roster if c.id != player_choice.id]
        if not candidates:
            raise ValidationError("Roster needs at least two creatures to start a battle")
        if self._session is not None:
            self.reset_to_selection()
        opponent = self.rng.choice(candidates)
        s = BattleSession(player=player_choice, opponent=opponent)
        s.log.append(f"Battle start! {player_choice.name} vs {opponent.name}!")
        self._session = s
        logger.info("SessionStarted", player=player_choice.name, opponent=opponent.name)
        self._publish()
        return s.snapshot()

    def submit_player_move(self, move: Move) -> bool:
        """Queue the player's move; silently ignored outside the player's idle turn."""
        s = self._session
        if s is None or s.phase != IN_BATTLE or s.turn != PLAYER or s.busy:
            logger.debug("SubmissionIgnored", move=move.name,
                         phase=s.phase if s else "selecting",
                         turn=s.turn if s else None, busy=s.busy if s else False)
            return False
        if not s.player.has_move(move):
            logger.debug("SubmissionIgnored", move=move.name, reason="unknown_move")
            return False
        return self.execute_turn(move, s.player, s.opponent, True)

    def reset_to_selection(self) -> None:
        self._cancel_timers()
        had_session = self._session is not None
        self._session = None
        if had_session:
            logger.info("SessionReset")
        self._publish()

    # ------------------------------------------------------------------
    # Turn executor
    # ------------------------------------------------------------------
    def execute_turn(self, move: Move, attacker: Creature, defender: Creature,
                     attacker_is_player: bool) -> bool:
        s = self._session
        if s is None or s.phase != IN_BATTLE or s.busy:
            logger.debug("TurnRejected", move=move.name, attacker=attacker.name)
            return False
        side: Side = PLAYER if attacker_is_player else OPPONENT
        s.busy = True
        s.log.append(f"{attacker.name} used {move.name}!")
        logger.debug("TurnStarted", side=side, attacker=attacker.name, move=move.name)
        self._publish()
        self._later(self.timings.pre_resolution, self._after_wind_up, s, move, attacker, defender, side)
        return True

    def _after_wind_up(self, s: BattleSession, move: Move, attacker: Creature,
                       defender: Creature, side: Side):
        if not accuracy_check(move, self.rng):
            s.log.append(f"{attacker.name} missed!")
            logger.debug("MoveMissed", attacker=attacker.name, move=move.name)
            self._finish_turn(s, side)
            return
        s.attack_animation = AttackAnimation(move_type=move.type, target=other_side(side))
        self._publish()
        self._later(self.timings.hit_animation, self._after_hit, s, move, attacker, defender, side)

    def _after_hit(self, s: BattleSession, move: Move, attacker: Creature,
                   defender: Creature, side: Side):
        s.attack_animation = None
        self._publish()
        result = resolve(move, attacker, defender, self.rng)
        if result.damage > 0:
            target = other_side(side)
            remaining = s.set_health(target, s.health(target) - result.damage)
            s.log.append(damage_message(defender, result))
            logger.debug("DamageApplied", target=defender.name, damage=result.damage,
                         remaining=remaining, crit=result.is_critical,
                         effectiveness=result.effectiveness or "neutral")
            self._publish()
            self._evaluate(s)
        if move.heal:
            restored = s.set_health(side, s.health(side) + HEAL_AMOUNT)
            s.log.append(f"{attacker.name} restored health!")
            logger.debug("HealApplied", target=attacker.name, hp=restored)
            self._publish()
            self._evaluate(s)
        self._later(self.timings.post_resolution, self._finish_turn, s, side)

    def _finish_turn(self, s: BattleSession, side: Side):
        s.busy = False
        if s.phase == IN_BATTLE:
            s.turn = other_side(side)
            logger.debug("TurnHandoff", turn=s.turn)
        self._publish()
        self._evaluate(s)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def _evaluate(self, s: BattleSession):
        if s is not self._session or s.phase != IN_BATTLE:
            return
        if s.opponent_hp <= 0:
            self._conclude(s, f"{s.opponent.name} fainted! You win!", winner=PLAYER)
        elif s.player_hp <= 0:
            self._conclude(s, f"{s.player.name} fainted... You lose!", winner=OPPONENT)
        elif s.turn == OPPONENT and not s.busy and not self._opponent_pending():
            self._opponent_timer = self._later(self.timings.opponent, self._opponent_acts, s)

    def _conclude(self, s: BattleSession, message: str, winner: Side):
        s.phase = CONCLUDED
        s.log.append(message)
        if self._opponent_timer is not None:
            self._opponent_timer.cancel()
            self._opponent_timer = None
        logger.info("MatchConcluded", winner=winner, player=s.player.name, opponent=s.opponent.name)
        self._publish()

    def _opponent_pending(self) -> bool:
        return self._opponent_timer is not None and self._opponent_timer.active

    def _opponent_acts(self, s: BattleSession):
        self._opponent_timer = None
        if s.phase != IN_BATTLE or s.turn != OPPONENT or s.busy:
            return
        move = self.policy.choose(s.opponent, self.rng)
        self.execute_turn(move, s.opponent, s.player, False)

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------
    def _later(self, delay: float, step: Callable[..., None], s: BattleSession, *args) -> TimerHandle:
        self._timers = [h for h in self._timers if h.active]
        handle = self.scheduler.call_later(delay, self._run_step, step, s, *args)
        self._timers.append(handle)
        return handle

    def _run_step(self, step: Callable[..., None], s: BattleSession, *args):
        # Stale callbacks from a discarded session must not touch the new one
        if s is not self._session:
            return
        step(s, *args)

    def _cancel_timers(self):
        for h in self._timers:
            h.cancel()
        self._timers.clear()
        self._opponent_timer = None

    def _publish(self):
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)


__all__ = ["BattleEngine", "EngineTimings", "damage_message"]
