"""Mutable per-match state and the immutable snapshots published from it.

Only :class:`pokeduel.battle.engine.BattleEngine` mutates a BattleSession;
everything else sees :class:`SessionSnapshot` copies.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import Creature, Phase, Side, SELECTING, IN_BATTLE, CONCLUDED, PLAYER, OPPONENT

@dataclass(frozen=True)
class AttackAnimation:
    move_type: str
    target: Side

@dataclass(frozen=True)
class SessionSnapshot:
    phase: Phase
    turn: Optional[Side] = None
    player_health: Optional[int] = None
    opponent_health: Optional[int] = None
    log: Tuple[str, ...] = ()
    busy: bool = False
    pending_attack_animation: Optional[AttackAnimation] = None
    player: Optional[Creature] = None
    opponent: Optional[Creature] = None

    @property
    def winner(self) -> Optional[Side]:
        if self.phase != CONCLUDED:
            return None
        return PLAYER if (self.opponent_health or 0) <= 0 else OPPONENT

    @property
    def accepts_player_move(self) -> bool:
        return self.phase == IN_BATTLE and self.turn == PLAYER and not self.busy

IDLE_SNAPSHOT = SessionSnapshot(phase=SELECTING)

@dataclass
class BattleSession:
    player: Creature
    opponent: Creature
    player_hp: int = -1
    opponent_hp: int = -1
    turn: Side = PLAYER
    log: List[str] = field(default_factory=list)
    busy: bool = False
    phase: Phase = IN_BATTLE
    attack_animation: Optional[AttackAnimation] = None

    def __post_init__(self):
        if self.player_hp < 0:
            self.player_hp = self.player.max_hp
        if self.opponent_hp < 0:
            self.opponent_hp = self.opponent.max_hp

    def creature(self, side: Side) -> Creature:
        return self.player if side == PLAYER else self.opponent

    def health(self, side: Side) -> int:
        return self.player_hp if side == PLAYER else self.opponent_hp

    def set_health(self, side: Side, value: int) -> int:
        """Store ``value`` clamped to [0, max_hp]; returns the stored amount."""
        clamped = max(0, min(self.creature(side).max_hp, int(value)))
        if side == PLAYER:
            self.player_hp = clamped
        else:
            self.opponent_hp = clamped
        return clamped

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            turn=self.turn,
            player_health=self.player_hp,
            opponent_health=self.opponent_hp,
            log=tuple(self.log),
            busy=self.busy,
            pending_attack_animation=self.attack_animation,
            player=self.player,
            opponent=self.opponent,
        )

__all__ = ["AttackAnimation","SessionSnapshot","IDLE_SNAPSHOT","BattleSession"]
