"""Battle math: type matchups, accuracy, critical hits and damage resolution.

Every random draw goes through an injected :class:`RandomSource` so callers can
seed (``random.Random(42)``) or script the rolls.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Protocol, Sequence, TypeVar

from pokeduel.core.types import STATUS
from .models import Creature, Move

T = TypeVar("T")

EffectivenessTag = Literal["super", "weak", ""]

SUPER_EFFECTIVE: EffectivenessTag = "super"
NOT_VERY_EFFECTIVE: EffectivenessTag = "weak"
NEUTRAL: EffectivenessTag = ""

# Attacking type -> defending types it hits hard / poorly.
# Asymmetric on purpose: water lists electric as weak, electric does not list water.
TYPE_CHART: Dict[str, Dict[str, List[str]]] = {
    "fire":     {"strong": ["grass"], "weak": ["water"]},
    "water":    {"strong": ["fire"],  "weak": ["grass", "electric"]},
    "grass":    {"strong": ["water"], "weak": ["fire"]},
    "electric": {"strong": ["water"], "weak": []},
    "normal":   {"strong": [],        "weak": []},
}

POWER_SCALE = 0.8
VARIANCE_RANGE = (85, 100)
CRIT_CHANCE = 1 / 16
CRIT_MULTIPLIER = 1.5
HEAL_AMOUNT = 20


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the engine draws from."""
    def random(self) -> float: ...
    def randint(self, a: int, b: int) -> int: ...
    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass(frozen=True)
class Resolution:
    damage: int
    effectiveness: EffectivenessTag
    is_critical: bool


def lookup(move_type: str, defender_type: str) -> tuple[float, EffectivenessTag]:
    if move_type == STATUS:
        return 1.0, NEUTRAL
    row = TYPE_CHART.get(move_type)
    if row is None:
        return 1.0, NEUTRAL
    if defender_type in row["strong"]:
        return 2.0, SUPER_EFFECTIVE
    if defender_type in row["weak"]:
        return 0.5, NOT_VERY_EFFECTIVE
    return 1.0, NEUTRAL


def effectiveness(move_type: str, defender_type: str) -> float:
    """Multiplier for ``move_type`` hitting a ``defender_type`` creature; unknown types are neutral."""
    return lookup(move_type, defender_type)[0]


def roll_variance(rng: RandomSource) -> float:
    lo, hi = VARIANCE_RANGE
    return rng.randint(lo, hi) / 100


def is_critical(rng: RandomSource) -> bool:
    return rng.random() < CRIT_CHANCE


def accuracy_check(move: Move, rng: RandomSource) -> bool:
    """True when the move connects. Draws once from [0, 100)."""
    draw = rng.random() * 100
    if move.accuracy <= 0:
        return False
    return not draw > move.accuracy


def resolve(move: Move, attacker: Creature, defender: Creature, rng: RandomSource) -> Resolution:
    """Compute one hit. Variance is drawn before the critical roll."""
    base = math.floor(move.power * POWER_SCALE)
    multiplier, tag = lookup(move.type, defender.type)
    variance = roll_variance(rng)
    crit = is_critical(rng)
    if crit:
        multiplier *= CRIT_MULTIPLIER
    damage = math.floor(base * multiplier * variance)
    if move.power == 0:
        damage = 0
    return Resolution(damage=damage, effectiveness=tag, is_critical=crit)


__all__ = [
    "TYPE_CHART","RandomSource","Resolution","EffectivenessTag",
    "SUPER_EFFECTIVE","NOT_VERY_EFFECTIVE","NEUTRAL","HEAL_AMOUNT",
    "lookup","effectiveness","roll_variance","is_critical","accuracy_check","resolve",
]
