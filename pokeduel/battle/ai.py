from __future__ import annotations
from typing import Protocol

from .mechanics import RandomSource
from .models import Creature, Move

class OpponentPolicy(Protocol):
    def choose(self, creature: Creature, rng: RandomSource) -> Move: ...

def choose_move(creature: Creature, rng: RandomSource) -> Move:
    if not creature.moves:
        raise ValueError(f"{creature.name} has no moves")
    return rng.choice(creature.moves)

class RandomPolicy:
    """Uniform pick from the creature's fixed move list."""
    def choose(self, creature: Creature, rng: RandomSource) -> Move:
        return choose_move(creature, rng)
