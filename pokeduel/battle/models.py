"""Static reference data: creatures, their moves and sprite handles."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

Phase = Literal["selecting", "in_battle", "concluded"]
Side = Literal["player", "opponent"]

SELECTING: Phase = "selecting"
IN_BATTLE: Phase = "in_battle"
CONCLUDED: Phase = "concluded"

PLAYER: Side = "player"
OPPONENT: Side = "opponent"

def other_side(side: Side) -> Side:
    return OPPONENT if side == PLAYER else PLAYER

@dataclass(frozen=True)
class Move:
    name: str
    type: str  # normal | fire | water | grass | electric | status
    power: int = 0
    accuracy: int = 100
    # Cosmetic tag carried from the roster ("atk_down"); no stat stages exist
    effect: Optional[str] = None
    heal: bool = False

    @property
    def is_status(self) -> bool:
        return self.power == 0

@dataclass(frozen=True)
class Sprites:
    front: str
    back: str

@dataclass(frozen=True)
class Creature:
    id: int
    name: str
    type: str
    max_hp: int
    speed: int
    sprites: Sprites
    moves: Tuple[Move, ...] = field(default_factory=tuple)

    def has_move(self, move: Move) -> bool:
        return move in self.moves

__all__ = [
    "Phase","Side","SELECTING","IN_BATTLE","CONCLUDED","PLAYER","OPPONENT",
    "other_side","Move","Sprites","Creature",
]
