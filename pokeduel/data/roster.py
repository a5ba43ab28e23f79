"""Runtime loader for the creature roster.

Reads ``pokeduel/assets/roster.json`` and turns it into immutable
:class:`~pokeduel.battle.models.Creature` records. Malformed entries are a
data defect and fail loudly here, never mid-battle.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pokeduel.core.errors import DataLoadError, ValidationError
from pokeduel.core.logging import logger
from pokeduel.core.paths import ROSTER
from pokeduel.core.types import ELEMENT_TYPES, MOVE_TYPES
from pokeduel.battle.models import Creature, Move, Sprites

KNOWN_EFFECTS = {"atk_down"}


def _require(raw: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in raw:
        raise ValidationError(f"{where}: missing '{key}'")
    val = raw[key]
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(val, kind) or (kind is int and isinstance(val, bool)):
        raise ValidationError(f"{where}: '{key}' must be {kind.__name__}, got {type(val).__name__}")
    return val


def parse_move(raw: Dict[str, Any], where: str = "move") -> Move:
    if not isinstance(raw, dict):
        raise ValidationError(f"{where}: expected an object")
    name = _require(raw, "name", str, where)
    where = f"{where} '{name}'"
    mtype = _require(raw, "type", str, where)
    if mtype not in MOVE_TYPES:
        raise ValidationError(f"{where}: unknown type '{mtype}'")
    power = _require(raw, "power", int, where)
    if power < 0:
        raise ValidationError(f"{where}: power must be >= 0")
    if mtype == "status" and power != 0:
        raise ValidationError(f"{where}: status moves have power 0")
    accuracy = _require(raw, "accuracy", int, where)
    if not 0 <= accuracy <= 100:
        raise ValidationError(f"{where}: accuracy must be within 0..100")
    effect = raw.get("effect")
    if effect is not None and effect not in KNOWN_EFFECTS:
        raise ValidationError(f"{where}: unknown effect '{effect}'")
    heal = raw.get("heal", False)
    if not isinstance(heal, bool):
        raise ValidationError(f"{where}: 'heal' must be a boolean")
    return Move(name=name, type=mtype, power=power, accuracy=accuracy, effect=effect, heal=heal)


def parse_creature(raw: Dict[str, Any], where: str = "creature") -> Creature:
    if not isinstance(raw, dict):
        raise ValidationError(f"{where}: expected an object")
    cid = _require(raw, "id", int, where)
    name = _require(raw, "name", str, where)
    where = f"{where} '{name}'"
    ctype = _require(raw, "type", str, where)
    if ctype not in ELEMENT_TYPES:
        raise ValidationError(f"{where}: unknown type '{ctype}'")
    max_hp = _require(raw, "max_hp", int, where)
    if max_hp <= 0:
        raise ValidationError(f"{where}: max_hp must be positive")
    speed = _require(raw, "speed", int, where)
    sprites_raw = _require(raw, "sprites", dict, where)
    sprites = Sprites(
        front=_require(sprites_raw, "front", str, f"{where} sprites"),
        back=_require(sprites_raw, "back", str, f"{where} sprites"),
    )
    moves_raw = _require(raw, "moves", list, where)
    if not moves_raw:
        raise ValidationError(f"{where}: needs at least one move")
    moves = tuple(parse_move(m, f"{where} move #{i}") for i, m in enumerate(moves_raw))
    return Creature(id=cid, name=name, type=ctype, max_hp=max_hp, speed=speed,
                    sprites=sprites, moves=moves)


def parse_roster(raw: Any) -> Tuple[Creature, ...]:
    if not isinstance(raw, list):
        raise ValidationError("roster root must be a list")
    creatures = [parse_creature(c, f"creature #{i}") for i, c in enumerate(raw)]
    seen: Dict[int, str] = {}
    for c in creatures:
        if c.id in seen:
            raise ValidationError(f"duplicate creature id {c.id} ({seen[c.id]}, {c.name})")
        seen[c.id] = c.name
    return tuple(creatures)


def _read(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DataLoadError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise DataLoadError(str(path), f"invalid JSON: {e}") from e


@lru_cache(maxsize=None)
def _load_cached(path: Path) -> Tuple[Creature, ...]:
    roster = parse_roster(_read(path))
    logger.debug("RosterLoaded", path=str(path), creatures=len(roster))
    return roster


def load_roster(path: Optional[Path] = None) -> Tuple[Creature, ...]:
    return _load_cached(Path(path) if path else ROSTER)


def list_roster() -> Tuple[Creature, ...]:
    """The bundled roster, in file order."""
    return load_roster()


def find_by_name(name: str) -> Optional[Creature]:
    name_lower = name.lower()
    for c in list_roster():
        if c.name.lower() == name_lower:
            return c
    return None


def find_move(creature: Creature, name: str) -> Optional[Move]:
    name_lower = name.lower()
    for m in creature.moves:
        if m.name.lower() == name_lower:
            return m
    return None


__all__ = [
    "parse_move","parse_creature","parse_roster","load_roster","list_roster",
    "find_by_name","find_move",
]
