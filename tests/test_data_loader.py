import json

import pytest

from pokeduel.core.errors import DataLoadError, ValidationError
from pokeduel.data.roster import (
    find_by_name, find_move, list_roster, load_roster, parse_move, parse_roster,
)


def _creature(**overrides):
    raw = {
        "id": 1, "name": "Eevee", "type": "normal", "max_hp": 90, "speed": 11,
        "sprites": {"front": "eevee-f.png", "back": "eevee-b.png"},
        "moves": [{"name": "Tackle", "type": "normal", "power": 15, "accuracy": 95}],
    }
    raw.update(overrides)
    return raw


def test_bundled_roster():
    roster = list_roster()
    assert [c.name for c in roster] == ["Charmander", "Squirtle", "Bulbasaur", "Pikachu"]
    assert all(len(c.moves) == 4 for c in roster)
    assert load_roster() is roster  # cached


def test_bundled_move_flags():
    bulbasaur = find_by_name("bulbasaur")
    assert find_move(bulbasaur, "Leech Seed").heal is True
    growl = find_move(find_by_name("CHARMANDER"), "growl")
    assert growl.type == "status" and growl.power == 0 and growl.effect == "atk_down"
    assert find_by_name("Mewtwo") is None


def test_pikachu_stats():
    pikachu = find_by_name("Pikachu")
    assert (pikachu.type, pikachu.max_hp, pikachu.speed) == ("electric", 100, 15)
    assert pikachu.sprites.back.endswith("/back/25.png")


@pytest.mark.parametrize("bad", [
    {"type": "shadow"},
    {"max_hp": 0},
    {"max_hp": "lots"},
    {"moves": []},
    {"sprites": {"front": "x.png"}},
])
def test_invalid_creature_rejected(bad):
    with pytest.raises(ValidationError):
        parse_roster([_creature(**bad)])


@pytest.mark.parametrize("bad", [
    {"name": "Glare", "type": "dark", "power": 0, "accuracy": 100},
    {"name": "Big Hit", "type": "normal", "power": 20, "accuracy": 101},
    {"name": "Oops", "type": "normal", "power": -5, "accuracy": 90},
    {"name": "Odd", "type": "status", "power": 10, "accuracy": 90},
    {"name": "Harden", "type": "status", "power": 0, "accuracy": 100, "effect": "def_up"},
    {"name": "Rest", "type": "status", "power": 0, "accuracy": 100, "heal": "yes"},
    {"name": "Lucky", "type": "normal", "power": True, "accuracy": 100},
])
def test_invalid_move_rejected(bad):
    with pytest.raises(ValidationError):
        parse_move(bad)


def test_duplicate_ids_rejected():
    with pytest.raises(ValidationError):
        parse_roster([_creature(), _creature(name="Eevee Two")])


def test_roster_root_must_be_list():
    with pytest.raises(ValidationError):
        parse_roster({"creatures": []})


def test_load_from_custom_file(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps([_creature(), _creature(id=2, name="Ditto")]))
    roster = load_roster(path)
    assert [c.name for c in roster] == ["Eevee", "Ditto"]


def test_unreadable_files(tmp_path):
    with pytest.raises(DataLoadError):
        load_roster(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(DataLoadError) as exc:
        load_roster(broken)
    assert "invalid JSON" in str(exc.value)
