from rich.console import Console

from pokeduel.battle.render import (
    battle_view, hp_bar, hp_color, move_table, roster_table, status_line,
)
from pokeduel.battle.session import IDLE_SNAPSHOT


def _render(renderable) -> str:
    console = Console(record=True, width=120, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_hp_color_thresholds():
    assert hp_color(100, 100) == "green"
    assert hp_color(50, 100) == "green"
    assert hp_color(49, 100) == "yellow"
    assert hp_color(20, 100) == "yellow"
    assert hp_color(19, 100) == "red"
    assert hp_color(0, 100) == "red"


def test_hp_bar_fill():
    assert hp_bar(100, 100) == "[green]" + "█" * 20 + "[/green]"
    assert hp_bar(0, 100) == "[red]" + "░" * 20 + "[/red]"
    assert hp_bar(60, 120, width=10).count("█") == 5
    assert hp_bar(5, 0) == "[red]FAINTED[/red]"


def test_battle_view_shows_both_sides(engine_factory, by_name, scripted):
    engine = engine_factory(rng=scripted(choices=[by_name("Pikachu")]))
    snap = engine.start_session(by_name("Bulbasaur"))
    out = _render(battle_view(snap))
    assert "Bulbasaur" in out and "Pikachu" in out
    assert "HP: 130/130" in out and "HP: 100/100" in out
    assert "Battle start! Bulbasaur vs Pikachu!" in out
    assert "What will you do?" in out


def test_idle_view_and_status():
    assert "No battle in progress." in _render(battle_view(IDLE_SNAPSHOT))
    assert status_line(IDLE_SNAPSHOT).plain == "Choose your Pokemon"


def test_tables_list_everything(roster, by_name):
    out = _render(roster_table(roster))
    for c in roster:
        assert c.name in out
    moves = _render(move_table(by_name("Charmander")))
    assert "Growl" in moves and "Fire Fang" in moves and "85%" in moves
