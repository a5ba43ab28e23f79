from rich.console import Console

from pokeduel import cli
from pokeduel.battle.session import IDLE_SNAPSHOT
from pokeduel.core.logging import logger


def test_parser_flags():
    args = cli.build_parser().parse_args(["--seed", "5", "--fast", "--no-color"])
    assert args.seed == 5 and args.fast and args.no_color
    assert args.log_level is None


def test_log_printer_prints_only_new_lines(engine_factory, by_name):
    console = Console(record=True, width=100, color_system=None)
    printer = cli.LogPrinter(console)
    engine = engine_factory()
    engine.subscribe(printer)
    engine.start_session(by_name("Squirtle"))
    printer(engine.snapshot())  # repeated snapshot adds nothing
    engine.reset_to_selection()
    printer(IDLE_SNAPSHOT)
    out = console.export_text()
    assert out.count("Battle start!") == 1
    assert printer.printed == 0


def test_full_game_loop(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("HOME", str(tmp_path))
    picks = {"creature": iter(["3", cli.QUIT])}

    def fake_ask(prompt, **kwargs):
        if prompt.startswith("Pick"):
            return next(picks["creature"])
        return "2"  # second move every turn

    monkeypatch.setattr(cli.Prompt, "ask", staticmethod(fake_ask))
    monkeypatch.setattr(cli.Confirm, "ask", staticmethod(lambda *a, **k: True))
    try:
        assert cli.run(["--fast", "--seed", "3", "--no-color"]) == 0
    finally:
        logger.set_level("INFO")
        logger.color = True
    out = capsys.readouterr().out
    assert "Bulbasaur used Vine Whip!" in out
    assert "fainted" in out
    assert "Goodbye!" in out
