import logging

import pytest

from mechfight import cli


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, tmp_path):
    # Keep the root logger and the user's config file out of these tests.
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)
    monkeypatch.setattr(cli, "default_config_path", lambda: tmp_path / "no-config.yaml")


def run(tmp_path, *argv):
    return cli.main(["--data-dir", str(tmp_path / "loadouts"), *argv])


def test_list_shows_builtin_loadouts(tmp_path, capsys):
    assert run(tmp_path, "list") == 0
    out = capsys.readouterr().out
    assert "1. Gouf Custom (built-in)" in out
    assert "Zaku II (built-in)" in out


def test_show_prints_stat_sheet(tmp_path, capsys):
    assert run(tmp_path, "show", "Zaku II") == 0
    out = capsys.readouterr().out
    assert "Gundam: Zaku II | Pilot: Char Aznable" in out
    assert "Heat Hawk" in out


def test_mirror_battle_without_variance(tmp_path, capsys):
    code = run(tmp_path, "battle", "Zaku II", "--mirror", "--variance", "0", "--pilot", "Amuro")
    assert code == 0
    out = capsys.readouterr().out
    assert "Zaku II (Enemy)" in out
    assert "Victory: Amuro's Zaku II wins the battle in 6 rounds!" in out


def test_seeded_battle_is_reproducible(tmp_path, capsys):
    args = ("battle", "Gouf Custom", "Gundam Barbatos", "--seed", "11", "--strategy", "aggressive")
    assert run(tmp_path, *args) == 0
    first = capsys.readouterr().out
    assert run(tmp_path, *args) == 0
    second = capsys.readouterr().out
    assert first == second
    assert "Victory:" in first or "Draw after" in first


def test_random_opponent_when_none_given(tmp_path, capsys):
    assert run(tmp_path, "battle", "Wing Gundam Zero", "--seed", "4") == 0
    out = capsys.readouterr().out
    assert "Enemy Loadout:" in out


def test_battle_from_file_path(tmp_path, capsys):
    path = tmp_path / "dummy.yaml"
    path.write_text("name: Dummy\nweapons:\n  - name: Stick\n    attack_power: 1\n", encoding="utf-8")
    assert run(tmp_path, "battle", str(path), "Zaku II", "--variance", "0") == 0
    assert "Char Aznable's Zaku II wins" in capsys.readouterr().out


def test_unknown_loadout_exits_with_input_error(tmp_path, capsys):
    assert run(tmp_path, "show", "Nu Gundam") == 2
    assert "No loadout named 'Nu Gundam'" in capsys.readouterr().err


def test_mirror_and_opponent_together_rejected(tmp_path, capsys):
    assert run(tmp_path, "battle", "Zaku II", "Gouf Custom", "--mirror") == 2


def test_precondition_failure_aborts_battle(tmp_path, capsys):
    path = tmp_path / "drained.yaml"
    path.write_text("name: Drained\nenergy: 0\n", encoding="utf-8")
    assert run(tmp_path, "battle", str(path), "Zaku II") == 1
    assert "Battle aborted" in capsys.readouterr().out


def test_stalemate_aborts_battle(tmp_path, capsys):
    path = tmp_path / "pacifist.yaml"
    path.write_text("name: Pacifist\n", encoding="utf-8")
    code = run(tmp_path, "battle", str(path), "--mirror", "--max-rounds", "3", "--strategy", "defensive")
    assert code == 1
    assert "No winner after 3 rounds" in capsys.readouterr().out


PLATED_LOADOUT = """\
name: Plated
armour: 100
weapons:
  - name: Rifle
    attack_power: 100
system_upgrades:
  - name: Plate
    armour_boost: 50
"""


def test_upgrade_armour_only_drains_when_asked(tmp_path, capsys):
    path = tmp_path / "plated.yaml"
    path.write_text(PLATED_LOADOUT, encoding="utf-8")
    base = ("battle", str(path), "--mirror", "--variance", "0", "--strategy", "defensive")

    assert run(tmp_path, *base, "--max-rounds", "5") == 1
    assert "No winner after 5 rounds" in capsys.readouterr().out

    assert run(tmp_path, *base, "--drain-upgrade-armour") == 0
    assert "Draw after 2 rounds." in capsys.readouterr().out


def test_invalid_config_exits_with_input_error(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("battle:\n  variance: 3\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg), "list"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_saved_user_loadout_is_listed(tmp_path, capsys):
    from mechfight.loadouts import LoadoutRepository
    from mechfight.models import Mech, Weapon

    LoadoutRepository(tmp_path / "loadouts").save(Mech("Acguy", weapons=[Weapon("Claw", 30)]))
    assert run(tmp_path, "list") == 0
    assert "5. Acguy" in capsys.readouterr().out


def test_verbosity_flags_pick_console_level(tmp_path, monkeypatch):
    levels = []
    monkeypatch.setattr(
        cli, "configure_logging", lambda default_level, log_file=None: levels.append(default_level)
    )
    for flags in ((), ("--verbose",), ("--debug",)):
        assert run(tmp_path, *flags, "list") == 0
    assert levels == [logging.WARNING, logging.INFO, logging.DEBUG]
