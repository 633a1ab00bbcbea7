import random

import pytest

from mechfight.combat import (
    AggressiveStrategy,
    BalancedStrategy,
    BattleResult,
    BattleSimulator,
    DefensiveStrategy,
    VarianceRoller,
)
from mechfight.config import FIRST_STRIKE, BattleConfig
from mechfight.errors import PreconditionError, StalemateError
from mechfight.models import Mech, SystemUpgrade, Weapon


def exact_simulator(**config) -> BattleSimulator:
    # Zero variance keeps the arithmetic exact.
    return BattleSimulator(rng=random.Random(0), config=BattleConfig(variance=0.0, **config))


def gunner(name: str, attack: int, armour: int = 500, energy: int = 100, cost: int = 0) -> Mech:
    return Mech(
        name=name,
        pilot=f"{name} Pilot",
        energy=energy,
        armour=armour,
        weapons=[Weapon(f"{name} Rifle", attack, cost)],
    )


def test_identical_mechs_balanced_player_wins_round_ten():
    a = gunner("A", 50)
    b = gunner("B", 50)
    sim = exact_simulator()

    result = sim.simulate(a, b, BalancedStrategy())

    # A hits for 55 - 0, B answers for 50 - 5 every round.
    assert result.winner is a
    assert result.rounds == 10
    assert result.is_draw is False
    assert b.total_armour == 0
    assert a.total_armour == 500 - 45 * 10


def test_first_strike_resolution_skips_the_losers_last_attack():
    a = gunner("A", 50)
    b = gunner("B", 50)
    result = exact_simulator(resolution=FIRST_STRIKE).simulate(a, b, BalancedStrategy())

    assert result.winner is a
    assert result.rounds == 10
    assert a.total_armour == 500 - 45 * 9


def test_simultaneous_defeat_is_a_draw():
    a = gunner("A", 95, armour=100)
    b = gunner("B", 105, armour=100)

    result = exact_simulator().simulate(a, b, BalancedStrategy())

    assert result.is_draw is True
    assert result.winner is None
    assert result.rounds == 1
    assert a.defeated and b.defeated


def test_first_strike_breaks_the_tie_for_the_first_mech():
    a = gunner("A", 95, armour=100)
    b = gunner("B", 105, armour=100)

    result = exact_simulator(resolution=FIRST_STRIKE).simulate(a, b, BalancedStrategy())

    assert result.winner is a
    assert result.rounds == 1
    assert a.total_armour == 100


def test_second_mech_can_win():
    a = gunner("A", 20)
    b = gunner("B", 200)
    result = exact_simulator().simulate(a, b, AggressiveStrategy())

    # B starts on 495 armour and takes 30 per round; A takes 200.
    assert result.winner is b
    assert result.rounds == 3


@pytest.mark.parametrize(
    "a_kwargs, b_kwargs",
    [
        ({"energy": 0}, {}),
        ({}, {"armour": 0}),
    ],
)
def test_non_positive_stats_fail_before_any_round(a_kwargs, b_kwargs):
    a = gunner("A", 50, **a_kwargs)
    b = gunner("B", 50, **b_kwargs)
    sim = exact_simulator()

    with pytest.raises(PreconditionError):
        sim.simulate(a, b, BalancedStrategy())

    # Strategy never ran and nothing was logged.
    assert len(a.weapons) == 1
    assert sim.log.events() == []


def test_upgrades_count_towards_preconditions():
    a = gunner("A", 50, armour=100)
    a.add_system_upgrade(SystemUpgrade("Cracked Plate", armour_boost=-100))
    with pytest.raises(PreconditionError):
        exact_simulator().simulate(a, gunner("B", 50), DefensiveStrategy())


def test_same_seed_same_outcome():
    def run(seed: int):
        a = Mech("Zaku II", armour=540, weapons=[Weapon("MG", 45, 5), Weapon("Hawk", 60, 15)],
                 system_upgrades=[SystemUpgrade("Shield", defense_boost=20)])
        b = Mech("Gouf", armour=560, weapons=[Weapon("Sword", 70, 20), Weapon("Rod", 40, 10)],
                 system_upgrades=[SystemUpgrade("Frame", defense_boost=25)])
        sim = BattleSimulator(rng=random.Random(seed))
        result = sim.simulate(a, b, BalancedStrategy())
        winner = result.winner.name if result.winner else None
        return winner, result.rounds, [e.message for e in sim.log.events()]

    assert run(2024) == run(2024)


def test_seed_from_config_drives_randomness():
    def run():
        sim = BattleSimulator(config=BattleConfig(seed=99))
        result = sim.simulate(gunner("A", 60), gunner("B", 60), BalancedStrategy())
        return result.rounds, [e.data["damage"] for e in sim.log.events("attack")]

    assert run() == run()


def test_weapon_without_energy_deals_no_damage():
    a = gunner("A", 500, cost=150)
    b = gunner("B", 100)
    result = exact_simulator().simulate(a, b, DefensiveStrategy())

    # A's only weapon never fires; the strategy gave A 10 defense.
    assert result.winner is b
    assert result.rounds == 6
    assert b.total_armour == 500


def test_round_ceiling_raises_stalemate():
    a = gunner("A", 0)
    b = gunner("B", 0)
    sim = exact_simulator(max_rounds=5)

    with pytest.raises(StalemateError) as excinfo:
        sim.simulate(a, b, AggressiveStrategy())
    assert excinfo.value.rounds == 5
    # A only chips 10 armour a round off B, B deals nothing.
    assert len(sim.log.events("attack")) == 10



def plated_target() -> Mech:
    return Mech(
        name="Plated",
        pilot="Plated Pilot",
        armour=100,
        system_upgrades=[SystemUpgrade("Plate", armour_boost=50)],
    )


def test_upgrade_armour_survives_battle_damage_by_default():
    a = plated_target()
    b = gunner("B", 100)
    sim = exact_simulator(max_rounds=5)

    # Defensive: A gains 10 defense, B drops to 95 attack, so A loses 85 a round.
    with pytest.raises(StalemateError):
        sim.simulate(a, b, DefensiveStrategy())
    assert a.armour == 0
    assert a.system_upgrades[0].armour_boost == 50
    assert a.total_armour == 50


def test_drain_upgrade_armour_lets_plated_mech_fall():
    a = plated_target()
    b = gunner("B", 100)
    result = exact_simulator(drain_upgrade_armour=True).simulate(a, b, DefensiveStrategy())

    # 100 base armour takes 85 then 15, the last 70 strips the 50-point plate.
    assert result.winner is b
    assert result.rounds == 2
    assert a.system_upgrades[0].armour_boost == 0


def test_log_records_defeat_and_victory(caplog):
    a = gunner("A", 600)
    b = gunner("B", 10)
    sim = exact_simulator()

    with caplog.at_level("INFO"):
        result = sim.simulate(a, b, BalancedStrategy())

    assert result.rounds == 1
    defeats = sim.log.events("defeat")
    assert [e.message for e in defeats] == ["B was defeated by A."]
    assert sim.log.events("victory")[0].data["winner"] == "A"
    assert "Winner: A (Pilot: A Pilot)" in caplog.text
    assert "BalancedStrategy" in caplog.text


def test_attack_result_details():
    a = gunner("A", 80)
    b = gunner("B", 10)
    b.add_system_upgrade(SystemUpgrade("Plate", defense_boost=30))

    outcome = exact_simulator().attack(a, b)

    assert outcome.attack == 80
    assert outcome.defense == 30
    assert outcome.damage == 50
    assert outcome.armour_before == 500
    assert outcome.armour_after == 450
    assert outcome.defeated is False


def test_defense_above_attack_deals_zero_damage():
    a = gunner("A", 10)
    b = gunner("B", 10)
    b.add_system_upgrade(SystemUpgrade("Fortress", defense_boost=100))

    outcome = exact_simulator().attack(a, b)
    assert outcome.damage == 0
    assert b.total_armour == 500


def test_battle_result_invariants():
    mech = gunner("A", 1)
    assert BattleResult.victory(mech, 3).winner is mech
    assert BattleResult.draw(2).is_draw

    with pytest.raises(ValueError):
        BattleResult(winner=None, rounds=1, is_draw=False)
    with pytest.raises(ValueError):
        BattleResult(winner=mech, rounds=1, is_draw=True)
    with pytest.raises(ValueError):
        BattleResult(winner=mech, rounds=0)


def test_injected_roller_supplies_the_randomness():
    roller = VarianceRoller(spread=0.0, rng=random.Random(1))
    sim = BattleSimulator(config=BattleConfig(variance=0.5), roller=roller)
    assert sim.roller is roller
    assert sim.rng is roller.rng

    outcome = sim.attack(gunner("A", 80), gunner("B", 10))
    assert outcome.attack == 80


def test_rng_and_roller_together_are_rejected():
    with pytest.raises(ValueError):
        BattleSimulator(rng=random.Random(0), roller=VarianceRoller(spread=0.0))
