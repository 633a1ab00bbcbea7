import argparse
import dataclasses
import logging
import random
import sys
from pathlib import Path
from typing import Optional

from .combat import STRATEGIES, BattleResult, BattleSimulator, get_strategy
from .config import RESOLUTIONS, BattleConfig
from .errors import ConfigError, LoadoutError, PreconditionError, StalemateError
from .loadouts import LoadoutRepository
from .logging_config import configure_logging
from .models import Mech
from .paths import default_config_path

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BATTLE_ERROR = 1
EXIT_INPUT_ERROR = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="mechfight",
        description="Mech loadout manager and turn-based battle simulator.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a YAML config file overriding the defaults.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding user loadouts (defaults to the per-user data dir).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Show battle progress logs.")
    verbosity.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List available loadouts.")

    show = sub.add_parser("show", help="Print a loadout's stat sheet.")
    show.add_argument("loadout", help="Loadout name or path to a loadout file.")

    battle = sub.add_parser("battle", help="Simulate a battle between two mechs.")
    battle.add_argument("player", help="Your loadout name or file.")
    battle.add_argument("opponent", nargs="?", default=None, help="Opponent loadout name or file.")
    battle.add_argument("--mirror", action="store_true", help="Fight a copy of your own mech.")
    battle.add_argument("--pilot", default=None, help="Pilot name for your mech.")
    battle.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="balanced",
        help="Pre-battle strategy (default: balanced).",
    )
    battle.add_argument("--seed", type=int, default=None, help="Seed for reproducible battles.")
    battle.add_argument("--max-rounds", type=int, default=None, help="Round ceiling before a stalemate.")
    battle.add_argument("--variance", type=float, default=None, help="Randomness spread (0 disables).")
    battle.add_argument("--resolution", choices=RESOLUTIONS, default=None, help="How rounds are judged.")
    battle.add_argument(
        "--drain-upgrade-armour",
        action="store_true",
        default=None,
        help="Let damage past base armour wear down upgrade armour boosts.",
    )
    return parser.parse_args(argv)


def load_config(args) -> BattleConfig:
    path = args.config_path
    if path is None and default_config_path().exists():
        path = default_config_path()
    config = BattleConfig.load(user_path=path)

    overrides = {}
    if args.data_dir is not None:
        overrides["loadout_dir"] = args.data_dir
    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    for name in ("seed", "max_rounds", "variance", "resolution", "drain_upgrade_armour"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return dataclasses.replace(config, **overrides) if overrides else config


def resolve_mech(repo: LoadoutRepository, ref: str) -> Mech:
    """Load a mech from a file path or a loadout name known to the repository."""
    path = Path(ref)
    if path.is_file():
        return repo.load(path)
    entry = repo.find(ref)
    if entry is None:
        raise LoadoutError(f"No loadout named {ref!r}; run 'mechfight list' to see the options.")
    return repo.load(entry)


def format_result(result: BattleResult) -> str:
    if result.is_draw:
        return f"Draw after {result.rounds} rounds."
    winner = result.winner
    return (
        f"Victory: {winner.pilot or 'Unknown Pilot'}'s {winner.name} "
        f"wins the battle in {result.rounds} rounds!"
    )


def cmd_list(repo: LoadoutRepository) -> int:
    entries = repo.list_loadouts()
    if not entries:
        print("No loadouts found.")
        return EXIT_OK
    for i, entry in enumerate(entries, start=1):
        tag = " (built-in)" if entry.builtin else ""
        print(f"{i}. {entry.name}{tag}")
    return EXIT_OK


def cmd_show(repo: LoadoutRepository, args) -> int:
    mech = resolve_mech(repo, args.loadout)
    print(mech.describe())
    return EXIT_OK


def cmd_battle(repo: LoadoutRepository, config: BattleConfig, args) -> int:
    mech = resolve_mech(repo, args.player)
    if args.pilot:
        mech.pilot = args.pilot

    if args.mirror and args.opponent:
        raise LoadoutError("Give either an opponent or --mirror, not both.")
    if args.mirror:
        enemy = Mech.mirror_of(mech)
    elif args.opponent:
        enemy = resolve_mech(repo, args.opponent)
    else:
        enemy = repo.choose_random(random.Random(config.seed))

    print("\nCurrent Loadout:")
    print(mech.describe())
    print("\nEnemy Loadout:")
    print(enemy.describe())

    simulator = BattleSimulator(config=config)
    strategy = get_strategy(args.strategy)
    print("\nBattle Begins:")
    try:
        result = simulator.simulate(mech, enemy, strategy)
    except (PreconditionError, StalemateError) as exc:
        print(f"Battle aborted: {exc}")
        return EXIT_BATTLE_ERROR

    print(f"\n{format_result(result)}")
    return EXIT_OK


def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING

    try:
        config = load_config(args)
    except ConfigError as exc:
        configure_logging(default_level=level)
        logger.error("Invalid configuration: %s", exc)
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    configure_logging(default_level=level, log_file=config.log_file)
    repo = LoadoutRepository(config.resolved_loadout_dir())
    logger.info("Application started.")

    try:
        if args.command == "list":
            return cmd_list(repo)
        if args.command == "show":
            return cmd_show(repo, args)
        return cmd_battle(repo, config, args)
    except LoadoutError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    finally:
        logger.info("Application exited.")
