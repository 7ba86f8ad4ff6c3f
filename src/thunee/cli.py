"""
Command-line interface for simulating Thunee matches and managing settings.

Usage examples (after installing in editable mode):

    thunee simulate --seed 7 --max-rounds 20
    thunee config show --path settings.json
    thunee config reset --path settings.json
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG, config_to_dict, load_config, save_config
from .play_random import run_random_match
from .scoring import ScoringBreakdown
from .seats import Seat
from .state import MatchState


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play a match between random agents and print the outcome of each round.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for the deal and the agents.",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=100,
        help="Stop after this many rounds even if nobody has won.",
    )
    parser.add_argument(
        "--dealer",
        choices=[s.name.lower() for s in Seat],
        default="north",
        help="Dealer of the first round.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Settings JSON file (defaults are used when missing).",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    config = load_config(args.config) if args.config else DEFAULT_CONFIG

    def report(round_number: int, breakdown: ScoringBreakdown, match: MatchState) -> None:
        print(
            f"[round {round_number}] {breakdown.description} "
            f"(balls {match.balls(0)}-{match.balls(1)}, target {match.match_target})",
            flush=True,
        )

    summary = run_random_match(
        seed=args.seed,
        max_rounds=args.max_rounds,
        dealer=Seat[args.dealer.upper()],
        config=config,
        on_round=report,
    )
    match = summary.match
    if match.is_complete:
        winner = match.teams[match.winning_team].name
        print(f"{winner} win {match.balls(match.winning_team)} balls to {match.balls(1 - match.winning_team)}")
    else:
        print(f"No winner after {len(summary.breakdowns)} rounds ({match.balls(0)}-{match.balls(1)})")


def _add_config_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("config", help="Show or reset match settings.")
    config_sub = parser.add_subparsers(dest="config_command", required=True)

    show = config_sub.add_parser("show", help="Print the effective settings as JSON.")
    show.add_argument("--path", type=str, default=None, help="Settings JSON file.")
    show.set_defaults(func=_cmd_config_show)

    reset = config_sub.add_parser("reset", help="Write the default settings.")
    reset.add_argument("--path", type=str, required=True, help="Settings JSON file to overwrite.")
    reset.set_defaults(func=_cmd_config_reset)


def _cmd_config_show(args: argparse.Namespace) -> None:
    config = load_config(args.path) if args.path else DEFAULT_CONFIG
    print(json.dumps(config_to_dict(config), indent=2))


def _cmd_config_reset(args: argparse.Namespace) -> None:
    path = Path(args.path)
    save_config(DEFAULT_CONFIG, path)
    print(f"Wrote default settings to {path.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="thunee", description="Thunee rules engine CLI.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine decisions.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_config_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
