"""
Command-line interface for running bot-only Trix matches.

Usage examples (after ``pip install -e .``):

    trix simulate --matches 10 --seed 42 --mode partners --difficulty hard
    python -m trix.cli simulate --config match.json --log-level DEBUG

``--config`` takes a JSON object with any of ``mode``, ``difficulty`` and
``rule_profile``; command-line flags override it.
"""
from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Optional

from .agents import HeuristicAgent, RandomAgent
from .contracts import Difficulty, RuleProfile
from .runner import run_match
from .seats import SEATS, Mode
from .state import MatchConfig

LOGGER = logging.getLogger("trix")


def _load_config(args: argparse.Namespace) -> MatchConfig:
    data: dict = {}
    if args.config:
        with Path(args.config).open("r", encoding="utf-8") as f:
            data = json.load(f)
    for key in ("mode", "difficulty", "rule_profile"):
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    return MatchConfig.from_dict(data)


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play bot-only matches and report scores.",
    )
    parser.add_argument(
        "--matches",
        type=int,
        default=1,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for shuffles and bots (default: OS entropy).",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=None,
        help="Individual or partnership scoring.",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Bot difficulty for every seat.",
    )
    parser.add_argument(
        "--rule-profile",
        dest="rule_profile",
        choices=[p.value for p in RuleProfile],
        default=None,
        help="Doubling rules.",
    )
    parser.add_argument(
        "--random-south",
        action="store_true",
        help="Drive South with a uniformly random agent instead of the heuristic bot.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with match options.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    config = _load_config(args)
    rng = random.Random(args.seed) if args.seed is not None else None
    totals = {seat: 0 for seat in SEATS}

    for match in range(1, args.matches + 1):
        base = None if args.seed is None else args.seed * 1000 + match * 10
        agents = {
            seat: HeuristicAgent(seed=None if base is None else base + i) for i, seat in enumerate(SEATS)
        }
        if args.random_south:
            agents[SEATS[0]] = RandomAgent(seed=base)
        result = run_match(config, agents, rng=rng)
        for seat, score in result.scores.items():
            totals[seat] += score
        line = ", ".join(f"{seat.label}={score}" for seat, score in result.scores.items())
        if config.mode == Mode.PARTNERS:
            line += " | " + ", ".join(f"team {t.value}={s}" for t, s in result.team_scores.items())
        print(f"[match {match}/{args.matches}] {line}")

    avg = ", ".join(f"{seat.label}={totals[seat] / args.matches:.1f}" for seat in SEATS)
    print(f"Average over {args.matches} matches: {avg}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trix", description="Trix card game engine CLI.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    LOGGER.debug("Parsed arguments: %s", args)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
