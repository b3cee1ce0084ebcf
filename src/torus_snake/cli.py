"""Command-line tools for Torus Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

import numpy as np

from torus_snake.clock import ManualClock
from torus_snake.config import GameConfig
from torus_snake.directions import Direction
from torus_snake.engine import GameSession, Phase
from torus_snake.highscore import FileHighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torus-snake",
        description="Headless simulation and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless game driven by a random autopilot.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=500)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--width", type=int, default=None)
    sim_p.add_argument("--height", type=int, default=None)
    sim_p.add_argument(
        "--turn-chance", type=float, default=0.2,
        help="Probability of the autopilot turning on each tick.",
    )
    sim_p.add_argument(
        "--high-score-file", type=str, default=None,
        help="Persist the high score to this file.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the default config as JSON.")
    cfg_p.add_argument("output", help="Destination path.")

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("seed", "width", "height")
        if getattr(args, name) is not None
    }
    if args.high_score_file is not None:
        overrides["high_score_path"] = args.high_score_file
    return replace(config, **overrides) if overrides else config


def run_autopilot(
    session: GameSession,
    clock: ManualClock,
    ticks: int,
    turn_chance: float,
    rng: np.random.Generator,
) -> None:
    """Steer *session* with random turns until *ticks* ticks or game over."""
    directions = list(Direction)
    session.start()
    while session.phase == Phase.PLAYING and session.tick_count < ticks:
        if rng.random() < turn_chance:
            session.on_direction(directions[int(rng.integers(len(directions)))])
        if not clock.run_next():
            break


def _run_simulate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    clock = ManualClock()
    if config.high_score_path:
        store = FileHighScoreStore(config.high_score_path)
    else:
        store = MemoryHighScoreStore()
    session = GameSession(config=config, clock=clock, store=store)
    run_autopilot(
        session, clock, args.ticks, args.turn_chance,
        np.random.default_rng(config.seed),
    )
    session.close()

    snap = session.snapshot()
    summary = {
        "ticks": snap.tick,
        "phase": snap.phase.value,
        "score": snap.score,
        "high_score": snap.high_score,
        "speed": round(snap.speed, 3),
        "length": len(snap.segments),
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    GameConfig().save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``torus-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
