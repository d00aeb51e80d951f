"""
Headless driver for the critters simulation.

Runs a scene for a fixed number of frames with a fixed frame step and
prints tick summaries, or one JSON snapshot per frame with --json.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .simulation import SceneManager
from .loader import load_scene_pack
from .logging_config import configure_logging
from .errors import CrittersError
from .constants import TICK_SUMMARY_INTERVAL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="critters", description=__doc__.strip().splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a scene headless and report frames")
    run.add_argument("--scene", default=None, help="fish, bug or bird (default: scene pack's initial scene)")
    run.add_argument("--frames", type=int, default=600, help="Number of frames to simulate")
    run.add_argument("--width", type=float, default=800.0, help="Viewport width")
    run.add_argument("--height", type=float, default=600.0, help="Viewport height")
    run.add_argument("--seed", type=int, default=None, help="World seed (default: scene pack's seed)")
    run.add_argument("--config", type=Path, default=None, help="Alternative YAML scene pack")
    run.add_argument("--json", action="store_true", help="Print one JSON snapshot per frame")
    run.add_argument("--summary-every", type=int, default=TICK_SUMMARY_INTERVAL,
                     help="Print a tick summary every N frames")
    run.add_argument("--log-level", default=None, help="Logging level (default: CRITTERS_LOG_LEVEL or INFO)")

    return parser


def run_scene(args: argparse.Namespace) -> int:
    """Run the `run` subcommand"""
    pack = load_scene_pack(args.config)
    manager = SceneManager(
        viewport=(args.width, args.height),
        pack=pack,
        seed=args.seed,
        initial_species=args.scene
    )

    if not args.json:
        print("=" * 60)
        print(f"Scene: {manager.active_species.value} | Frames: {args.frames} | "
              f"Viewport: {args.width:g}x{args.height:g} | Seed: {manager.seed}")
        print("=" * 60)

    for _ in range(args.frames):
        snapshot = manager.tick()

        if args.json:
            print(json.dumps(snapshot.to_dict()))
        elif args.summary_every > 0 and manager.tick_count % args.summary_every == 0:
            manager.print_tick_summary()

    if not args.json:
        print("[OK] Run complete")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        if args.command == "run":
            return run_scene(args)
    except CrittersError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == '__main__':
    sys.exit(main())
