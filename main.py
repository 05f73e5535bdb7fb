"""CLI entrypoint: apply one action to a puzzle link and print the new link."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sudokulink.core.constants import DEFAULT_BOX_SIZE
from sudokulink.data.local_cache import DEFAULT_CACHE_DIR
from sudokulink.engine.hash_store import HashStore, MemoryLocation
from sudokulink.engine.synchronizer import SessionConfig, StateSynchronizer
from sudokulink.utils.logger import configure_logging
from sudokulink.utils.pretty import TextRenderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resume, edit and share sudoku puzzles through their link fragment",
    )
    parser.add_argument("--hash", type=str, default="", help="Current link fragment (with or without '#')")
    parser.add_argument("--path", type=str, default="/", help="Page path used to namespace the local cache")
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=DEFAULT_CACHE_DIR,
        help="Directory holding cached puzzle snapshots",
    )
    parser.add_argument(
        "--no-local-storage",
        action="store_true",
        help="Disable the local snapshot cache; the link is the only state",
    )
    parser.add_argument(
        "--size",
        type=int,
        choices=[2, 3],
        default=DEFAULT_BOX_SIZE,
        help="Box size: 2 for 4x4 boards, 3 for 9x9 boards",
    )
    parser.add_argument("--symmetric", action="store_true", help="Generate symmetric puzzles")
    parser.add_argument("--quick", action="store_true", help="Generate puzzles with a single removal pass")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    actions = parser.add_subparsers(dest="action")
    actions.add_parser("show", help="Render the linked puzzle (default)")
    setup = actions.add_parser("setup", help="Switch to puzzle number SEED")
    setup.add_argument("seed", type=int)
    actions.add_parser("next", help="Go to the next puzzle")
    actions.add_parser("prev", help="Go to the previous puzzle")
    actions.add_parser("clear", help="Erase all answers and marks")
    actions.add_parser("check", help="Check the board so far for mistakes")
    for name, help_text in (("set", "Write DIGIT into cell POS"), ("mark", "Toggle candidate DIGIT in cell POS")):
        edit = actions.add_parser(name, help=help_text)
        edit.add_argument("pos", type=int, help="Cell index in row-major order")
        edit.add_argument("digit", type=int, help="Digit starting at 1")
    erase = actions.add_parser("erase", help="Erase cell POS")
    erase.add_argument("pos", type=int)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    config = SessionConfig(
        box_size=args.size,
        page_path=args.path,
        use_local_storage=not args.no_local_storage,
        symmetric_puzzles=args.symmetric,
        quick=args.quick,
        cache_dir=args.cache_dir,
    )
    session = StateSynchronizer(
        config,
        hash_store=HashStore(MemoryLocation(args.hash)),
        renderer=TextRenderer(box_size=args.size),
    )
    session.load()

    action = args.action or "show"
    if action == "setup":
        session.setup(args.seed)
    elif action == "next":
        session.advance(1)
    elif action == "prev":
        session.advance(-1)
    elif action == "clear":
        session.clear()
    elif action == "check":
        print(f"Check: {session.check().value}")
    elif action in ("set", "mark"):
        if session.enter(args.pos, args.digit - 1, pencil=action == "mark") is None:
            parser.error(f"cell {args.pos} cannot take digit {args.digit}")
    elif action == "erase":
        if session.enter(args.pos, None) is None:
            parser.error(f"cell {args.pos} cannot be erased")

    session.run_pending()
    session.close()
    print(f"Link: {session.identifier()}")


if __name__ == "__main__":  # pragma: no cover
    main()
