"""
GuessTree command-line front end

Usage:
    guesstree [--db PATH] [-v] play
    guesstree [--db PATH] [-v] show

Commands:
    play   - Play the guessing game, learning from wrong guesses (default)
    show   - Print the knowledge base as an indented yes/no tree
"""

import argparse
import sys
from pathlib import Path

from .config import DB_FILE
from .document import load_or_init, save, text_of, walk
from .exceptions import FormatError, StorageError
from .game import Game
from .logger import configure, get_logger
from .node import Question

logger = get_logger(__name__)


def play(db: Path) -> int:
    """Run one session on stdin/stdout and save it afterwards."""
    doc = load_or_init(db)
    learned = Game(doc, sys.stdin, sys.stdout).run()
    save(doc, db)
    logger.info(f"Session learned {learned} new animal(s); {doc.count} nodes saved to {db}")
    return learned


def show(db: Path) -> None:
    """Print every question and answer reachable from the root."""
    doc = load_or_init(db)
    for depth, branch, index, node in walk(doc):
        label = f"{branch}: " if branch else ""
        suffix = "" if isinstance(node, Question) else " (answer)"
        print(f"{'    ' * depth}{label}[{index}] {text_of(doc, node.text)}{suffix}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Animal guessing game that learns as it plays")
    parser.add_argument(
        "--db", help="Knowledge base file", type=Path, default=Path(DB_FILE)
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("play", help="Play a game (default)")
    subparsers.add_parser("show", help="Print the knowledge base tree")

    args = parser.parse_args(argv)
    configure(args.verbose)
    try:
        if args.command == "show":
            show(args.db)
        else:
            play(args.db)
    except (FormatError, StorageError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
