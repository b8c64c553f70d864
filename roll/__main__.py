import argparse
import logging
import random
import sys
import typing

from .command import respond
from .config import settings
from .errors import ParseError
from .formatter import roll


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="roll",
        description="Roll dice expressions like 3d6 + 2. With no expression,"
        " answer messages read from stdin one per line.",
    )
    parser.add_argument(
        "expression", nargs="*", help='Expression to roll, e.g. "(d6 - 1) * 2"'
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed the random source"
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Show every die for rolls of at most this many dice"
        f" (default {settings.detail_threshold})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed) if args.seed is not None else None

    if args.expression:
        try:
            print(roll(" ".join(args.expression), rng, args.threshold))
        except ParseError as e:
            print(f"roll: {e}", file=sys.stderr)
            return 1
        return 0

    for line in sys.stdin:
        if line.strip():
            print(respond(line, rng, args.threshold), flush=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
