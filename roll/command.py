"""Turns chat messages into replies.

A message is an optional "/" followed by "start", "help" or a roll. Rolls may
be prefixed by "roll" or "r", so "/roll 2d6", "/r 2d6", "/2d6" and "2d6" all
roll the same dice.
"""

import enum
import logging
import typing

from .config import settings
from .errors import ParseError
from .evaluate import RandomSource, evaluate
from .formatter import roll_string
from .parser import parse
from .result import Result
from .tokens import WHITESPACE

logger = logging.getLogger(__name__)

START_MSG = """Let the dice goblin roll for you!

Send a roll like 3d6 + 2 and get back the total along with every die that \
came up. See /help for details on the commands and syntax available."""

HELP_MSG = """COMMANDS

/start
    See introductory information
/help
    See this help output
/roll [expression]
    Roll and calculate a total (see expression syntax below)
/r [expression]
    Alias for /roll
/[expression]
    Alias for /roll

ROLL EXPRESSION SYNTAX

Dice rolls are described in the standard NdS format, where N is the number \
of rolls and S is the number of sides. Each roll is summed together to \
calculate the overall value.

Examples:
    3d10 - Roll a ten-sided die three times
    d6   - Roll a single six-sided die (N defaults to 1 if omitted)
    D2   - Flip a coin (the d is case-insensitive)

Rolls support basic arithmetic using the operators (+, -, *, /) as well as \
parentheses. Division always rounds towards zero, and division by zero \
always equals zero.

Examples:
    3d10 + 2      - Roll three ten-sided dice and add two to the result
    (d6 - 1) * 2  - Roll a six-sided die, subtract one, then double it
    3 / 2         - Equals 1 (1.5 rounded towards zero)
    1 / 0         - Division by zero always equals zero

Rolls of more than {threshold} dice show how many times each face came up \
instead of every die, or just the sum when the dice also have more than \
{threshold} sides."""

NOT_UNDERSTOOD_MSG = (
    "I don't understand this roll. Use /help to see the roll syntax."
)

COMMAND_PREFIX = "/"
ROLL_KEYWORDS = ("roll", "r")


class CommandType(enum.Enum):
    START = enum.auto()
    HELP = enum.auto()
    ROLL = enum.auto()
    UNKNOWN = enum.auto()


def strip_keyword(text: str, keyword: str) -> typing.Optional[str]:
    """Return what follows keyword at the start of text, ignoring case."""

    if text[: len(keyword)].lower() == keyword:
        return text[len(keyword) :]
    return None


def is_word(text: str, keyword: str) -> bool:
    """Whether text starts with keyword as a whole word."""

    rest = strip_keyword(text, keyword)
    return rest is not None and (not rest or rest[0] in WHITESPACE)


class Command:
    def __init__(
        self,
        kind: CommandType,
        result: typing.Optional[Result] = None,
        threshold: typing.Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.result = result
        self.threshold = (
            settings.detail_threshold if threshold is None else threshold
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.kind.name}>"

    def reply(self) -> str:
        if self.kind is CommandType.START:
            return START_MSG
        elif self.kind is CommandType.HELP:
            return HELP_MSG.format(threshold=self.threshold)
        elif self.kind is CommandType.ROLL:
            assert self.result is not None
            reply = roll_string(self.result)
            logger.info("roll: %s", reply)
            return reply
        else:
            return NOT_UNDERSTOOD_MSG

    @staticmethod
    def from_text(
        text: str,
        rng: typing.Optional[RandomSource] = None,
        threshold: typing.Optional[int] = None,
    ) -> "Command":
        text = text.strip()
        if text.startswith(COMMAND_PREFIX):
            text = text[len(COMMAND_PREFIX) :]

        if is_word(text, "start"):
            return Command(CommandType.START)
        elif is_word(text, "help"):
            return Command(CommandType.HELP, threshold=threshold)

        for keyword in ROLL_KEYWORDS:
            rest = strip_keyword(text, keyword)
            if rest is not None:
                text = rest
                break

        try:
            expr = parse(text)
        except ParseError as e:
            logger.warning("Malformed roll received: %s", e)
            return Command(CommandType.UNKNOWN)

        return Command(
            CommandType.ROLL, evaluate(expr, rng, threshold), threshold
        )


def respond(
    text: str,
    rng: typing.Optional[RandomSource] = None,
    threshold: typing.Optional[int] = None,
) -> str:
    """Reply to a single chat message."""

    return Command.from_text(text, rng, threshold).reply()
