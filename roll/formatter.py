import typing

from .evaluate import RandomSource, evaluate
from .parser import parse
from .result import Result


def trace(result: Result) -> str:
    """The breakdown of a result, e.g. "[3, 5] + 2"."""

    return str(result)


def roll_string(result: Result) -> str:
    return f"{result.total} = {trace(result)}"


def roll(
    string: str,
    rng: typing.Optional[RandomSource] = None,
    threshold: typing.Optional[int] = None,
) -> str:
    """Parse, roll and describe an expression, raising ParseError if it
    can't be understood."""

    return roll_string(evaluate(parse(string), rng, threshold))
