import collections
import logging
import random
import typing

from .config import settings
from .expression import ConstExpr, Expr, GroupExpr, OpExpr, RollExpr
from .result import (
    AggregateResult,
    ConstResult,
    GroupResult,
    HistogramResult,
    OpResult,
    Result,
    RollsResult,
)

logger = logging.getLogger(__name__)


class RandomSource(typing.Protocol):
    def randint(self, a: int, b: int) -> int:
        ...


# Used by every evaluation that isn't handed its own source. SystemRandom
# keeps no state of its own, so threads can share it.
SYSTEM_RANDOM = random.SystemRandom()


def sample(times: int, sides: int, rng: RandomSource) -> typing.Iterator[int]:
    return (rng.randint(1, sides) for _ in range(times))


def roll_dice(expr: RollExpr, rng: RandomSource, threshold: int) -> Result:
    """Roll the dice of expr, keeping as much detail as is reasonable to
    show."""

    rolls = sample(expr.times, expr.sides, rng)

    if expr.times <= threshold:
        return RollsResult(rolls)
    elif expr.sides <= threshold:
        return HistogramResult(collections.Counter(rolls))
    else:
        return AggregateResult(sum(rolls))


def evaluate(
    expr: Expr,
    rng: typing.Optional[RandomSource] = None,
    threshold: typing.Optional[int] = None,
) -> Result:
    """Roll every die in expr. Each call rolls afresh."""

    if rng is None:
        rng = SYSTEM_RANDOM
    if threshold is None:
        threshold = settings.detail_threshold

    result = _evaluate(expr, rng, threshold)
    logger.debug("Evaluated %s as %r", expr, result)
    return result


def _evaluate(expr: Expr, rng: RandomSource, threshold: int) -> Result:
    if isinstance(expr, ConstExpr):
        return ConstResult(expr.value)
    elif isinstance(expr, RollExpr):
        return roll_dice(expr, rng, threshold)
    elif isinstance(expr, GroupExpr):
        return GroupResult(_evaluate(expr.expr, rng, threshold))
    elif isinstance(expr, OpExpr):
        return OpResult(
            expr.opstr,
            _evaluate(expr.left, rng, threshold),
            _evaluate(expr.right, rng, threshold),
        )
    else:
        raise TypeError(f"Can't evaluate expression of type: {type(expr)}")
