from .errors import ParseError, TooLargeError
from .evaluate import evaluate
from .expression import ConstExpr, Expr, GroupExpr, OpExpr, RollExpr
from .formatter import roll, roll_string, trace
from .parser import parse
from .result import (
    AggregateResult,
    ConstResult,
    GroupResult,
    HistogramResult,
    OpResult,
    Result,
    RollsResult,
    total,
)
