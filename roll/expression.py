import typing

from .errors import ParseError

# Constants and totals are kept within the signed 64 bit range.
MAX_VALUE = 2 ** 63 - 1
MIN_VALUE = -(2 ** 63)

# Deeper trees are rejected so that walking them can't exhaust the stack.
MAX_DEPTH = 200

OPERATORS = "+-*/"

# (lowest, highest)
Interval = typing.Tuple[int, int]


class Expr:
    """A parsed roll expression. Expressions are never modified once built,
    so one can be evaluated any number of times."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{str(self)}>"

    @property
    def depth(self) -> int:
        return 1

    def interval(self) -> Interval:
        """The lowest and highest totals this expression can roll."""

        raise NotImplementedError()

    def walk(self) -> typing.Iterator["Expr"]:
        """This expression and every expression inside it."""

        yield self

    def roll_exprs(self) -> typing.List["RollExpr"]:
        return []


class TerminalExpr(Expr):
    pass


class ConstExpr(TerminalExpr):
    def __init__(self, value: int):
        super().__init__()
        self._value = value

        if not MIN_VALUE <= self._value <= MAX_VALUE:
            raise ParseError("Maximum constant size exceeded.")

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.value == self.value

    def __hash__(self) -> int:
        return hash((type(self), self._value))

    def __str__(self) -> str:
        return str(self._value)

    @property
    def value(self) -> int:
        return self._value

    def interval(self) -> Interval:
        return self._value, self._value


class RollExpr(TerminalExpr):
    SEPERATOR = "d"

    def __init__(self, times: int, sides: int):
        super().__init__()
        self._times = times
        self._sides = sides

        if not 0 <= self._times <= MAX_VALUE:
            raise ParseError(f"Invalid number of dice: {times}")
        # A die needs at least one face to be rolled.
        if not 1 <= self._sides <= MAX_VALUE:
            raise ParseError(f"Invalid number of sides: {sides}")

    def __eq__(self, o: object) -> bool:
        return (
            type(o) == type(self)
            and o.times == self.times
            and o.sides == self.sides
        )

    def __hash__(self) -> int:
        return hash((type(self), self._times, self._sides))

    def __str__(self) -> str:
        return f"{self._times}{RollExpr.SEPERATOR}{self._sides}"

    @property
    def times(self) -> int:
        return self._times

    @property
    def sides(self) -> int:
        return self._sides

    def interval(self) -> Interval:
        return self._times, self._times * self._sides

    def roll_exprs(self) -> typing.List["RollExpr"]:
        return [self]


class NonTerminalExpr(Expr):
    def __init__(self, exprs: typing.List[Expr]) -> None:
        super().__init__()
        self._exprs = tuple(exprs)
        self._depth = 1 + max(expr.depth for expr in self._exprs)

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.exprs == self.exprs

    def __hash__(self) -> int:
        return hash((type(self), self._exprs))

    @property
    def exprs(self) -> typing.Tuple[Expr, ...]:
        return self._exprs

    @property
    def depth(self) -> int:
        return self._depth

    def roll_exprs(self) -> typing.List[RollExpr]:
        return [roll for expr in self._exprs for roll in expr.roll_exprs()]

    def walk(self) -> typing.Iterator[Expr]:
        yield self
        for expr in self._exprs:
            yield from expr.walk()


class GroupExpr(NonTerminalExpr):
    """A parenthesised expression. Precedence is already settled by the
    parser, so this only matters for display."""

    def __init__(self, expr: Expr) -> None:
        super().__init__([expr])

    def __str__(self) -> str:
        return f"({self.expr})"

    @property
    def expr(self) -> Expr:
        return self._exprs[0]

    def interval(self) -> Interval:
        return self.expr.interval()


class OpExpr(NonTerminalExpr):
    def __init__(self, opstr: str, left: Expr, right: Expr) -> None:
        super().__init__([left, right])
        self._opstr = opstr

        assert opstr in OPERATORS
        self._interval = self.compute_interval()

    def __eq__(self, o: object) -> bool:
        return super().__eq__(o) and o.opstr == self.opstr  # type: ignore

    def __hash__(self) -> int:
        return hash((type(self), self._opstr, self._exprs))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}<{repr(self.left)} {self.opstr}"
            f" {repr(self.right)}>"
        )

    def __str__(self) -> str:
        return f"{self.left} {self.opstr} {self.right}"

    @property
    def opstr(self) -> str:
        return self._opstr

    @property
    def left(self) -> Expr:
        return self._exprs[0]

    @property
    def right(self) -> Expr:
        return self._exprs[1]

    def interval(self) -> Interval:
        return self._interval

    def compute_interval(self) -> Interval:
        (left_lo, left_hi), (right_lo, right_hi) = (
            self.left.interval(),
            self.right.interval(),
        )

        if self.opstr == "+":
            return left_lo + right_lo, left_hi + right_hi
        elif self.opstr == "-":
            return left_lo - right_hi, left_hi - right_lo
        elif self.opstr == "*":
            corners = [
                left_lo * right_lo,
                left_lo * right_hi,
                left_hi * right_lo,
                left_hi * right_hi,
            ]
            return min(corners), max(corners)
        else:
            # Truncating division moves the dividend toward zero, flipping its
            # sign for negative divisors. Division by zero is zero.
            totals = [0]
            if right_hi > 0:
                totals += [left_lo, left_hi]
            if right_lo < 0:
                totals += [-left_lo, -left_hi]
            return min(totals), max(totals)
