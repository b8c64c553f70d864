import operator
import typing


def divide(a: int, b: int) -> int:
    """Integer division rounding toward zero. Division by zero is zero."""

    if b == 0:
        return 0

    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


OPERATIONS: typing.Dict[str, typing.Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": divide,
}


class Result:
    """The outcome of evaluating an expression. It has the same shape as the
    expression, with each roll replaced by the dice that came up."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{str(self)}>"

    @property
    def total(self) -> int:
        raise NotImplementedError()


class ConstResult(Result):
    def __init__(self, value: int) -> None:
        self._value = value

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.total == self.total

    def __str__(self) -> str:
        return str(self._value)

    @property
    def total(self) -> int:
        return self._value


class RollsResult(Result):
    """Every die rolled, in the order they were rolled."""

    def __init__(self, rolls: typing.Iterable[int]) -> None:
        self._rolls = tuple(rolls)

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.rolls == self.rolls

    def __str__(self) -> str:
        return "[" + ", ".join(map(str, self._rolls)) + "]"

    @property
    def rolls(self) -> typing.Tuple[int, ...]:
        return self._rolls

    @property
    def total(self) -> int:
        return sum(self._rolls)


class HistogramResult(Result):
    """How many times each face came up, for rolls with many small dice."""

    def __init__(self, counts: typing.Mapping[int, int]) -> None:
        self._counts = tuple(sorted(counts.items()))

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.counts == self.counts

    def __str__(self) -> str:
        return (
            "["
            + ", ".join(f"{face}:{count}" for face, count in self._counts)
            + "]"
        )

    @property
    def counts(self) -> typing.Dict[int, int]:
        return dict(self._counts)

    @property
    def total(self) -> int:
        return sum(face * count for face, count in self._counts)


class AggregateResult(Result):
    """Only the sum, for rolls with many large dice."""

    def __init__(self, value: int) -> None:
        self._value = value

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.total == self.total

    def __str__(self) -> str:
        return f"[{self._value}]"

    @property
    def total(self) -> int:
        return self._value


class GroupResult(Result):
    def __init__(self, result: Result) -> None:
        self._result = result

    def __eq__(self, o: object) -> bool:
        return type(o) == type(self) and o.result == self.result

    def __str__(self) -> str:
        return f"({self._result})"

    @property
    def result(self) -> Result:
        return self._result

    @property
    def total(self) -> int:
        return self._result.total


class OpResult(Result):
    def __init__(self, opstr: str, left: Result, right: Result) -> None:
        self._opstr = opstr
        self._left = left
        self._right = right
        self._operation = OPERATIONS[opstr]

    def __eq__(self, o: object) -> bool:
        return (
            type(o) == type(self)
            and o.opstr == self.opstr
            and o.left == self.left
            and o.right == self.right
        )

    def __str__(self) -> str:
        return f"{self._left} {self._opstr} {self._right}"

    @property
    def opstr(self) -> str:
        return self._opstr

    @property
    def left(self) -> Result:
        return self._left

    @property
    def right(self) -> Result:
        return self._right

    @property
    def total(self) -> int:
        return self._operation(self._left.total, self._right.total)


def total(result: Result) -> int:
    return result.total
