"""Recursive descent parser for roll expressions.

Grammar, loosest binding first:

    expr    := factor (("+" | "-") factor)*
    factor  := primary (("*" | "/") primary)*
    primary := dice | number | group
    group   := "(" expr ")"
    dice    := [INT] ("d" | "D") INT
    number  := ["-"] INT

Binary operators are left associative. Whitespace may appear between tokens
but not inside them, and the minus of a negative number must be directly
followed by its digits.
"""

import logging
import typing

from .config import settings
from .errors import ParseError, TooLargeError
from .expression import (
    MAX_DEPTH,
    MAX_VALUE,
    MIN_VALUE,
    ConstExpr,
    Expr,
    GroupExpr,
    OpExpr,
    RollExpr,
)
from .tokens import (
    CloseExprToken,
    IntegerToken,
    OpenExprToken,
    OperatorToken,
    RollToken,
    Token,
    tokenize,
)

logger = logging.getLogger(__name__)

# Parentheses can be nested at most this deep.
MAX_NESTING = 50


class Parser:
    def __init__(self, tokens: typing.List[Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.nesting = 0

    def peek(self, n: int = 0) -> typing.Optional[Token]:
        if self.index + n < len(self.tokens):
            return self.tokens[self.index + n]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> Expr:
        """Parse every token into a single expression."""

        expr = self.expr()

        leftover = self.peek()
        if leftover is not None:
            raise ParseError(
                f"Unexpected {leftover.token!r} at offset {leftover.offset}."
            )

        return expr

    def binary(
        self, operand: typing.Callable[[], Expr], operators: str
    ) -> Expr:
        """Fold operand (op operand)* into a left leaning tree."""

        expr = operand()
        while True:
            token = self.peek()
            if not (
                isinstance(token, OperatorToken) and token.opstr in operators
            ):
                return expr

            self.advance()
            expr = OpExpr(token.opstr, expr, operand())
            if expr.depth > MAX_DEPTH:
                raise TooLargeError("Expression is too long.")

    def expr(self) -> Expr:
        return self.binary(self.factor, "+-")

    def factor(self) -> Expr:
        return self.binary(self.primary, "*/")

    def primary(self) -> Expr:
        token = self.peek()

        if token is None:
            raise ParseError("Unexpected end of expression.")
        elif isinstance(token, RollToken):
            self.advance()
            return RollExpr(token.qty, token.size)
        elif isinstance(token, IntegerToken):
            self.advance()
            return ConstExpr(token.value())
        elif isinstance(token, OpenExprToken):
            return self.group()
        elif self.at_negative_number():
            self.advance()
            return ConstExpr(-self.advance().value())  # type: ignore

        raise ParseError(f"Unexpected {token.token!r} at offset {token.offset}.")

    def at_negative_number(self) -> bool:
        sign, number = self.peek(), self.peek(1)
        return (
            isinstance(sign, OperatorToken)
            and sign.opstr == "-"
            and isinstance(number, IntegerToken)
            and sign.end == number.offset
        )

    def group(self) -> Expr:
        self.advance()

        self.nesting += 1
        if self.nesting > MAX_NESTING:
            raise TooLargeError("Parentheses are nested too deeply.")
        expr = self.expr()
        self.nesting -= 1

        if not isinstance(self.peek(), CloseExprToken):
            raise ParseError("Unclosed parenthesis.")
        self.advance()

        return GroupExpr(expr)


def check_size(expr: Expr, max_times: typing.Optional[int] = None) -> None:
    """Reject expressions which would take too long to roll or whose total
    might not fit in 64 bits at any step."""

    if max_times is None:
        max_times = settings.max_times

    # Every die is sampled, so the cap covers the whole expression.
    times = sum(roll.times for roll in expr.roll_exprs())
    if times > max_times:
        raise TooLargeError(f"Too many dice: {times} (max {max_times})")

    if expr.depth > MAX_DEPTH:
        raise TooLargeError("Expression is too long.")

    for node in expr.walk():
        lo, hi = node.interval()
        if lo < MIN_VALUE or hi > MAX_VALUE:
            raise TooLargeError(f"{node} could exceed the 64 bit range.")


def parse(string: str, max_times: typing.Optional[int] = None) -> Expr:
    """Parse a roll expression, raising ParseError if it can't be used."""

    try:
        expr = Parser(tokenize(string)).parse()
        check_size(expr, max_times)
    except ParseError as e:
        logger.debug("Failed to parse %r: %s", string, e)
        raise

    logger.debug("Parsed %r as %r", string, expr)
    return expr
