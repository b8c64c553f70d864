import typing

from .errors import ParseError

# Length 1 strings
Char = str

# During lexing this is used for return tuples of the form
# (finished_token, current_token)
TokenPair = typing.Tuple[typing.Optional["Token"], typing.Optional["Token"]]

WHITESPACE = " \t\r\n"
DIGITS = "0123456789"

# Integer literals must fit in a signed 64 bit integer before any sign is
# applied.
MAX_INT = 2 ** 63 - 1


def check_int(digits: str) -> int:
    value = int(digits)
    if value > MAX_INT:
        raise ParseError(f"Integer out of range: {digits}")
    return value


class Token:
    def __init__(self, token="", offset=0):
        self.token = token
        self.offset = offset

    def __eq__(self, o: object) -> bool:
        return (
            isinstance(o, Token)
            and type(o) == type(self)
            and o.token == self.token
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{str(self)}>"

    def __str__(self) -> str:
        return self.token

    @property
    def end(self) -> int:
        """Offset of the character just past this token."""

        return self.offset + len(self.token)

    def consume(self, c: Char, offset: int) -> TokenPair:
        return self, Token.from_char(c, offset)

    def finish(self) -> "Token":
        """Check that the token is complete, returning it."""

        return self

    @staticmethod
    def from_char(c: Char, offset: int = 0) -> typing.Optional["Token"]:
        if c in WHITESPACE:
            return None
        elif c in DIGITS:
            return IntegerToken(c, offset)
        elif c in RollToken.SEPERATORS:
            return RollToken(c, offset)
        else:
            return NonTerminalToken.from_char(c, offset)


class TerminalToken(Token):
    def value(self) -> typing.Any:
        raise NotImplementedError()


class IntegerToken(TerminalToken):
    def __init__(self, token, offset=0):
        super().__init__(token=token, offset=offset)
        assert all(c in DIGITS for c in token)

    def consume(self, c: Char, offset: int) -> TokenPair:
        if c in DIGITS:
            self.token += c
            return None, self
        elif c in RollToken.SEPERATORS:
            return None, RollToken(self.token + c, self.offset)
        else:
            return self.finish(), Token.from_char(c, offset)

    def finish(self) -> "IntegerToken":
        self.value()
        return self

    def value(self) -> int:
        return check_int(self.token)


class RollToken(TerminalToken):
    SEPERATORS = "dD"

    def __init__(self, token, offset=0):
        super().__init__(token=token, offset=offset)
        qty, d, size = self.partition()
        assert all(c in DIGITS for c in qty)
        assert d in RollToken.SEPERATORS
        assert all(c in DIGITS for c in size)

    def partition(self) -> typing.Tuple[str, str, str]:
        i = max(self.token.find(s) for s in RollToken.SEPERATORS)
        return self.token[:i], self.token[i], self.token[i + 1 :]

    @property
    def qty(self) -> int:
        qty = self.partition()[0]

        if qty:
            return check_int(qty)
        else:
            # d8 implicity means 1d8
            return 1

    @property
    def size(self) -> int:
        return check_int(self.partition()[2])

    def consume(self, c: Char, offset: int) -> TokenPair:
        if c in DIGITS:
            self.token += c
            return None, self
        else:
            return self.finish(), Token.from_char(c, offset)

    def finish(self) -> "RollToken":
        if not self.partition()[2]:
            raise ParseError(f"Invalid die roll: {self.token}")

        self.qty
        self.size
        return self


class NonTerminalToken(Token):
    @staticmethod
    def from_char(c: Char, offset: int = 0) -> typing.Optional[Token]:
        if c == OpenExprToken.CHARACTER:
            return OpenExprToken(offset)
        elif c == CloseExprToken.CHARACTER:
            return CloseExprToken(offset)
        else:
            return OperatorToken.from_char(c, offset)


class OpenExprToken(NonTerminalToken):
    CHARACTER = "("

    def __init__(self, offset=0):
        super().__init__(token=OpenExprToken.CHARACTER, offset=offset)


class CloseExprToken(NonTerminalToken):
    CHARACTER = ")"

    def __init__(self, offset=0):
        super().__init__(token=CloseExprToken.CHARACTER, offset=offset)


class OperatorToken(NonTerminalToken):
    OPERATORS = "+-*/"

    def __init__(self, token, offset=0):
        super().__init__(token=token, offset=offset)

    @property
    def opstr(self):
        return self.token

    @staticmethod
    def from_char(c: Char, offset: int = 0) -> typing.Optional[Token]:
        if c in OperatorToken.OPERATORS:
            return OperatorToken(c, offset)
        else:
            raise ParseError(f"Invalid character: {c!r}")


def consume(
    c: Char, offset: int, current_token: typing.Optional[Token]
) -> TokenPair:
    """Consume a character, returning a finished and current token."""

    if current_token:
        return current_token.consume(c, offset)
    else:
        return None, Token.from_char(c, offset)


def tokenize(string: str) -> typing.List[Token]:
    """Split a string into tokens, raising ParseError for invalid input."""

    tokens: typing.List[Token] = []
    current_token: typing.Optional[Token] = None

    for offset, c in enumerate(string):
        finished_token, current_token = consume(c, offset, current_token)
        if finished_token:
            tokens.append(finished_token)

    if current_token:
        tokens.append(current_token.finish())

    return tokens
