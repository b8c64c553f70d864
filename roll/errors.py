class ParseError(ValueError):
    """Raised when a roll expression can't be understood."""


class TooLargeError(ParseError):
    """Raised when a roll expression is valid but too large to evaluate."""
