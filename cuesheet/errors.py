"""
Cue sheet parser errors
"""


class CueError(Exception):
    """
    Base cue sheet error
    Carries the 1-based line number and the offending keyword when known
    """

    kind = "CueError"

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        keyword: str | None = None,
    ):
        self.message = message
        self.line_number = line_number
        self.keyword = keyword
        super().__init__(str(self))

    def __str__(self) -> str:
        location = f"line {self.line_number}: " if self.line_number else ""
        return f"{location}{self.message}"


class CueSyntaxError(CueError):
    """Malformed line, quoting, number or timestamp"""

    kind = "SyntaxError"


class UnexpectedDirectiveError(CueError):
    """Directive not allowed in the current block context"""

    kind = "UnexpectedDirective"

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        keyword: str | None = None,
        context: str | None = None,
    ):
        self.context = context
        super().__init__(message, line_number=line_number, keyword=keyword)


class CueValidationError(CueError):
    """Well-formed directive violating a disc layout invariant"""

    kind = "ValidationError"


class UnknownEnumError(CueError):
    """File type, track type or flag outside of the supported set"""

    kind = "UnknownEnum"
