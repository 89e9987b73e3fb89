"""
Cue sheet line reader

Split a cue sheet text into keyword/argument line records
"""

import re
from dataclasses import dataclass
from typing import Iterator

from cuesheet.errors import CueSyntaxError

QUOTE = '"'
BYTE_ORDER_MARK = "\ufeff"
# only CR, LF and CRLF end a line, unlike str.splitlines
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Line:
    """
    One non-blank cue sheet line
    keyword is uppercased, arguments have their quotes stripped
    """

    line_number: int
    keyword: str
    argument_text: str
    arguments: tuple[str, ...]


def split_arguments(text: str, line_number: int) -> tuple[str, ...]:
    """
    Split argument text on whitespace
    A double-quoted string is a single argument
    """
    arguments = []
    position = 0
    length = len(text)

    while position < length:
        if text[position].isspace():
            position += 1
            continue

        if text[position] == QUOTE:
            end = text.find(QUOTE, position + 1)
            if end == -1:
                raise CueSyntaxError("unterminated quoted string", line_number)
            if end + 1 < length and not text[end + 1].isspace():
                raise CueSyntaxError("unexpected quote in quoted string", line_number)
            arguments.append(text[position + 1 : end])
            position = end + 1
            continue

        end = position
        while end < length and not text[end].isspace():
            if text[end] == QUOTE:
                raise CueSyntaxError("unexpected quote in unquoted word", line_number)
            end += 1
        arguments.append(text[position:end])
        position = end

    return tuple(arguments)


def read_line(raw_line: str, line_number: int) -> Line | None:
    """
    Classify a physical line, None for blank lines
    """
    stripped = raw_line.strip()
    if not stripped:
        return None

    if len(parts := stripped.split(maxsplit=1)) == 2:
        keyword, argument_text = parts
    else:
        keyword, argument_text = parts[0], ""

    if QUOTE in keyword:
        raise CueSyntaxError("line does not start with a keyword", line_number)

    keyword = keyword.upper()
    if keyword == "REM":
        # free text, never split strictly
        arguments = tuple(argument_text.split(maxsplit=1))
    else:
        arguments = split_arguments(argument_text, line_number)

    return Line(
        line_number=line_number,
        keyword=keyword,
        argument_text=argument_text,
        arguments=arguments,
    )


def tokenize(text: str) -> Iterator[Line]:
    """
    Yield a Line for every non-blank line of text
    Line numbers are 1-based physical line numbers
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK) :]

    for line_number, raw_line in enumerate(LINE_BREAK_RE.split(text), 1):
        if (line := read_line(raw_line, line_number)) is not None:
            yield line
