"""Command line lexing.

Splits a raw line into words the way a POSIX shell would, without any
expansion: quotes group words, backslashes escape, nothing else is
special.
"""

from __future__ import annotations

import shlex

from webterm.domain.models import Command


class ParseError(Exception):
    """Raised when a line has unterminated quotes or a dangling escape."""

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


def split_words(line: str) -> list[str]:
    """Split a line into shell words.

    Raises:
        ParseError: If quoting or escaping is malformed.
    """
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise ParseError(str(e), line=line) from e


def parse_command(raw: str) -> Command:
    """Parse a raw client line into a Command.

    The line is trimmed first. A line without words yields a Command
    with an empty verb.
    """
    line = raw.strip()
    words = split_words(line)
    if not words:
        return Command(line=line)
    return Command(verb=words[0].lower(), args=words[1:], line=line)
