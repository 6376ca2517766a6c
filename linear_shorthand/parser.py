"""Split a raw shorthand command into flag tokens and title tokens."""

import re
from dataclasses import dataclass

COMMAND_PREFIX = "ln"

_PREFIX = re.compile(rf"^\s*{COMMAND_PREFIX}(?:\s+|$)")


@dataclass(frozen=True)
class ParsedInput:
    """Tokens of a command, each group in original order."""

    flag_tokens: tuple[str, ...]
    title_tokens: tuple[str, ...]


def is_flag(token: str) -> bool:
    """A flag starts with ``-`` and has something after it; a lone ``-`` is title text."""
    return token.startswith("-") and len(token) > 1


def parse_input(raw: str) -> ParsedInput:
    """Parse ``raw`` into flag and title tokens.

    An optional leading ``ln`` command name is dropped.
    """
    words = _PREFIX.sub("", raw, count=1).split()
    return ParsedInput(
        flag_tokens=tuple(w for w in words if is_flag(w)),
        title_tokens=tuple(w for w in words if not is_flag(w)),
    )
