"""Fuzzy matching of command tokens against workspace entities."""

import re
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")

_IGNORED = re.compile(r"[\s_-]")


def normalize(value: str) -> str:
    """Strip whitespace, underscores and hyphens and lowercase."""
    return _IGNORED.sub("", value).lower()


def fuzzy_match(value: str, search: str) -> bool:
    """Check whether ``value`` starts with ``search`` once both are normalized."""
    return normalize(value).startswith(normalize(search))


def _sort_key(primary: str) -> tuple[str, str]:
    return (primary.casefold(), primary)


def best_match(token: str | None, candidates: Sequence[T] | None, strings_of: Callable[[T], Iterable[str | None]]) -> T | None:
    """Find the candidate that best matches a flag token.

    The leading marker character of ``token`` is dropped before comparing. A
    candidate qualifies when any of its matchable strings is a normalized
    prefix or exact match. Qualifying candidates are ranked by:

    1. exact matches before prefix-only matches
    2. shortest qualifying string first
    3. alphabetical order of the candidate's primary string

    Args:
        token: Flag token such as ``-eng``
        candidates: Entities to choose from
        strings_of: Returns the matchable strings of a candidate, primary first

    Returns:
        The best candidate, or None if nothing qualifies
    """
    if not token or not candidates:
        return None

    search = normalize(token[1:])
    ranked = []
    for candidate in candidates:
        strings = [s for s in strings_of(candidate) if s]
        qualifying = [s for s in strings if normalize(s).startswith(search)]
        if not qualifying:
            continue
        has_exact = any(normalize(s) == search for s in qualifying)
        shortest = min(len(s) for s in qualifying)
        primary = strings[0]
        ranked.append(((not has_exact, shortest, *_sort_key(primary)), candidate))

    if not ranked:
        return None

    ranked.sort(key=lambda entry: entry[0])
    logger.debug("Matched token", token=token, candidates=len(ranked))
    return ranked[0][1]
