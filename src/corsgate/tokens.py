"""
Helpers for HTTP header values used during CORS negotiation.

Method names and header names travel as RFC 7230 tokens. This module joins
lists of them into a single header value and checks that an incoming value is
exactly one token.
"""

import re
from collections.abc import Iterable

# tchar = "!" / "#" / "$" / "%" / "&" / "'" / "*" / "+" / "-" / "." /
#         "^" / "_" / "`" / "|" / "~" / DIGIT / ALPHA
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def join_tokens(values: Iterable[str]) -> str:
    """
    Joins tokens into a comma-separated header value.

    No separator is written before the first or after the last element and no
    whitespace is inserted, so ``["GET", "PUT"]`` becomes ``"GET,PUT"``.

    Args:
        values: The tokens to join.

    Returns:
        The header value, or an empty string for empty input.
    """
    return ",".join(values)


def parse_single_token(value: str | None) -> str | None:
    """
    Parses a header value that must consist of exactly one token.

    Args:
        value: The raw header value.

    Returns:
        The token if the whole value is a single valid token, otherwise None.
    """
    if not value:
        return None
    if _TOKEN_RE.fullmatch(value) is None:
        return None
    return value


def is_token(value: str) -> bool:
    """Returns True if `value` is a single valid HTTP token."""
    return parse_single_token(value) is not None
