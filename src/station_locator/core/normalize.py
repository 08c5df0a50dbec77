from __future__ import annotations

import math
import re

# Plain decimal literal, read as a prefix by match() or whole by fullmatch().
NUMERIC_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def normalize_number(value: object) -> float | None:
    """Turn a loosely typed feed value into a finite float, or ``None``.

    The station feed mixes numbers, numeric strings and strings with trailing
    commas (``"13.5,"``). Surrounding whitespace and trailing commas are
    dropped, then the leading numeric prefix is parsed, so ``"12.3abc"`` gives
    ``12.3`` while ``"abc"`` gives ``None``.
    """
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip().rstrip(",")
    match = NUMERIC_LITERAL.match(text)
    if match is None:
        return None

    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def parse_int_prefix(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    match = re.match(r"[+-]?\d+", str(value).strip())
    if match is None:
        return None
    try:
        return int(match.group(0))
    except ValueError:
        # Digit strings past the interpreter's int conversion limit.
        return None


def parse_number_literal(text: str) -> float | None:
    """Parse ``text`` only if the whole of it is a plain decimal literal."""
    match = NUMERIC_LITERAL.fullmatch(text.strip())
    if match is None:
        return None
    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number
