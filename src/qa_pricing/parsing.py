"""Best-effort numeric coercion for free-text form fields.

Each helper reads the longest numeric prefix of its input the way a browser
``parseFloat``/``parseInt`` would and falls back to ``0`` when nothing
usable is found. None of them raise.
"""

from __future__ import annotations

import math
import re
from typing import Any

_FLOAT_PREFIX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")
_CURRENCY_CHARS = re.compile(r"[$,]")


def _text(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            float(value)
        except OverflowError:
            return ""
    return str(value).lstrip()


def _finite_or_zero(number: float) -> float:
    if math.isnan(number) or math.isinf(number) or number == 0:
        return 0.0
    return number


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    try:
        return _finite_or_zero(float(match.group()))
    except OverflowError:
        return 0.0


def parse_float_strict(value: Any) -> float:
    return _leading_float(_text(value))


def parse_int_strict(value: Any) -> int:
    """Integer prefix of ``value``; ``"3.9"`` gives 3, ``"abc"`` gives 0."""
    match = _INT_PREFIX.match(_text(value))
    if not match:
        return 0
    digits = match.group()
    # Values too large for a float are treated like any other non-finite input.
    if not math.isfinite(float(digits)):
        return 0
    return int(digits)


def parse_currency(value: Any) -> float:
    """Money amount from text such as ``"$1,250.50"``.

    Numbers pass through untouched unless they are not finite.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return _finite_or_zero(float(value))
        except OverflowError:
            return 0.0
    return _leading_float(_CURRENCY_CHARS.sub("", _text(value)))


def parse_percent(value: Any) -> float:
    """Fraction from a percentage: ``"75"`` and ``"75%"`` both give 0.75."""
    return _leading_float(_text(value).replace("%", "")) / 100


__all__ = ["parse_currency", "parse_percent", "parse_int_strict", "parse_float_strict"]
