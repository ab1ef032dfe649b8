"""Backtracking rules turning numeric literals into typed values.

Every rule takes a :class:`~cssmicro.parser.source.StringSource` and returns
either the parsed value, leaving the cursor just past the consumed text, or
``None`` with the cursor restored to where the rule was entered. Literals
carrying a dimension (``12px``, ``50%``) are never accepted here.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..config import get_settings
from ..utils.logging import log_event
from .source import StringSource
from .units import parse_unit

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "Ratio",
    "is_weight",
    "parse_at_least_one",
    "parse_binary",
    "parse_complete",
    "parse_integer",
    "parse_natural_integer",
    "parse_natural_number",
    "parse_number",
    "parse_positive_integer",
    "parse_ratio",
    "parse_weight",
    "saturate_int32",
]

LOGGER = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_PATTERN = re.compile(r"([+-]?)([0-9]+)")
_SATURABLE_PATTERN = re.compile(r"(-?)([0-9]+)")

# len(str(INT32_MAX)) == len(str(-INT32_MIN)) == 10
_INT32_DIGITS = 10

T = TypeVar("T")


@dataclass(frozen=True)
class Ratio:
    """Two numbers separated by a solidus, e.g. ``16/9`` for aspect ratios."""

    numerator: float
    denominator: float

    @property
    def value(self) -> Optional[float]:
        if self.denominator == 0:
            return None
        return self.numerator / self.denominator

    @property
    def css_text(self) -> str:
        return f"{_format_number(self.numerator)}/{_format_number(self.denominator)}"

    def __str__(self) -> str:
        return self.css_text


def _format_number(value: float) -> str:
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def _to_float(literal: str) -> Optional[float]:
    if _FLOAT_PATTERN.fullmatch(literal) is None:
        return None
    value = float(literal)
    if not math.isfinite(value):
        return None
    return value


def _bounded_int(negative: bool, digits: str) -> Optional[int]:
    significant = digits.lstrip("0") or "0"
    if len(significant) > _INT32_DIGITS:
        return None
    value = -int(significant) if negative else int(significant)
    if INT32_MIN <= value <= INT32_MAX:
        return value
    return None


def _to_int32(literal: str) -> Optional[int]:
    match = _INTEGER_PATTERN.fullmatch(literal)
    if match is None:
        return None
    return _bounded_int(match.group(1) == "-", match.group(2))


def saturate_int32(literal: str) -> Optional[int]:
    """Clamp an optionally negative run of decimal digits to the int32 range.

    Returns ``None`` when ``literal`` is anything other than ``-?[0-9]+``.
    """

    match = _SATURABLE_PATTERN.fullmatch(literal)
    if match is None:
        return None
    negative = match.group(1) == "-"
    value = _bounded_int(negative, match.group(2))
    if value is not None:
        return value
    return INT32_MIN if negative else INT32_MAX


def is_weight(value: int) -> bool:
    """Return ``True`` for the font weights 100, 200, ... 900."""

    if value % 100 == 0:
        hundreds = value // 100
        return 0 < hundreds < 10
    return False


def parse_number(source: StringSource) -> Optional[float]:
    """Parse a dimensionless number such as ``1.5``, ``-.25`` or ``3e2``."""

    with source.checkpoint() as attempt:
        unit = parse_unit(source)
        if unit is None or not unit.is_dimensionless:
            return None
        value = _to_float(unit.value)
        if value is None:
            return None
        attempt.commit()
        return value


def parse_integer(source: StringSource) -> Optional[int]:
    """Parse a signed 32-bit integer.

    Out-of-range literals made only of digits (with an optional leading minus)
    saturate to :data:`INT32_MIN` or :data:`INT32_MAX` instead of failing, as
    long as they are no longer than the configured
    ``max_integer_literal_length``. In-range literals are accepted whatever
    their length, so ``"0" * 300 + "1"`` still yields ``1``.
    """

    with source.checkpoint() as attempt:
        unit = parse_unit(source)
        if unit is None or not unit.is_dimensionless:
            return None

        literal = unit.value
        value = _to_int32(literal)
        if value is None:
            limit = get_settings().max_integer_literal_length
            if len(literal) > limit:
                log_event(
                    LOGGER,
                    "integer.rejected_length",
                    level=logging.DEBUG,
                    length=len(literal),
                    limit=limit,
                )
                return None
            value = saturate_int32(literal)
            if value is None:
                return None
            log_event(LOGGER, "integer.saturated", level=logging.DEBUG, literal=literal, value=value)

        attempt.commit()
        return value


def parse_ratio(source: StringSource) -> Optional[Ratio]:
    """Parse ``<number> / <number>``; blanks and comments may surround the solidus."""

    with source.checkpoint() as attempt:
        top = parse_number(source)
        separator = source.skip_get_skip()
        bottom = parse_number(source)

        if top is not None and bottom is not None and separator == "/":
            attempt.commit()
            return Ratio(top, bottom)
        return None


def parse_natural_number(source: StringSource) -> Optional[float]:
    with source.checkpoint() as attempt:
        value = parse_number(source)
        if value is not None and value >= 0:
            attempt.commit()
            return value
        return None


def parse_at_least_one(source: StringSource) -> Optional[float]:
    with source.checkpoint() as attempt:
        value = parse_number(source)
        if value is not None and value >= 1:
            attempt.commit()
            return value
        return None


def parse_natural_integer(source: StringSource) -> Optional[int]:
    with source.checkpoint() as attempt:
        value = parse_integer(source)
        if value is not None and value >= 0:
            attempt.commit()
            return value
        return None


def parse_positive_integer(source: StringSource) -> Optional[int]:
    with source.checkpoint() as attempt:
        value = parse_integer(source)
        if value is not None and value > 0:
            attempt.commit()
            return value
        return None


def parse_weight(source: StringSource) -> Optional[int]:
    """Parse a numeric font weight (``100`` to ``900`` in steps of 100)."""

    with source.checkpoint() as attempt:
        value = parse_positive_integer(source)
        if value is not None and is_weight(value):
            attempt.commit()
            return value
        return None


def parse_binary(source: StringSource) -> Optional[int]:
    with source.checkpoint() as attempt:
        value = parse_integer(source)
        if value == 0 or value == 1:
            attempt.commit()
            return value
        return None


def parse_complete(text: str, rule: Callable[[StringSource], Optional[T]]) -> Optional[T]:
    """Apply ``rule`` to the whole of ``text``.

    Leading and trailing blanks or comments are ignored; any other leftover
    input makes the result ``None``.
    """

    source = StringSource(text)
    source.skip_spaces_and_comments()
    value = rule(source)
    if value is None:
        return None
    source.skip_spaces_and_comments()
    if not source.is_done:
        return None
    return value
