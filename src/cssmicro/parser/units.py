"""Lexer for numeric literals followed by an optional dimension."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .source import EOF, StringSource

__all__ = ["Unit", "is_digit", "is_name_char", "is_name_start", "parse_unit"]


@dataclass(frozen=True)
class Unit:
    """Numeric literal split into its number text and dimension suffix."""

    value: str
    dimension: str = ""

    @property
    def is_dimensionless(self) -> bool:
        return self.dimension == ""


def is_digit(char: str) -> bool:
    return char != EOF and "0" <= char <= "9"


def is_name_start(char: str) -> bool:
    if char == EOF:
        return False
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_" or ord(char) >= 0x80


def is_name_char(char: str) -> bool:
    return is_name_start(char) or is_digit(char) or char == "-"


def _starts_identifier(first: str, second: str) -> bool:
    if first == "-":
        return is_name_start(second) or second == "-"
    return is_name_start(first)


def _skip_digits(source: StringSource) -> None:
    while is_digit(source.current):
        source.next()


def _number_text(source: StringSource) -> Optional[str]:
    start = source.index
    if source.current in ("+", "-"):
        source.next()

    if is_digit(source.current):
        _skip_digits(source)
        if source.current == "." and is_digit(source.peek()):
            source.next()
            _skip_digits(source)
    elif source.current == "." and is_digit(source.peek()):
        source.next()
        _skip_digits(source)
    else:
        return None

    if source.current in ("e", "E"):
        following = source.peek()
        if is_digit(following):
            source.next()
            _skip_digits(source)
        elif following in ("+", "-") and is_digit(source.peek(2)):
            source.next()
            source.next()
            _skip_digits(source)

    return source.text[start:source.index]


def _dimension_text(source: StringSource) -> str:
    if source.current == "%":
        source.next()
        return "%"
    if not _starts_identifier(source.current, source.peek()):
        return ""
    start = source.index
    while is_name_char(source.current):
        source.next()
    return source.text[start:source.index]


def parse_unit(source: StringSource) -> Optional[Unit]:
    """Read a numeric literal and its trailing dimension from ``source``.

    ``12px`` yields ``Unit("12", "px")``, ``50%`` yields ``Unit("50", "%")``
    and ``-.5`` yields ``Unit("-.5", "")``. When no literal starts at the
    current position the cursor is left untouched and ``None`` is returned.
    """

    with source.checkpoint() as attempt:
        value = _number_text(source)
        if value is None:
            return None
        dimension = _dimension_text(source)
        attempt.commit()
        return Unit(value=value, dimension=dimension)
