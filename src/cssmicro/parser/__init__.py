"""Backtracking micro-parsers for numeric stylesheet values."""

from .numbers import (
    INT32_MAX,
    INT32_MIN,
    Ratio,
    is_weight,
    parse_at_least_one,
    parse_binary,
    parse_complete,
    parse_integer,
    parse_natural_integer,
    parse_natural_number,
    parse_number,
    parse_positive_integer,
    parse_ratio,
    parse_weight,
    saturate_int32,
)
from .source import Checkpoint, StringSource
from .units import Unit, parse_unit

__all__ = [
    "Checkpoint",
    "INT32_MAX",
    "INT32_MIN",
    "Ratio",
    "StringSource",
    "Unit",
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
    "parse_unit",
    "parse_weight",
    "saturate_int32",
]
