"""cssmicro – backtracking numeric micro-parsers for stylesheet values."""

from ._version import __version__

__all__ = [
    "__version__",
    "config",
    "parser",
    "utils",
]
