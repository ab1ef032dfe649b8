"""Character cursor shared by the micro-parsers."""
from __future__ import annotations

from types import TracebackType
from typing import Optional, Type

__all__ = ["Checkpoint", "EOF", "StringSource", "is_space"]

EOF = ""

_SPACES = frozenset(" \t\n\r\f")


def is_space(char: str) -> bool:
    """Return ``True`` for the whitespace characters recognised by CSS."""

    return char in _SPACES


class StringSource:
    """Mutable cursor over a stylesheet value.

    The rules built on top of this class only rely on three operations:
    reading :attr:`index`, rewinding with :meth:`back_to` and the
    skip-read-skip step exposed by :meth:`skip_get_skip`.
    """

    __slots__ = ("_text", "_index")

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"StringSource expects a str, got {type(text).__name__}")
        self._text = text
        self._index = 0

    def __repr__(self) -> str:
        return f"StringSource(index={self._index}, remaining={self.remaining!r})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> str:
        if self._index < len(self._text):
            return self._text[self._index]
        return EOF

    @property
    def remaining(self) -> str:
        return self._text[self._index:]

    @property
    def is_done(self) -> bool:
        return self._index >= len(self._text)

    def peek(self, offset: int = 1) -> str:
        position = self._index + offset
        if 0 <= position < len(self._text):
            return self._text[position]
        return EOF

    def next(self) -> str:
        """Advance by one character and return the new current character."""

        if self._index < len(self._text):
            self._index += 1
        return self.current

    def back_to(self, index: int) -> None:
        self._index = min(max(index, 0), len(self._text))

    def skip_spaces_and_comments(self) -> str:
        """Skip whitespace and ``/* ... */`` comments, returning the new current character."""

        text = self._text
        length = len(text)
        while self._index < length:
            char = text[self._index]
            if char in _SPACES:
                self._index += 1
            elif char == "/" and self.peek() == "*":
                end = text.find("*/", self._index + 2)
                # unterminated comments run to the end of the input
                self._index = length if end < 0 else end + 2
            else:
                break
        return self.current

    def skip_get_skip(self) -> str:
        """Skip blanks, take one character, skip blanks again.

        Returns the taken character, or :data:`EOF` when the input is exhausted.
        """

        self.skip_spaces_and_comments()
        char = self.current
        self.next()
        self.skip_spaces_and_comments()
        return char

    def checkpoint(self) -> "Checkpoint":
        return Checkpoint(self)


class Checkpoint:
    """Guard restoring a :class:`StringSource` position unless committed.

    Used as a context manager::

        with source.checkpoint() as attempt:
            value = parse_something(source)
            if value is not None:
                attempt.commit()
                return value
        return None
    """

    __slots__ = ("source", "index", "committed")

    def __init__(self, source: StringSource) -> None:
        self.source = source
        self.index = source.index
        self.committed = False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.source.back_to(self.index)

    def __enter__(self) -> "Checkpoint":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is not None or not self.committed:
            self.rollback()
