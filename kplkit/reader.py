"""Character reader that tracks line and column positions."""

from __future__ import annotations

from typing import TextIO


class CharReader:
    """Reads a text stream one character at a time.

    ``current_char`` holds the character last read, or ``None`` at end of
    input. Lines count from 1; the column is 0 right after a newline.
    The first character is read on construction.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.line = 1
        self.col = 0
        self.current_char: str | None = None
        self.read_char()

    def read_char(self) -> str | None:
        """Advance to the next character and return it (``None`` at end)."""
        ch = self._stream.read(1)
        self.current_char = ch if ch else None
        self.col += 1
        if self.current_char == "\n":
            self.line += 1
            self.col = 0
        return self.current_char

    def close(self) -> None:
        """Close the underlying stream."""
        self._stream.close()

    def __enter__(self) -> CharReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_reader(path: str) -> CharReader:
    """Open a source file for reading; raises ``OSError`` if it cannot be opened."""
    stream = open(path, "r", encoding="latin-1", newline="")
    return CharReader(stream)