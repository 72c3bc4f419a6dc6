"""Exceptions for jsonmend.

The public recovery functions never raise. These are reserved for misuse of
internal building blocks such as the bracket scanner.
"""


class JsonMendError(Exception):
    """Base class for jsonmend errors."""


class ScanError(JsonMendError, ValueError):
    """Raised when the bracket scanner is started on a non-bracket offset."""

    def __init__(self, offset: int, char: str | None):
        self.offset = offset
        self.char = char
        found = repr(char) if char is not None else "end of text"
        super().__init__(f"Expected '{{' or '[' at offset {offset}, found {found}")
