"""String-literal aware bracket scanning.

``LiteralState`` is the one place that knows where string literals begin and
end. The bracket scanner, every repair pass and the salvage step drive it
one character at a time, so none of them can mistake a bracket, comma or
colon inside a literal for structure.
"""

from enum import Enum

from jsonmend.exceptions import ScanError
from jsonmend.models.span import CLOSERS, OPENER_FOR, OPENERS, ScanResult

QUOTES = "\"'"


class CharRole(str, Enum):
    """What a character means to the literal tracker."""

    CODE = "code"  # Outside any literal
    QUOTE_OPEN = "quote_open"
    LITERAL = "literal"  # Literal content, escape backslashes included
    QUOTE_CLOSE = "quote_close"


class LiteralState:
    """Tracks whether a scan position is inside a string literal."""

    __slots__ = ("quote", "escape_pending")

    def __init__(self):
        self.quote: str | None = None
        self.escape_pending = False

    @property
    def inside(self) -> bool:
        return self.quote is not None

    def step(self, char: str) -> CharRole:
        """Advance over one character and classify it."""
        if self.quote is None:
            if char in QUOTES:
                self.quote = char
                return CharRole.QUOTE_OPEN
            return CharRole.CODE

        if self.escape_pending:
            self.escape_pending = False
            return CharRole.LITERAL
        if char == "\\":
            self.escape_pending = True
            return CharRole.LITERAL
        if char == self.quote:
            self.quote = None
            return CharRole.QUOTE_CLOSE
        return CharRole.LITERAL


def skip_whitespace(text: str, index: int) -> int:
    """First offset at or after ``index`` that is not whitespace."""
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def find_first_opener(text: str, start: int = 0) -> int | None:
    """Offset of the first '{' or '[' at or after ``start``."""
    positions = [pos for pos in (text.find("{", start), text.find("[", start)) if pos != -1]
    return min(positions) if positions else None


def scan_brackets(text: str, start: int = 0) -> ScanResult:
    """Scan forward from an opening bracket to its matching close.

    Args:
        text: Text to scan.
        start: Offset of a '{' or '[' in ``text``.

    Returns:
        ScanResult with the inclusive end offset of the matching close, or,
        when the text runs out first, the brackets (and literal) still open.

    Raises:
        ScanError: If ``start`` does not point at an opening bracket.
    """
    if start < 0 or start >= len(text) or text[start] not in OPENERS:
        raise ScanError(start, text[start] if 0 <= start < len(text) else None)

    state = LiteralState()
    stack: list[str] = []

    for index in range(start, len(text)):
        char = text[index]
        if state.step(char) is not CharRole.CODE:
            continue
        if char in OPENERS:
            stack.append(char)
        elif char in CLOSERS and stack and stack[-1] == OPENER_FOR[char]:
            stack.pop()
            if not stack:
                return ScanResult(start=start, end=index)
        # A closer that does not match the innermost opener is left for the
        # strict parser to reject.

    return ScanResult(
        start=start,
        end=None,
        stack=tuple(stack),
        open_quote=state.quote,
        escape_pending=state.escape_pending,
    )
