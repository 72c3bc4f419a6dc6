"""Span models produced by the bracket scanner and the extractor."""

from dataclasses import dataclass

OPENERS = "{["
CLOSERS = "}]"
CLOSER_FOR = {"{": "}", "[": "]"}
OPENER_FOR = {"}": "{", "]": "["}


@dataclass(frozen=True)
class ScanResult:
    """Report of a bracket scan started at an opening bracket."""

    start: int  # Offset of the opening bracket
    end: int | None  # Inclusive offset of the matching close, None if unterminated
    stack: tuple[str, ...] = ()  # Brackets still open at end of text, outermost first
    open_quote: str | None = None  # Quote of a literal left open at end of text
    escape_pending: bool = False  # Text ended right after a backslash inside a literal

    @property
    def terminated(self) -> bool:
        return self.end is not None

    @property
    def depth(self) -> int:
        return len(self.stack)

    def closers(self) -> str:
        """Closing characters that balance the stack, innermost first."""
        return "".join(CLOSER_FOR[bracket] for bracket in reversed(self.stack))


@dataclass(frozen=True)
class JsonSpan:
    """A JSON-shaped substring of some raw text.

    Offsets are Python string indices; ``end`` is exclusive so that
    ``raw[span.start:span.end] == span.text``.
    """

    start: int
    end: int
    text: str
    scan: ScanResult | None = None  # Report the span was cut from

    @property
    def terminated(self) -> bool:
        return self.scan is None or self.scan.terminated

    @property
    def pending(self) -> tuple[str, ...]:
        """Brackets still open at the end of an unterminated span."""
        return self.scan.stack if self.scan else ()

    def __len__(self) -> int:
        return self.end - self.start
