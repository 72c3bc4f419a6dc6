"""Readable reports for strict-parse failures."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from jsonmend.config import settings
from jsonmend.core.strict import InvalidConstantError, loads_strict

logger = logging.getLogger(__name__)

CONTEXT_RADIUS = 30
CHAR_CODE_RADIUS = 5
_CONTEXT_PREFIX = 'Context: "'


@dataclass
class ParseErrorReport:
    """Where and why strict parsing failed."""

    message: str
    line: int  # 1-based
    column: int  # 1-based
    offset: int  # 0-based index into the content
    context: str  # Up to CONTEXT_RADIUS chars each side, whitespace flattened
    pointer: str  # Spaces then '^' under the offending char in ``context``
    char_codes: list[tuple[str, int]] = field(default_factory=list)

    def format(self) -> str:
        """Render the report as multi-line text."""
        codes = " ".join(f"{char!r}({code})" for char, code in self.char_codes)
        return "\n".join(
            [
                f"Failed to parse JSON: {self.message} (line {self.line}, column {self.column})",
                f'{_CONTEXT_PREFIX}{self.context}"',
                " " * len(_CONTEXT_PREFIX) + self.pointer,
                f"Character codes: {codes}",
            ]
        )


def _line_and_column(content: str, offset: int) -> tuple[int, int]:
    line = content.count("\n", 0, offset) + 1
    column = offset - content.rfind("\n", 0, offset)
    return line, column


def _flatten(text: str) -> str:
    return text.replace("\r", " ").replace("\n", " ").replace("\t", " ")


def _build_report(content: str, message: str, offset: int) -> ParseErrorReport:
    line, column = _line_and_column(content, offset)
    window_start = max(0, offset - CONTEXT_RADIUS)
    code_window = content[max(0, offset - CHAR_CODE_RADIUS) : offset + CHAR_CODE_RADIUS]
    return ParseErrorReport(
        message=message,
        line=line,
        column=column,
        offset=offset,
        context=_flatten(content[window_start : offset + CONTEXT_RADIUS]),
        pointer=" " * (offset - window_start) + "^",
        char_codes=[(char, ord(char)) for char in code_window],
    )


def describe_parse_error(content: str) -> ParseErrorReport | None:
    """Explain why ``content`` is not strict JSON.

    Args:
        content: Text to check.

    Returns:
        A ParseErrorReport, or None if the content parses.
    """
    try:
        loads_strict(content)
    except json.JSONDecodeError as e:
        return _build_report(content, e.msg, e.pos)
    except InvalidConstantError as e:
        return _build_report(content, str(e), max(content.find(e.name), 0))
    except RecursionError:
        return _build_report(content, "Nesting too deep", 0)
    return None


def save_debug_file(content: str, directory: str | Path | None = None) -> Path:
    """Write problematic content to a timestamped file for later analysis.

    Args:
        content: The text that failed to parse.
        directory: Target directory. Falls back to the configured
            ``debug_dump_dir`` and then the working directory.

    Returns:
        Path of the written file.
    """
    target_dir = Path(directory or settings.debug_dump_dir or ".")
    target_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
    path = target_dir / f"debug-json-{timestamp}.json"
    path.write_text(content, encoding="utf-8")
    logger.info("Problematic JSON saved to %s", path)
    return path
