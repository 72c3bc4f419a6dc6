"""Heuristic repair of malformed JSON candidates.

Four passes run once each, in order:

1. ``normalize_quotes``: single-quoted literals and bare keys become
   double-quoted.
2. ``drop_trailing_commas``: commas before a closer (or the end) go away.
3. ``complete_balance``: missing closers are appended.
4. ``collapse_double_escapes``: ``\\\\"`` inside a literal becomes ``\\"``.

Every pass walks the text with ``LiteralState`` and leaves literal content
alone, except pass 4, whose whole job is one rewrite inside literals.
"""

import re

from jsonmend.core.scanner import (
    CharRole,
    LiteralState,
    find_first_opener,
    scan_brackets,
    skip_whitespace,
)
from jsonmend.models.span import CLOSERS, ScanResult

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_DOUBLE_ESCAPED_QUOTE = '\\\\"'
_KEY_PREFIXES = ("{", ",")


def normalize_quotes(text: str) -> str:
    """Rewrite single-quoted literals and bare object keys with double quotes."""
    out: list[str] = []
    state = LiteralState()
    last_code = ""  # Last non-space character outside literals
    index = 0
    length = len(text)

    while index < length:
        char = text[index]

        if state.quote == "'":
            if char == "\\" and index + 1 < length:
                escaped = text[index + 1]
                state.step(char)
                state.step(escaped)
                # \' has no meaning once the delimiter is '"'
                out.append("'" if escaped == "'" else char + escaped)
                index += 2
                continue
            if state.step(char) is CharRole.QUOTE_CLOSE:
                out.append('"')
                last_code = '"'
            elif char == '"':
                out.append('\\"')
            else:
                out.append(char)
            index += 1
            continue

        if state.inside:
            if state.step(char) is CharRole.QUOTE_CLOSE:
                last_code = '"'
            out.append(char)
            index += 1
            continue

        if last_code in _KEY_PREFIXES:
            match = _IDENTIFIER_RE.match(text, index)
            if match:
                word = match.group()
                after = skip_whitespace(text, match.end())
                if after < length and text[after] == ":":
                    out.append(f'"{word}"')
                    last_code = '"'
                else:
                    out.append(word)
                    last_code = word[-1]
                index = match.end()
                continue

        role = state.step(char)
        out.append('"' if role is CharRole.QUOTE_OPEN else char)
        if role is CharRole.CODE and not char.isspace():
            last_code = char
        index += 1

    return "".join(out)


def drop_trailing_commas(text: str) -> str:
    """Remove commas followed only by whitespace and then a closer or the end."""
    out: list[str] = []
    state = LiteralState()

    for index, char in enumerate(text):
        if state.step(char) is CharRole.CODE and char == ",":
            after = skip_whitespace(text, index + 1)
            if after == len(text) or text[after] in CLOSERS:
                continue
        out.append(char)

    return "".join(out)


def complete_balance(text: str, scan: ScanResult | None = None) -> str:
    """Append whatever the first bracketed value needs to be closed.

    A literal left open at the end is closed first (dropping a dangling
    escape backslash), then the open brackets, innermost first. ``scan``
    is a report already taken over ``text``; without one the text is
    scanned from its first opening bracket.
    """
    if scan is None:
        start = find_first_opener(text)
        if start is None:
            return text
        scan = scan_brackets(text, start)

    if scan.terminated:
        return text

    if scan.open_quote:
        body = text[:-1] if scan.escape_pending else text
        return body + scan.open_quote + scan.closers()
    return text + scan.closers()


def collapse_double_escapes(text: str) -> str:
    """Turn ``\\\\"`` inside a literal into ``\\"``.

    Models sometimes escape a quote twice. The rewrite cannot tell that
    apart from a literal backslash right before a closing quote, which it
    also rewrites.
    """
    out: list[str] = []
    state = LiteralState()
    index = 0

    while index < len(text):
        if (
            state.inside
            and not state.escape_pending
            and text.startswith(_DOUBLE_ESCAPED_QUOTE, index)
        ):
            out.append('\\"')
            index += len(_DOUBLE_ESCAPED_QUOTE)
            continue
        char = text[index]
        state.step(char)
        out.append(char)
        index += 1

    return "".join(out)


REPAIR_PASSES = (
    normalize_quotes,
    drop_trailing_commas,
    complete_balance,
    collapse_double_escapes,
)


def repair(text: str, scan: ScanResult | None = None) -> str:
    """Run every repair pass over ``text`` once, in order.

    ``scan`` is the report ``text`` was extracted with. Balance completion
    reuses it as long as the passes before it left the text unchanged.
    """
    extracted = text
    for repair_pass in REPAIR_PASSES:
        if repair_pass is complete_balance:
            text = complete_balance(text, scan if text == extracted else None)
        else:
            text = repair_pass(text)
    return text

