"""Trim explanatory prose from the tail of an unterminated candidate.

Models often stop writing JSON halfway and start explaining it instead:
``{"a": 1, "b": 2 This is the answer``. Balance completion alone cannot fix
that, because the prose ends up inside the object. Salvage cuts the text
just after the last complete value that prose follows, then closes the
brackets again.

A member whose value is missing or cut off mid-token is not prose, so it is
never cut away: ``{"a": 1, "b": tru`` stays unrecoverable.
"""

import re

from jsonmend.core.repairer import complete_balance
from jsonmend.core.scanner import CharRole, LiteralState, skip_whitespace
from jsonmend.core.strict import strict_parse
from jsonmend.models.outcome import NO_RESULT, Outcome, RecoveryStage
from jsonmend.models.span import CLOSERS, OPENER_FOR, OPENERS

_SCALAR_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null")
_ELEMENT_PREFIXES = ("[", ",")


def _in_value_position(stack: list[str], previous: str) -> bool:
    if not stack:
        return False
    if previous == ":":
        return True
    return stack[-1] == "[" and previous in _ELEMENT_PREFIXES


def _token_ends(text: str, index: int) -> bool:
    return index == len(text) or not (text[index].isalnum() or text[index] in "_$.")


def _prose_follows(text: str, index: int) -> bool:
    """True when the code after ``index`` reads as words, not JSON.

    One separating comma is allowed, as in ``"b": 2, More text``.
    """
    index = skip_whitespace(text, index)
    if index < len(text) and text[index] == ",":
        index = skip_whitespace(text, index + 1)
    return index < len(text) and text[index].isalpha()


def cut_points(text: str) -> list[int]:
    """Offsets just past a complete value that prose follows, in text order.

    A complete value is a number, ``true``/``false``/``null`` or a closed
    literal in value position, or a nested closer. ``text[:point]`` then
    ends on that value.
    """
    points: list[int] = []
    state = LiteralState()
    stack: list[str] = []
    previous = ""  # Last non-space character outside literals
    literal_is_value = False
    index = 0

    while index < len(text):
        char = text[index]
        role = state.step(char)

        if role is CharRole.QUOTE_OPEN:
            literal_is_value = _in_value_position(stack, previous)
        elif role is CharRole.QUOTE_CLOSE:
            if literal_is_value and _prose_follows(text, index + 1):
                points.append(index + 1)
            previous = char
        elif role is CharRole.CODE and not char.isspace():
            if char in OPENERS:
                stack.append(char)
            elif char in CLOSERS:
                if stack and stack[-1] == OPENER_FOR[char]:
                    stack.pop()
                    if stack and _prose_follows(text, index + 1):
                        points.append(index + 1)
            elif _in_value_position(stack, previous):
                match = _SCALAR_RE.match(text, index)
                if match and _token_ends(text, match.end()):
                    end = match.end()
                    if _prose_follows(text, end):
                        points.append(end)
                    previous = text[end - 1]
                    index = end
                    continue
            previous = char

        index += 1

    return points


def salvage(text: str, max_attempts: int = 32) -> Outcome:
    """Parse the longest prefix of ``text`` that ends before trailing prose.

    Args:
        text: A repaired, unterminated candidate that failed strict parsing.
        max_attempts: Cut points to try, starting from the end.

    Returns:
        Success tagged SALVAGED, or NO_RESULT.
    """
    if max_attempts <= 0:
        return NO_RESULT

    for point in reversed(cut_points(text)[-max_attempts:]):
        candidate = complete_balance(text[:point])
        outcome = strict_parse(candidate, RecoveryStage.SALVAGED)
        if outcome:
            return outcome

    return NO_RESULT
