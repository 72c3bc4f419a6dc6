"""Strict JSON parsing that reports failure as an outcome."""

import json

from jsonmend.models.outcome import NO_RESULT, Outcome, RecoveryStage, Success


class InvalidConstantError(ValueError):
    """Raised for the non-standard NaN / Infinity constants."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid JSON constant: {name}")


def _reject_constant(name: str):
    raise InvalidConstantError(name)


def loads_strict(text: str):
    """``json.loads`` restricted to the standard grammar."""
    return json.loads(text, parse_constant=_reject_constant)


def strict_parse(text: str, stage: RecoveryStage = RecoveryStage.STRICT) -> Outcome:
    """Parse ``text`` strictly, returning NO_RESULT instead of raising."""
    try:
        return Success(loads_strict(text), stage)
    except (ValueError, RecursionError):
        return NO_RESULT
