"""Recovery outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Tagged union of everything a strict JSON parse can produce. Python's own
# types are the variants: dict (object), list (array), str, int/float
# (number), bool, None (null).
JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


class RecoveryStage(str, Enum):
    """Which step of the fallback chain produced a value."""

    STRICT = "strict"  # Raw input was already valid JSON
    EXTRACTED = "extracted"  # First bracketed span parsed as-is
    REPAIRED = "repaired"  # Span parsed after the repair passes
    SALVAGED = "salvaged"  # Repaired text parsed after cutting a broken tail


@dataclass(frozen=True)
class Success:
    """A recovered value."""

    value: JsonValue
    stage: RecoveryStage = RecoveryStage.STRICT

    def __bool__(self) -> bool:
        return True


class NoResult:
    """Explicit "nothing recovered" marker. Use the ``NO_RESULT`` singleton."""

    _instance: NoResult | None = None

    def __new__(cls) -> NoResult:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_RESULT"


NO_RESULT = NoResult()

Outcome = Union[Success, NoResult]


def unwrap(outcome: Outcome) -> JsonValue:
    """Map an outcome to the null-like external contract."""
    if isinstance(outcome, Success):
        return outcome.value
    return None
