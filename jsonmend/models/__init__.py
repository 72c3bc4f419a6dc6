"""Data models for jsonmend."""

from jsonmend.models.outcome import (
    NO_RESULT,
    JsonValue,
    NoResult,
    Outcome,
    RecoveryStage,
    Success,
    unwrap,
)
from jsonmend.models.span import (
    CLOSER_FOR,
    CLOSERS,
    OPENER_FOR,
    OPENERS,
    JsonSpan,
    ScanResult,
)

__all__ = [
    # Outcome
    "JsonValue",
    "NO_RESULT",
    "NoResult",
    "Outcome",
    "RecoveryStage",
    "Success",
    "unwrap",
    # Span
    "CLOSER_FOR",
    "CLOSERS",
    "OPENER_FOR",
    "OPENERS",
    "JsonSpan",
    "ScanResult",
]
