"""jsonmend - recover JSON values from language model output."""

from jsonmend.core.orchestrator import (
    JsonRecovery,
    extract_json_from_content,
    parse_robustly,
    recover,
    repair_malformed_json,
)
from jsonmend.models import NO_RESULT, JsonValue, NoResult, Outcome, RecoveryStage, Success

__version__ = "0.1.0"

__all__ = [
    "JsonRecovery",
    "extract_json_from_content",
    "parse_robustly",
    "recover",
    "repair_malformed_json",
    "JsonValue",
    "NO_RESULT",
    "NoResult",
    "Outcome",
    "RecoveryStage",
    "Success",
]
