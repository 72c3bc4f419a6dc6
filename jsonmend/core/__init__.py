"""Tolerant JSON recovery engine."""

from jsonmend.core.extractor import extract
from jsonmend.core.orchestrator import (
    JsonRecovery,
    extract_json_from_content,
    get_recovery,
    parse_robustly,
    recover,
    repair_malformed_json,
)
from jsonmend.core.repairer import (
    REPAIR_PASSES,
    collapse_double_escapes,
    complete_balance,
    drop_trailing_commas,
    normalize_quotes,
    repair,
)
from jsonmend.core.salvage import cut_points, salvage
from jsonmend.core.scanner import (
    CharRole,
    LiteralState,
    find_first_opener,
    scan_brackets,
    skip_whitespace,
)
from jsonmend.core.strict import InvalidConstantError, loads_strict, strict_parse

__all__ = [
    # Scanner
    "CharRole",
    "LiteralState",
    "find_first_opener",
    "scan_brackets",
    "skip_whitespace",
    # Extractor
    "extract",
    # Repairer
    "REPAIR_PASSES",
    "collapse_double_escapes",
    "complete_balance",
    "drop_trailing_commas",
    "normalize_quotes",
    "repair",
    # Salvage
    "cut_points",
    "salvage",
    # Strict parsing
    "InvalidConstantError",
    "loads_strict",
    "strict_parse",
    # Orchestrator
    "JsonRecovery",
    "extract_json_from_content",
    "get_recovery",
    "parse_robustly",
    "recover",
    "repair_malformed_json",
]
