"""Diagnostics for content that fails strict parsing."""

from .parse_error import ParseErrorReport, describe_parse_error, save_debug_file

__all__ = [
    "ParseErrorReport",
    "describe_parse_error",
    "save_debug_file",
]
