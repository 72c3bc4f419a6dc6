"""Robust JSON recovery - the fallback chain callers use."""

import logging
from typing import Any

from jsonmend.config import Settings
from jsonmend.config import settings as default_settings
from jsonmend.core.extractor import extract
from jsonmend.core.repairer import repair
from jsonmend.core.salvage import salvage
from jsonmend.core.strict import strict_parse
from jsonmend.models.outcome import NO_RESULT, JsonValue, Outcome, RecoveryStage, unwrap
from jsonmend.tracing.tracer import RecoveryTracer

logger = logging.getLogger(__name__)


def _is_text(content: Any) -> bool:
    return isinstance(content, str) and bool(content)


class JsonRecovery:
    """Recovers JSON values from model output.

    The chain is strict parse, then extraction of the first bracketed span,
    then repair of that span, then (optionally) trimming of trailing prose
    from an unterminated span. The first stage that parses wins, so valid
    input is never repaired. Nothing here raises: every failure ends in
    NO_RESULT.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the recovery chain.

        Args:
            settings: Optional settings. Uses the environment-loaded defaults
                if not provided.
        """
        self.settings = settings or default_settings

    def _note(
        self,
        tracer: RecoveryTracer | None,
        stage: str,
        succeeded: bool,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        if tracer is not None:
            tracer.log(stage, succeeded, message, data)
        if self.settings.debug:
            logger.debug("%s %s: %s", stage, "ok" if succeeded else "miss", message)

    def recover(self, content: str | None, tracer: RecoveryTracer | None = None) -> Outcome:
        """Run the fallback chain over ``content``.

        Args:
            content: Raw model output. None and "" yield NO_RESULT.
            tracer: Optional tracer that receives one event per stage tried.

        Returns:
            Success carrying the value and the stage that produced it, or
            NO_RESULT.
        """
        if not _is_text(content):
            self._note(tracer, "input", False, "Empty or non-text input")
            return NO_RESULT

        outcome = strict_parse(content, RecoveryStage.STRICT)
        self._note(tracer, RecoveryStage.STRICT.value, bool(outcome), "Direct parse")
        if outcome:
            return outcome

        span = extract(content)
        if span is None:
            self._note(tracer, RecoveryStage.EXTRACTED.value, False, "No bracket found")
            return NO_RESULT

        span_info = {"start": span.start, "end": span.end, "terminated": span.terminated}
        outcome = strict_parse(span.text, RecoveryStage.EXTRACTED)
        self._note(tracer, RecoveryStage.EXTRACTED.value, bool(outcome), "Parse of extracted span", span_info)
        if outcome:
            return outcome

        repaired = repair(span.text, span.scan)
        outcome = strict_parse(repaired, RecoveryStage.REPAIRED)
        self._note(
            tracer,
            RecoveryStage.REPAIRED.value,
            bool(outcome),
            "Parse of repaired span",
            {"length": len(repaired)},
        )
        if outcome or span.terminated or not self.settings.salvage_truncated:
            return outcome

        outcome = salvage(repaired, self.settings.max_salvage_attempts)
        self._note(tracer, RecoveryStage.SALVAGED.value, bool(outcome), "Parse with trailing prose trimmed")
        return outcome

    def parse_robustly(self, content: str | None, tracer: RecoveryTracer | None = None) -> JsonValue:
        """Recover a value, or None when nothing could be recovered."""
        return unwrap(self.recover(content, tracer))

    def extract_json_from_content(self, content: str | None) -> str | None:
        """Return the first JSON-shaped span of ``content``, or None."""
        if not _is_text(content):
            return None
        span = extract(content)
        return span.text if span else None

    def repair_malformed_json(self, content: str | None) -> str | None:
        """Return ``content`` after the repair passes, or None for empty input."""
        if not _is_text(content):
            return None
        return repair(content)


_default: JsonRecovery | None = None


def get_recovery() -> JsonRecovery:
    """Get the shared recovery instance built from the default settings."""
    global _default
    if _default is None:
        _default = JsonRecovery()
    return _default


def recover(content: str | None, tracer: RecoveryTracer | None = None) -> Outcome:
    """Run the fallback chain with the default settings."""
    return get_recovery().recover(content, tracer)


def parse_robustly(content: str | None) -> JsonValue:
    """Recover a JSON value from model output, or None.

    Note that the JSON document ``null`` also yields None; use ``recover``
    to tell the two apart.
    """
    return get_recovery().parse_robustly(content)


def extract_json_from_content(content: str | None) -> str | None:
    """Return the first JSON-shaped span of ``content``, or None."""
    return get_recovery().extract_json_from_content(content)


def repair_malformed_json(content: str | None) -> str | None:
    """Return the repaired form of ``content``, or None for empty input."""
    return get_recovery().repair_malformed_json(content)
