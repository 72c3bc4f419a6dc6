"""Stage tracing for jsonmend recovery."""

from .tracer import RecoveryTracer, StageEvent

__all__ = [
    "RecoveryTracer",
    "StageEvent",
]
