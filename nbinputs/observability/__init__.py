from __future__ import annotations

from .logging import configure_logging, safe_redact, structured_log
from .metrics import counter, event

__all__ = [
    "configure_logging",
    "structured_log",
    "safe_redact",
    "counter",
    "event",
]
