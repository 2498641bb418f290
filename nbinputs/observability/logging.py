from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from nbinputs.config import get_settings

logger = logging.getLogger(__name__)

_PAYLOAD_KEYS = ("value", "data", "default", "options", "token")


def safe_redact(event: Dict[str, Any]) -> Dict[str, Any]:
    # Widget values and uploads never reach the log
    redacted = dict(event) if isinstance(event, dict) else {}
    for key in _PAYLOAD_KEYS:
        if key in redacted:
            redacted.pop(key)
    return redacted


def structured_log(event: Dict[str, Any]) -> None:
    try:
        # metric payloads carry a numeric "value" of their own
        safe_event = event if event.get("type") == "metric" else safe_redact(event)
        logger.info(json.dumps(safe_event, separators=(",", ":"), default=str))
    except Exception:
        # logging must never break the caller
        return


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a basic handler to the package logger at the configured level."""
    pkg_logger = logging.getLogger("nbinputs")
    pkg_logger.setLevel((level or get_settings().log_level).upper())
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        pkg_logger.addHandler(handler)


__all__ = ["structured_log", "safe_redact", "configure_logging"]
