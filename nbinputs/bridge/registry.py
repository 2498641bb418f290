from __future__ import annotations

import logging
from typing import Optional

from nbinputs.bridge.base import Bridge
from nbinputs.bridge.http_bridge import HttpBridge
from nbinputs.bridge.in_memory import InMemoryBridge
from nbinputs.bridge.owner import release_owner_at_exit, release_owner_now
from nbinputs.config import get_settings

logger = logging.getLogger(__name__)

_bridge: Optional[Bridge] = None


def get_bridge() -> Bridge:
    global _bridge
    if _bridge is not None:
        return _bridge
    s = get_settings()
    if s.standalone:
        logger.info("[BRIDGE] no bridge url configured, using standalone in-memory host")
        _bridge = InMemoryBridge()
    else:
        _bridge = HttpBridge()
        release_owner_at_exit(_bridge)
    return _bridge


def set_bridge(bridge: Bridge) -> None:
    global _bridge
    _bridge = bridge


def reset_bridge() -> None:
    """Drop the process-wide bridge, releasing this owner's references first."""
    global _bridge
    if _bridge is not None:
        release_owner_now(_bridge)
        _bridge.close()
    _bridge = None


__all__ = ["get_bridge", "set_bridge", "reset_bridge"]
