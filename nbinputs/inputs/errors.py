from __future__ import annotations

from nbinputs.bridge.errors import BridgeTimeoutError, HostCommunicationError


class ConstructionError(ValueError):
    """Raised for invalid input options, before anything is registered with the host."""


class InputReadError(RuntimeError):
    """Raised when the host has no value for an input (not rendered yet, removed, or a host-side error)."""

    def __init__(self, widget_id: str, reason: str) -> None:
        super().__init__(f"failed to read input value, reason: {reason}")
        self.widget_id = widget_id
        self.reason = reason


__all__ = [
    "ConstructionError",
    "InputReadError",
    "HostCommunicationError",
    "BridgeTimeoutError",
]
