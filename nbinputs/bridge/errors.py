from __future__ import annotations


class HostCommunicationError(RuntimeError):
    """Raised when a round trip to the host fails at the transport level."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"host {operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class BridgeTimeoutError(HostCommunicationError):
    """Raised when the host does not answer within the configured timeout."""


class LifecycleError(RuntimeError):
    """Raised host-side for an illegal reference state transition."""


__all__ = [
    "HostCommunicationError",
    "BridgeTimeoutError",
    "LifecycleError",
]
