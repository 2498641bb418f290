from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from nbinputs.bridge.base import Bridge, CleanupAction
from nbinputs.bridge.errors import LifecycleError
from nbinputs.bridge.owner import OwnerId, current_owner
from nbinputs.observability import event


class RefState(str, Enum):
    REGISTERED = "registered"
    MONITORED = "monitored"
    RELEASED = "released"


class ReleaseReason(str, Enum):
    OWNER_TERMINATED = "owner_terminated"
    REMOVED = "removed"
    SUPERSEDED = "superseded"


@dataclass
class ReferenceRecord:
    """Host-side state of one reference.

    REGISTERED -> MONITORED -> RELEASED, or REGISTERED -> RELEASED when the
    owner goes away before a monitor is armed. RELEASED is terminal.
    """

    ref: str
    owner: OwnerId
    state: RefState = RefState.REGISTERED
    destination: Optional[str] = None
    cleanup: Optional[CleanupAction] = None
    release_reason: Optional[ReleaseReason] = None

    def arm(self, destination: str, cleanup: CleanupAction) -> None:
        if self.state is not RefState.REGISTERED:
            raise LifecycleError(f"cannot monitor reference {self.ref} in state {self.state.value}")
        if cleanup.ref != self.ref:
            raise LifecycleError(f"cleanup action targets {cleanup.ref}, expected {self.ref}")
        self.destination = destination
        self.cleanup = cleanup
        self.state = RefState.MONITORED

    def release(self, reason: ReleaseReason) -> Optional[Tuple[str, CleanupAction]]:
        """Move to RELEASED and return the cleanup to deliver, at most once."""
        if self.state is RefState.RELEASED:
            return None
        was_monitored = self.state is RefState.MONITORED
        self.state = RefState.RELEASED
        self.release_reason = reason
        if was_monitored and self.destination is not None and self.cleanup is not None:
            return self.destination, self.cleanup
        return None


def attach_reference(bridge: Bridge, ref: str, destination: str, *, owner: Optional[OwnerId] = None) -> OwnerId:
    """Register ``ref`` with the host and arm its cleanup monitor.

    Registration completes before the monitor is armed; both complete before
    this returns. The cleanup itself is never invoked from here.
    """
    owner = owner or current_owner()
    bridge.reference_object(ref, owner)
    bridge.monitor_object(ref, destination, CleanupAction.clear_topic(ref))
    event("reference.attached", {"ref": ref, "owner": str(owner), "destination": destination})
    return owner


__all__ = ["RefState", "ReleaseReason", "ReferenceRecord", "attach_reference"]
