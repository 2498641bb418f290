from __future__ import annotations

import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nbinputs.bridge.base import Bridge, BridgeReply, CleanupAction, FileRef
from nbinputs.bridge.bus import SubscriptionBus
from nbinputs.bridge.errors import HostCommunicationError, LifecycleError
from nbinputs.bridge.lifecycle import ReferenceRecord, RefState, ReleaseReason
from nbinputs.bridge.owner import OwnerId
from nbinputs.observability import event

NOT_RENDERED = "not_rendered"
FILE_NOT_FOUND = "not_found"


class InMemoryBridge(Bridge):
    """Process-local host used in standalone mode and by the test suite.

    Keeps the host side of the protocol: live values keyed by persistent id,
    one record per reference with its cleanup monitor, and one
    ``SubscriptionBus`` per destination address.
    """

    def __init__(self, *, token: Optional[str] = None) -> None:
        self._token = token or uuid.uuid4().hex
        self._lock = threading.RLock()
        self._refs: Dict[str, ReferenceRecord] = {}
        self._buses: Dict[str, SubscriptionBus] = {}
        self._values: Dict[str, Any] = {}
        self._rendered: Dict[str, str] = {}
        self._files: Dict[str, Path] = {}

    # ------------------------
    # Bridge operations
    # ------------------------
    def generate_token(self) -> str:
        return self._token

    def reference_object(self, ref: str, owner: OwnerId) -> None:
        with self._lock:
            if ref in self._refs:
                raise HostCommunicationError("reference_object", f"reference {ref} already registered")
            self._refs[ref] = ReferenceRecord(ref=ref, owner=owner)

    def monitor_object(self, ref: str, destination: str, cleanup: CleanupAction) -> None:
        with self._lock:
            record = self._refs.get(ref)
            if record is None:
                raise HostCommunicationError("monitor_object", f"unknown reference {ref}")
            try:
                record.arm(destination, cleanup)
            except LifecycleError as exc:
                raise HostCommunicationError("monitor_object", str(exc)) from exc

    def get_input_value(self, widget_id: str) -> BridgeReply:
        with self._lock:
            if widget_id not in self._values:
                return BridgeReply.failure(NOT_RENDERED)
            return BridgeReply.success(self._values[widget_id])

    def get_file_path(self, file_ref: FileRef) -> BridgeReply:
        with self._lock:
            path = self._files.get(file_ref.file_id)
        if path is None:
            return BridgeReply.failure(FILE_NOT_FOUND)
        return BridgeReply.success(str(path))

    def release_owner(self, owner: OwnerId) -> None:
        with self._lock:
            refs = [r.ref for r in self._refs.values() if r.owner == owner]
        for ref in refs:
            self.release_reference(ref, ReleaseReason.OWNER_TERMINATED)

    # ------------------------
    # Host-side controls
    # ------------------------
    def bus(self, destination: str) -> SubscriptionBus:
        with self._lock:
            if destination not in self._buses:
                self._buses[destination] = SubscriptionBus(destination)
            return self._buses[destination]

    def render(self, descriptor: Any) -> None:
        """Display ``descriptor``; a different reference already shown under the same id is superseded."""
        widget_id = descriptor.id
        ref = descriptor.ref
        with self._lock:
            record = self._refs.get(ref)
            if record is None or record.state is RefState.RELEASED:
                raise HostCommunicationError("render", f"reference {ref} is not live")
            previous = self._rendered.get(widget_id)
            self._rendered[widget_id] = ref
            self._values.setdefault(widget_id, descriptor.default)
        if previous is not None and previous != ref:
            self.release_reference(previous, ReleaseReason.SUPERSEDED)

    def set_value(self, widget_id: str, value: Any) -> None:
        with self._lock:
            if widget_id not in self._values:
                raise KeyError(widget_id)
            self._values[widget_id] = value
            ref = self._rendered.get(widget_id)
            record = self._refs.get(ref) if ref else None
        if record is not None and record.destination is not None:
            self.bus(record.destination).publish(ref, {"type": "change", "value": value})

    def remove(self, widget_id: str) -> None:
        """Explicitly remove a rendered input, dropping its value and releasing its reference."""
        with self._lock:
            self._values.pop(widget_id, None)
            ref = self._rendered.pop(widget_id, None)
        if ref is not None:
            self.release_reference(ref, ReleaseReason.REMOVED)

    def release_reference(self, ref: str, reason: Union[ReleaseReason, str]) -> bool:
        """Release ``ref`` and deliver its cleanup; the record is forgotten afterwards."""
        reason = ReleaseReason(reason)
        with self._lock:
            record = self._refs.pop(ref, None)
            if record is None:
                return False
            for widget_id in [w for w, r in self._rendered.items() if r == ref]:
                del self._rendered[widget_id]
            delivery = record.release(reason)
        if delivery is None:
            return False
        destination, cleanup = delivery
        self.bus(destination).handle(cleanup.as_message())
        event("reference.released", {"ref": ref, "reason": reason.value, "destination": destination})
        return True

    def reference_state(self, ref: str) -> Optional[RefState]:
        # released references are dropped, so they read back as None
        with self._lock:
            record = self._refs.get(ref)
            return record.state if record else None

    def references(self, owner: Optional[OwnerId] = None) -> List[str]:
        with self._lock:
            return [r.ref for r in self._refs.values() if owner is None or r.owner == owner]

    def store_file(self, file_id: str, path: Union[str, Path]) -> FileRef:
        with self._lock:
            self._files[file_id] = Path(path)
        return FileRef.of(file_id)

    def delete_file(self, file_id: str) -> None:
        with self._lock:
            self._files.pop(file_id, None)


__all__ = ["InMemoryBridge", "NOT_RENDERED", "FILE_NOT_FOUND"]
