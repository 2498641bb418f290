from __future__ import annotations

import atexit
import os
import socket
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional

from nbinputs.bridge.errors import HostCommunicationError
from nbinputs.observability import event

if TYPE_CHECKING:  # pragma: no cover
    from nbinputs.bridge.base import Bridge


@dataclass(frozen=True)
class OwnerId:
    """Identity of the process that owns registered references."""

    hostname: str
    pid: int
    nonce: str

    def __str__(self) -> str:
        return f"{self.hostname}:{self.pid}:{self.nonce}"


_owner: Optional[OwnerId] = None
_exit_hooks: Dict[int, Callable[[], None]] = {}


def current_owner() -> OwnerId:
    global _owner
    pid = os.getpid()
    # a forked child is a different owner
    if _owner is None or _owner.pid != pid:
        _owner = OwnerId(hostname=socket.gethostname(), pid=pid, nonce=uuid.uuid4().hex[:12])
    return _owner


def release_owner_at_exit(bridge: "Bridge") -> None:
    """Tell the host the current owner ended when the interpreter exits.

    Best effort: if the host is unreachable at exit the cleanup is lost and
    the host reclaims the references when the session ends.
    """
    if id(bridge) in _exit_hooks:
        return
    owner = current_owner()

    def _release() -> None:
        try:
            bridge.release_owner(owner)
        except HostCommunicationError as exc:
            event("owner.release_failed", {"owner": str(owner), "error": str(exc)})

    _exit_hooks[id(bridge)] = _release
    atexit.register(_release)


def release_owner_now(bridge: "Bridge") -> None:
    """Run the pending exit release for ``bridge`` immediately and drop the hook."""
    hook = _exit_hooks.pop(id(bridge), None)
    if hook is None:
        return
    atexit.unregister(hook)
    hook()


__all__ = ["OwnerId", "current_owner", "release_owner_at_exit", "release_owner_now"]
