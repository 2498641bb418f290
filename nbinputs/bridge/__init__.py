from __future__ import annotations

from .base import CLEAR_TOPIC, Bridge, BridgeReply, CleanupAction, FileRef
from .bus import CLEARED_HISTORY, SubscriptionBus
from .errors import BridgeTimeoutError, HostCommunicationError, LifecycleError
from .http_bridge import HttpBridge
from .in_memory import FILE_NOT_FOUND, NOT_RENDERED, InMemoryBridge
from .lifecycle import ReferenceRecord, RefState, ReleaseReason, attach_reference
from .owner import OwnerId, current_owner, release_owner_at_exit, release_owner_now
from .registry import get_bridge, reset_bridge, set_bridge

__all__ = [
    "Bridge",
    "BridgeReply",
    "CleanupAction",
    "FileRef",
    "CLEAR_TOPIC",
    "SubscriptionBus",
    "CLEARED_HISTORY",
    "HostCommunicationError",
    "BridgeTimeoutError",
    "LifecycleError",
    "HttpBridge",
    "InMemoryBridge",
    "NOT_RENDERED",
    "FILE_NOT_FOUND",
    "ReferenceRecord",
    "RefState",
    "ReleaseReason",
    "attach_reference",
    "OwnerId",
    "current_owner",
    "release_owner_at_exit",
    "release_owner_now",
    "get_bridge",
    "set_bridge",
    "reset_bridge",
]
