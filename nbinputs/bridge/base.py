from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Tuple

from nbinputs.bridge.owner import OwnerId

CLEAR_TOPIC = "clear_topic"


class FileRef(NamedTuple):
    """Opaque identifier of an uploaded file, always tagged ``"file"``."""

    tag: str
    file_id: str

    @classmethod
    def of(cls, file_id: str) -> "FileRef":
        return cls("file", str(file_id))


@dataclass(frozen=True)
class BridgeReply:
    ok: bool
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "BridgeReply":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "BridgeReply":
        return cls(ok=False, reason=str(reason))


@dataclass(frozen=True)
class CleanupAction:
    kind: str
    ref: str

    @classmethod
    def clear_topic(cls, ref: str) -> "CleanupAction":
        return cls(kind=CLEAR_TOPIC, ref=ref)

    def as_message(self) -> Tuple[str, str]:
        return (self.kind, self.ref)


class Bridge(ABC):
    """Boundary to the host that renders inputs and stores their live values.

    Registration and monitor calls raise ``HostCommunicationError`` when the
    host cannot be reached or rejects them. Value and file queries return a
    ``BridgeReply`` so the caller can tell host-reported failures apart from
    transport ones.
    """

    @abstractmethod
    def generate_token(self) -> str:
        ...

    @abstractmethod
    def reference_object(self, ref: str, owner: OwnerId) -> None:
        ...

    @abstractmethod
    def monitor_object(self, ref: str, destination: str, cleanup: CleanupAction) -> None:
        ...

    @abstractmethod
    def get_input_value(self, widget_id: str) -> BridgeReply:
        ...

    @abstractmethod
    def get_file_path(self, file_ref: FileRef) -> BridgeReply:
        ...

    @abstractmethod
    def release_owner(self, owner: OwnerId) -> None:
        ...

    def close(self) -> None:
        return None


__all__ = ["Bridge", "BridgeReply", "CleanupAction", "FileRef", "CLEAR_TOPIC"]
