from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from nbinputs.bridge.base import Bridge, BridgeReply, CleanupAction, FileRef
from nbinputs.bridge.errors import BridgeTimeoutError, HostCommunicationError
from nbinputs.bridge.owner import OwnerId
from nbinputs.config import get_settings
from nbinputs.observability import counter


class HttpBridge(Bridge):
    """Bridge talking JSON over HTTP to the host.

    Every operation is one POST with a bounded timeout. The host answers
    ``{"ok": true, "value": ...}`` or ``{"ok": false, "reason": "..."}``.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        connect_timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        s = get_settings()
        self.base_url = base_url or s.bridge_url
        if not self.base_url:
            raise HostCommunicationError("configure", "bridge url missing")
        self.timeout_seconds = timeout_seconds or s.bridge_timeout_seconds
        self.connect_timeout_seconds = connect_timeout_seconds or s.bridge_connect_timeout_seconds

        headers = {"Content-Type": "application/json"}
        api_token = token or s.bridge_token
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"

        timeout = httpx.Timeout(self.timeout_seconds, connect=self.connect_timeout_seconds)
        self._client = httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout, transport=transport)

    def _post(self, operation: str, path: str, payload: Dict[str, Any]) -> BridgeReply:
        if self._client.is_closed:
            raise HostCommunicationError(operation, "bridge closed")
        try:
            resp = self._client.post(path, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as exc:
            counter("bridge.request", labels={"operation": operation, "outcome": "transport_error"})
            raise BridgeTimeoutError(operation, f"timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            counter("bridge.request", labels={"operation": operation, "outcome": "transport_error"})
            raise HostCommunicationError(operation, str(exc)) from exc
        except ValueError as exc:
            counter("bridge.request", labels={"operation": operation, "outcome": "transport_error"})
            raise HostCommunicationError(operation, f"non-JSON reply: {exc}") from exc

        if not isinstance(data, dict) or "ok" not in data:
            counter("bridge.request", labels={"operation": operation, "outcome": "transport_error"})
            raise HostCommunicationError(operation, "malformed reply")

        if data["ok"]:
            reply = BridgeReply.success(data.get("value"))
        else:
            reply = BridgeReply.failure(data.get("reason") or "unknown")
        counter("bridge.request", labels={"operation": operation, "outcome": "ok" if reply.ok else "error"})
        return reply

    def _expect_ok(self, operation: str, path: str, payload: Dict[str, Any]) -> Any:
        reply = self._post(operation, path, payload)
        if not reply.ok:
            raise HostCommunicationError(operation, reply.reason or "rejected")
        return reply.value

    def generate_token(self) -> str:
        return str(self._expect_ok("generate_token", "/token", {}))

    def reference_object(self, ref: str, owner: OwnerId) -> None:
        self._expect_ok("reference_object", "/references", {"ref": ref, "owner": str(owner)})

    def monitor_object(self, ref: str, destination: str, cleanup: CleanupAction) -> None:
        self._expect_ok(
            "monitor_object",
            "/monitors",
            {"ref": ref, "destination": destination, "cleanup": list(cleanup.as_message())},
        )

    def get_input_value(self, widget_id: str) -> BridgeReply:
        return self._post("get_input_value", "/inputs/value", {"id": widget_id})

    def get_file_path(self, file_ref: FileRef) -> BridgeReply:
        return self._post("get_file_path", "/files/path", {"file_ref": [file_ref.tag, file_ref.file_id]})

    def release_owner(self, owner: OwnerId) -> None:
        self._expect_ok("release_owner", "/owners/release", {"owner": str(owner)})

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpBridge"]
