from __future__ import annotations

import os
import re
import tempfile
from typing import Any, Tuple, Union

from pydantic import ValidationError

from nbinputs.bridge import Bridge, FileRef, HostCommunicationError
from nbinputs.config import get_settings
from nbinputs.inputs.descriptor import InputDescriptor
from nbinputs.inputs.errors import InputReadError
from nbinputs.inputs.identity import canonical_term
from nbinputs.inputs.kinds import OPTION_KINDS, InputKind
from nbinputs.inputs.values import AudioValue, FileValue, ImageValue
from nbinputs.observability import event

_VALUE_MODELS = {
    InputKind.IMAGE: ImageValue,
    InputKind.AUDIO: AudioValue,
    InputKind.FILE: FileValue,
}

_UNSAFE_FILE_ID = re.compile(r"[^A-Za-z0-9._-]")


def read_value(bridge: Bridge, descriptor: InputDescriptor) -> Any:
    """Synchronously fetch the current value of a rendered input.

    One round trip, no retries. A host-reported failure (typically the input
    was never rendered) raises ``InputReadError``; transport failures raise
    ``HostCommunicationError``.
    """
    reply = bridge.get_input_value(descriptor.id)
    if not reply.ok:
        event("input.read_failed", {"id": descriptor.id, "reason": reply.reason})
        raise InputReadError(descriptor.id, reply.reason or "unknown")
    return coerce_value(descriptor, reply.value)


def coerce_value(descriptor: InputDescriptor, raw: Any) -> Any:
    if raw is None:
        return None

    kind = descriptor.kind
    model = _VALUE_MODELS.get(kind)
    if model is not None:
        if isinstance(raw, model):
            return raw
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise HostCommunicationError(
                "get_input_value", f"malformed {kind.value} value: {exc.error_count()} validation error(s)"
            ) from exc

    if kind in OPTION_KINDS:
        return _match_option(descriptor, raw)

    return raw


def _match_option(descriptor: InputDescriptor, raw: Any) -> Any:
    # hand back the caller's own option value, even if the wire changed its shape
    options = descriptor.attrs.get("options") or ()
    wanted = canonical_term(raw)
    for value, _ in options:
        if canonical_term(value) == wanted:
            return value
    return raw


def as_file_ref(file_ref: Union[FileRef, FileValue, Tuple[str, str], str]) -> FileRef:
    if isinstance(file_ref, FileValue):
        return file_ref.file_ref
    if isinstance(file_ref, FileRef):
        return file_ref
    if isinstance(file_ref, str):
        return FileRef.of(file_ref)
    if isinstance(file_ref, tuple) and len(file_ref) == 2 and file_ref[0] == "file":
        return FileRef("file", str(file_ref[1]))
    raise TypeError(f"expected a file reference, got: {file_ref!r}")


def nonexistent_path(file_id: str) -> str:
    safe_id = _UNSAFE_FILE_ID.sub("_", file_id).lstrip(".") or "_"
    return os.path.join(tempfile.gettempdir(), get_settings().nonexistent_dir_name, safe_id)


def resolve_file_path(bridge: Bridge, file_ref: Union[FileRef, FileValue, Tuple[str, str], str]) -> str:
    """Return the host path of an uploaded file.

    A file that is gone (reuploaded, its input removed, its session ended) or
    a host that cannot answer yields a path that does not exist, never an
    error, so callers reading the path get a plain not-found.
    """
    ref = as_file_ref(file_ref)
    try:
        reply = bridge.get_file_path(ref)
    except HostCommunicationError as exc:
        event("file.stale_reference", {"file_id": ref.file_id, "reason": "transport", "error": str(exc)})
        return nonexistent_path(ref.file_id)

    if reply.ok and reply.value:
        return str(reply.value)

    event("file.stale_reference", {"file_id": ref.file_id, "reason": reply.reason})
    return nonexistent_path(ref.file_id)


__all__ = [
    "read_value",
    "coerce_value",
    "as_file_ref",
    "nonexistent_path",
    "resolve_file_path",
]
