from __future__ import annotations

from nbinputs.bridge import FileRef, get_bridge, reset_bridge, set_bridge
from nbinputs.inputs import (
    AudioValue,
    BridgeTimeoutError,
    ConstructionError,
    FileValue,
    HostCommunicationError,
    ImageValue,
    InputDescriptor,
    InputKind,
    InputReadError,
)
from nbinputs.inputs.api import (
    audio,
    checkbox,
    color,
    duplicate,
    file,
    file_path,
    image,
    number,
    password,
    radio,
    range,
    read,
    select,
    text,
    textarea,
    url,
)

__version__ = "0.1.0"

__all__ = [
    "InputDescriptor",
    "InputKind",
    "FileRef",
    "ImageValue",
    "AudioValue",
    "FileValue",
    "ConstructionError",
    "HostCommunicationError",
    "BridgeTimeoutError",
    "InputReadError",
    "get_bridge",
    "set_bridge",
    "reset_bridge",
    "text",
    "textarea",
    "password",
    "number",
    "url",
    "select",
    "radio",
    "checkbox",
    "range",
    "color",
    "image",
    "audio",
    "file",
    "read",
    "file_path",
    "duplicate",
]
