from __future__ import annotations

from .descriptor import InputDescriptor
from .errors import BridgeTimeoutError, ConstructionError, HostCommunicationError, InputReadError
from .factory import DescriptorFactory
from .identity import canonical_attrs, persistent_id, random_ref, semantic_attrs
from .kinds import InputKind
from .resolver import nonexistent_path, read_value, resolve_file_path
from .values import AudioValue, FileValue, ImageValue

__all__ = [
    "InputDescriptor",
    "InputKind",
    "DescriptorFactory",
    "ConstructionError",
    "HostCommunicationError",
    "BridgeTimeoutError",
    "InputReadError",
    "canonical_attrs",
    "persistent_id",
    "random_ref",
    "semantic_attrs",
    "read_value",
    "resolve_file_path",
    "nonexistent_path",
    "ImageValue",
    "AudioValue",
    "FileValue",
]
