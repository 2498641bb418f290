from __future__ import annotations

import base64
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from nbinputs.bridge.base import FileRef


def _decode_data(v: Any) -> Any:
    # binary payloads travel base64 encoded over the HTTP bridge
    if isinstance(v, str):
        return base64.b64decode(v.encode("ascii"), validate=True)
    return v


class ImageValue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    data: bytes
    height: int
    width: int
    format: Literal["rgb", "png", "jpeg"]

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, v: Any) -> Any:
        return _decode_data(v)


class AudioValue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    data: bytes
    num_channels: int
    sampling_rate: int

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, v: Any) -> Any:
        return _decode_data(v)


class FileValue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    file_ref: FileRef
    client_name: str

    @field_validator("file_ref", mode="before")
    @classmethod
    def coerce_file_ref(cls, v: Any) -> Any:
        if isinstance(v, str):
            return FileRef.of(v)
        if isinstance(v, (list, tuple)) and len(v) == 2:
            return FileRef(str(v[0]), str(v[1]))
        return v


__all__ = ["ImageValue", "AudioValue", "FileValue"]
