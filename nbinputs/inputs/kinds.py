from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class InputKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    PASSWORD = "password"
    NUMBER = "number"
    URL = "url"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    RANGE = "range"
    COLOR = "color"
    IMAGE = "image"
    AUDIO = "audio"
    FILE = "file"


OPTION_KINDS = (InputKind.SELECT, InputKind.RADIO)

DEFAULT_COLOR = "#6583FF"

RANGE_DEFAULT_MIN = 0
RANGE_DEFAULT_MAX = 100
RANGE_DEFAULT_STEP = 1

IMAGE_FORMATS: Dict[str, str] = {
    "rgb": "rgb",
    "png": "png",
    "jpeg": "jpeg",
    "jpg": "jpeg",
}
IMAGE_FITS: Tuple[str, ...] = ("contain", "match", "pad", "crop")

AUDIO_FORMATS: Tuple[str, ...] = ("pcm_f32", "wav")
AUDIO_DEFAULT_SAMPLING_RATE = 48_000

ACCEPT_ANY = "any"


__all__ = [
    "InputKind",
    "OPTION_KINDS",
    "DEFAULT_COLOR",
    "RANGE_DEFAULT_MIN",
    "RANGE_DEFAULT_MAX",
    "RANGE_DEFAULT_STEP",
    "IMAGE_FORMATS",
    "IMAGE_FITS",
    "AUDIO_FORMATS",
    "AUDIO_DEFAULT_SAMPLING_RATE",
    "ACCEPT_ANY",
]
