"""Option validation for input constructors.

Each ``*_attrs`` function turns user supplied options into the canonical
attribute record of one input kind, or raises ``ConstructionError``. Nothing
here talks to the host, so a rejected input never leaves partial state behind.
"""

from __future__ import annotations

import json
import numbers
from collections.abc import Mapping, Set
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from nbinputs.inputs.errors import ConstructionError
from nbinputs.inputs.identity import canonical_term
from nbinputs.inputs.kinds import (
    ACCEPT_ANY,
    AUDIO_DEFAULT_SAMPLING_RATE,
    AUDIO_FORMATS,
    DEFAULT_COLOR,
    IMAGE_FITS,
    IMAGE_FORMATS,
    RANGE_DEFAULT_MAX,
    RANGE_DEFAULT_MIN,
    RANGE_DEFAULT_STEP,
    InputKind,
)

MISSING: Any = object()

Attrs = Dict[str, Any]


def inspect_value(value: Any) -> str:
    """Render an offending value for error messages (strings in double quotes)."""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _assert_default(value: Any, message: str, ok: bool) -> None:
    if not ok:
        raise ConstructionError(f"expected :default to {message}, got: {inspect_value(value)}")


def _require_label(label: Any) -> str:
    if not isinstance(label, str):
        raise ConstructionError(f"expected label to be a string, got: {inspect_value(label)}")
    return label


def _to_string(value: Any) -> str:
    return "" if value is None else str(value)


def _envelope(kind: InputKind, label: Any, default: Any, **fields: Any) -> Attrs:
    attrs: Attrs = {"type": kind.value, "label": _require_label(label), "default": default}
    attrs.update(fields)
    return attrs


# ------------------------
# Textual kinds
# ------------------------
def text_attrs(label: str, *, default: Any = "") -> Attrs:
    return _envelope(InputKind.TEXT, label, _to_string(default))


def textarea_attrs(label: str, *, default: Any = "", monospace: bool = False) -> Attrs:
    if not isinstance(monospace, bool):
        raise ConstructionError(f"expected :monospace to be a boolean, got: {inspect_value(monospace)}")
    return _envelope(InputKind.TEXTAREA, label, _to_string(default), monospace=monospace)


def password_attrs(label: str, *, default: Any = "") -> Attrs:
    return _envelope(InputKind.PASSWORD, label, _to_string(default))


def url_attrs(label: str, *, default: Optional[str] = None) -> Attrs:
    _assert_default(default, "be either string or nil", default is None or isinstance(default, str))
    return _envelope(InputKind.URL, label, default)


# ------------------------
# Scalar kinds
# ------------------------
def number_attrs(label: str, *, default: Any = None) -> Attrs:
    _assert_default(default, "be either number or nil", default is None or _is_number(default))
    return _envelope(InputKind.NUMBER, label, default)


def checkbox_attrs(label: str, *, default: Any = False) -> Attrs:
    _assert_default(default, "be a boolean", isinstance(default, bool))
    return _envelope(InputKind.CHECKBOX, label, default)


def color_attrs(label: str, *, default: Any = DEFAULT_COLOR) -> Attrs:
    _assert_default(default, "be a string", isinstance(default, str))
    return _envelope(InputKind.COLOR, label, default)


def range_attrs(
    label: str,
    *,
    min: Any = RANGE_DEFAULT_MIN,
    max: Any = RANGE_DEFAULT_MAX,
    step: Any = RANGE_DEFAULT_STEP,
    default: Any = MISSING,
) -> Attrs:
    for name, value in (("min", min), ("max", max), ("step", step)):
        if not _is_number(value):
            raise ConstructionError(f"expected :{name} to be a number, got: {inspect_value(value)}")

    if min >= max:
        raise ConstructionError(f"expected :min to be less than :max, got: {inspect_value(min)} and {inspect_value(max)}")

    if step <= 0:
        raise ConstructionError(f"expected :step to be positive, got: {inspect_value(step)}")

    if default is MISSING:
        default = min
    _assert_default(default, "be a number", _is_number(default))

    if default < min or default > max:
        raise ConstructionError(f"expected :default to be between :min and :max, got: {inspect_value(default)}")

    return _envelope(InputKind.RANGE, label, default, min=min, max=max, step=step)


# ------------------------
# Option kinds
# ------------------------
def _normalize_options(options: Any) -> Tuple[Tuple[Any, str], ...]:
    if isinstance(options, Mapping):
        pairs: Iterable[Any] = list(options.items())
    elif isinstance(options, (str, bytes)) or not isinstance(options, Iterable):
        raise ConstructionError(f"expected options to be a list of (value, label) pairs, got: {inspect_value(options)}")
    else:
        pairs = list(options)

    if not pairs:
        raise ConstructionError("expected at least one option, got: []")

    normalized: List[Tuple[Any, str]] = []
    for pair in pairs:
        if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
            raise ConstructionError(f"expected option to be a (value, label) pair, got: {inspect_value(pair)}")
        value, option_label = pair
        normalized.append((value, _to_string(option_label)))
    return tuple(normalized)


def _options_attrs(kind: InputKind, label: str, options: Any, default: Any) -> Attrs:
    _require_label(label)
    normalized = _normalize_options(options)
    values = [value for value, _ in normalized]
    if default is MISSING:
        default = values[0]

    # membership by canonical form, so 1, 1.0 and True stay distinct
    wanted = canonical_term(default)
    if not any(canonical_term(value) == wanted for value in values):
        listed = ", ".join(inspect_value(v) for v in values)
        raise ConstructionError(f"expected :default to be either of {listed}, got: {inspect_value(default)}")

    return _envelope(kind, label, default, options=normalized)


def select_attrs(label: str, options: Any, *, default: Any = MISSING) -> Attrs:
    return _options_attrs(InputKind.SELECT, label, options, default)


def radio_attrs(label: str, options: Any, *, default: Any = MISSING) -> Attrs:
    return _options_attrs(InputKind.RADIO, label, options, default)


# ------------------------
# Media kinds
# ------------------------
def image_attrs(label: str, *, format: Any = "rgb", size: Any = None, fit: Any = "contain") -> Attrs:
    canonical_format = IMAGE_FORMATS.get(format) if isinstance(format, str) else None
    if canonical_format is None:
        raise ConstructionError(
            f"expected :format to be either of :rgb, :png or :jpeg/:jpg, got: {inspect_value(format)}"
        )

    if fit not in IMAGE_FITS:
        raise ConstructionError(
            f"expected :fit to be either of :contain, :match, :pad or :crop, got: {inspect_value(fit)}"
        )

    if isinstance(size, list):
        size = tuple(size)

    return _envelope(InputKind.IMAGE, label, None, size=size, format=canonical_format, fit=fit)


def audio_attrs(label: str, *, format: Any = "pcm_f32", sampling_rate: Any = AUDIO_DEFAULT_SAMPLING_RATE) -> Attrs:
    if format not in AUDIO_FORMATS:
        raise ConstructionError(f"expected :format to be either of :pcm_f32 or :wav, got: {inspect_value(format)}")

    if not isinstance(sampling_rate, int) or isinstance(sampling_rate, bool):
        raise ConstructionError(f"expected :sampling_rate to be an integer, got: {inspect_value(sampling_rate)}")

    return _envelope(InputKind.AUDIO, label, None, format=format, sampling_rate=sampling_rate)


def file_attrs(label: str, *, accept: Any = ACCEPT_ANY) -> Attrs:
    if accept == ACCEPT_ANY:
        return _envelope(InputKind.FILE, label, None, accept=ACCEPT_ANY)

    if isinstance(accept, (list, tuple, Set)) and accept and all(isinstance(a, str) for a in accept):
        accepted = tuple(sorted(accept)) if isinstance(accept, Set) else tuple(accept)
        return _envelope(InputKind.FILE, label, None, accept=accepted)

    raise ConstructionError(f"expected :accept to be a non-empty list, got: {inspect_value(accept)}")


__all__ = [
    "MISSING",
    "inspect_value",
    "text_attrs",
    "textarea_attrs",
    "password_attrs",
    "url_attrs",
    "number_attrs",
    "checkbox_attrs",
    "color_attrs",
    "range_attrs",
    "select_attrs",
    "radio_attrs",
    "image_attrs",
    "audio_attrs",
    "file_attrs",
]
