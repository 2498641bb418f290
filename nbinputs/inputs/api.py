"""Public input constructors.

Create an input, render it through the host, then read it back::

    name = nbinputs.text("Name")
    ...
    nbinputs.read(name)

Reading an input the host has not rendered raises ``InputReadError``.
Inputs are shared: a change made by one viewer is seen by every reader.
"""

from __future__ import annotations

from typing import Any, Optional

from nbinputs.bridge import get_bridge
from nbinputs.inputs import options as opts
from nbinputs.inputs.descriptor import InputDescriptor
from nbinputs.inputs.factory import DescriptorFactory
from nbinputs.inputs.kinds import (
    ACCEPT_ANY,
    AUDIO_DEFAULT_SAMPLING_RATE,
    DEFAULT_COLOR,
    RANGE_DEFAULT_MAX,
    RANGE_DEFAULT_MIN,
    RANGE_DEFAULT_STEP,
    InputKind,
)
from nbinputs.inputs.resolver import read_value, resolve_file_path

_factory: Optional[DescriptorFactory] = None


def default_factory() -> DescriptorFactory:
    global _factory
    bridge = get_bridge()
    if _factory is None or _factory.bridge is not bridge:
        _factory = DescriptorFactory.from_settings(bridge)
    return _factory


def reset_default_factory() -> None:
    global _factory
    _factory = None


def _new(kind: InputKind, attrs: dict) -> InputDescriptor:
    return default_factory().create(kind, attrs)


def text(label: str, *, default: Any = "") -> InputDescriptor:
    """Single-line text input; ``default`` is converted to a string."""
    return _new(InputKind.TEXT, opts.text_attrs(label, default=default))


def textarea(label: str, *, default: Any = "", monospace: bool = False) -> InputDescriptor:
    """Multiline text input, optionally rendered in a monospace font."""
    return _new(InputKind.TEXTAREA, opts.textarea_attrs(label, default=default, monospace=monospace))


def password(label: str, *, default: Any = "") -> InputDescriptor:
    return _new(InputKind.PASSWORD, opts.password_attrs(label, default=default))


def number(label: str, *, default: Any = None) -> InputDescriptor:
    """Number input whose value is a number or ``None``."""
    return _new(InputKind.NUMBER, opts.number_attrs(label, default=default))


def url(label: str, *, default: Optional[str] = None) -> InputDescriptor:
    return _new(InputKind.URL, opts.url_attrs(label, default=default))


def select(label: str, options: Any, *, default: Any = opts.MISSING) -> InputDescriptor:
    """Dropdown over ``options``, given as ``(value, label)`` pairs or a ``{value: label}`` mapping.

    ``default`` falls back to the first value and must otherwise equal one
    of the listed values.
    """
    return _new(InputKind.SELECT, opts.select_attrs(label, options, default=default))


def radio(label: str, options: Any, *, default: Any = opts.MISSING) -> InputDescriptor:
    return _new(InputKind.RADIO, opts.radio_attrs(label, options, default=default))


def checkbox(label: str, *, default: Any = False) -> InputDescriptor:
    return _new(InputKind.CHECKBOX, opts.checkbox_attrs(label, default=default))


def range(
    label: str,
    *,
    min: Any = RANGE_DEFAULT_MIN,
    max: Any = RANGE_DEFAULT_MAX,
    step: Any = RANGE_DEFAULT_STEP,
    default: Any = opts.MISSING,
) -> InputDescriptor:
    """Slider over ``[min, max]``; ``default`` falls back to ``min``."""
    return _new(InputKind.RANGE, opts.range_attrs(label, min=min, max=max, step=step, default=default))


def color(label: str, *, default: Any = DEFAULT_COLOR) -> InputDescriptor:
    return _new(InputKind.COLOR, opts.color_attrs(label, default=default))


def image(label: str, *, format: Any = "rgb", size: Any = None, fit: Any = "contain") -> InputDescriptor:
    """Image upload read back as ``ImageValue`` or ``None``.

    ``format`` is one of ``rgb`` (raw HWC bytes), ``png``, ``jpeg``/``jpg``.
    ``size`` is a ``(height, width)`` box and ``fit`` one of ``contain``,
    ``match``, ``pad`` or ``crop``; both are applied by the host.
    """
    return _new(InputKind.IMAGE, opts.image_attrs(label, format=format, size=size, fit=fit))


def audio(label: str, *, format: Any = "pcm_f32", sampling_rate: Any = AUDIO_DEFAULT_SAMPLING_RATE) -> InputDescriptor:
    """Audio upload read back as ``AudioValue`` or ``None``."""
    return _new(InputKind.AUDIO, opts.audio_attrs(label, format=format, sampling_rate=sampling_rate))


def file(label: str, *, accept: Any = ACCEPT_ANY) -> InputDescriptor:
    """File upload read back as ``FileValue`` or ``None``.

    ``accept`` is ``"any"`` or a non-empty list of extensions / MIME types.
    Pass ``value.file_ref`` to ``file_path`` to locate the upload; the file
    may have been deleted since, in which case that path does not exist.
    """
    return _new(InputKind.FILE, opts.file_attrs(label, accept=accept))


def read(descriptor: InputDescriptor) -> Any:
    """Synchronously read the current value; the input must be rendered first."""
    return read_value(get_bridge(), descriptor)


def file_path(file_ref: Any) -> str:
    return resolve_file_path(get_bridge(), file_ref)


def duplicate(descriptor: InputDescriptor) -> InputDescriptor:
    return default_factory().duplicate(descriptor)


__all__ = [
    "default_factory",
    "reset_default_factory",
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
