from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from nbinputs.inputs.identity import semantic_attrs
from nbinputs.inputs.kinds import InputKind


@dataclass(frozen=True, eq=False)
class InputDescriptor:
    """Immutable handle to one input instance.

    ``attrs`` holds the canonical attributes plus the three host-assigned
    fields ``id`` (persistent, content derived), ``ref`` (fresh per instance)
    and ``destination`` (bus address). Changing an option means building a
    new descriptor.
    """

    attrs: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    @property
    def kind(self) -> InputKind:
        return InputKind(self.attrs["type"])

    @property
    def label(self) -> str:
        return self.attrs["label"]

    @property
    def default(self) -> Any:
        return self.attrs.get("default")

    @property
    def id(self) -> str:
        return self.attrs["id"]

    @property
    def ref(self) -> str:
        return self.attrs["ref"]

    @property
    def destination(self) -> str:
        return self.attrs["destination"]

    @property
    def subscription_key(self) -> Tuple[str, str]:
        return (self.destination, self.ref)

    def semantic_attrs(self) -> Dict[str, Any]:
        return semantic_attrs(self.attrs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InputDescriptor):
            return NotImplemented
        return dict(self.attrs) == dict(other.attrs)

    def __hash__(self) -> int:
        return hash(self.ref)

    def __repr__(self) -> str:
        return f"InputDescriptor(kind={self.kind.value!r}, label={self.label!r}, id={self.id!r}, ref={self.ref!r})"


__all__ = ["InputDescriptor"]
