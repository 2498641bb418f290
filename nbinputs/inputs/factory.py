from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from nbinputs.bridge import Bridge, OwnerId, attach_reference, get_bridge
from nbinputs.config import get_settings
from nbinputs.inputs.descriptor import InputDescriptor
from nbinputs.inputs.identity import persistent_id, random_ref, semantic_attrs
from nbinputs.inputs.kinds import InputKind
from nbinputs.observability import event


class DescriptorFactory:
    """Builds registered descriptors against one host bridge and bus address."""

    def __init__(
        self,
        bridge: Bridge,
        destination: str,
        *,
        id_length: Optional[int] = None,
        owner: Optional[OwnerId] = None,
    ) -> None:
        self.bridge = bridge
        self.destination = destination
        self.id_length = id_length
        self.owner = owner

    @classmethod
    def from_settings(cls, bridge: Optional[Bridge] = None) -> "DescriptorFactory":
        s = get_settings()
        return cls(bridge or get_bridge(), s.subscription_manager, id_length=s.persistent_id_length)

    def create(self, kind: Union[InputKind, str], attrs: Mapping[str, Any]) -> InputDescriptor:
        kind = InputKind(kind)
        semantic = semantic_attrs(attrs)
        semantic["type"] = kind.value

        token = self.bridge.generate_token()
        input_id = persistent_id(token, semantic, length=self.id_length)
        ref = random_ref()

        merged = dict(semantic)
        merged.update({"ref": ref, "id": input_id, "destination": self.destination})

        attach_reference(self.bridge, ref, self.destination, owner=self.owner)

        event("input.created", {"kind": kind.value, "id": input_id, "ref": ref})
        return InputDescriptor(merged)

    def duplicate(self, descriptor: InputDescriptor) -> InputDescriptor:
        """Register a fresh reference for the same logical input.

        The persistent id is recomputed from the semantic attributes only, so
        it matches the source within the same session.
        """
        duplicated = self.create(descriptor.kind, descriptor.semantic_attrs())
        event("input.duplicated", {"id": duplicated.id, "source_ref": descriptor.ref, "ref": duplicated.ref})
        return duplicated


__all__ = ["DescriptorFactory"]
