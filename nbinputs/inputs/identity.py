from __future__ import annotations

import hashlib
import json
import uuid
from collections.abc import Mapping, Set
from enum import Enum
from typing import Any, Dict, Optional

from nbinputs.config.settings import PERSISTENT_ID_LENGTH_DEFAULT

HOST_ASSIGNED_KEYS = ("ref", "id", "destination")


def semantic_attrs(attrs: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in attrs.items() if k not in HOST_ASSIGNED_KEYS}


def canonical_term(value: Any) -> Any:
    """Map an attribute value onto JSON-serializable data, deterministically.

    Sequences keep their order; sets are sorted by their canonical form.
    Values with no JSON counterpart are tagged so that, e.g., ``b"1"`` and
    ``"1"`` never collide. Booleans are tagged too, since ``True == 1``.
    """
    if isinstance(value, bool):
        return {"__bool__": value}
    if value is None or isinstance(value, (int, str)):
        return value
    if isinstance(value, float):
        return {"__float__": repr(value)}
    if isinstance(value, Enum):
        return {"__enum__": f"{type(value).__name__}.{value.name}"}
    if isinstance(value, bytes):
        return {"__bytes__": value.hex()}
    if isinstance(value, Mapping):
        return {"__map__": [[canonical_term(k), canonical_term(v)] for k, v in _sorted_items(value)]}
    if isinstance(value, Set):
        return {"__set__": sorted((canonical_term(v) for v in value), key=_dump)}
    if isinstance(value, (list, tuple)):
        return [canonical_term(v) for v in value]
    return {"__repr__": f"{type(value).__qualname__}:{value!r}"}


def _sorted_items(value: Mapping[Any, Any]):
    return sorted(value.items(), key=lambda kv: _dump(canonical_term(kv[0])))


def _dump(term: Any) -> str:
    return json.dumps(term, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def canonical_attrs(attrs: Mapping[str, Any]) -> str:
    return _dump(canonical_term(semantic_attrs(attrs)))


def persistent_id(token: str, attrs: Mapping[str, Any], *, length: Optional[int] = None) -> str:
    """Stable id for (session token, semantic attributes).

    Host-assigned keys are ignored, so a duplicated descriptor hashes to the
    same id as its source within one session.
    """
    material = _dump({"token": str(token), "attrs": canonical_term(semantic_attrs(attrs))})
    digest = hashlib.sha256(material.encode("utf-8")).hexdigest()
    return digest[: length or PERSISTENT_ID_LENGTH_DEFAULT]


def random_ref() -> str:
    return uuid.uuid4().hex


__all__ = [
    "HOST_ASSIGNED_KEYS",
    "semantic_attrs",
    "canonical_term",
    "canonical_attrs",
    "persistent_id",
    "random_ref",
]
