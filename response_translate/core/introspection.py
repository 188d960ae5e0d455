"""Per-type field discovery.

Supports dataclasses, Pydantic models, and plain (optionally annotated)
classes. Plans are computed once per runtime type and cached process-wide.
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any

from response_translate.core.descriptor import (
    TRANSLATE_METADATA_KEY,
    TranslateField,
    find_descriptor,
)

_PLAN_CACHE: dict[type, FieldPlan] = {}


@dataclass(frozen=True)
class FieldPlan:
    """Cached structural view of one runtime type.

    Attributes:
        field_names: Declared field names in declaration order.
        translatable: ``(field_name, descriptor)`` pairs in declaration order.
    """

    field_names: tuple[str, ...]
    translatable: tuple[tuple[str, TranslateField], ...]

    def has_field(self, name: str) -> bool:
        return name in self.field_names


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return issubclass(cls, BaseModel)
    except ImportError:
        return False


def _resolved_hints(cls: type) -> dict[str, Any]:
    """Type hints with ``Annotated`` extras kept, inherited ones included."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except Exception:
        # Unresolvable forward references: fall back to the raw annotations.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}) or {})
        return hints


def _annotated_descriptor(hint: Any) -> TranslateField | None:
    if typing.get_origin(hint) is typing.Annotated:
        return find_descriptor(getattr(hint, "__metadata__", ()))
    return None


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def _build_plan(cls: type) -> FieldPlan:
    names: dict[str, None] = {}
    descriptors: dict[str, TranslateField] = {}

    if _is_pydantic_model(cls):
        # Pydantic moves Annotated extras into FieldInfo.metadata.
        for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
            names[name] = None
            descriptor = find_descriptor(info.metadata)
            if descriptor is not None:
                descriptors[name] = descriptor
    else:
        for name, hint in _resolved_hints(cls).items():
            if name.startswith("__") or typing.get_origin(hint) is typing.ClassVar:
                continue
            names[name] = None
            descriptor = _annotated_descriptor(hint)
            if descriptor is not None:
                descriptors[name] = descriptor

    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            names[f.name] = None
            descriptor = f.metadata.get(TRANSLATE_METADATA_KEY)
            if isinstance(descriptor, TranslateField):
                descriptors[f.name] = descriptor

    for name in _slot_names(cls):
        names[name] = None

    translatable = tuple((name, descriptors[name]) for name in names if name in descriptors)
    return FieldPlan(field_names=tuple(names), translatable=translatable)


def get_field_plan(cls: type) -> FieldPlan:
    """Return the cached FieldPlan for *cls*, computing it on first use."""
    plan = _PLAN_CACHE.get(cls)
    if plan is None:
        # Recomputing is idempotent, so concurrent first writers are harmless.
        plan = _PLAN_CACHE.setdefault(cls, _build_plan(cls))
    return plan


def clear_field_plan_cache() -> None:
    """Forget every cached plan."""
    _PLAN_CACHE.clear()


def instance_field_names(obj: Any, plan: FieldPlan) -> list[str]:
    """Declared fields of *obj* followed by undeclared instance attributes."""
    names = dict.fromkeys(plan.field_names)
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.update(dict.fromkeys(instance_dict))
    return list(names)


def has_field(obj: Any, plan: FieldPlan, name: str) -> bool:
    """Whether *name* is a field of *obj*: declared on its type or set on the instance."""
    if plan.has_field(name):
        return True
    instance_dict = getattr(obj, "__dict__", None)
    return isinstance(instance_dict, dict) and name in instance_dict
