"""Typed references linking notifications and payments to other entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class BlogRef:
    id: int

    model: ClassVar[str] = "Blog"


@dataclass(frozen=True)
class ContestRef:
    id: int

    model: ClassVar[str] = "Contest"


@dataclass(frozen=True)
class PaymentRef:
    id: int

    model: ClassVar[str] = "Payment"


@dataclass(frozen=True)
class UserRef:
    id: int

    model: ClassVar[str] = "User"


NotificationRelation = Union[BlogRef, ContestRef, PaymentRef]
PaymentRelation = Union[ContestRef, UserRef]

_REFERENCE_TYPES: dict[str, type] = {
    ref_type.model: ref_type for ref_type in (BlogRef, ContestRef, PaymentRef, UserRef)
}


def reference_from_columns(model: str | None, entity_id: int | None):
    """Rebuild a typed reference from its persisted ``(model, id)`` pair.

    Both columns are stored together; a half-filled pair is treated as no
    reference at all.
    """

    if model is None or entity_id is None:
        return None
    ref_type = _REFERENCE_TYPES.get(model)
    if ref_type is None:
        raise ValueError(f"Unknown relation model '{model}'")
    return ref_type(id=int(entity_id))


def reference_to_columns(reference) -> tuple[str | None, int | None]:
    """Return the ``(model, id)`` pair stored for ``reference``."""

    if reference is None:
        return None, None
    return reference.model, reference.id


__all__ = [
    "BlogRef",
    "ContestRef",
    "PaymentRef",
    "UserRef",
    "NotificationRelation",
    "PaymentRelation",
    "reference_from_columns",
    "reference_to_columns",
]
