"""
Canonical enum sets for tickets and the lenient parsing used by request
validation and by the LLM response check.
"""

from enum import StrEnum
from typing import Final, Literal, TypeVar

from app.domain.models import Category, Priority, Status

EnumKind = Literal["category", "priority", "status"]

E = TypeVar("E", bound=StrEnum)

_REGISTRY: Final[dict[str, type[StrEnum]]] = {
    "category": Category,
    "priority": Priority,
    "status": Status,
}


def normalize(value: object) -> str:
    return str(value).strip().lower()


def values_of(kind: EnumKind) -> tuple[str, ...]:
    return tuple(member.value for member in _REGISTRY[kind])


def is_member(kind: EnumKind, value: object) -> bool:
    if value is None:
        return False
    return normalize(value) in values_of(kind)


def parse_enum(enum_cls: type[E], value: object) -> E | None:
    """Return the member matching ``value`` case-insensitively, or None.

    None, blank strings and unknown values all map to None so callers can
    treat them as "not provided".
    """
    if value is None:
        return None
    candidate = normalize(value)
    if not candidate:
        return None
    try:
        return enum_cls(candidate)
    except ValueError:
        return None
