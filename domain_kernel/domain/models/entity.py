"""
Entities and aggregate roots: objects distinguished by type and id.

An entity's id may be assigned after construction, typically by whatever
persists it. Until then the entity is *transient* and holds the
``UNASSIGNED`` sentinel. How transient entities compare is governed by the
active ``KernelConfiguration.identity_policy``:

- ``transient``: an unassigned entity is equal only to itself.
- ``strict``: comparing or hashing an unassigned entity raises
  ``UnassignedIdentityError``.
"""

from typing import Any, Generic, Optional, TypeVar

from domain_kernel.domain.exceptions import (
    IdentityReassignmentError,
    UnassignedIdentityError,
)
from domain_kernel.domain.models.configuration import get_active_configuration

TId = TypeVar('TId')


class _Unassigned:
    """Sentinel type for an id that has not been assigned yet."""

    _instance: Optional['_Unassigned'] = None

    def __new__(cls) -> '_Unassigned':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNASSIGNED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Unassigned, ())


UNASSIGNED: Any = _Unassigned()


class Entity(Generic[TId]):
    """Base class for objects distinguished by identity rather than attributes."""

    def __init__(self, id: TId = UNASSIGNED):
        self._id = UNASSIGNED
        if id is not UNASSIGNED:
            self.id = id

    @property
    def id(self) -> TId:
        return self._id

    @id.setter
    def id(self, value: TId) -> None:
        if value is None or value is UNASSIGNED:
            raise ValueError(f"{type(self).__name__} id cannot be None or UNASSIGNED")
        if self._id is not UNASSIGNED:
            if self._id == value:
                return
            raise IdentityReassignmentError(
                f"{type(self).__name__} already has id {self._id!r}",
                entity_type=self.type_tag(),
                current_id=self._id,
                new_id=value,
            )
        self._id = value

    def is_transient(self) -> bool:
        """True while no id has been assigned."""
        return self._id is UNASSIGNED

    @classmethod
    def type_tag(cls) -> str:
        """Fully qualified runtime type name."""
        return f"{cls.__module__}.{cls.__qualname__}"

    def _require_identity(self, operation: str) -> None:
        if self.is_transient() and get_active_configuration().is_strict_identity:
            raise UnassignedIdentityError(
                f"Cannot {operation} {type(self).__name__} before its id is assigned",
                entity_type=self.type_tag(),
            )

    def __eq__(self, other: object) -> bool:
        if other is None or type(other) is not type(self):
            return False
        if other is self:
            return True
        self._require_identity("compare")
        other._require_identity("compare")
        if self.is_transient() or other.is_transient():
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        self._require_identity("hash")
        return hash(self.type_tag() + str(self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class AggregateRoot(Entity[TId]):
    """
    Entity marking the transactional consistency boundary of a cluster.

    Carries no extra state; it exists so code can tell roots apart from
    the entities they own.
    """


def is_aggregate_root(obj: Any) -> bool:
    return isinstance(obj, AggregateRoot)


def entities_equal(left: Optional[Entity], right: Optional[Entity]) -> bool:
    """Null-safe identity equality: two ``None`` references are equal."""
    if left is None and right is None:
        return True
    if left is None or right is None:
        return False
    return left == right


def entities_not_equal(left: Optional[Entity], right: Optional[Entity]) -> bool:
    return not entities_equal(left, right)
