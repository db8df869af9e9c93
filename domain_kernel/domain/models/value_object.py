"""
Value objects that wrap exactly one value.
"""

from typing import Any, Generic, Iterable, Optional, TypeVar

from domain_kernel.domain.interfaces.base import ValueObject

T = TypeVar('T')


class SingleValueObject(ValueObject, Generic[T]):
    """Value object whose only equality component is the wrapped value."""

    def __init__(self, value: Optional[T] = None):
        self._value = value

    @property
    def value(self) -> Optional[T]:
        return self._value

    def equality_components(self) -> Iterable[Any]:
        yield self._value

    def __str__(self) -> str:
        return "" if self._value is None else str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"
