"""
Base interfaces and abstract classes for the domain layer.
"""

from abc import ABC, abstractmethod
from functools import reduce
from itertools import zip_longest
from typing import Any, Dict, Iterable, Optional, Protocol
import operator


class ILogger(Protocol):
    """Logger interface for dependency injection."""

    def debug(self, message: str, **kwargs: Any) -> None: ...
    def info(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def critical(self, message: str, **kwargs: Any) -> None: ...


class IConfigurationManager(Protocol):
    """Configuration management interface."""

    def get(self, key: str, default: Any = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...
    def validate(self) -> bool: ...
    def reload(self) -> bool: ...
    def get_all(self) -> Dict[str, Any]: ...


class IErrorHandler(Protocol):
    """Error handling interface."""

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str: ...
    def log_error(self, error: Exception, context: Dict[str, Any]) -> None: ...
    def create_user_message(self, error: Exception) -> str: ...


class NullLogger:
    """Logger that discards everything."""

    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    def info(self, message: str, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    def error(self, message: str, **kwargs: Any) -> None:
        pass

    def critical(self, message: str, **kwargs: Any) -> None:
        pass


class DomainService(ABC):
    """Base class for domain services."""

    def __init__(self, logger: Optional[ILogger] = None):
        self.logger = logger or NullLogger()


_MISSING = object()


class ValueObject(ABC):
    """
    Base class for value objects.

    Two value objects are equal when they have the same runtime type and
    their equality components are pairwise equal, in order.
    """

    @abstractmethod
    def equality_components(self) -> Iterable[Any]:
        """Yield the values that make up this object's identity, in order."""

    def __eq__(self, other: object) -> bool:
        if other is None or type(other) is not type(self):
            return False
        pairs = zip_longest(
            self.equality_components(), other.equality_components(), fillvalue=_MISSING
        )
        for left, right in pairs:
            if left is _MISSING or right is _MISSING:
                return False
            if left is None or right is None:
                if left is not right:
                    return False
                continue
            if left != right:
                return False
        return True

    def __hash__(self) -> int:
        # XOR is order-independent; equal objects still hash equally
        return reduce(
            operator.xor,
            (0 if component is None else hash(component)
             for component in self.equality_components()),
            0,
        )


def values_equal(left: Optional[ValueObject], right: Optional[ValueObject]) -> bool:
    """Null-safe structural equality: two ``None`` references are equal."""
    if left is None and right is None:
        return True
    if left is None or right is None:
        return False
    return left == right


def values_not_equal(left: Optional[ValueObject], right: Optional[ValueObject]) -> bool:
    return not values_equal(left, right)
