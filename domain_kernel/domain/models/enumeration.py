"""
Enumeration pattern: closed sets of named, ordinal-tagged instances.

Use it instead of ``enum.Enum`` when the constants need richer behaviour
or extra attributes. Instances are declared in the class body::

    class CardType(Enumeration):
        AMEX = declare(1, "Amex")
        VISA = declare(2, "Visa")

When the class is created each declaration is replaced by a real
``CardType`` instance and recorded, in order, in the class's own registry.
Subclasses with extra constructor arguments pass them through ``declare``.
Constants that need their own behaviour are concrete subclasses registered
with ``member``.

Equality only looks at the ordinal, so two instances of one type sharing an
ordinal compare equal whatever their names. Keeping ordinals unique within a
type is up to the author of the enumeration.
"""

from typing import Any, Callable, Dict, Iterable, List, Tuple, Type, TypeVar

from domain_kernel.domain.exceptions import EnumerationLookupError
from domain_kernel.domain.interfaces.base import ValueObject

E = TypeVar('E', bound='Enumeration')


class Declaration:
    """Placeholder for an enumeration instance declared in a class body."""

    def __init__(self, *args: Any, **kwargs: Any):
        self.args = args
        self.kwargs = kwargs

    def __repr__(self) -> str:
        return f"Declaration{self.args!r}"


def declare(ordinal: int, name: str, *args: Any, **kwargs: Any) -> Any:
    """Declare an enumeration instance; extra arguments reach the constructor."""
    return Declaration(ordinal, name, *args, **kwargs)


def _is_abstract(cls: type) -> bool:
    # ABCMeta only fills in __abstractmethods__ after __init_subclass__ has run
    return any(getattr(getattr(cls, attribute, None), '__isabstractmethod__', False)
               for attribute in dir(cls))


class Enumeration(ValueObject):
    """Base class for type-safe enumerations with ordinals and names."""

    _declared: Tuple['Enumeration', ...] = ()

    def __init__(self, ordinal: int, name: str):
        if isinstance(ordinal, bool) or not isinstance(ordinal, int):
            raise ValueError(f"Ordinal must be an integer, got {ordinal!r}")
        if not name or not isinstance(name, str):
            raise ValueError("Name must be a non-empty string")
        self._ordinal = ordinal
        self._name = name

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        declarations = [(attribute, candidate) for attribute, candidate in vars(cls).items()
                        if isinstance(candidate, Declaration)]
        if declarations and _is_abstract(cls):
            raise TypeError(
                f"{cls.__name__} is abstract; declare its instances on concrete "
                f"subclasses with @{cls.__name__}.member(...)"
            )

        declared = []
        for attribute, candidate in declarations:
            instance = cls(*candidate.args, **candidate.kwargs)
            instance._owner = cls
            setattr(cls, attribute, instance)
            declared.append(instance)
        cls._declared = tuple(declared)

    @classmethod
    def member(cls, attribute: str, ordinal: int, name: str,
               *args: Any, **kwargs: Any) -> Callable[[type], type]:
        """
        Class decorator declaring an instance of a specialised subclass.

        Lets each constant carry its own behaviour::

            class Shape(Enumeration):
                @abstractmethod
                def sides(self) -> int: ...

            @Shape.member("TRIANGLE", 1, "Triangle")
            class Triangle(Shape):
                def sides(self) -> int:
                    return 3

        The instance is set as ``Shape.TRIANGLE`` and listed by ``Shape``.
        """
        if hasattr(cls, attribute):
            raise ValueError(f"{cls.__name__} already defines {attribute!r}")

        def register(subclass: type) -> type:
            if not (isinstance(subclass, type) and issubclass(subclass, cls)):
                raise TypeError(f"{subclass!r} is not a subclass of {cls.__name__}")
            instance = subclass(ordinal, name, *args, **kwargs)
            instance._owner = cls
            setattr(cls, attribute, instance)
            cls._declared = cls._declared + (instance,)
            return subclass

        return register

    @property
    def ordinal(self) -> int:
        return self._ordinal

    @property
    def name(self) -> str:
        return self._name

    def equality_components(self) -> Iterable[Any]:
        yield self._ordinal

    @classmethod
    def get_all(cls: Type[E]) -> List[E]:
        """Every instance declared directly on this type, in declaration order."""
        return list(cls._declared)

    @classmethod
    def from_ordinal(cls: Type[E], ordinal: int) -> E:
        for instance in cls._declared:
            if instance.ordinal == ordinal:
                return instance
        raise EnumerationLookupError(
            f"Invalid {cls.__name__} ordinal: {ordinal!r}. "
            f"Valid options: {[instance.ordinal for instance in cls._declared]}",
            enumeration=cls.__name__,
            key=ordinal,
        )

    @classmethod
    def from_name(cls: Type[E], name: str) -> E:
        """Look up a declared instance by name, ignoring case."""
        wanted = str(name).lower()
        for instance in cls._declared:
            if instance.name.lower() == wanted:
                return instance
        raise EnumerationLookupError(
            f"Invalid {cls.__name__} name: {name!r}. "
            f"Valid options: {[instance.name for instance in cls._declared]}",
            enumeration=cls.__name__,
            key=name,
        )

    @classmethod
    def as_mapping(cls: Type[E]) -> Dict[int, E]:
        return {instance.ordinal: instance for instance in cls._declared}

    def _comparable(self, other: object) -> bool:
        if type(other) is type(self):
            return True
        owner = getattr(self, '_owner', None)
        return owner is not None and getattr(other, '_owner', None) is owner

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._ordinal < other._ordinal

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._ordinal <= other._ordinal

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._ordinal > other._ordinal

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._ordinal >= other._ordinal

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._ordinal}, {self._name!r})"
