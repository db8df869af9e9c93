"""
Composable validation rules used by guard clauses.

A rule pairs a predicate with a human-readable description. Descriptions
are templates: ``{field}`` is replaced with the guarded field's name and
any rule parameters (``{max}``, ``{pattern}``...) with their values.

Rules are composed explicitly, either as a list or with ``&``::

    ensure("Name", name, not_empty() & max_length(50))

Apart from ``not_none``, ``empty`` and ``must``, the stock rules let
``None`` through. Nullness is ``not_none``'s (or ``not_empty``'s) concern.
Length rules reject any other value that has no ``len()``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from collections.abc import Sized
import re
import uuid

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class RuleViolation:
    """A single failed rule for a single field."""

    field: str
    description: str
    attempted_value: Any = None
    rule: str = ""

    def __str__(self) -> str:
        return f"{self.field}: {self.description}"


@dataclass(frozen=True, eq=False)
class Rule:
    """A named predicate over one value."""

    name: str
    predicate: Callable[[Any], bool]
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def check(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self, field_name: str) -> str:
        """Fill in ``{field}`` and the rule's parameters; other braces stay literal."""
        values = {**self.parameters, 'field': field_name}

        def substitute(match: 're.Match[str]') -> str:
            key = match.group(1)
            return str(values[key]) if key in values else match.group(0)

        return _PLACEHOLDER.sub(substitute, self.description)

    def validate(self, field_name: str, value: Any) -> Optional[RuleViolation]:
        """Return a violation if ``value`` fails this rule, otherwise ``None``."""
        if self.check(value):
            return None
        return RuleViolation(
            field=field_name,
            description=self.describe(field_name),
            attempted_value=value,
            rule=self.name,
        )

    def with_message(self, description: str) -> 'Rule':
        return Rule(self.name, self.predicate, description, dict(self.parameters))

    def __and__(self, other: 'RuleSet') -> 'RuleChain':
        return RuleChain((self,)) & other


@dataclass(frozen=True)
class RuleChain:
    """An ordered, immutable sequence of rules."""

    rules: Tuple[Rule, ...] = ()

    def __and__(self, other: 'RuleSet') -> 'RuleChain':
        return RuleChain(self.rules + tuple(as_rules(other)))

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


RuleSet = Union[Rule, RuleChain, Sequence[Rule]]


def as_rules(rules: RuleSet) -> List[Rule]:
    """Normalize a rule, chain or sequence of rules into a list."""
    if isinstance(rules, Rule):
        return [rules]
    collected = list(rules)
    for rule in collected:
        if not isinstance(rule, Rule):
            raise TypeError(f"Expected Rule, got {type(rule).__name__}")
    return collected


# =================== NULL / EMPTY RULES ===================

def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, uuid.UUID):
        return value.int == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def not_none() -> Rule:
    return Rule("not_none", lambda value: value is not None, "'{field}' must not be empty.")


def not_empty() -> Rule:
    """Reject None, blank strings, empty collections and the nil UUID."""
    return Rule("not_empty", lambda value: not _is_empty(value), "'{field}' must not be empty.")


def empty() -> Rule:
    return Rule("empty", _is_empty, "'{field}' must be empty.")


# =================== LENGTH RULES ===================

def _has_length(value: Any, minimum: int = 0, maximum: Optional[int] = None) -> bool:
    # Values without a length never satisfy a length rule
    if not isinstance(value, Sized):
        return False
    size = len(value)
    return size >= minimum and (maximum is None or size <= maximum)


def length(minimum: int, maximum: int) -> Rule:
    if minimum < 0 or maximum < minimum:
        raise ValueError(f"Invalid length bounds: min={minimum}, max={maximum}")
    return Rule(
        "length",
        lambda value: value is None or _has_length(value, minimum, maximum),
        "'{field}' must be between {min} and {max} characters.",
        {"min": minimum, "max": maximum},
    )


def min_length(minimum: int) -> Rule:
    return Rule(
        "min_length",
        lambda value: value is None or _has_length(value, minimum=minimum),
        "The length of '{field}' must be at least {min} characters.",
        {"min": minimum},
    )


def max_length(maximum: int) -> Rule:
    return Rule(
        "max_length",
        lambda value: value is None or _has_length(value, maximum=maximum),
        "The length of '{field}' must be {max} characters or fewer.",
        {"max": maximum},
    )


def matches(pattern: Union[str, re.Pattern]) -> Rule:
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Rule(
        "matches",
        lambda value: value is None or compiled.search(str(value)) is not None,
        "'{field}' is not in the correct format.",
        {"pattern": compiled.pattern},
    )


# =================== COMPARISON RULES ===================

def equal(expected: Any) -> Rule:
    return Rule(
        "equal",
        lambda value: value is None or value == expected,
        "'{field}' must be equal to '{expected}'.",
        {"expected": expected},
    )


def not_equal(unexpected: Any) -> Rule:
    return Rule(
        "not_equal",
        lambda value: value is None or value != unexpected,
        "'{field}' must not be equal to '{unexpected}'.",
        {"unexpected": unexpected},
    )


def greater_than(limit: Any) -> Rule:
    return Rule(
        "greater_than",
        lambda value: value is None or value > limit,
        "'{field}' must be greater than '{limit}'.",
        {"limit": limit},
    )


def greater_than_or_equal(limit: Any) -> Rule:
    return Rule(
        "greater_than_or_equal",
        lambda value: value is None or value >= limit,
        "'{field}' must be greater than or equal to '{limit}'.",
        {"limit": limit},
    )


def less_than(limit: Any) -> Rule:
    return Rule(
        "less_than",
        lambda value: value is None or value < limit,
        "'{field}' must be less than '{limit}'.",
        {"limit": limit},
    )


def less_than_or_equal(limit: Any) -> Rule:
    return Rule(
        "less_than_or_equal",
        lambda value: value is None or value <= limit,
        "'{field}' must be less than or equal to '{limit}'.",
        {"limit": limit},
    )


def inclusive_between(low: Any, high: Any) -> Rule:
    return Rule(
        "inclusive_between",
        lambda value: value is None or low <= value <= high,
        "'{field}' must be between {low} and {high}.",
        {"low": low, "high": high},
    )


def exclusive_between(low: Any, high: Any) -> Rule:
    return Rule(
        "exclusive_between",
        lambda value: value is None or low < value < high,
        "'{field}' must be between {low} and {high} (exclusive).",
        {"low": low, "high": high},
    )


def one_of(options: Iterable[Any]) -> Rule:
    allowed = tuple(options)
    return Rule(
        "one_of",
        lambda value: value is None or value in allowed,
        "'{field}' must be one of {options}.",
        {"options": list(allowed)},
    )


# =================== CUSTOM RULES ===================

def must(predicate: Callable[[Any], bool], description: str = "The specified condition was not met for '{field}'.") -> Rule:
    """Wrap an arbitrary predicate; it sees ``None`` like any other value."""
    return Rule("must", predicate, description)
