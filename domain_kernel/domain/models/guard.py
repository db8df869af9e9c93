"""
Guard clauses for constructor arguments.

Call ``ensure`` before assigning an argument so an object is never
observable in an invalid state::

    class Customer(AggregateRoot[uuid.UUID]):
        def __init__(self, id: uuid.UUID, name: str):
            super().__init__(ensure("Id", id, not_empty()))
            self.name = ensure("Name", name, not_empty() & max_length(100))
"""

from typing import Any, List, Optional, TypeVar

from domain_kernel.domain.exceptions import ValidationError
from domain_kernel.domain.interfaces.base import DomainService, ILogger
from domain_kernel.domain.models.configuration import (
    KernelConfiguration,
    get_active_configuration,
)
from domain_kernel.domain.models.rules import RuleSet, RuleViolation, as_rules

T = TypeVar('T')


class Guard(DomainService):
    """Validates one value against an explicit rule chain."""

    def __init__(self, logger: Optional[ILogger] = None,
                 configuration: Optional[KernelConfiguration] = None):
        super().__init__(logger)
        self._configuration = configuration

    @property
    def configuration(self) -> KernelConfiguration:
        if self._configuration is not None:
            return self._configuration
        return get_active_configuration()

    def check(self, field_name: str, value: Any, rules: RuleSet) -> List[RuleViolation]:
        """Run ``rules`` against ``value`` and return the violations found."""
        if not field_name or not isinstance(field_name, str) or not field_name.strip():
            raise ValueError("Field name must be a non-empty string")

        chain = as_rules(rules)
        if not chain:
            raise ValueError(f"No rules supplied for field '{field_name}'")

        stop_early = self.configuration.stops_on_first_violation
        violations = []
        for rule in chain:
            violation = rule.validate(field_name, value)
            if violation is None:
                continue
            violations.append(violation)
            if stop_early:
                break
        return violations

    def ensure(self, field_name: str, value: T, rules: RuleSet) -> T:
        """Return ``value`` unchanged, or raise ``ValidationError`` listing every failure."""
        violations = self.check(field_name, value, rules)
        if not violations:
            return value

        if self.configuration.log_violations:
            self.logger.warning(
                "Guard clause rejected value",
                field=field_name,
                rules=[violation.rule for violation in violations],
                descriptions=[violation.description for violation in violations],
            )

        lines = "\n".join(f" -- {violation}" for violation in violations)
        raise ValidationError(
            f"Validation failed:\n{lines}",
            field=field_name,
            value=value,
            violations=violations,
        )


_default_guard = Guard()


def get_default_guard() -> Guard:
    return _default_guard


def set_default_guard(guard: Guard) -> Guard:
    """Install ``guard`` for module-level ``ensure`` calls and return the previous one."""
    global _default_guard
    previous = _default_guard
    _default_guard = guard
    return previous


def ensure(field_name: str, value: T, rules: RuleSet) -> T:
    return _default_guard.ensure(field_name, value, rules)
