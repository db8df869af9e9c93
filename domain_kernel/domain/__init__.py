"""
Domain layer - Tactical DDD building blocks: entities, aggregate roots,
value objects, enumerations and guard clauses.
This layer is independent of external concerns; infrastructure only adds
logging and file-based configuration around it.
"""

from domain_kernel.domain.exceptions import (
    KernelError,
    ConfigurationError,
    ValidationError,
    IdentityError,
    UnassignedIdentityError,
    IdentityReassignmentError,
    EnumerationLookupError,
)
from domain_kernel.domain.interfaces.base import ValueObject, values_equal, values_not_equal
from domain_kernel.domain.models.configuration import (
    KernelConfiguration,
    get_active_configuration,
    set_active_configuration,
)
from domain_kernel.domain.models.entity import (
    UNASSIGNED,
    Entity,
    AggregateRoot,
    is_aggregate_root,
    entities_equal,
    entities_not_equal,
)
from domain_kernel.domain.models.enumeration import Enumeration, declare
from domain_kernel.domain.models.guard import Guard, ensure, get_default_guard, set_default_guard
from domain_kernel.domain.models.rules import Rule, RuleChain, RuleViolation
from domain_kernel.domain.models.value_object import SingleValueObject

__all__ = [
    "KernelError",
    "ConfigurationError",
    "ValidationError",
    "IdentityError",
    "UnassignedIdentityError",
    "IdentityReassignmentError",
    "EnumerationLookupError",
    "ValueObject",
    "values_equal",
    "values_not_equal",
    "KernelConfiguration",
    "get_active_configuration",
    "set_active_configuration",
    "UNASSIGNED",
    "Entity",
    "AggregateRoot",
    "is_aggregate_root",
    "entities_equal",
    "entities_not_equal",
    "Enumeration",
    "declare",
    "Guard",
    "ensure",
    "get_default_guard",
    "set_default_guard",
    "Rule",
    "RuleChain",
    "RuleViolation",
    "SingleValueObject",
]
