"""
Domain exceptions and error hierarchy.
"""

from typing import Optional, Dict, Any, List


class KernelError(Exception):
    """Base exception for domain kernel errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(KernelError):
    """Configuration related errors."""
    pass


class ValidationError(KernelError):
    """Raised by guard clauses when a value breaks one or more rules."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, violations: Optional[List[Any]] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.field = field
        self.value = value
        self.violations = list(violations or [])

    @property
    def descriptions(self) -> List[str]:
        """Descriptions of every violated rule, in evaluation order."""
        return [violation.description for violation in self.violations]


class IdentityError(KernelError):
    """Entity identity errors."""

    def __init__(self, message: str, entity_type: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.entity_type = entity_type


class UnassignedIdentityError(IdentityError):
    """An entity without an id was compared or hashed under the strict policy."""
    pass


class IdentityReassignmentError(IdentityError):
    """An entity id was assigned a second time."""

    def __init__(self, message: str, entity_type: Optional[str] = None,
                 current_id: Optional[Any] = None, new_id: Optional[Any] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, entity_type, context)
        self.current_id = current_id
        self.new_id = new_id


class EnumerationLookupError(KernelError):
    """No declared enumeration instance matches the requested key."""

    def __init__(self, message: str, enumeration: Optional[str] = None,
                 key: Optional[Any] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.enumeration = enumeration
        self.key = key
