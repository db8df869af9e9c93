"""
Error handler implementation with structured logging and fallback mechanisms.
"""

import traceback
from typing import Dict, Any, Callable, Optional
from datetime import datetime

from domain_kernel.domain.interfaces.base import ILogger
from domain_kernel.domain.exceptions import (
    KernelError, ConfigurationError, ValidationError, IdentityError,
    UnassignedIdentityError, IdentityReassignmentError, EnumerationLookupError,
)

FallbackHandler = Callable[[Exception, Dict[str, Any]], None]


class ErrorHandler:
    """Turns kernel errors into structured log records and user-facing messages."""

    def __init__(self, logger: ILogger):
        self.logger = logger
        self._fallback_handlers: Dict[type, FallbackHandler] = {}
        self._setup_default_handlers()

    def _setup_default_handlers(self) -> None:
        """Setup default fallback handlers for different error types."""
        self._fallback_handlers.update({
            ConfigurationError: self._handle_configuration_error,
            ValidationError: self._handle_validation_error,
            IdentityError: self._handle_identity_error,
        })

    def handle_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> str:
        """Handle error with logging and return user-friendly message."""
        context = context or {}
        self.log_error(error, context)
        self._execute_fallback(error, context)
        return self.create_user_message(error)

    def log_error(self, error: Exception, context: Dict[str, Any]) -> None:
        """Log error with structured context."""
        error_context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now().isoformat(),
            **context
        }
        if error.__traceback__ is not None:
            error_context['traceback'] = ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        if isinstance(error, KernelError):
            error_context.update(error.context)

            if isinstance(error, ValidationError):
                error_context.update({
                    'field': error.field,
                    'value': repr(error.value) if error.value is not None else None,
                    'violations': error.descriptions,
                })
            elif isinstance(error, IdentityReassignmentError):
                error_context.update({
                    'entity_type': error.entity_type,
                    'current_id': repr(error.current_id),
                    'new_id': repr(error.new_id),
                })
            elif isinstance(error, IdentityError):
                error_context['entity_type'] = error.entity_type
            elif isinstance(error, EnumerationLookupError):
                error_context.update({
                    'enumeration': error.enumeration,
                    'key': repr(error.key),
                })

        if isinstance(error, (ValidationError, EnumerationLookupError)):
            self.logger.warning("Domain validation error occurred", **error_context)
        elif isinstance(error, ConfigurationError):
            self.logger.error("Configuration error occurred", **error_context)
        elif isinstance(error, IdentityError):
            self.logger.error("Entity identity error occurred", **error_context)
        elif isinstance(error, KernelError):
            self.logger.error("Domain kernel error occurred", **error_context)
        else:
            self.logger.critical("Unexpected error occurred", **error_context)

    def create_user_message(self, error: Exception) -> str:
        """Create user-friendly error message."""
        if isinstance(error, ValidationError):
            details = "\n".join(f"- {description}" for description in error.descriptions)
            message = f"Invalid value for '{error.field}'."
            return f"{message}\n{details}" if details else message

        elif isinstance(error, EnumerationLookupError):
            return f"Unknown {error.enumeration} value: {error.key!r}."

        elif isinstance(error, UnassignedIdentityError):
            return f"{error.message}. Assign an id before comparing or storing it."

        elif isinstance(error, IdentityReassignmentError):
            return f"{error.message}. Entity ids cannot be changed once assigned."

        elif isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}\nCheck the configuration file."

        elif isinstance(error, KernelError):
            return f"Domain error: {error.message}"

        else:
            return f"Unexpected error: {error}"

    def _execute_fallback(self, error: Exception, context: Dict[str, Any]) -> None:
        """Run the most specific fallback handler registered for the error's type."""
        for exc_type in type(error).__mro__:
            handler = self._fallback_handlers.get(exc_type)
            if handler is None:
                continue
            try:
                handler(error, context)
            except Exception as fallback_error:
                self.logger.error(
                    "Fallback handler failed",
                    error_type=type(fallback_error).__name__,
                    error_message=str(fallback_error),
                    original_error=str(error)
                )
            return

    # Specific fallback handlers

    def _handle_configuration_error(self, error: ConfigurationError, context: Dict[str, Any]) -> None:
        self.logger.info("Keeping the previously active configuration")

    def _handle_validation_error(self, error: ValidationError, context: Dict[str, Any]) -> None:
        """Log each violated rule on its own."""
        for violation in error.violations:
            self.logger.info(
                f"Validation failed for field: {violation.field}",
                rule=violation.rule,
                description=violation.description,
            )

    def _handle_identity_error(self, error: IdentityError, context: Dict[str, Any]) -> None:
        self.logger.info(f"Identity error for entity type: {error.entity_type}")

    def add_fallback_handler(self, error_type: type, handler: FallbackHandler) -> None:
        """Add custom fallback handler for specific error type."""
        self._fallback_handlers[error_type] = handler

    def remove_fallback_handler(self, error_type: type) -> None:
        """Remove fallback handler for specific error type."""
        self._fallback_handlers.pop(error_type, None)
