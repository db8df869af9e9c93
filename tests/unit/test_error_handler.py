"""
Unit tests for the error handler.
"""

import pytest
from unittest.mock import Mock

from domain_kernel.domain.exceptions import (
    KernelError, ConfigurationError, ValidationError, UnassignedIdentityError,
    IdentityReassignmentError, EnumerationLookupError,
)
from domain_kernel.domain.models.guard import ensure
from domain_kernel.domain.models.rules import not_empty, min_length
from domain_kernel.infrastructure.error_handling.handler import ErrorHandler


@pytest.fixture
def error_handler(mock_logger):
    return ErrorHandler(mock_logger)


def _validation_error():
    try:
        ensure("Name", "", [not_empty(), min_length(1)])
    except ValidationError as e:
        return e
    raise AssertionError("ensure should have failed")


class TestLogError:
    """Test structured error logging."""

    def test_validation_error_logged_as_warning(self, error_handler, mock_logger):
        error = _validation_error()

        error_handler.log_error(error, {"operation": "create_customer"})

        args, kwargs = mock_logger.warning.call_args
        assert args == ("Domain validation error occurred",)
        assert kwargs["field"] == "Name"
        assert kwargs["value"] == "''"
        assert kwargs["violations"] == [
            "'Name' must not be empty.",
            "The length of 'Name' must be at least 1 characters.",
        ]
        assert kwargs["operation"] == "create_customer"
        assert kwargs["error_type"] == "ValidationError"
        assert "traceback" in kwargs

    def test_identity_errors_logged_as_error(self, error_handler, mock_logger):
        error_handler.log_error(UnassignedIdentityError("no id", entity_type="app.Customer"), {})

        args, kwargs = mock_logger.error.call_args
        assert args == ("Entity identity error occurred",)
        assert kwargs["entity_type"] == "app.Customer"

    def test_reassignment_details(self, error_handler, mock_logger):
        error = IdentityReassignmentError("already set", entity_type="app.Customer", current_id=1, new_id=2)

        error_handler.log_error(error, {})

        _, kwargs = mock_logger.error.call_args
        assert kwargs["current_id"] == "1"
        assert kwargs["new_id"] == "2"

    def test_enumeration_lookup_details(self, error_handler, mock_logger):
        error_handler.log_error(EnumerationLookupError("bad", enumeration="Color", key="green"), {})

        _, kwargs = mock_logger.warning.call_args
        assert kwargs["enumeration"] == "Color"
        assert kwargs["key"] == "'green'"

    def test_kernel_error_context_is_included(self, error_handler, mock_logger):
        error_handler.log_error(ConfigurationError("broken", context={"path": "kernel.json"}), {})

        args, kwargs = mock_logger.error.call_args
        assert args == ("Configuration error occurred",)
        assert kwargs["path"] == "kernel.json"

    def test_unexpected_errors_logged_as_critical(self, error_handler, mock_logger):
        error_handler.log_error(RuntimeError("boom"), {})

        args, kwargs = mock_logger.critical.call_args
        assert args == ("Unexpected error occurred",)
        assert "traceback" not in kwargs


class TestCreateUserMessage:
    """Test user-facing messages."""

    def test_validation_message_lists_rules(self, error_handler):
        message = error_handler.create_user_message(_validation_error())

        assert message.startswith("Invalid value for 'Name'.")
        assert "- 'Name' must not be empty." in message

    def test_other_messages(self, error_handler):
        assert error_handler.create_user_message(
            EnumerationLookupError("bad", enumeration="Color", key=9)
        ) == "Unknown Color value: 9."
        assert "Assign an id" in error_handler.create_user_message(UnassignedIdentityError("No id"))
        assert "cannot be changed" in error_handler.create_user_message(IdentityReassignmentError("Has id"))
        assert error_handler.create_user_message(ConfigurationError("bad file")).startswith("Configuration error: bad file")
        assert error_handler.create_user_message(KernelError("oops")) == "Domain error: oops"
        assert error_handler.create_user_message(RuntimeError("boom")) == "Unexpected error: boom"


class TestHandleError:
    """Test the full handling flow."""

    def test_returns_user_message_and_runs_fallback(self, error_handler, mock_logger):
        error = _validation_error()

        message = error_handler.handle_error(error)

        assert message.startswith("Invalid value for 'Name'.")
        info_messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert info_messages == ["Validation failed for field: Name", "Validation failed for field: Name"]

    def test_most_specific_fallback_wins(self, error_handler):
        generic = Mock()
        specific = Mock()
        error_handler.add_fallback_handler(KernelError, generic)
        error_handler.add_fallback_handler(EnumerationLookupError, specific)

        error = EnumerationLookupError("bad", enumeration="Color", key=9)
        error_handler.handle_error(error, {"source": "test"})

        specific.assert_called_once_with(error, {"source": "test"})
        generic.assert_not_called()

    def test_failing_fallback_is_logged(self, error_handler, mock_logger):
        error_handler.add_fallback_handler(RuntimeError, Mock(side_effect=ValueError("fallback broke")))

        message = error_handler.handle_error(RuntimeError("boom"))

        assert message == "Unexpected error: boom"
        _, kwargs = mock_logger.error.call_args
        assert kwargs["error_message"] == "fallback broke"

    def test_removed_fallback_is_not_called(self, error_handler):
        handler = Mock()
        error_handler.add_fallback_handler(RuntimeError, handler)
        error_handler.remove_fallback_handler(RuntimeError)

        error_handler.handle_error(RuntimeError("boom"))

        handler.assert_not_called()
