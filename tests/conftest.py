"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock

from domain_kernel.domain.interfaces.base import ILogger
from domain_kernel.domain.models.configuration import (
    KernelConfiguration,
    get_active_configuration,
    set_active_configuration,
)
from domain_kernel.domain.models.guard import get_default_guard, set_default_guard


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    logger = Mock(spec=ILogger)
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture(autouse=True)
def restore_kernel_state(monkeypatch):
    """Keep process-wide configuration and guard isolated between tests."""
    for name in ("DOMAIN_KERNEL_IDENTITY_POLICY", "DOMAIN_KERNEL_GUARD_CASCADE",
                 "DOMAIN_KERNEL_LOG_LEVEL", "DOMAIN_KERNEL_LOG_VIOLATIONS"):
        monkeypatch.delenv(name, raising=False)

    configuration = get_active_configuration()
    guard = get_default_guard()
    yield
    set_active_configuration(configuration)
    set_default_guard(guard)


@pytest.fixture
def strict_identity():
    """Activate the strict identity policy for one test."""
    set_active_configuration(KernelConfiguration(identity_policy="strict"))


@pytest.fixture
def sample_kernel_config():
    """Create a sample kernel configuration for testing."""
    return KernelConfiguration(
        identity_policy="strict",
        guard_cascade="stop",
        log_violations=False,
        log_level="DEBUG",
    )


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary for testing."""
    return {
        'identity_policy': "transient",
        'guard_cascade': "continue",
        'log_violations': True,
        'log_level': "WARNING",
        'log_file': None,
    }
