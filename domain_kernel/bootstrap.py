"""
Wires the kernel's infrastructure together.

Domain primitives work without any of this: entities, value objects and
guards fall back to the default configuration and a silent logger. Call
``bootstrap`` at application start-up to load a configuration file, get
structured logs for rejected values and, optionally, hot-reload settings.
"""

from typing import Any, Dict, Optional, Tuple

from domain_kernel.domain.interfaces.base import ILogger
from domain_kernel.domain.models.configuration import (
    KernelConfiguration,
    get_active_configuration,
    set_active_configuration,
)
from domain_kernel.domain.models.guard import Guard, get_default_guard, set_default_guard
from domain_kernel.infrastructure.configuration.manager import ConfigurationManager
from domain_kernel.infrastructure.error_handling.handler import ErrorHandler
from domain_kernel.infrastructure.logging.logger import LoggerFactory


class KernelRuntime:
    """Holds the logger, configuration manager, error handler and guard."""

    def __init__(self, config_file: str, stream: Any = None):
        self.config_file = config_file
        self._stream = stream
        self._previous_configuration: Optional[KernelConfiguration] = None
        self._previous_guard: Optional[Guard] = None
        self._started = False
        self._initialize_components()

    def _initialize_components(self) -> None:
        bootstrap_logger = LoggerFactory.create_component_logger(
            "configuration", {}, stream=self._stream
        )

        self.config_manager = ConfigurationManager(self.config_file, bootstrap_logger)
        self.configuration = self.config_manager.get_kernel_config()

        self.logger, errors_logger, guard_logger = self._component_loggers(self.configuration)
        self.error_handler = ErrorHandler(errors_logger)
        self.guard = Guard(guard_logger)

        self.config_manager.add_change_callback(self._on_configuration_changed)

    def _component_loggers(self, config: KernelConfiguration) -> Tuple[ILogger, ILogger, ILogger]:
        """Build the kernel, error and guard loggers from ``config``."""
        base_config: Dict[str, Any] = config.to_dict()
        return tuple(
            LoggerFactory.create_component_logger(component, base_config, stream=self._stream)
            for component in ("kernel", "errors", "guard")
        )

    def _on_configuration_changed(self, config: KernelConfiguration) -> None:
        previous = self.configuration
        self.configuration = config
        if (config.log_level, config.log_file) != (previous.log_level, previous.log_file):
            # Re-creating a component logger replaces its handlers and level
            self.logger, self.error_handler.logger, self.guard.logger = self._component_loggers(config)
        if self._started:
            set_active_configuration(config)
        self.logger.info("Kernel configuration changed", **config.to_dict())

    def start(self, hot_reload: bool = False) -> 'KernelRuntime':
        """Activate this runtime's configuration and guard process-wide."""
        self._previous_configuration = get_active_configuration()
        self._previous_guard = get_default_guard()

        self.config_manager.apply()
        set_default_guard(self.guard)
        self._started = True

        if hot_reload:
            self.config_manager.start_hot_reload()

        self.logger.info(
            "Domain kernel started",
            config_file=str(self.config_file),
            hot_reload=hot_reload,
        )
        return self

    def stop(self) -> None:
        """Stop hot reload and restore what was active before ``start``."""
        self.config_manager.stop_hot_reload()
        self._started = False

        if self._previous_configuration is not None:
            set_active_configuration(self._previous_configuration)
            self._previous_configuration = None
        if self._previous_guard is not None:
            set_default_guard(self._previous_guard)
            self._previous_guard = None

        self.logger.info("Domain kernel stopped")

    def __enter__(self) -> 'KernelRuntime':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


def bootstrap(config_file: str, hot_reload: bool = False, stream: Any = None) -> KernelRuntime:
    """Build a runtime from ``config_file`` and activate it."""
    return KernelRuntime(config_file, stream=stream).start(hot_reload=hot_reload)
