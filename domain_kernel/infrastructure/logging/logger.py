"""
Structured logging implementation.
"""

import logging
import json
from datetime import datetime
from typing import Any, Dict, IO, Optional
from pathlib import Path

from domain_kernel.domain.interfaces.base import ILogger

ROOT_LOGGER_NAME = "domain_kernel"


class StructuredLogger:
    """Structured logger implementation with JSON formatting."""

    def __init__(self, name: str, level: str = "INFO", log_file: Optional[str] = None,
                 stream: Optional[IO[str]] = None, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = dict(context or {})
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Replace handlers so re-creating a logger does not duplicate output
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = StructuredFormatter()

        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        self.logger.propagate = False

    @classmethod
    def _child(cls, parent: 'StructuredLogger', context: Dict[str, Any]) -> 'StructuredLogger':
        child = cls.__new__(cls)
        child.name = parent.name
        child.logger = parent.logger
        child.context = {**parent.context, **context}
        return child

    def bind(self, **context: Any) -> 'StructuredLogger':
        """Return a logger sharing handlers that adds ``context`` to every record."""
        return self._child(self, context)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message with context."""
        self._log(logging.CRITICAL, message, kwargs)

    def close(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        """Internal logging method with context."""
        merged = {**self.context, **context}
        extra = {
            'context': merged,
            'timestamp': datetime.now().isoformat(),
            'component': merged.get('component', 'kernel')
        }

        self.logger.log(level, message, extra=extra)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': getattr(record, 'timestamp', datetime.now().isoformat()),
            'level': record.levelname,
            'component': getattr(record, 'component', 'kernel'),
            'message': record.getMessage(),
            'logger': record.name
        }

        context = getattr(record, 'context', {})
        if context:
            log_data['context'] = context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Rejected values can be arbitrary domain objects
        return json.dumps(log_data, ensure_ascii=False, default=repr)


class LoggerFactory:
    """Factory for creating loggers with consistent configuration."""

    @staticmethod
    def create_logger(name: str = ROOT_LOGGER_NAME, level: str = "INFO",
                      log_file: Optional[str] = None, stream: Optional[IO[str]] = None) -> ILogger:
        """Create a structured logger instance."""
        return StructuredLogger(name, level, log_file, stream)

    @staticmethod
    def create_component_logger(component_name: str, base_config: Dict[str, Any],
                                stream: Optional[IO[str]] = None) -> ILogger:
        """Create a logger for a specific component from a configuration mapping."""
        log_level = base_config.get('log_level', 'INFO')
        log_file = base_config.get('log_file')

        logger = StructuredLogger(
            f"{ROOT_LOGGER_NAME}.{component_name}", log_level, log_file, stream
        )
        return logger.bind(component=component_name)
