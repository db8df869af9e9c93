"""
Configuration models and validation schemas.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, Iterable, Optional
import os

from domain_kernel.domain.interfaces.base import ValueObject


IDENTITY_POLICIES = ("transient", "strict")
GUARD_CASCADE_MODES = ("continue", "stop")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, eq=False)
class KernelConfiguration(ValueObject):
    """Configuration for the domain kernel primitives."""

    # How entities without an id compare and hash
    identity_policy: str = "transient"

    # Guard behaviour: collect every violation or stop at the first one
    guard_cascade: str = "continue"
    log_violations: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_policies()
        self._validate_logging()

    def _validate_policies(self) -> None:
        if self.identity_policy not in IDENTITY_POLICIES:
            raise ValueError(
                f"identity_policy must be one of {list(IDENTITY_POLICIES)}, "
                f"got {self.identity_policy!r}"
            )

        if self.guard_cascade not in GUARD_CASCADE_MODES:
            raise ValueError(
                f"guard_cascade must be one of {list(GUARD_CASCADE_MODES)}, "
                f"got {self.guard_cascade!r}"
            )

        if not isinstance(self.log_violations, bool):
            raise ValueError("log_violations must be a boolean")

    def _validate_logging(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}")

        if self.log_file is not None and (not isinstance(self.log_file, str) or not self.log_file):
            raise ValueError("log_file must be a non-empty string or None")

    @property
    def is_strict_identity(self) -> bool:
        return self.identity_policy == "strict"

    @property
    def stops_on_first_violation(self) -> bool:
        return self.guard_cascade == "stop"

    def equality_components(self) -> Iterable[Any]:
        for config_field in fields(self):
            yield getattr(self, config_field.name)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'KernelConfiguration':
        """Create configuration from dictionary with environment variable support."""
        config_dict = dict(config_dict)

        env_overrides = {
            'identity_policy': os.getenv('DOMAIN_KERNEL_IDENTITY_POLICY'),
            'guard_cascade': os.getenv('DOMAIN_KERNEL_GUARD_CASCADE'),
            'log_level': os.getenv('DOMAIN_KERNEL_LOG_LEVEL'),
            'log_violations': os.getenv('DOMAIN_KERNEL_LOG_VIOLATIONS'),
        }

        for key, env_value in env_overrides.items():
            if env_value is not None:
                if key == 'log_violations':
                    config_dict[key] = env_value.strip().lower() in ('1', 'true', 'yes', 'on')
                else:
                    config_dict[key] = env_value

        known = {config_field.name for config_field in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'identity_policy': self.identity_policy,
            'guard_cascade': self.guard_cascade,
            'log_violations': self.log_violations,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }


_active_configuration = KernelConfiguration()


def get_active_configuration() -> KernelConfiguration:
    """Configuration consulted by entities and guards at call time."""
    return _active_configuration


def set_active_configuration(config: KernelConfiguration) -> KernelConfiguration:
    """Install ``config`` process-wide and return the one it replaced."""
    global _active_configuration
    if not isinstance(config, KernelConfiguration):
        raise TypeError("config must be a KernelConfiguration")
    previous = _active_configuration
    _active_configuration = config
    return previous
