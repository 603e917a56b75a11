"""
Type definitions for the configuration layer.

This module defines the error taxonomy and the small value types passed
between the registry, the namespace activator and the facade.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# View shown when a context has none recorded
DEFAULT_VIEW = "po"

# Modes used when creating config directories and files
DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644


class ValidationStatus(str, Enum):
    """Outcome of a favorites validation pass."""

    VALIDATED = "validated"
    SKIPPED = "skipped"  # No usable connection


@dataclass
class FavoritesValidation:
    """
    Result of validating favorite namespaces against a connection.

    Attributes:
        status: Whether validation ran or was skipped
        dropped: Favorites removed because the cluster does not know them
        reason: Why validation was skipped (if skipped)
    """

    status: ValidationStatus
    dropped: list[str] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status == ValidationStatus.SKIPPED

    @classmethod
    def validated(cls, dropped: Optional[list[str]] = None) -> "FavoritesValidation":
        """Create a result for a completed pass."""
        return cls(status=ValidationStatus.VALIDATED, dropped=list(dropped or []))

    @classmethod
    def skip(cls, reason: str) -> "FavoritesValidation":
        """Create a result for a pass that never reached the cluster."""
        return cls(status=ValidationStatus.SKIPPED, reason=reason)


class OneShot:
    """
    A value that can be read exactly once.

    Used for the startup command: it overrides the persisted view on the
    first read only.
    """

    def __init__(self, value: Optional[str] = None):
        self._value = value or None

    @property
    def pending(self) -> bool:
        return self._value is not None

    def consume(self) -> Optional[str]:
        value, self._value = self._value, None
        return value

    def __repr__(self) -> str:
        return f"<OneShot pending={self.pending}>"


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class DecodeError(ConfigError):
    """Raised when a persisted document cannot be decoded."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Unable to decode config {path}: {message}")
        self.path = path


class NoActiveContextError(ConfigError):
    """Raised when an operation needs an active context and none exists."""

    def __init__(self, message: str = "no active context"):
        super().__init__(message)


class ContextNotFoundError(ConfigError):
    """Raised when a context cannot be resolved or activated."""

    pass


class SettingsError(ConfigError):
    """Raised when the settings provider cannot supply defaults."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when the configuration fails its pre-save check."""

    pass
