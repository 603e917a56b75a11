"""
Configuration system for kubestate.

Exports:
    Config: Facade over the persisted document
    ConfigDocument / Registry / Context / Namespace: Document models
    Flags / reconcile: Command-line override reconciliation
"""

from kubestate.config.types import (
    DEFAULT_VIEW,
    ConfigError,
    ConfigValidationError,
    ContextNotFoundError,
    DecodeError,
    FavoritesValidation,
    NoActiveContextError,
    OneShot,
    SettingsError,
    ValidationStatus,
)
from kubestate.config.models import (
    ConfigDocument,
    Context,
    LoggerSettings,
    Namespace,
    Registry,
    View,
)
from kubestate.config.paths import (
    CONFIG_DIR_ENV,
    app_config_file,
    app_context_aliases_file,
    app_context_plugins_file,
    config_home,
    yaml_extension,
)
from kubestate.config.flags import Flags, Session, reconcile
from kubestate.config.config import Config

__all__ = [
    # Facade
    "Config",
    # Models
    "ConfigDocument",
    "Registry",
    "Context",
    "Namespace",
    "View",
    "LoggerSettings",
    # Reconciliation
    "Flags",
    "Session",
    "reconcile",
    # Paths
    "CONFIG_DIR_ENV",
    "config_home",
    "app_config_file",
    "app_context_aliases_file",
    "app_context_plugins_file",
    "yaml_extension",
    # Types
    "DEFAULT_VIEW",
    "FavoritesValidation",
    "ValidationStatus",
    "OneShot",
    # Exceptions
    "ConfigError",
    "DecodeError",
    "NoActiveContextError",
    "ContextNotFoundError",
    "SettingsError",
    "ConfigValidationError",
]
