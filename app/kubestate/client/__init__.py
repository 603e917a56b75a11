"""
Cluster collaborators consumed by the config layer.
"""

from kubestate.client.types import (
    BLANK_NAMESPACE,
    DEFAULT_NAMESPACE,
    NAMESPACE_ALL,
    Connection,
    ContextInfo,
    KubeconfigError,
    SettingsProvider,
)
from kubestate.client.settings import MAX_FAVORITES, KubeSettings
from kubestate.client.connection import KubeconfigConnection, resolve_kubeconfig_path

__all__ = [
    # Constants
    "NAMESPACE_ALL",
    "BLANK_NAMESPACE",
    "DEFAULT_NAMESPACE",
    "MAX_FAVORITES",
    # Interfaces
    "Connection",
    "ContextInfo",
    "SettingsProvider",
    "KubeconfigError",
    # Implementations
    "KubeSettings",
    "KubeconfigConnection",
    "resolve_kubeconfig_path",
]
