"""
Type definitions shared with cluster collaborators.

The config layer never talks to a cluster itself. It consumes a narrow
Connection interface and a settings provider, both defined here.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


# Namespace sentinels
NAMESPACE_ALL = "all"
BLANK_NAMESPACE = ""
DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class ContextInfo:
    """
    What the kubeconfig knows about a context.

    Attributes:
        name: Context name
        cluster: Cluster the context points at
        namespace: Namespace pinned on the context (empty if none)
    """

    name: str
    cluster: str
    namespace: str = BLANK_NAMESPACE


@runtime_checkable
class Connection(Protocol):
    """Live connection used to resolve contexts and check namespaces."""

    def current_context_name(self) -> str:
        ...

    def is_valid_namespace(self, namespace: str, context: Optional[str] = None) -> bool:
        ...

    def context_info(self, name: str) -> Optional[ContextInfo]:
        ...


@runtime_checkable
class SettingsProvider(Protocol):
    """Supplies limits consulted when a namespace is activated."""

    def max_favorites(self) -> int:
        ...


class KubeconfigError(Exception):
    """Raised when the kubeconfig is missing or unusable."""

    pass
