"""
Static settings provider.
"""

from dataclasses import dataclass

# Favorite namespaces kept per context
MAX_FAVORITES = 9


@dataclass
class KubeSettings:
    """
    Cluster-wide defaults consulted when activating a namespace.

    Attributes:
        favorites_limit: Maximum number of favorite namespaces per context
    """

    favorites_limit: int = MAX_FAVORITES

    def max_favorites(self) -> int:
        """Return the favorites cap, rejecting nonsensical values."""
        if self.favorites_limit < 1:
            raise ValueError(f"favorites limit must be positive, got {self.favorites_limit}")
        return self.favorites_limit
