"""
Pydantic models for the persisted configuration document.

The document is a single YAML mapping under the `k9s` key:

    k9s:
      currentContext: dev
      screenDumpDir: /tmp/kubestate-screens-me
      logger: {tail: 100, buffer: 5000, sinceSeconds: -1}
      contexts:
        dev:
          cluster: dev-cluster
          namespace: {active: default, lockFavorites: false, favorites: [default]}
          view: {active: po}

Unknown keys are ignored and missing keys fall back to defaults.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError
from pydantic.alias_generators import to_camel

from kubestate.client.settings import MAX_FAVORITES
from kubestate.client.types import (
    DEFAULT_NAMESPACE,
    NAMESPACE_ALL,
    Connection,
    ContextInfo,
    SettingsProvider,
)
from kubestate.config.merge import refine_model
from kubestate.config.paths import default_screen_dump_dir
from kubestate.config.types import (
    DEFAULT_VIEW,
    ConfigValidationError,
    ContextNotFoundError,
    FavoritesValidation,
    NoActiveContextError,
    SettingsError,
)
from kubestate.utils import get_logger

logger = get_logger(__name__)


def favorites_limit(settings: Optional[SettingsProvider]) -> int:
    """
    Ask the settings provider for the favorites cap.

    Raises:
        SettingsError: If the provider fails
    """
    if settings is None:
        return MAX_FAVORITES
    try:
        return settings.max_favorites()
    except Exception as e:
        raise SettingsError(f"Unable to read favorites limit: {e}") from e


class DocumentModel(BaseModel):
    """Base for all persisted models: camelCase keys, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Namespace(DocumentModel):
    """Active namespace and favorites for one context."""

    active: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Active namespace, may be empty or the 'all' sentinel",
    )
    lock_favorites: bool = Field(
        default=False,
        description="When set, activating a namespace leaves favorites alone",
    )
    favorites: list[str] = Field(
        default_factory=lambda: [DEFAULT_NAMESPACE],
        description="Favorite namespaces, most recent first",
    )

    def set_active(self, ns: str, settings: Optional[SettingsProvider] = None) -> None:
        """
        Activate a namespace and record it as a favorite.

        Args:
            ns: Namespace to activate
            settings: Provider for the favorites cap

        Raises:
            SettingsError: If the settings provider fails
        """
        limit = favorites_limit(settings)
        self.active = ns
        if ns and not self.lock_favorites:
            self.add_favorite(ns, limit)

    def add_favorite(self, ns: str, limit: int = MAX_FAVORITES) -> None:
        """Put a namespace at the front of favorites, keeping at most `limit`."""
        if ns not in self.favorites:
            self.favorites.insert(0, ns)
        del self.favorites[limit:]

    def remove_favorite(self, ns: str) -> None:
        self.favorites = [f for f in self.favorites if f != ns]

    def validate_favorites(
        self,
        conn: Optional[Connection],
        settings: Optional[SettingsProvider] = None,
        context: Optional[str] = None,
    ) -> FavoritesValidation:
        """
        Drop favorites the cluster does not know about.

        Never raises. Without a connection, or when the connection fails,
        favorites are left untouched and the result reports a skip.
        `context` names the cluster the namespaces are checked against.
        """
        if conn is None:
            return FavoritesValidation.skip("no connection")

        kept: list[str] = []
        dropped: list[str] = []
        try:
            for ns in self.favorites:
                if ns == NAMESPACE_ALL or conn.is_valid_namespace(ns, context):
                    kept.append(ns)
                else:
                    dropped.append(ns)
        except Exception as e:
            logger.warning(f"Skipping favorites validation: {e}")
            return FavoritesValidation.skip(str(e))

        try:
            limit = favorites_limit(settings)
        except SettingsError as e:
            logger.warning(f"{e}. Using {MAX_FAVORITES}")
            limit = MAX_FAVORITES

        if dropped:
            logger.debug(f"Dropping unknown favorite namespaces: {dropped}")
        self.favorites = kept[:limit]
        return FavoritesValidation.validated(dropped)


class View(DocumentModel):
    """Last active view for one context."""

    active: str = Field(default=DEFAULT_VIEW, description="Active view name")


class Context(DocumentModel):
    """Persisted state for one kubeconfig context."""

    cluster_name: str = Field(
        default="",
        alias="cluster",
        description="Cluster the context points at",
    )
    namespace: Namespace = Field(default_factory=Namespace)
    view: View = Field(default_factory=View)

    @classmethod
    def from_info(cls, name: str, info: Optional[ContextInfo] = None) -> "Context":
        """Create a context record, seeded from kubeconfig data when known."""
        ct = cls(cluster_name=(info.cluster if info and info.cluster else name))
        if info and info.namespace:
            ct.namespace.active = info.namespace
            ct.namespace.add_favorite(info.namespace)
        return ct


class LoggerSettings(DocumentModel):
    """Log viewer settings."""

    tail: int = Field(default=100, description="Lines to tail")
    buffer: int = Field(default=5000, description="Lines kept in the viewer buffer")
    since_seconds: int = Field(default=-1, description="Log window, -1 for all")
    text_wrap: bool = False
    show_time: bool = False


class Registry(DocumentModel):
    """
    Context registry plus auxiliary settings (the `k9s` block).

    Contexts are created lazily on first activation. The active context
    pointer lives outside the persisted fields and only changes through
    activate_context() and reset().
    """

    current_context: Optional[str] = Field(
        default=None,
        description="Name of the last activated context",
    )
    screen_dump_dir: Optional[str] = Field(default=None)
    log_settings: Optional[LoggerSettings] = Field(default=None, alias="logger")
    contexts: dict[str, Context] = Field(default_factory=dict)

    _active_name: Optional[str] = PrivateAttr(default=None)

    @property
    def active_context_name(self) -> str:
        return self._active_name or ""

    def activate_context(self, name: str, conn: Optional[Connection] = None) -> Context:
        """
        Make a context the active one, creating its record if needed.

        Args:
            name: Context name
            conn: Optional connection used to seed new records

        Returns:
            The now-active Context

        Raises:
            ContextNotFoundError: If name is empty
        """
        if not name:
            raise ContextNotFoundError("Context name must not be empty")

        ct = self.contexts.get(name)
        if ct is None:
            ct = Context.from_info(name, self._lookup(conn, name))
            self.contexts[name] = ct
            logger.debug(f"Created context {name!r} on cluster {ct.cluster_name!r}")
        elif not ct.cluster_name:
            info = self._lookup(conn, name)
            ct.cluster_name = info.cluster if info and info.cluster else name

        self._active_name = name
        self.current_context = name
        return ct

    @staticmethod
    def _lookup(conn: Optional[Connection], name: str) -> Optional[ContextInfo]:
        if conn is None:
            return None
        try:
            return conn.context_info(name)
        except Exception as e:
            logger.warning(f"Unable to look up context {name!r}: {e}")
            return None

    def active_context(self) -> Context:
        """
        Return the active context record.

        Raises:
            NoActiveContextError: If no context was activated
        """
        if self._active_name is None:
            raise NoActiveContextError()
        ct = self.contexts.get(self._active_name)
        if ct is None:
            raise NoActiveContextError(f"Active context {self._active_name!r} has no record")
        return ct

    def active_context_namespace(self) -> str:
        return self.active_context().namespace.active

    def reset(self) -> None:
        """Forget the active context. Context records are kept."""
        self._active_name = None

    def refine(self, loaded: "Registry") -> None:
        """Merge a freshly loaded registry; only fields present in the file win."""
        refine_model(self, loaded)

    def get_screen_dump_dir(self) -> str:
        return self.screen_dump_dir or str(default_screen_dump_dir())

    def validate_favorites(
        self,
        conn: Optional[Connection],
        settings: Optional[SettingsProvider] = None,
    ) -> FavoritesValidation:
        """Fill missing defaults and validate the active context's favorites."""
        if self.log_settings is None:
            self.log_settings = LoggerSettings()
        if not self.screen_dump_dir:
            self.screen_dump_dir = str(default_screen_dump_dir())
        if self._active_name:
            self.current_context = self._active_name

        try:
            ct = self.active_context()
        except NoActiveContextError:
            return FavoritesValidation.skip("no active context")
        return ct.namespace.validate_favorites(conn, settings, self._active_name)

    def verify(self) -> None:
        """
        Check the in-memory tree before it is written.

        Raises:
            ConfigValidationError: If the tree would not load back
        """
        if any(not name for name in self.contexts):
            raise ConfigValidationError("Context names must not be empty")
        try:
            Registry.model_validate(self.model_dump(by_alias=True, warnings=False))
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e


class ConfigDocument(DocumentModel):
    """Root of the persisted configuration file."""

    k9s: Registry = Field(default_factory=Registry)

    def to_yaml_dict(self) -> dict:
        """Convert to a plain dict for YAML serialization."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
