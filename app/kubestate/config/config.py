"""
Configuration facade used by the CLI and UI layers.

Wraps the persisted document, the referenced connection and the
settings provider. Read-only accessors recover from a missing active
context with documented defaults; mutating operations surface it.
"""

from pathlib import Path
from typing import Optional

from kubestate.client.types import DEFAULT_NAMESPACE, Connection, SettingsProvider
from kubestate.config.flags import Flags, Session, reconcile
from kubestate.config.models import ConfigDocument, Context, LoggerSettings, Registry
from kubestate.config.paths import (
    app_config_file,
    app_context_aliases_file,
    app_context_plugins_file,
)
from kubestate.config.store import read_document, write_document
from kubestate.config.types import (
    DEFAULT_VIEW,
    ContextNotFoundError,
    FavoritesValidation,
    NoActiveContextError,
    OneShot,
)
from kubestate.utils import get_logger

logger = get_logger(__name__)


class Config:
    """
    kubestate configuration.

    Attributes:
        document: The configuration document (owned)
        settings: Provider for namespace limits
        home: Config home override, the default home when None
    """

    def __init__(
        self,
        settings: Optional[SettingsProvider] = None,
        manual_command: Optional[str] = None,
        document: Optional[ConfigDocument] = None,
        home: Optional[str | Path] = None,
    ):
        """
        Initialize a configuration.

        Args:
            settings: Provider consulted when activating namespaces
            manual_command: Startup command overriding the first active view read
            document: Initial document, a default one if omitted
            home: Config home for the config file and per-context files
        """
        self.document = document or ConfigDocument()
        self.settings = settings
        self.home = home
        self._manual_command = OneShot(manual_command)
        self._conn: Optional[Connection] = None

    @property
    def registry(self) -> Registry:
        return self.document.k9s

    # ------------------------------------------------------------------
    # Connection

    @property
    def connection(self) -> Optional[Connection]:
        return self._conn

    def set_connection(self, conn: Optional[Connection]) -> None:
        self._conn = conn

    # ------------------------------------------------------------------
    # Contexts

    @property
    def active_context_name(self) -> str:
        return self.registry.active_context_name

    def current_context(self) -> Context:
        """
        Return the active context.

        Raises:
            NoActiveContextError: If no context is active
        """
        return self.registry.active_context()

    def set_current_context(self, name: str) -> Context:
        """Activate a context by name."""
        try:
            return self.registry.activate_context(name, self._conn)
        except ContextNotFoundError as e:
            raise ContextNotFoundError(f"Set current context {name!r} failed: {e}") from e

    def reset(self) -> None:
        """Forget the active context, e.g. when switching clusters."""
        self.registry.reset()

    def context_aliases_path(self) -> str:
        """Return the active context's aliases file, or '' without one."""
        try:
            ct = self.current_context()
        except NoActiveContextError:
            return ""
        path = app_context_aliases_file(ct.cluster_name, self.active_context_name, self.home)
        return str(path)

    def context_plugins_path(self) -> str:
        """Return the active context's plugins file, or '' without one."""
        try:
            ct = self.current_context()
        except NoActiveContextError:
            return ""
        path = app_context_plugins_file(ct.cluster_name, self.active_context_name, self.home)
        return str(path)

    # ------------------------------------------------------------------
    # Namespaces

    def active_namespace(self) -> str:
        """Return the active namespace, or the default one without a context."""
        try:
            return self.registry.active_context_namespace()
        except NoActiveContextError as e:
            logger.error(f"Unable to assert active namespace. Using default: {e}")
            return DEFAULT_NAMESPACE

    def set_active_namespace(self, ns: str) -> None:
        """
        Set the active namespace in the current context.

        Raises:
            NoActiveContextError: If no context is active
            SettingsError: If the settings provider fails
        """
        self.current_context().namespace.set_active(ns, self.settings)

    def fav_namespaces(self) -> list[str]:
        try:
            ct = self.current_context()
        except NoActiveContextError:
            logger.debug("No active context, no favorite namespaces")
            return []
        return ct.namespace.favorites

    def validate_favorites(self) -> FavoritesValidation:
        """Check favorites against the connection. Never raises."""
        try:
            ct = self.current_context()
        except NoActiveContextError:
            return FavoritesValidation.skip("no active context")
        return ct.namespace.validate_favorites(
            self._conn, self.settings, self.active_context_name
        )

    # ------------------------------------------------------------------
    # Views

    def active_view(self) -> str:
        """
        Return the active view.

        The startup command, if any, wins on the first call only.
        """
        try:
            ct = self.current_context()
        except NoActiveContextError:
            logger.debug(f"No active context, using view {DEFAULT_VIEW!r}")
            return DEFAULT_VIEW

        command = self._manual_command.consume()
        return command or ct.view.active

    def set_active_view(self, view: str) -> None:
        try:
            self.current_context().view.active = view
        except NoActiveContextError:
            logger.debug(f"No active context, view {view!r} not recorded")

    # ------------------------------------------------------------------
    # Reconciliation

    def reconcile(self, flags: Flags, conn: Optional[Connection] = None) -> Session:
        """Apply command-line overrides. See kubestate.config.flags.reconcile."""
        return reconcile(self, flags, conn)

    def refine(self, loaded: ConfigDocument) -> None:
        """Merge a loaded document; only keys present in the file win."""
        if "k9s" in loaded.model_fields_set:
            self.registry.refine(loaded.k9s)

    # ------------------------------------------------------------------
    # Persistence

    def load(self, path: str | Path) -> None:
        """
        Load configuration from a YAML file.

        Raises:
            OSError: If the file cannot be read
            DecodeError: If the file is not a valid document
        """
        loaded = read_document(path)
        self.refine(loaded)
        if self.registry.log_settings is None:
            self.registry.log_settings = LoggerSettings()

        current = self.registry.current_context
        if current and not self.active_context_name:
            self.registry.activate_context(current, self._conn)
        logger.info(f"Loaded configuration from {path}")

    def validate(self) -> FavoritesValidation:
        """Fill defaults and validate favorites of the active context."""
        return self.registry.validate_favorites(self._conn, self.settings)

    def save(self, path: Optional[str | Path] = None) -> None:
        """
        Save configuration to disk.

        Raises:
            ConfigValidationError: If the pre-save check fails
            OSError: If the file cannot be written
        """
        self.validate()
        self.registry.verify()
        write_document(self.document, path or app_config_file(self.home))

    def dump(self, msg: str = "") -> None:
        """Log the active state at debug level."""
        try:
            ct = self.current_context()
        except NoActiveContextError:
            logger.debug(f"{msg} No active context")
            return
        logger.debug(
            f"{msg} Context {self.active_context_name!r} "
            f"cluster={ct.cluster_name!r} namespace={ct.namespace.active!r} "
            f"favorites={ct.namespace.favorites} view={ct.view.active!r}"
        )
