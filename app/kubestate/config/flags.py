"""
Reconciliation of command-line overrides with persisted state.

Precedence for the context:
1. --context flag
2. Connection current context

Precedence for the namespace:
1. --all-namespaces flag -> "all"
2. --namespace flag
3. Persisted active namespace of the context
4. "default"
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from kubestate.client.types import DEFAULT_NAMESPACE, NAMESPACE_ALL, Connection
from kubestate.config.paths import ensure_full_path
from kubestate.config.types import DEFAULT_DIR_MODE, ContextNotFoundError
from kubestate.utils import get_logger

if TYPE_CHECKING:
    from kubestate.config.config import Config

logger = get_logger(__name__)


@dataclass
class Flags:
    """
    Command-line overrides relevant to context and namespace selection.

    Attributes:
        context: Explicit context name
        namespace: Explicit namespace
        all_namespaces: Select every namespace
    """

    context: Optional[str] = None
    namespace: Optional[str] = None
    all_namespaces: Optional[bool] = None


@dataclass(frozen=True)
class Session:
    """The authoritative (context, namespace) pair for a run."""

    context: str
    namespace: str


def is_set(value: Optional[str]) -> bool:
    return value is not None and len(value) > 0


def resolve_context_name(flags: Flags, conn: Optional[Connection]) -> str:
    """
    Pick the context to activate.

    Raises:
        ContextNotFoundError: If no flag is set and there is no connection
        Exception: Whatever the connection raises
    """
    if is_set(flags.context):
        return flags.context
    if conn is None:
        raise ContextNotFoundError("No context flag given and no connection to ask")
    return conn.current_context_name()


def resolve_namespace(flags: Flags, persisted: Optional[str]) -> str:
    """Pick the namespace to activate. Never returns an empty string."""
    if flags.all_namespaces:
        ns = NAMESPACE_ALL
    elif is_set(flags.namespace):
        ns = flags.namespace
    else:
        ns = persisted or ""
    return ns or DEFAULT_NAMESPACE


def reconcile(config: "Config", flags: Flags, conn: Optional[Connection] = None) -> Session:
    """
    Resolve and commit the active context and namespace.

    Every call re-derives the result from its inputs. Any failure aborts
    the reconciliation, including creating the screen dump directory.

    Args:
        config: Configuration to update
        flags: Command-line overrides
        conn: Connection, defaults to the one referenced by config

    Returns:
        Session with the resolved context and namespace
    """
    conn = conn if conn is not None else config.connection

    name = resolve_context_name(flags, conn)
    config.registry.activate_context(name, conn)
    logger.debug(f"Active Context {name!r}")

    ns = resolve_namespace(flags, config.registry.active_context_namespace())
    config.set_active_namespace(ns)
    logger.debug(f"Active Namespace {ns!r}")

    ensure_full_path(config.registry.get_screen_dump_dir(), DEFAULT_DIR_MODE)

    return Session(context=name, namespace=ns)
