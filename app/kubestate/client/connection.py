"""
Kubeconfig-backed connection.

Resolves contexts from the kubeconfig file and checks namespaces by
shelling out to kubectl. This is the only place that can reach a cluster;
the config layer treats every failure here as the caller's concern.
"""

import os
import subprocess
from pathlib import Path
from typing import Any, Optional

import yaml

from kubestate.client.types import NAMESPACE_ALL, ContextInfo, KubeconfigError
from kubestate.utils import get_logger

logger = get_logger(__name__)

DEFAULT_KUBECONFIG = Path.home() / ".kube" / "config"
KUBECONFIG_ENV = "KUBECONFIG"
NOT_FOUND_MARKER = "(NotFound)"


def resolve_kubeconfig_path(explicit: Optional[str | Path] = None) -> Path:
    """
    Pick the kubeconfig file to read.

    Priority:
    1. Explicit path (--kubeconfig)
    2. First existing entry of $KUBECONFIG
    3. ~/.kube/config
    """
    if explicit:
        return Path(explicit).expanduser()

    env_value = os.environ.get(KUBECONFIG_ENV, "")
    for entry in env_value.split(os.pathsep):
        if entry and Path(entry).expanduser().exists():
            return Path(entry).expanduser()

    return DEFAULT_KUBECONFIG


class KubeconfigConnection:
    """
    Connection backed by a kubeconfig file and the kubectl binary.

    The kubeconfig is parsed lazily and cached. Namespace checks run
    `kubectl get namespace <ns>` against the resolved context.
    """

    def __init__(
        self,
        kubeconfig: Optional[str | Path] = None,
        context: Optional[str] = None,
        kubectl: str = "kubectl",
        timeout: int = 10,
    ):
        """
        Initialize the connection.

        Args:
            kubeconfig: Optional explicit kubeconfig path
            context: Optional context override (wins over current-context)
            kubectl: kubectl binary to invoke for namespace checks
            timeout: Timeout in seconds for each kubectl call
        """
        self.path = resolve_kubeconfig_path(kubeconfig)
        self.context_override = context
        self.kubectl = kubectl
        self.timeout = timeout
        self._raw: Optional[dict[str, Any]] = None

    def _kubeconfig(self) -> dict[str, Any]:
        """Load and cache the kubeconfig document."""
        if self._raw is not None:
            return self._raw

        try:
            with open(self.path) as f:
                content = yaml.safe_load(f)
        except OSError as e:
            raise KubeconfigError(f"Unable to read kubeconfig {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise KubeconfigError(f"Failed to parse kubeconfig {self.path}: {e}") from e

        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise KubeconfigError(f"Kubeconfig {self.path} is not a mapping")

        self._raw = content
        return content

    def current_context_name(self) -> str:
        """Return the context override, else the kubeconfig current-context."""
        if self.context_override:
            return self.context_override

        name = self._kubeconfig().get("current-context") or ""
        if not name:
            raise KubeconfigError(f"No current-context set in {self.path}")
        return name

    def context_info(self, name: str) -> Optional[ContextInfo]:
        """Look up a context entry by name."""
        for entry in self._kubeconfig().get("contexts") or []:
            if not isinstance(entry, dict) or entry.get("name") != name:
                continue
            ctx = entry.get("context") or {}
            return ContextInfo(
                name=name,
                cluster=ctx.get("cluster") or "",
                namespace=ctx.get("namespace") or "",
            )
        return None

    def is_valid_namespace(self, namespace: str, context: Optional[str] = None) -> bool:
        """
        Check that a namespace exists on the cluster.

        Args:
            namespace: Namespace to look up
            context: Context whose cluster is asked, else the override or current-context

        Returns:
            False only when the cluster answers NotFound

        Raises:
            KubeconfigError: If kubectl fails for any other reason
            OSError: If kubectl cannot be executed
            subprocess.TimeoutExpired: If kubectl does not answer in time
        """
        if namespace == NAMESPACE_ALL:
            return True

        args = [self.kubectl]
        target = context or self.context_override
        if target:
            args += ["--context", target]
        if self.path.exists():
            args += ["--kubeconfig", str(self.path)]
        args += ["get", "namespace", namespace, "-o", "name"]

        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )
        if result.returncode == 0:
            return True

        stderr = (result.stderr or "").strip()
        if NOT_FOUND_MARKER in stderr:
            logger.debug(f"Namespace {namespace!r} not found: {stderr}")
            return False
        raise KubeconfigError(
            f"kubectl failed checking namespace {namespace!r} (exit {result.returncode}): {stderr}"
        )
