"""
Filesystem locations for kubestate configuration.

Priority for the config home (highest to lowest):
1. Environment variable: KUBESTATE_CONFIG_DIR=/path/to/dir
2. $XDG_CONFIG_HOME/kubestate
3. ~/.config/kubestate
"""

import getpass
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from kubestate.config.types import DEFAULT_DIR_MODE
from kubestate.utils import get_logger

logger = get_logger(__name__)

APP_NAME = "kubestate"
CONFIG_DIR_ENV = "KUBESTATE_CONFIG_DIR"
CONFIG_FILE_NAME = "config.yaml"
ALIASES_FILE_NAME = "aliases.yaml"
PLUGINS_FILE_NAME = "plugins.yaml"

YAML_EXTENSIONS = (".yml", ".yaml")

_UNSAFE_CHARS = re.compile(r"[/\\:]")


def config_home() -> Path:
    """Return the kubestate config home directory."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
    return base / APP_NAME


def app_config_file(home: Optional[str | Path] = None) -> Path:
    """Return the main config file path, normalized to an existing YAML variant."""
    base = Path(home) if home else config_home()
    return Path(yaml_extension(base / CONFIG_FILE_NAME))


def sanitize_file_name(name: str) -> str:
    """Make a cluster or context name safe to use as a path component."""
    return _UNSAFE_CHARS.sub("-", name)


def app_context_dir(cluster: str, context: str, home: Optional[str | Path] = None) -> Path:
    """Return the directory holding side files for a cluster/context pair."""
    base = Path(home) if home else config_home()
    return base / "clusters" / sanitize_file_name(cluster) / sanitize_file_name(context)


def app_context_aliases_file(cluster: str, context: str, home: Optional[str | Path] = None) -> Path:
    """Return the context specific aliases file path."""
    return app_context_dir(cluster, context, home) / ALIASES_FILE_NAME


def app_context_plugins_file(cluster: str, context: str, home: Optional[str | Path] = None) -> Path:
    """Return the context specific plugins file path."""
    return app_context_dir(cluster, context, home) / PLUGINS_FILE_NAME


def default_screen_dump_dir() -> Path:
    """Return the default screen dump directory."""
    return Path(tempfile.gettempdir()) / f"{APP_NAME}-screens-{getpass.getuser()}"


def is_yaml_file(path: str | Path) -> bool:
    """Check whether a path carries a YAML extension."""
    return Path(path).suffix in YAML_EXTENSIONS


def yaml_extension(path: str | Path) -> str:
    """
    Pick the YAML extension to use for a config path.

    A recognized extension is stripped first. The result ends in `.yml`
    unless only the `.yaml` sibling exists on disk. A path with any other
    extension is logged and returned unchanged.

    Args:
        path: Config path with or without a YAML extension

    Returns:
        Normalized path string
    """
    path = str(path)
    suffix = Path(path).suffix
    if suffix and suffix not in YAML_EXTENSIONS:
        logger.warning(f"Config: File {path} is not a yaml file")
        return path

    if suffix:
        path = path[: -len(suffix)]

    yml = path + ".yml"
    yaml_ = path + ".yaml"
    if not os.path.exists(yml) and os.path.exists(yaml_):
        return yaml_
    return yml


def ensure_full_path(path: str | Path, mode: int = DEFAULT_DIR_MODE) -> None:
    """Ensure a directory exists, creating parents as needed."""
    path = Path(path)
    if not path.exists():
        logger.debug(f"Creating directory {path}")
        path.mkdir(mode=mode, parents=True, exist_ok=True)


def ensure_dir_path(path: str | Path, mode: int = DEFAULT_DIR_MODE) -> None:
    """Ensure the parent directory of a file path exists."""
    ensure_full_path(Path(path).parent, mode)
