"""
Pytest configuration for kubestate tests.
"""

import sys
from pathlib import Path
from typing import Optional

import pytest

# Add app directory to path
APP_DIR = Path(__file__).parent.parent / "app"
sys.path.insert(0, str(APP_DIR))

from kubestate.client import ContextInfo  # noqa: E402
from kubestate.config import CONFIG_DIR_ENV  # noqa: E402


class FakeConnection:
    """In-memory Connection for tests."""

    def __init__(
        self,
        current: str = "dev",
        namespaces: Optional[set[str]] = None,
        contexts: Optional[dict[str, ContextInfo]] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.current = current
        self.namespaces = namespaces if namespaces is not None else {"default"}
        self.contexts = contexts or {}
        self.fail_with = fail_with
        self.checked: list[str] = []
        self.checked_contexts: list[Optional[str]] = []

    def current_context_name(self) -> str:
        if self.fail_with:
            raise self.fail_with
        return self.current

    def is_valid_namespace(self, namespace: str, context: Optional[str] = None) -> bool:
        if self.fail_with:
            raise self.fail_with
        self.checked.append(namespace)
        self.checked_contexts.append(context)
        return namespace in self.namespaces

    def context_info(self, name: str) -> Optional[ContextInfo]:
        return self.contexts.get(name)


class BrokenSettings:
    """Settings provider that always fails."""

    def max_favorites(self) -> int:
        raise RuntimeError("settings unavailable")


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Point the config home at a temporary directory."""
    home = tmp_path / "config-home"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(home))
    return home


@pytest.fixture
def fake_connection():
    return FakeConnection(
        current="dev",
        namespaces={"default", "staging", "prod"},
        contexts={"dev": ContextInfo(name="dev", cluster="dev-cluster")},
    )


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "cfg" / "config.yml"


@pytest.fixture
def connection_factory():
    """Build FakeConnection instances with custom behavior."""
    return FakeConnection


@pytest.fixture
def broken_settings():
    return BrokenSettings()
