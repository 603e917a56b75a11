# tests/unit/test_main.py
"""
Unit tests for the command line entry point.
"""

from unittest.mock import MagicMock, patch

import pytest
import yaml

import main


@pytest.fixture
def kubeconfig(tmp_path):
    path = tmp_path / "kubeconfig"
    path.write_text(yaml.safe_dump({
        "current-context": "dev",
        "contexts": [{"name": "dev", "context": {"cluster": "dev-cluster"}}],
    }))
    return path


@pytest.fixture(autouse=True)
def quiet_cli(tmp_path):
    """Keep logging untouched and kubectl out of the picture."""
    with patch("main.setup_logging"), patch(
        "kubestate.client.connection.subprocess.run",
        return_value=MagicMock(returncode=0, stderr=""),
    ), patch("kubestate.config.paths.tempfile.gettempdir", return_value=str(tmp_path)):
        yield


class TestMain:
    """Tests for the CLI flow."""

    def test_reports_session(self, kubeconfig, tmp_path, capsys):
        code = main.main(["--kubeconfig", str(kubeconfig), "--config-dir", str(tmp_path / "cfg")])
        out = capsys.readouterr().out
        assert code == 0
        assert "context:   dev" in out
        assert "cluster:   dev-cluster" in out
        assert "namespace: default" in out

    def test_save_then_reload(self, kubeconfig, tmp_path, capsys):
        """A saved namespace is picked up by the next run."""
        cfg_dir = tmp_path / "cfg"
        args = ["--kubeconfig", str(kubeconfig), "--config-dir", str(cfg_dir)]
        assert main.main(args + ["-n", "kube-system", "--save"]) == 0
        assert (cfg_dir / "config.yml").exists()
        capsys.readouterr()

        assert main.main(args) == 0
        assert "namespace: kube-system" in capsys.readouterr().out

    def test_command_overrides_view(self, kubeconfig, tmp_path, capsys):
        code = main.main([
            "--kubeconfig", str(kubeconfig),
            "--config-dir", str(tmp_path / "cfg"),
            "-c", "deploy",
            "-A",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "view:      deploy" in out
        assert "namespace: all" in out

    def test_broken_kubeconfig(self, tmp_path, capsys):
        code = main.main(["--kubeconfig", str(tmp_path / "missing"), "--config-dir", str(tmp_path)])
        assert code == 1
        assert "Error resolving context" in capsys.readouterr().err

    def test_broken_config_file(self, kubeconfig, tmp_path, capsys):
        cfg_dir = tmp_path / "cfg"
        cfg_dir.mkdir()
        (cfg_dir / "config.yml").write_text("k9s: [")
        code = main.main(["--kubeconfig", str(kubeconfig), "--config-dir", str(cfg_dir)])
        assert code == 1
        assert "Error loading configuration" in capsys.readouterr().err
