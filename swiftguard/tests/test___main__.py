"""
Tests for the command line entry point.
"""

import os
from unittest.mock import patch

import pytest

from swiftguard import __main__ as entry_point
from swiftguard.core import config as config_module
from swiftguard.core.config import CONFIG_FILE_ENV, LogLevel


@pytest.fixture(autouse=True)
def isolated_global_config(monkeypatch):
    monkeypatch.setattr(config_module, "_config", None)
    # Registered so teardown drops whatever main() exports
    monkeypatch.setenv(CONFIG_FILE_ENV, "")


@pytest.fixture
def run_server():
    with patch.object(entry_point, "run_server") as mock_run, patch.object(
        entry_point, "setup_logging"
    ):
        yield mock_run


class TestMain:
    """Tests for main()."""

    def test_cli_overrides(self, run_server):
        entry_point.main(["--host", "127.0.0.1", "--port", "8081", "--log-level", "DEBUG"])

        config = run_server.call_args.args[0]
        assert config.api.host == "127.0.0.1"
        assert config.api.port == 8081
        assert config.log_level == LogLevel.DEBUG
        assert run_server.call_args.kwargs == {"reload": False}

    def test_config_file(self, run_server, tmp_path):
        path = tmp_path / "swiftguard.yaml"
        path.write_text("api:\n  port: 7001\n")

        entry_point.main(["--config", str(path)])

        assert run_server.call_args.args[0].api.port == 7001

    def test_development_reload(self, run_server):
        entry_point.main(["--development", "--reload"])

        config = run_server.call_args.args[0]
        assert config.debug is True
        assert run_server.call_args.kwargs == {"reload": True}

    def test_missing_config_file_exits(self, run_server, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            entry_point.main(["--config", str(tmp_path / "missing.yaml")])

        assert exc_info.value.code == 2
        run_server.assert_not_called()

    def test_startup_failure_exits(self, run_server):
        run_server.side_effect = OSError("address in use")

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main([])

        assert exc_info.value.code == 1

    def test_keyboard_interrupt(self, run_server):
        run_server.side_effect = KeyboardInterrupt

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main([])

        assert exc_info.value.code == 0

    def test_invalid_environment_exits(self, run_server, monkeypatch):
        monkeypatch.setenv("SWIFTGUARD_LEDGER_BACKEND", "mongo")

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main([])

        assert exc_info.value.code == 2
        run_server.assert_not_called()

    def test_reload_exports_config_file(self, run_server, tmp_path):
        path = tmp_path / "swiftguard.yaml"
        path.write_text("api:\n  port: 7002\n")

        entry_point.main(["--development", "--reload", "--config", str(path)])

        assert run_server.call_args.kwargs == {"reload": True}
        assert os.environ[CONFIG_FILE_ENV] == str(path)

    def test_config_file_not_exported_without_reload(self, run_server, tmp_path):
        path = tmp_path / "swiftguard.yaml"
        path.write_text("api:\n  port: 7003\n")

        entry_point.main(["--config", str(path)])

        assert os.environ[CONFIG_FILE_ENV] == ""
