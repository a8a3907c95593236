"""Tests for PathManager utility class."""

from pathlib import Path
from unittest.mock import patch

from cmdy.utils.path_manager import CONFIG_FILE_ENV, EXECUTION_LOG_ENV, PathManager


class TestPathManager:
    """Test cases for PathManager class."""

    def test_get_config_dir_macos(self):
        """Test config directory resolution on macOS."""
        with patch("sys.platform", "darwin"):
            config_dir = PathManager.get_config_dir()
            expected = Path.home() / "Library" / "Application Support" / "cmdy"
            assert config_dir == expected

    def test_get_config_dir_windows(self):
        """Test config directory resolution on Windows."""
        with patch("sys.platform", "win32"):
            config_dir = PathManager.get_config_dir()
            assert config_dir == Path.home() / "AppData" / "Roaming" / "cmdy"

    def test_get_config_dir_linux(self):
        """Test config directory resolution on Linux."""
        with patch("sys.platform", "linux"):
            assert PathManager.get_config_dir() == Path.home() / ".config" / "cmdy"

    def test_get_data_dir_linux(self):
        with patch("sys.platform", "linux"):
            data_dir = PathManager.get_data_dir()
            assert data_dir == Path.home() / ".local" / "share" / "cmdy"

    def test_get_log_dir_macos(self):
        """Test log directory resolution on macOS."""
        with patch("sys.platform", "darwin"):
            log_dir = PathManager.get_log_dir()
            assert log_dir == Path.home() / "Library" / "Logs" / "cmdy"

    def test_get_log_dir_windows(self):
        """Test log directory resolution on Windows."""
        with patch("sys.platform", "win32"):
            log_dir = PathManager.get_log_dir()
            assert log_dir == Path.home() / "AppData" / "Local" / "cmdy" / "logs"

    def test_get_log_file(self):
        with patch("sys.platform", "linux"):
            log_file = PathManager.get_log_file("app.log")
            expected = Path.home() / ".local" / "share" / "cmdy" / "logs" / "app.log"
            assert log_file == expected

    def test_default_config_file(self, monkeypatch):
        monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
        with patch("sys.platform", "linux"):
            config_file = PathManager.get_config_file()
            assert config_file == Path.home() / ".config" / "cmdy" / "config.json"

    def test_config_file_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "alt.json"))
        assert PathManager.get_config_file() == tmp_path / "alt.json"

    def test_default_execution_log_file(self, monkeypatch):
        monkeypatch.delenv(EXECUTION_LOG_ENV, raising=False)
        with patch("sys.platform", "linux"):
            log_file = PathManager.get_execution_log_file()
            assert log_file == Path.home() / ".local" / "share" / "cmdy" / "cmdy.log"

    def test_execution_log_override_expands_home(self, monkeypatch):
        monkeypatch.setenv(EXECUTION_LOG_ENV, "~/runs.log")
        assert PathManager.get_execution_log_file() == Path.home() / "runs.log"

    def test_empty_override_is_ignored(self, monkeypatch):
        monkeypatch.setenv(CONFIG_FILE_ENV, "")
        assert PathManager.get_config_file().name == "config.json"

    def test_expand_directory(self, monkeypatch):
        monkeypatch.setenv("CMDY_TEST_ROOT", "/srv")

        assert PathManager.expand_directory("$CMDY_TEST_ROOT/app") == "/srv/app"
        assert PathManager.expand_directory("~") == str(Path.home())
        assert PathManager.expand_directory("/plain/path") == "/plain/path"
