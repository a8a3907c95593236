"""Tests for the interactive directory and command set menus."""

import io
import shutil
import tempfile
from pathlib import Path

from rich.console import Console

from cmdy.models.config import CommandSet
from cmdy.services.config_manager import ConfigManager
from cmdy.ui.selection_dialog import SelectionDialog


class TestSelectionDialog:
    """Test cases for SelectionDialog."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "config.json"
        self.config_manager = ConfigManager(self.config_file)
        self.output = io.StringIO()

    def teardown_method(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def make_dialog(self, answers: str) -> SelectionDialog:
        return SelectionDialog(
            self.config_manager,
            console=Console(file=self.output, highlight=False, width=120),
            stream=io.StringIO(answers),
            get_cwd=lambda: "/work/here",
        )

    def test_current_directory_is_index_zero(self):
        self.config_manager.add_directory("/srv/app")

        directory = self.make_dialog("0\n").select_directory()

        assert directory == "/work/here"
        output = self.output.getvalue()
        assert "0) Current Directory" in output
        assert "1) /srv/app" in output
        assert "2) Enter New Directory" in output

    def test_stored_directory(self):
        self.config_manager.add_directory("/srv/app")
        self.config_manager.add_directory("/srv/api")

        directory = self.make_dialog("2\n").select_directory()

        assert directory == "/srv/api"

    def test_new_directory_is_persisted(self):
        self.config_manager.add_directory("/srv/app")

        directory = self.make_dialog("2\n/srv/new\n").select_directory()

        assert directory == "/srv/new"
        reloaded = ConfigManager(self.config_file)
        assert reloaded.get_directories() == ["/srv/app", "/srv/new"]

    def test_new_directory_with_empty_store(self):
        directory = self.make_dialog("1\n~/code\n").select_directory()

        assert directory == "~/code"
        assert ConfigManager(self.config_file).get_directories() == ["~/code"]

    def test_invalid_choice_is_reprompted(self):
        directory = self.make_dialog("7\nabc\n0\n").select_directory()

        assert directory == "/work/here"
        assert "Please select one of the available options" in self.output.getvalue()

    def test_empty_directory_path_is_reprompted(self):
        directory = self.make_dialog("1\n\n/srv/x\n").select_directory()

        assert directory == "/srv/x"
        assert "A value is required" in self.output.getvalue()

    def test_select_existing_command_set(self):
        self.config_manager.add_command_set("build", ["make"])
        self.config_manager.add_command_set("test", ["make test"])

        command_set = self.make_dialog("1\n").select_command_set()

        assert command_set == CommandSet("test", ["make test"])
        assert "2) Create new command set" in self.output.getvalue()

    def test_create_command_set_from_menu(self):
        self.config_manager.add_command_set("build", ["make"])

        command_set = self.make_dialog("1\ndeploy\nmake, make deploy\n").select_command_set()

        assert command_set == CommandSet("deploy", ["make", "make deploy"])
        reloaded = ConfigManager(self.config_file)
        assert reloaded.get_command_set_names() == ["build", "deploy"]

    def test_existing_name_is_reused(self):
        self.config_manager.add_command_set("build", ["make"])

        command_set = self.make_dialog("1\nbuild\n").select_command_set()

        assert command_set == CommandSet("build", ["make"])
        assert ConfigManager(self.config_file).get_command_set_names() == ["build"]

    def test_menu_skipped_without_command_sets(self):
        command_set = self.make_dialog("first\na, b ,c,\n").select_command_set()

        assert command_set == CommandSet("first", ["a", "b", "c", ""])
        assert "Select a command set" not in self.output.getvalue()
        assert ConfigManager(self.config_file).get_command_set("first") == command_set
