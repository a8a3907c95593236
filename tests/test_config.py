"""Tests for configuration loading, saving and mutation."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from cmdy.models.config import CommandConfig, CommandSet
from cmdy.services.config_manager import ConfigManager
from cmdy.utils.exceptions import ConfigurationError, FileSystemError


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "config.json"
        self.manager = ConfigManager(self.config_file)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_load_missing_file_returns_empty_config(self):
        config = self.manager.load()

        self.assertEqual(config.directories, [])
        self.assertEqual(config.command_sets, [])
        # Loading alone does not create the file
        self.assertFalse(self.config_file.exists())

    def test_save_then_load_round_trip(self):
        config = CommandConfig(
            directories=["/srv/app"],
            command_sets=[
                CommandSet(name="build", commands=["npm ci", "npm run build"]),
                CommandSet(name="empty-tail", commands=["echo hi", ""]),
            ],
        )

        self.manager.save(config)
        loaded = ConfigManager(self.config_file).load()

        self.assertEqual(loaded, config)

    def test_save_pretty_prints_json(self):
        self.manager.add_directory("/srv/app")

        text = self.config_file.read_text(encoding="utf-8")
        self.assertIn('\n  "directories": [', text)
        self.assertEqual(
            json.loads(text), {"directories": ["/srv/app"], "command_sets": []}
        )

    def test_save_creates_parent_directory(self):
        nested = self.temp_dir / "nested" / "dir" / "config.json"
        manager = ConfigManager(nested)

        manager.add_directory("/tmp")

        self.assertTrue(nested.exists())

    def test_malformed_json_is_fatal(self):
        self.config_file.write_text("{not json", encoding="utf-8")

        with self.assertRaises(ConfigurationError) as ctx:
            self.manager.load()

        self.assertEqual(ctx.exception.details["config_file"], str(self.config_file))

    def test_wrong_shape_is_fatal(self):
        self.config_file.write_text(
            json.dumps({"directories": [], "command_sets": [{"name": "x"}]}),
            encoding="utf-8",
        )

        with self.assertRaises(ConfigurationError) as ctx:
            self.manager.load()

        self.assertEqual(ctx.exception.config_file, str(self.config_file))

    def test_missing_top_level_lists_are_fatal(self):
        for data in ({}, {"command_sets": []}, {"directories": []}):
            with self.subTest(data=data):
                self.config_file.write_text(json.dumps(data), encoding="utf-8")

                with self.assertRaises(ConfigurationError) as ctx:
                    ConfigManager(self.config_file).load()

                self.assertEqual(ctx.exception.config_file, str(self.config_file))
                # The broken file is left for the user to fix
                self.assertEqual(json.loads(self.config_file.read_text()), data)

    def test_save_failure_raises_file_system_error(self):
        # A directory where the file should be cannot be opened for writing
        self.config_file.mkdir()

        with self.assertRaises(FileSystemError):
            self.manager.save(CommandConfig())

    def test_add_directory_persists_immediately(self):
        self.manager.add_directory("/srv/app")
        self.manager.add_directory("/srv/api")

        reloaded = ConfigManager(self.config_file).load()
        self.assertEqual(reloaded.directories, ["/srv/app", "/srv/api"])

    def test_add_command_set_persists_immediately(self):
        command_set = self.manager.add_command_set("deploy", ["make", "make deploy"])

        self.assertEqual(command_set, CommandSet("deploy", ["make", "make deploy"]))
        reloaded = ConfigManager(self.config_file)
        self.assertEqual(reloaded.get_command_set("deploy"), command_set)

    def test_delete_command_set(self):
        self.manager.add_command_set("a", ["true"])
        self.manager.add_command_set("b", ["true"])

        self.assertTrue(self.manager.delete_command_set("a"))

        reloaded = ConfigManager(self.config_file)
        self.assertEqual(reloaded.get_command_set_names(), ["b"])

    def test_delete_missing_command_set_is_silent(self):
        self.manager.add_command_set("a", ["true"])

        removed = self.manager.delete_command_set("does-not-exist")

        self.assertFalse(removed)
        reloaded = ConfigManager(self.config_file)
        self.assertEqual(reloaded.get_command_set_names(), ["a"])

    def test_reload_discards_in_memory_changes(self):
        self.manager.add_directory("/saved")
        self.manager.config.directories.append("/unsaved")

        config = self.manager.reload()

        self.assertEqual(config.directories, ["/saved"])

    def test_getters_return_copies(self):
        self.manager.add_directory("/srv/app")

        self.manager.get_directories().append("/other")

        self.assertEqual(self.manager.get_directories(), ["/srv/app"])

    def test_config_file_path(self):
        self.assertEqual(self.manager.get_config_file_path(), self.config_file)
        self.assertIn("config_loaded=False", repr(self.manager))


if __name__ == "__main__":
    unittest.main()
