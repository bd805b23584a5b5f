import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from brewprobe import config
from brewprobe.cli_logger import logger
from brewprobe.main import cli

class TestMain(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, config.CONFIG_FILE)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_config_view_not_found(self):
        """Test that viewing a non-existent config returns an error."""
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        self.assertIn("Error: No brewprobe.toml found.", result.output)

    def test_config_view(self):
        """Test that viewing a config prints its content."""
        config.save_config({"probe": {"build_gui": True}}, path=self.test_dir)

        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        with open(self.config_path, "r") as f:
            self.assertEqual(result.output.strip(), f.read().strip())

    @patch("click.edit")
    def test_config_edit(self, mock_edit):
        """Test that editing a config calls click.edit."""
        config.save_config({"probe": {"build_gui": True}}, path=self.test_dir)

        self.runner.invoke(cli, ["--path", self.test_dir, "config", "edit"])
        mock_edit.assert_called_once_with(filename=self.config_path)

    @patch("importlib.metadata.version", return_value="1.2.3")
    def test_version(self, mock_version):
        result = self.runner.invoke(cli, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), "brewprobe 1.2.3")

    def test_each_invocation_resets_logger_state(self):
        logger.messages_to_stderr = True
        logger.verbose = True
        self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        self.assertFalse(logger.messages_to_stderr)
        self.assertFalse(logger.verbose)

    def test_log_list(self):
        result = self.runner.invoke(cli, ["log", "--list"])
        self.assertEqual(result.exit_code, 0)

    def test_probe_reports_unexpected_errors(self):
        with patch("brewprobe.config.load_config", side_effect=RuntimeError("boom")) as mock_load:
            result = self.runner.invoke(cli, ["--path", self.test_dir, "probe", "--no-cache"])
        mock_load.assert_called_once()
        self.assertEqual(result.exit_code, 0)
        self.assertIn("An unexpected error occurred: boom", result.output)

if __name__ == "__main__":
    unittest.main()
