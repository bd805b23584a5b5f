import subprocess
import unittest
from unittest.mock import patch, MagicMock
from brewprobe.utils import run_command


class TestRunCommand(unittest.TestCase):

    @patch("subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(stdout="/opt/homebrew\n", stderr="", returncode=0)
        self.assertEqual(run_command(["brew", "--prefix"]), ("/opt/homebrew\n", "", 0))
        mock_run.assert_called_once_with(
            ["brew", "--prefix"], capture_output=True, text=True, env=None, check=False, cwd=None
        )

    @patch("subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "brew")
        stdout, stderr, returncode = run_command(["brew", "--prefix"])
        self.assertEqual(stdout, "")
        self.assertEqual(returncode, -1)
        self.assertIn("No such file or directory", stderr)

    @patch("subprocess.run")
    def test_permission_error(self, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")
        self.assertEqual(run_command(["sw_vers", "-productVersion"])[2], -1)

    @patch("subprocess.run")
    def test_non_zero_exit_is_returned(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["sw_vers"], 1, "", "boom")
        self.assertEqual(run_command(["sw_vers"]), ("", "boom", 1))

if __name__ == "__main__":
    unittest.main()
