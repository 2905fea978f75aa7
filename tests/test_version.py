import subprocess
import unittest
from importlib import metadata
from pathlib import Path
from unittest.mock import MagicMock, patch

from gitrelease import _version
from gitrelease._version import get_git_commit_sha, get_version, source_checkout, version_string


# Parent of the ``src/`` directory holding the imported package.
PACKAGE_ROOT = Path(_version.__file__).resolve().parents[2]


class TestGetVersion(unittest.TestCase):
    def test_installed_version(self) -> None:
        with patch("gitrelease._version.metadata.version", return_value="1.2.3"):
            self.assertEqual(get_version(), "1.2.3")

    def test_not_installed(self) -> None:
        with patch("gitrelease._version.metadata.version", side_effect=metadata.PackageNotFoundError):
            self.assertEqual(get_version(), "development")


class TestGetGitCommitSha(unittest.TestCase):
    def test_success(self) -> None:
        mock_result = MagicMock(stdout="a1b2c3d\n")
        with patch("subprocess.run", return_value=mock_result) as mock_run:
            self.assertEqual(get_git_commit_sha(Path("/repo")), "a1b2c3d")
        args = mock_run.call_args[0][0]
        self.assertEqual(args, ["git", "-C", str(Path("/repo")), "rev-parse", "--short=7", "HEAD"])

    def test_not_a_repository(self) -> None:
        with patch("subprocess.run", side_effect=subprocess.CalledProcessError(128, "git")):
            self.assertEqual(get_git_commit_sha(Path("/repo")), "N/A")

    def test_git_not_installed(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            self.assertEqual(get_git_commit_sha(Path("/repo")), "N/A")

    def test_installed_outside_a_checkout(self) -> None:
        with patch("gitrelease._version.source_checkout", return_value=None):
            with patch("subprocess.run") as mock_run:
                self.assertEqual(get_git_commit_sha(), "N/A")
        mock_run.assert_not_called()

    def test_defaults_to_source_checkout(self) -> None:
        mock_result = MagicMock(stdout="a1b2c3d\n")
        with patch("gitrelease._version.source_checkout", return_value=Path("/src-root")):
            with patch("subprocess.run", return_value=mock_result) as mock_run:
                self.assertEqual(get_git_commit_sha(), "a1b2c3d")
        self.assertEqual(mock_run.call_args[0][0][2], str(Path("/src-root")))


class TestSourceCheckout(unittest.TestCase):
    def test_parent_of_src_without_git(self) -> None:
        with patch.object(Path, "exists", autospec=True, return_value=False) as mock_exists:
            self.assertIsNone(source_checkout())
        self.assertEqual(mock_exists.call_args[0][0], PACKAGE_ROOT / ".git")

    def test_parent_of_src_with_git(self) -> None:
        with patch.object(Path, "exists", autospec=True, return_value=True):
            root = source_checkout()
        self.assertEqual(root, PACKAGE_ROOT)


class TestVersionString(unittest.TestCase):
    def test_format(self) -> None:
        with patch("gitrelease._version.get_version", return_value="1.2.3"):
            with patch("gitrelease._version.get_git_commit_sha", return_value="abcdef0"):
                self.assertEqual(version_string(), "gitrelease version 1.2.3 (abcdef0)")


if __name__ == "__main__":
    unittest.main()
