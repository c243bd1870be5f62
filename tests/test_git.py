"""Tests for the git client."""

import subprocess
from unittest.mock import patch

import pytest

from build_validation.errors import ConfigError, ProcessError
from build_validation.vcs.git import GitClient


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestClone:
    """Tests for GitClient.clone."""

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_shallow_clone_with_branch(self, mock_run, tmp_path):
        """Clones with depth 1 and the requested branch."""
        dest = tmp_path / "exp" / "widget"

        result = GitClient().clone("https://example.com/widget.git", dest, branch="develop")

        assert result == dest
        cmd = mock_run.call_args.args[0]
        assert cmd == ["git", "clone", "--depth=1", "--branch", "develop", "https://example.com/widget.git", str(dest)]

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_default_branch(self, mock_run, tmp_path):
        """Without a branch the remote default is used."""
        GitClient().clone("https://example.com/widget.git", tmp_path / "widget")

        assert "--branch" not in mock_run.call_args.args[0]

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_custom_executable(self, mock_run, tmp_path):
        """The configured git executable is used."""
        GitClient("/usr/local/bin/git").clone("repo", tmp_path / "widget")

        assert mock_run.call_args.args[0][0] == "/usr/local/bin/git"

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_replaces_existing_checkout(self, mock_run, tmp_path):
        """A previous checkout is removed before cloning."""
        dest = tmp_path / "widget"
        dest.mkdir()
        (dest / "stale.txt").write_text("old run")

        GitClient().clone("repo", dest)

        assert not (dest / "stale.txt").exists()
        assert dest.parent.exists()

    @patch(
        "build_validation.vcs.git.subprocess.run",
        return_value=_completed(128, stderr="fatal: Remote branch nope not found in upstream origin\n"),
    )
    def test_failure_raises_with_git_output(self, mock_run, tmp_path):
        """A failed clone surfaces git's own message."""
        with pytest.raises(ProcessError) as exc_info:
            GitClient().clone("repo", tmp_path / "widget", branch="nope")

        assert exc_info.value.returncode == 128
        assert "Remote branch nope not found" in exc_info.value.output
        assert exc_info.value.exit_code == 3

    @patch("build_validation.vcs.git.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_missing_git_executable(self, mock_run, tmp_path):
        """A missing git binary is reported as a ProcessError."""
        with pytest.raises(ProcessError) as exc_info:
            GitClient().clone("repo", tmp_path / "widget")
        assert exc_info.value.returncode == 127


class TestCloneWorkspaceGuard:
    """Tests for the workspace guard of GitClient.clone."""

    @pytest.mark.parametrize("relative", ["..", ".", "../.."])
    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_refuses_dest_outside_workspace(self, mock_run, tmp_path, relative):
        """A checkout that resolves to the workspace or above is never removed."""
        workspace = tmp_path / "data" / "01-validate-incremental-build"
        workspace.mkdir(parents=True)
        scans = workspace / "scans.csv"
        scans.write_text("run_id,build\nr1,1\n")

        with pytest.raises(ConfigError):
            GitClient().clone("repo", workspace / relative, workspace=workspace)

        assert scans.read_text() == "run_id,build\nr1,1\n"
        mock_run.assert_not_called()

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_allows_dest_inside_workspace(self, mock_run, tmp_path):
        """A project directory inside the workspace is cloned as usual."""
        workspace = tmp_path / "exp"

        dest = GitClient().clone("repo", workspace / "widget", workspace=workspace)

        assert dest == workspace / "widget"
        mock_run.assert_called_once()


class TestRunCommand:
    """Tests for GitClient.run_command."""

    @patch("build_validation.vcs.git.subprocess.run", return_value=_completed())
    def test_undecodable_output_replaced(self, mock_run):
        """Output is decoded as UTF-8 with replacement characters."""
        GitClient().run_command(["status"])

        kwargs = mock_run.call_args.kwargs
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
