"""Git client used to fetch the project under test."""

import shutil
import subprocess
from pathlib import Path

from build_validation.errors import ConfigError, ProcessError
from build_validation.logging_config import get_logger

logger = get_logger()


class GitClient:
    """Thin wrapper around the ``git`` executable."""

    def __init__(self, executable: str = "git"):
        self.executable = executable

    def run_command(self, args: list[str], cwd: Path | None = None) -> subprocess.CompletedProcess:
        """Run a git command, raising ProcessError on failure."""
        cmd = [self.executable, *args]
        logger.debug("git_command", cmd=cmd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise ProcessError(cmd, 127, str(e)) from e
        if result.returncode != 0:
            raise ProcessError(cmd, result.returncode, (result.stdout or "") + (result.stderr or ""))
        return result

    def clone(self, repo: str, dest: Path, branch: str = "", workspace: Path | None = None) -> Path:
        """Shallow-clone ``repo`` into ``dest``, replacing an existing checkout.

        Args:
            repo: Repository URL or local path.
            dest: Target directory.
            branch: Branch or tag to check out; the remote default when empty.
            workspace: When set, ``dest`` must lie strictly inside it.

        Returns:
            The checkout directory.

        Raises:
            ProcessError: If git fails, with git's output attached.
            ConfigError: If ``dest`` is not strictly inside ``workspace``.
        """
        dest = Path(dest)
        if workspace is not None:
            root = Path(workspace).resolve()
            target = dest.resolve()
            if target == root or root not in target.parents:
                raise ConfigError("project_name", f"Refusing to clone into {dest}: not inside {workspace}")
        if dest.exists():
            logger.info("clone_dir_removed", path=str(dest))
            shutil.rmtree(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)

        args = ["clone", "--depth=1"]
        if branch:
            args += ["--branch", branch]
        args += [repo, str(dest)]

        logger.info("clone_started", repo=repo, branch=branch or None, dest=str(dest))
        self.run_command(args)
        logger.info("clone_finished", dest=str(dest))
        return dest
