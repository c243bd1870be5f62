"""Experiment configuration record."""

import shlex
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

from build_validation.errors import ConfigError

EXPERIMENT_NO = "01"
EXPERIMENT_NAME = "Validate Gradle Incremental Build"
EXPERIMENT_DESCRIPTION = "Validating that a Gradle build is optimized for incremental building"
EXPERIMENT_SCAN_TAG = "exp1-gradle"


def project_name_from_repo(git_repo: str) -> str:
    """Derive the project name from a repository URL or path.

    ``https://github.com/gradle/gradle-build-scan-quickstart.git`` becomes
    ``gradle-build-scan-quickstart``.
    """
    name = git_repo.strip().rstrip("/")
    name = name.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if name in (".", ".."):
        # local path such as "." or "../": name the directory it points at
        name = Path(git_repo.strip()).resolve().name
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def generate_run_id(now: datetime | None = None) -> str:
    """Generate a run id: the current epoch seconds as hexadecimal."""
    now = now or datetime.now()
    return format(int(now.timestamp()), "x")


@dataclass(frozen=True)
class ExperimentConfig:
    """Configuration of one experiment run."""

    git_repo: str = ""
    git_branch: str = ""
    project_dir: str = ""
    tasks: str = ""
    extra_args: str = ""
    enable_ge: bool = False
    ge_server: str = ""
    interactive_mode: bool = False
    project_name: str = ""

    def __post_init__(self) -> None:
        if not self.project_name and self.git_repo:
            object.__setattr__(self, "project_name", project_name_from_repo(self.git_repo))

    def with_values(self, **changes) -> "ExperimentConfig":
        """Return a copy with the given fields replaced.

        ``project_name`` is derived again when the repository changes.
        """
        if "git_repo" in changes and "project_name" not in changes:
            changes["project_name"] = ""
        return replace(self, **changes)

    def validate_required(self) -> None:
        """Check required fields.

        Raises:
            ConfigError: naming the first missing field.
        """
        if not self.git_repo.strip():
            raise ConfigError("git_repo", "Missing required argument: --git-repo")
        if self.project_name in ("", ".", "..") or any(sep in self.project_name for sep in ("/", "\\")):
            raise ConfigError("project_name", f"Cannot derive a project name from {self.git_repo!r}")
        if not self.tasks.strip():
            raise ConfigError("tasks", "Missing required argument: --tasks")
        if self.enable_ge and not self.ge_server.strip():
            raise ConfigError("ge_server", "Missing required argument: --ge-server (needed by --enable-ge)")
        for field_name in ("tasks", "extra_args"):
            try:
                shlex.split(getattr(self, field_name))
            except ValueError as e:
                raise ConfigError(field_name, f"Cannot parse {field_name}: {e}") from e

    @property
    def task_list(self) -> list[str]:
        """Gradle tasks, split with shell quoting rules."""
        return shlex.split(self.tasks)

    @property
    def extra_arg_list(self) -> list[str]:
        """Additional Gradle arguments, split with shell quoting rules."""
        return shlex.split(self.extra_args)

    def to_display_dict(self) -> dict[str, str]:
        """Human readable view used by the summary."""
        return {
            "Git repo": self.git_repo,
            "Git branch": self.git_branch or "<default>",
            "Project dir": self.project_dir or "<root directory>",
            "Gradle tasks": self.tasks,
            "Gradle args": self.extra_args or "<none>",
        }
