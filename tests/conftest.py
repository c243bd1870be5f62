"""Shared test fixtures."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from build_validation.build.gradle import CompletedBuild
from build_validation.config.experiment import ExperimentConfig
from build_validation.config.settings import Settings
from build_validation.errors import ProcessError

RUN_ID = "65f0c0de"


def gradle_output(scan_url: str | None) -> str:
    """Console output of a successful Gradle build publishing ``scan_url``."""
    lines = [
        "> Task :compileJava",
        "> Task :test",
        "",
        "BUILD SUCCESSFUL in 4s",
        "5 actionable tasks: 5 executed",
        "",
    ]
    if scan_url is not None:
        lines += ["Publishing build scan...", scan_url, ""]
    return "\n".join(lines)


class FakeBuildTool:
    """Build tool that replays scripted results and records invocations."""

    def __init__(self, results: list[CompletedBuild]):
        self.results = list(results)
        self.calls: list[tuple[list[str], Path]] = []

    def run(self, args, cwd, on_output=None):
        self.calls.append((list(args), Path(cwd)))
        result = self.results.pop(0)
        if on_output is not None:
            for line in result.output.splitlines():
                on_output(line)
        return result


class FakeGitClient:
    """Git client that creates an empty checkout instead of cloning."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.clones: list[tuple[str, Path, str]] = []

    def clone(self, repo, dest, branch="", workspace=None):
        self.clones.append((repo, Path(dest), branch))
        if self.fail:
            raise ProcessError(["git", "clone", repo], 128, "fatal: repository not found")
        Path(dest).mkdir(parents=True, exist_ok=True)
        return Path(dest)


class ScriptedPrompter:
    """Prompter answering from a script; an answer of None keeps the default."""

    def __init__(self, answers: list[str | None] | None = None):
        self.answers = list(answers or [])
        self.pauses: list[str] = []
        self.questions: list[str] = []

    def pause(self, message):
        self.pauses.append(message)

    def ask(self, question, default=""):
        self.questions.append(question)
        answer = self.answers.pop(0) if self.answers else None
        return default if answer is None else answer


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary directory."""
    return Settings(experiments_root=tmp_path / "data", ge_server=None)


@pytest.fixture
def config() -> ExperimentConfig:
    """A complete experiment configuration."""
    return ExperimentConfig(
        git_repo="https://github.com/acme/widget-service.git",
        git_branch="main",
        tasks="build",
    )


@pytest.fixture
def successful_builds() -> list[CompletedBuild]:
    """Two successful builds publishing distinct scans."""
    return [
        CompletedBuild(0, gradle_output("https://ge.example.com/s/firstscan1")),
        CompletedBuild(0, gradle_output("https://ge.example.com/s/secondscan2")),
    ]


@pytest.fixture
def console() -> Console:
    """Wide console writing to memory."""
    return Console(file=io.StringIO(), width=200, record=True, color_system=None)
