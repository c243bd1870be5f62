"""Gradle invocation for the two experiment builds."""

import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from build_validation.build.scans import ScanResult, extract_build_scan
from build_validation.errors import ParseError, ProcessError
from build_validation.config.experiment import EXPERIMENT_SCAN_TAG, ExperimentConfig
from build_validation.logging_config import get_logger

logger = get_logger()

OutputCallback = Callable[[str], None]


@dataclass
class CompletedBuild:
    """Exit status and combined output of a build tool invocation."""

    returncode: int
    output: str


class BuildTool(Protocol):
    """Anything that can run a build command inside a checkout."""

    def run(self, args: list[str], cwd: Path, on_output: OutputCallback | None = None) -> CompletedBuild:
        ...


class GradleWrapper:
    """Runs the project's Gradle wrapper as a subprocess."""

    def __init__(self, executable: str = "./gradlew"):
        self.executable = executable

    def command(self, args: list[str]) -> list[str]:
        """Full command line for the given Gradle arguments."""
        return [self.executable, *args]

    def run(self, args: list[str], cwd: Path, on_output: OutputCallback | None = None) -> CompletedBuild:
        """Run the wrapper, streaming each output line to ``on_output``.

        Raises:
            ProcessError: If the wrapper cannot be started.
        """
        cmd = self.command(args)
        wrapper = Path(cwd) / self.executable
        if wrapper.exists() and not os.access(wrapper, os.X_OK):
            wrapper.chmod(wrapper.stat().st_mode | 0o111)

        try:
            process = subprocess.Popen(
                cmd,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise ProcessError(cmd, 127, str(e)) from e

        lines: list[str] = []
        # stdout is always a pipe here
        with process.stdout as stream:
            for line in stream:
                lines.append(line)
                if on_output is not None:
                    on_output(line.rstrip("\n"))
        returncode = process.wait()
        return CompletedBuild(returncode=returncode, output="".join(lines))


@dataclass
class BuildOutcome:
    """Result of one tagged build: the parsed scan or why it is missing."""

    label: str
    args: list[str]
    scan: ScanResult | None = None
    error: ParseError | None = None

    @property
    def succeeded(self) -> bool:
        return self.scan is not None


def build_arguments(config: ExperimentConfig, run_id: str, clean: bool) -> list[str]:
    """Gradle arguments of an experiment build.

    Caching is always disabled and the build is tagged with the experiment
    and the run id so both scans can be correlated.
    """
    args = [
        "--no-build-cache",
        f"-Dscan.tag.{EXPERIMENT_SCAN_TAG}",
        f"-Dscan.tag.{run_id}",
        "-Dscan.capture-task-input-files=true",
    ]
    if config.project_dir:
        args += ["--project-dir", config.project_dir]
    if config.enable_ge:
        args += ["--scan", f"-Dgradle.enterprise.url={config.ge_server}"]
    if clean:
        args.append("clean")
    args += config.task_list
    args += config.extra_arg_list
    return args


def display_command(config: ExperimentConfig, clean: bool) -> str:
    """Command line shown to the user before a build."""
    parts = ["./gradlew", "--no-build-cache", f"-Dscan.tag.{EXPERIMENT_SCAN_TAG}"]
    if clean:
        parts.append("clean")
    parts.append(config.tasks)
    if config.extra_args:
        parts.append(config.extra_args)
    return " ".join(parts)


def run_tagged_build(
    tool: BuildTool,
    config: ExperimentConfig,
    checkout_dir: Path,
    run_id: str,
    clean: bool,
    label: str,
    on_output: OutputCallback | None = None,
) -> BuildOutcome:
    """Run one experiment build and extract its build scan.

    Raises:
        ProcessError: If the build exits with a non-zero code.
    """
    args = build_arguments(config, run_id, clean)
    log = logger.bind(build=label, run_id=run_id, clean=clean)
    log.info("build_started", args=args)

    completed = tool.run(args, cwd=checkout_dir, on_output=on_output)
    if completed.returncode != 0:
        log.error("build_failed", returncode=completed.returncode)
        raise ProcessError(
            ["./gradlew", *args],
            completed.returncode,
            completed.output,
            output_shown=on_output is not None,
        )

    try:
        scan = extract_build_scan(completed.output)
    except ParseError as e:
        log.warning("build_scan_missing", reason=str(e))
        return BuildOutcome(label=label, args=args, error=e)

    log.info("build_finished", scan_id=scan.scan_id, base_url=scan.base_url)
    return BuildOutcome(label=label, args=args, scan=scan)
