"""Experiment summary: build scans, quick links and the repeat command."""

import shlex
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from build_validation.build.scans import ScanResult
from build_validation.config.experiment import EXPERIMENT_NAME, EXPERIMENT_NO, ExperimentConfig

if TYPE_CHECKING:
    from build_validation.experiments.runner import ExperimentResult

CLI_NAME = "build-validation"
COMMAND_NAME = "incremental-build"
LABEL_WIDTH = 26


def quick_links(first: ScanResult, second: ScanResult) -> list[tuple[str, str]]:
    """Links into the build scan views most relevant for the investigation.

    All links live on the server of the first scan.
    """
    base_url = first.base_url
    return [
        ("Task execution overview:", f"{base_url}/s/{second.scan_id}/performance/execution"),
        (
            "Executed tasks timeline:",
            f"{base_url}/s/{second.scan_id}/timeline?outcome=SUCCESS,FAILED&sort=longest",
        ),
        ("Task inputs comparison:", f"{base_url}/c/{first.scan_id}/{second.scan_id}/task-inputs"),
    ]


def experiment_rows(result: "ExperimentResult") -> list[tuple[str, str]]:
    """Configuration section of the summary."""
    rows = [
        ("ID:", EXPERIMENT_NO),
        ("Name:", EXPERIMENT_NAME),
        ("Experiment dir:", str(result.experiment_dir)),
        ("Experiment run ID:", result.run_id),
    ]
    rows += [(f"{label}:", value) for label, value in result.config.to_display_dict().items()]
    return rows


def build_scan_rows(result: "ExperimentResult") -> list[tuple[str, str]]:
    """Build scan URLs of both builds, or a placeholder when missing."""
    return [
        ("Build scan first build:", _scan_url(result.first_scan)),
        ("Build scan second build:", _scan_url(result.second_scan)),
    ]


def _scan_url(scan: ScanResult | None) -> str:
    return scan.scan_url if scan is not None else "<unavailable>"


def repeat_command(config: ExperimentConfig) -> str:
    """Command line that reruns the experiment non-interactively."""
    parts = [CLI_NAME, COMMAND_NAME, "--git-repo", config.git_repo]
    if config.git_branch:
        parts += ["--git-branch", config.git_branch]
    if config.project_dir:
        parts += ["--project-dir", config.project_dir]
    parts += ["--tasks", config.tasks]
    if config.extra_args:
        parts += ["--args", config.extra_args]
    if config.enable_ge:
        parts += ["--enable-ge", "--ge-server", config.ge_server]
    return " ".join(shlex.quote(part) for part in parts)


def create_section_table(title: str, rows: list[tuple[str, str]]) -> Table:
    """Borderless two-column table for one summary section."""
    table = Table(
        title=title,
        title_justify="left",
        title_style="bold cyan",
        show_header=False,
        box=None,
        pad_edge=False,
    )
    table.add_column("Label", style="dim", min_width=LABEL_WIDTH, no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in rows:
        table.add_row(label, value)
    return table


def print_warnings(console: Console, result: "ExperimentResult") -> None:
    """Print one line per problem found while reading the build scans."""
    for warning in result.warnings:
        console.print(f"[yellow]WARNING:[/yellow] {escape(warning)}", highlight=False)


def print_summary(console: Console, result: "ExperimentResult") -> None:
    """Render the summary sections to the console."""
    console.print()
    console.print(create_section_table("Summary", experiment_rows(result) + build_scan_rows(result)))
    if result.has_quick_links:
        console.print()
        console.print(
            create_section_table(
                "Investigation Quick Links", quick_links(result.first_scan, result.second_scan)
            )
        )
    console.print()


def print_repeat_command(console: Console, config: ExperimentConfig) -> None:
    """Print how to rerun the experiment without the wizard."""
    console.print("[bold cyan]Command line invocation[/bold cyan]")
    console.print(repeat_command(config), markup=False, highlight=False)
