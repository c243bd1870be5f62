"""Tests for the experiment summary and quick links.

Justification: the quick links are the main deliverable of the experiment;
they must point at exactly the build scan views used in the investigation.
"""

import shlex
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from build_validation.build.scans import ScanResult
from build_validation.config.experiment import ExperimentConfig
from build_validation.experiments.runner import ExperimentResult
from build_validation.reporting.summary import (
    build_scan_rows,
    experiment_rows,
    print_summary,
    print_warnings,
    quick_links,
    repeat_command,
)
from tests.conftest import RUN_ID

FIRST = ScanResult(scan_id="firstscan1", base_url="https://ge.example.com")
SECOND = ScanResult(scan_id="secondscan2", base_url="https://ge.example.com")


def _result(config: ExperimentConfig, first=FIRST, second=SECOND, warnings=None) -> ExperimentResult:
    return ExperimentResult(
        run_id=RUN_ID,
        config=config,
        experiment_dir=Path("data/01-validate-incremental-build"),
        first_scan=first,
        second_scan=second,
        warnings=warnings or [],
    )


class TestQuickLinks:
    """Tests for quick_links."""

    def test_links(self):
        """Links point at the second scan and compare both scans."""
        urls = [url for _, url in quick_links(FIRST, SECOND)]
        assert urls == [
            "https://ge.example.com/s/secondscan2/performance/execution",
            "https://ge.example.com/s/secondscan2/timeline?outcome=SUCCESS,FAILED&sort=longest",
            "https://ge.example.com/c/firstscan1/secondscan2/task-inputs",
        ]

    def test_labels(self):
        """Each link has its fixed label."""
        labels = [label for label, _ in quick_links(FIRST, SECOND)]
        assert labels == ["Task execution overview:", "Executed tasks timeline:", "Task inputs comparison:"]

    @given(
        first_id=st.from_regex(r"[a-z0-9]{1,16}", fullmatch=True),
        second_id=st.from_regex(r"[a-z0-9]{1,16}", fullmatch=True),
        base_url=st.sampled_from(["https://gradle.com", "http://ge.internal:8080/ge"]),
    )
    def test_links_are_deterministic(self, first_id, second_id, base_url):
        """The same ids always produce the same links built from the first base URL."""
        first = ScanResult(first_id, base_url)
        second = ScanResult(second_id, "https://other.example.com")

        links = quick_links(first, second)

        assert links == quick_links(first, second)
        assert links[0][1] == f"{base_url}/s/{second_id}/performance/execution"
        assert links[1][1] == f"{base_url}/s/{second_id}/timeline?outcome=SUCCESS,FAILED&sort=longest"
        assert links[2][1] == f"{base_url}/c/{first_id}/{second_id}/task-inputs"


class TestRows:
    """Tests for the summary sections."""

    def test_experiment_rows(self, config):
        """The configuration section names the experiment and the run."""
        rows = dict(experiment_rows(_result(config)))
        assert rows["ID:"] == "01"
        assert rows["Name:"] == "Validate Gradle Incremental Build"
        assert rows["Experiment run ID:"] == RUN_ID
        assert rows["Git repo:"] == config.git_repo
        assert rows["Gradle tasks:"] == "build"

    def test_build_scan_rows(self, config):
        """Both scan URLs are listed."""
        rows = dict(build_scan_rows(_result(config)))
        assert rows["Build scan first build:"] == "https://ge.example.com/s/firstscan1"
        assert rows["Build scan second build:"] == "https://ge.example.com/s/secondscan2"

    def test_missing_scan_placeholder(self, config):
        """A missing scan is shown as unavailable."""
        rows = dict(build_scan_rows(_result(config, second=None)))
        assert rows["Build scan second build:"] == "<unavailable>"


class TestRepeatCommand:
    """Tests for repeat_command."""

    def test_minimal(self, config):
        """Only the given options are repeated."""
        assert repeat_command(config) == (
            "build-validation incremental-build --git-repo https://github.com/acme/widget-service.git "
            "--git-branch main --tasks build"
        )

    def test_quotes_and_ge(self, config):
        """Values with spaces are quoted and GE options repeated."""
        config = config.with_values(
            tasks="assemble check",
            extra_args="--offline",
            project_dir="services/api",
            enable_ge=True,
            ge_server="https://ge.example.com",
        )
        parts = shlex.split(repeat_command(config))
        assert parts[parts.index("--tasks") + 1] == "assemble check"
        assert parts[parts.index("--project-dir") + 1] == "services/api"
        assert parts[parts.index("--args") + 1] == "--offline"
        assert parts[-3:] == ["--enable-ge", "--ge-server", "https://ge.example.com"]


class TestPrintSummary:
    """Tests for the rendered summary."""

    def test_prints_sections(self, config, console):
        """Summary and quick links are rendered."""
        print_summary(console, _result(config))
        text = console.export_text()

        assert "Summary" in text
        assert "Investigation Quick Links" in text
        assert "https://ge.example.com/c/firstscan1/secondscan2/task-inputs" in text

    def test_no_quick_links_without_scans(self, config, console):
        """Quick links are omitted instead of printed blank."""
        print_summary(console, _result(config, second=None))
        text = console.export_text()

        assert "Investigation Quick Links" not in text
        assert "<unavailable>" in text

    def test_no_quick_links_for_identical_scans(self, config, console):
        """A scan is never compared with itself."""
        same = ScanResult(scan_id="firstscan1", base_url="https://ge.example.com")
        print_summary(console, _result(config, second=same, warnings=["same id"]))
        text = console.export_text()

        assert "Investigation Quick Links" not in text
        assert "/c/firstscan1/firstscan1/task-inputs" not in text

    def test_prints_warnings(self, config, console):
        """Each warning is printed on its own line."""
        print_warnings(console, _result(config, second=None, warnings=["scan missing"]))
        assert "WARNING: scan missing" in console.export_text()
