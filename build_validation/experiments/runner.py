"""Experiment runner: clone the project and run the two builds."""

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from build_validation.build.gradle import (
    BuildOutcome,
    BuildTool,
    GradleWrapper,
    display_command,
    run_tagged_build,
)
from build_validation.build.scans import ScanFile, ScanRecord, ScanResult, ensure_distinct
from build_validation.config.experiment import EXPERIMENT_NAME, ExperimentConfig, generate_run_id
from build_validation.config.settings import Settings
from build_validation.errors import ParseError
from build_validation.logging_config import get_logger
from build_validation.vcs.git import GitClient

logger = get_logger()


@dataclass
class ExperimentResult:
    """Everything the summary needs about a finished run."""

    run_id: str
    config: ExperimentConfig
    experiment_dir: Path
    first_scan: ScanResult | None = None
    second_scan: ScanResult | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """Both builds published a build scan."""
        return self.first_scan is not None and self.second_scan is not None

    @property
    def has_quick_links(self) -> bool:
        """Both scans exist and have different ids."""
        return self.complete and self.first_scan.scan_id != self.second_scan.scan_id

    def raise_for_scans(self) -> None:
        """Raise ParseError if any build scan is missing or duplicated."""
        if not self.complete:
            raise ParseError("; ".join(self.warnings) or "Build scans are missing")
        ensure_distinct(self.first_scan, self.second_scan)


class ExperimentRunner:
    """Runs the incremental build experiment one phase at a time.

    The phases can be driven in one go with ``execute()`` or step by step by
    the wizard.
    """

    def __init__(
        self,
        config: ExperimentConfig,
        settings: Settings,
        git: GitClient | None = None,
        build_tool: BuildTool | None = None,
        console: Console | None = None,
        run_id: str | None = None,
    ):
        self.config = config
        self.settings = settings
        self.git = git or GitClient(settings.git_executable)
        self.build_tool = build_tool or GradleWrapper(settings.gradle_wrapper)
        self.console = console or Console()
        self.run_id = run_id or generate_run_id()
        self.experiment_dir = settings.experiment_dir
        self.scan_file = ScanFile(settings.scans_file)
        self.outcomes: list[BuildOutcome] = []

    @property
    def checkout_dir(self) -> Path:
        """Directory the project is cloned into."""
        return self.experiment_dir / self.config.project_name

    def make_experiment_dir(self) -> Path:
        """Create the scratch experiment directory."""
        self.experiment_dir.mkdir(parents=True, exist_ok=True)
        logger.info("experiment_dir_ready", path=str(self.experiment_dir))
        return self.experiment_dir

    def clone_project(self) -> Path:
        """Fresh shallow clone of the configured repository."""
        self.console.print(f"Cloning [bold]{self.config.project_name}[/bold]")
        return self.git.clone(
            self.config.git_repo,
            self.checkout_dir,
            branch=self.config.git_branch,
            workspace=self.experiment_dir,
        )

    def execute_first_build(self) -> BuildOutcome:
        """Run the build including ``clean``."""
        return self._execute_build(build=1, clean=True, label="first build")

    def execute_second_build(self) -> BuildOutcome:
        """Run the same build without ``clean``."""
        return self._execute_build(build=2, clean=False, label="second build")

    def _execute_build(self, build: int, clean: bool, label: str) -> BuildOutcome:
        self.console.print(f"[bold]Running {label}:[/bold]")
        self.console.print(display_command(self.config, clean), markup=False, highlight=False)

        outcome = run_tagged_build(
            self.build_tool,
            self.config,
            self.checkout_dir,
            self.run_id,
            clean=clean,
            label=label,
            on_output=self._echo,
        )
        self.outcomes.append(outcome)
        if outcome.scan is not None:
            self.scan_file.append(
                ScanRecord.from_scan(self.run_id, build, self.config.project_name, outcome.scan)
            )
        return outcome

    def _echo(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False)

    def read_scan_info(self) -> ExperimentResult:
        """Collect the build scans of this run from the scans file."""
        records = {record.build: record for record in self.scan_file.read(self.run_id)}
        result = ExperimentResult(
            run_id=self.run_id,
            config=self.config,
            experiment_dir=self.experiment_dir,
            first_scan=records[1].to_scan() if 1 in records else None,
            second_scan=records[2].to_scan() if 2 in records else None,
        )

        for outcome in self.outcomes:
            if outcome.error is not None:
                result.warnings.append(f"Build scan of the {outcome.label} could not be read: {outcome.error}")
        if result.complete:
            try:
                ensure_distinct(result.first_scan, result.second_scan)
            except ParseError as e:
                result.warnings.append(str(e))

        for warning in result.warnings:
            logger.warning("experiment_warning", run_id=self.run_id, warning=warning)
        return result

    def execute(self) -> ExperimentResult:
        """Validate, clone, run both builds and read the scans back.

        Raises:
            ConfigError: Before any side effect, if the config is incomplete.
            ProcessError: If cloning or a build fails; later phases are skipped.
        """
        self.config.validate_required()
        logger.info("experiment_started", experiment=EXPERIMENT_NAME, run_id=self.run_id)

        self.make_experiment_dir()
        self.clone_project()
        self.execute_first_build()
        self.execute_second_build()

        result = self.read_scan_info()
        logger.info("experiment_finished", run_id=self.run_id, complete=result.complete)
        return result
