"""Interactive wizard that narrates the experiment step by step.

The wizard is a linear state machine. Each step prints its narration, waits
for the user and then performs its action on the runner. There are no
backward transitions; the only way out is interrupting the process.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from rich.console import Console

from build_validation.config.experiment import ExperimentConfig
from build_validation.errors import BuildValidationError
from build_validation.experiments.runner import ExperimentResult, ExperimentRunner
from build_validation.logging_config import get_logger
from build_validation.reporting import narration
from build_validation.reporting.summary import print_repeat_command, print_summary, print_warnings

logger = get_logger()


class WizardStep(Enum):
    """Steps of the wizard, in execution order."""

    INTRO = "intro"
    COLLECT_GIT_DETAILS = "collect_git_details"
    COLLECT_BUILD_DETAILS = "collect_build_details"
    CLONE = "clone"
    FIRST_BUILD = "first_build"
    SECOND_BUILD = "second_build"
    SUMMARY = "summary"

    def next(self) -> "WizardStep | None":
        """The following step, or None after the summary."""
        steps = list(WizardStep)
        index = steps.index(self)
        return steps[index + 1] if index + 1 < len(steps) else None


class Prompter(Protocol):
    """Source of user input for the wizard."""

    def pause(self, message: str) -> None:
        """Block until the user confirms."""
        ...

    def ask(self, question: str, default: str = "") -> str:
        """Ask a question and return the answer (``default`` when empty)."""
        ...


NARRATION: dict[WizardStep, Callable[[ExperimentConfig], str]] = {
    WizardStep.INTRO: narration.introduction,
    WizardStep.COLLECT_GIT_DETAILS: narration.collect_git_details,
    WizardStep.COLLECT_BUILD_DETAILS: narration.collect_build_details,
    WizardStep.CLONE: narration.clone_project,
    WizardStep.FIRST_BUILD: narration.first_build,
    WizardStep.SECOND_BUILD: narration.second_build,
    WizardStep.SUMMARY: narration.summary,
}

CONFIRMATION: dict[WizardStep, str] = {
    WizardStep.INTRO: "Press <Enter> to get started with the experiment.",
    WizardStep.CLONE: "Press <Enter> to clone the project.",
    WizardStep.FIRST_BUILD: "Press <Enter> to run the first build of the experiment.",
    WizardStep.SECOND_BUILD: "Press <Enter> to run the second build of the experiment.",
}


class Wizard:
    """Drives an ExperimentRunner through the narrated steps."""

    def __init__(self, runner: ExperimentRunner, prompter: Prompter, console: Console | None = None):
        self.runner = runner
        self.prompter = prompter
        self.console = console or runner.console
        self.step: WizardStep | None = WizardStep.INTRO
        self.result: ExperimentResult | None = None
        self._actions: dict[WizardStep, Callable[[], None]] = {
            WizardStep.INTRO: self._make_experiment_dir,
            WizardStep.COLLECT_GIT_DETAILS: self._collect_git_details,
            WizardStep.COLLECT_BUILD_DETAILS: self._collect_build_details,
            WizardStep.CLONE: self.runner.clone_project,
            WizardStep.FIRST_BUILD: self.runner.execute_first_build,
            WizardStep.SECOND_BUILD: self.runner.execute_second_build,
            WizardStep.SUMMARY: self._summary,
        }

    @property
    def config(self) -> ExperimentConfig:
        return self.runner.config

    def run(self) -> ExperimentResult:
        """Run every remaining step and return the experiment result."""
        while self.step is not None:
            self.advance()
        if self.result is None:
            raise BuildValidationError("Wizard finished without reaching the summary")
        return self.result

    def advance(self) -> None:
        """Narrate and execute the current step, then move the cursor on."""
        step = self.step
        if step is None:
            return
        logger.debug("wizard_step", step=step.value)

        self.console.rule()
        if step is WizardStep.INTRO:
            self.console.print(f"[bold]{narration.introduction_title()}[/bold]\n")
        if step is not WizardStep.SUMMARY:
            self.console.print(NARRATION[step](self.config), highlight=False)
            if step in CONFIRMATION:
                self.prompter.pause(CONFIRMATION[step])

        self._actions[step]()
        self.step = step.next()

    def _make_experiment_dir(self) -> None:
        self.runner.make_experiment_dir()

    def _collect_git_details(self) -> None:
        config = self.config
        git_repo = self.prompter.ask("What is the URL of the Git repository to clone?", config.git_repo)
        git_branch = self.prompter.ask("What branch should be checked out?", config.git_branch)
        project_dir = self.prompter.ask(
            "In which directory of the repository is the Gradle build located?", config.project_dir
        )
        self.runner.config = config.with_values(
            git_repo=git_repo.strip(), git_branch=git_branch.strip(), project_dir=project_dir.strip()
        )

    def _collect_build_details(self) -> None:
        config = self.config
        tasks = self.prompter.ask("Which Gradle tasks should be invoked?", config.tasks)
        extra_args = self.prompter.ask("Which additional arguments should be passed to Gradle?", config.extra_args)
        self.runner.config = config.with_values(tasks=tasks.strip(), extra_args=extra_args.strip())
        self.runner.config.validate_required()

    def _summary(self) -> None:
        result = self.runner.read_scan_info()
        if result.warnings:
            print_warnings(self.console, result)
            self.console.print(narration.warnings(self.config), highlight=False)
            self.console.rule()
        self.console.print(NARRATION[WizardStep.SUMMARY](self.config), highlight=False)
        print_summary(self.console, result)
        print_repeat_command(self.console, self.config)
        self.console.print()
        self.console.print(narration.closing(self.config), highlight=False)
        self.result = result
