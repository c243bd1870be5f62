"""CLI command to run the incremental build experiment."""

import typer
from rich.markup import escape

from build_validation.cli.utils import RichPrompter, console, error_panel, success_panel, warning_panel
from build_validation.config.experiment import EXPERIMENT_DESCRIPTION, ExperimentConfig
from build_validation.config.settings import get_settings
from build_validation.errors import BuildValidationError, ConfigError, ParseError, ProcessError
from build_validation.experiments.runner import ExperimentRunner
from build_validation.experiments.wizard import Wizard
from build_validation.logging_config import setup_logging
from build_validation.reporting.summary import print_summary, print_warnings

ENV_PREFIX = "BUILD_VALIDATION_"


def incremental_build(
    git_repo: str = typer.Option(
        "",
        "--git-repo",
        "-r",
        envvar=f"{ENV_PREFIX}GIT_REPO",
        help="URL of the Git repository containing the project",
    ),
    git_branch: str = typer.Option(
        "",
        "--git-branch",
        "-b",
        envvar=f"{ENV_PREFIX}GIT_BRANCH",
        help="Branch to check out (default: the remote's default branch)",
    ),
    project_dir: str = typer.Option(
        "",
        "--project-dir",
        "-p",
        envvar=f"{ENV_PREFIX}PROJECT_DIR",
        help="Directory of the Gradle build, relative to the repository root",
    ),
    tasks: str = typer.Option(
        "",
        "--tasks",
        "-t",
        envvar=f"{ENV_PREFIX}TASKS",
        help="Gradle tasks to invoke, e.g. 'build' or 'assemble check'",
    ),
    extra_args: str = typer.Option(
        "",
        "--args",
        "-a",
        envvar=f"{ENV_PREFIX}ARGS",
        help="Additional arguments passed to Gradle",
    ),
    enable_ge: bool = typer.Option(
        False,
        "--enable-ge",
        "-e",
        envvar=f"{ENV_PREFIX}ENABLE_GE",
        help="Publish build scans to the Gradle Enterprise server given by --ge-server",
    ),
    ge_server: str | None = typer.Option(
        None,
        "--ge-server",
        "-s",
        help="Gradle Enterprise server URL (default: BUILD_VALIDATION_GE_SERVER)",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Wizard mode: explain each step and wait for confirmation",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr",
    ),
) -> None:
    """Validate that a Gradle build is optimized for incremental building."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)

    config = ExperimentConfig(
        git_repo=git_repo.strip(),
        git_branch=git_branch.strip(),
        project_dir=project_dir.strip(),
        tasks=tasks.strip(),
        extra_args=extra_args.strip(),
        enable_ge=enable_ge,
        ge_server=(ge_server or settings.ge_server or "").strip(),
        interactive_mode=interactive,
    )
    runner = ExperimentRunner(config, settings, console=console)

    try:
        if interactive:
            result = Wizard(runner, RichPrompter(console), console=console).run()
        else:
            console.print(f"[bold]{EXPERIMENT_DESCRIPTION}[/bold]")
            result = runner.execute()
            print_warnings(console, result)
            print_summary(console, result)
        result.raise_for_scans()
    except ConfigError as e:
        console.print(error_panel(escape(str(e)), title="Configuration Error"))
        raise typer.Exit(e.exit_code)
    except ProcessError as e:
        message = escape(str(e))
        if e.output and not e.output_shown:
            message += f"\n\n{escape(e.output.rstrip())}"
        console.print(error_panel(message, title="Process Error"))
        raise typer.Exit(e.exit_code)
    except ParseError as e:
        console.print(warning_panel(escape(str(e)), title="Build Scan Error"))
        raise typer.Exit(e.exit_code)
    except BuildValidationError as e:
        console.print(error_panel(escape(str(e))))
        raise typer.Exit(e.exit_code)
    except (KeyboardInterrupt, EOFError):
        # Ctrl-C, or stdin closed while the wizard waits for input
        console.print("\n[red]Experiment interrupted[/red]")
        raise typer.Exit(130)

    console.print(success_panel(f"Experiment run [bold]{result.run_id}[/bold] completed", title="Done"))
