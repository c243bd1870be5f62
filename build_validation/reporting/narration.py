"""Explanatory texts printed by the wizard between steps."""

from build_validation.config.experiment import EXPERIMENT_NAME, EXPERIMENT_NO, ExperimentConfig


def introduction_title() -> str:
    return f"Experiment {EXPERIMENT_NO}: {EXPERIMENT_NAME}"


def introduction(config: ExperimentConfig) -> str:
    return """In this experiment, you will validate how well a given project leverages
Gradle's incremental build functionality. A build is considered fully
incremental if all tasks avoid performing any work because:

  * The tasks' inputs have not changed since their last invocation and
  * The tasks' outputs are still present

The goal of the experiment is to first identify those tasks that do not
participate in Gradle's incremental build functionality, to then investigate
why they do not participate, and to finally make an informed decision of which
tasks are worth improving to make your build faster.

The experiment can be run on any developer's machine. It logically consists of
the following steps:

  1. Run the Gradle build with a typical task invocation including the 'clean' task
  2. Run the Gradle build with the same task invocation but without the 'clean' task
  3. Determine which tasks are still executed in the second run and why
  4. Assess which of the executed tasks are worth improving

This tool automates step 1 and step 2 without modifying the project. Build
scans support your investigation in step 3 and step 4.

After improving the build to make it more incremental, you can push your
changes and run the experiment again. This creates a cycle of
run → measure → improve → run → …"""


def collect_git_details(config: ExperimentConfig) -> str:
    return """We need a few details about the project the experiment runs against.

First, the Git repository to clone, the branch to check out and, if the Gradle
build does not live in the root of the repository, the directory that
contains it. The project is cloned into a fresh directory, so local changes in
your own checkout do not influence the experiment."""


def collect_build_details(config: ExperimentConfig) -> str:
    return f"""Next, the Gradle tasks to invoke for the experiment, for example 'build' or
'assemble check'. Pick the tasks a developer typically runs in '{config.project_name}'.

You can also pass additional Gradle arguments, for example '--offline' or a
'-P' project property. Leave the arguments empty if none are needed."""


def clone_project(config: ExperimentConfig) -> str:
    branch = config.git_branch or "the default branch"
    return f"""All configuration is in place. The project '{config.project_name}' will now be
cloned from {config.git_repo} ({branch}) into the experiment directory."""


def first_build(config: ExperimentConfig) -> str:
    return """Now that the project has been checked out, the first build can be run with the
given Gradle tasks. The build will be invoked with the 'clean' task included
and build caching disabled."""


def second_build(config: ExperimentConfig) -> str:
    return """Now that the first build has finished successfully, the second build can be run
with the same Gradle tasks. This time, the build will be invoked without the
'clean' task included and build caching still disabled."""


def warnings(config: ExperimentConfig) -> str:
    return """Some build scans could not be read from the build output. Make sure the build
publishes build scans, for example by applying the Gradle Enterprise plugin or
running the experiment with --enable-ge and --ge-server. The quick links below
are only available when both builds published a build scan."""


def summary(config: ExperimentConfig) -> str:
    return """Now that the second build has finished successfully, you are ready to measure
how well your build leverages Gradle's incremental build functionality for the
invoked set of Gradle tasks.

The 'Summary' section below captures the configuration of the experiment and
the two build scans that were published as part of running the experiment.
The build scan of the second build is particularly interesting since this is
where you can inspect what tasks were not leveraging Gradle's incremental
build functionality.

The 'Investigation Quick Links' section below allows quick navigation to the
most relevant views in build scans: which tasks executed in the second build,
which of them had the biggest impact on build performance, and what caused
them to not be up-to-date.

The 'Command line invocation' section below demonstrates how you can rerun
the experiment with the same configuration and in non-interactive mode."""


def closing(config: ExperimentConfig) -> str:
    return """Once you have addressed the issues surfaced in build scans and pushed the
changes to your repository, you can rerun the experiment and start over the
run → measure → improve cycle."""
