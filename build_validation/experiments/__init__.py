"""Experiment orchestration: configuration, pipeline and wizard."""

from build_validation.config.experiment import ExperimentConfig
from build_validation.experiments.runner import ExperimentResult, ExperimentRunner
from build_validation.experiments.wizard import Wizard, WizardStep

__all__ = [
    "ExperimentConfig",
    "ExperimentResult",
    "ExperimentRunner",
    "Wizard",
    "WizardStep",
]
