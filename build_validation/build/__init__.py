"""Build tool invocation and build scan extraction."""

from build_validation.build.gradle import BuildOutcome, BuildTool, GradleWrapper, run_tagged_build
from build_validation.build.scans import ScanFile, ScanRecord, ScanResult, extract_build_scan

__all__ = [
    "BuildOutcome",
    "BuildTool",
    "GradleWrapper",
    "ScanFile",
    "ScanRecord",
    "ScanResult",
    "extract_build_scan",
    "run_tagged_build",
]
