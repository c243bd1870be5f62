"""Build scan extraction and the scans CSV file.

Gradle prints the published scan as two lines::

    Publishing build scan...
    https://ge.example.com/s/abc123def

Anything else is treated as a missing scan.
"""

import csv
import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from build_validation.errors import ParseError

PUBLISHING_MARKER = "Publishing build scan..."
SCAN_URL_PATTERN = re.compile(
    r"^(?P<base_url>https?://[^\s/?#]+(?:/\S*)?)/s/(?P<scan_id>[A-Za-z0-9]+)/?$"
)


@dataclass(frozen=True)
class ScanResult:
    """Build scan published by one build invocation."""

    scan_id: str
    base_url: str

    @property
    def scan_url(self) -> str:
        """Shareable URL of the build scan."""
        return f"{self.base_url}/s/{self.scan_id}"


def parse_scan_url(url: str) -> ScanResult:
    """Split a build scan URL into base URL and scan id.

    Raises:
        ParseError: If the URL does not have the ``<base>/s/<id>`` shape.
    """
    match = SCAN_URL_PATTERN.match(url.strip())
    if match is None:
        raise ParseError(f"Malformed build scan URL: {url.strip()!r}")
    return ScanResult(scan_id=match.group("scan_id"), base_url=match.group("base_url"))


def extract_build_scan(output: str) -> ScanResult:
    """Extract the published build scan from Gradle console output.

    The last ``Publishing build scan...`` marker wins; the next non-blank
    line must be the scan URL.

    Raises:
        ParseError: If no scan was published or the URL is malformed.
    """
    lines = output.splitlines()
    marker_indexes = [i for i, line in enumerate(lines) if line.strip() == PUBLISHING_MARKER]
    if not marker_indexes:
        raise ParseError("Build output does not contain a published build scan")

    for line in lines[marker_indexes[-1] + 1 :]:
        if line.strip():
            return parse_scan_url(line)
    raise ParseError("Build output ends before the build scan URL")


def ensure_distinct(first: ScanResult, second: ScanResult) -> None:
    """Both builds of an experiment must publish their own scan."""
    if first.scan_id == second.scan_id:
        raise ParseError(f"Both builds reported the same build scan id: {first.scan_id}")


class ScanRecord(BaseModel):
    """One row of the scans CSV file."""

    run_id: str = Field(description="Experiment run the build belongs to")
    build: int = Field(description="Build number within the run (1 or 2)")
    project_name: str = Field(description="Name of the cloned project")
    base_url: str = Field(description="Build scan server base URL")
    scan_id: str = Field(description="Build scan identifier")
    scan_url: str = Field(description="Full build scan URL")

    @classmethod
    def from_scan(cls, run_id: str, build: int, project_name: str, scan: ScanResult) -> "ScanRecord":
        """Create a record for a parsed scan."""
        return cls(
            run_id=run_id,
            build=build,
            project_name=project_name,
            base_url=scan.base_url,
            scan_id=scan.scan_id,
            scan_url=scan.scan_url,
        )

    def to_scan(self) -> ScanResult:
        """Convert back to a ScanResult."""
        return ScanResult(scan_id=self.scan_id, base_url=self.base_url)


class ScanFile:
    """Append-only CSV file of build scans, shared by all runs."""

    FIELDS = list(ScanRecord.model_fields)

    def __init__(self, path: Path):
        self.path = Path(path)

    def append(self, record: ScanRecord) -> None:
        """Append a record, writing the header for a new file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        new_file = not self.path.exists() or self.path.stat().st_size == 0
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.FIELDS)
            if new_file:
                writer.writeheader()
            writer.writerow(record.model_dump())

    def read(self, run_id: str | None = None) -> list[ScanRecord]:
        """Read all records, optionally only those of one run."""
        if not self.path.exists():
            return []
        with open(self.path, newline="", encoding="utf-8") as f:
            records = [ScanRecord.model_validate(row) for row in csv.DictReader(f)]
        if run_id is not None:
            records = [r for r in records if r.run_id == run_id]
        return sorted(records, key=lambda r: r.build)
