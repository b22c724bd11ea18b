"""
Lookup Report Data Models

Defines FileResult and LookupReport dataclasses describing the outcome of
a build-wide enrichment lookup.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional

from enrichment_lookup.resolver.merger import EnrichmentMap


@dataclass
class FileResult:
    """Outcome of resolving a single schema file.

    Attributes:
        file_name: Name of the schema file
        package: Package of the schema file
        status: resolved, skipped (excluded package) or failed
        enrichments: Number of enrichment types found in the file
        error: Error message when the file failed
        duration_ms: How long the file took in milliseconds
    """
    file_name: str
    package: str
    status: Literal["resolved", "skipped", "failed"]
    enrichments: int = 0
    error: Optional[str] = None
    duration_ms: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        d = {
            "file_name": self.file_name,
            "package": self.package,
            "status": self.status,
            "enrichments": self.enrichments,
            "duration_ms": self.duration_ms,
        }
        if self.error:
            d["error"] = self.error
        return d


@dataclass
class LookupReport:
    """Structured report from a lookup run.

    Attributes:
        enrichments: Build-wide enrichment map
        files: Per-file outcomes in processing order
        timestamp: When the lookup was performed (UTC)
        duration_ms: How long the lookup took in milliseconds
    """
    enrichments: EnrichmentMap = field(default_factory=EnrichmentMap)
    files: List[FileResult] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    duration_ms: int = 0

    @property
    def resolved(self) -> List[FileResult]:
        return [f for f in self.files if f.status == "resolved"]

    @property
    def skipped(self) -> List[FileResult]:
        return [f for f in self.files if f.status == "skipped"]

    @property
    def failed(self) -> List[FileResult]:
        return [f for f in self.files if f.status == "failed"]

    @property
    def is_valid(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "enrichments": self.enrichments.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "is_valid": self.is_valid,
            "timestamp": self.timestamp,
            "duration_ms": self.duration_ms,
            "summary": {
                "resolved": len(self.resolved),
                "skipped": len(self.skipped),
                "failed": len(self.failed),
                "enrichments": len(self.enrichments),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def format_human(self) -> str:
        """Format report for human-readable console output."""
        lines = []
        for result in self.files:
            if result.status == "resolved":
                lines.append(f"✅ {result.file_name}: {result.enrichments} enrichment(s)")
            elif result.status == "skipped":
                lines.append(f"⏭ {result.file_name}: skipped ({result.package})")
            else:
                lines.append(f"❌ {result.file_name}: {result.error}")

        lines.append(
            f"{len(self.resolved)} resolved, {len(self.skipped)} skipped, "
            f"{len(self.failed)} failed, {len(self.enrichments)} enrichment(s)"
        )
        return "\n".join(lines)
