"""
Configuration schema and data models for the enrichment lookup.

This module defines the configuration data structures:
- Build-wide collision policy and failure handling
- Packages excluded from the lookup
- Output format of the enrichment map
- Names of the enrichment annotations
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from enrichment_lookup.options import OptionAccessor


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CollisionPolicy(Enum):
    """How the same enrichment declared by several files is handled."""
    LAST_WINS = "last-wins"
    MERGE = "merge"
    ERROR = "error"


class OutputFormat(Enum):
    """Supported renderings of the enrichment map."""
    PROPERTIES = "properties"
    JSON = "json"


@dataclass
class OptionKeysConfig:
    """Names of the annotations read by the resolver."""
    enrichment_for: str = "enrichment_for"
    enrichment: str = "enrichment"
    by: str = "by"

    def to_accessor(self) -> OptionAccessor:
        return OptionAccessor(
            enrichment_for=self.enrichment_for,
            enrichment=self.enrichment,
            by=self.by,
        )


@dataclass
class LookupConfig:
    """Complete enrichment lookup configuration."""

    log_level: str = LogLevel.INFO.value
    collision_policy: str = CollisionPolicy.LAST_WINS.value
    fail_fast: bool = False
    output_format: str = OutputFormat.PROPERTIES.value
    exclude_packages: List[str] = field(default_factory=lambda: ["google.protobuf"])
    options: OptionKeysConfig = field(default_factory=OptionKeysConfig)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        try:
            LogLevel(self.log_level)
        except ValueError:
            valid_levels = [l.value for l in LogLevel]
            errors.append(f"Invalid log_level '{self.log_level}'. Valid options: {valid_levels}")

        try:
            CollisionPolicy(self.collision_policy)
        except ValueError:
            valid_policies = [p.value for p in CollisionPolicy]
            errors.append(
                f"Invalid collision_policy '{self.collision_policy}'. Valid options: {valid_policies}"
            )

        try:
            OutputFormat(self.output_format)
        except ValueError:
            valid_formats = [f.value for f in OutputFormat]
            errors.append(f"Invalid output_format '{self.output_format}'. Valid options: {valid_formats}")

        for key in ("enrichment_for", "enrichment", "by"):
            if not getattr(self.options, key):
                errors.append(f"options.{key} must not be empty")

        if len({self.options.enrichment_for, self.options.enrichment}) < 2:
            errors.append("options.enrichment_for and options.enrichment must differ")

        return errors

    def accessor(self) -> OptionAccessor:
        return self.options.to_accessor()
