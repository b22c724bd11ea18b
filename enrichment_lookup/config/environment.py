"""
Environment variable integration for the enrichment lookup configuration.

Centralizes environment variable names and converts their values into
configuration overrides.
"""

import os
from typing import Any, Dict, List, Mapping, Optional


class EnvironmentVariables:
    """Centralized environment variable definitions and utilities."""

    LOG_LEVEL = "ENRICHMENT_LOOKUP_LOG_LEVEL"
    COLLISION_POLICY = "ENRICHMENT_LOOKUP_COLLISION_POLICY"
    FAIL_FAST = "ENRICHMENT_LOOKUP_FAIL_FAST"
    EXCLUDE_PACKAGES = "ENRICHMENT_LOOKUP_EXCLUDE_PACKAGES"
    OUTPUT_FORMAT = "ENRICHMENT_LOOKUP_OUTPUT_FORMAT"

    TRUE_VALUES = ("1", "true", "yes", "on")

    @classmethod
    def get_all_variables(cls) -> List[str]:
        """Get list of all supported environment variables."""
        return [
            cls.LOG_LEVEL,
            cls.COLLISION_POLICY,
            cls.FAIL_FAST,
            cls.EXCLUDE_PACKAGES,
            cls.OUTPUT_FORMAT,
        ]

    @classmethod
    def get_variable_documentation(cls) -> Dict[str, str]:
        """Get documentation for all environment variables."""
        return {
            cls.LOG_LEVEL: "Logging level (debug, info, warning, error)",
            cls.COLLISION_POLICY: "Handling of enrichments declared by several files (last-wins, merge, error)",
            cls.FAIL_FAST: "Abort the whole lookup on the first invalid schema file (true/false)",
            cls.EXCLUDE_PACKAGES: "Comma-separated packages skipped by the lookup",
            cls.OUTPUT_FORMAT: "Rendering of the enrichment map (properties, json)",
        }

    @classmethod
    def load_overrides(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Build configuration overrides from the environment."""
        env = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        if cls.LOG_LEVEL in env:
            overrides['log_level'] = env[cls.LOG_LEVEL].lower()

        if cls.COLLISION_POLICY in env:
            overrides['collision_policy'] = env[cls.COLLISION_POLICY].lower()

        if cls.FAIL_FAST in env:
            overrides['fail_fast'] = env[cls.FAIL_FAST].strip().lower() in cls.TRUE_VALUES

        if cls.EXCLUDE_PACKAGES in env:
            overrides['exclude_packages'] = [
                p.strip() for p in env[cls.EXCLUDE_PACKAGES].split(",") if p.strip()
            ]

        if cls.OUTPUT_FORMAT in env:
            overrides['output_format'] = env[cls.OUTPUT_FORMAT].lower()

        return overrides
