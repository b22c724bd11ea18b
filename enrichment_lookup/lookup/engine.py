"""
Lookup Engine

Resolves every schema file of a build and unions the per-file enrichment
maps into one build-wide map. Files of excluded packages are skipped, a
failing file does not prevent resolving the others unless `fail_fast` is
set, and keys declared by several files follow the configured collision
policy.
"""

import logging
import time
from typing import Dict, Iterable, List, Optional, Union
from pathlib import Path

from enrichment_lookup.config.schema import CollisionPolicy, LookupConfig
from enrichment_lookup.descriptors.loader import load_descriptor_set
from enrichment_lookup.descriptors.models import SchemaFile
from enrichment_lookup.errors import DescriptorLoadError, DuplicateEnrichmentError, EnrichmentLookupError
from enrichment_lookup.lookup.report import FileResult, LookupReport
from enrichment_lookup.options import PROTO_TYPE_SEPARATOR, VALUE_SEPARATOR
from enrichment_lookup.resolver.finder import EnrichmentFinder
from enrichment_lookup.resolver.merger import EnrichmentMap
from enrichment_lookup.utils.logging_config import logging_config


logger = logging.getLogger(__name__)


class EnrichmentLookup:
    """Build-wide enrichment lookup over many schema files."""

    def __init__(self, config: Optional[LookupConfig] = None):
        """Initialize the lookup.

        Args:
            config: Lookup configuration, defaults to `LookupConfig()`
        """
        self.config = config or LookupConfig()
        self.policy = CollisionPolicy(self.config.collision_policy)
        self.accessor = self.config.accessor()

    def is_excluded(self, file: SchemaFile) -> bool:
        """Whether the file belongs to an excluded package or one of its subpackages."""
        for package in self.config.exclude_packages:
            if file.package == package or file.package.startswith(package + PROTO_TYPE_SEPARATOR):
                return True
        return False

    def resolve_file(self, file: SchemaFile) -> EnrichmentMap:
        """Resolve a single file with the configured annotation names."""
        return EnrichmentFinder(file, self.accessor).find_enrichments()

    def resolve(self, files: Iterable[SchemaFile]) -> LookupReport:
        """Resolve all files and union their enrichment maps.

        Args:
            files: Schema files in build order

        Returns:
            LookupReport with the build-wide map and per-file outcomes

        Raises:
            EnrichmentLookupError: Only when `fail_fast` is set
        """
        logger.debug("Enrichment lookup started")
        start = time.time()
        combined: Dict[str, str] = {}
        sources: Dict[str, List[str]] = {}
        results: List[FileResult] = []

        for file in files:
            results.append(self._resolve_into(file, combined, sources))

        elapsed = time.time() - start
        logging_config.log_operation_timing("Enrichment lookup", elapsed)
        report = LookupReport(
            enrichments=EnrichmentMap(combined),
            files=results,
            duration_ms=int(elapsed * 1000),
        )

        if not combined:
            logger.info("Enrichment lookup complete. No enrichments found.")
        else:
            logger.info(
                f"Enrichment lookup complete: {len(combined)} enrichment(s) "
                f"in {len(report.resolved)} file(s)"
            )
        return report

    def resolve_paths(self, paths: Iterable[Union[str, Path]]) -> LookupReport:
        """Load descriptor sets and resolve their files.

        A descriptor set that cannot be loaded is reported as a failed entry.
        """
        files: List[SchemaFile] = []
        load_failures: List[FileResult] = []
        for path in paths:
            try:
                files.extend(load_descriptor_set(path))
            except DescriptorLoadError as e:
                if self.config.fail_fast:
                    raise
                logger.error(f"Cannot load descriptor set {path}: {e}")
                load_failures.append(FileResult(str(path), "", "failed", error=str(e)))

        report = self.resolve(files)
        report.files = load_failures + report.files
        return report

    def _resolve_into(self, file: SchemaFile, combined: Dict[str, str],
                      sources: Dict[str, List[str]]) -> FileResult:
        if self.is_excluded(file):
            logger.debug(f"Skipping {file.name} of excluded package {file.package}")
            return FileResult(file.name, file.package, "skipped")

        start = time.time()
        try:
            enrichments = self.resolve_file(file)
            self._union(file.name, enrichments, combined, sources)
        except EnrichmentLookupError as e:
            if self.config.fail_fast:
                raise
            logger.error(f"Enrichment lookup failed for {file.name}: {e}")
            return FileResult(file.name, file.package, "failed", error=str(e),
                              duration_ms=int((time.time() - start) * 1000))

        logger.debug(f"Resolved {len(enrichments)} enrichment(s) in {file.name}")
        return FileResult(file.name, file.package, "resolved", len(enrichments),
                          duration_ms=int((time.time() - start) * 1000))

    def _union(self, file_name: str, enrichments: EnrichmentMap,
               combined: Dict[str, str], sources: Dict[str, List[str]]) -> None:
        """Add the file's map to the build-wide map according to the collision policy."""
        if self.policy is CollisionPolicy.ERROR:
            for key, value in enrichments.items():
                if key in combined and combined[key] != value:
                    raise DuplicateEnrichmentError(key, sources[key] + [file_name])

        for key, value in enrichments.items():
            if key in combined and self.policy is CollisionPolicy.MERGE:
                events = combined[key].split(VALUE_SEPARATOR) + value.split(VALUE_SEPARATOR)
                value = VALUE_SEPARATOR.join(dict.fromkeys(events))
            elif key in combined and combined[key] != value:
                logger.warning(
                    f"Enrichment {key} from {file_name} replaces the one from "
                    f"{', '.join(sources[key])}"
                )
            combined[key] = value
            sources.setdefault(key, []).append(file_name)


def resolve_files(files: Iterable[SchemaFile], config: Optional[LookupConfig] = None) -> LookupReport:
    """Resolve a build's schema files with the given configuration."""
    return EnrichmentLookup(config).resolve(files)
