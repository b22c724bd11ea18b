"""
Enrichment Finder

Resolves the enrichment map of one schema file by walking its messages
and merging the discovered facts.
"""

import logging
from typing import Optional, Sequence

from enrichment_lookup.descriptors.models import SchemaFile
from enrichment_lookup.options import OptionAccessor
from enrichment_lookup.resolver.merger import EnrichmentMap, merge_duplicate_values
from enrichment_lookup.resolver.scanners import DescriptorWalker, ScanLevel


logger = logging.getLogger(__name__)


class EnrichmentFinder:
    """Finds enrichment declarations in a schema file."""

    def __init__(self,
                 file: SchemaFile,
                 accessor: Optional[OptionAccessor] = None,
                 levels: Optional[Sequence[ScanLevel]] = None):
        """Create a finder for the file.

        Args:
            file: The schema file to search enrichments in
            accessor: Annotation accessor, defaults to the standard option names
            levels: Scan chain override, defaults to message, field, nested
        """
        self.file = file
        self.walker = DescriptorWalker(accessor, levels)

    def find_enrichments(self) -> EnrichmentMap:
        """Find the enrichments declared in the file.

        Returns:
            Map from enrichment type name to the names of the events it enriches

        Raises:
            EnrichmentLookupError: If an annotation value is invalid
        """
        logger.debug(f"Looking up for the enrichments in {self.file.name}")
        facts = self.walker.walk(self.file)
        return merge_duplicate_values(facts)


def find_enrichments(file: SchemaFile, accessor: Optional[OptionAccessor] = None) -> EnrichmentMap:
    """Resolve the enrichment map of a single schema file."""
    return EnrichmentFinder(file, accessor).find_enrichments()
