"""
Enrichment Resolver

Walks a schema file, parses its enrichment annotations and merges the
discovered facts into an `EnrichmentMap`.
"""

from enrichment_lookup.resolver.facts import EnrichmentFacts, ResolvedFact
from enrichment_lookup.resolver.parsers import parse_by, parse_type_names
from enrichment_lookup.resolver.scanners import (
    DescriptorWalker,
    FieldOptionScan,
    MessageOptionScan,
    NestedMessageScan,
    ScanContext,
    ScanLevel,
    scan,
)
from enrichment_lookup.resolver.merger import EnrichmentMap, merge, merge_duplicate_values
from enrichment_lookup.resolver.finder import EnrichmentFinder, find_enrichments

__all__ = [
    "EnrichmentFacts",
    "ResolvedFact",
    "parse_by",
    "parse_type_names",
    "DescriptorWalker",
    "FieldOptionScan",
    "MessageOptionScan",
    "NestedMessageScan",
    "ScanContext",
    "ScanLevel",
    "scan",
    "EnrichmentMap",
    "merge",
    "merge_duplicate_values",
    "EnrichmentFinder",
    "find_enrichments",
]
