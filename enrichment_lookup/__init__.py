"""
Enrichment Lookup

Resolves the enrichment declarations of proto-style schema files into a
flat map from enrichment type to the event types it enriches, consumed by
later code generation stages.
"""

__version__ = "1.0.0"

from enrichment_lookup.descriptors import FieldDecl, MessageDecl, SchemaFile
from enrichment_lookup.errors import (
    ConfigurationError,
    DescriptorLoadError,
    DuplicateEnrichmentError,
    EnrichmentLookupError,
    InvalidByOptionValueError,
    InvalidWildcardUsageError,
)
from enrichment_lookup.options import OptionAccessor
from enrichment_lookup.resolver import EnrichmentFinder, EnrichmentMap, find_enrichments
from enrichment_lookup.lookup import EnrichmentLookup, LookupReport

__all__ = [
    "FieldDecl",
    "MessageDecl",
    "SchemaFile",
    "ConfigurationError",
    "DescriptorLoadError",
    "DuplicateEnrichmentError",
    "EnrichmentLookupError",
    "InvalidByOptionValueError",
    "InvalidWildcardUsageError",
    "OptionAccessor",
    "EnrichmentFinder",
    "EnrichmentMap",
    "find_enrichments",
    "EnrichmentLookup",
    "LookupReport",
]
