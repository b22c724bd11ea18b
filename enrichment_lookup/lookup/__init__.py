"""
Build-wide Enrichment Lookup

Resolves all schema files of a build into a single enrichment map.
"""

from enrichment_lookup.lookup.report import FileResult, LookupReport
from enrichment_lookup.lookup.engine import EnrichmentLookup, resolve_files

__all__ = [
    "FileResult",
    "LookupReport",
    "EnrichmentLookup",
    "resolve_files",
]
