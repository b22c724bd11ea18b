"""
Schema Descriptors

Read-only descriptor models consumed by the enrichment resolver, and the
loader turning descriptor set documents into them.
"""

from enrichment_lookup.descriptors.models import FieldDecl, MessageDecl, SchemaFile
from enrichment_lookup.descriptors.loader import (
    load_descriptor_set,
    load_descriptor_sets,
    parse_descriptor_set,
    parse_descriptor_string,
)

__all__ = [
    "FieldDecl",
    "MessageDecl",
    "SchemaFile",
    "load_descriptor_set",
    "load_descriptor_sets",
    "parse_descriptor_set",
    "parse_descriptor_string",
]
