"""
Annotation Constants and Accessors

The separators and the wildcard token below are part of the contract with
schema authors and with the downstream code generator reading the
enrichment map. They must not change without a migration plan.
"""

from dataclasses import dataclass
from typing import Optional

# Separates several type names in message options and in merged map values.
VALUE_SEPARATOR = ","

# Separates several field references in a single `by` field option.
PIPE_SEPARATOR = "|"

# `by` target whose event type is not statically known, e.g. `*.order_id`.
ANY_BY_OPTION_TARGET = "*"

PROTO_TYPE_SEPARATOR = "."

# Placeholder recorded for a key whose targets all resolved to nothing.
EMPTY_TYPE_NAME = ""


@dataclass(frozen=True)
class OptionAccessor:
    """Typed access to the enrichment annotations of descriptors.

    An instance is passed explicitly to the parsers and scan levels, so
    custom annotation names never leak into global state.

    Attributes:
        enrichment_for: Message option naming the events an enrichment targets
        enrichment: Message option naming the enrichments of an event
        by: Field option naming the source fields of an enrichment field
    """
    enrichment_for: str = "enrichment_for"
    enrichment: str = "enrichment"
    by: str = "by"

    def enrichment_for_of(self, message) -> Optional[str]:
        return message.options.get(self.enrichment_for)

    def enrichment_of(self, message) -> Optional[str]:
        return message.options.get(self.enrichment)

    def by_of(self, field) -> Optional[str]:
        return field.options.get(self.by)

    def has_by(self, field) -> bool:
        return self.by in field.options


DEFAULT_ACCESSOR = OptionAccessor()
