"""
Descriptor Walker

Walks the top-level messages of a schema file and applies an ordered chain
of scan levels to each one. The first level producing any fact wins; lower
levels are not run for that message:

1. MessageOptionScan: `enrichment_for` / `enrichment` on the message itself
2. FieldOptionScan: `by` on the fields of the message
3. NestedMessageScan: `by` on the fields of its immediate nested messages
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from enrichment_lookup.descriptors.models import MessageDecl, SchemaFile
from enrichment_lookup.options import (
    DEFAULT_ACCESSOR,
    EMPTY_TYPE_NAME,
    PROTO_TYPE_SEPARATOR,
    OptionAccessor,
)
from enrichment_lookup.resolver.facts import EnrichmentFacts, ResolvedFact
from enrichment_lookup.resolver.parsers import parse_by, parse_type_names


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanContext:
    """Per-file inputs shared by all scan levels.

    Attributes:
        package_prefix: Prefix qualifying top-level message names
        accessor: Annotation accessor used to read options
    """
    package_prefix: str = ""
    accessor: OptionAccessor = field(default=DEFAULT_ACCESSOR)

    @classmethod
    def for_file(cls, file: SchemaFile, accessor: Optional[OptionAccessor] = None) -> "ScanContext":
        return cls(file.package_prefix, accessor or DEFAULT_ACCESSOR)

    def qualify(self, message: MessageDecl) -> str:
        return self.package_prefix + message.name


class ScanLevel(ABC):
    """A single level of the fallback scan."""

    name: str = "scan"

    @abstractmethod
    def scan(self, message: MessageDecl, context: ScanContext) -> List[ResolvedFact]:
        """Return the facts this level finds for the message, or an empty list."""
        pass


class MessageOptionScan(ScanLevel):
    """Reads the message-level enrichment options.

    `enrichment_for` marks the message as an enrichment of the listed events.
    `enrichment` marks the message as an event enriched by the listed types.
    Both may be present and contribute independently.
    """

    name = "message"

    def scan(self, message: MessageDecl, context: ScanContext) -> List[ResolvedFact]:
        message_name = context.qualify(message)
        accessor = context.accessor
        facts = []

        logger.debug(f"Scanning message {message_name} for the enrichment annotations")
        event_types = parse_type_names(accessor.enrichment_for_of(message), context.package_prefix)
        if event_types:
            logger.debug(f"Found target events of {message_name}: {event_types}")
            facts.extend(ResolvedFact(message_name, event) for event in event_types)

        logger.debug(f"Scanning message {message_name} for the enrichment target annotations")
        enrichment_types = parse_type_names(accessor.enrichment_of(message), context.package_prefix)
        if enrichment_types:
            logger.debug(f"Found enrichments for event {message_name}: {enrichment_types}")
            facts.extend(ResolvedFact(enrichment, message_name) for enrichment in enrichment_types)

        return facts


class FieldOptionScan(ScanLevel):
    """Collects the event types referenced by `by` options of the message fields.

    All annotated fields contribute to a single key, the message itself.
    When every reference resolves to nothing (wildcards, short references)
    the key is still claimed with the empty type name, so lower levels are
    skipped and the merger drops the key.
    """

    name = "field"

    def scan(self, message: MessageDecl, context: ScanContext) -> List[ResolvedFact]:
        accessor = context.accessor
        annotated = [f for f in message.fields if accessor.has_by(f)]
        if not annotated:
            return []

        message_name = context.qualify(message)
        logger.debug(f"Scanning fields of message {message_name} for the enrichment annotations")
        events: List[str] = []
        for message_field in annotated:
            for event in parse_by(accessor.by_of(message_field), message_field.name):
                logger.debug(f"'by' option found on field {message_field.name} targeting {event}")
                if event not in events:
                    events.append(event)

        if not events:
            return [ResolvedFact(message_name, EMPTY_TYPE_NAME)]
        return [ResolvedFact(message_name, event) for event in events]


class NestedMessageScan(ScanLevel):
    """Finds an enrichment declared as a nested message of its event.

    The first immediate nested message having a `by`-annotated field is an
    enrichment of the outer message.
    """

    name = "nested"

    def scan(self, message: MessageDecl, context: ScanContext) -> List[ResolvedFact]:
        outer_name = context.qualify(message)
        logger.debug(f"Scanning inner messages of {outer_name} for the annotations")
        for inner in message.nested:
            for inner_field in inner.fields:
                if context.accessor.has_by(inner_field):
                    enrichment_name = outer_name + PROTO_TYPE_SEPARATOR + inner.name
                    logger.debug(
                        f"'by' option found on field {inner_field.name} "
                        f"targeting outer event {outer_name}"
                    )
                    return [ResolvedFact(enrichment_name, outer_name)]
        return []


DEFAULT_SCAN_LEVELS = (MessageOptionScan(), FieldOptionScan(), NestedMessageScan())


class DescriptorWalker:
    """Applies the scan chain to every top-level message of a file."""

    def __init__(self,
                 accessor: Optional[OptionAccessor] = None,
                 levels: Optional[Sequence[ScanLevel]] = None):
        self.accessor = accessor or DEFAULT_ACCESSOR
        self.levels = tuple(levels) if levels is not None else DEFAULT_SCAN_LEVELS

    def scan_message(self, message: MessageDecl, context: ScanContext) -> List[ResolvedFact]:
        """Run the levels in order and return the facts of the first productive one."""
        for level in self.levels:
            facts = level.scan(message, context)
            if facts:
                logger.debug(f"Message {message.name} resolved at {level.name} level")
                return facts
        logger.debug(f"No enrichment or event annotations found for message {message.name}")
        return []

    def walk(self, file: SchemaFile) -> EnrichmentFacts:
        """Collect the facts of all top-level messages of the file.

        Raises:
            EnrichmentLookupError: If an annotation value is invalid
        """
        context = ScanContext.for_file(file, self.accessor)
        facts = EnrichmentFacts()
        for message in file.messages:
            facts.extend(self.scan_message(message, context))
        logger.debug(f"Found enrichments in {file.name}: {facts.to_dict()}")
        return facts


def scan(file: SchemaFile, accessor: Optional[OptionAccessor] = None) -> EnrichmentFacts:
    """Walk a schema file with the default scan chain."""
    return DescriptorWalker(accessor).walk(file)
