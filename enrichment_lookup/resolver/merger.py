"""
Resolution Merger

Merges the multi-valued facts of a schema file into the final
`EnrichmentMap`, in which every enrichment type maps to one string of
event type names joined with `VALUE_SEPARATOR`.
"""

import json
import logging
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Optional, Union

from enrichment_lookup.options import EMPTY_TYPE_NAME, VALUE_SEPARATOR
from enrichment_lookup.resolver.facts import EnrichmentFacts


logger = logging.getLogger(__name__)


class EnrichmentMap(Mapping):
    """Immutable mapping from enrichment type name to merged event type names.

    Never holds an empty value. Serializes to the flat key/value text read
    by the code generator, e.g. `demo.TaskView=demo.TaskCreated,demo.TaskClosed`.
    """

    def __init__(self, entries: Optional[Union[Mapping, Iterable]] = None):
        self._entries: Dict[str, str] = dict(entries or {})
        for key, value in self._entries.items():
            if not value:
                raise ValueError(f"Enrichment `{key}` must map to at least one event type")

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EnrichmentMap({self._entries!r})"

    def events_of(self, enrichment: str) -> List[str]:
        """Event type names of the given enrichment, empty if unknown."""
        value = self._entries.get(enrichment)
        if not value:
            return []
        return value.split(VALUE_SEPARATOR)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def to_properties(self) -> str:
        """Render as properties-style `key=value` lines."""
        return "".join(f"{key}={value}\n" for key, value in self._entries.items())

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self._entries, indent=indent)

    @classmethod
    def from_properties(cls, text: str) -> "EnrichmentMap":
        """Read the `key=value` lines produced by `to_properties`."""
        entries = {}
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            key, _, value = line.partition("=")
            entries[key.strip()] = value.strip()
        return cls(entries)


def merge_duplicate_values(facts: Union[EnrichmentFacts, Mapping]) -> EnrichmentMap:
    """Merge the values collected for each enrichment into a single value.

    The empty type name is dropped from every value set. Remaining values
    are joined with `VALUE_SEPARATOR` in discovery order. A key left without
    any value is omitted from the result.

    Args:
        facts: `EnrichmentFacts`, or a mapping of key to an iterable of values

    Returns:
        The merged enrichment map
    """
    logger.debug("Merging duplicating entries")
    items = facts.items() if isinstance(facts, EnrichmentFacts) else (
        (key, values) for key, values in facts.items()
    )

    merged: Dict[str, str] = {}
    for key, values in items:
        if isinstance(values, str):
            values = [values]
        unique = [v for v in dict.fromkeys(values) if v != EMPTY_TYPE_NAME]
        if not unique:
            logger.warning(f"Omitting enrichment {key}: no statically known event types")
            continue
        merged[key] = VALUE_SEPARATOR.join(unique)

    return EnrichmentMap(merged)


merge = merge_duplicate_values
