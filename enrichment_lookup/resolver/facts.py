"""
Resolved Facts

Intermediate (enrichment, event) associations discovered while walking a
single schema file. Facts live only until the merger turns them into an
`EnrichmentMap`.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class ResolvedFact:
    """One discovered association.

    Attributes:
        enrichment: Full name of the enrichment type
        event: Full name of the event type it applies to, or the empty
            type name when the targets could not be resolved statically
    """
    enrichment: str
    event: str


class EnrichmentFacts:
    """Multi-valued mapping from enrichment name to event names.

    Keys and the values of each key keep the order of discovery;
    repeated values are stored once.
    """

    def __init__(self, facts: Iterable[ResolvedFact] = ()):
        self._values: Dict[str, Dict[str, None]] = {}
        self.extend(facts)

    def add(self, fact: ResolvedFact) -> None:
        self._values.setdefault(fact.enrichment, {})[fact.event] = None

    def extend(self, facts: Iterable[ResolvedFact]) -> None:
        for fact in facts:
            self.add(fact)

    def get(self, enrichment: str) -> List[str]:
        return list(self._values.get(enrichment, ()))

    def keys(self) -> List[str]:
        return list(self._values)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for key, values in self._values.items():
            yield key, list(values)

    def to_dict(self) -> Dict[str, List[str]]:
        return dict(self.items())

    def __contains__(self, enrichment: str) -> bool:
        return enrichment in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __repr__(self) -> str:
        return f"EnrichmentFacts({self.to_dict()!r})"
