"""
Fact query: the named fact values presented for one evaluation.
"""

from typing import Any, Dict, Hashable, Mapping, Optional


class Query:
    """Mapping from fact name to fact value.

    A fact name appears at most once; inserting it again overwrites the value.
    """

    def __init__(self, facts: Optional[Mapping[Hashable, Any]] = None):
        self.facts: Dict[Hashable, Any] = dict(facts) if facts else {}

    def insert(self, fact: Hashable, value: Any) -> None:
        self.facts[fact] = value

    def extend(self, query: "Query") -> None:
        """Merge another query in; its values win on collision."""
        self.facts.update(query.facts)

    def get(self, fact: Hashable, default: Any = None) -> Any:
        return self.facts.get(fact, default)

    def __contains__(self, fact: object) -> bool:
        return fact in self.facts

    def __len__(self) -> int:
        return len(self.facts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self.facts == other.facts

    def __repr__(self) -> str:
        return f"Query({self.facts!r})"
