"""
Rule: a conjunction of per-fact conditions paired with an outcome.
"""

from typing import Any, Dict, Generic, Hashable, Mapping, Optional, TypeVar

from shared.errors import RuleDefinitionError
from .evaluators import Evaluator, as_evaluator
from .query import Query

Outcome = TypeVar("Outcome")

_MISSING = object()


class Rule(Generic[Outcome]):
    """Named conjunction of (fact name -> evaluator) conditions.

    Specificity is the number of conditions. A rule without conditions
    matches every query.
    """

    def __init__(self, outcome: Outcome, name: Optional[str] = None,
                 conditions: Optional[Mapping[Hashable, Any]] = None):
        self.outcome = outcome
        self.name = name
        self.evaluators: Dict[Hashable, Evaluator] = {}
        for fact, evaluator in (conditions or {}).items():
            self.insert(fact, evaluator)

    @property
    def specificity(self) -> int:
        return len(self.evaluators)

    def insert(self, fact: Hashable, evaluator: Any) -> None:
        """Add or replace the condition on ``fact``.

        Mutating a rule already held by a Ruleset leaves that ruleset's order
        stale until its next append.
        """
        try:
            hash(fact)
        except TypeError as e:
            raise RuleDefinitionError(
                "Fact name must be hashable",
                {"fact": repr(fact), "rule": self.name}
            ) from e
        self.evaluators[fact] = as_evaluator(evaluator)

    def evaluate(self, query: Query) -> bool:
        """Check every condition against ``query``."""
        # Every condition needs its own fact, so a smaller query cannot match
        if len(self.evaluators) > len(query):
            return False

        facts = query.facts
        for fact, evaluator in self.evaluators.items():
            value = facts.get(fact, _MISSING)
            if value is _MISSING:
                return False
            if not evaluator.evaluate(value):
                return False

        return True

    def __repr__(self) -> str:
        label = self.name if self.name is not None else repr(self.outcome)
        return f"Rule({label}, specificity={self.specificity})"
