"""
Test helper functions and factory methods for the rules package.
"""

from typing import Any, Dict, List

from fact_matching.rules.evaluators import FloatEvaluator, ValueEvaluator
from fact_matching.rules.query import Query
from fact_matching.rules.rule import Rule


class TestDataFactory:
    """Factory for creating test data."""

    # Not a test class
    __test__ = False

    @staticmethod
    def create_rule(outcome: Any, name: str = None, **conditions) -> Rule:
        """Create a rule from keyword conditions."""
        rule = Rule(outcome, name=name)
        for fact, evaluator in conditions.items():
            rule.insert(fact, evaluator)
        return rule

    @staticmethod
    def create_query(**facts) -> Query:
        """Create a query from keyword facts."""
        return Query(facts)

    @staticmethod
    def create_dialogue_rules() -> List[Rule]:
        """Create a small pool of authored dialogue rules."""
        return [
            TestDataFactory.create_rule("Hello there.", name="greeting"),
            TestDataFactory.create_rule(
                "You killed 5 enemies!",
                name="kills",
                enemies_killed=FloatEvaluator.eq(5)
            ),
            TestDataFactory.create_rule(
                "You killed 5 enemies and opened 2 doors!",
                name="kills_and_doors",
                enemies_killed=FloatEvaluator.eq(5),
                doors_opened=FloatEvaluator.gt(2)
            ),
            TestDataFactory.create_rule(
                "Careful, the guards are onto you.",
                name="alert",
                alert_level=FloatEvaluator.gte(3),
                area=ValueEvaluator.one_of("keep", "barracks")
            ),
        ]

    @staticmethod
    def create_dialogue_facts() -> Dict[str, Any]:
        """Create facts that satisfy the most specific dialogue rules."""
        return {
            "enemies_killed": 5,
            "doors_opened": 10,
            "alert_level": 4,
            "area": "keep",
        }


class CountingEvaluator:
    """Evaluator that records how often it was called."""

    def __init__(self, result: bool = True):
        self.result = result
        self.calls = 0

    def evaluate(self, value: Any) -> bool:
        self.calls += 1
        return self.result
