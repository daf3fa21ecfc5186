"""
Priority-based fact matching engine.
"""

from .rules import (
    Evaluator, FunctionEvaluator, FloatEvaluator, ValueEvaluator,
    Query, Rule, Ruleset
)

__version__ = "1.0.0"

__all__ = [
    "Evaluator",
    "FunctionEvaluator",
    "FloatEvaluator",
    "ValueEvaluator",
    "Query",
    "Rule",
    "Ruleset",
]
