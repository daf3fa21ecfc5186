"""
Rules engine package.

Selects the outcome of the most specific rule whose conditions are all
satisfied by a query of named facts, breaking ties between equally specific
matches uniformly at random.

Modules of interest:
- evaluators: The Evaluator protocol and numeric/categorical predicate families.
- query: The fact query presented for one evaluation.
- rule: Conjunctive rules with an outcome payload.
- ruleset: Specificity-ranked selection and tie-break.
- models: Pydantic models for persisting rules and rulesets.

The engine evaluates in memory; persistence of authored rulesets goes
through the models module.
"""

from .evaluators import (
    Evaluator, FunctionEvaluator, FloatEvaluator, FloatOperator,
    ValueEvaluator, ValueOperator, as_evaluator
)
from .query import Query
from .rule import Rule
from .ruleset import Ruleset, get_random_source

__all__ = [
    "Evaluator",
    "FunctionEvaluator",
    "FloatEvaluator",
    "FloatOperator",
    "ValueEvaluator",
    "ValueOperator",
    "as_evaluator",
    "Query",
    "Rule",
    "Ruleset",
    "get_random_source",
]
