"""
Serialization models for queries, rules and rulesets.

Field-for-field pydantic mappings of the domain objects, used to persist
authored rulesets as JSON. Fact names must be strings here, and only the
built-in evaluator families can be serialized.
"""

import random
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from shared.errors import MatchingException, SerializationError
from shared.metrics import MetricsCollector
from .evaluators import (
    Evaluator, FloatEvaluator, FloatOperator, ValueEvaluator, ValueOperator
)
from .query import Query
from .rule import Rule
from .ruleset import Ruleset


class EvaluatorModel(BaseModel):
    """Serialized evaluator."""
    type: Literal["float", "value"] = Field(..., description="Evaluator family")
    operator: str = Field(..., description="Operator name within the family")
    value: Any = Field(None, description="Operand, or lower bound for in_range")
    upper: Optional[float] = Field(None, description="Upper bound for in_range")
    include_lower: bool = Field(True, description="Whether the lower bound is inclusive")
    include_upper: bool = Field(True, description="Whether the upper bound is inclusive")
    tolerance: Optional[float] = Field(None, description="Relative tolerance for equality")


class QueryModel(BaseModel):
    """Serialized query."""
    facts: Dict[str, Any] = Field(default_factory=dict, description="Fact values by name")


class RuleModel(BaseModel):
    """Serialized rule."""
    name: Optional[str] = Field(None, description="Rule name")
    outcome: Any = Field(..., description="Outcome payload")
    conditions: Dict[str, EvaluatorModel] = Field(default_factory=dict, description="Conditions by fact name")


class RulesetModel(BaseModel):
    """Serialized ruleset."""
    rules: List[RuleModel] = Field(default_factory=list)


def _check_fact_names(names, kind: str) -> None:
    for name in names:
        if not isinstance(name, str):
            raise SerializationError(
                f"{kind} fact names must be strings to serialize",
                {"fact": repr(name)}
            )


def _contains_list(value: Any) -> bool:
    if isinstance(value, list):
        return True
    if isinstance(value, tuple):
        return any(_contains_list(item) for item in value)
    if isinstance(value, dict):
        return any(_contains_list(item) for item in value.values())
    return False


def _to_tuples(value: Any) -> Any:
    """Turn JSON arrays back into tuples, recursively."""
    if isinstance(value, (list, tuple)):
        return tuple(_to_tuples(item) for item in value)
    if isinstance(value, dict):
        return {key: _to_tuples(item) for key, item in value.items()}
    return value


def dump_evaluator(evaluator: Evaluator) -> EvaluatorModel:
    if isinstance(evaluator, FloatEvaluator):
        return EvaluatorModel(
            type="float",
            operator=evaluator.operator.value,
            value=evaluator.value,
            upper=evaluator.upper,
            include_lower=evaluator.include_lower,
            include_upper=evaluator.include_upper,
            tolerance=evaluator.tolerance
        )

    if isinstance(evaluator, ValueEvaluator):
        value = evaluator.value
        if isinstance(value, frozenset):
            value = sorted(value, key=repr)
        elif _contains_list(value):
            # JSON arrays load back as tuples, so list operands cannot round-trip
            raise SerializationError(
                "Value evaluator operands cannot contain lists; use tuples",
                {"operator": evaluator.operator.value, "value": repr(value)}
            )
        return EvaluatorModel(type="value", operator=evaluator.operator.value, value=value)

    raise SerializationError(
        "Evaluator type cannot be serialized",
        {"type": type(evaluator).__name__}
    )


def load_evaluator(model: EvaluatorModel) -> Evaluator:
    try:
        if model.type == "float":
            return FloatEvaluator(
                FloatOperator(model.operator),
                float(model.value),
                model.upper,
                model.include_lower,
                model.include_upper,
                model.tolerance
            )
        operator = ValueOperator(model.operator)
        if operator in (ValueOperator.IN, ValueOperator.NOT_IN) and isinstance(model.value, list):
            return ValueEvaluator(operator, [_to_tuples(member) for member in model.value])
        return ValueEvaluator(operator, _to_tuples(model.value))
    except MatchingException as e:
        raise SerializationError(e.message, e.details) from e
    except (TypeError, ValueError) as e:
        raise SerializationError(
            "Invalid evaluator definition",
            {"type": model.type, "operator": model.operator, "error": str(e)}
        ) from e


def dump_query(query: Query) -> QueryModel:
    _check_fact_names(query.facts, "Query")
    return QueryModel(facts=dict(query.facts))


def load_query(model: QueryModel) -> Query:
    return Query(model.facts)


def dump_rule(rule: Rule) -> RuleModel:
    _check_fact_names(rule.evaluators, "Rule")
    return RuleModel(
        name=rule.name,
        outcome=rule.outcome,
        conditions={
            fact: dump_evaluator(evaluator)
            for fact, evaluator in rule.evaluators.items()
        }
    )


def load_rule(model: RuleModel) -> Rule:
    rule = Rule(model.outcome, name=model.name)
    for fact, evaluator in model.conditions.items():
        rule.insert(fact, load_evaluator(evaluator))
    return rule


def dump_ruleset(ruleset: Ruleset) -> RulesetModel:
    return RulesetModel(rules=[dump_rule(rule) for rule in ruleset.rules])


def load_ruleset(model: RulesetModel, rng: Optional[random.Random] = None,
                 metrics: Optional[MetricsCollector] = None) -> Ruleset:
    return Ruleset([load_rule(rule) for rule in model.rules], rng=rng, metrics=metrics)


def ruleset_to_json(ruleset: Ruleset, indent: Optional[int] = None) -> str:
    return dump_ruleset(ruleset).model_dump_json(indent=indent)


def ruleset_from_json(data: str, rng: Optional[random.Random] = None,
                      metrics: Optional[MetricsCollector] = None) -> Ruleset:
    """Load a ruleset from JSON."""
    try:
        model = RulesetModel.model_validate_json(data)
    except PydanticValidationError as e:
        raise SerializationError(
            "Malformed ruleset document",
            {"errors": e.errors(include_url=False)}
        ) from e
    return load_ruleset(model, rng=rng, metrics=metrics)
