"""
Evaluator capability and concrete predicate families.

An evaluator is anything with ``evaluate(value) -> bool``. The rule core only
depends on the ``Evaluator`` protocol; the families below cover the common
numeric and categorical comparisons.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from shared.config import get_config
from shared.errors import RuleDefinitionError


@runtime_checkable
class Evaluator(Protocol):
    """Pure predicate over a single fact value."""

    def evaluate(self, value: Any) -> bool:
        ...


@dataclass(frozen=True)
class FunctionEvaluator:
    """Adapt a plain callable to the Evaluator protocol."""
    func: Callable[[Any], bool]

    def evaluate(self, value: Any) -> bool:
        return bool(self.func(value))


class FloatOperator(str, Enum):
    """Numeric comparison operators."""
    EQUAL_TO = "equal_to"
    NOT_EQUAL_TO = "not_equal_to"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    IN_RANGE = "in_range"


@dataclass(frozen=True)
class FloatEvaluator:
    """Numeric predicate.

    ``value`` is the comparison operand, or the lower bound for ``in_range``
    where ``upper`` holds the upper bound. Equality uses a relative tolerance
    taken from configuration when ``tolerance`` is not given.
    """
    operator: FloatOperator
    value: float
    upper: Optional[float] = None
    include_lower: bool = True
    include_upper: bool = True
    tolerance: Optional[float] = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "operator", FloatOperator(self.operator))
        except ValueError as e:
            raise RuleDefinitionError(
                "Unknown float operator",
                {"operator": str(self.operator)}
            ) from e

        operands = {"value": self.value}
        if self.upper is not None:
            operands["upper"] = self.upper
        for name, operand in operands.items():
            # bool is a Real subclass but never a numeric operand
            if isinstance(operand, bool) or not isinstance(operand, Real):
                raise RuleDefinitionError(
                    "Float evaluator operands must be real numbers",
                    {name: repr(operand)}
                )

        if self.operator == FloatOperator.IN_RANGE:
            if self.upper is None:
                raise RuleDefinitionError(
                    "in_range evaluator requires an upper bound",
                    {"lower": self.value}
                )
            if self.upper < self.value:
                raise RuleDefinitionError(
                    "in_range upper bound is below lower bound",
                    {"lower": self.value, "upper": self.upper}
                )

    @classmethod
    def eq(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.EQUAL_TO, value)

    @classmethod
    def ne(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.NOT_EQUAL_TO, value)

    @classmethod
    def lt(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.LESS_THAN, value)

    @classmethod
    def lte(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.LESS_THAN_OR_EQUAL, value)

    @classmethod
    def gt(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.GREATER_THAN, value)

    @classmethod
    def gte(cls, value: float) -> "FloatEvaluator":
        return cls(FloatOperator.GREATER_THAN_OR_EQUAL, value)

    @classmethod
    def range(cls, lower: float, upper: float, include_lower: bool = True,
              include_upper: bool = True) -> "FloatEvaluator":
        return cls(FloatOperator.IN_RANGE, lower, upper, include_lower, include_upper)

    def _is_close(self, a: float, b: float) -> bool:
        tolerance = self.tolerance if self.tolerance is not None else get_config().float_tolerance
        return math.isclose(a, b, rel_tol=tolerance, abs_tol=tolerance)

    def evaluate(self, value: Any) -> bool:
        # bool is a Real subclass but never a numeric fact
        if isinstance(value, bool) or not isinstance(value, Real):
            return False

        if self.operator == FloatOperator.EQUAL_TO:
            return self._is_close(value, self.value)

        elif self.operator == FloatOperator.NOT_EQUAL_TO:
            return not self._is_close(value, self.value)

        elif self.operator == FloatOperator.LESS_THAN:
            return value < self.value

        elif self.operator == FloatOperator.LESS_THAN_OR_EQUAL:
            return value <= self.value

        elif self.operator == FloatOperator.GREATER_THAN:
            return value > self.value

        elif self.operator == FloatOperator.GREATER_THAN_OR_EQUAL:
            return value >= self.value

        elif self.operator == FloatOperator.IN_RANGE:
            above = value >= self.value if self.include_lower else value > self.value
            below = value <= self.upper if self.include_upper else value < self.upper
            return above and below

        return False


class ValueOperator(str, Enum):
    """Categorical comparison operators."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"


@dataclass(frozen=True)
class ValueEvaluator:
    """Categorical predicate over strings, enums or other hashable facts.

    For ``in``/``not_in`` the operand is a collection, stored as a frozenset.
    """
    operator: ValueOperator
    value: Any

    def __post_init__(self):
        try:
            object.__setattr__(self, "operator", ValueOperator(self.operator))
        except ValueError as e:
            raise RuleDefinitionError(
                "Unknown value operator",
                {"operator": str(self.operator)}
            ) from e

        if self.operator in (ValueOperator.IN, ValueOperator.NOT_IN):
            if isinstance(self.value, (str, bytes)):
                raise RuleDefinitionError(
                    f"{self.operator.value} evaluator requires a collection operand",
                    {"value": self.value}
                )
            try:
                object.__setattr__(self, "value", frozenset(self.value))
            except TypeError as e:
                raise RuleDefinitionError(
                    f"{self.operator.value} evaluator requires hashable members",
                    {"error": str(e)}
                ) from e

    @classmethod
    def equals(cls, value: Any) -> "ValueEvaluator":
        return cls(ValueOperator.EQUALS, value)

    @classmethod
    def not_equals(cls, value: Any) -> "ValueEvaluator":
        return cls(ValueOperator.NOT_EQUALS, value)

    @classmethod
    def one_of(cls, *values: Any) -> "ValueEvaluator":
        return cls(ValueOperator.IN, values)

    @classmethod
    def none_of(cls, *values: Any) -> "ValueEvaluator":
        return cls(ValueOperator.NOT_IN, values)

    @classmethod
    def contains(cls, value: Any) -> "ValueEvaluator":
        return cls(ValueOperator.CONTAINS, value)

    def evaluate(self, value: Any) -> bool:
        if self.operator == ValueOperator.EQUALS:
            return value == self.value

        elif self.operator == ValueOperator.NOT_EQUALS:
            return value != self.value

        elif self.operator == ValueOperator.IN:
            try:
                return value in self.value
            except TypeError:
                return False

        elif self.operator == ValueOperator.NOT_IN:
            try:
                return value not in self.value
            except TypeError:
                return True

        elif self.operator == ValueOperator.CONTAINS:
            try:
                return self.value in value
            except TypeError:
                return False

        return False


def as_evaluator(candidate: Any) -> Evaluator:
    """Return ``candidate`` as an Evaluator, wrapping plain callables."""
    if isinstance(candidate, Evaluator):
        return candidate
    if callable(candidate):
        return FunctionEvaluator(candidate)
    raise RuleDefinitionError(
        "Condition must be an evaluator or a callable",
        {"type": type(candidate).__name__}
    )
