"""Numeric rules.

Comparison rules take the limit as their first argument:

    {"NumberGreaterThan": [0]}, {"NumberBetween": [1, 10]}

A value that is not a number fails with the "must be a number" message
before any comparison is made.
"""

import operator
from typing import Any, Callable

from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.utils import (
    argument,
    invalid_arguments,
    is_number,
    to_number,
)
from ruleforge.validation.types import Predicate, RuleContext


def _number(ctx: RuleContext) -> Any:
    return is_number(ctx.value) or ctx.translate("validator.number")


def _integer(ctx: RuleContext) -> Any:
    value = ctx.value
    if isinstance(value, float):
        if value.is_integer():
            return True
    elif is_number(value) and value == int(value):
        return True
    return ctx.translate("validator.integer")


def _comparison(key: str, compare: Callable[[Any, Any], bool]) -> Predicate:
    def rule(ctx: RuleContext) -> Any:
        limit = to_number(argument(ctx, 0))
        if limit is None:
            return invalid_arguments(ctx)
        if not is_number(ctx.value):
            return ctx.translate("validator.number")
        return compare(ctx.value, limit) or ctx.translate(key, limit=limit)

    return rule


def _number_between(ctx: RuleContext) -> Any:
    low = to_number(argument(ctx, 0))
    high = to_number(argument(ctx, 1))
    if low is None or high is None or low > high:
        return invalid_arguments(ctx)
    if not is_number(ctx.value):
        return ctx.translate("validator.number")
    if low <= ctx.value <= high:
        return True
    return ctx.translate("validator.number_between", min=low, max=high)


COMPARISON_RULES = {
    "NumberGreaterThan": ("validator.number_greater_than", operator.gt),
    "NumberGreaterThanOrEqual": ("validator.number_greater_than_or_equal", operator.ge),
    "NumberLessThan": ("validator.number_less_than", operator.lt),
    "NumberLessThanOrEqual": ("validator.number_less_than_or_equal", operator.le),
    "NumberEqual": ("validator.number_equal", operator.eq),
}

_comparison_rules = {
    name: _comparison(key, compare) for name, (key, compare) in COMPARISON_RULES.items()
}


def register_numeric_rules() -> None:
    RuleRegistry.register("Number", _number)
    RuleRegistry.register("Integer", _integer)
    for name, rule in _comparison_rules.items():
        RuleRegistry.register(name, rule)
    RuleRegistry.register("NumberBetween", _number_between)
