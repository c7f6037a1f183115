"""Helpers shared by the built-in rules."""

from decimal import Decimal
from typing import Any

from ruleforge.core.types import is_nan
from ruleforge.validation.types import RuleContext


def is_number(value: Any) -> bool:
    """Return True for int, float and Decimal values. Booleans and NaN are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return not is_nan(value)


def to_number(value: Any) -> int | float | Decimal | None:
    """Coerce a rule argument to a number, or None if it is not numeric."""
    if is_number(value):
        return value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return None if is_nan(number) else number
    return None


def to_length(value: Any) -> int | None:
    """Coerce a rule argument to a non-negative integer length."""
    number = to_number(value)
    if number is None or number < 0 or int(number) != number:
        return None
    return int(number)


def argument(ctx: RuleContext, index: int, default: Any = None) -> Any:
    return ctx.arguments[index] if len(ctx.arguments) > index else default


def invalid_arguments(ctx: RuleContext) -> str:
    return ctx.translate(
        "validator.invalid_rule_params",
        arguments=", ".join(repr(a) for a in ctx.arguments),
    )
