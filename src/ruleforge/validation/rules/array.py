"""Array rules: Array, ArrayMinLength, ArrayMaxLength, ArrayLength, ArrayContains.

Lists and tuples are arrays; strings, sets and mappings are not.
"""

from typing import Any

from ruleforge.i18n import format_value
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.utils import argument, invalid_arguments, to_length
from ruleforge.validation.types import RuleContext


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _array(ctx: RuleContext) -> Any:
    return _is_array(ctx.value) or ctx.translate("validator.array")


def _array_min_length(ctx: RuleContext) -> Any:
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    min_length = to_length(argument(ctx, 0))
    if min_length is None:
        return invalid_arguments(ctx)
    if len(ctx.value) >= min_length:
        return True
    return ctx.translate("validator.array_min_length", min_length=min_length)


def _array_max_length(ctx: RuleContext) -> Any:
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    max_length = to_length(argument(ctx, 0))
    if max_length is None:
        return invalid_arguments(ctx)
    if len(ctx.value) <= max_length:
        return True
    return ctx.translate("validator.array_max_length", max_length=max_length)


def _array_length(ctx: RuleContext) -> Any:
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    length = to_length(argument(ctx, 0))
    if length is None:
        return invalid_arguments(ctx)
    if len(ctx.value) == length:
        return True
    return ctx.translate("validator.array_length", length=length)


def _array_contains(ctx: RuleContext) -> Any:
    """ArrayContains: every argument must be an item of the array."""
    if not ctx.arguments:
        return invalid_arguments(ctx)
    items = ctx.arguments
    if not _is_array(ctx.value):
        return ctx.translate("validator.array_contains", items=format_value(items))
    if all(item in ctx.value for item in items):
        return True
    return ctx.translate("validator.array_contains", items=format_value(items))


def register_array_rules() -> None:
    RuleRegistry.register("Array", _array)
    RuleRegistry.register("ArrayMinLength", _array_min_length)
    RuleRegistry.register("ArrayMaxLength", _array_max_length)
    RuleRegistry.register("ArrayLength", _array_length)
    RuleRegistry.register("ArrayContains", _array_contains)
