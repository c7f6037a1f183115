"""Type rules that fit nowhere else: Boolean, Object and Enum."""

from typing import Any, Mapping

from ruleforge.i18n import format_value
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.utils import invalid_arguments
from ruleforge.validation.types import RuleContext


def _boolean(ctx: RuleContext) -> Any:
    return isinstance(ctx.value, bool) or ctx.translate("validator.boolean")


def _object(ctx: RuleContext) -> Any:
    return isinstance(ctx.value, Mapping) or ctx.translate("validator.object")


def _enum(ctx: RuleContext) -> Any:
    """Enum: the value must equal one of the arguments.

    A single list argument is taken as the allowed values:
    {"Enum": [["draft", "published"]]} and {"Enum": ["draft", "published"]}
    are equivalent.
    """
    allowed = ctx.arguments
    if len(allowed) == 1 and isinstance(allowed[0], (list, tuple, set, frozenset)):
        allowed = tuple(allowed[0])
    if not allowed:
        return invalid_arguments(ctx)
    if any(ctx.value == option and type(ctx.value) is type(option) for option in allowed):
        return True
    return ctx.translate("validator.enum", allowed=format_value(list(allowed)))


def register_misc_rules() -> None:
    RuleRegistry.register("Boolean", _boolean)
    RuleRegistry.register("Object", _object)
    RuleRegistry.register("Enum", _enum)
