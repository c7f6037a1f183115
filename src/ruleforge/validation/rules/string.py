"""String rules: String, MinLength, MaxLength, Length and Matches."""

import logging
import re
from typing import Any

from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.rules.utils import argument, invalid_arguments, to_length
from ruleforge.validation.types import RuleContext

logger = logging.getLogger(__name__)


def _string(ctx: RuleContext) -> Any:
    return isinstance(ctx.value, str) or ctx.translate("validator.string")


def _min_length(ctx: RuleContext) -> Any:
    min_length = to_length(argument(ctx, 0))
    if min_length is None:
        return invalid_arguments(ctx)
    if isinstance(ctx.value, str) and len(ctx.value) >= min_length:
        return True
    return ctx.translate("validator.min_length", min_length=min_length)


def _max_length(ctx: RuleContext) -> Any:
    max_length = to_length(argument(ctx, 0))
    if max_length is None:
        return invalid_arguments(ctx)
    if isinstance(ctx.value, str) and len(ctx.value) <= max_length:
        return True
    return ctx.translate("validator.max_length", max_length=max_length)


def _length(ctx: RuleContext) -> Any:
    """Length: [n] for an exact length, [min, max] for a range."""
    first = to_length(argument(ctx, 0))
    if first is None:
        return invalid_arguments(ctx)

    if len(ctx.arguments) > 1:
        second = to_length(argument(ctx, 1))
        if second is None:
            return invalid_arguments(ctx)
        if isinstance(ctx.value, str) and first <= len(ctx.value) <= second:
            return True
        return ctx.translate(
            "validator.length_range", min_length=first, max_length=second
        )

    if isinstance(ctx.value, str) and len(ctx.value) == first:
        return True
    return ctx.translate("validator.length", length=first)


def _matches(ctx: RuleContext) -> Any:
    """Matches: [pattern] or [pattern, message]."""
    pattern = argument(ctx, 0)
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as e:
            logger.warning("Invalid pattern for Matches: %s", e)
            return invalid_arguments(ctx)
    if not isinstance(pattern, re.Pattern):
        return invalid_arguments(ctx)

    if isinstance(ctx.value, str) and pattern.search(ctx.value):
        return True
    message = argument(ctx, 1)
    if isinstance(message, str) and message.strip():
        return message
    return ctx.translate("validator.matches", pattern=pattern.pattern)


def register_string_rules() -> None:
    RuleRegistry.register("String", _string)
    RuleRegistry.register("MinLength", _min_length)
    RuleRegistry.register("MaxLength", _max_length)
    RuleRegistry.register("Length", _length)
    RuleRegistry.register("Matches", _matches)
