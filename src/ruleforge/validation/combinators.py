"""Multi-rule combinators: one_of, all_of and array_of.

Each sub-rule is run through validate() on its own, so a sub-rule can be
anything validate() accepts: a name, a {name: [arguments]} mapping, a
callable, another composite rule, or a list of those (validated as a chain).

    rules = [
        "Required",
        one_of("Email", "PhoneNumber"),
        array_of(["String", {"MinLength": [2]}]),
    ]
"""

from dataclasses import replace
from typing import Any, Sequence

from ruleforge.i18n import get_separators
from ruleforge.validation.types import AllOf, ArrayOf, OneOf, RuleContext

# Joins the messages of failed sub-rules inside a combinator message
SUB_RULE_SEPARATOR = "; "


def one_of(*rules: Any) -> OneOf:
    """Build a rule that passes when at least one sub-rule passes."""
    return OneOf(rules)


def all_of(*rules: Any) -> AllOf:
    """Build a rule that passes when every sub-rule passes."""
    return AllOf(rules)


def array_of(*rules: Any) -> ArrayOf:
    """Build a rule that applies all_of(*rules) to every item of a list."""
    return ArrayOf(rules)


async def evaluate_one_of(sub_rules: Sequence[Any], ctx: RuleContext) -> bool | str:
    """Evaluate sub-rules in order until one passes.

    Returns True on the first success (or when there are no sub-rules),
    otherwise a message listing every sub-rule failure.
    """
    if not sub_rules:
        return True

    errors: list[str] = []
    for sub_rule in sub_rules:
        result = await _validate_sub_rule(sub_rule, ctx)
        if result.success:
            return True
        errors.append(result.error.message)

    return ctx.translate(
        "validator.one_of",
        failed_rules_errors=SUB_RULE_SEPARATOR.join(errors),
    )


async def evaluate_all_of(sub_rules: Sequence[Any], ctx: RuleContext) -> bool | str:
    """Evaluate every sub-rule in order.

    Returns True when all pass (or when there are no sub-rules), otherwise a
    message listing the failures of every failing sub-rule.
    """
    if not sub_rules:
        return True

    errors: list[str] = []
    for sub_rule in sub_rules:
        result = await _validate_sub_rule(sub_rule, ctx)
        if not result.success:
            errors.append(result.error.message)

    if not errors:
        return True
    return ctx.translate(
        "validator.all_of",
        failed_rules_errors=SUB_RULE_SEPARATOR.join(errors),
    )


async def evaluate_array_of(sub_rules: Sequence[Any], ctx: RuleContext) -> bool | str:
    """Apply all_of(sub_rules) to every item of a list or tuple value.

    Returns True when every item passes, when there are no sub-rules, or when
    the list is empty. Failures read "<header>: #0: ..., #2: ...".
    """
    value = ctx.value
    if not isinstance(value, (list, tuple)):
        return ctx.translate("validator.array")

    if not sub_rules or not value:
        return True

    failures: list[str] = []
    for index, item in enumerate(value):
        verdict = await evaluate_all_of(sub_rules, replace(ctx, value=item))
        if verdict is not True:
            failures.append(f"#{index}: {verdict}")

    if not failures:
        return True

    separators = get_separators(ctx.localizer)
    header = ctx.translate("validator.failed_for_n_items", count=len(failures))
    return f"{header}{separators.single}{separators.multiple.join(failures)}"


async def _validate_sub_rule(sub_rule: Any, ctx: RuleContext):
    from ruleforge.validation.executor import validate

    rules = list(sub_rule) if isinstance(sub_rule, (list, tuple)) else [sub_rule]
    return await validate(
        ctx.value,
        rules,
        field_name=ctx.field_name,
        translated_field_name=ctx.translated_field_name,
        data=ctx.data,
        parent_data=ctx.parent_data,
        context=ctx.context,
        localizer=ctx.localizer,
    )
