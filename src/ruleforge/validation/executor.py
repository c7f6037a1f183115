"""Single-value validation.

validate() runs a list of rule specifications against one value:

1. Normalize the rules; unresolvable rules fail the whole call
2. No rules: success
3. Empty value with a matching Empty / Nullable / Optional marker: success
4. Run the rules one after another, stopping at the first failure

validate() never raises. Errors raised by predicates are converted into
failure results.
"""

import inspect
import logging
import time
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ruleforge.core.types import MISSING
from ruleforge.i18n import Translator, get_separators, resolve_localizer
from ruleforge.validation.combinators import (
    evaluate_all_of,
    evaluate_array_of,
    evaluate_one_of,
)
from ruleforge.validation.nested import evaluate_nested
from ruleforge.validation.normalizer import parse_rules, should_skip_validation
from ruleforge.validation.types import (
    AllOf,
    ArrayOf,
    Nested,
    OneOf,
    RuleContext,
    RuleError,
    SanitizedRule,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
)

logger = logging.getLogger(__name__)


async def validate(
    value: Any = MISSING,
    rules: Iterable[Any] | None = None,
    *,
    field_name: str | None = None,
    translated_field_name: str | None = None,
    data: Mapping[str, Any] | None = None,
    parent_data: Mapping[str, Any] | None = None,
    context: Any = None,
    localizer: Translator | None = None,
) -> ValidationResult:
    """Validate a value against a list of rule specifications.

    Args:
        value: The value to validate; MISSING stands for an absent field
        rules: Rule specifications (names, {name: [arguments]}, callables,
            composite rules)
        field_name: Name of the field the value belongs to
        translated_field_name: Human-readable field label for messages
        data: The record the value belongs to, visible to cross-field rules
        parent_data: The enclosing record when validating a nested record
        context: Arbitrary caller context handed to every predicate
        localizer: Translator for messages; defaults to the shared localizer

    Returns:
        ValidationSuccess or ValidationFailure
    """
    start = time.perf_counter()
    localizer = resolve_localizer(localizer)
    label = translated_field_name or field_name
    base = RuleContext(
        value=value,
        field_name=field_name,
        translated_field_name=label,
        data=_read_only(data),
        parent_data=_read_only(parent_data),
        context=context,
        localizer=localizer,
    )

    parsed = parse_rules(rules)
    if parsed.invalid_rules:
        separators = get_separators(localizer)
        message = separators.multiple.join(
            base.translate(
                "validator.invalid_rule",
                rule=rule if isinstance(rule, str) and rule else repr(rule),
            )
            for rule in parsed.invalid_rules
        )
        return _failure(base, RuleError(
            message=message,
            field_name=field_name,
            translated_field_name=label,
        ), start)

    if not parsed.sanitized_rules:
        return _success(base, start)

    if should_skip_validation(value, parsed.sanitized_rules):
        return _success(base, start)

    for rule in parsed.sanitized_rules:
        ctx = RuleContext(
            value=value,
            arguments=rule.arguments,
            field_name=field_name,
            translated_field_name=label,
            data=base.data,
            parent_data=base.parent_data,
            context=context,
            localizer=localizer,
            rule_name=rule.name,
            raw_rule_name=rule.raw_name,
        )
        verdict = await run_rule(rule, ctx)
        if verdict is True:
            continue
        return _failure(base, RuleError(
            message=verdict_message(verdict, ctx),
            rule_name=rule.name,
            raw_rule_name=rule.raw_name,
            arguments=rule.arguments,
            field_name=field_name,
            translated_field_name=label,
        ), start)

    return _success(base, start)


async def run_rule(rule: SanitizedRule, ctx: RuleContext) -> Any:
    """Run one sanitized rule and return its verdict.

    Composite rules are dispatched to their evaluators. Exceptions raised by
    a predicate are returned as the verdict.
    """
    if isinstance(rule.raw, OneOf):
        return await evaluate_one_of(rule.raw.rules, ctx)
    if isinstance(rule.raw, AllOf):
        return await evaluate_all_of(rule.raw.rules, ctx)
    if isinstance(rule.raw, ArrayOf):
        return await evaluate_array_of(rule.raw.rules, ctx)
    if isinstance(rule.raw, Nested):
        return await evaluate_nested(rule.raw.catalogue, ctx)

    if rule.predicate is None:
        return ctx.translate("validator.invalid_rule")
    try:
        verdict = rule.predicate(ctx)
        if inspect.isawaitable(verdict):
            verdict = await verdict
    except Exception as e:
        logger.warning("Rule '%s' raised %s: %s", rule.name, type(e).__name__, e)
        return e
    return verdict


def verdict_message(verdict: Any, ctx: RuleContext) -> str:
    """Turn a failing verdict into a message.

    - False: generic "invalid" message
    - non-blank string: used as is
    - exception: its text, or its class name when the text is empty
    - anything else: generic "invalid" message
    """
    if isinstance(verdict, str) and verdict.strip():
        return verdict
    if isinstance(verdict, BaseException):
        return str(verdict).strip() or type(verdict).__name__
    return ctx.translate("validator.invalid_message")


def _read_only(data: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if data is None or isinstance(data, MappingProxyType):
        return data
    if isinstance(data, dict):
        return MappingProxyType(data)
    return data


def _success(base: RuleContext, start: float) -> ValidationSuccess:
    return ValidationSuccess(
        value=base.value,
        validated_at=datetime.now(timezone.utc),
        duration_ms=_elapsed_ms(start),
        field_name=base.field_name,
        data=base.data,
        context=base.context,
    )


def _failure(base: RuleContext, error: RuleError, start: float) -> ValidationFailure:
    logger.debug(
        "Validation of %s failed on rule '%s': %s",
        base.field_name or "value",
        error.rule_name,
        error.message,
    )
    return ValidationFailure(
        value=base.value,
        error=error,
        failed_at=datetime.now(timezone.utc),
        duration_ms=_elapsed_ms(start),
        field_name=base.field_name,
        data=base.data,
        context=base.context,
    )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
