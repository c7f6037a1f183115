"""Multi-field (target) validation.

validate_target() validates a record against a rule catalogue:

1. Copy the record; rules see a read-only view of the copy
2. Drop fields whose empty value is covered by a skip marker
3. Validate the remaining fields concurrently
4. Collect one FieldError per failing field, in declaration order
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from ruleforge.core.types import MISSING
from ruleforge.errors import CatalogueError
from ruleforge.i18n import Translator, localize, resolve_localizer
from ruleforge.validation.catalogue import (
    ErrorMessageBuilder,
    default_error_message_builder,
    resolve_catalogue,
)
from ruleforge.validation.executor import validate
from ruleforge.validation.normalizer import parse_rules, should_skip_validation
from ruleforge.validation.types import (
    FieldError,
    TargetFailure,
    TargetResult,
    TargetSuccess,
)

logger = logging.getLogger(__name__)


async def validate_target(
    catalogue: Any,
    data: Mapping[str, Any] | None,
    *,
    parent_data: Mapping[str, Any] | None = None,
    context: Any = None,
    localizer: Translator | None = None,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> TargetResult:
    """Validate every field of a record against a catalogue.

    Args:
        catalogue: A RuleCatalogue, a registered catalogue name, or a bare
            {field: [rules]} mapping
        data: The record to validate; None is treated as an empty record
        parent_data: Enclosing record when called from a nested rule
        context: Caller context handed to every rule
        localizer: Translator for messages; defaults to the shared localizer
        error_message_builder: Formats each field message from
            (label, rule message, details); overrides the catalogue's builder

    Returns:
        TargetSuccess or TargetFailure
    """
    start = time.perf_counter()
    localizer = resolve_localizer(localizer)
    record: dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}

    try:
        resolved = resolve_catalogue(catalogue)
        reason = "unknown catalogue"
    except CatalogueError as e:
        resolved = None
        reason = str(e)
    if resolved is None:
        message = localize(localizer, "validator.invalid_rule", rule=str(catalogue))
        logger.warning("Cannot validate target %r: %s", catalogue, reason)
        return _failure([
            FieldError(field_name="", translated_field_name="", message=message, rule_message=message)
        ], record, localizer, start)

    builder = (
        error_message_builder
        or resolved.error_message_builder
        or default_error_message_builder
    )
    view = MappingProxyType(record)

    fields: list[tuple[str, str, Any]] = []
    for field_name, rules in resolved.fields.items():
        value = record.get(field_name, MISSING)
        if should_skip_validation(value, parse_rules(rules).sanitized_rules):
            logger.debug("Skipping empty field '%s' of %s", field_name, resolved.name or "record")
            continue
        fields.append((field_name, resolved.label_for(field_name, localizer), value))

    results = await asyncio.gather(
        *[
            validate(
                value,
                resolved.fields[field_name],
                field_name=field_name,
                translated_field_name=label,
                data=view,
                parent_data=parent_data,
                context=context,
                localizer=localizer,
            )
            for field_name, label, value in fields
        ],
        return_exceptions=True,
    )

    errors: list[FieldError] = []
    for (field_name, label, value), result in zip(fields, results):
        if isinstance(result, Exception):
            logger.error("Validation of field '%s' raised: %s", field_name, result)
            rule_message = str(result) or type(result).__name__
            details: dict[str, Any] = {"field_name": field_name, "value": value}
            errors.append(FieldError(
                field_name=field_name,
                translated_field_name=label,
                message=builder(label, rule_message, details),
                rule_message=rule_message,
                value=value,
            ))
            continue
        if result.success:
            continue

        error = result.error
        details = {
            "field_name": field_name,
            "translated_field_name": label,
            "value": value,
            "rule_name": error.rule_name,
            "raw_rule_name": error.raw_rule_name,
            "arguments": error.arguments,
            "data": view,
            "context": context,
        }
        errors.append(FieldError(
            field_name=field_name,
            translated_field_name=label,
            message=builder(label, error.message, details),
            rule_message=error.message,
            value=value,
            rule_name=error.rule_name,
            raw_rule_name=error.raw_rule_name,
            arguments=error.arguments,
        ))

    if errors:
        return _failure(errors, record, localizer, start)

    return TargetSuccess(
        data=record,
        validated_at=datetime.now(timezone.utc),
        duration_ms=(time.perf_counter() - start) * 1000,
    )


def _failure(
    errors: list[FieldError],
    record: dict[str, Any],
    localizer: Translator,
    start: float,
) -> TargetFailure:
    message = localize(localizer, "validator.failed_for_n_fields", count=len(errors))
    logger.debug("%s: %s", message, ", ".join(e.field_name for e in errors))
    return TargetFailure(
        errors=errors,
        failure_count=len(errors),
        message=message,
        failed_at=datetime.now(timezone.utc),
        duration_ms=(time.perf_counter() - start) * 1000,
        data=record,
    )
