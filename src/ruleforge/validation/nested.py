"""Nested record validation.

A nested rule validates a mapping value against another catalogue and folds
the nested field errors into one message:

    "address contains invalid values: [street]: street is required; [zip]: ..."
"""

import logging
from typing import Any, Mapping

from ruleforge.core.types import MISSING
from ruleforge.errors import CatalogueError
from ruleforge.validation.catalogue import resolve_catalogue
from ruleforge.validation.types import Nested, RuleContext

logger = logging.getLogger(__name__)

# Joins "[field]: message" entries of a nested failure
NESTED_ERROR_SEPARATOR = "; "


def validate_nested(catalogue: Any) -> Nested:
    """Build a rule validating a mapping against a catalogue.

    Args:
        catalogue: A RuleCatalogue, a registered catalogue name, or a bare
            {field: [rules]} mapping
    """
    return Nested(catalogue)


async def evaluate_nested(catalogue_ref: Any, ctx: RuleContext) -> bool | str:
    """Validate ctx.value against the referenced catalogue.

    Returns True on success, otherwise a message. The outer record is passed
    down as parent_data.
    """
    from ruleforge.validation.target import validate_target

    try:
        catalogue = resolve_catalogue(catalogue_ref) if catalogue_ref is not None else None
    except CatalogueError as e:
        logger.warning("Invalid nested catalogue for %s: %s", ctx.field_name or "value", e)
        catalogue = None
    if catalogue is None:
        return ctx.translate("validator.invalid_rule", rule=Nested.rule_name)

    value = ctx.value
    if not isinstance(value, Mapping):
        return ctx.translate(
            "validator.validate_nested_invalid_type",
            received_type=received_type(value),
        )

    result = await validate_target(
        catalogue,
        value,
        parent_data=ctx.data,
        context=ctx.context,
        localizer=ctx.localizer,
    )
    if result.success:
        return True

    nested_errors = NESTED_ERROR_SEPARATOR.join(
        f"[{error.translated_field_name or error.field_name}]: {error.rule_message}"
        for error in result.errors
    )
    return ctx.translate("validator.validate_nested", nested_errors=nested_errors)


def received_type(value: Any) -> str:
    """Describe the kind of a non-mapping value for error messages."""
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
