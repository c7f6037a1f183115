"""Format rules: Email, Url, UUID and PhoneNumber."""

import re
from typing import Any

from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.types import Predicate, RuleContext


# =============================================================================
# Format Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

# International formats: +33 6 12 34 56 78, (555) 123-4567, 555.123.4567
PHONE_PATTERN = re.compile(
    r"^[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}$"
)

URL_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE
)


def _format_rule(pattern: re.Pattern, key: str) -> Predicate:
    def rule(ctx: RuleContext) -> Any:
        if isinstance(ctx.value, str) and pattern.match(ctx.value):
            return True
        return ctx.translate(key)

    return rule


FORMAT_RULES = {
    "Email": _format_rule(EMAIL_PATTERN, "validator.email"),
    "Url": _format_rule(URL_PATTERN, "validator.url"),
    "UUID": _format_rule(UUID_PATTERN, "validator.uuid"),
    "PhoneNumber": _format_rule(PHONE_PATTERN, "validator.phone_number"),
}


def register_format_rules() -> None:
    for name, rule in FORMAT_RULES.items():
        RuleRegistry.register(name, rule)
