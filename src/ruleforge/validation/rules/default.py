"""Presence rules and skip markers.

The markers (Empty, Nullable, Optional) always pass: their effect comes
from should_skip_validation(), which lets an empty value bypass the rest of
the list before any rule runs.
"""

from typing import Any

from ruleforge.core.types import is_empty_value
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.types import RuleContext


def _marker(ctx: RuleContext) -> bool:
    return True


def _required(ctx: RuleContext) -> Any:
    return not is_empty_value(ctx.value) or ctx.translate("validator.required")


def register_default_rules() -> None:
    for name in ("Empty", "Nullable", "Optional"):
        RuleRegistry.register(name, _marker)
    RuleRegistry.register("Required", _required)
