"""Built-in rules.

Call register_builtin_rules() once at start-up, before validating:

    from ruleforge.validation.rules import register_builtin_rules
    register_builtin_rules()

Registering again is harmless: every name maps to the same predicate.
"""

from ruleforge.validation.rules.array import register_array_rules
from ruleforge.validation.rules.default import register_default_rules
from ruleforge.validation.rules.format import register_format_rules
from ruleforge.validation.rules.misc import register_misc_rules
from ruleforge.validation.rules.numeric import register_numeric_rules
from ruleforge.validation.rules.string import register_string_rules


def register_builtin_rules() -> None:
    """Register all built-in rules with the RuleRegistry."""
    register_default_rules()
    register_string_rules()
    register_numeric_rules()
    register_array_rules()
    register_format_rules()
    register_misc_rules()


__all__ = ["register_builtin_rules"]
