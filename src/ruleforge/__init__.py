"""ruleforge: a rule-based validation engine.

    from ruleforge import register_builtin_rules, validate, validate_target

    register_builtin_rules()
    result = await validate("", ["Empty", "Email"])
    assert result.success
"""

from ruleforge.config import EngineConfig
from ruleforge.core import MISSING, is_empty_value
from ruleforge.errors import (
    CatalogueError,
    CatalogueNotFoundError,
    InvalidRuleHandler,
    InvalidRuleName,
    RuleForgeError,
)
from ruleforge.i18n import Localizer, get_default_localizer, set_default_localizer
from ruleforge.validation import (
    CatalogueRegistry,
    RuleCatalogue,
    RuleContext,
    RuleRegistry,
    all_of,
    array_of,
    define_catalogue,
    one_of,
    register_builtin_rules,
    rule,
    validate,
    validate_nested,
    validate_target,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "CatalogueError",
    "CatalogueNotFoundError",
    "CatalogueRegistry",
    "EngineConfig",
    "InvalidRuleHandler",
    "InvalidRuleName",
    "Localizer",
    "RuleCatalogue",
    "RuleContext",
    "RuleForgeError",
    "RuleRegistry",
    "all_of",
    "array_of",
    "define_catalogue",
    "get_default_localizer",
    "is_empty_value",
    "one_of",
    "register_builtin_rules",
    "rule",
    "set_default_localizer",
    "validate",
    "validate_nested",
    "validate_target",
]
