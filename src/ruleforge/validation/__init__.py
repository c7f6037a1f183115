"""Rule-based validation.

Two entry points:
- validate(): run a rule list against a single value
- validate_target(): run a catalogue of per-field rule lists against a record

Usage:
    from ruleforge.validation import (
        register_builtin_rules,
        validate,
        validate_target,
        one_of,
    )

    # At application startup
    register_builtin_rules()

    result = await validate("a@b.co", ["Required", one_of("Email", "Url")])
"""

from ruleforge.validation.catalogue import (
    CatalogueRegistry,
    ErrorMessageBuilder,
    RuleCatalogue,
    default_error_message_builder,
    define_catalogue,
    get_nested_catalogue,
    has_nested_rule,
    resolve_catalogue,
)
from ruleforge.validation.combinators import all_of, array_of, one_of
from ruleforge.validation.executor import validate
from ruleforge.validation.nested import validate_nested
from ruleforge.validation.normalizer import parse_rules, should_skip_validation
from ruleforge.validation.registry import RuleRegistry, rule
from ruleforge.validation.rules import register_builtin_rules
from ruleforge.validation.target import validate_target
from ruleforge.validation.types import (
    AllOf,
    ArrayOf,
    CompositeRule,
    FieldError,
    Nested,
    OneOf,
    ParsedRules,
    Predicate,
    RuleContext,
    RuleError,
    RuleSpec,
    SanitizedRule,
    TargetFailure,
    TargetResult,
    TargetSuccess,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
    is_failure,
    is_success,
)

__all__ = [
    # Types
    "AllOf",
    "ArrayOf",
    "CompositeRule",
    "FieldError",
    "Nested",
    "OneOf",
    "ParsedRules",
    "Predicate",
    "RuleContext",
    "RuleError",
    "RuleSpec",
    "SanitizedRule",
    "TargetFailure",
    "TargetResult",
    "TargetSuccess",
    "ValidationFailure",
    "ValidationResult",
    "ValidationSuccess",
    "is_failure",
    "is_success",
    # Registry
    "RuleRegistry",
    "register_builtin_rules",
    "rule",
    # Normalization
    "parse_rules",
    "should_skip_validation",
    # Execution
    "validate",
    "validate_target",
    # Composite rules
    "all_of",
    "array_of",
    "one_of",
    "validate_nested",
    # Catalogues
    "CatalogueRegistry",
    "ErrorMessageBuilder",
    "RuleCatalogue",
    "default_error_message_builder",
    "define_catalogue",
    "get_nested_catalogue",
    "has_nested_rule",
    "resolve_catalogue",
]
