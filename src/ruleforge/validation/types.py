"""Core types for the ruleforge validation engine.

This module defines the shapes that flow through the engine:
- Rule specifications (callables, names, {name: [arguments]} mappings and
  the composite variants OneOf / AllOf / ArrayOf / Nested)
- SanitizedRule, the normalized form the executor runs
- RuleContext, passed to every predicate
- Validation results for single values and for whole records
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, ClassVar, Mapping, Sequence, Union

from ruleforge.core.types import MISSING
from ruleforge.i18n import localize


# =============================================================================
# Rule Specifications
# =============================================================================


@dataclass(frozen=True)
class CompositeRule:
    """Base class for rules built from other rules or from a catalogue.

    The executor dispatches on the concrete subclass instead of calling a
    predicate directly.
    """

    rule_name: ClassVar[str] = ""


@dataclass(frozen=True)
class _MultiRule(CompositeRule):
    rules: tuple = ()

    def __post_init__(self) -> None:
        if not isinstance(self.rules, tuple):
            rules = self.rules if isinstance(self.rules, (list, set)) else [self.rules]
            object.__setattr__(self, "rules", tuple(rules))


@dataclass(frozen=True)
class OneOf(_MultiRule):
    """Passes when at least one sub-rule passes (logical OR)."""

    rule_name: ClassVar[str] = "OneOf"


@dataclass(frozen=True)
class AllOf(_MultiRule):
    """Passes when every sub-rule passes (logical AND)."""

    rule_name: ClassVar[str] = "AllOf"


@dataclass(frozen=True)
class ArrayOf(_MultiRule):
    """Passes when the value is a list and every item passes all sub-rules."""

    rule_name: ClassVar[str] = "ArrayOf"


@dataclass(frozen=True)
class Nested(CompositeRule):
    """Validates a mapping value against another rule catalogue.

    Attributes:
        catalogue: A RuleCatalogue, a {field: [rules]} mapping, or the name of
            a catalogue defined in the CatalogueRegistry
    """

    catalogue: Any = None
    rule_name: ClassVar[str] = "ValidateNested"


# Composite rules addressable from the {name: [arguments]} form
COMPOSITE_RULES: dict[str, type[CompositeRule]] = {
    "OneOf": OneOf,
    "AllOf": AllOf,
    "ArrayOf": ArrayOf,
    "ValidateNested": Nested,
}

Predicate = Callable[["RuleContext"], Union[Any, Awaitable[Any]]]

RuleSpec = Union[Predicate, str, Mapping[str, Sequence[Any]], CompositeRule]


@dataclass(frozen=True)
class SanitizedRule:
    """A rule specification resolved against the registry.

    Attributes:
        name: Rule name (registry key, function name or composite name)
        arguments: Arguments passed to the predicate
        predicate: The callable to run; None for composite rules
        raw: The rule spec this rule was built from
        raw_name: The name exactly as the caller wrote it
    """

    name: str
    arguments: tuple = ()
    predicate: Predicate | None = None
    raw: Any = None
    raw_name: str = ""

    @property
    def is_composite(self) -> bool:
        return isinstance(self.raw, CompositeRule)


@dataclass
class ParsedRules:
    """Output of the normalizer: runnable rules plus unresolvable ones."""

    sanitized_rules: list[SanitizedRule] = field(default_factory=list)
    invalid_rules: list[Any] = field(default_factory=list)


# =============================================================================
# Rule Context
# =============================================================================


@dataclass(frozen=True)
class RuleContext:
    """Everything a predicate can see about the value under validation.

    Attributes:
        value: The value being validated (MISSING when the field is absent)
        arguments: Arguments given to the rule, e.g. (3,) for {"MinLength": [3]}
        field_name: Name of the field in the record, if any
        translated_field_name: Human-readable label of the field
        data: Read-only view of the record the field belongs to
        parent_data: Read-only view of the enclosing record for nested rules
        context: Caller-supplied validation context, passed through untouched
        localizer: Translator for building messages
        rule_name: Name of the rule being run
        raw_rule_name: Rule name as written by the caller
    """

    value: Any = MISSING
    arguments: tuple = ()
    field_name: str | None = None
    translated_field_name: str | None = None
    data: Mapping[str, Any] | None = None
    parent_data: Mapping[str, Any] | None = None
    context: Any = None
    localizer: Any = None
    rule_name: str = ""
    raw_rule_name: str = ""

    @property
    def label(self) -> str:
        """Label used for the field in messages."""
        return (
            self.translated_field_name
            or self.field_name
            or localize(self.localizer, "validator.default_field")
        )

    def translate(self, key: str, **params: Any) -> str:
        """Translate a message key with field, value and rule pre-filled."""
        defaults = {
            "field": self.label,
            "field_name": self.field_name,
            "value": self.value,
            "rule": self.rule_name,
            "arguments": self.arguments,
        }
        defaults.update(params)
        return localize(self.localizer, key, **defaults)


# =============================================================================
# Validation Results
# =============================================================================


@dataclass(frozen=True)
class RuleError:
    """The failure details of a single-value validation.

    Attributes:
        message: Human-readable failure message
        rule_name: Name of the failing rule (None for invalid-rule failures)
        raw_rule_name: Rule name as written by the caller
        arguments: Arguments of the failing rule
        field_name: Field the value belongs to
        translated_field_name: Label of that field
    """

    message: str
    rule_name: str | None = None
    raw_rule_name: str | None = None
    arguments: tuple = ()
    field_name: str | None = None
    translated_field_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "ruleName": self.rule_name,
            "rawRuleName": self.raw_rule_name,
            "arguments": list(self.arguments),
            "fieldName": self.field_name,
            "translatedFieldName": self.translated_field_name,
        }


@dataclass
class ValidationSuccess:
    """A value satisfied every applicable rule."""

    value: Any
    validated_at: datetime
    duration_ms: float
    field_name: str | None = None
    data: Mapping[str, Any] | None = None
    context: Any = None

    success = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "value": None if self.value is MISSING else self.value,
            "fieldName": self.field_name,
            "validatedAt": self.validated_at.isoformat(),
            "durationMs": self.duration_ms,
        }


@dataclass
class ValidationFailure:
    """A value failed a rule, or its rules could not be resolved."""

    value: Any
    error: RuleError
    failed_at: datetime
    duration_ms: float
    field_name: str | None = None
    data: Mapping[str, Any] | None = None
    context: Any = None

    success = False

    @property
    def message(self) -> str:
        return self.error.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "value": None if self.value is MISSING else self.value,
            "fieldName": self.field_name,
            "error": self.error.to_dict(),
            "failedAt": self.failed_at.isoformat(),
            "durationMs": self.duration_ms,
        }


ValidationResult = Union[ValidationSuccess, ValidationFailure]


@dataclass(frozen=True)
class FieldError:
    """One failing field of a record.

    Attributes:
        field_name: Field key in the record
        translated_field_name: Field label used in messages
        message: Message built by the error message builder
        rule_message: The failing rule's own message, before formatting
        value: The field's value
        rule_name: Name of the failing rule
        raw_rule_name: Rule name as written in the catalogue
        arguments: Arguments of the failing rule
    """

    field_name: str
    translated_field_name: str
    message: str
    rule_message: str
    value: Any = None
    rule_name: str | None = None
    raw_rule_name: str | None = None
    arguments: tuple = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "translatedFieldName": self.translated_field_name,
            "message": self.message,
            "ruleName": self.rule_name,
            "rawRuleName": self.raw_rule_name,
            "arguments": list(self.arguments),
        }


@dataclass
class TargetSuccess:
    """Every validated field of a record passed."""

    data: dict[str, Any]
    validated_at: datetime
    duration_ms: float

    success = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "data": self.data,
            "validatedAt": self.validated_at.isoformat(),
            "durationMs": self.duration_ms,
        }


@dataclass
class TargetFailure:
    """At least one field of a record failed.

    Attributes:
        errors: One entry per failing field, in catalogue declaration order
        failure_count: Number of failing fields
        message: Localized summary ("Validation failed for N fields")
        failed_at: When the run finished
        duration_ms: Duration of the whole run
        data: The record that was validated
    """

    errors: list[FieldError]
    failure_count: int
    message: str
    failed_at: datetime
    duration_ms: float
    data: dict[str, Any] = field(default_factory=dict)

    success = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "failureCount": self.failure_count,
            "errors": [e.to_dict() for e in self.errors],
            "failedAt": self.failed_at.isoformat(),
            "durationMs": self.duration_ms,
        }


TargetResult = Union[TargetSuccess, TargetFailure]


def is_success(result: Any) -> bool:
    """Check whether a validation result is a success."""
    return getattr(result, "success", None) is True


def is_failure(result: Any) -> bool:
    """Check whether a validation result is a failure."""
    return getattr(result, "success", None) is False
