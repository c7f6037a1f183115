"""Rule normalization and skip evaluation.

parse_rules() turns the heterogeneous rule specifications a caller writes
into SanitizedRule records:

    ["Required", {"MinLength": [3]}, lambda ctx: ..., one_of("Email", "Url")]

should_skip_validation() decides whether an empty value bypasses its rules
because of an `Empty`, `Nullable` or `Optional` marker.
"""

import logging
from typing import Any, Iterable, Mapping

from ruleforge.core.types import MISSING, is_empty_value
from ruleforge.validation.registry import RuleRegistry
from ruleforge.validation.types import (
    COMPOSITE_RULES,
    CompositeRule,
    Nested,
    ParsedRules,
    SanitizedRule,
)

logger = logging.getLogger(__name__)


# Marker rule name -> condition under which an empty value skips validation
SKIP_CONDITIONS = {
    "Empty": lambda value: isinstance(value, str) and value == "",
    "Nullable": lambda value: value is None or value is MISSING,
    "Optional": lambda value: value is MISSING,
}


def parse_rules(rules: Iterable[Any] | None) -> ParsedRules:
    """Normalize rule specifications against the registry.

    Args:
        rules: Rule specifications. A single specification (name, mapping,
            callable or composite rule) is treated as a one-rule list; None
            yields no rules

    Returns:
        ParsedRules with the runnable rules in order and every string (or
        otherwise unusable) specification that could not be resolved
    """
    parsed = ParsedRules()

    for spec in _as_spec_list(rules):
        if isinstance(spec, CompositeRule):
            parsed.sanitized_rules.append(_composite_rule(spec))
        elif callable(spec):
            name = getattr(spec, "__name__", type(spec).__name__)
            parsed.sanitized_rules.append(
                SanitizedRule(name=name, predicate=spec, raw=spec, raw_name=name)
            )
        elif isinstance(spec, str):
            sanitized = parse_string_rule(spec)
            if sanitized is None:
                parsed.invalid_rules.append(spec)
            else:
                parsed.sanitized_rules.append(sanitized)
        elif isinstance(spec, Mapping):
            parsed.sanitized_rules.extend(parse_mapping_rule(spec))
        else:
            parsed.invalid_rules.append(spec)

    return parsed


def parse_string_rule(spec: str) -> SanitizedRule | None:
    """Resolve a rule name. No inline parameter syntax is parsed.

    Returns None if the name is neither registered nor a composite rule.
    """
    name = spec.strip()
    predicate = RuleRegistry.get(name)
    if predicate is not None:
        return SanitizedRule(name=name, predicate=predicate, raw=spec, raw_name=spec)
    if name in COMPOSITE_RULES:
        return _composite_rule(_build_composite(name, []))
    return None


def parse_mapping_rule(spec: Mapping[str, Any]) -> list[SanitizedRule]:
    """Resolve every {name: [arguments]} entry of a mapping.

    Entries whose name is unknown or whose arguments are not a list or
    tuple are skipped.
    """
    result: list[SanitizedRule] = []
    for name, arguments in spec.items():
        if not isinstance(arguments, (list, tuple)):
            logger.debug("Skipping rule '%s': arguments must be a list", name)
            continue
        if name in COMPOSITE_RULES:
            result.append(_composite_rule(_build_composite(name, arguments)))
            continue
        predicate = RuleRegistry.get(name)
        if predicate is None:
            logger.debug("Skipping unregistered rule '%s'", name)
            continue
        result.append(
            SanitizedRule(
                name=name,
                arguments=tuple(arguments),
                predicate=predicate,
                raw=spec,
                raw_name=name,
            )
        )
    return result


def should_skip_validation(value: Any, rules: Iterable[Any] | None) -> bool:
    """Check whether an empty value bypasses its rules.

    Only None, MISSING and "" are empty. The first marker rule whose
    condition holds for the value wins:
    - Empty: value is ""
    - Nullable: value is None or MISSING
    - Optional: value is MISSING

    Callable and composite rules are never markers.
    """
    if not is_empty_value(value):
        return False

    for rule in _as_spec_list(rules):
        for name in _marker_names(rule):
            condition = SKIP_CONDITIONS.get(name)
            if condition is not None and condition(value):
                return True
    return False


def _marker_names(rule: Any) -> list[str]:
    if isinstance(rule, SanitizedRule):
        if rule.is_composite or callable(rule.raw):
            return []
        return [rule.name]
    if isinstance(rule, str):
        return [rule.strip()]
    if isinstance(rule, Mapping):
        return [name for name in rule if isinstance(name, str)]
    return []


def _build_composite(name: str, arguments: list | tuple) -> CompositeRule:
    composite_cls = COMPOSITE_RULES[name]
    if composite_cls is Nested:
        return Nested(arguments[0] if arguments else None)
    return composite_cls(tuple(arguments))


def _composite_rule(spec: CompositeRule) -> SanitizedRule:
    if isinstance(spec, Nested):
        arguments: tuple = () if spec.catalogue is None else (spec.catalogue,)
    else:
        arguments = spec.rules
    return SanitizedRule(
        name=spec.rule_name,
        arguments=arguments,
        raw=spec,
        raw_name=spec.rule_name,
    )


def _as_spec_list(rules: Any) -> list[Any]:
    if rules is None:
        return []
    if isinstance(rules, (str, bytes, Mapping, CompositeRule, SanitizedRule)) or callable(rules):
        return [rules]
    try:
        return list(rules)
    except TypeError:
        # Reported by parse_rules as an invalid rule
        return [rules]
