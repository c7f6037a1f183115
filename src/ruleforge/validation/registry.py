"""Rule registry for ruleforge.

A process-wide mapping from rule name to predicate. Rule modules register
themselves at start-up (see register_builtin_rules); validation only reads
the registry afterwards. Registering while validations are running is not
supported.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from ruleforge.errors import InvalidRuleHandler, InvalidRuleName
from ruleforge.validation.types import Predicate

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Registry for named validation rules.

    Example:
        # Register a custom rule
        RuleRegistry.register("Even", lambda ctx: ctx.value % 2 == 0)

        # Later, resolve a name from a rule list
        predicate = RuleRegistry.get("Even")
    """

    _rules: dict[str, Predicate] = {}

    @classmethod
    def register(cls, name: str, predicate: Predicate) -> None:
        """Register a predicate under a rule name.

        Re-registering a name replaces the previous predicate.

        Args:
            name: Unique rule name (e.g., "Required", "MinLength")
            predicate: Callable taking a RuleContext and returning a verdict

        Raises:
            InvalidRuleName: If name is not a non-empty string
            InvalidRuleHandler: If predicate is not callable
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidRuleName("Rule name must be a non-empty string")
        if not callable(predicate):
            raise InvalidRuleHandler(f"Handler for rule '{name}' must be callable")
        if name in cls._rules and cls._rules[name] is not predicate:
            logger.warning("Rule '%s' is already registered, replacing it", name)
        cls._rules[name] = predicate

    @classmethod
    def get(cls, name: str) -> Predicate | None:
        """Get the predicate registered under a name, or None."""
        if not isinstance(name, str):
            return None
        return cls._rules.get(name)

    @classmethod
    def has(cls, name: object) -> bool:
        """Check if a rule is registered."""
        return isinstance(name, str) and name in cls._rules

    @classmethod
    def list(cls) -> Mapping[str, Predicate]:
        """Return a read-only snapshot of all registered rules."""
        return MappingProxyType(dict(cls._rules))

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered rule names."""
        return sorted(cls._rules.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._rules.clear()


def rule(name: str) -> Callable[[Predicate], Predicate]:
    """Decorator to register a rule predicate.

    Usage:
        @rule("Even")
        def even(ctx: RuleContext) -> bool | str:
            return ctx.value % 2 == 0 or ctx.translate("myapp.even")
    """

    def decorator(fn: Predicate) -> Predicate:
        RuleRegistry.register(name, fn)
        return fn

    return decorator
