"""Localization for engine and rule messages.

Any object with a `translate(key, **params) -> str` method (and optionally a
`separators` attribute) can be passed to the engine as a localizer. When none
is given, the shared default built from EngineConfig.from_env() is used.
"""

import logging
from typing import Any, Protocol

from ruleforge.config import EngineConfig, create_localizer
from ruleforge.i18n.localizer import Localizer, Separators, format_value

logger = logging.getLogger(__name__)


class Translator(Protocol):
    """The localizer boundary consumed by the engine."""

    def translate(self, key: str, **params: Any) -> str:
        ...


# English templates used only when the localizer has no entry for a key.
FALLBACK_MESSAGES: dict[str, str] = {
    "validator.default_field": "This field",
    "validator.invalid_rule": 'Invalid validation rule "{rule}"',
    "validator.invalid_message": "{field} is invalid",
    "validator.one_of": "{field} must satisfy at least one of the following rules: {failed_rules_errors}",
    "validator.all_of": "{field} must satisfy all of the following rules: {failed_rules_errors}",
    "validator.array": "{field} must be an array",
    "validator.failed_for_n_items": "Validation failed for {count} items",
    "validator.failed_for_n_fields": "Validation failed for {count} fields",
    "validator.validate_nested": "{field} contains invalid values: {nested_errors}",
    "validator.validate_nested_invalid_type": "{field} must be an object, but received {received_type}",
}

_default_localizer: Localizer | None = None


def get_default_localizer() -> Localizer:
    """Return the shared localizer, creating it from the environment once."""
    global _default_localizer
    if _default_localizer is None:
        _default_localizer = create_localizer(EngineConfig.from_env())
    return _default_localizer


def set_default_localizer(localizer: Localizer | None) -> None:
    """Replace the shared localizer. Pass None to rebuild from the environment."""
    global _default_localizer
    _default_localizer = localizer


def resolve_localizer(localizer: Translator | None) -> Translator:
    return localizer if localizer is not None else get_default_localizer()


def localize(localizer: Translator | None, key: str, **params: Any) -> str:
    """Translate a key, falling back to the built-in English template.

    Errors raised by the translator are logged and treated as a missing
    translation.
    """
    translator = resolve_localizer(localizer)
    try:
        message = translator.translate(key, **params)
    except Exception as e:
        logger.warning("Translator failed for '%s': %s: %s", key, type(e).__name__, e)
        message = None
    if not message or message == key:
        template = FALLBACK_MESSAGES.get(key)
        if template is not None:
            return Localizer.interpolate(template, params)
    return message or key


def get_separators(localizer: Translator | None) -> Separators:
    """Read the localizer's separators, defaulting each to ", "."""
    separators = getattr(resolve_localizer(localizer), "separators", None)
    if separators is None:
        return Separators()
    return Separators(
        multiple=getattr(separators, "multiple", None) or ", ",
        single=getattr(separators, "single", None) or ", ",
    )


__all__ = [
    "FALLBACK_MESSAGES",
    "Localizer",
    "Separators",
    "Translator",
    "format_value",
    "get_default_localizer",
    "get_separators",
    "localize",
    "resolve_localizer",
    "set_default_localizer",
]
