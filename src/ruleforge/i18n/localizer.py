"""YAML-backed message localization.

Message catalogues live in `messages/<locale>.yaml` next to this module and
may be extended or overridden by a directory of the same layout. Keys are
dotted paths into the nested YAML document (`validator.required`).

Templates use `{name}` placeholders:

    validator:
      min_length: "{field} must be at least {min_length} characters long"

A message given as a mapping with `one` / `other` entries is pluralized with
the `count` parameter.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

import yaml

from ruleforge.core.types import MISSING

logger = logging.getLogger(__name__)

_BUNDLED_DIR = Path(__file__).parent / "messages"

# Pattern: {name}
PLACEHOLDER = re.compile(r"\{(?P<name>\w+)\}")


@dataclass(frozen=True)
class Separators:
    """Separators used to join aggregated error messages.

    Attributes:
        multiple: Joins several messages of the same kind
        single: Joins a header to the message list that follows it
    """

    multiple: str = ", "
    single: str = ", "


class Localizer:
    """Translate message keys into human-readable strings.

    Example:
        localizer = Localizer(locale="fr")
        localizer.translate("validator.required", field="Nom")
        # "Nom est obligatoire"
    """

    def __init__(
        self,
        locale: str = "en",
        fallback_locale: str = "en",
        messages_dir: Path | str | None = None,
    ):
        self.locale = locale
        self.fallback_locale = fallback_locale
        self.messages_dir = Path(messages_dir) if messages_dir else None
        self._catalogues: dict[str, dict[str, Any]] = {}

    def translate(self, key: str, **params: Any) -> str:
        """Translate a message key, interpolating params.

        Returns the key itself when no catalogue defines it.
        """
        message = self.lookup(key)
        if isinstance(message, Mapping):
            message = self._pluralize(message, params.get("count"))
        if message is None:
            logger.debug("No translation for '%s' in locale '%s'", key, self.locale)
            return key
        return self.interpolate(str(message), params)

    def has(self, key: str) -> bool:
        """Check whether any loaded catalogue defines the key."""
        return self.lookup(key) is not None

    def lookup(self, key: str) -> Any:
        """Return the raw catalogue entry for a key, or None."""
        for locale in dict.fromkeys((self.locale, self.fallback_locale)):
            node: Any = self._catalogue(locale)
            for part in key.split("."):
                if not isinstance(node, Mapping) or part not in node:
                    node = None
                    break
                node = node[part]
            if node is not None:
                return node
        return None

    @property
    def separators(self) -> Separators:
        """Separators for aggregated messages, defaulting to ", "."""
        entry = self.lookup("validator.separators")
        if not isinstance(entry, Mapping):
            return Separators()
        return Separators(
            multiple=entry.get("multiple") or ", ",
            single=entry.get("single") or ", ",
        )

    def translate_field(self, catalogue_name: str, field_name: str) -> str | None:
        """Return the translated label of a catalogue field, if defined."""
        label = self.lookup(f"fields.{catalogue_name}.{field_name}")
        return str(label) if isinstance(label, (str, int, float)) else None

    @staticmethod
    def interpolate(template: str, params: Mapping[str, Any]) -> str:
        """Replace `{name}` placeholders with formatted param values.

        Placeholders without a matching param are replaced by "".
        """

        def replace(match: re.Match) -> str:
            return format_value(params.get(match.group("name")))

        return PLACEHOLDER.sub(replace, template)

    def _pluralize(self, forms: Mapping[str, Any], count: Any) -> str | None:
        if count == 1 and "one" in forms:
            return forms["one"]
        return forms.get("other", forms.get("one"))

    def _catalogue(self, locale: str) -> dict[str, Any]:
        if locale not in self._catalogues:
            self._catalogues[locale] = self._load(locale)
        return self._catalogues[locale]

    def _load(self, locale: str) -> dict[str, Any]:
        messages: dict[str, Any] = {}
        for directory in (_BUNDLED_DIR, self.messages_dir):
            if directory is None:
                continue
            path = directory / f"{locale}.yaml"
            if not path.is_file():
                continue
            with path.open(encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh) or {}
            logger.debug("Loaded messages for '%s' from %s", locale, path)
            _deep_merge(messages, loaded)
        return messages


def format_value(value: Any) -> str:
    """Format a value for display inside a message."""
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(format_value(v) for v in value)
    return str(value)


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _deep_merge(target[key], value)
        else:
            target[key] = value
