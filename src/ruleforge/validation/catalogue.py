"""Rule catalogues: the field -> rules mapping of a record type.

A catalogue is declared once, next to the record type it describes, and
handed to validate_target() explicitly:

    ADDRESS = define_catalogue("Address", {
        "street": ["Required", {"MinLength": [3]}],
        "zip": ["Optional", {"Matches": [r"^\\d{5}$"]}],
    })

    USER = define_catalogue("User", {
        "name": ["Required"],
        "address": ["Required", validate_nested("Address")],
    })

Catalogues defined through define_catalogue() (or loaded from YAML) are kept
in the CatalogueRegistry so nested rules can refer to them by name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ruleforge.errors import CatalogueError, CatalogueNotFoundError
from ruleforge.validation.types import Nested

logger = logging.getLogger(__name__)

# (field label, rule message, details) -> formatted field message
ErrorMessageBuilder = Callable[[str, str, Mapping[str, Any]], str]

# Top-level keys of a {"name", "fields", "labels"} catalogue document
CATALOGUE_DOCUMENT_KEYS = frozenset({"name", "fields", "labels"})


def default_error_message_builder(
    label: str, message: str, details: Mapping[str, Any]
) -> str:
    return f"[{label}] : {message}"


@dataclass
class RuleCatalogue:
    """The ordered rule lists of every field of a record type.

    Attributes:
        name: Catalogue name, used for nested references and field labels
        fields: Field name -> rule specifications, in declaration order
        labels: Field name -> human-readable label
        error_message_builder: Default builder for this catalogue's field
            messages in validate_target()
    """

    name: str
    fields: dict[str, list[Any]]
    labels: dict[str, str] = field(default_factory=dict)
    error_message_builder: ErrorMessageBuilder | None = None

    def __post_init__(self) -> None:
        fields: dict[str, list[Any]] = {}
        for field_name, rules in self.fields.items():
            if not isinstance(field_name, str) or not field_name:
                raise CatalogueError(
                    f"Catalogue '{self.name}': field names must be non-empty strings"
                )
            fields[field_name] = _as_rule_list(self.name, field_name, rules)
        self.fields = fields

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "") -> RuleCatalogue:
        """Create a catalogue from a YAML/JSON dict.

        Accepts either a bare {field: [rules]} mapping or a document of the
        form {"name": ..., "fields": {...}, "labels": {...}}. A mapping is read
        as a document only when it has no other keys.
        """
        if (
            isinstance(data.get("fields"), Mapping)
            and set(data) <= CATALOGUE_DOCUMENT_KEYS
        ):
            return cls(
                name=str(data.get("name") or name),
                fields=dict(data["fields"]),
                labels=dict(data.get("labels") or {}),
            )
        return cls(name=name, fields=dict(data))

    def rules_for(self, field_name: str) -> list[Any]:
        return self.fields.get(field_name, [])

    def label_for(self, field_name: str, localizer: Any = None) -> str:
        """Resolve a field label: explicit label, then translation, then name."""
        if field_name in self.labels:
            return self.labels[field_name]
        translate_field = getattr(localizer, "translate_field", None)
        if self.name and translate_field is not None:
            translated = translate_field(self.name, field_name)
            if translated:
                return translated
        return field_name


class CatalogueRegistry:
    """Registry of named rule catalogues.

    Example:
        CatalogueRegistry.define(RuleCatalogue("Address", {...}))
        catalogue = CatalogueRegistry.get("Address")
    """

    _catalogues: dict[str, RuleCatalogue] = {}

    @classmethod
    def define(cls, catalogue: RuleCatalogue) -> RuleCatalogue:
        """Register a catalogue under its name, replacing any previous one."""
        if not catalogue.name:
            raise CatalogueError("Only named catalogues can be registered")
        cls._catalogues[catalogue.name] = catalogue
        logger.debug("Defined catalogue '%s' (%d fields)", catalogue.name, len(catalogue.fields))
        return catalogue

    @classmethod
    def get(cls, name: str) -> RuleCatalogue:
        """Get a catalogue by name.

        Raises:
            CatalogueNotFoundError: If no catalogue has that name
        """
        if name not in cls._catalogues:
            raise CatalogueNotFoundError(f"Catalogue '{name}' is not defined")
        return cls._catalogues[name]

    @classmethod
    def find(cls, name: str) -> RuleCatalogue | None:
        return cls._catalogues.get(name)

    @classmethod
    def has(cls, name: str) -> bool:
        return name in cls._catalogues

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._catalogues.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all catalogues. Primarily for testing."""
        cls._catalogues.clear()


def define_catalogue(
    name: str,
    fields: Mapping[str, Any],
    labels: Mapping[str, str] | None = None,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> RuleCatalogue:
    """Create a catalogue and register it in the CatalogueRegistry."""
    return CatalogueRegistry.define(
        RuleCatalogue(
            name=name,
            fields=dict(fields),
            labels=dict(labels or {}),
            error_message_builder=error_message_builder,
        )
    )


def resolve_catalogue(ref: Any) -> RuleCatalogue | None:
    """Resolve a catalogue reference: an instance, a registered name, or a
    bare {field: [rules]} mapping. Returns None for anything else."""
    if isinstance(ref, RuleCatalogue):
        return ref
    if isinstance(ref, str):
        return CatalogueRegistry.find(ref)
    if isinstance(ref, Mapping):
        return RuleCatalogue.from_dict(ref)
    return None


def has_nested_rule(catalogue: Any, field_name: str) -> bool:
    """Check whether a field of a catalogue carries a nested rule."""
    return get_nested_catalogue(catalogue, field_name) is not None


def get_nested_catalogue(catalogue: Any, field_name: str) -> Any:
    """Return the catalogue reference of a field's nested rule, or None."""
    resolved = resolve_catalogue(catalogue)
    if resolved is None:
        return None
    for spec in resolved.rules_for(field_name):
        if isinstance(spec, Nested) and spec.catalogue is not None:
            return spec.catalogue
        if isinstance(spec, Mapping):
            arguments = spec.get(Nested.rule_name)
            if isinstance(arguments, (list, tuple)) and arguments:
                return arguments[0]
    return None


def _as_rule_list(catalogue_name: str, field_name: str, rules: Any) -> list[Any]:
    if isinstance(rules, (list, tuple)):
        return list(rules)
    if rules is None:
        raise CatalogueError(
            f"Catalogue '{catalogue_name}': field '{field_name}' has no rules"
        )
    return [rules]
