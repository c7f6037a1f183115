"""Load rule catalogues from YAML files.

A catalogue file looks like:

    catalogue: Address
    labels:
      street: Street
    fields:
      street:
        - Required
        - MinLength: [3]
      zip:
        - Optional
        - Matches: ["^\\d{5}$"]

Composite rules use their mapping form (`OneOf: [Email, Url]`,
`ValidateNested: [Address]`).
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ruleforge.errors import CatalogueError
from ruleforge.metadata.validator import validate_catalogue_document
from ruleforge.validation.catalogue import CatalogueRegistry, RuleCatalogue

logger = logging.getLogger(__name__)


def load_catalogue_file(
    yaml_path: Path,
    *,
    register: bool = True,
    check_schema: bool = True,
) -> RuleCatalogue:
    """Load one catalogue file.

    Args:
        yaml_path: Path to the YAML file
        register: Define the catalogue in the CatalogueRegistry
        check_schema: Validate the document against the catalogue schema first

    Raises:
        CatalogueError: If the file cannot be parsed or is not a valid catalogue
    """
    try:
        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogueError(f"Cannot read catalogue file {yaml_path}: {e}") from e

    if not isinstance(data, dict) or "catalogue" not in data:
        raise CatalogueError(f"{yaml_path} is not a catalogue file (missing 'catalogue' key)")

    if check_schema:
        issues = validate_catalogue_document(data, Path(yaml_path))
        errors = [issue for issue in issues if issue.severity == "error"]
        if errors:
            raise CatalogueError("\n".join(str(issue) for issue in errors))
        for issue in issues:
            logger.warning("%s", issue)

    catalogue = _resolve_catalogue(data)
    logger.debug("Loaded catalogue %s from %s", catalogue.name, yaml_path)
    if register:
        CatalogueRegistry.define(catalogue)
    return catalogue


class CatalogueLoader:
    """Loads rule catalogues from a directory of YAML files."""

    def __init__(self, catalogue_path: Path, *, check_schema: bool = True):
        self.catalogue_path = Path(catalogue_path)
        self.check_schema = check_schema
        self.catalogues: dict[str, RuleCatalogue] = {}

    def load_all(self, register: bool = True) -> None:
        """Load every *.yaml file of the directory."""
        if not self.catalogue_path.exists():
            logger.debug("Catalogue directory %s does not exist", self.catalogue_path)
            return

        for yaml_file in sorted(self.catalogue_path.glob("*.yaml")):
            catalogue = load_catalogue_file(
                yaml_file, register=False, check_schema=self.check_schema
            )
            if catalogue.name in self.catalogues:
                raise CatalogueError(
                    f"Duplicate catalogue '{catalogue.name}' in {yaml_file}"
                )
            self.catalogues[catalogue.name] = catalogue

        if register:
            for catalogue in self.catalogues.values():
                CatalogueRegistry.define(catalogue)

    def get_catalogue(self, name: str) -> RuleCatalogue | None:
        """Get a loaded catalogue by name."""
        return self.catalogues.get(name)

    def list_catalogues(self) -> list[str]:
        """List all loaded catalogue names."""
        return list(self.catalogues.keys())


def _resolve_catalogue(data: dict[str, Any]) -> RuleCatalogue:
    fields = data.get("fields")
    if not isinstance(fields, dict):
        raise CatalogueError(f"Catalogue '{data['catalogue']}' has no 'fields' mapping")
    return RuleCatalogue(
        name=str(data["catalogue"]),
        fields=fields,
        labels={str(k): str(v) for k, v in (data.get("labels") or {}).items()},
    )
