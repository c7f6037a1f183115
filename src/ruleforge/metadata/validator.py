"""
metadata/validator.py: JSON Schema validation for rule catalogue YAML files.

Usage:
    from ruleforge.metadata.validator import validate_catalogue_dir

    issues = validate_catalogue_dir(Path("catalogues"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
CATALOGUE_SCHEMA = "catalogue.schema.json"


@dataclass
class CatalogueIssue:
    """A single validation finding for a catalogue YAML file."""

    file: Path
    message: str
    path: str = ""           # path within the document, e.g. "fields/email[1]"
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _load_schema(name: str = CATALOGUE_SCHEMA) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open(encoding="utf-8") as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_catalogue_document(doc: Any, source: Path) -> list[CatalogueIssue]:
    """Validate an already parsed catalogue document against the schema.

    Schema violations are errors. A label for a field that is not declared
    under ``fields`` is reported as a warning.
    """
    validator = Draft202012Validator(_load_schema())
    issues = [
        CatalogueIssue(file=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]
    if issues:
        return issues

    for label_field in doc.get("labels") or {}:
        if label_field not in doc["fields"]:
            issues.append(
                CatalogueIssue(
                    file=source,
                    message=f"Label for undeclared field '{label_field}'",
                    path=f"labels/{label_field}",
                    severity="warning",
                )
            )
    return issues


def validate_catalogue_file(yaml_path: Path) -> list[CatalogueIssue]:
    """
    Validate a single catalogue YAML file.

    Returns:
        A list of :class:`CatalogueIssue` objects (empty on success).
    """
    try:
        with yaml_path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [CatalogueIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            CatalogueIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    return validate_catalogue_document(raw, yaml_path)


def validate_catalogue_dir(
    catalogue_dir: Path,
    *,
    strict: bool = False,
) -> list[CatalogueIssue]:
    """
    Validate every ``*.yaml`` file directly under *catalogue_dir*.

    Args:
        catalogue_dir: Directory holding catalogue files.
        strict:        If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`CatalogueIssue` objects across all files.
    """
    if not catalogue_dir.is_dir():
        return [
            CatalogueIssue(
                file=catalogue_dir,
                message=f"Catalogue directory does not exist: {catalogue_dir}",
            )
        ]

    all_issues: list[CatalogueIssue] = []
    for yaml_file in sorted(catalogue_dir.glob("*.yaml")):
        file_issues = validate_catalogue_file(yaml_file)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    logger.debug("Validated %s: %d issue(s)", catalogue_dir, len(all_issues))
    return all_issues
