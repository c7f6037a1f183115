"""YAML catalogue loading and schema checks."""

from ruleforge.metadata.loader import CatalogueLoader, load_catalogue_file
from ruleforge.metadata.validator import (
    CatalogueIssue,
    validate_catalogue_dir,
    validate_catalogue_file,
)

__all__ = [
    "CatalogueIssue",
    "CatalogueLoader",
    "load_catalogue_file",
    "validate_catalogue_dir",
    "validate_catalogue_file",
]
