"""Primitive values shared by the i18n and validation packages."""

from ruleforge.core.types import MISSING, is_empty_value

__all__ = ["MISSING", "is_empty_value"]
