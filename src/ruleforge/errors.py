"""Exceptions raised outside of a validation call.

Validation itself never raises: every failure is reported as a
ValidationFailure or TargetFailure. These exceptions cover misuse of the
registries and malformed catalogue files.
"""


class RuleForgeError(Exception):
    """Base class for ruleforge errors."""
    pass


class InvalidRuleName(RuleForgeError, ValueError):
    """A rule was registered under an empty or non-string name."""
    pass


class InvalidRuleHandler(RuleForgeError, TypeError):
    """A rule was registered with a handler that is not callable."""
    pass


class CatalogueError(RuleForgeError):
    """A rule catalogue definition is malformed."""
    pass


class CatalogueNotFoundError(CatalogueError, LookupError):
    """A catalogue was referenced by name but never defined."""
    pass
