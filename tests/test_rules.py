"""Tests for the built-in rules.

Each rule is exercised through validate() so messages come out exactly as
callers see them.
"""

import math
import re
from decimal import Decimal

import pytest

from ruleforge.core.types import MISSING
from ruleforge.i18n import Localizer, set_default_localizer
from ruleforge.validation import RuleRegistry, register_builtin_rules, validate


@pytest.fixture(autouse=True)
def setup_registry():
    RuleRegistry.clear()
    register_builtin_rules()
    set_default_localizer(Localizer("en"))
    yield
    RuleRegistry.clear()
    set_default_localizer(None)


async def message_for(value, rule):
    """Return the failure message of a single rule, or None on success."""
    result = await validate(value, [rule])
    return None if result.success else result.message


# =============================================================================
# Presence
# =============================================================================


class TestPresenceRules:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["x", 0, False, [], {}])
    async def test_required_accepts_present_values(self, value):
        assert await message_for(value, "Required") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["", None, MISSING])
    async def test_required_rejects_empty_values(self, value):
        assert await message_for(value, "Required") == "This field is required"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("marker", ["Empty", "Nullable", "Optional"])
    async def test_markers_always_pass(self, marker):
        assert await message_for("anything", marker) is None


# =============================================================================
# Strings
# =============================================================================


class TestStringRules:
    @pytest.mark.asyncio
    async def test_string(self):
        assert await message_for("x", "String") is None
        assert await message_for(1, "String") == "This field must be a string"

    @pytest.mark.asyncio
    async def test_min_length(self):
        assert await message_for("abc", {"MinLength": [3]}) is None
        assert await message_for("ab", {"MinLength": [3]}) == (
            "This field must be at least 3 characters long"
        )

    @pytest.mark.asyncio
    async def test_max_length(self):
        assert await message_for("abc", {"MaxLength": [3]}) is None
        assert await message_for("abcd", {"MaxLength": [3]}) == (
            "This field must be at most 3 characters long"
        )

    @pytest.mark.asyncio
    async def test_length_exact(self):
        assert await message_for("abcd", {"Length": [4]}) is None
        assert await message_for("abc", {"Length": [4]}) == (
            "This field must be exactly 4 characters long"
        )

    @pytest.mark.asyncio
    async def test_length_range(self):
        assert await message_for("abc", {"Length": [2, 4]}) is None
        assert await message_for("abcde", {"Length": [2, 4]}) == (
            "This field must be between 2 and 4 characters long"
        )

    @pytest.mark.asyncio
    async def test_length_argument_must_be_numeric(self):
        message = await message_for("abc", {"MinLength": ["three"]})
        assert message.startswith('Rule "MinLength" received invalid arguments')

    @pytest.mark.asyncio
    async def test_numeric_string_arguments_accepted(self):
        assert await message_for("abc", {"MinLength": ["3"]}) is None

    @pytest.mark.asyncio
    async def test_matches(self):
        assert await message_for("12345", {"Matches": [r"^\d+$"]}) is None
        assert await message_for("12a", {"Matches": [r"^\d+$"]}) == (
            "This field does not match the expected format"
        )

    @pytest.mark.asyncio
    async def test_matches_compiled_pattern_and_custom_message(self):
        rule = {"Matches": [re.compile(r"^[A-Z]{2}$"), "Use a two-letter code"]}

        assert await message_for("FR", rule) is None
        assert await message_for("fra", rule) == "Use a two-letter code"

    @pytest.mark.asyncio
    async def test_matches_invalid_pattern(self):
        message = await message_for("x", {"Matches": ["("]})
        assert "received invalid arguments" in message


# =============================================================================
# Numbers
# =============================================================================


class TestNumericRules:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, -1, 2.5, Decimal("1.10")])
    async def test_number_accepts(self, value):
        assert await message_for(value, "Number") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["1", True, math.nan, None, [1]])
    async def test_number_rejects(self, value):
        assert await message_for(value, "Number") == "This field must be a number"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value, valid", [(3, True), (3.0, True), (3.5, False), (math.inf, False)])
    async def test_integer(self, value, valid):
        message = await message_for(value, "Integer")
        assert (message is None) is valid

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "rule, passing, failing, expected",
        [
            ("NumberGreaterThan", 6, 5, "This field must be greater than 5"),
            ("NumberGreaterThanOrEqual", 5, 4, "This field must be greater than or equal to 5"),
            ("NumberLessThan", 4, 5, "This field must be less than 5"),
            ("NumberLessThanOrEqual", 5, 6, "This field must be less than or equal to 5"),
            ("NumberEqual", 5, 6, "This field must be equal to 5"),
        ],
    )
    async def test_comparisons(self, rule, passing, failing, expected):
        assert await message_for(passing, {rule: [5]}) is None
        assert await message_for(failing, {rule: [5]}) == expected

    @pytest.mark.asyncio
    async def test_comparison_requires_a_number(self):
        message = await message_for("6", {"NumberGreaterThan": [5]})
        assert message == "This field must be a number"

    @pytest.mark.asyncio
    async def test_between(self):
        assert await message_for(10, {"NumberBetween": [1, 10]}) is None
        assert await message_for(11, {"NumberBetween": [1, 10]}) == (
            "This field must be between 1 and 10"
        )

    @pytest.mark.asyncio
    async def test_between_with_inverted_bounds_is_invalid(self):
        message = await message_for(5, {"NumberBetween": [10, 1]})
        assert "received invalid arguments" in message


# =============================================================================
# Arrays
# =============================================================================


class TestArrayRules:
    @pytest.mark.asyncio
    async def test_array(self):
        assert await message_for([1], "Array") is None
        assert await message_for((1,), "Array") is None
        assert await message_for("abc", "Array") == "This field must be an array"

    @pytest.mark.asyncio
    async def test_min_max_and_exact_length(self):
        assert await message_for([1, 2], {"ArrayMinLength": [3]}) == (
            "This field must contain at least 3 items"
        )
        assert await message_for([1, 2, 3, 4], {"ArrayMaxLength": [3]}) == (
            "This field must contain at most 3 items"
        )
        assert await message_for([1, 2], {"ArrayLength": [3]}) == (
            "This field must contain exactly 3 items"
        )
        assert await message_for([1, 2, 3], {"ArrayLength": [3]}) is None

    @pytest.mark.asyncio
    async def test_length_rules_require_an_array(self):
        assert await message_for("abc", {"ArrayMinLength": [1]}) == (
            "This field must be an array"
        )

    @pytest.mark.asyncio
    async def test_contains(self):
        assert await message_for(["a", "b"], {"ArrayContains": ["a"]}) is None
        assert await message_for(["b"], {"ArrayContains": ["a", "c"]}) == (
            "This field must contain a, c"
        )


# =============================================================================
# Formats
# =============================================================================


class TestFormatRules:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "rule, valid, invalid",
        [
            ("Email", "john.doe@example.com", "john.doe@"),
            ("Url", "https://example.com/path?q=1", "ftp://example.com"),
            ("UUID", "123e4567-e89b-12d3-a456-426614174000", "123e4567"),
            ("PhoneNumber", "(555) 123-4567", "call me"),
        ],
    )
    async def test_formats(self, rule, valid, invalid):
        assert await message_for(valid, rule) is None
        assert await message_for(invalid, rule) is not None

    @pytest.mark.asyncio
    async def test_format_rules_require_strings(self):
        assert await message_for(42, "Email") == "This field must be a valid email address"


# =============================================================================
# Booleans, objects, enumerations
# =============================================================================


class TestMiscRules:
    @pytest.mark.asyncio
    async def test_boolean(self):
        assert await message_for(False, "Boolean") is None
        assert await message_for("true", "Boolean") == "This field must be a boolean"

    @pytest.mark.asyncio
    async def test_object(self):
        assert await message_for({}, "Object") is None
        assert await message_for([], "Object") == "This field must be an object"

    @pytest.mark.asyncio
    async def test_enum(self):
        assert await message_for("draft", {"Enum": ["draft", "published"]}) is None
        assert await message_for("draft", {"Enum": [["draft", "published"]]}) is None
        assert await message_for("archived", {"Enum": ["draft", "published"]}) == (
            "This field must be one of: draft, published"
        )

    @pytest.mark.asyncio
    async def test_enum_compares_types(self):
        assert await message_for(True, {"Enum": [1, 2]}) is not None
        assert await message_for(1, {"Enum": [1, 2]}) is None

    @pytest.mark.asyncio
    async def test_enum_without_options_is_invalid(self):
        assert "received invalid arguments" in await message_for("x", {"Enum": []})
