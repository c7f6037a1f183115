"""Tests for multi-field (target) validation."""

import asyncio
from types import MappingProxyType
from unittest.mock import MagicMock

import pytest

from ruleforge.i18n import Localizer, set_default_localizer
from ruleforge.validation import (
    CatalogueRegistry,
    RuleCatalogue,
    RuleRegistry,
    TargetFailure,
    TargetSuccess,
    define_catalogue,
    register_builtin_rules,
    validate_target,
)


@pytest.fixture(autouse=True)
def setup_registries():
    RuleRegistry.clear()
    CatalogueRegistry.clear()
    register_builtin_rules()
    set_default_localizer(Localizer("en"))
    yield
    RuleRegistry.clear()
    CatalogueRegistry.clear()
    set_default_localizer(None)


PERSON = {
    "name": ["Required"],
    "age": ["Optional", "Number"],
}


# =============================================================================
# Outcomes
# =============================================================================


class TestTargetOutcomes:
    @pytest.mark.asyncio
    async def test_absent_optional_field_is_excluded(self):
        age_rule = MagicMock(return_value=True)
        age_rule.__name__ = "age_rule"
        catalogue = {"name": ["Required"], "age": ["Optional", "Number", age_rule]}

        result = await validate_target(catalogue, {"name": "John"})

        assert isinstance(result, TargetSuccess)
        assert result.data == {"name": "John"}
        age_rule.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_has_one_entry_per_failing_field(self):
        result = await validate_target(PERSON, {"age": "old"})

        assert isinstance(result, TargetFailure)
        assert result.failure_count == 2
        assert [e.field_name for e in result.errors] == ["name", "age"]
        assert result.message == "Validation failed for 2 fields"
        assert result.errors[0].message == "[name] : name is required"
        assert result.errors[0].rule_message == "name is required"
        assert result.errors[1].message == "[age] : age must be a number"
        assert result.errors[1].rule_name == "Number"

    @pytest.mark.asyncio
    async def test_singular_summary(self):
        result = await validate_target(PERSON, {"age": 30})
        assert result.message == "Validation failed for 1 field"

    @pytest.mark.asyncio
    async def test_data_is_copied_not_mutated(self):
        data = {"name": "John", "extra": True}
        result = await validate_target(PERSON, data)

        assert result.data == data
        assert result.data is not data

    @pytest.mark.asyncio
    async def test_none_data_treated_as_empty(self):
        result = await validate_target(PERSON, None)
        assert [e.field_name for e in result.errors] == ["name"]

    @pytest.mark.asyncio
    async def test_registered_catalogue_by_name(self):
        define_catalogue("Person", PERSON, labels={"name": "Full name"})

        result = await validate_target("Person", {})

        assert result.errors[0].translated_field_name == "Full name"
        assert result.errors[0].message == "[Full name] : Full name is required"

    @pytest.mark.asyncio
    async def test_unknown_catalogue_fails_without_raising(self):
        result = await validate_target("Nope", {"name": "x"})

        assert not result.success
        assert result.errors[0].message == 'Invalid validation rule "Nope"'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("catalogue", [{"a": None}, {1: ["Required"]}])
    async def test_malformed_catalogue_fails_without_raising(self, catalogue):
        result = await validate_target(catalogue, {"a": 1})

        assert isinstance(result, TargetFailure)
        [error] = result.errors
        assert error.field_name == ""
        assert error.message.startswith("Invalid validation rule")

    @pytest.mark.asyncio
    async def test_invalid_rule_reported_for_its_field(self):
        result = await validate_target({"name": ["Required", "Nope"]}, {"name": "x"})
        assert result.errors[0].rule_message == 'Invalid validation rule "Nope"'

    @pytest.mark.asyncio
    async def test_to_dict(self):
        result = await validate_target(PERSON, {})
        payload = result.to_dict()

        assert payload["success"] is False
        assert payload["failureCount"] == 1
        assert payload["errors"][0]["fieldName"] == "name"


# =============================================================================
# Error message builder
# =============================================================================


class TestErrorMessageBuilder:
    @pytest.mark.asyncio
    async def test_custom_builder(self):
        def builder(label, message, details):
            return f"{details['field_name']}/{details['rule_name']}: {message}"

        result = await validate_target(PERSON, {}, error_message_builder=builder)

        assert result.errors[0].message == "name/Required: name is required"

    @pytest.mark.asyncio
    async def test_catalogue_builder_used_by_default(self):
        catalogue = RuleCatalogue(
            "Person", dict(PERSON), error_message_builder=lambda label, message, details: message.upper()
        )

        result = await validate_target(catalogue, {})

        assert result.errors[0].message == "NAME IS REQUIRED"

    @pytest.mark.asyncio
    async def test_explicit_builder_overrides_catalogue_builder(self):
        catalogue = RuleCatalogue(
            "Person", dict(PERSON), error_message_builder=lambda label, message, details: "catalogue"
        )

        result = await validate_target(
            catalogue, {}, error_message_builder=lambda label, message, details: "explicit"
        )

        assert result.errors[0].message == "explicit"


# =============================================================================
# Concurrency and shared data
# =============================================================================


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_fields_validated_concurrently(self):
        b_started = asyncio.Event()

        async def wait_for_b(ctx):
            await asyncio.wait_for(b_started.wait(), timeout=1)
            return True

        async def start_b(ctx):
            b_started.set()
            return True

        result = await validate_target({"a": [wait_for_b], "b": [start_b]}, {"a": 1, "b": 2})

        assert result.success

    @pytest.mark.asyncio
    async def test_errors_follow_declaration_order_not_completion(self):
        async def slow(ctx):
            await asyncio.sleep(0.02)
            return "slow failed"

        async def fast(ctx):
            return "fast failed"

        result = await validate_target({"first": [slow], "second": [fast]}, {})

        assert [e.field_name for e in result.errors] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_fields_share_read_only_record(self):
        seen = []

        def capture(ctx):
            seen.append(ctx.data)
            return ctx.value == ctx.data["password"] or "Passwords do not match"

        catalogue = {"password": ["Required"], "confirm": ["Required", capture]}

        result = await validate_target(catalogue, {"password": "a", "confirm": "b"})

        assert result.errors[0].rule_message == "Passwords do not match"
        assert isinstance(seen[0], MappingProxyType)

    @pytest.mark.asyncio
    async def test_context_and_parent_data_passed_to_rules(self):
        seen = {}

        def capture(ctx):
            seen.update(context=ctx.context, parent=ctx.parent_data)
            return True

        await validate_target(
            {"x": [capture]}, {"x": 1}, context="ctx", parent_data={"outer": True}
        )

        assert seen["context"] == "ctx"
        assert dict(seen["parent"]) == {"outer": True}
