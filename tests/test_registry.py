"""Tests for the rule registry."""

import logging

import pytest

from ruleforge.errors import InvalidRuleHandler, InvalidRuleName
from ruleforge.validation import RuleRegistry, register_builtin_rules, rule


@pytest.fixture(autouse=True)
def clean_registry():
    RuleRegistry.clear()
    yield
    RuleRegistry.clear()


def always(ctx):
    return True


class TestRegister:
    def test_register_and_get(self):
        RuleRegistry.register("Always", always)

        assert RuleRegistry.get("Always") is always
        assert RuleRegistry.has("Always")

    def test_get_unknown_returns_none(self):
        assert RuleRegistry.get("Unknown") is None
        assert RuleRegistry.get(None) is None
        assert not RuleRegistry.has(42)

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_invalid_name_rejected(self, name):
        with pytest.raises(InvalidRuleName):
            RuleRegistry.register(name, always)

    def test_invalid_name_is_a_value_error(self):
        with pytest.raises(ValueError):
            RuleRegistry.register("", always)

    def test_non_callable_handler_rejected(self):
        with pytest.raises(InvalidRuleHandler):
            RuleRegistry.register("Broken", "not a function")

    def test_overwrite_replaces_predicate(self, caplog):
        def other(ctx):
            return False

        RuleRegistry.register("Always", always)
        with caplog.at_level(logging.WARNING, logger="ruleforge.validation.registry"):
            RuleRegistry.register("Always", other)

        assert RuleRegistry.get("Always") is other
        assert "already registered" in caplog.text

    def test_decorator_registers(self):
        @rule("Even")
        def even(ctx):
            return ctx.value % 2 == 0

        assert RuleRegistry.get("Even") is even


class TestListing:
    def test_list_is_a_read_only_snapshot(self):
        RuleRegistry.register("Always", always)
        snapshot = RuleRegistry.list()

        with pytest.raises(TypeError):
            snapshot["Other"] = always

        RuleRegistry.register("Later", always)
        assert "Later" not in snapshot
        assert set(snapshot) == {"Always"}

    def test_builtins_registered(self):
        register_builtin_rules()

        names = RuleRegistry.list_registered()
        for name in ("Empty", "Nullable", "Optional", "Required", "Email", "ArrayMinLength"):
            assert name in names

    def test_builtin_registration_is_idempotent(self, caplog):
        register_builtin_rules()
        before = dict(RuleRegistry.list())

        with caplog.at_level(logging.WARNING, logger="ruleforge.validation.registry"):
            register_builtin_rules()

        assert dict(RuleRegistry.list()) == before
        assert caplog.text == ""

    def test_clear(self):
        RuleRegistry.register("Always", always)
        RuleRegistry.clear()
        assert RuleRegistry.list_registered() == []
