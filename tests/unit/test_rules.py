"""
Unit tests for the stock validation rules.
"""

import pytest
import re
import uuid

from domain_kernel.domain.models.rules import (
    Rule, RuleChain, as_rules,
    not_none, not_empty, empty, length, min_length, max_length, matches,
    equal, not_equal, greater_than, greater_than_or_equal, less_than,
    less_than_or_equal, inclusive_between, exclusive_between, one_of, must,
)


class TestRuleComposition:
    """Test building rule chains."""

    def test_and_builds_ordered_chain(self):
        first, second, third = not_none(), max_length(3), matches("x")
        chain = first & second & third

        assert isinstance(chain, RuleChain)
        assert list(chain) == [first, second, third]
        assert len(chain) == 3

    def test_chain_accepts_lists(self):
        first, second = not_none(), max_length(3)
        chain = first & [second]

        assert list(chain) == [first, second]

    def test_as_rules_normalizes_inputs(self):
        rule = not_none()

        assert as_rules(rule) == [rule]
        assert as_rules([rule]) == [rule]
        assert as_rules((rule,)) == [rule]
        assert as_rules(RuleChain((rule,))) == [rule]

    def test_with_message_overrides_description(self):
        rule = not_empty().with_message("{field} is required")

        assert rule.describe("Name") == "Name is required"
        assert rule.name == "not_empty"

    def test_validate_returns_violation(self):
        violation = max_length(2).validate("Code", "abc")

        assert violation.field == "Code"
        assert violation.rule == "max_length"
        assert violation.attempted_value == "abc"
        assert violation.description == "The length of 'Code' must be 2 characters or fewer."

    def test_validate_returns_none_on_success(self):
        assert max_length(5).validate("Code", "abc") is None

    def test_custom_rule(self):
        even = Rule("even", lambda value: value % 2 == 0, "'{field}' must be even.")

        assert even.check(4)
        assert not even.check(3)


class TestEmptinessRules:
    """Test not_none, not_empty and empty."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, (), set(), uuid.UUID(int=0)])
    def test_not_empty_rejects(self, value):
        assert not not_empty().check(value)

    @pytest.mark.parametrize("value", ["a", [0], {"k": 1}, uuid.uuid4(), 0, False, 3.5])
    def test_not_empty_accepts(self, value):
        assert not_empty().check(value)

    def test_not_none(self):
        assert not_none().check("")
        assert not_none().check(0)
        assert not not_none().check(None)

    def test_empty(self):
        assert empty().check(None)
        assert empty().check("")
        assert not empty().check("a")


class TestLengthRules:
    """Test length based rules."""

    def test_length(self):
        rule = length(2, 4)

        assert rule.check("ab")
        assert rule.check("abcd")
        assert not rule.check("a")
        assert not rule.check("abcde")
        assert rule.check(None)
        assert rule.describe("Code") == "'Code' must be between 2 and 4 characters."

    def test_length_rejects_invalid_bounds(self):
        with pytest.raises(ValueError, match="Invalid length bounds"):
            length(5, 2)
        with pytest.raises(ValueError, match="Invalid length bounds"):
            length(-1, 2)

    def test_min_and_max_length(self):
        assert min_length(2).check("ab")
        assert not min_length(2).check("a")
        assert max_length(2).check([1, 2])
        assert not max_length(2).check([1, 2, 3])
        assert min_length(2).check(None)

    def test_values_without_length_fail(self):
        assert not length(0, 10).check(12345)
        assert not min_length(0).check(object())
        assert not max_length(3).check(12345)

    def test_describe_substitutes_parameters_only(self):
        rule = Rule("custom", bool, "'{field}' must be {max} or {unknown} {", {"max": 3})

        assert rule.describe("Code") == "'Code' must be 3 or {unknown} {"

    def test_matches(self):
        assert matches(r"^\d{3}$").check("123")
        assert not matches(r"^\d{3}$").check("12a")
        assert matches(re.compile("abc", re.IGNORECASE)).check("xABCx")
        assert matches("x").check(None)


class TestComparisonRules:
    """Test comparison based rules."""

    def test_equal_and_not_equal(self):
        assert equal(3).check(3)
        assert not equal(3).check(4)
        assert not_equal(3).check(4)
        assert not not_equal(3).check(3)

    def test_ordering_rules(self):
        assert greater_than(0).check(1)
        assert not greater_than(0).check(0)
        assert greater_than_or_equal(0).check(0)
        assert less_than(10).check(9)
        assert not less_than(10).check(10)
        assert less_than_or_equal(10).check(10)

    def test_between(self):
        assert inclusive_between(1, 3).check(1)
        assert inclusive_between(1, 3).check(3)
        assert not inclusive_between(1, 3).check(4)
        assert exclusive_between(1, 3).check(2)
        assert not exclusive_between(1, 3).check(1)

    def test_one_of(self):
        rule = one_of(["EUR", "USD"])

        assert rule.check("EUR")
        assert not rule.check("GBP")
        assert rule.describe("Currency") == "'Currency' must be one of ['EUR', 'USD']."

    def test_comparison_rules_let_none_through(self):
        for rule in (equal(1), not_equal(1), greater_than(1), less_than(1),
                     inclusive_between(1, 2), exclusive_between(1, 2), one_of([1])):
            assert rule.check(None)

    def test_must_sees_none(self):
        rule = must(lambda value: value is not None and value.isupper())

        assert rule.check("ABC")
        assert not rule.check(None)
        assert rule.describe("Code") == "The specified condition was not met for 'Code'."
