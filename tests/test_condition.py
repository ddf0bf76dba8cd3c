"""Tests for forge/condition.py: condition handles and ordering."""

from __future__ import annotations

import pytest

from rulebricks.errors import SchemaReferenceError, TypeMismatchError, ValidationError
from rulebricks.forge import Condition, ConditionSettings, OperatorResult


def _with_tier(rule):
    rule.add_string_field("tier", "Customer tier", "basic")
    return rule


class TestBuilding:
    def test_when_then_attaches(self, eligibility_rule):
        age = eligibility_rule.get_field("age")

        returned = eligibility_rule.when({"age": age.greater_than(18)}).then({"eligible": True})

        assert returned is eligibility_rule
        assert eligibility_rule.get_condition_count() == 1
        assert eligibility_rule.get_conditions()[0] == {
            "request": {"age": {"op": "greater than", "args": [18]}},
            "response": {"eligible": {"value": True}},
            "settings": {
                "enabled": True,
                "groupId": None,
                "priority": 0,
                "schedule": [],
                "or": False,
            },
        }

    def test_any_sets_match_any(self, eligibility_rule):
        rule = _with_tier(eligibility_rule)
        age, tier = rule.get_field("age"), rule.get_field("tier")

        rule.any({"age": age.less_than(10), "tier": tier.equals("gold")}).then(
            {"eligible": True}
        )

        settings = rule.get_conditions()[0]["settings"]
        assert settings["or"] is True

    def test_then_without_responses(self, eligibility_rule):
        eligibility_rule.when({"age": eligibility_rule.get_field("age").any()}).then()
        assert eligibility_rule.get_conditions()[0]["response"] == {}

    def test_unattached_until_then(self, eligibility_rule):
        condition = eligibility_rule.when({"age": eligibility_rule.get_field("age").is_even()})

        assert isinstance(condition, Condition)
        assert condition.index is None
        assert not condition.attached
        assert eligibility_rule.get_condition_count() == 0


class TestSchemaChecks:
    def test_unknown_request_field(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        with pytest.raises(SchemaReferenceError, match="income"):
            eligibility_rule.when({"income": age.greater_than(1)})

    def test_unknown_response_field_leaves_rule_unchanged(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        condition = eligibility_rule.when({"age": age.greater_than(1)})

        with pytest.raises(SchemaReferenceError):
            condition.then({"approved": True})
        assert eligibility_rule.get_condition_count() == 0

    def test_response_value_type_checked(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        with pytest.raises(TypeMismatchError):
            eligibility_rule.when({"age": age.greater_than(1)}).then({"eligible": "yes"})

    def test_predicate_must_be_operator_result(self, eligibility_rule):
        with pytest.raises(ValidationError):
            eligibility_rule.when({"age": 18})

    @pytest.mark.parametrize(
        "predicate",
        [
            ("greater than", [18]),
            ("greater than", "18"),
            OperatorResult("greater than", "18"),
        ],
    )
    def test_hand_built_predicates_rejected(self, eligibility_rule, predicate):
        with pytest.raises(ValidationError, match="operator result"):
            eligibility_rule.when({"age": predicate})
        assert eligibility_rule.get_condition_count() == 0

    def test_failed_edit_keeps_previous_request(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        eligibility_rule.when({"age": age.greater_than(18)}).then({"eligible": True})
        handle = eligibility_rule.condition(0)

        with pytest.raises(SchemaReferenceError):
            handle.set_request({"height": age.greater_than(2)})
        assert handle.to_dict()["request"] == {"age": {"op": "greater than", "args": [18]}}


class TestHandles:
    def test_settings_before_attach_survive(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        condition = eligibility_rule.when({"age": age.greater_than(18)})
        condition.set_priority(3).set_group("g1").set_schedule([{"day": "mon"}])

        condition.then({"eligible": True})

        assert condition.index == 0
        settings = eligibility_rule.get_conditions()[0]["settings"]
        assert settings["priority"] == 3
        assert settings["groupId"] == "g1"
        assert settings["schedule"] == [{"day": "mon"}]

    def test_edits_after_attach_reach_rule(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        condition = eligibility_rule.when({"age": age.greater_than(18)})
        condition.then({"eligible": True})

        condition.disable()
        condition.set_response({"eligible": False})

        stored = eligibility_rule.get_conditions()[0]
        assert stored["settings"]["enabled"] is False
        assert stored["response"] == {"eligible": {"value": False}}

        condition.enable()
        assert eligibility_rule.get_conditions()[0]["settings"]["enabled"] is True

    def test_then_twice_does_not_duplicate(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        condition = eligibility_rule.when({"age": age.greater_than(18)})
        condition.then({"eligible": True})
        condition.then({"eligible": False})

        assert eligibility_rule.get_condition_count() == 1

    def test_indexed_handle_edits_in_place(self, eligibility_rule):
        age = eligibility_rule.get_field("age")
        eligibility_rule.when({"age": age.greater_than(18)}).then({"eligible": True})

        eligibility_rule.condition(0).set_priority(5)

        assert eligibility_rule.get_conditions()[0]["settings"]["priority"] == 5

    def test_settings_model_accepts_wire_keys(self):
        settings = ConditionSettings.model_validate({"groupId": "g", "or": True})
        assert settings.group_id == "g"
        assert settings.match_any is True


class TestOrdering:
    def _three(self, rule):
        age = rule.get_field("age")
        handles = []
        for bound in (10, 20, 30):
            condition = rule.when({"age": age.greater_than(bound)})
            condition.then({"eligible": bound > 15})
            handles.append(condition)
        return handles

    def _bounds(self, rule):
        return [c["request"]["age"]["args"][0] for c in rule.get_conditions()]

    def test_insertion_order(self, eligibility_rule):
        self._three(eligibility_rule)
        assert self._bounds(eligibility_rule) == [10, 20, 30]

    def test_delete_shifts_later_conditions(self, eligibility_rule):
        first, second, third = self._three(eligibility_rule)

        eligibility_rule.delete_condition(1)

        assert self._bounds(eligibility_rule) == [10, 30]
        assert first.index == 0
        assert second.index is None
        assert third.index == 1

    def test_delete_out_of_range(self, eligibility_rule):
        self._three(eligibility_rule)
        with pytest.raises(IndexError):
            eligibility_rule.delete_condition(5)

    def test_move_condition(self, eligibility_rule):
        first, _, third = self._three(eligibility_rule)

        eligibility_rule.move_condition(2, 0)

        assert self._bounds(eligibility_rule) == [30, 10, 20]
        assert third.index == 0
        assert first.index == 1
