"""Tests for forge/suite.py: rule test cases."""

import json

from rulebricks.forge.suite import RuleTest, generate_test_id


class TestRuleTest:
    def test_generated_id(self):
        test_id = generate_test_id()
        assert len(test_id) == 21
        assert test_id.isalnum()
        assert RuleTest().id != RuleTest().id

    def test_defaults(self):
        test = RuleTest()
        assert test.name == "Untitled Test"
        assert test.request == {}
        assert test.response == {}
        assert test.critical is False
        assert test.success is False

    def test_fluent_builder(self):
        test = (
            RuleTest()
            .set_name("adult")
            .expect({"age": 30}, {"eligible": True})
            .is_critical()
        )
        assert test.name == "adult"
        assert test.request == {"age": 30}
        assert test.response == {"eligible": True}
        assert test.critical is True
        assert test.is_critical(False).critical is False

    def test_to_dict(self):
        test = RuleTest(id="t1", name="adult").expect({"age": 30}, {"eligible": True})
        assert test.to_dict() == {
            "id": "t1",
            "name": "adult",
            "request": {"age": 30},
            "response": {"eligible": True},
            "critical": False,
            "lastExecuted": None,
            "testState": None,
            "error": None,
            "success": False,
        }


class TestFromJson:
    def test_sparse_payload(self):
        test = RuleTest.from_json({"id": "abc"})
        assert test.id == "abc"
        assert test.name == "Untitled Test"
        assert test.request == {}

    def test_empty_id_and_name_regenerated(self):
        test = RuleTest.from_json({"id": "", "name": "", "request": None})
        assert len(test.id) == 21
        assert test.name == "Untitled Test"
        assert test.request == {}

    def test_alternate_key_names(self):
        test = RuleTest.from_json(
            {"testRequest": {"age": 30}, "expectedResponse": {"eligible": True}}
        )
        assert test.request == {"age": 30}
        assert test.response == {"eligible": True}

    def test_server_execution_state(self):
        test = RuleTest.from_json(
            json.dumps(
                {
                    "id": "t1",
                    "lastExecuted": "2024-01-01T00:00:00Z",
                    "testState": {"passed": 1},
                    "error": "mismatch",
                    "success": False,
                }
            )
        )
        assert test.last_executed == "2024-01-01T00:00:00Z"
        assert test.test_state == {"passed": 1}
        assert test.to_dict()["error"] == "mismatch"

    def test_unknown_keys_carried(self):
        test = RuleTest.from_json({"id": "t1", "owner": "ops"})
        assert test.to_dict()["owner"] == "ops"
