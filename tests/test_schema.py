"""
Tests for payload validation.
"""

import pytest
from gigboard.schema import validate_payload


class TestValidatePayload:

    def test_valid_payload(self, valid_payload_dict):
        assert validate_payload(valid_payload_dict) == []

    def test_description_optional(self):
        assert validate_payload({"title": "t", "deadline": 0}) == []

    def test_missing_title(self):
        errors = validate_payload({"deadline": 1})
        assert any("title" in err for err in errors)

    def test_blank_title(self):
        errors = validate_payload({"title": "   ", "deadline": 1})
        assert errors == ["Field 'title' must be a non-empty string"]

    def test_description_must_be_string(self):
        errors = validate_payload({"title": "t", "description": 5, "deadline": 1})
        assert any("description" in err for err in errors)

    def test_missing_deadline(self):
        errors = validate_payload({"title": "t"})
        assert errors == ["Missing required field: deadline"]

    @pytest.mark.parametrize("deadline", [-1, "1000", 1.5, True, None])
    def test_bad_deadline(self, deadline):
        errors = validate_payload({"title": "t", "deadline": deadline})
        assert any("deadline" in err for err in errors)

    def test_collects_all_errors(self):
        errors = validate_payload({})
        assert len(errors) == 2

    @pytest.mark.parametrize("field", ["title", "description"])
    def test_lone_surrogate_rejected(self, field):
        data = {"title": "t", "description": "d", "deadline": 1}
        data[field] = "bad \ud800"

        errors = validate_payload(data)

        assert errors == [f"Field '{field}' must be valid UTF-8 text"]
