"""Tests for parsing model output."""

import json

import pytest

from etymo_dict.errors import InvalidSchema, MalformedResponse
from etymo_dict.parsing import parse_entry, parse_payload, strip_code_fence, validate_entry


def test_fenced_and_unfenced_parse_identically(reciept_text):
    fenced = f"```json\n{reciept_text}\n```"

    assert parse_entry(fenced) == parse_entry(reciept_text)


def test_strip_code_fence_variants(reciept_text):
    assert strip_code_fence(f"```json {reciept_text}```") == reciept_text
    assert strip_code_fence(f"```\n{reciept_text}\n```") == reciept_text
    assert strip_code_fence(f"  {reciept_text}\n") == reciept_text


def test_strip_code_fence_ignores_surrounding_prose(reciept_text):
    text = f"Here is the entry:\n```json\n{reciept_text}\n```\nHope this helps!"

    assert json.loads(strip_code_fence(text))["term"] == "receipt"


def test_prose_instead_of_json_is_malformed():
    with pytest.raises(MalformedResponse):
        parse_entry("Sorry, I can't help with that.")


def test_empty_text_is_malformed():
    with pytest.raises(MalformedResponse):
        parse_payload("")


def test_json_array_is_invalid_schema():
    with pytest.raises(InvalidSchema):
        parse_payload('[{"term": "run"}]')


def test_missing_meaning_is_invalid_schema():
    with pytest.raises(InvalidSchema) as excinfo:
        validate_entry({"type": "word", "term": "run"}, model="gpt-4o-mini")

    assert "meaning" in str(excinfo.value)
    assert excinfo.value.model == "gpt-4o-mini"


def test_errors_are_not_transient():
    assert MalformedResponse("x").transient is False
    assert InvalidSchema("x").transient is False


def test_unterminated_fence_is_stripped(reciept_text):
    assert parse_entry("```json\n" + reciept_text) == parse_entry(reciept_text)
    assert strip_code_fence("```\n" + reciept_text) == reciept_text
    assert strip_code_fence(reciept_text + "\n```") == reciept_text


@pytest.mark.parametrize("reply", [None, b"{}", ["term"]])
def test_non_text_is_malformed(reply):
    with pytest.raises(MalformedResponse):
        parse_entry(reply)
