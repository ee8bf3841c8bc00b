import pytest

from utils.json_extract import extract_json_object, iter_object_spans


@pytest.mark.unit
def test_extracts_object_surrounded_by_prose_and_fences():
    text = 'Sure!\n```json\n{"answer": "x", "sources": []}\n```\nDone.'
    assert extract_json_object(text) == {"answer": "x", "sources": []}


@pytest.mark.unit
def test_handles_nested_objects_and_braces_in_strings():
    text = 'prefix {"answer": "use {braces} and \\"quotes\\"", "meta": {"k": 1}} suffix'
    assert extract_json_object(text) == {"answer": 'use {braces} and "quotes"', "meta": {"k": 1}}


@pytest.mark.unit
def test_skips_spans_that_do_not_parse():
    text = "{not json} then {\"answer\": \"second\"}"
    assert extract_json_object(text) == {"answer": "second"}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "no braces here", "{unterminated", None, "[1, 2]"])
def test_returns_empty_dict_when_nothing_parses(text):
    assert extract_json_object(text) == {}


@pytest.mark.unit
def test_iter_object_spans_yields_top_level_spans_in_order():
    assert list(iter_object_spans('a {"x": {"y": 1}} b {"z": 2}')) == ['{"x": {"y": 1}}', '{"z": 2}']
