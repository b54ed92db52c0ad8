"""Tests for the lenient JSON parser."""

from logscope_agent.providers.json_parser import ParseFailure, parse_llm_json


def test_plain_json():
    assert parse_llm_json('{"status": "success", "result": {"a": 1}}') == {
        "status": "success",
        "result": {"a": 1},
    }


def test_json_scalars_and_strings():
    assert parse_llm_json("42") == 42
    assert parse_llm_json('"hello"') == "hello"
    assert parse_llm_json("null") is None


def test_fenced_block():
    text = 'Here is the analysis:\n```json\n{"logs_analyzed": 120}\n```\nLet me know.'
    assert parse_llm_json(text) == {"logs_analyzed": 120}


def test_json_embedded_in_prose():
    text = 'Sure! {"message": "No errors found"} Hope that helps.'
    assert parse_llm_json(text) == {"message": "No errors found"}


def test_trailing_commas_repaired():
    assert parse_llm_json('{"trends": ["a", "b",],}') == {"trends": ["a", "b"]}


def test_python_literals_repaired():
    assert parse_llm_json('{"ok": True, "missing": None, "items": [False]}') == {
        "ok": True,
        "missing": None,
        "items": [False],
    }


def test_python_literal_words_inside_strings_untouched():
    assert parse_llm_json('{"summary": "None of the pods failed", "x": True}') == {
        "summary": "None of the pods failed",
        "x": True,
    }


def test_repair_leaves_string_contents_alone():
    text = '{"msg": "a, True]", "note": "x,}", "ok": True,}'
    assert parse_llm_json(text) == {"msg": "a, True]", "note": "x,}", "ok": True}


def test_repair_handles_escaped_quotes_in_strings():
    text = r'{"msg": "say \"None\", then stop", "value": None}'
    assert parse_llm_json(text) == {"msg": 'say "None", then stop', "value": None}


def test_empty_text_fails():
    result = parse_llm_json("   ")
    assert isinstance(result, ParseFailure)
    assert result.success is False
    assert result.error


def test_unparseable_text_fails():
    result = parse_llm_json("the agent is overloaded, try later")
    assert isinstance(result, ParseFailure)
    assert "Failed to parse" in result.error


def test_oversized_integer_fails_instead_of_raising():
    result = parse_llm_json("1" * 5000)
    assert isinstance(result, ParseFailure)
    assert "Failed to parse" in result.error


def test_deeply_nested_array_fails_instead_of_raising():
    result = parse_llm_json("[" * 100000 + "]" * 100000)
    assert isinstance(result, ParseFailure)
    assert "Failed to parse" in result.error
