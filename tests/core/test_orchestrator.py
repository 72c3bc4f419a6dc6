"""Robust parsing tests for the fallback chain."""

import json
import logging

import pytest

from jsonmend import (
    NO_RESULT,
    JsonRecovery,
    RecoveryStage,
    Success,
    extract_json_from_content,
    parse_robustly,
    recover,
    repair_malformed_json,
)
from jsonmend.config import Settings
from jsonmend.tracing import RecoveryTracer

COMPLEX_MALFORMED = (
    "Here is the response: {'test': \"value\", number: 123, "
    'array: ["item1", "item2",], More explanation here.'
)


class TestBasicParsing:
    """Well-formed input and empty input."""

    def test_valid_object(self):
        result = parse_robustly('{"test": "value", "number": 123}')

        assert result == {"test": "value", "number": 123}

    def test_valid_array(self):
        result = parse_robustly('[{"test": "value1"}, {"test": "value2"}]')

        assert isinstance(result, list)
        assert len(result) == 2
        assert result[0]["test"] == "value1"

    def test_empty_object(self):
        assert parse_robustly("{}") == {}

    def test_none_input(self):
        assert parse_robustly(None) is None
        assert recover(None) is NO_RESULT

    def test_empty_string_input(self):
        assert parse_robustly("") is None
        assert recover("") is NO_RESULT

    def test_non_text_input(self):
        assert parse_robustly(123) is None
        assert parse_robustly(b'{"a": 1}') is None

    def test_json_null_is_a_result(self):
        outcome = recover("null")

        assert isinstance(outcome, Success)
        assert outcome.value is None
        assert parse_robustly("null") is None

    @pytest.mark.parametrize(
        "document",
        [
            '{"a": 1, "b": [true, false, null], "c": {"d": "e"}}',
            "[1, 2.5, -3e2, \"x\"]",
            '"just a string"',
            "42",
            '{"a": 1, "a": 2}',
        ],
    )
    def test_matches_strict_parse(self, document):
        outcome = recover(document)

        assert outcome.value == json.loads(document)
        assert outcome.stage == RecoveryStage.STRICT


class TestExtraction:
    """extract_json_from_content tests."""

    def test_leading_text(self):
        content = 'Here is the JSON response: {"test": "value"}'

        assert extract_json_from_content(content) == '{"test": "value"}'

    def test_trailing_text(self):
        content = '{"test": "value"}\n\nThis is some explanatory text.'

        assert extract_json_from_content(content) == '{"test": "value"}'

    def test_leading_and_trailing_text(self):
        content = 'Response:\n{"test": "value"}\nEnd of response.'

        assert extract_json_from_content(content) == '{"test": "value"}'

    def test_multiple_objects_extracts_first(self):
        content = '{"first": "value"} {"second": "value"}'

        assert extract_json_from_content(content) == '{"first": "value"}'

    def test_nothing_to_extract(self):
        assert extract_json_from_content(None) is None
        assert extract_json_from_content("") is None
        assert extract_json_from_content("no json") is None


class TestRepair:
    """repair_malformed_json tests."""

    def test_trailing_comma(self):
        repaired = repair_malformed_json('{"test": "value", "number": 123,}')

        assert json.loads(repaired) == {"test": "value", "number": 123}

    def test_missing_closing_brace(self):
        repaired = repair_malformed_json('{"test": "value", "nested": {"inner": "value"}')

        assert json.loads(repaired)["nested"]["inner"] == "value"

    def test_single_quotes(self):
        assert json.loads(repair_malformed_json("{'test': 'value', 'number': 123}"))["test"] == "value"

    def test_unquoted_property_names(self):
        assert json.loads(repair_malformed_json('{test: "value", number: 123}'))["test"] == "value"

    def test_double_escaped_quotes(self):
        repaired = repair_malformed_json('{"text": "value with \\\\"quotes\\\\" inside"}')

        assert '"quotes"' in json.loads(repaired)["text"]

    def test_empty_input(self):
        assert repair_malformed_json(None) is None
        assert repair_malformed_json("") is None


class TestRobustParsing:
    """Full chain integration tests."""

    def test_complex_malformed_json(self):
        outcome = recover(COMPLEX_MALFORMED)

        assert outcome.value["test"] == "value"
        assert outcome.value["number"] == 123
        assert outcome.value["array"] == ["item1", "item2"]
        assert outcome.stage == RecoveryStage.SALVAGED

    def test_mixed_malformations_match_clean_equivalent(self):
        content = "Sure! Here you go: {'name': 'Ada', age: 36, tags: ['math', 'code',],}"
        clean = '{"name": "Ada", "age": 36, "tags": ["math", "code"]}'

        outcome = recover(content)

        assert outcome.value == json.loads(clean)
        assert outcome.stage == RecoveryStage.REPAIRED

    def test_real_world_ai_response(self):
        content = (
            '{"sl":"en","tl":"es","content":[{"type":"paragraph","o":"Hello world","t":"Hola mundo"}]}'
            "\n\nThis translation includes cultural adaptations."
        )
        outcome = recover(content)

        assert outcome.value["sl"] == "en"
        assert outcome.value["content"][0]["t"] == "Hola mundo"
        assert outcome.stage == RecoveryStage.EXTRACTED

    def test_escaped_quotes_in_values(self):
        result = parse_robustly('{"text": "She said \\"Hello\\" to me"}')

        assert result["text"] == 'She said "Hello" to me'

    def test_unicode_characters(self):
        result = parse_robustly('{"text": "Café résumé naïve 🌟"}')

        assert result["text"] == "Café résumé naïve 🌟"

    def test_unicode_through_repair(self):
        content = "Réponse : {'texte': 'Café résumé naïve 🌟', 'langue': 'français', 'symboles': '€ ∑ → ✓',}"

        assert parse_robustly(content) == {
            "texte": "Café résumé naïve 🌟",
            "langue": "français",
            "symboles": "€ ∑ → ✓",
        }

    def test_non_latin_scripts_through_extraction(self):
        content = '答案如下：{"标题": "你好，世界", "列表": ["α", "β", "γ"], "ru": "Привет"} 谢谢'

        assert parse_robustly(content) == {"标题": "你好，世界", "列表": ["α", "β", "γ"], "ru": "Привет"}

    def test_truncated_inside_string(self):
        outcome = recover('{"a": 1, "b": "unfinis')

        assert outcome.value == {"a": 1, "b": "unfinis"}
        assert outcome.stage == RecoveryStage.REPAIRED

    def test_truncated_inside_key_is_not_recovered(self):
        assert recover('{"a": 1, "b') is NO_RESULT

    def test_empty_member_value_is_not_recovered(self):
        assert recover('{"a": 1, "b": }') is NO_RESULT

    def test_cut_off_member_value_is_not_recovered(self):
        assert recover('{"a": 1, "b": tru') is NO_RESULT

    def test_prose_after_last_member(self):
        outcome = recover('{"a": 1, "b": 2 This is the answer')

        assert outcome.value == {"a": 1, "b": 2}
        assert outcome.stage == RecoveryStage.SALVAGED

    def test_prose_after_nested_member(self):
        outcome = recover('{"a": {"b": 1, "c": 2 Note: more')

        assert outcome.value == {"a": {"b": 1, "c": 2}}

    def test_prose_inside_closed_span_is_not_trimmed(self):
        assert recover('{"a": 1 oops} and then some') is NO_RESULT

    def test_prose_without_json(self):
        assert recover("Sorry, I cannot help with that.") is NO_RESULT

    def test_unrecoverable_span(self):
        assert recover("{:::}") is NO_RESULT

    @pytest.mark.parametrize(
        "content",
        ["{", "[", "}", "]", "'", '"', "\\", "{'", '{"a": "\\', "[[[[", "{,}", '{"a":}', "[1,,2]", ":::"],
    )
    def test_never_raises(self, content):
        parse_robustly(content)
        extract_json_from_content(content)
        repair_malformed_json(content)


class TestEdgeCases:
    """Size, depth and value-type edge cases."""

    def test_very_large_object(self):
        body = ",".join(f'"key{i}": "value{i}"' for i in range(1000))
        result = parse_robustly("{" + body + "}")

        assert result["key0"] == "value0"
        assert result["key999"] == "value999"

    def test_very_large_malformed_object(self):
        body = ", ".join(f"key{i}: 'value{i}'" for i in range(1000))
        outcome = recover("Output: {" + body + ",}")

        assert len(outcome.value) == 1000
        assert outcome.value["key999"] == "value999"
        assert outcome.stage == RecoveryStage.REPAIRED

    def test_deeply_nested(self):
        result = parse_robustly('{"level1":{"level2":{"level3":{"level4":{"value":"deep"}}}}}')

        assert result["level1"]["level2"]["level3"]["level4"]["value"] == "deep"

    def test_deeply_nested_truncated(self):
        result = parse_robustly('{"a": ' * 200 + "1")

        for _ in range(200):
            result = result["a"]
        assert result == 1

    def test_newlines_in_string_values(self):
        result = parse_robustly('{"multiline": "line1\\nline2\\nline3"}')

        assert result["multiline"] == "line1\nline2\nline3"

    def test_empty_arrays_and_objects(self):
        result = parse_robustly('{"empty_obj": {}, "empty_array": [], "null_value": null}')

        assert result == {"empty_obj": {}, "empty_array": [], "null_value": None}

    def test_numbers_and_booleans(self):
        result = parse_robustly('{"int": 123, "float": 45.67, "true": true, "false": false}')

        assert result["int"] == 123
        assert isinstance(result["int"], int)
        assert result["float"] == 45.67
        assert result["true"] is True
        assert result["false"] is False


class TestJsonRecovery:
    """Settings, tracing and logging behaviour of JsonRecovery."""

    def test_salvage_can_be_disabled(self):
        recovery = JsonRecovery(Settings(_env_file=None, salvage_truncated=False))

        assert recovery.recover(COMPLEX_MALFORMED) is NO_RESULT

    def test_tracer_records_stages(self):
        tracer = RecoveryTracer()
        outcome = recover("Here: {'a': 1,}", tracer)

        assert outcome.value == {"a": 1}
        assert [e.stage for e in tracer.get_events()] == ["strict", "extracted", "repaired"]
        assert tracer.final_stage == "repaired"

    def test_tracer_records_empty_input(self):
        tracer = RecoveryTracer()
        recover("", tracer)

        assert tracer.get_events()[0].stage == "input"
        assert tracer.final_stage is None

    def test_debug_logs_stage_transitions(self, caplog):
        caplog.set_level(logging.DEBUG, logger="jsonmend")
        JsonRecovery(Settings(_env_file=None, debug=True)).recover('{"a": 1}')

        assert any("strict ok" in record.getMessage() for record in caplog.records)

    def test_quiet_without_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="jsonmend")
        JsonRecovery(Settings(_env_file=None, debug=False)).recover("not json at all")

        assert not [r for r in caplog.records if r.name == "jsonmend.core.orchestrator"]
