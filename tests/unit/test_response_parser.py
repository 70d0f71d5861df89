"""
Unit tests for pulling task arrays out of model replies.

Covers the fenced/bare extraction patterns and strict validation of the
parsed value.
"""

from __future__ import annotations

import pytest

from todoq.ingestion.errors import InvalidResponseFormatError, ResponseParseError
from todoq.ingestion.response_parser import (
    extract_json_array,
    parse_task_list,
    validate_task_list,
)


class TestExtractJsonArray:
    def test_fenced_block(self):
        reply = 'Here:\n```json\n["Send report", "Book room"]\n```\nThanks'
        assert extract_json_array(reply) == '["Send report", "Book room"]'

    def test_fenced_block_preferred_over_earlier_bare_brackets(self):
        reply = 'Note [draft]\n```json\n["A"]\n```'
        assert extract_json_array(reply) == '["A"]'

    def test_bare_array_with_surrounding_prose(self):
        assert extract_json_array('Sure! ["Call Bob"] hope that helps') == '["Call Bob"]'

    def test_multiline_array(self):
        reply = '[\n  "one",\n  "two"\n]'
        assert extract_json_array(reply) == reply

    @pytest.mark.parametrize("reply", ["", "   ", "No tasks here.", '{"tasks": "x"}'])
    def test_no_array(self, reply):
        with pytest.raises(InvalidResponseFormatError) as exc_info:
            extract_json_array(reply)
        assert exc_info.value.message == (
            "AI response format was invalid. Could not find JSON array."
        )


class TestParseTaskList:
    def test_fenced_reply(self):
        assert parse_task_list('```json\n["Task 1", "Task 2"]\n```') == ["Task 1", "Task 2"]

    def test_empty_array_is_valid(self):
        assert parse_task_list("[]") == []

    def test_duplicates_kept_for_client_to_dedupe(self):
        assert parse_task_list('["a", "a"]') == ["a", "a"]

    def test_mixed_types_rejected_whole(self):
        with pytest.raises(ResponseParseError) as exc_info:
            parse_task_list('["ok", 3, null]')
        assert exc_info.value.message == "Failed to parse AI response."

    def test_array_of_objects_rejected(self):
        with pytest.raises(ResponseParseError):
            parse_task_list('[{"task": "a"}]')

    def test_invalid_json_in_brackets(self):
        with pytest.raises(ResponseParseError):
            parse_task_list("[Send report, Book room]")

    def test_greedy_bare_match_spanning_two_arrays_fails(self):
        """Two separate arrays join into one invalid fragment."""
        with pytest.raises(ResponseParseError):
            parse_task_list('First ["a"] then ["b"]')


def test_validate_task_list_rejects_non_list():
    with pytest.raises(ResponseParseError):
        validate_task_list({"tasks": ["a"]})
    assert validate_task_list(["a"]) == ["a"]
