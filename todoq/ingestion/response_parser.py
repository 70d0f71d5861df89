"""
Parsing of task lists out of free-form model replies.

Two stages: pull a JSON array fragment out of the reply text with patterns,
then parse it strictly and check that every element is a string. A reply
that fails either stage is rejected as a whole.
"""

from __future__ import annotations

import json
import re
from typing import Any

from todoq.ingestion.errors import InvalidResponseFormatError, ResponseParseError
from todoq.observability.logging import get_logger
from todoq.observability.telemetry import counter
from todoq.utils.redaction import redact_text

logger = get_logger(__name__)

# ```json [ ... ] ``` fenced block; checked before the bare pattern
FENCED_ARRAY_PATTERN = re.compile(r"```json\s*(\[.*\])\s*```", re.DOTALL)
# Outermost-looking [ ... ] anywhere in the reply (greedy)
BARE_ARRAY_PATTERN = re.compile(r"(\[.*\])", re.DOTALL)


def extract_json_array(reply: str) -> str:
    """
    Find the JSON array fragment in a model reply.

    Raises:
        InvalidResponseFormatError: If no bracketed array is present
    """
    text = (reply or "").strip()

    match = FENCED_ARRAY_PATTERN.search(text)
    if match:
        return match.group(1)

    match = BARE_ARRAY_PATTERN.search(text)
    if match:
        counter("ingest.parser.bare_array")
        return match.group(1)

    counter("ingest.parser.no_array")
    logger.error("Model reply did not contain a JSON array: %s", redact_text(text, 80))
    raise InvalidResponseFormatError()


def validate_task_list(value: Any) -> list[str]:
    """
    Check that a parsed value is a list of strings.

    Raises:
        ResponseParseError: On any other shape, including mixed-type lists
    """
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        counter("ingest.parser.wrong_shape")
        logger.error("Parsed JSON is not an array of strings: %r", type(value).__name__)
        raise ResponseParseError()
    return value


def parse_task_list(reply: str) -> list[str]:
    """
    Extract and validate the task strings from a model reply.

    Examples:
        >>> parse_task_list('```json\\n["Task 1", "Task 2"]\\n```')
        ['Task 1', 'Task 2']

        >>> parse_task_list('Sure! Here you go: ["Call Bob"]')
        ['Call Bob']

    Raises:
        InvalidResponseFormatError: No array found in the reply
        ResponseParseError: Fragment is not valid JSON or not all strings
    """
    fragment = extract_json_array(reply)

    try:
        value = json.loads(fragment)
    except json.JSONDecodeError as e:
        counter("ingest.parser.invalid_json")
        logger.error("Failed to parse model JSON (%s): %s", e, redact_text(fragment, 80))
        raise ResponseParseError() from e

    return validate_task_list(value)
