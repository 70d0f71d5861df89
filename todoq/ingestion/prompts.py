"""Prompt text for task extraction."""

from __future__ import annotations

TASK_EXTRACTION_PROMPT = (
    "Extract all actionable to-do list items or feedback points from the following text. "
    "Focus on specific actions or requests. Return the result ONLY as a JSON array of "
    "strings, where each string is a single task. Do not include any introductory text "
    'or explanations, just the JSON array. Text:\n\n"{text}"'
)


def build_task_extraction_prompt(text: str) -> str:
    return TASK_EXTRACTION_PROMPT.format(text=text)
