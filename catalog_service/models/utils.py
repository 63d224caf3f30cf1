"""
Utility functions for parsing structured LLM responses.
"""

import json
import re
from typing import Any, Dict, List, Tuple

from .assistant import QuizQuestion, SearchResponse

_RECOMMENDED_TAG = re.compile(r"RECOMMENDED:\s*\[(.*?)\]")


def clean_json_response(response: str) -> str:
    """Clean up LLM response to extract JSON content."""
    response = response.strip()
    if response.startswith('```json'):
        response = response[7:]
    if response.startswith('```'):
        response = response[3:]
    if response.endswith('```'):
        response = response[:-3]

    return response.strip()


def load_json_object(raw: str) -> Dict[str, Any]:
    """Parse a JSON object out of an LLM reply, tolerating code fences."""
    data = json.loads(clean_json_response(raw))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_quiz(raw: str) -> QuizQuestion:
    """Parse a quiz question from JSON string."""
    return QuizQuestion.model_validate(load_json_object(raw))


def parse_search_response(raw: str) -> SearchResponse:
    """Parse the ordered relevance list from JSON string."""
    return SearchResponse.model_validate(load_json_object(raw))


def extract_recommended_ids(text: str) -> Tuple[str, List[str]]:
    """Split a trailing ``RECOMMENDED: [a, b]`` marker off a chat reply.

    Returns the text without the marker and the ids it listed.
    """
    match = _RECOMMENDED_TAG.search(text)
    if not match:
        return text.strip(), []
    ids = [part.strip().strip("'\"") for part in match.group(1).split(",")]
    cleaned = (text[:match.start()] + text[match.end():]).strip()
    return cleaned, [i for i in ids if i]
