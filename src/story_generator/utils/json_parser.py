"""JSON extraction utilities for parsing text-provider responses."""

import json
import logging
import re
from typing import Any

from story_generator.utils.exceptions import JSONParseError

logger = logging.getLogger(__name__)


def clean_provider_text(text: str) -> str:
    """Clean provider output by removing thinking tags and other artifacts.

    Args:
        text: Raw text from the provider.

    Returns:
        Cleaned text suitable for display.
    """
    if not text:
        return text

    # Remove <think>...</think> blocks (including content)
    cleaned = re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL)

    # Remove orphan opening/closing tags
    cleaned = re.sub(r"</?think>", "", cleaned)

    # Special tokens like <|endoftext|>
    cleaned = re.sub(r"<\|.*?\|>", "", cleaned)

    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()


def _try_parse_json(json_str: str) -> dict[str, Any] | list[Any] | None:
    """Try to parse a string as JSON.

    Args:
        json_str: String to parse.

    Returns:
        Parsed JSON or None if parsing fails.
    """
    try:
        parsed: dict[str, Any] | list[Any] = json.loads(json_str.strip())
        return parsed
    except json.JSONDecodeError as e:
        logger.debug("try_parse failed: %s (input preview: %.100s...)", e, json_str)
        return None


def extract_json(response: str, strict: bool = True) -> dict[str, Any] | list[Any] | None:
    """Extract a JSON object or array from a provider response.

    Tries multiple extraction strategies in order:
    1. ```json code block (markdown standard)
    2. ``` code block (without language marker)
    3. Raw JSON object {...} or array [...]

    Args:
        response: The provider response text
        strict: If True (default), raises JSONParseError on failure.
                If False, returns None on failure.

    Returns:
        Parsed JSON (dict or list), or None only if strict=False and parsing fails.

    Raises:
        JSONParseError: If strict=True and no valid JSON could be extracted.
    """
    response = clean_provider_text(response or "")

    json_match = re.search(r"```json\s*(.*?)\s*```", response, re.DOTALL)
    if json_match:
        result = _try_parse_json(json_match.group(1))
        if result is not None:
            return result
        logger.debug("Found ```json block but failed to parse")

    code_match = re.search(r"```\s*(.*?)\s*```", response, re.DOTALL)
    if code_match:
        result = _try_parse_json(code_match.group(1))
        if result is not None:
            return result
        logger.debug("Found ``` block but failed to parse")

    json_obj_match = re.search(r"(\{[\s\S]*\})", response)
    if json_obj_match:
        result = _try_parse_json(json_obj_match.group(1))
        if result is not None:
            return result
        logger.debug("Found raw JSON object but failed to parse")

    json_arr_match = re.search(r"(\[[\s\S]*\])", response)
    if json_arr_match:
        result = _try_parse_json(json_arr_match.group(1))
        if result is not None:
            return result
        logger.debug("Found raw JSON array but failed to parse")

    error_msg = f"No valid JSON found in response. Response preview: {response[:200]}..."
    if strict:
        logger.error(error_msg)
        raise JSONParseError(
            error_msg,
            response_preview=response[:500],
            expected_type="dict or list",
        )
    # Plain prose is a normal provider answer when strict=False
    logger.debug(error_msg)
    return None


def extract_json_object(response: str) -> dict[str, Any] | None:
    """Extract a JSON object from a response, tolerating prose answers.

    A top-level list whose first element is an object yields that object.

    Args:
        response: The provider response text.

    Returns:
        The parsed object, or None when the response holds no JSON object.
    """
    data = extract_json(response, strict=False)
    if isinstance(data, dict):
        return data
    if isinstance(data, list) and data and isinstance(data[0], dict):
        logger.warning("Response held a list of %d objects, using the first", len(data))
        first: dict[str, Any] = data[0]
        return first
    return None
