"""Recovery and parsing of JSON replies from generative models."""

from typing import Any
import json
import re

import msgspec
import orjson

_JSON_FENCE = re.compile(r"^```json[ \t]*\n?", re.IGNORECASE)
_BARE_FENCE = re.compile(r"^```[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")

_decoder = msgspec.json.Decoder()


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code fence.

    Only a fence at the very start of the (trimmed) text is recognised; a
    ```json fence is tried before a bare ``` fence.

    Args:
        text: Raw model output

    Returns:
        Text without the opening and closing fence, trimmed
    """
    text = text.strip()

    if _JSON_FENCE.match(text):
        text = _JSON_FENCE.sub("", text, count=1)
        text = _CLOSING_FENCE.sub("", text, count=1)
    elif _BARE_FENCE.match(text):
        text = _BARE_FENCE.sub("", text, count=1)
        text = _CLOSING_FENCE.sub("", text, count=1)

    return text.strip()


def extract_json_candidate(text: str) -> str:
    """
    Reduce model output to the substring that should hold the JSON object.

    Args:
        text: Raw model output

    Returns:
        Candidate JSON text

    Raises:
        JSONParseError: If no object braces are present at all
    """
    cleaned = strip_code_fences(text)
    if cleaned.startswith("{") and cleaned.endswith("}"):
        return cleaned

    # Prose around the object: greedy first "{" through last "}"
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError("No JSON object found in model response")

    return cleaned[start:end + 1]


def extract_json(text: str) -> dict[str, Any]:
    """
    Extract and parse the JSON object from model output.

    There is no repair pass: a candidate that fails to decode is terminal.

    Args:
        text: Text containing JSON

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If extraction or parsing fails
    """
    candidate = extract_json_candidate(text)

    try:
        result = _decoder.decode(candidate)
    except (msgspec.DecodeError, UnicodeError) as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected JSON object, got {type(result).__name__}")

    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use stdlib for pretty-printed output (prompts) or as fallback
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)
