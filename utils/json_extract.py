"""Tolerant extraction of a JSON object embedded in model output."""

import json
from collections.abc import Iterator
from typing import Any


def iter_object_spans(text: str) -> Iterator[str]:
    """
    Yield each balanced top-level ``{...}`` span in order.

    Braces inside JSON string literals are ignored, so nested objects and
    values such as ``"a}b"`` do not end a span early.
    """
    depth = 0
    start = -1
    in_string = False
    escaped = False

    for idx, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"' and depth > 0:
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = idx
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield text[start : idx + 1]
                start = -1


def extract_json_object(text: str) -> dict[str, Any]:
    """
    Return the first embedded JSON object that parses, or ``{}``.

    Prose, markdown fences and trailing commentary around the object are ignored.
    """
    if not isinstance(text, str):
        return {}

    for span in iter_object_spans(text):
        try:
            parsed = json.loads(span)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return {}
