"""JSON cleanup for grounded LLM responses.

Search-grounded Gemini calls cannot use JSON mode, so the reply is free
text that is asked to be raw JSON. Models still wrap it in markdown fences
now and then; those markers are removed before a strict parse.
"""
import json
import re
from typing import Any

_FENCE_PATTERN = re.compile(r"```(?:json)?")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and surrounding whitespace.

    Handles:
    - ```json ... ``` fenced blocks
    - ``` ... ``` generic fenced blocks
    - Plain JSON (returned trimmed)
    - None (returned as "")
    """
    if not text:
        return ""
    return _FENCE_PATTERN.sub("", text).strip()


def parse_llm_json(text: str) -> Any:
    """Strip fences and parse strictly.

    No repair and no scanning for embedded objects: anything that is not a
    single JSON document after cleanup raises ``json.JSONDecodeError``.
    """
    return json.loads(strip_code_fences(text))
