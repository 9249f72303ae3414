"""Recover a JSON object from free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any

from app.utils.exceptions import MalformedResponseError

_JSON_FENCE = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```([\s\S]*?)```")


def _candidate_text(text: str) -> str:
    match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
    return (match.group(1) if match else text).strip()


def extract_json(text: str | None) -> dict[str, Any]:
    """Parse the JSON object embedded in ``text``.

    A ```json fenced block wins over any other fenced block, which wins
    over the raw text. Inside the chosen candidate the substring from the
    first ``{`` to the last ``}`` is parsed.

    Raises:
        MalformedResponseError: no brace pair, invalid JSON, or a non-object.
    """
    candidate = _candidate_text(text or "")

    first = candidate.find("{")
    last = candidate.rfind("}")
    if first == -1 or last == -1 or last < first:
        raise MalformedResponseError("No JSON found")

    try:
        data = json.loads(candidate[first : last + 1])
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON in model output: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Model output is not a JSON object")
    return data
