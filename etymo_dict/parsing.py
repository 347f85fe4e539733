"""Turn a model's free-form text into a validated ``DictionaryEntry``.

Parsing happens in three stages so that each failure is reported as what it
is: fence stripping never fails, ``parse_payload`` raises
``MalformedResponse`` and ``validate_entry`` raises ``InvalidSchema``.
"""

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .errors import InvalidSchema, MalformedResponse
from .models import DictionaryEntry

_FENCE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\n?(.*?)```", re.DOTALL)
_OPEN_FENCE = re.compile(r"^```[ \t]*(?:json|JSON)?[ \t]*\n?")


def strip_code_fence(text: str) -> str:
    """Return the body of the first ```json fence, or the text itself."""
    match = _FENCE.search(text)
    if match:
        return match.group(1).strip()
    # Truncated replies may open a fence without closing it.
    text = _OPEN_FENCE.sub("", text.strip())
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_payload(text: str, model: Optional[str] = None) -> Dict[str, Any]:
    """Parse the (unfenced) text as a single JSON object."""
    if not text:
        raise MalformedResponse("Empty response", model=model)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Invalid JSON response: {e}", model=model) from e
    if not isinstance(payload, dict):
        raise InvalidSchema(f"Expected a JSON object, got {type(payload).__name__}", model=model)
    return payload


def validate_entry(payload: Dict[str, Any], model: Optional[str] = None) -> DictionaryEntry:
    try:
        return DictionaryEntry.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(loc) for loc in err["loc"]) for err in e.errors()})
        raise InvalidSchema(f"Response does not match the entry schema: {', '.join(fields)}", model=model) from e


def parse_entry(text: Any, model: Optional[str] = None) -> DictionaryEntry:
    """Run all three stages on raw model output."""
    if not isinstance(text, str):
        raise MalformedResponse(f"Expected text, got {type(text).__name__}", model=model)
    return validate_entry(parse_payload(strip_code_fence(text), model=model), model=model)
