"""
Recovery of the JSON object embedded in a free-text model response.
"""
import json
import logging
import re
from typing import Any, Dict, Optional

from coactivo.errors import MalformedModelOutput

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r'```json|```', re.IGNORECASE)

# Greedy on purpose: first "{" to last "}". Two objects in one reply are
# spanned together and will usually fail to parse.
_OBJECT_RE = re.compile(r'\{.*\}', re.DOTALL)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_json_object(raw_text: Optional[str]) -> Dict[str, Any]:
    """
    Isolate and parse the JSON object in a model response.

    Code fences and any prose before the first brace or after the last brace
    are discarded. Keys are returned as the model sent them; defaults are the
    caller's concern.

    Args:
        raw_text: Text returned by the model.

    Returns:
        The decoded JSON object.

    Raises:
        MalformedModelOutput: If no JSON object can be recovered.
    """
    if not raw_text or not raw_text.strip():
        raise MalformedModelOutput('Empty response from model')

    cleaned = _FENCE_RE.sub('', raw_text)

    match = _OBJECT_RE.search(cleaned)
    if match is None:
        logger.warning(f"No JSON object found in model response ({len(raw_text)} chars)")
        raise MalformedModelOutput('No JSON object found in model response')

    candidate = match.group(0).strip()

    try:
        data = json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Failed to parse model response as JSON: {e}")
        raise MalformedModelOutput(f"Invalid JSON in model response: {e}") from e

    if not isinstance(data, dict):
        raise MalformedModelOutput('Model response JSON is not an object')

    return data
