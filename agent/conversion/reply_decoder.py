"""
Reply Decoder — recovers a StructuredAnswer from free-form model output.

Models are asked to answer with {"message": ..., "author": ..., "type": ...}
but do not always comply: they wrap the JSON in prose, emit reasoning spans,
or put raw newlines inside strings. Decoding tries, in order:

  1. the whole cleaned reply
  2. the first {...} span (non-greedy)
  3. a balanced scan from the first { or [
  4. the cleaned reply as plain text

extract_answer() never raises.
"""

import json
import logging
import re
from typing import Any, Optional

from agent.models.message import StructuredAnswer

logger = logging.getLogger(__name__)

THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
FIRST_OBJECT_PATTERN = re.compile(r"\{[\s\S]*?\}")

_CONTROL_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_CLOSERS = {"{": "}", "[": "]"}


def fix_control_characters(text: str) -> str:
    """Escape raw control characters that appear inside JSON string literals."""
    out = []
    in_string = False
    escaped = False

    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            elif ch in _CONTROL_ESCAPES:
                out.append(_CONTROL_ESCAPES[ch])
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)

    return "".join(out)


def find_balanced_json(text: str) -> Optional[str]:
    """
    Return the first balanced {...} or [...] span, skipping string contents.
    None if there is no JSON start or it never closes.
    """
    start = next((i for i, ch in enumerate(text) if ch in _CLOSERS), None)
    if start is None:
        return None

    stack = []
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack[-1] != ch:
                return None
            stack.pop()
            if not stack:
                return text[start:i + 1]

    return None


def _parse_answer(candidate: Optional[str]) -> Optional[StructuredAnswer]:
    if candidate is None:
        return None
    try:
        parsed: Any = json.loads(fix_control_characters(candidate))
    except (ValueError, RecursionError):
        return None
    if isinstance(parsed, dict) and "message" in parsed:
        return StructuredAnswer.from_dict(parsed)
    return None


def extract_answer(raw: Optional[str], fallback_author: str) -> Optional[StructuredAnswer]:
    """
    Decode a model reply.

    Args:
        raw: The raw reply text
        fallback_author: Author used when the reply is plain text

    Returns:
        A StructuredAnswer, or None when nothing is left after removing
        reasoning spans.
    """
    cleaned = THINK_PATTERN.sub("", raw or "").strip()
    if not cleaned:
        return None

    answer = _parse_answer(cleaned)
    if answer is not None:
        return answer

    match = FIRST_OBJECT_PATTERN.search(cleaned)
    answer = _parse_answer(match.group() if match else None)
    if answer is not None:
        return answer

    answer = _parse_answer(find_balanced_json(cleaned))
    if answer is not None:
        return answer

    logger.debug(f"Reply is not structured JSON, using plain text ({len(cleaned)} chars)")
    return StructuredAnswer(message=cleaned, author=fallback_author, type="text")
