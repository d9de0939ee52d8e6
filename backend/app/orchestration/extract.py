"""Recover a JSON document from free-form model output.

The model may answer with clean JSON, JSON inside a markdown fence, JSON
surrounded by prose, or no JSON at all. Extraction takes a single slice from
the first opening delimiter to the last matching closing delimiter and keeps
it only if it parses; nothing is repaired.
"""

import json
import logging
import re

logger = logging.getLogger(__name__)

# A line holding only a fence marker, optionally followed by a language tag.
_FENCE_LINE_PATTERN = re.compile(r"^[ \t]*```[\w+-]*[ \t]*$", re.MULTILINE)

_CLOSERS = {"{": "}", "[": "]"}


def strip_fences(text: str) -> str:
    """Drop fence delimiter lines, keeping the enclosed content."""
    return _FENCE_LINE_PATTERN.sub("", text).strip()


def extract_json_candidate(text: str) -> str | None:
    """Return the JSON substring of `text`, or None when no parseable slice exists."""
    cleaned = strip_fences(text)

    starts = [idx for idx in (cleaned.find("{"), cleaned.find("[")) if idx != -1]
    if not starts:
        return None

    start = min(starts)
    end = cleaned.rfind(_CLOSERS[cleaned[start]])
    if end <= start:
        return None

    candidate = cleaned[start : end + 1]
    try:
        json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON candidate failed to parse: {e}")
        return None

    return candidate
