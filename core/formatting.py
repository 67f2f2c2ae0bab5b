# =============================================================================
# core/formatting.py  -  Response Shaper (Context Budget Discipline)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns whatever JSON Socrata sent back into the text an agent receives.
#   Three steps, always in this order:
#
#     1. PROJECT   detail="concise" + a list  ->  keep only
#                  id / name / title / description / domain per record
#     2. BOUND     serialized > 25,000 chars  ->  replace the WHOLE payload
#                  with a small marker object (never half a JSON document)
#     3. SERIALIZE pretty-printed JSON text
#
#   Markdown is a wrapper the tool layer puts AROUND this text; see
#   markdown_document() below.
#
# WHY A HARD CHARACTER LIMIT?
#   A catalog search can return megabytes.  Dumping that into an LLM's
#   context wastes tokens and buries the useful part.  A marker object that
#   says "truncated, here is the original size" tells the agent to narrow its
#   query (smaller limit, concise detail) instead.
# =============================================================================

import json
from typing import Any, Iterable, Mapping, Optional

from core.models import FormatOptions

CHARACTER_LIMIT = 25000
CONCISE_FIELDS = ("id", "name", "title", "description", "domain")


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def project(data: Any, detail: str = "detailed") -> Any:
    """Apply the concise projection.  Only lists are ever projected."""
    if detail != "concise" or not isinstance(data, list):
        return data

    projected = []
    for item in data:
        if isinstance(item, Mapping):
            projected.append({key: item[key] for key in CONCISE_FIELDS if key in item})
        else:
            projected.append(item)
    return projected


def truncate(data: Any, limit: int = CHARACTER_LIMIT) -> Any:
    """Return `data` unchanged, or a marker object if it serializes too long.

    The marker keeps the original's top-level scalar fields (counts, ids,
    names) so the agent still knows what it was looking at.  Nested
    containers are dropped; they are what made the payload too big.
    """
    text = to_json(data)
    if len(text) <= limit:
        return data

    marker: dict[str, Any] = {}
    if isinstance(data, Mapping):
        marker.update(
            (key, value)
            for key, value in data.items()
            if not isinstance(value, (Mapping, list, tuple))
        )
    elif isinstance(data, (list, tuple)):
        marker["_item_count"] = len(data)

    marker["_truncated"] = True
    marker["_message"] = (
        f"Response truncated at {limit} characters. Original length: {len(text)}"
    )
    marker["_original_length"] = len(text)
    return marker


def shape(data: Any, options: Optional[FormatOptions] = None) -> str:
    """Project, bound and serialize `data` into the text sent to the agent."""
    options = options or FormatOptions()
    return to_json(truncate(project(data, options.detail)))


def markdown_document(
    title: str,
    facts: Iterable[tuple[str, Any]],
    body: str,
    summary: Optional[str] = None,
) -> str:
    """Heading + "**Key:** value" lines + fenced JSON block."""
    lines = [f"# {title}", ""]
    lines.extend(f"**{label}:** {value}" for label, value in facts)
    if summary:
        lines.append(summary)
    lines.extend(["", "```json", body, "```"])
    return "\n".join(lines)


def page_number(offset: int, limit: int) -> int:
    """1-based page number for an offset/limit pair."""
    return offset // limit + 1 if limit else 1
