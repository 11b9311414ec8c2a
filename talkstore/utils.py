"""Shared helpers for paging, version tokens and search text."""

import re
import uuid

from talkstore.config import PAGE_SIZE


def page_offset(page: int, page_size: int = PAGE_SIZE) -> int:
    """Convert a 1-based page number to a 0-based row offset."""
    return max(0, page - 1) * page_size


def page_range(page: int, page_size: int = PAGE_SIZE) -> tuple:
    """Return the inclusive (start, end) row range for a 1-based page."""
    start = page_offset(page, page_size)
    return start, start + page_size - 1


def new_version() -> str:
    """Generate an opaque version token for a stored talk."""
    return uuid.uuid4().hex


def unique_tags(tags) -> list:
    """Drop blank and duplicate tags, keeping first-seen order."""
    seen = set()
    result = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def normalize_search_text(text: str) -> str:
    """Collapse whitespace in a search query. Returns '' for blank input."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()
