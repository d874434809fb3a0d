"""Text cleanup helpers for extracted page content."""

import re
from typing import Iterable

from recipe_pipeline.app.services.url_parsing.constants import (
    BOILERPLATE_PHRASES,
    MIN_LINE_LENGTH,
)

_BOILERPLATE_RE = re.compile(
    "|".join(re.escape(phrase) for phrase in BOILERPLATE_PHRASES), flags=re.I
)


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def strip_boilerplate(text: str) -> str:
    """Remove known boilerplate phrases, case-insensitively."""
    return clean_text(_BOILERPLATE_RE.sub("", text or ""))


def clean_extracted_content(content: str, min_line_length: int = MIN_LINE_LENGTH) -> str:
    """Tidy text joined from page nodes.

    Each line has its whitespace collapsed and boilerplate removed; non-blank
    lines shorter than ``min_line_length`` (buttons, nav labels) are dropped and
    paragraph breaks are capped at one blank line.
    """
    lines: Iterable[str] = (strip_boilerplate(line) for line in content.splitlines())
    kept = [line for line in lines if not line or len(line) >= min_line_length]
    cleaned = "\n".join(kept)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()
