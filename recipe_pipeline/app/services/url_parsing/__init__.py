"""URL recipe parsing package.

Fetching a page and reducing it to recipe text ahead of model parsing.
"""

from recipe_pipeline.app.services.url_parsing.content_parser import ContentParser
from recipe_pipeline.app.services.url_parsing.html_fetcher import ContentFetcher, is_private_host
from recipe_pipeline.app.services.url_parsing.parsing_utils import (
    clean_extracted_content,
    clean_text,
    strip_boilerplate,
)

__all__ = [
    # HTML fetching
    "ContentFetcher",
    "is_private_host",
    # Content extraction
    "ContentParser",
    # Parsing utilities
    "clean_extracted_content",
    "clean_text",
    "strip_boilerplate",
]
