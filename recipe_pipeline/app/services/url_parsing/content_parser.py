"""Isolation of recipe-relevant text from an HTML document."""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Comment
from bs4.element import Tag

from recipe_pipeline.app.core.errors import NoContentFoundError, ParseError
from recipe_pipeline.app.services.url_parsing.constants import (
    MAIN_CONTENT_SELECTORS,
    UNWANTED_SELECTORS,
)
from recipe_pipeline.app.services.url_parsing.parsing_utils import clean_extracted_content

logger = logging.getLogger(__name__)


class ContentParser:
    """Reduces a page to the text a model needs to read the recipe.

    Embedded schema.org JSON-LD is preferred because it is already structured;
    otherwise page chrome is stripped and the main content block is flattened
    to text.
    """

    def parse(self, html: str) -> str:
        if not isinstance(html, (str, bytes)):
            raise ParseError("HTML input must be text")
        try:
            soup = BeautifulSoup(html, "lxml")
        except (TypeError, ValueError) as exc:
            raise ParseError(f"unable to read HTML: {exc}") from exc

        json_ld = self._find_recipe_json_ld(soup)
        if json_ld is not None:
            return json_ld

        self._strip_unwanted(soup)
        node = self._find_main_content(soup)
        content = clean_extracted_content("\n\n".join(node.stripped_strings))
        if not content:
            raise NoContentFoundError()
        logger.debug("Extracted %d characters of page content", len(content))
        return content

    @staticmethod
    def _find_recipe_json_ld(soup: BeautifulSoup) -> Optional[str]:
        scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
        for idx, script in enumerate(scripts):
            raw = script.string or script.get_text()
            if raw and "recipe" in raw.lower():
                logger.info("Using JSON-LD block %d of %d", idx, len(scripts))
                return raw
        return None

    @staticmethod
    def _strip_unwanted(soup: BeautifulSoup) -> None:
        for selector in UNWANTED_SELECTORS:
            for el in soup.select(selector):
                if not el.decomposed:
                    el.decompose()

        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

        for el in soup.find_all(True):
            if not el.decomposed and not el.get_text(strip=True):
                el.decompose()

    @staticmethod
    def _find_main_content(soup: BeautifulSoup) -> Tag:
        node = soup.select_one(", ".join(MAIN_CONTENT_SELECTORS))
        if node is not None:
            logger.debug("Main content found in <%s>", node.name)
            return node
        return soup.body or soup
