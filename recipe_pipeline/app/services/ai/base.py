"""Shared behaviour of the language-model backends."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import httpx

from recipe_pipeline.app.core.errors import ModelError
from recipe_pipeline.app.schemas.recipe import Instruction, Recipe
from recipe_pipeline.app.schemas.shopping_list import Category
from recipe_pipeline.app.services.ai.prompts import (
    build_categorize_prompt,
    build_instructions_prompt,
    build_recipe_prompt,
)
from recipe_pipeline.app.services.ai.response_parser import (
    parse_categories_response,
    parse_instructions_response,
    parse_recipe_response,
)

logger = logging.getLogger(__name__)


class RecipeModel(ABC):
    """A model that can read recipes, number instructions and categorise items.

    Subclasses only implement :meth:`_complete`, a single prompt-in/text-out
    round trip against their provider.
    """

    provider: str = ""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model_name: str,
        base_url: str,
        max_tokens: int = 2000,
    ):
        self._client = client
        self._api_key = api_key
        self.model_name = model_name
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_name={self.model_name!r}, api_key='****')"

    @abstractmethod
    async def _complete(self, prompt: str) -> str:
        raise NotImplementedError

    async def parse(self, content: str, content_type: str) -> Recipe:
        raw = await self._complete(build_recipe_prompt(content, content_type))
        return parse_recipe_response(raw)

    async def parse_instructions(self, text: str) -> List[Instruction]:
        raw = await self._complete(build_instructions_prompt(text))
        return parse_instructions_response(raw)

    async def categorize_items(self, items: Sequence[str]) -> List[Category]:
        if not items:
            return []
        raw = await self._complete(build_categorize_prompt(items))
        return parse_categories_response(raw, items)

    def _redact(self, text: str) -> str:
        if self._api_key:
            text = text.replace(self._api_key, "****")
        return text

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return self._redact(response.text[:200])
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return self._redact(str(error["message"]))
        return self._redact(response.text[:200])

    async def _post(self, path: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = await self._client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("%s request to %s timed out", self.provider, self.model_name)
            raise ModelError(f"{self.provider} request timed out") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = self._error_detail(exc.response)
            logger.warning("%s request failed with status %s: %s", self.provider, status, detail)
            if status == 429:
                raise ModelError(f"{self.provider} rate limit exceeded: {detail}", status_code=status) from exc
            raise ModelError(f"{self.provider} API error ({status}): {detail}", status_code=status) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.provider, type(exc).__name__)
            raise ModelError(f"{self.provider} request failed: {type(exc).__name__}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise ModelError(
                f"{self.provider} returned a non-JSON body", status_code=resp.status_code
            ) from exc
        if not isinstance(data, dict):
            raise ModelError(f"{self.provider} returned an unexpected body", status_code=resp.status_code)
        return data
