import logging

from recipe_pipeline.app.core.errors import ModelError
from recipe_pipeline.app.services.ai.base import RecipeModel

logger = logging.getLogger(__name__)


class ClaudeModel(RecipeModel):
    """Anthropic messages backend."""

    provider = "anthropic"

    def __init__(self, *args, anthropic_version: str = "2023-06-01", **kwargs):
        super().__init__(*args, **kwargs)
        self.anthropic_version = anthropic_version

    async def _complete(self, prompt: str) -> str:
        payload = {
            "model": self.model_name,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self.anthropic_version,
        }
        data = await self._post("/v1/messages", payload, headers)

        blocks = data.get("content")
        if not isinstance(blocks, list):
            raise ModelError("anthropic response missing content")
        text = "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )
        if not text:
            raise ModelError("no response content from anthropic")
        logger.debug("anthropic %s returned %d characters", self.model_name, len(text))
        return text
