import logging

from recipe_pipeline.app.core.errors import ModelError
from recipe_pipeline.app.services.ai.base import RecipeModel

logger = logging.getLogger(__name__)


class GPTModel(RecipeModel):
    """OpenAI chat-completions backend."""

    provider = "openai"

    async def _complete(self, prompt: str) -> str:
        payload = {
            "model": self.model_name,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        data = await self._post("/v1/chat/completions", payload, headers)

        if data.get("error"):
            raise ModelError(f"openai returned error: {self._error_message(data['error'])}")
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ModelError("openai response missing choices") from exc
        if not content:
            raise ModelError("no response content from openai")
        logger.debug("openai %s returned %d characters", self.model_name, len(content))
        return content

    def _error_message(self, error) -> str:
        if isinstance(error, dict):
            error = error.get("message") or error.get("type") or "unknown error"
        return self._redact(str(error))
