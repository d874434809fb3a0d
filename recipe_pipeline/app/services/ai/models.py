"""Model catalogue and construction of backend clients."""

import enum
import logging
from typing import Optional, Union

import httpx
from pydantic import SecretStr

from recipe_pipeline.app.core.config import Settings, get_settings
from recipe_pipeline.app.core.errors import MissingAPIKeyError, UnsupportedModelError
from recipe_pipeline.app.services.ai.base import RecipeModel
from recipe_pipeline.app.services.ai.claude_model import ClaudeModel
from recipe_pipeline.app.services.ai.gpt_model import GPTModel

logger = logging.getLogger(__name__)


class ModelType(str, enum.Enum):
    GPT_4 = "gpt-4"
    GPT_35_TURBO = "gpt-3.5-turbo"
    CLAUDE = "claude-3-7-sonnet-latest"

    @property
    def provider(self) -> str:
        if self is ModelType.CLAUDE:
            return "anthropic"
        return "openai"

    @classmethod
    def parse(cls, value: Union[str, "ModelType"]) -> "ModelType":
        try:
            return cls(value)
        except ValueError as exc:
            raise UnsupportedModelError(f"unsupported model type: {value}") from exc


_MODEL_TABLE = {
    ("openai", "gpt-4"): ModelType.GPT_4,
    ("openai", "gpt-3.5-turbo"): ModelType.GPT_35_TURBO,
}


def resolve_model_type(provider: str, version: str) -> ModelType:
    """Map a catalogue ``(provider, model_version)`` pair onto a backend."""
    p = (provider or "").strip().lower()
    v = (version or "").strip().lower()
    model_type = _MODEL_TABLE.get((p, v))
    if model_type is not None:
        return model_type
    if p == "anthropic" and v.startswith("claude"):
        return ModelType.CLAUDE
    raise UnsupportedModelError(f"unsupported model: {provider}/{version}")


class ModelFactory:
    """Builds :class:`RecipeModel` instances over one shared HTTP client.

    Call :meth:`aclose` when done if the factory created its own client.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.llm_timeout_seconds, connect=10.0)
        )

    def create_model(
        self, model_type: Union[ModelType, str], api_key: Union[SecretStr, str, None]
    ) -> RecipeModel:
        model_type = ModelType.parse(model_type)
        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()
        if not api_key:
            raise MissingAPIKeyError(f"no API key configured for {model_type.value}")

        logger.debug("Creating %s model", model_type.value)
        common = dict(client=self._client, api_key=api_key, max_tokens=self.settings.llm_max_tokens)
        if model_type is ModelType.CLAUDE:
            return ClaudeModel(
                model_name=self.settings.claude_model_name,
                base_url=self.settings.anthropic_base_url,
                anthropic_version=self.settings.anthropic_version,
                **common,
            )
        return GPTModel(model_name=model_type.value, base_url=self.settings.openai_base_url, **common)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
