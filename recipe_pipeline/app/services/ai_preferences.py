"""Selection of the model and API key used for a user's request."""

import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from recipe_pipeline.app.core.config import Settings
from recipe_pipeline.app.core.errors import UnsupportedModelError
from recipe_pipeline.app.schemas.ai_config import UserAIConfig
from recipe_pipeline.app.services.ai.models import ModelType, resolve_model_type

logger = logging.getLogger(__name__)


class ModelDefaults(BaseModel):
    """System-wide model type plus each provider's fallback key."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_type: ModelType
    provider_keys: Dict[str, Optional[SecretStr]] = Field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelDefaults":
        return cls(
            model_type=ModelType.parse(settings.default_ai_model),
            provider_keys={
                "openai": settings.openai_api_key,
                "anthropic": settings.anthropic_api_key,
            },
        )

    def key_for(self, provider: str) -> Optional[SecretStr]:
        return self.provider_keys.get(provider)


class ModelPreferences(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_type: ModelType
    api_key: Optional[SecretStr]


def _has_key(key: Optional[SecretStr]) -> bool:
    return key is not None and bool(key.get_secret_value())


def resolve_model_preferences(
    config: Optional[UserAIConfig], defaults: ModelDefaults
) -> ModelPreferences:
    """Pick the model and key for a request.

    No stored config means the system model with its provider's default key.
    A stored config selects the user's model; their own key is used when
    present, otherwise the provider default. A stored model outside the
    supported set raises :class:`UnsupportedModelError`.
    """
    if config is None:
        return ModelPreferences(
            model_type=defaults.model_type, api_key=defaults.key_for(defaults.model_type.provider)
        )

    if config.ai_model is None:
        raise UnsupportedModelError(f"AI config {config.id} has no model attached")
    model_type = resolve_model_type(config.ai_model.provider, config.ai_model.model_version)

    if _has_key(config.api_key):
        return ModelPreferences(model_type=model_type, api_key=config.api_key)
    logger.debug("User %s has no stored key for %s; using provider default", config.user_id, model_type.value)
    return ModelPreferences(model_type=model_type, api_key=defaults.key_for(model_type.provider))
