from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr


class AIModel(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    id: str
    name: str
    provider: str
    model_version: str
    is_active: bool = True


class UserAIConfig(BaseModel):
    id: str
    user_id: str
    ai_model_id: str
    api_key: Optional[SecretStr] = None
    is_default: bool = False
    ai_model: Optional[AIModel] = None
