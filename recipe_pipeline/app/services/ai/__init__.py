"""Language-model backends used to structure recipe content."""

from recipe_pipeline.app.services.ai.base import RecipeModel
from recipe_pipeline.app.services.ai.claude_model import ClaudeModel
from recipe_pipeline.app.services.ai.gpt_model import GPTModel
from recipe_pipeline.app.services.ai.models import ModelFactory, ModelType, resolve_model_type

__all__ = [
    "ClaudeModel",
    "GPTModel",
    "ModelFactory",
    "ModelType",
    "RecipeModel",
    "resolve_model_type",
]
