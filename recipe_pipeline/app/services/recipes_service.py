"""Recipe import: content retrieval followed by model structuring."""

import logging
from typing import List, Optional

from recipe_pipeline.app.core.deadline import run_with_deadline
from recipe_pipeline.app.core.errors import InvalidRequestError, RecipePipelineError
from recipe_pipeline.app.repositories.base import AIConfigRepository, RecipeRepository
from recipe_pipeline.app.schemas.recipe import Instruction, Recipe, SourceType
from recipe_pipeline.app.services.ai.base import RecipeModel
from recipe_pipeline.app.services.ai.models import ModelFactory
from recipe_pipeline.app.services.ai_preferences import ModelDefaults, resolve_model_preferences
from recipe_pipeline.app.services.pdf_parsing import extract_pdf_text_async
from recipe_pipeline.app.services.storage.base import StorageProvider
from recipe_pipeline.app.services.url_parsing import ContentFetcher, ContentParser

logger = logging.getLogger(__name__)


class RecipeImportService:
    """Turns a URL, a PDF or free text into structured recipe data.

    Every entry point accepts ``timeout`` in seconds; when it elapses the
    in-flight work is cancelled and :class:`DeadlineExceededError` is raised.
    Failures propagate unchanged apart from added context. When a
    ``recipes`` repository is given the imported recipe is saved there.
    """

    def __init__(
        self,
        model_factory: ModelFactory,
        ai_configs: AIConfigRepository,
        defaults: ModelDefaults,
        fetcher: Optional[ContentFetcher] = None,
        parser: Optional[ContentParser] = None,
        storage: Optional[StorageProvider] = None,
        recipes: Optional[RecipeRepository] = None,
    ):
        self.model_factory = model_factory
        self.ai_configs = ai_configs
        self.defaults = defaults
        self.fetcher = fetcher or ContentFetcher(model_factory.settings)
        self.parser = parser or ContentParser()
        self.storage = storage
        self.recipes = recipes

    async def _model_for(self, user_id: str) -> RecipeModel:
        config = await self.ai_configs.get_default_config(user_id)
        prefs = resolve_model_preferences(config, self.defaults)
        return self.model_factory.create_model(prefs.model_type, prefs.api_key)

    def _attach_image(self, recipe: Recipe, image: Optional[bytes], image_filename: Optional[str]) -> None:
        if not image:
            return
        if self.storage is None:
            logger.warning("Image supplied for %r but no storage is configured; skipping", recipe.title)
            return
        recipe.image_url = self.storage.save_image(image, image_filename)

    async def _store(self, recipe: Recipe, image: Optional[bytes], image_filename: Optional[str]) -> Recipe:
        self._attach_image(recipe, image, image_filename)
        if self.recipes is None:
            return recipe
        try:
            return await self.recipes.save(recipe)
        except BaseException:
            if recipe.image_url and self.storage is not None:
                logger.info("Removing image %s after failed save", recipe.image_url)
                self.storage.delete_image(recipe.image_url)
            raise

    async def import_from_url(
        self,
        user_id: str,
        url: str,
        image: Optional[bytes] = None,
        image_filename: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Recipe:
        try:
            return await run_with_deadline(self._import_from_url(user_id, url, image, image_filename), timeout)
        except RecipePipelineError as exc:
            logger.warning("Recipe import from %s failed: %s", url, exc)
            raise exc.with_context(f"import url={url}")

    async def _import_from_url(
        self, user_id: str, url: str, image: Optional[bytes], image_filename: Optional[str]
    ) -> Recipe:
        model = await self._model_for(user_id)
        html = await self.fetcher.fetch(url)
        content = self.parser.parse(html)
        logger.info("Parsing %d characters from %s with %s", len(content), url, model.model_name)
        recipe = await model.parse(content, "webpage")
        recipe.user_id = user_id
        recipe.source = url
        recipe.source_type = SourceType.URL
        return await self._store(recipe, image, image_filename)

    async def import_from_pdf(
        self,
        user_id: str,
        data: bytes,
        filename: Optional[str] = None,
        image: Optional[bytes] = None,
        image_filename: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Recipe:
        try:
            return await run_with_deadline(
                self._import_from_pdf(user_id, data, filename, image, image_filename), timeout
            )
        except RecipePipelineError as exc:
            logger.warning("Recipe import from PDF %s failed: %s", filename or "<upload>", exc)
            raise exc.with_context(f"import pdf={filename or '<upload>'}")

    async def _import_from_pdf(
        self,
        user_id: str,
        data: bytes,
        filename: Optional[str],
        image: Optional[bytes],
        image_filename: Optional[str],
    ) -> Recipe:
        model = await self._model_for(user_id)
        text = await extract_pdf_text_async(data)
        logger.info("Parsing %d characters of PDF text with %s", len(text), model.model_name)
        recipe = await model.parse(text, "pdf")
        recipe.user_id = user_id
        recipe.source = filename
        recipe.source_type = SourceType.PDF
        return await self._store(recipe, image, image_filename)

    async def parse_instructions(
        self, user_id: str, text: str, timeout: Optional[float] = None
    ) -> List[Instruction]:
        try:
            if not (text or "").strip():
                raise InvalidRequestError("instruction text is empty")
            return await run_with_deadline(self._parse_instructions(user_id, text), timeout)
        except RecipePipelineError as exc:
            logger.warning("Instruction parsing for user %s failed: %s", user_id, exc)
            raise exc.with_context("parse instructions")

    async def _parse_instructions(self, user_id: str, text: str) -> List[Instruction]:
        model = await self._model_for(user_id)
        return await model.parse_instructions(text)
