#!/usr/bin/env python
"""
Import a recipe with the system default model and print it as JSON.

Run manually:
    python scripts/import_recipe.py https://example.com/pancakes
    python scripts/import_recipe.py --pdf ./pancakes.pdf
    python scripts/import_recipe.py --instructions-file ./steps.txt
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from recipe_pipeline.app.core.config import get_settings
from recipe_pipeline.app.core.errors import RecipePipelineError
from recipe_pipeline.app.repositories.memory import InMemoryAIConfigRepository, InMemoryRecipeRepository
from recipe_pipeline.app.services.ai.models import ModelFactory
from recipe_pipeline.app.services.ai_preferences import ModelDefaults
from recipe_pipeline.app.services.recipes_service import RecipeImportService
from recipe_pipeline.app.services.storage.local import LocalStorageProvider

logger = logging.getLogger("import_recipe")

CLI_USER_ID = "cli"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("url", nargs="?", help="recipe page to import")
    source.add_argument("--pdf", type=Path, help="PDF file to import")
    source.add_argument("--instructions-file", type=Path, help="text file of instructions to number")
    parser.add_argument("--image", type=Path, help="image to store with the imported recipe")
    parser.add_argument("--timeout", type=float, default=None, help="overall deadline in seconds")
    return parser


async def run(args: argparse.Namespace) -> object:
    settings = get_settings()
    factory = ModelFactory(settings)
    service = RecipeImportService(
        model_factory=factory,
        ai_configs=InMemoryAIConfigRepository(),
        defaults=ModelDefaults.from_settings(settings),
        storage=LocalStorageProvider(settings.media_root, settings.media_base_url),
        recipes=InMemoryRecipeRepository(),
    )
    image = args.image.read_bytes() if args.image else None
    image_name = args.image.name if args.image else None
    try:
        if args.instructions_file:
            steps = await service.parse_instructions(
                CLI_USER_ID, args.instructions_file.read_text(), timeout=args.timeout
            )
            return [step.model_dump() for step in steps]
        if args.pdf:
            recipe = await service.import_from_pdf(
                CLI_USER_ID,
                args.pdf.read_bytes(),
                filename=args.pdf.name,
                image=image,
                image_filename=image_name,
                timeout=args.timeout,
            )
        else:
            recipe = await service.import_from_url(
                CLI_USER_ID, args.url, image=image, image_filename=image_name, timeout=args.timeout
            )
        return recipe.model_dump(mode="json")
    finally:
        await factory.aclose()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())
    try:
        result = asyncio.run(run(args))
    except RecipePipelineError as exc:
        logger.error("%s (%s)", exc, exc.code)
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
