"""Google Gemini gateway for ingredient extraction and recipe generation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..config import DEFAULT_GEMINI_MODEL
from ..errors import AnalysisError, RecipeGenerationError
from . import AIGateway
from .parsing import decode_image, parse_ingredient_response, parse_recipe_response
from .prompts import (
    IMAGE_MIME_TYPE,
    INGREDIENT_INSTRUCTION,
    INGREDIENT_SCHEMA,
    RECIPE_SCHEMA,
    build_recipe_prompt,
)

if TYPE_CHECKING:
    from ..models import Ingredient, Recipe

logger = logging.getLogger(__name__)

_MISSING_KEY = (
    "Gemini API anahtarı ayarlanmamış. "
    "Ayar dosyasını veya GEMINI_API_KEY ortam değişkenini kontrol edin."
)


class GeminiGateway(AIGateway):
    """Talk to Google Gemini with structured JSON responses."""

    def __init__(self, api_key: str = "", model: str = DEFAULT_GEMINI_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def _generate(self, contents, schema: dict) -> str:
        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)
        response = await model.generate_content_async(
            contents,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        return response.text

    async def extract_ingredients(self, image: bytes | str) -> list[str]:
        if not self._api_key:
            raise AnalysisError(_MISSING_KEY)

        data = decode_image(image)
        parts = [{"mime_type": IMAGE_MIME_TYPE, "data": data}, INGREDIENT_INSTRUCTION]
        try:
            text = await self._generate(parts, INGREDIENT_SCHEMA)
            names = parse_ingredient_response(text)
        except AnalysisError:
            logger.exception("Gemini returned an unusable ingredient list")
            raise
        except ImportError:
            raise
        except Exception as e:
            logger.exception("Gemini ingredient extraction failed")
            raise AnalysisError() from e

        logger.info("Gemini detected %d ingredients", len(names))
        return names

    async def generate_recipes(
        self,
        ingredients: Sequence[Ingredient],
        dietary_preference: str,
        allergies: str,
    ) -> list[Recipe]:
        if not self._api_key:
            raise RecipeGenerationError(_MISSING_KEY)

        prompt = build_recipe_prompt(ingredients, dietary_preference, allergies)
        try:
            text = await self._generate(prompt, RECIPE_SCHEMA)
            recipes = parse_recipe_response(text)
        except RecipeGenerationError:
            logger.exception("Gemini returned unusable recipes")
            raise
        except ImportError:
            raise
        except Exception as e:
            logger.exception("Gemini recipe generation failed")
            raise RecipeGenerationError() from e

        logger.info("Gemini generated %d recipes", len(recipes))
        return recipes
