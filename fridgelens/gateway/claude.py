"""Claude API gateway for ingredient extraction and recipe generation."""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..config import DEFAULT_CLAUDE_MODEL
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
    "Anthropic API anahtarı ayarlanmamış. "
    "Ayar dosyasını veya ANTHROPIC_API_KEY ortam değişkenini kontrol edin."
)


def _with_schema(text: str, schema: dict) -> str:
    # No response-schema option on the Messages API, so spell it out.
    return (
        f"{text}\n\n"
        "Yanıtı yalnızca aşağıdaki JSON şemasına uygun JSON olarak döndür "
        "(başka metin ekleme):\n"
        f"{json.dumps(schema, ensure_ascii=False)}"
    )


class ClaudeGateway(AIGateway):
    """Talk to Claude, asking for JSON in the prompt itself."""

    def __init__(self, api_key: str = "", model: str = DEFAULT_CLAUDE_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def _generate(self, content: list[dict]) -> str:
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await client.messages.create(
            model=self._model,
            max_tokens=4096,
            messages=[{"role": "user", "content": content}],
        )
        return response.content[0].text

    async def extract_ingredients(self, image: bytes | str) -> list[str]:
        if not self._api_key:
            raise AnalysisError(_MISSING_KEY)

        data = decode_image(image)
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": IMAGE_MIME_TYPE,
                    "data": base64.standard_b64encode(data).decode(),
                },
            },
            {
                "type": "text",
                "text": _with_schema(INGREDIENT_INSTRUCTION, INGREDIENT_SCHEMA),
            },
        ]
        try:
            text = await self._generate(content)
            names = parse_ingredient_response(text)
        except AnalysisError:
            logger.exception("Claude returned an unusable ingredient list")
            raise
        except ImportError:
            raise
        except Exception as e:
            logger.exception("Claude ingredient extraction failed")
            raise AnalysisError() from e

        logger.info("Claude detected %d ingredients", len(names))
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
        content = [{"type": "text", "text": _with_schema(prompt, RECIPE_SCHEMA)}]
        try:
            text = await self._generate(content)
            recipes = parse_recipe_response(text)
        except RecipeGenerationError:
            logger.exception("Claude returned unusable recipes")
            raise
        except ImportError:
            raise
        except Exception as e:
            logger.exception("Claude recipe generation failed")
            raise RecipeGenerationError() from e

        logger.info("Claude generated %d recipes", len(recipes))
        return recipes
