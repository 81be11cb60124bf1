"""AI gateway interfaces and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import FridgeLensConfig
    from ..models import Ingredient, Recipe


class IngredientExtractor(ABC):
    """Capability: list the food items visible in a fridge photo."""

    @abstractmethod
    async def extract_ingredients(self, image: bytes | str) -> list[str]:
        """Return ingredient names detected in ``image``.

        ``image`` is raw image bytes or a (data URL) base64 string.
        Raises AnalysisError on any failure.
        """
        ...


class RecipeGenerator(ABC):
    """Capability: propose recipes for a set of ingredients and constraints."""

    @abstractmethod
    async def generate_recipes(
        self,
        ingredients: Sequence[Ingredient],
        dietary_preference: str,
        allergies: str,
    ) -> list[Recipe]:
        """Return sanitized recipes. Raises RecipeGenerationError on failure."""
        ...


class AIGateway(IngredientExtractor, RecipeGenerator):
    """A hosted model offering both capabilities."""


def create_gateway(config: FridgeLensConfig) -> AIGateway:
    """Create an AI gateway based on configuration."""
    backend_name = config.gateway.backend

    match backend_name:
        case "gemini":
            from .gemini import GeminiGateway

            return GeminiGateway(
                api_key=config.gateway.gemini.api_key,
                model=config.gateway.gemini.model,
            )
        case "claude":
            from .claude import ClaudeGateway

            return ClaudeGateway(
                api_key=config.gateway.claude.api_key,
                model=config.gateway.claude.model,
            )
        case _:
            raise ValueError(
                f"Unknown gateway backend: {backend_name!r} "
                f"(choose gemini or claude)"
            )


__all__ = [
    "AIGateway",
    "IngredientExtractor",
    "RecipeGenerator",
    "create_gateway",
]
