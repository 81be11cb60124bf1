"""FridgeLens: photograph your fridge, get zero-waste recipes."""

from .app import Action, AppState, FridgeLensApp
from .camera import CapturedImage, FridgeCamera, load_image_file
from .card import DrawingSurface, PillowSurface, RecipeCard, render_recipe_card
from .config import FridgeLensConfig, load_config
from .errors import (
    AnalysisError,
    CameraAccessError,
    FridgeLensError,
    RecipeGenerationError,
    ShareExportError,
    TransitionError,
)
from .gateway import AIGateway, IngredientExtractor, RecipeGenerator, create_gateway
from .models import DIETARY_OPTIONS, Difficulty, Ingredient, Recipe, sanitize_recipe
from .share import DriveSharer, LocalSaver, ShareOutcome, Sharer, share_card
from .urgency import Urgency, expiring_soon, urgency_level

__all__ = [
    "FridgeLensApp",
    "AppState",
    "Action",
    "FridgeCamera",
    "CapturedImage",
    "load_image_file",
    "DrawingSurface",
    "PillowSurface",
    "RecipeCard",
    "render_recipe_card",
    "FridgeLensConfig",
    "load_config",
    "FridgeLensError",
    "CameraAccessError",
    "AnalysisError",
    "RecipeGenerationError",
    "ShareExportError",
    "TransitionError",
    "AIGateway",
    "IngredientExtractor",
    "RecipeGenerator",
    "create_gateway",
    "Ingredient",
    "Recipe",
    "Difficulty",
    "DIETARY_OPTIONS",
    "sanitize_recipe",
    "Sharer",
    "LocalSaver",
    "DriveSharer",
    "ShareOutcome",
    "share_card",
    "Urgency",
    "urgency_level",
    "expiring_soon",
]
