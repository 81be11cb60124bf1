"""Application state machine: capture → ingredients → recipes → card.

``FridgeLensApp`` owns every piece of session state. Views only read it and
user actions only go through its methods, which either move the app to the
next state or raise ``TransitionError`` when the trigger is not available.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .camera import load_image_file
from .card import CARD_HEIGHT, CARD_WIDTH, DrawingSurface, create_surface, render_recipe_card
from .config import ExportConfig
from .errors import (
    AnalysisError,
    CameraAccessError,
    RecipeGenerationError,
    ShareExportError,
    TransitionError,
)
from .market import OrderConfirmation, place_order, stores_for
from .models import DEFAULT_DIETARY_PREFERENCE, Ingredient, Recipe, sanitize_recipe
from .share import LocalSaver, ShareOutcome, Sharer, share_card

if TYPE_CHECKING:
    from .camera import FridgeCamera
    from .gateway import AIGateway

logger = logging.getLogger(__name__)

SHARE_FALLBACK_MESSAGE = "Paylaşım desteklenmiyor, görsel indirildi."
SHARE_TEXT = "FridgeLens ile bulduğum harika bir tarif: {title}"
FILE_READ_MESSAGE = "Görsel dosyası okunamadı. Lütfen başka bir dosya deneyin."


class AppState(str, Enum):
    HOME = "HOME"
    CAMERA = "CAMERA"
    ANALYZING = "ANALYZING"
    INGREDIENTS = "INGREDIENTS"
    GENERATING_RECIPES = "GENERATING_RECIPES"
    RECIPES = "RECIPES"


class Action(str, Enum):
    """Long-running user actions; at most one of each is in flight."""

    ANALYZE = "analyze"
    GENERATE = "generate"
    SHARE = "share"


class FridgeLensApp:
    def __init__(
        self,
        gateway: AIGateway,
        *,
        camera: FridgeCamera | None = None,
        sharer: Sharer | None = None,
        saver: LocalSaver | None = None,
        surface_factory: Callable[[int, int], DrawingSurface] = create_surface,
        dietary_preference: str = DEFAULT_DIETARY_PREFERENCE,
        allergies: str = "",
    ) -> None:
        self._gateway = gateway
        self._camera = camera
        self._sharer = sharer
        self._saver = saver or LocalSaver(ExportConfig().dir)
        self._surface_factory = surface_factory
        self.dietary_preference = dietary_preference
        self.allergies = allergies

        self._state = AppState.HOME
        self._image: bytes | str | None = None
        self._ingredients: tuple[Ingredient, ...] = ()
        self._recipes: tuple[Recipe, ...] = ()
        self._selected: Recipe | None = None
        self._order: OrderConfirmation | None = None
        self._error: str | None = None
        self._in_flight: set[Action] = set()

    # -- read-only view of the session ---------------------------------

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def image(self) -> bytes | str | None:
        return self._image

    @property
    def ingredients(self) -> tuple[Ingredient, ...]:
        return self._ingredients

    @property
    def recipes(self) -> tuple[Recipe, ...]:
        return self._recipes

    @property
    def selected_recipe(self) -> Recipe | None:
        return self._selected

    @property
    def order(self) -> OrderConfirmation | None:
        return self._order

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def in_flight(self) -> frozenset[Action]:
        return frozenset(self._in_flight)

    @property
    def is_sharing(self) -> bool:
        return Action.SHARE in self._in_flight

    @property
    def can_generate(self) -> bool:
        return (
            self._state is AppState.INGREDIENTS
            and bool(self._ingredients)
            and Action.GENERATE not in self._in_flight
        )

    # -- internals -----------------------------------------------------

    def _require(self, trigger: str, *states: AppState) -> None:
        if self._state not in states:
            raise TransitionError(
                f"{trigger} is not available in state {self._state.value}"
            )

    def _transition(self, new_state: AppState) -> None:
        logger.info("State %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def _begin(self, action: Action) -> None:
        if action in self._in_flight:
            raise TransitionError(f"{action.value} is already in progress")
        self._in_flight.add(action)

    def _fail(self, message: str, fallback: AppState) -> None:
        self._error = message
        self._transition(fallback)

    def _ingredient_index(self, index: int) -> int:
        if not 0 <= index < len(self._ingredients):
            raise IndexError(f"no ingredient at position {index}")
        return index

    # -- transitions ---------------------------------------------------

    def start(self) -> None:
        self._require("start", AppState.HOME)
        self._transition(AppState.CAMERA)

    async def capture_photo(self) -> None:
        """Take a photo with the camera and analyze it."""
        self._require("capture_photo", AppState.CAMERA)
        try:
            if self._camera is None:
                raise CameraAccessError()
            # Blocking device I/O; the camera is released inside capture().
            captured = await asyncio.to_thread(self._camera.capture)
        except CameraAccessError as e:
            self._error = e.message
            return
        await self.submit_image(captured.to_data_url())

    async def upload_file(self, path: str | Path) -> None:
        """Analyze an image file instead of a camera frame."""
        self._require("upload_file", AppState.CAMERA)
        try:
            data_url = await asyncio.to_thread(load_image_file, path)
        except (OSError, ValueError):
            logger.warning("Could not read image file %s", path, exc_info=True)
            self._error = FILE_READ_MESSAGE
            return
        await self.submit_image(data_url)

    async def submit_image(self, image: bytes | str) -> None:
        """Start a new capture session with ``image``."""
        self._require("submit_image", AppState.CAMERA)
        self._begin(Action.ANALYZE)
        self._image = image
        self._ingredients = ()
        self._recipes = ()
        self._selected = None
        self._order = None
        self._error = None
        self._transition(AppState.ANALYZING)
        try:
            names = await self._gateway.extract_ingredients(image)
        except AnalysisError as e:
            self._fail(e.message, AppState.HOME)
            return
        except Exception:
            logger.exception("Ingredient extraction crashed")
            self._fail(AnalysisError.default_message, AppState.HOME)
            return
        finally:
            self._in_flight.discard(Action.ANALYZE)

        self._ingredients = tuple(Ingredient(name=name) for name in names)
        self._transition(AppState.INGREDIENTS)

    def remove_ingredient(self, index: int) -> None:
        self._require("remove_ingredient", AppState.INGREDIENTS)
        i = self._ingredient_index(index)
        self._ingredients = self._ingredients[:i] + self._ingredients[i + 1 :]

    def update_expiry(self, index: int, value: date | str | None) -> None:
        """Set or clear the expiry date of the ingredient at ``index``.

        Raises:
            ValueError: If ``value`` is not an ISO date.
        """
        self._require("update_expiry", AppState.INGREDIENTS)
        i = self._ingredient_index(index)
        updated = self._ingredients[i].with_expiry(value)
        self._ingredients = self._ingredients[:i] + (updated,) + self._ingredients[i + 1 :]

    def set_preferences(
        self, dietary_preference: str | None = None, allergies: str | None = None
    ) -> None:
        if dietary_preference is not None:
            self.dietary_preference = dietary_preference
        if allergies is not None:
            self.allergies = allergies

    async def generate_recipes(self) -> None:
        self._require("generate_recipes", AppState.INGREDIENTS)
        if not self._ingredients:
            raise TransitionError("generate_recipes needs at least one ingredient")
        self._begin(Action.GENERATE)
        self._error = None
        self._transition(AppState.GENERATING_RECIPES)
        try:
            recipes = await self._gateway.generate_recipes(
                self._ingredients, self.dietary_preference, self.allergies
            )
        except RecipeGenerationError as e:
            self._fail(e.message, AppState.INGREDIENTS)
            return
        except Exception:
            logger.exception("Recipe generation crashed")
            self._fail(RecipeGenerationError.default_message, AppState.INGREDIENTS)
            return
        finally:
            self._in_flight.discard(Action.GENERATE)

        self._recipes = tuple(sanitize_recipe(r, i) for i, r in enumerate(recipes))
        self._selected = None
        self._order = None
        self._transition(AppState.RECIPES)

    def back_to_ingredients(self) -> None:
        self._require("back_to_ingredients", AppState.RECIPES)
        self._selected = None
        self._order = None
        self._transition(AppState.INGREDIENTS)

    def select_recipe(self, index: int) -> None:
        self._require("select_recipe", AppState.RECIPES)
        if not 0 <= index < len(self._recipes):
            raise IndexError(f"no recipe at position {index}")
        self._selected = self._recipes[index]
        self._order = None

    def back(self) -> None:
        """Close the recipe detail overlay."""
        self._require("back", AppState.RECIPES)
        if self._selected is None:
            raise TransitionError("no recipe is open")
        self._selected = None
        self._order = None

    def order_missing(self, store_index: int) -> OrderConfirmation:
        """Place a mocked order for the open recipe's missing ingredients."""
        self._require("order_missing", AppState.RECIPES)
        if self._selected is None:
            raise TransitionError("no recipe is open")
        stores = stores_for(self._selected.missing_ingredients)
        if not stores:
            raise TransitionError("the open recipe has no missing ingredients")
        if not 0 <= store_index < len(stores):
            raise IndexError(f"no store at position {store_index}")
        self._order = place_order(stores[store_index], self._selected.missing_ingredients)
        return self._order

    async def share_selected(self) -> ShareOutcome | None:
        """Render the open recipe as a card and share or save it.

        Returns the outcome, or None when sharing failed (the error is set).
        """
        self._require("share_selected", AppState.RECIPES)
        recipe = self._selected
        if recipe is None:
            raise TransitionError("no recipe is open")
        self._begin(Action.SHARE)
        try:
            surface = self._surface_factory(CARD_WIDTH, CARD_HEIGHT)
            card = render_recipe_card(recipe, surface)
            outcome = await asyncio.to_thread(
                share_card,
                card,
                recipe.title,
                SHARE_TEXT.format(title=recipe.title),
                self._sharer,
                self._saver,
            )
        except ShareExportError as e:
            self._error = e.message
            return None
        finally:
            self._in_flight.discard(Action.SHARE)

        if outcome is ShareOutcome.SAVED:
            self._error = SHARE_FALLBACK_MESSAGE
        logger.info("Recipe card %s: %s", card.filename, outcome.value)
        return outcome

    def dismiss_error(self) -> None:
        self._error = None
