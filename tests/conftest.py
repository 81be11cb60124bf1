"""Shared fakes for app-level tests."""

import pytest

from fridgelens.card import CARD_HEIGHT, CARD_WIDTH, DrawingSurface
from fridgelens.gateway import AIGateway
from fridgelens.models import sanitize_recipe


class FakeGateway(AIGateway):
    """In-memory gateway returning canned ingredients and recipes."""

    def __init__(self, ingredients=None, recipes=None):
        self.ingredients = ingredients if ingredients is not None else ["yumurta", "ıspanak", "peynir"]
        self.recipes = recipes if recipes is not None else [
            {
                "id": "menemen",
                "title": "Ispanaklı Menemen",
                "usedIngredients": ["yumurta", "ıspanak"],
                "missingIngredients": ["domates"],
                "instructions": ["Ispanağı kavur.", "Yumurtaları ekle."],
                "prepTime": "15 dk",
                "difficulty": "Kolay",
                "calories": 280,
            },
            {
                "title": "Peynirli Omlet",
                "usedIngredients": ["yumurta", "peynir"],
                "instructions": ["Çırp.", "Pişir."],
                "prepTime": "10 dk",
                "difficulty": "Orta",
            },
            {
                "id": "borek",
                "title": "Ispanaklı Börek",
                "usedIngredients": ["ıspanak", "peynir"],
                "missingIngredients": ["yufka"],
                "instructions": ["Yufkaları ser.", "Fırınla."],
                "prepTime": "45 dk",
                "difficulty": "Zor",
            },
        ]
        self.extract_error = None
        self.generate_error = None
        self.images = []
        self.generate_calls = []

    async def extract_ingredients(self, image):
        self.images.append(image)
        if self.extract_error is not None:
            raise self.extract_error
        return list(self.ingredients)

    async def generate_recipes(self, ingredients, dietary_preference, allergies):
        self.generate_calls.append((tuple(ingredients), dietary_preference, allergies))
        if self.generate_error is not None:
            raise self.generate_error
        return [sanitize_recipe(r, i) for i, r in enumerate(self.recipes)]


class StubSurface(DrawingSurface):
    """Surface that draws nothing and encodes to a fixed payload."""

    def __init__(self, width=CARD_WIDTH, height=CARD_HEIGHT, png=b"\x89PNG-stub"):
        self.width = width
        self.height = height
        self._png = png

    def measure_text(self, text, font):
        return len(text) * 10

    def fill_rect(self, x, y, w, h, color):
        pass

    def fill_gradient(self, x, y, w, h, top, bottom):
        pass

    def fill_rounded_rect(self, x, y, w, h, radius, color, shadow=None):
        pass

    def draw_line(self, x1, y1, x2, y2, color, width=1):
        pass

    def fill_text(self, text, x, y, font, color, align="left", baseline="top"):
        pass

    def encode_png(self):
        return self._png


@pytest.fixture
def gateway():
    return FakeGateway()
