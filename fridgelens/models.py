"""Ingredient and recipe records shared by the gateway, the app and the card."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any

DIETARY_OPTIONS: tuple[str, ...] = (
    "Hepsi",
    "Vejetaryen",
    "Vegan",
    "Glutensiz",
    "Düşük Karbonhidrat",
    "Yüksek Protein",
)

DEFAULT_DIETARY_PREFERENCE = DIETARY_OPTIONS[0]


class Difficulty(str, Enum):
    EASY = "Kolay"
    MEDIUM = "Orta"
    HARD = "Zor"

    @classmethod
    def parse(cls, value: Any) -> Difficulty:
        """Map a model-supplied difficulty onto one of the three levels.

        Accepts the Turkish label or the English name ("easy", "Medium"),
        case-insensitively. Anything else becomes MEDIUM.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().casefold()
            for member in cls:
                if key in (member.value.casefold(), member.name.casefold()):
                    return member
        return cls.MEDIUM


@dataclass(frozen=True)
class Ingredient:
    name: str
    category: str | None = None
    expiry_date: date | None = None

    def with_expiry(self, value: date | str | None) -> Ingredient:
        """Return a copy with ``value`` as the expiry date.

        ``value`` may be a date, an ISO ``YYYY-MM-DD`` string, or empty/None
        to clear the date.
        """
        if value is None or value == "":
            return replace(self, expiry_date=None)
        if isinstance(value, str):
            value = date.fromisoformat(value.strip())
        return replace(self, expiry_date=value)


@dataclass(frozen=True)
class Recipe:
    id: str
    title: str
    description: str = ""
    used_ingredients: tuple[str, ...] = field(default_factory=tuple)
    missing_ingredients: tuple[str, ...] = field(default_factory=tuple)
    instructions: tuple[str, ...] = field(default_factory=tuple)
    prep_time: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    calories: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire form, keyed the way the model returns recipes."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "usedIngredients": list(self.used_ingredients),
            "missingIngredients": list(self.missing_ingredients),
            "instructions": list(self.instructions),
            "prepTime": self.prep_time,
            "difficulty": self.difficulty.value,
        }
        if self.calories is not None:
            data["calories"] = self.calories
        return data


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _text_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(
        item.strip() for item in value if isinstance(item, str) and item.strip()
    )


def _calories(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value < 0 or value != value:  # NaN
        return None
    return value


def sanitize_recipe(raw: Mapping[str, Any] | Recipe, index: int) -> Recipe:
    """Normalize one recipe from the model into a ``Recipe``.

    Absent lists become empty tuples, an absent id becomes ``recipe-<index>``
    and the difficulty is forced onto the three known levels. Already
    sanitized input comes back unchanged.
    """
    if isinstance(raw, Recipe):
        raw = raw.to_dict()

    recipe_id = _text(raw.get("id")) or f"recipe-{index}"
    return Recipe(
        id=recipe_id,
        title=_text(raw.get("title")),
        description=_text(raw.get("description")),
        used_ingredients=_text_list(raw.get("usedIngredients")),
        missing_ingredients=_text_list(raw.get("missingIngredients")),
        instructions=_text_list(raw.get("instructions")),
        prep_time=_text(raw.get("prepTime")),
        difficulty=Difficulty.parse(raw.get("difficulty")),
        calories=_calories(raw.get("calories")),
    )
