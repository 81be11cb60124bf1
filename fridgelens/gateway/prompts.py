"""Instruction text, recipe prompt and response schemas sent to the model."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import TYPE_CHECKING

from ..models import Difficulty
from ..urgency import expiring_soon

if TYPE_CHECKING:
    from ..models import Ingredient

IMAGE_MIME_TYPE = "image/jpeg"
RECIPE_COUNT = 3

INGREDIENT_INSTRUCTION = (
    "Bu resimdeki yiyecek ve içecek malzemelerini tespit et. "
    "Sadece malzeme isimlerini içeren basit bir liste döndür. "
    "Mutfak gereçlerini veya yiyecek olmayan nesneleri yoksay. "
    "Çıktı Türkçe olmalı."
)

# Schemas use the upper-case type names of the Gemini schema dialect.
INGREDIENT_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "ingredients": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Tespit edilen yiyecek malzemelerinin listesi",
        },
    },
    "required": ["ingredients"],
}

_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}

RECIPE_SCHEMA: dict = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "title": {"type": "STRING"},
            "description": {"type": "STRING"},
            "usedIngredients": _STRING_LIST,
            "missingIngredients": _STRING_LIST,
            "instructions": _STRING_LIST,
            "prepTime": {"type": "STRING"},
            "difficulty": {
                "type": "STRING",
                "enum": [d.value for d in Difficulty],
            },
            "calories": {"type": "NUMBER"},
        },
        "required": [
            "id",
            "title",
            "description",
            "usedIngredients",
            "instructions",
            "prepTime",
            "difficulty",
        ],
    },
}

_RECIPE_RULES = f"""\
Bu malzemeleri kullanarak atıksız mutfak prensibine uygun {RECIPE_COUNT} farklı yemek tarifi oluştur.

Kurallar:
1. Tarifleri çeşitlendir (örn: kahvaltı, ana yemek, atıştırmalık).
2. Mümkün olduğunca elimdeki malzemeleri kullan.
3. Acil tüketilmesi gereken malzemeleri (varsa) tariflerde önceliklendir ve açıklamada belirt.
4. Eğer kritik bir eksik malzeme varsa (örn: baharat, yağ hariç ana malzeme), bunu 'missingIngredients' alanına ekle.
5. Belirtilen beslenme şekline ve alerjilere KESİNLİKLE uy. Eğer eldeki malzemelerle bu kısıtlamalara uygun tarif çıkmıyorsa, eksik malzemelerle tamamlayarak uygun tarif öner.
6. Zorluk seviyesi ({", ".join(d.value for d in Difficulty)}) ve Hazırlama süresi ekle.
7. Dil Türkçe olmalı.
"""


def build_recipe_prompt(
    ingredients: Sequence[Ingredient],
    dietary_preference: str,
    allergies: str,
    today: date | None = None,
) -> str:
    """Compose the recipe request for the current ingredient list."""
    names = ", ".join(i.name for i in ingredients)
    urgent = expiring_soon(ingredients, today)

    lines = [f"Elimdeki malzemeler: {names}."]
    if urgent:
        lines.append(
            "ÖNCELİKLİ TÜKETİLMESİ GEREKENLER (SKT Yakın): "
            f"{', '.join(urgent)}."
        )
    lines.append("")
    lines.append("Kullanıcı Tercihleri:")
    lines.append(f"- Beslenme Şekli: {dietary_preference}")
    lines.append(f"- Alerjiler/Yasaklılar: {allergies.strip() or 'Yok'}")
    lines.append("")
    lines.append(_RECIPE_RULES)
    return "\n".join(lines)
