"""Shareable recipe card rendering.

The layout code only talks to a ``DrawingSurface`` so it can be exercised
without a graphics stack; ``PillowSurface`` is the real implementation.
"""

from __future__ import annotations

import io
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from .errors import ShareExportError
from .models import Recipe

logger = logging.getLogger(__name__)

CARD_WIDTH = 800
CARD_HEIGHT = 1200

BRAND = "FridgeLens"
TAGLINE = "Yapay Zeka Destekli Atıksız Mutfak"
INGREDIENTS_HEADING = "Malzemeler"
MISSING_SUFFIX = "(Eksik)"

TITLE_MAX_WIDTH = 600
TITLE_LINE_HEIGHT = 70
BULLET_LINE_HEIGHT = 45
MAX_USED_BULLETS = 8
MAX_MISSING_BULLETS = 3

# Tailwind palette
EMERALD_50 = "#ecfdf5"
EMERALD_600 = "#059669"
SLATE_200 = "#e2e8f0"
SLATE_500 = "#64748b"
SLATE_700 = "#334155"
SLATE_900 = "#0f172a"
ORANGE_600 = "#ea580c"
WHITE = "#ffffff"


@dataclass(frozen=True)
class Font:
    size: int
    weight: str = "regular"  # regular | medium | bold | italic


@dataclass(frozen=True)
class Shadow:
    offset_y: int = 10
    blur: int = 30
    color: str = "#000000"
    alpha: int = 26


@dataclass
class RecipeCard:
    filename: str
    data: bytes
    mime_type: str = "image/png"


class DrawingSurface(ABC):
    """Minimal 2D drawing capability needed by the card layout."""

    width: int
    height: int

    @abstractmethod
    def measure_text(self, text: str, font: Font) -> float: ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None: ...

    @abstractmethod
    def fill_gradient(
        self, x: float, y: float, w: float, h: float, top: str, bottom: str
    ) -> None:
        """Fill a rectangle with a vertical linear gradient."""

    @abstractmethod
    def fill_rounded_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        radius: float,
        color: str,
        shadow: Shadow | None = None,
    ) -> None: ...

    @abstractmethod
    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, color: str, width: int = 1
    ) -> None: ...

    @abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        font: Font,
        color: str,
        align: str = "left",
        baseline: str = "top",
    ) -> None:
        """Draw text; ``align`` is left/center/right, ``baseline`` top/middle/bottom."""

    @abstractmethod
    def encode_png(self) -> bytes | None:
        """Return the surface as PNG bytes, or None if encoding failed."""


# Font search paths by platform, keyed by weight
_FONT_SEARCH_PATHS: dict[str, list[str]] = {
    "regular": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu-sans-fonts/DejaVuSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "/Library/Fonts/Arial.ttf",
    ],
    "bold": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu-sans-fonts/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
    ],
    "italic": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Oblique.ttf",
        "/usr/share/fonts/dejavu-sans-fonts/DejaVuSans-Oblique.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Oblique.ttf",
        "/System/Library/Fonts/Supplemental/Arial Italic.ttf",
        "/Library/Fonts/Arial Italic.ttf",
    ],
}

_ANCHOR_H = {"left": "l", "center": "m", "right": "r"}
_ANCHOR_V = {"top": "t", "middle": "m", "bottom": "b"}


def _find_font(weight: str) -> str | None:
    paths = _FONT_SEARCH_PATHS.get(weight) or _FONT_SEARCH_PATHS["regular"]
    for path in paths:
        if Path(path).exists():
            return path
    return None


class PillowSurface(DrawingSurface):
    """Raster surface backed by a Pillow RGB image."""

    def __init__(self, width: int = CARD_WIDTH, height: int = CARD_HEIGHT) -> None:
        try:
            from PIL import Image, ImageDraw
        except ImportError:
            raise ImportError("Pillow is required: pip install Pillow") from None

        self.width = width
        self.height = height
        self._image = Image.new("RGB", (width, height), WHITE)
        self._draw = ImageDraw.Draw(self._image)
        self._fonts: dict[Font, object] = {}

    def _font(self, font: Font):
        if font not in self._fonts:
            from PIL import ImageFont

            path = _find_font(font.weight)
            if path is not None:
                self._fonts[font] = ImageFont.truetype(path, font.size)
            else:
                logger.debug("No TrueType font for %s, using Pillow default", font.weight)
                self._fonts[font] = ImageFont.load_default(size=font.size)
        return self._fonts[font]

    def measure_text(self, text: str, font: Font) -> float:
        return self._draw.textlength(text, font=self._font(font))

    def fill_rect(self, x, y, w, h, color):
        self._draw.rectangle((x, y, x + w - 1, y + h - 1), fill=color)

    def fill_gradient(self, x, y, w, h, top, bottom):
        from PIL import ImageColor

        r1, g1, b1 = ImageColor.getrgb(top)[:3]
        r2, g2, b2 = ImageColor.getrgb(bottom)[:3]
        steps = max(int(h) - 1, 1)
        for row in range(int(h)):
            t = row / steps
            color = (
                round(r1 + (r2 - r1) * t),
                round(g1 + (g2 - g1) * t),
                round(b1 + (b2 - b1) * t),
            )
            self._draw.line((x, y + row, x + w - 1, y + row), fill=color)

    def fill_rounded_rect(self, x, y, w, h, radius, color, shadow=None):
        from PIL import Image, ImageColor, ImageDraw, ImageFilter

        box = (x, y, x + w - 1, y + h - 1)
        if shadow is not None:
            mask = Image.new("L", self._image.size, 0)
            ImageDraw.Draw(mask).rounded_rectangle(
                (x, y + shadow.offset_y, x + w - 1, y + h - 1 + shadow.offset_y),
                radius=radius,
                fill=shadow.alpha,
            )
            mask = mask.filter(ImageFilter.GaussianBlur(shadow.blur / 2))
            self._image.paste(
                ImageColor.getrgb(shadow.color)[:3],
                (0, 0, self.width, self.height),
                mask,
            )
        self._draw.rounded_rectangle(box, radius=radius, fill=color)

    def draw_line(self, x1, y1, x2, y2, color, width=1):
        self._draw.line((x1, y1, x2, y2), fill=color, width=width)

    def fill_text(self, text, x, y, font, color, align="left", baseline="top"):
        anchor = _ANCHOR_H.get(align, "l") + _ANCHOR_V.get(baseline, "t")
        self._draw.text((x, y), text, fill=color, font=self._font(font), anchor=anchor)

    def encode_png(self) -> bytes | None:
        buf = io.BytesIO()
        try:
            self._image.save(buf, format="PNG")
        except (OSError, ValueError):
            logger.exception("PNG encoding failed")
            return None
        return buf.getvalue()


def create_surface(width: int = CARD_WIDTH, height: int = CARD_HEIGHT) -> DrawingSurface:
    """Build the default surface, translating setup failures."""
    try:
        return PillowSurface(width, height)
    except (ImportError, OSError, ValueError) as e:
        logger.exception("Could not create a drawing surface")
        raise ShareExportError() from e


def wrap_text(
    surface: DrawingSurface,
    text: str,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
    font: Font,
    color: str,
    align: str = "left",
) -> float:
    """Draw ``text`` word-wrapped at ``max_width`` and return the next free y.

    Lines break on spaces only, so a single word wider than ``max_width``
    still gets a line of its own.
    """
    line = ""
    current_y = y
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if line and surface.measure_text(candidate, font) > max_width:
            surface.fill_text(line, x, current_y, font, color, align=align)
            line = word
            current_y += line_height
        else:
            line = candidate
    surface.fill_text(line, x, current_y, font, color, align=align)
    return current_y + line_height


def card_filename(recipe: Recipe) -> str:
    """File name for the card, safe to join onto a directory."""
    slug = re.sub(r"[^\w.-]+", "-", recipe.id).strip(".-")
    return f"fridgelens-{slug or 'recipe'}.png"


def stats_line(recipe: Recipe) -> str:
    parts = [recipe.prep_time, recipe.difficulty.value]
    if recipe.calories is not None:
        parts.append(f"{recipe.calories:g} kcal")
    return "  •  ".join(p for p in parts if p)


def render_recipe_card(recipe: Recipe, surface: DrawingSurface) -> RecipeCard:
    """Paint ``recipe`` onto ``surface`` and encode it as a PNG card.

    Raises:
        ShareExportError: If the surface cannot produce a PNG.
    """
    width, height = surface.width, surface.height

    surface.fill_gradient(0, 0, width, height, EMERALD_50, WHITE)

    # Header bar
    surface.fill_rect(0, 0, width, 120, EMERALD_600)
    surface.fill_text(
        BRAND, width / 2, 60, Font(48, "bold"), WHITE, align="center", baseline="middle"
    )

    # Content panel
    surface.fill_rounded_rect(
        50, 160, width - 100, height - 250, 30, WHITE, shadow=Shadow()
    )

    next_y = wrap_text(
        surface,
        recipe.title,
        width / 2,
        220,
        TITLE_MAX_WIDTH,
        TITLE_LINE_HEIGHT,
        Font(56, "bold"),
        SLATE_900,
        align="center",
    )

    surface.draw_line(200, next_y + 20, 600, next_y + 20, SLATE_200, width=2)

    next_y += 60
    surface.fill_text(
        stats_line(recipe), width / 2, next_y, Font(28, "medium"), SLATE_500, align="center"
    )

    next_y += 80
    surface.fill_text(INGREDIENTS_HEADING, 100, next_y, Font(36, "bold"), EMERALD_600)

    next_y += 50
    body = Font(28)
    for ing in recipe.used_ingredients[:MAX_USED_BULLETS]:
        surface.fill_text(f"• {ing}", 100, next_y, body, SLATE_700)
        next_y += BULLET_LINE_HEIGHT
    for ing in recipe.missing_ingredients[:MAX_MISSING_BULLETS]:
        surface.fill_text(f"• {ing} {MISSING_SUFFIX}", 100, next_y, body, ORANGE_600)
        next_y += BULLET_LINE_HEIGHT

    surface.fill_text(
        TAGLINE, width / 2, height - 60, Font(24, "italic"), EMERALD_600, align="center"
    )

    data = surface.encode_png()
    if data is None:
        raise ShareExportError("Görsel oluşturulamadı.")
    return RecipeCard(filename=card_filename(recipe), data=data)
