"""Terminal views. Exactly one is shown, chosen by the app state."""

from __future__ import annotations

from datetime import date

from .app import AppState, FridgeLensApp
from .market import stores_for
from .models import DIETARY_OPTIONS, Recipe
from .urgency import URGENCY_BADGES, urgency_level

_RULE = "─" * 50


def render_home(app: FridgeLensApp) -> str:
    return "\n".join([
        "🥗 FridgeLens",
        "Buzdolabının fotoğrafını çek, atıksız ve lezzetli tarifler anında cebine gelsin.",
        "",
        "[Mutfak Keşfine Başla]",
    ])


def render_camera(app: FridgeLensApp) -> str:
    return "\n".join([
        "📷 Kamerayı başlatın veya galeri seçin",
        "",
        "[Fotoğraf Çek]  [Galeriden Yükle]",
    ])


def render_loading(text: str) -> str:
    return f"⏳ {text}..."


def render_ingredients(app: FridgeLensApp, today: date | None = None) -> str:
    lines = ["🥬 Bulunan Malzemeler", ""]
    if not app.ingredients:
        lines.append("  Malzeme bulunamadı.")
    for idx, ing in enumerate(app.ingredients, 1):
        expiry = ing.expiry_date.isoformat() if ing.expiry_date else "SKT yok"
        badge = URGENCY_BADGES.get(urgency_level(ing.expiry_date, today), "")
        lines.append(f"  {idx}. {ing.name:<16} {expiry:<10} {badge}".rstrip())

    lines.append("")
    options = "  ".join(
        f"[{opt}]" if opt == app.dietary_preference else opt for opt in DIETARY_OPTIONS
    )
    lines.append(f"Beslenme: {options}")
    lines.append(f"Alerjiler: {app.allergies or '-'}")
    lines.append("")
    if app.can_generate:
        lines.append("[Tarif Oluştur]")
    else:
        lines.append("(Tarif oluşturmak için en az bir malzeme gerekli)")
    return "\n".join(lines)


def render_recipe_list(app: FridgeLensApp) -> str:
    lines = ["👨‍🍳 Senin İçin Seçildi"]
    if app.dietary_preference != DIETARY_OPTIONS[0]:
        lines.append(f"{app.dietary_preference} • {len(app.recipes)} tarif")
    lines.append("")
    for idx, recipe in enumerate(app.recipes, 1):
        lines.append(f"  {idx}. {recipe.title}")
        lines.append(f"     {recipe.prep_time} • {recipe.difficulty.value}")
        if recipe.missing_ingredients:
            lines.append(f"     Eksik: {len(recipe.missing_ingredients)} malzeme")
    return "\n".join(lines)


def render_recipe_detail(app: FridgeLensApp, recipe: Recipe) -> str:
    lines = [_RULE, f"🍽  {recipe.title}", ""]
    if recipe.description:
        lines.append(recipe.description)
        lines.append("")

    stats = [recipe.prep_time, recipe.difficulty.value]
    if recipe.calories is not None:
        stats.append(f"{recipe.calories:g} kcal")
    lines.append("  •  ".join(s for s in stats if s))
    lines.append("")

    lines.append("Malzemeler")
    for ing in recipe.used_ingredients:
        lines.append(f"  ✓ {ing}")
    for ing in recipe.missing_ingredients:
        lines.append(f"  ✗ {ing} (Eksik)")

    stores = stores_for(recipe.missing_ingredients)
    if stores:
        lines.append("")
        lines.append("🛒 Eksik Malzeme Tamamlayıcı")
        if app.order is not None:
            lines.append(f"  {app.order.message}")
        else:
            for idx, store in enumerate(stores, 1):
                lines.append(
                    f"  {idx}. {store.name} ({store.distance} • {store.delivery_time}) "
                    f"{store.price}  Sipariş Ver →"
                )

    if recipe.instructions:
        lines.append("")
        lines.append("Hazırlanışı")
        for j, step in enumerate(recipe.instructions, 1):
            lines.append(f"  {j}. {step}")

    lines.append("")
    lines.append("[Paylaşılıyor...]" if app.is_sharing else "[Paylaş]")
    return "\n".join(lines)


def render(app: FridgeLensApp, today: date | None = None) -> str:
    """Render the view for the current state, plus the error toast."""
    match app.state:
        case AppState.HOME:
            body = render_home(app)
        case AppState.CAMERA:
            body = render_camera(app)
        case AppState.ANALYZING:
            body = render_loading("Malzemeler Taranıyor")
        case AppState.INGREDIENTS:
            body = render_ingredients(app, today)
        case AppState.GENERATING_RECIPES:
            body = render_loading("Şef Düşünüyor")
        case AppState.RECIPES:
            if app.selected_recipe is not None:
                body = render_recipe_detail(app, app.selected_recipe)
            else:
                body = render_recipe_list(app)

    if app.error:
        body = f"{body}\n\n⚠ {app.error}"
    return body
