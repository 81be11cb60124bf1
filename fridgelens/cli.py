"""CLI entry point for FridgeLens."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .app import AppState, FridgeLensApp
from .camera import FridgeCamera
from .card import create_surface, render_recipe_card
from .config import FridgeLensConfig, load_config
from .errors import FridgeLensError, TransitionError
from .gateway import create_gateway
from .models import DIETARY_OPTIONS
from .share import DriveSharer, LocalSaver
from .views import render

logger = logging.getLogger(__name__)

_HELP = {
    AppState.HOME: "Enter: başla | q: çık",
    AppState.CAMERA: "c: fotoğraf çek | f DOSYA: görsel yükle | q: çık",
    AppState.INGREDIENTS: (
        "d N: sil | e N YYYY-AA-GG: SKT (boş: temizle) | p N: beslenme | "
        "a METİN: alerjiler | g: tarif oluştur | q: çık"
    ),
    AppState.RECIPES: "N: tarifi aç | b: geri | q: çık",
}
_DETAIL_HELP = "s: paylaş | o N: eksikleri sipariş et | b: geri | q: çık"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="fridgelens",
        description="FridgeLens: buzdolabını çek, atıksız tarifler al",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="ayar dosyası (TOML)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="ayrıntılı günlük"
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("cameras", help="kullanılabilir kameraları listele")

    scan_parser = sub.add_parser("scan", help="fotoğraf çek ve malzemeleri bul")
    scan_parser.add_argument("--image", type=str, help="mevcut bir görseli kullan")
    scan_parser.add_argument("--json", action="store_true", help="JSON çıktısı")

    recipes_parser = sub.add_parser("recipes", help="fotoğraftan tarif oluştur")
    recipes_parser.add_argument("--image", type=str, help="mevcut bir görseli kullan")
    recipes_parser.add_argument("--diet", type=str, default=None, help="beslenme şekli")
    recipes_parser.add_argument("--allergies", type=str, default=None, help="alerjiler")
    recipes_parser.add_argument(
        "--expiry",
        action="append",
        default=[],
        metavar="AD=YYYY-AA-GG",
        help="malzeme son kullanma tarihi (tekrarlanabilir)",
    )
    recipes_parser.add_argument("--json", action="store_true", help="JSON çıktısı")
    recipes_parser.add_argument(
        "--card", type=str, default=None, metavar="DIR",
        help="her tarif için PNG kartı bu klasöre kaydet",
    )

    sub.add_parser("run", help="etkileşimli oturum")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)

    try:
        match args.command:
            case "cameras":
                _cmd_cameras()
            case "scan":
                asyncio.run(_cmd_scan(config, args))
            case "recipes":
                asyncio.run(_cmd_recipes(config, args))
            case "run":
                asyncio.run(_cmd_run(config))
    except (FridgeLensError, ImportError, ValueError, OSError) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def build_app(config: FridgeLensConfig) -> FridgeLensApp:
    """Wire the app to the configured gateway, camera and share targets."""
    sharer = None
    if config.gdrive.enabled:
        from .gdrive import GoogleDriveUploader

        sharer = DriveSharer(
            GoogleDriveUploader(
                credentials_path=config.gdrive.credentials_path,
                token_path=config.gdrive.token_path,
                folder_id=config.gdrive.folder_id,
            ),
            folder_id=config.gdrive.folder_id,
        )

    return FridgeLensApp(
        create_gateway(config),
        camera=FridgeCamera(config.camera.index),
        sharer=sharer,
        saver=LocalSaver(config.export.dir),
        dietary_preference=config.preferences.dietary_preference,
        allergies=config.preferences.allergies,
    )


def _cmd_cameras() -> None:
    cameras = FridgeCamera.list_cameras()
    if not cameras:
        print("Kullanılabilir kamera bulunamadı.")
        return
    print(f"Kullanılabilir kameralar: {len(cameras)}")
    for idx in cameras:
        print(f"  Kamera {idx}")


async def _analyze(app: FridgeLensApp, image: str | None) -> None:
    """Run the capture step and fail loudly if it did not succeed."""
    app.start()
    if image:
        await app.upload_file(image)
    else:
        print("📷 Çekiliyor...", file=sys.stderr)
        await app.capture_photo()
    if app.state is not AppState.INGREDIENTS:
        print(app.error or "Görüntü analiz edilemedi.", file=sys.stderr)
        sys.exit(1)


async def _cmd_scan(config: FridgeLensConfig, args) -> None:
    app = build_app(config)
    await _analyze(app, args.image)

    if args.json:
        data = [ing.name for ing in app.ingredients]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(render(app))


async def _cmd_recipes(config: FridgeLensConfig, args) -> None:
    app = build_app(config)
    app.set_preferences(args.diet, args.allergies)
    await _analyze(app, args.image)

    names = [ing.name for ing in app.ingredients]
    for entry in args.expiry:
        name, _, value = entry.partition("=")
        if name.strip() not in names:
            print(f"Malzeme bulunamadı: {name}", file=sys.stderr)
            continue
        app.update_expiry(names.index(name.strip()), value)

    if not app.can_generate:
        print("Tarif oluşturmak için malzeme bulunamadı.", file=sys.stderr)
        sys.exit(1)

    print("🍳 Şef düşünüyor...", file=sys.stderr)
    await app.generate_recipes()
    if app.state is not AppState.RECIPES:
        print(app.error, file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(
            [r.to_dict() for r in app.recipes], ensure_ascii=False, indent=2
        ))
    else:
        for idx in range(len(app.recipes)):
            app.select_recipe(idx)
            print(render(app))
        if app.selected_recipe is not None:
            app.back()

    if args.card:
        saver = LocalSaver(args.card)
        for recipe in app.recipes:
            card = render_recipe_card(recipe, create_surface())
            path = saver.save(card)
            print(f"🖼  {path}", file=sys.stderr)


def _position(text: str) -> int:
    """Turn a 1-based number typed by the user into a list index."""
    number = int(text)
    if number < 1:
        raise ValueError(f"position must be 1 or more: {number}")
    return number - 1


async def handle_command(app: FridgeLensApp, line: str) -> bool:
    """Apply one line of user input to ``app``. Returns False to quit."""
    cmd, _, rest = line.strip().partition(" ")
    rest = rest.strip()

    if cmd == "q":
        return False
    if cmd == "x":
        app.dismiss_error()
        return True

    try:
        match app.state:
            case AppState.HOME:
                app.start()
            case AppState.CAMERA:
                if cmd == "c":
                    await app.capture_photo()
                elif cmd == "f" and rest:
                    await app.upload_file(rest)
            case AppState.INGREDIENTS:
                if cmd == "d":
                    app.remove_ingredient(_position(rest))
                elif cmd == "e":
                    num, _, value = rest.partition(" ")
                    app.update_expiry(_position(num), value.strip() or None)
                elif cmd == "p":
                    app.set_preferences(dietary_preference=DIETARY_OPTIONS[_position(rest)])
                elif cmd == "a":
                    app.set_preferences(allergies=rest)
                elif cmd == "g":
                    await app.generate_recipes()
            case AppState.RECIPES if app.selected_recipe is not None:
                if cmd == "b":
                    app.back()
                elif cmd == "s":
                    await app.share_selected()
                elif cmd == "o":
                    app.order_missing(_position(rest))
            case AppState.RECIPES:
                if cmd == "b":
                    app.back_to_ingredients()
                elif cmd.isdigit():
                    app.select_recipe(_position(cmd))
    except (ValueError, IndexError, TransitionError) as e:
        logger.debug("Ignored input %r: %s", line, e)
        print(f"Geçersiz giriş: {line.strip()}", file=sys.stderr)
    return True


async def _cmd_run(config: FridgeLensConfig) -> None:
    app = build_app(config)
    while True:
        print()
        print(render(app))
        if app.state is AppState.RECIPES and app.selected_recipe is not None:
            print(_DETAIL_HELP)
        else:
            print(_HELP.get(app.state, ""))
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if not await handle_command(app, line):
            break
