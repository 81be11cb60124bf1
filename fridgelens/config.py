"""TOML configuration loader for FridgeLens."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .models import DEFAULT_DIETARY_PREFERENCE

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class CameraConfig:
    index: int = 0


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = DEFAULT_GEMINI_MODEL


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = DEFAULT_CLAUDE_MODEL


@dataclass
class GatewayConfig:
    backend: str = "gemini"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)


@dataclass
class PreferencesConfig:
    dietary_preference: str = DEFAULT_DIETARY_PREFERENCE
    allergies: str = ""


@dataclass
class ExportConfig:
    dir: str = "~/Pictures/fridgelens"


@dataclass
class GDriveConfig:
    enabled: bool = False
    credentials_path: str = "~/.config/fridgelens/gdrive_credentials.json"
    token_path: str = "~/.config/fridgelens/gdrive_token.json"
    folder_id: str = ""


@dataclass
class FridgeLensConfig:
    camera: CameraConfig = field(default_factory=CameraConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    preferences: PreferencesConfig = field(default_factory=PreferencesConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    gdrive: GDriveConfig = field(default_factory=GDriveConfig)


def load_config(path: str | Path | None = None) -> FridgeLensConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be supplied via environment variables instead.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cam = raw.get("camera", {})
    gw = raw.get("gateway", {})
    prf = raw.get("preferences", {})
    exp = raw.get("export", {})
    gdr = raw.get("gdrive", {})

    gemini_cfg = gw.get("gemini", {})
    claude_cfg = gw.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = (
        gemini_cfg.get("api_key", "")
        or os.environ.get("GEMINI_API_KEY", "")
        or os.environ.get("API_KEY", "")
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    defaults_gdrive = GDriveConfig()

    return FridgeLensConfig(
        camera=CameraConfig(index=cam.get("index", 0)),
        gateway=GatewayConfig(
            backend=gw.get("backend", "gemini"),
            gemini=GeminiConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", DEFAULT_GEMINI_MODEL),
            ),
            claude=ClaudeConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", DEFAULT_CLAUDE_MODEL),
            ),
        ),
        preferences=PreferencesConfig(
            dietary_preference=prf.get(
                "dietary_preference", DEFAULT_DIETARY_PREFERENCE
            ),
            allergies=prf.get("allergies", ""),
        ),
        export=ExportConfig(dir=exp.get("dir", ExportConfig().dir)),
        gdrive=GDriveConfig(
            enabled=gdr.get("enabled", False),
            credentials_path=gdr.get(
                "credentials_path", defaults_gdrive.credentials_path
            ),
            token_path=gdr.get("token_path", defaults_gdrive.token_path),
            folder_id=gdr.get("folder_id", ""),
        ),
    )
