"""Configuration helpers for the MythXGenesis project."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class AppConfig:
    """Centralized application configuration."""

    api_key: Optional[str] = None
    text2img_model_id: str = "imagen-4.0-generate-001"
    edit_model_id: str = "gemini-2.5-flash-image"
    output_mime_type: str = "image/png"
    default_aspect_ratio: str = "1:1"
    history_limit: int = 18
    session_ttl_seconds: float = 3600.0
    log_dir: Path = Path("logs")
    server_port: Optional[int] = None


def _load_env_file(path: Path) -> None:
    """Populate environment variables from a simple KEY=VALUE .env file."""
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ[key.strip()] = value.strip().strip('"').strip("'")


def _parse_port(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Return an AppConfig instance with environment-aware settings."""
    env_path = Path(config_path) if config_path else Path(".env")
    _load_env_file(env_path)

    defaults = AppConfig()
    api_key = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")

    return AppConfig(
        api_key=api_key or None,
        text2img_model_id=os.getenv("TEXT2IMG_MODEL_ID") or defaults.text2img_model_id,
        edit_model_id=os.getenv("EDIT_MODEL_ID") or defaults.edit_model_id,
        log_dir=Path(os.getenv("LOG_DIR", str(defaults.log_dir))).expanduser(),
        server_port=_parse_port(os.getenv("PORT")),
    )
