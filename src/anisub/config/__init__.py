"""Configuration and settings"""
import json
from pathlib import Path

from .settings import AppConfig, load_env_file, resolve_relative_path

_LYRICS_STYLES_PATH = Path(__file__).parent / "lyrics_styles.json"

_lyrics_style_keys: tuple[str, ...] | None = None


def load_lyrics_styles() -> list[dict]:
    """读取歌词 style 表。[{"key": "OPJ", "name": "片头曲日文"}, ...]"""
    with open(_LYRICS_STYLES_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def lyrics_style_keys() -> tuple[str, ...]:
    """歌词 style 关键字（大写），只加载一次。"""
    global _lyrics_style_keys
    if _lyrics_style_keys is None:
        _lyrics_style_keys = tuple(e["key"].upper() for e in load_lyrics_styles())
    return _lyrics_style_keys


__all__ = [
    "AppConfig",
    "load_env_file",
    "resolve_relative_path",
    "load_lyrics_styles",
    "lyrics_style_keys",
]
