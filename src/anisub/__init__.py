"""
Anime subtitle study toolkit.

Pipeline:
    ASS bytes
      ↓
    encoding detection (UTF-16 BOM / UTF-16LE sniff / UTF-8)
      ↓
    ASS parsing ([Script Info] / [V4+ Styles] / [Events])
      ↓
    lyric filtering (OP/ED styles, OP/ED time windows)
      ↓
    content-derived subtitle ids
      ↓
    translations keyed by translation:<normalized episode id>:<subtitle id>
"""

from .config.settings import load_env_file

__version__ = "0.1.0"

__all__ = ["load_env_file"]
