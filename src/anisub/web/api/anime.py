"""
Anime API: 扫描字幕目录，返回动画列表
"""
from pathlib import Path
from typing import List

from fastapi import APIRouter, Request

from anisub.library.scanner import scan_subtitles

router = APIRouter()


@router.get("/anime")
async def list_anime(request: Request) -> List[dict]:
    """
    返回格式：
    [
      {
        "id": "[CASO&I.G][K-ON!]",
        "title": "[K-ON!]",
        "episodes": [{"id": "...-ep01-1920x1080", "number": 1, ...}]
      }
    ]
    """
    subtitles_dir: Path = request.app.state.subtitles_dir
    return [anime.to_dict() for anime in scan_subtitles(subtitles_dir)]
