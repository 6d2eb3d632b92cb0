"""
Episodes API: 读取单集字幕（解析 + 歌词过滤）并附带已保存的翻译
"""
import logging
from pathlib import Path
from typing import Tuple

from fastapi import APIRouter, HTTPException, Request

from anisub.library.scanner import get_episode_info, read_subtitle_file
from anisub.schema.anime import AnimeInfo, EpisodeInfo
from anisub.schema.subtitle_model import ParsedDocument
from anisub.storage.service import TranslationService
from anisub.subtitle.ass_parser import parse_ass

router = APIRouter()
logger = logging.getLogger(__name__)


def load_episode(subtitles_dir: Path, episode_id: str) -> Tuple[EpisodeInfo, AnimeInfo, ParsedDocument]:
    """
    查找剧集并解析字幕文件。

    Raises:
        FileNotFoundError: 剧集不存在或字幕文件不存在
    """
    found = get_episode_info(subtitles_dir, episode_id)
    if found is None:
        raise FileNotFoundError(f"Episode not found: {episode_id}")

    episode, anime = found
    content = read_subtitle_file(episode.subtitle_path)
    return episode, anime, parse_ass(content)


@router.get("/episodes/{episode_id}")
async def get_episode(request: Request, episode_id: str) -> dict:
    """
    返回格式：
    {
      "episodeId": "...", "episodeNumber": 1, "episodeTitle": null,
      "animeTitle": "...", "animeId": "...",
      "subtitles": [{"id", "startTime", "endTime", "text", "style", "actor"}],
      "translations": [{"id", "episodeId", "subtitleId", ...}]
    }
    """
    subtitles_dir: Path = request.app.state.subtitles_dir
    service: TranslationService = request.app.state.translations

    try:
        episode, anime, parsed = load_episode(subtitles_dir, episode_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    translations = service.get_episode_translations(episode.id)
    logger.info(
        "Episode %s: %d subtitle(s), %d translation(s)",
        episode.id, len(parsed.dialogues), len(translations),
    )

    return {
        "episodeId": episode.id,
        "episodeNumber": episode.number,
        "episodeTitle": episode.title,
        "animeTitle": anime.title,
        "animeId": anime.id,
        "subtitles": [d.to_dict() for d in parsed.dialogues],
        "translations": [t.to_dict() for t in translations],
    }
