"""
Export API: 导出单集对白为 SRT（原文 + 已保存的译文）
"""
from datetime import timedelta
from pathlib import Path
from typing import Dict, List

import srt
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from anisub.schema.anime import Translation
from anisub.schema.subtitle_model import DialogueEvent
from anisub.storage.service import TranslationService
from anisub.subtitle.timecode import time_to_seconds
from anisub.web.api.episodes import load_episode

router = APIRouter()


def build_srt(dialogues: List[DialogueEvent], translations: List[Translation]) -> str:
    """
    构建 SRT 字幕。有译文的条目在原文下一行追加译文。
    """
    by_subtitle: Dict[str, str] = {t.subtitle_id: t.translated_text for t in translations}

    subs = []
    for index, d in enumerate(dialogues, start=1):
        content = d.text
        translated = by_subtitle.get(d.id)
        if translated:
            content = f"{content}\n{translated}"
        subs.append(srt.Subtitle(
            index=index,
            start=timedelta(seconds=time_to_seconds(d.start_time)),
            end=timedelta(seconds=time_to_seconds(d.end_time)),
            content=content,
        ))
    return srt.compose(subs, reindex=False)


@router.get("/episodes/{episode_id}/export.srt")
async def export_episode_srt(request: Request, episode_id: str) -> PlainTextResponse:
    subtitles_dir: Path = request.app.state.subtitles_dir
    service: TranslationService = request.app.state.translations

    try:
        episode, _, parsed = load_episode(subtitles_dir, episode_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    translations = service.get_episode_translations(episode.id)
    return PlainTextResponse(
        build_srt(parsed.dialogues, translations),
        media_type="application/x-subrip; charset=utf-8",
    )
