"""
Translations API: 保存 / 删除用户翻译

保存前校验 subtitleId 确实是该剧集解析出的一条字幕，避免翻译挂到不存在的行上。
"""
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from anisub.schema.anime import Translation
from anisub.storage.service import TranslationService, now_ms
from anisub.web.api.episodes import load_episode

router = APIRouter()
logger = logging.getLogger(__name__)


class TranslationBody(BaseModel):
    episodeId: str = ""
    subtitleId: str = ""
    originalText: str = ""
    translatedText: str = ""


class TranslationRefBody(BaseModel):
    episodeId: str = ""
    subtitleId: str = ""


@router.post("/translations")
async def save_translation(request: Request, body: TranslationBody) -> dict:
    if not (body.episodeId and body.subtitleId and body.originalText and body.translatedText):
        raise HTTPException(status_code=400, detail="Missing required fields")

    subtitles_dir: Path = request.app.state.subtitles_dir
    service: TranslationService = request.app.state.translations

    try:
        _, _, parsed = load_episode(subtitles_dir, body.episodeId)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if parsed.find_dialogue(body.subtitleId) is None:
        raise HTTPException(status_code=404, detail=f"Subtitle not found: {body.subtitleId}")

    translation = Translation(
        id=f"{body.episodeId}-{body.subtitleId}",
        episode_id=body.episodeId,
        subtitle_id=body.subtitleId,
        original_text=body.originalText,
        translated_text=body.translatedText,
        timestamp=now_ms(),
    )
    service.save_translation(translation)
    logger.info("Saved translation %s", translation.id)

    return {"success": True, "translation": translation.to_dict()}


@router.delete("/translations")
async def delete_translation(request: Request, body: TranslationRefBody) -> dict:
    if not (body.episodeId and body.subtitleId):
        raise HTTPException(status_code=400, detail="Missing required fields")

    service: TranslationService = request.app.state.translations
    service.delete_translation(body.episodeId, body.subtitleId)
    return {"success": True}
