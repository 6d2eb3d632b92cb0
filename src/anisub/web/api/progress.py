"""
Progress API: 用户学习进度 + 学习统计
"""
from typing import List

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from anisub.schema.anime import UserProgress
from anisub.storage.service import TranslationService, now_ms

router = APIRouter()


class ProgressBody(BaseModel):
    userId: str = ""
    episodeId: str = ""
    completedSubtitles: List[str] = []
    lastPosition: float = 0.0


class CompleteBody(BaseModel):
    userId: str = ""
    episodeId: str = ""
    subtitleId: str = ""


@router.get("/progress/{user_id}")
async def list_progress(request: Request, user_id: str) -> List[dict]:
    service: TranslationService = request.app.state.translations
    return [p.to_dict() for p in service.get_all_user_progress(user_id)]


@router.get("/progress/{user_id}/stats")
async def get_stats(request: Request, user_id: str) -> dict:
    """{"totalEpisodes": N, "completedSubtitles": N, "totalTranslations": N}"""
    service: TranslationService = request.app.state.translations
    return service.get_study_stats(user_id)


@router.put("/progress")
async def put_progress(request: Request, body: ProgressBody) -> dict:
    if not (body.userId and body.episodeId):
        raise HTTPException(status_code=400, detail="Missing required fields")

    service: TranslationService = request.app.state.translations
    progress = UserProgress(
        user_id=body.userId,
        episode_id=body.episodeId,
        # 去重，保持顺序
        completed_subtitles=list(dict.fromkeys(body.completedSubtitles)),
        last_position=body.lastPosition,
        updated_at=now_ms(),
    )
    service.save_user_progress(progress)
    return progress.to_dict()


@router.post("/progress/complete")
async def complete_subtitle(request: Request, body: CompleteBody) -> dict:
    if not (body.userId and body.episodeId and body.subtitleId):
        raise HTTPException(status_code=400, detail="Missing required fields")

    service: TranslationService = request.app.state.translations
    progress = service.mark_subtitle_completed(body.userId, body.episodeId, body.subtitleId)
    return progress.to_dict()
