"""
Dev API: 查看 / 清空存储（仅开发环境）
"""
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request

from anisub.storage.service import TranslationService

router = APIRouter()


def _require_development(request: Request) -> None:
    if request.app.state.environment == "production":
        raise HTTPException(status_code=403, detail="Only available in development")


@router.get("/dev")
async def get_dev_info(request: Request) -> dict:
    _require_development(request)
    service: TranslationService = request.app.state.translations
    return {
        "environment": request.app.state.environment,
        "storage": service.store.backend,
        "stats": service.store.stats(),
    }


@router.delete("/dev")
async def clear_store(request: Request) -> dict:
    _require_development(request)
    service: TranslationService = request.app.state.translations
    service.store.clear()
    return {
        "message": "Store cleared",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
