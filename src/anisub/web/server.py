"""
FastAPI server for anime subtitle study

启动方式：anisub serve [--port 8765] [--subtitles-dir ./subtitles]
"""
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from anisub.storage import MemoryStore, TranslationService, TranslationStore
from anisub.web.api.anime import router as anime_router
from anisub.web.api.dev import router as dev_router
from anisub.web.api.episodes import router as episodes_router
from anisub.web.api.export import router as export_router
from anisub.web.api.progress import router as progress_router
from anisub.web.api.translations import router as translations_router


def create_app(
    subtitles_dir: str | Path = "./subtitles",
    store: Optional[TranslationStore] = None,
    environment: str = "development",
    static_dir: Optional[str] = None,
) -> FastAPI:
    """
    创建 FastAPI 应用。

    Args:
        subtitles_dir: 字幕根目录路径
        store: 翻译存储（None = 新建 MemoryStore）
        environment: development / production（production 下关闭 /api/dev）
        static_dir: 前端静态文件目录（None 则不挂载）
    """
    app = FastAPI(
        title="Anime Subtitle Study",
        version="1.0.0",
    )

    # CORS（开发模式下允许前端 dev server）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.subtitles_dir = Path(subtitles_dir).resolve()
    app.state.environment = environment
    app.state.translations = TranslationService(store if store is not None else MemoryStore())

    app.include_router(anime_router, prefix="/api")
    app.include_router(episodes_router, prefix="/api")
    app.include_router(export_router, prefix="/api")
    app.include_router(translations_router, prefix="/api")
    app.include_router(progress_router, prefix="/api")
    app.include_router(dev_router, prefix="/api")

    # 挂载前端静态文件（生产模式）
    if static_dir and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app
