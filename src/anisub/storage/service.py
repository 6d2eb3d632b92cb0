"""
TranslationService: 翻译 + 学习进度的读写入口

所有键都经过 keys.py 规范化，调用方传入任意编码形式的 episode_id 都能对上。
"""
import time
from typing import Dict, List, Optional

from anisub.schema.anime import Translation, UserProgress
from anisub.storage.base import TranslationStore
from anisub.storage.keys import (
    TRANSLATION_PREFIX,
    create_progress_key,
    create_progress_pattern,
    create_translation_key,
    create_translation_pattern,
    normalize_episode_id,
)
from anisub.utils.logger import debug


def now_ms() -> int:
    return int(time.time() * 1000)


class TranslationService:
    def __init__(self, store: TranslationStore):
        self.store = store

    # ── 翻译 ──

    def save_translation(self, translation: Translation) -> None:
        key = create_translation_key(translation.episode_id, translation.subtitle_id)
        debug(f"translation: save {key} (episode_id={translation.episode_id!r})")
        self.store.set_translation(key, translation)

    def get_translation(self, episode_id: str, subtitle_id: str) -> Optional[Translation]:
        return self.store.get_translation(create_translation_key(episode_id, subtitle_id))

    def get_episode_translations(self, episode_id: str) -> List[Translation]:
        pattern = create_translation_pattern(episode_id)
        keys = self.store.translation_keys(pattern)
        debug(
            f"translation: pattern {pattern} "
            f"(normalized={normalize_episode_id(episode_id)}) matched {len(keys)} key(s)"
        )
        if not keys:
            return []
        return [t for t in self.store.get_translations(keys) if t is not None]

    def delete_translation(self, episode_id: str, subtitle_id: str) -> None:
        self.store.delete_translation(create_translation_key(episode_id, subtitle_id))

    # ── 学习进度 ──

    def save_user_progress(self, progress: UserProgress) -> None:
        key = create_progress_key(progress.user_id, progress.episode_id)
        self.store.set_progress(key, progress)

    def get_user_progress(self, user_id: str, episode_id: str) -> Optional[UserProgress]:
        return self.store.get_progress(create_progress_key(user_id, episode_id))

    def get_all_user_progress(self, user_id: str) -> List[UserProgress]:
        keys = self.store.progress_keys(create_progress_pattern(user_id))
        if not keys:
            return []
        return [p for p in self.store.get_progresses(keys) if p is not None]

    def mark_subtitle_completed(self, user_id: str, episode_id: str, subtitle_id: str) -> UserProgress:
        """标记字幕已完成（重复标记不产生变化）。"""
        progress = self.get_user_progress(user_id, episode_id) or UserProgress(
            user_id=user_id,
            episode_id=episode_id,
            completed_subtitles=[],
            last_position=0.0,
            updated_at=now_ms(),
        )

        if subtitle_id not in progress.completed_subtitles:
            progress.completed_subtitles.append(subtitle_id)
            progress.updated_at = now_ms()
            self.save_user_progress(progress)

        return progress

    def get_study_stats(self, user_id: str) -> Dict[str, int]:
        all_progress = self.get_all_user_progress(user_id)
        translation_keys = self.store.translation_keys(f"{TRANSLATION_PREFIX}:*")

        return {
            "totalEpisodes": len(all_progress),
            "completedSubtitles": sum(len(p.completed_subtitles) for p in all_progress),
            "totalTranslations": len(translation_keys),
        }
