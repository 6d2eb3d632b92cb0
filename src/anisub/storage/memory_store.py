"""
内存存储（开发环境）

显式构造、按实例隔离：进程启动时创建一个实例传给 TranslationService，
测试里每个用例各自 new 一个。重启服务后数据丢失。
"""
import threading
from typing import Any, Dict, List, Optional

from anisub.schema.anime import Translation, UserProgress
from anisub.storage.base import TranslationStore
from anisub.storage.keys import key_matches


class MemoryStore(TranslationStore):
    backend = "memory"

    def __init__(self):
        self._translations: Dict[str, Translation] = {}
        self._progress: Dict[str, UserProgress] = {}
        self._lock = threading.Lock()

    def set_translation(self, key: str, translation: Translation) -> None:
        with self._lock:
            self._translations[key] = translation

    def get_translation(self, key: str) -> Optional[Translation]:
        return self._translations.get(key)

    def delete_translation(self, key: str) -> None:
        with self._lock:
            self._translations.pop(key, None)

    def translation_keys(self, pattern: str) -> List[str]:
        with self._lock:
            return [k for k in self._translations if key_matches(pattern, k)]

    def set_progress(self, key: str, progress: UserProgress) -> None:
        with self._lock:
            self._progress[key] = progress

    def get_progress(self, key: str) -> Optional[UserProgress]:
        return self._progress.get(key)

    def progress_keys(self, pattern: str) -> List[str]:
        with self._lock:
            return [k for k in self._progress if key_matches(pattern, k)]

    def clear(self) -> None:
        with self._lock:
            self._translations.clear()
            self._progress.clear()

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            translations = list(self._translations.values())
            progress = list(self._progress.values())
        return {
            "translationsCount": len(translations),
            "progressCount": len(progress),
            "translations": [t.to_dict() for t in translations],
            "progress": [p.to_dict() for p in progress],
        }
