"""
TranslationStore 接口

两个独立的命名空间：
- translations: 键 = translation:<episode>:<subtitle>，值 = Translation
- progress:     键 = progress:<user>:<episode>，值 = UserProgress

读写都按命名空间显式区分，不根据值的字段猜测类型。
并发语义：同一个键 last-write-wins。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from anisub.schema.anime import Translation, UserProgress


class TranslationStore(ABC):
    """翻译 + 学习进度存储。"""

    backend: str = ""

    # ── translations ──

    @abstractmethod
    def set_translation(self, key: str, translation: Translation) -> None: ...

    @abstractmethod
    def get_translation(self, key: str) -> Optional[Translation]: ...

    @abstractmethod
    def delete_translation(self, key: str) -> None: ...

    @abstractmethod
    def translation_keys(self, pattern: str) -> List[str]: ...

    def get_translations(self, keys: List[str]) -> List[Optional[Translation]]:
        return [self.get_translation(k) for k in keys]

    # ── progress ──

    @abstractmethod
    def set_progress(self, key: str, progress: UserProgress) -> None: ...

    @abstractmethod
    def get_progress(self, key: str) -> Optional[UserProgress]: ...

    @abstractmethod
    def progress_keys(self, pattern: str) -> List[str]: ...

    def get_progresses(self, keys: List[str]) -> List[Optional[UserProgress]]:
        return [self.get_progress(k) for k in keys]

    # ── 管理 ──

    @abstractmethod
    def clear(self) -> None:
        """清空所有数据。"""

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        """
        统计信息：
        {"translationsCount", "progressCount", "translations": [...], "progress": [...]}
        """
