"""
Storage 模块

- keys.py: 存储键规范化（episode_id 多重编码 → 唯一键）
- base.py: TranslationStore 接口（translations / progress 两个命名空间）
- memory_store.py: 内存实现（开发环境）
- json_store.py: JSON 文件实现（持久化）
- service.py: TranslationService（业务入口）
"""
from anisub.config.settings import AppConfig

from .base import TranslationStore
from .json_store import JsonFileStore
from .memory_store import MemoryStore
from .service import TranslationService


def build_store(config: AppConfig) -> TranslationStore:
    """按配置创建存储实例。"""
    if config.store == "json":
        return JsonFileStore(config.store_path)
    return MemoryStore()


__all__ = [
    "TranslationStore",
    "MemoryStore",
    "JsonFileStore",
    "TranslationService",
    "build_store",
]
