"""
JSON 文件存储（持久化）

单文件结构：
{
  "translations": { "translation:<ep>:<sub>": {...Translation}, ... },
  "progress":     { "progress:<user>:<ep>": {...UserProgress}, ... }
}

启动时加载到内存，每次修改后原子写入（tmp + replace）。
"""
import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from anisub.schema.anime import Translation, UserProgress
from anisub.storage.base import TranslationStore
from anisub.storage.keys import key_matches
from anisub.utils.logger import info


class JsonFileStore(TranslationStore):
    backend = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._translations: Dict[str, Translation] = {}
        self._progress: Dict[str, UserProgress] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self._translations = {
            k: Translation.from_dict(v) for k, v in data.get("translations", {}).items()
        }
        self._progress = {
            k: UserProgress.from_dict(v) for k, v in data.get("progress", {}).items()
        }
        info(
            f"store: loaded {len(self._translations)} translation(s), "
            f"{len(self._progress)} progress record(s) from {self.path}"
        )

    def _save(self) -> None:
        """原子写入（调用方持有锁）。"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        out = {
            "translations": {k: t.to_dict() for k, t in self._translations.items()},
            "progress": {k: p.to_dict() for k, p in self._progress.items()},
        }
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(out, f, indent=2, ensure_ascii=False)
        tmp.replace(self.path)

    def set_translation(self, key: str, translation: Translation) -> None:
        with self._lock:
            self._translations[key] = translation
            self._save()

    def get_translation(self, key: str) -> Optional[Translation]:
        return self._translations.get(key)

    def delete_translation(self, key: str) -> None:
        with self._lock:
            if self._translations.pop(key, None) is not None:
                self._save()

    def translation_keys(self, pattern: str) -> List[str]:
        with self._lock:
            return [k for k in self._translations if key_matches(pattern, k)]

    def set_progress(self, key: str, progress: UserProgress) -> None:
        with self._lock:
            self._progress[key] = progress
            self._save()

    def get_progress(self, key: str) -> Optional[UserProgress]:
        return self._progress.get(key)

    def progress_keys(self, pattern: str) -> List[str]:
        with self._lock:
            return [k for k in self._progress if key_matches(pattern, k)]

    def clear(self) -> None:
        with self._lock:
            self._translations.clear()
            self._progress.clear()
            self._save()

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
