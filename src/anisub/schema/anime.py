"""
动画库 + 用户数据模型

- AnimeInfo / EpisodeInfo: 扫描字幕目录得到，不持久化
- Translation / UserProgress: 用户操作产生，持久化到 TranslationStore

两类持久化记录分别存放在 store 的两个命名空间中，读取时不需要按字段猜类型。
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EpisodeInfo:
    id: str
    number: int
    subtitle_path: str
    anime_id: str
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "subtitlePath": self.subtitle_path,
            "animeId": self.anime_id,
        }


@dataclass
class AnimeInfo:
    id: str
    title: str
    episodes: List[EpisodeInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "episodes": [ep.to_dict() for ep in self.episodes],
        }


@dataclass
class Translation:
    """
    用户翻译。

    字段：
    - id: "<episode_id>-<subtitle_id>"
    - episode_id: 剧集 ID（调用方提供的原始形式）
    - subtitle_id: 必须等于该剧集某条 DialogueEvent.id
    - original_text: 原文
    - translated_text: 译文
    - timestamp: 保存时间（epoch 毫秒）
    """
    id: str
    episode_id: str
    subtitle_id: str
    original_text: str
    translated_text: str
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "episodeId": self.episode_id,
            "subtitleId": self.subtitle_id,
            "originalText": self.original_text,
            "translatedText": self.translated_text,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Translation":
        return cls(
            id=data.get("id", ""),
            episode_id=data["episodeId"],
            subtitle_id=data["subtitleId"],
            original_text=data.get("originalText", ""),
            translated_text=data.get("translatedText", ""),
            timestamp=int(data.get("timestamp", 0)),
        )


@dataclass
class UserProgress:
    """
    用户学习进度（per user × episode）。

    字段：
    - completed_subtitles: 已完成的字幕 ID（按完成顺序，不重复）
    - last_position: 最后播放位置（秒）
    - updated_at: 最后更新时间（epoch 毫秒）
    """
    user_id: str
    episode_id: str
    completed_subtitles: List[str] = field(default_factory=list)
    last_position: float = 0.0
    updated_at: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "episodeId": self.episode_id,
            "completedSubtitles": list(self.completed_subtitles),
            "lastPosition": self.last_position,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProgress":
        return cls(
            user_id=data["userId"],
            episode_id=data["episodeId"],
            completed_subtitles=list(data.get("completedSubtitles", [])),
            last_position=float(data.get("lastPosition", 0.0)),
            updated_at=int(data.get("updatedAt", 0)),
        )
