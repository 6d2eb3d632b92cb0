from .subtitle_model import DialogueEvent, ParsedDocument
from .anime import AnimeInfo, EpisodeInfo, Translation, UserProgress

__all__ = [
    "DialogueEvent",
    "ParsedDocument",
    "AnimeInfo",
    "EpisodeInfo",
    "Translation",
    "UserProgress",
]
