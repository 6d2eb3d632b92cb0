"""
Subtitle 模块（字幕解析引擎）

数据流：
    bytes → decoder.py → str → ass_parser.py → ParsedDocument
                                    ↓
                        lyrics.py（歌词过滤） + identity.py（稳定 ID）

所有函数都是纯函数：不保存状态、不做 IO，可并发调用。
"""
from .ass_parser import clean_ass_text, parse_ass, parse_dialogue_line
from .decoder import decode_subtitle_bytes
from .identity import generate_subtitle_id
from .lyrics import DEFAULT_WINDOWS, LyricsWindows, is_lyrics_content, is_lyrics_style
from .timecode import seconds_to_time, time_to_seconds

__all__ = [
    "parse_ass",
    "parse_dialogue_line",
    "clean_ass_text",
    "decode_subtitle_bytes",
    "generate_subtitle_id",
    "LyricsWindows",
    "DEFAULT_WINDOWS",
    "is_lyrics_style",
    "is_lyrics_content",
    "time_to_seconds",
    "seconds_to_time",
]
