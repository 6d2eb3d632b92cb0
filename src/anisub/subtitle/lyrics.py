"""
歌词过滤：判断一条对话是否为 OP/ED 歌词

两层规则：
1. style 规则：style 名与歌词 style 关键字（OPJ/EDC/SONG/...）完全匹配或互相包含 → 歌词
2. 内容 + 时间规则（style 规则未命中时）：开始时间落在 OP 窗口（30-180s）或
   ED 窗口（>=1200s）内，且文本像歌词（纯英文 / 音符 / 首字母大写短语 / 常见感叹词）→ 歌词

两层都是启发式，会有误判；时间窗口按 ~24 分钟一集的 TV 动画设定。
"""
import re
from dataclasses import dataclass

from anisub.config import lyrics_style_keys
from anisub.subtitle.timecode import time_to_seconds


@dataclass(frozen=True)
class LyricsWindows:
    """OP/ED 时间窗口（秒）。"""
    op_start: float = 30.0
    op_end: float = 180.0
    ed_start: float = 1200.0

    def contains(self, seconds: float) -> bool:
        in_op = self.op_start <= seconds <= self.op_end
        in_ed = seconds >= self.ed_start
        return in_op or in_ed


DEFAULT_WINDOWS = LyricsWindows()

LYRICS_PATTERNS = (
    re.compile(r"^[A-Za-z\s]+$"),       # 纯英文（OP/ED 常有英文歌词）
    re.compile(r"[♪♫♬♩]"),              # 音符
    re.compile(r"^\s*[A-Z][a-z\s]*$"),  # 首字母大写的英文短语
    # 常见歌词感叹词；ASCII 词边界，紧挨假名时也算整词
    re.compile(r"\b(la\s+la|na\s+na|oh\s+oh|yeah|wow)\b", re.IGNORECASE | re.ASCII),
)


def is_lyrics_style(style: str) -> bool:
    """
    判断 style 是否为歌词相关（不区分大小写，完全匹配或互相包含）。

    空 style 名被任何关键字包含，所以没有 style 的对话行同样算歌词。
    """
    upper_style = style.upper()

    keys = lyrics_style_keys()
    if upper_style in keys:
        return True

    return any(key in upper_style or upper_style in key for key in keys)


def looks_like_lyrics(text: str) -> bool:
    """文本是否命中任一歌词特征。"""
    return any(pattern.search(text) for pattern in LYRICS_PATTERNS)


def is_lyrics_content(text: str, start_time: str, windows: LyricsWindows | None = None) -> bool:
    """
    判断文本内容是否像歌词。

    只在 OP/ED 时间窗口内检查文本特征，窗口外一律返回 False。

    Args:
        text: 清理后的文本
        start_time: 开始时间（原始文本）
        windows: OP/ED 时间窗口（None = DEFAULT_WINDOWS）
    """
    windows = windows or DEFAULT_WINDOWS
    if not windows.contains(time_to_seconds(start_time)):
        return False
    return looks_like_lyrics(text)
