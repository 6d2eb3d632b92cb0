"""
ASS 解析器：文本 → ParsedDocument

格式：
    [Script Info]
    Title: K-ON
    [V4+ Styles]
    Format: Name, Fontname, ...
    Style: zhengwen,...
    [Events]
    Dialogue: Layer,Start,End,Style,Actor,MarginL,MarginR,MarginV,Effect,Text

处理流程（每行 Dialogue）：
    拆字段（少于 10 个字段 → 丢弃）
      ↓
    style 规则（歌词 style → 丢弃）
      ↓
    清理格式标签（清理后为空 → 丢弃）
      ↓
    内容 + 时间规则（OP/ED 窗口内像歌词 → 丢弃）
      ↓
    生成稳定 ID

格式不规范的行一律静默跳过，不抛异常。
"""
import re
from typing import Dict, List, Optional

from anisub.schema.subtitle_model import DialogueEvent, ParsedDocument
from anisub.subtitle.identity import generate_subtitle_id
from anisub.subtitle.lyrics import LyricsWindows, is_lyrics_content, is_lyrics_style
from anisub.utils.logger import debug

SCRIPT_INFO_SECTION = "Script Info"
EVENTS_SECTION = "Events"
STYLE_SECTIONS = ("V4+ Styles", "V4 Styles")

DIALOGUE_PREFIX = "Dialogue:"
# Layer, Start, End, Style, Actor, MarginL, MarginR, MarginV, Effect
DIALOGUE_PREFIX_FIELDS = 9

DEFAULT_STYLE_FORMAT = [
    "Name", "Fontname", "Fontsize", "PrimaryColour", "SecondaryColour",
    "OutlineColour", "BackColour", "Bold", "Italic", "Underline", "StrikeOut",
    "ScaleX", "ScaleY", "Spacing", "Angle", "BorderStyle", "Outline", "Shadow",
    "Alignment", "MarginL", "MarginR", "MarginV", "Encoding",
]

_OVERRIDE_BLOCK_RE = re.compile(r"\{[^}]*\}")
_ESCAPE_RE = re.compile(r"\\[rn]")
# ECMAScript 空白集合：含 U+FEFF，不含 \x1c-\x1f 和 \x85。字段 trim 与文本清理共用，ID 依赖它
WHITESPACE = (
    "\t\n\x0b\x0c\r \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_WHITESPACE_RE = re.compile(f"[{re.escape(WHITESPACE)}]+")


def _strip(value: str) -> str:
    return value.strip(WHITESPACE)


def clean_ass_text(text: str) -> str:
    """
    清理 ASS 格式标签。

    - 移除 {\\xxx} 覆盖标签
    - 移除 \\r / \\n 转义标记
    - 合并连续空白为一个空格，去掉首尾空白
    """
    text = _OVERRIDE_BLOCK_RE.sub("", text)
    text = _ESCAPE_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip(" ")


def parse_dialogue_line(
    line: str,
    *,
    windows: Optional[LyricsWindows] = None,
) -> Optional[DialogueEvent]:
    """
    解析单行 Dialogue。

    Returns:
        DialogueEvent；字段不足、歌词、清理后为空时返回 None
    """
    if line.startswith(DIALOGUE_PREFIX):
        line = line[len(DIALOGUE_PREFIX):]
    parts = line.split(",")

    if len(parts) < DIALOGUE_PREFIX_FIELDS + 1:
        return None

    start_time = _strip(parts[1])
    end_time = _strip(parts[2])
    style = _strip(parts[3])
    actor = _strip(parts[4])

    # 文本部分可能包含逗号
    text = _strip(",".join(parts[DIALOGUE_PREFIX_FIELDS:]))

    if is_lyrics_style(style):
        return None

    clean_text = clean_ass_text(text)
    if not clean_text:
        return None

    if is_lyrics_content(clean_text, start_time, windows):
        return None

    return DialogueEvent(
        id=generate_subtitle_id(start_time, end_time, clean_text),
        start_time=start_time,
        end_time=end_time,
        text=clean_text,
        style=style,
        actor=actor,
    )


def _parse_format(value: str) -> List[str]:
    return [_strip(name) for name in value.split(",")]


def _parse_style(value: str, style_format: List[str]) -> Optional[Dict[str, str]]:
    values = value.split(",", len(style_format) - 1)
    if len(values) != len(style_format):
        return None
    return {name: _strip(v) for name, v in zip(style_format, values)}


def parse_ass(content: str, *, windows: Optional[LyricsWindows] = None) -> ParsedDocument:
    """
    解析 ASS 字幕文本。

    Args:
        content: 字幕文本（已解码）
        windows: 歌词过滤的 OP/ED 时间窗口（None = 默认窗口）

    Returns:
        ParsedDocument（dialogues 保持文件中的原始顺序）
    """
    result = ParsedDocument()
    current_section = ""
    style_format = DEFAULT_STYLE_FORMAT
    candidates = 0

    for raw_line in content.split("\n"):
        line = _strip(raw_line)

        # 跳过空行和注释
        if not line or line.startswith(";"):
            continue

        if line.startswith("[") and line.endswith("]"):
            current_section = line[1:-1]
            continue

        if current_section == SCRIPT_INFO_SECTION:
            colon_index = line.find(":")
            if colon_index > 0:
                key = _strip(line[:colon_index])
                value = _strip(line[colon_index + 1:])
                result.info[key] = value

        elif current_section in STYLE_SECTIONS:
            key, sep, value = line.partition(":")
            if not sep:
                continue
            if _strip(key) == "Format":
                style_format = _parse_format(value)
            elif _strip(key) == "Style":
                style = _parse_style(value, style_format)
                if style and style.get("Name"):
                    result.styles[style["Name"]] = style

        elif current_section == EVENTS_SECTION and line.startswith(DIALOGUE_PREFIX):
            candidates += 1
            dialogue = parse_dialogue_line(line, windows=windows)
            if dialogue:
                result.dialogues.append(dialogue)

    dropped = candidates - len(result.dialogues)
    if candidates:
        debug(f"ass: {len(result.dialogues)}/{candidates} dialogue lines kept, {dropped} dropped")

    return result
