"""
存储键工具

解决 URL 编码不一致导致的 episode_id 对不上的问题：
同一剧集可能以原文、一次编码、多次编码的形式传入，规范化后得到同一个键。

键格式：
    translation:<normalized episode_id>:<subtitle_id>
    progress:<user_id>:<normalized episode_id>
"""
import re
from typing import NamedTuple, Optional
from urllib.parse import quote, unquote

TRANSLATION_PREFIX = "translation"
PROGRESS_PREFIX = "progress"

# encodeURIComponent 不转义的字符：A-Z a-z 0-9 - _ . ~ ! * ' ( )
_URI_COMPONENT_SAFE = "!~*'()"
# 不跟两位十六进制数的 %，decodeURIComponent 对这种串整体报错
_BARE_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class TranslationKey(NamedTuple):
    episode_id: str
    subtitle_id: str


def normalize_episode_id(episode_id: str) -> str:
    """
    规范化 episode_id：反复解码直到不再变化，再编码一次。

    解码失败（非法 UTF-8 序列，或有不成对的 %）时停在上一次成功解码的结果。
    每次有效解码至少缩短两个字符，所以轮数不超过 len(episode_id)。
    幂等：normalize(normalize(x)) == normalize(x)。
    """
    decoded = episode_id
    for _ in range(len(episode_id) + 1):
        if _BARE_PERCENT_RE.search(decoded):
            break
        try:
            next_decoded = unquote(decoded, errors="strict")
        except UnicodeDecodeError:
            break
        if next_decoded == decoded:
            break
        decoded = next_decoded

    return quote(decoded, safe=_URI_COMPONENT_SAFE)


def compare_episode_ids(id1: str, id2: str) -> bool:
    """比较两个 episode_id 是否相等（忽略编码差异）。"""
    return normalize_episode_id(id1) == normalize_episode_id(id2)


def create_translation_key(episode_id: str, subtitle_id: str) -> str:
    return f"{TRANSLATION_PREFIX}:{normalize_episode_id(episode_id)}:{subtitle_id}"


def create_translation_pattern(episode_id: str) -> str:
    """某剧集所有翻译的查询模式（前缀 + *）。"""
    return f"{TRANSLATION_PREFIX}:{normalize_episode_id(episode_id)}:*"


def parse_translation_key(key: str) -> Optional[TranslationKey]:
    """
    从存储键中提取 episode_id（规范化形式）和 subtitle_id。

    只按前两个冒号切分：subtitle_id 本身含冒号（"0:00:31.29-..."），
    而规范化后的 episode_id 不含冒号。
    """
    parts = key.split(":", 2)
    if len(parts) != 3 or parts[0] != TRANSLATION_PREFIX:
        return None
    _, episode_id, subtitle_id = parts
    if not episode_id or not subtitle_id:
        return None
    return TranslationKey(episode_id=episode_id, subtitle_id=subtitle_id)


def create_progress_key(user_id: str, episode_id: str) -> str:
    return f"{PROGRESS_PREFIX}:{user_id}:{normalize_episode_id(episode_id)}"


def create_progress_pattern(user_id: str) -> str:
    return f"{PROGRESS_PREFIX}:{user_id}:*"


def key_matches(pattern: str, key: str) -> bool:
    """末尾为 * 时按前缀匹配，否则要求完全相等。"""
    if pattern.endswith("*"):
        return key.startswith(pattern[:-1])
    return key == pattern
