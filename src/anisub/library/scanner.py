"""
字幕库扫描：扫描字幕目录，返回动画 / 剧集列表

目录结构：
    {subtitles_dir}/
      [CASO&I.G][K-ON!]/
        [I.G&CASO][K-ON!][01][BDRIP][1920x1080][x264_FLAC_3][4A9C59D1].JP.ass
        ...

只收录日语字幕（*.JP.ass / *.jp.ass），文件名中找不到集数的文件跳过。
每次调用都重新扫描，不缓存。
"""
import re
from pathlib import Path
from typing import List, Optional, Tuple

from anisub.schema.anime import AnimeInfo, EpisodeInfo
from anisub.storage.keys import compare_episode_ids
from anisub.subtitle.decoder import decode_subtitle_bytes
from anisub.utils.logger import warning

SUBTITLE_SUFFIXES = (".JP.ass", ".jp.ass")

_BRACKET_NUMBER_RE = re.compile(r"\[(\d+)\]")
_EP_NUMBER_RE = re.compile(r"EP(\d+)", re.IGNORECASE)
_RESOLUTION_RE = re.compile(r"(\d{3,4}x\d{3,4})")
_SUFFIX_RE = re.compile(r"\.(JP|jp)\.ass$")


def extract_episode_number(filename: str) -> Optional[int]:
    """从文件名中提取集数：优先 [01]，其次 EP01。"""
    m = _BRACKET_NUMBER_RE.search(filename)
    if m:
        return int(m.group(1))

    m = _EP_NUMBER_RE.search(filename)
    if m:
        return int(m.group(1))

    return None


def generate_anime_id(anime_dir: str) -> str:
    """动画 ID：目录名，空白转连字符，连续连字符合并。"""
    anime_id = anime_dir.strip()
    anime_id = re.sub(r"\s+", "-", anime_id)
    anime_id = re.sub(r"-+", "-", anime_id)
    return anime_id or "anime"


def generate_episode_id(anime_dir: str, episode_number: int, filename: Optional[str] = None) -> str:
    """
    剧集 ID：<anime_id>-ep<NN>[-<分辨率>]

    例：[CASO&I.G][K-ON!] + [01][1920x1080] → "[CASO&I.G][K-ON!]-ep01-1920x1080"
    """
    anime_id = generate_anime_id(anime_dir)

    if filename:
        base_name = _SUFFIX_RE.sub("", filename)

        m = _BRACKET_NUMBER_RE.search(base_name)
        episode_str = m.group(1).zfill(2) if m else str(episode_number).zfill(2)

        m = _RESOLUTION_RE.search(base_name)
        resolution = m.group(1) if m else ""

        episode_id = f"{anime_id}-ep{episode_str}"
        if resolution:
            episode_id += f"-{resolution}"
        return episode_id

    return f"{anime_id}-ep{str(episode_number).zfill(2)}"


def clean_anime_name(dir_name: str) -> str:
    """去掉开头 / 结尾的发布组标签 [xxx]，保留核心名称。"""
    title = re.sub(r"^\[.*?\]", "", dir_name)
    title = re.sub(r"\[.*?\]$", "", title)
    title = title.strip()
    return title or dir_name


def scan_episodes(anime_path: Path) -> List[EpisodeInfo]:
    """扫描单个动画目录下的剧集（按集数排序）。"""
    anime_dir = anime_path.name
    anime_id = generate_anime_id(anime_dir)

    episodes = []
    for file in sorted(anime_path.iterdir()):
        if not file.is_file() or not file.name.endswith(SUBTITLE_SUFFIXES):
            continue

        number = extract_episode_number(file.name)
        if number is None:
            continue

        episodes.append(EpisodeInfo(
            id=generate_episode_id(anime_dir, number, file.name),
            number=number,
            subtitle_path=str(file),
            anime_id=anime_id,
        ))

    episodes.sort(key=lambda ep: ep.number)
    return episodes


def scan_subtitles(subtitles_dir: Path) -> List[AnimeInfo]:
    """
    扫描字幕目录，获取所有动画和剧集信息。

    Returns:
        按标题排序的动画列表（没有剧集的目录不返回）
    """
    subtitles_dir = Path(subtitles_dir)
    if not subtitles_dir.is_dir():
        warning(f"scanner: subtitles dir not found: {subtitles_dir}")
        return []

    anime_list = []
    for anime_path in subtitles_dir.iterdir():
        if not anime_path.is_dir():
            continue

        episodes = scan_episodes(anime_path)
        if episodes:
            anime_list.append(AnimeInfo(
                id=generate_anime_id(anime_path.name),
                title=clean_anime_name(anime_path.name),
                episodes=episodes,
            ))

    anime_list.sort(key=lambda a: a.title)
    return anime_list


def get_episode_info(subtitles_dir: Path, episode_id: str) -> Optional[Tuple[EpisodeInfo, AnimeInfo]]:
    """根据 episode_id 查找剧集（忽略编码差异）。找不到返回 None。"""
    for anime in scan_subtitles(subtitles_dir):
        for episode in anime.episodes:
            if compare_episode_ids(episode.id, episode_id):
                return episode, anime
    return None


def read_subtitle_file(file_path: str | Path) -> str:
    """
    读取字幕文件并解码。

    Raises:
        FileNotFoundError: 文件不存在
    """
    with open(file_path, "rb") as f:
        data = f.read()
    return decode_subtitle_bytes(data)
