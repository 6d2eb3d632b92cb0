from .scanner import (
    get_episode_info,
    read_subtitle_file,
    scan_subtitles,
)

__all__ = ["scan_subtitles", "get_episode_info", "read_subtitle_file"]
