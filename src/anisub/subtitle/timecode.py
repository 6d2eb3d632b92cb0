"""
ASS 时间码：H:MM:SS.CC ↔ 秒
"""


def time_to_seconds(time_str: str) -> float:
    """
    时间字符串转换为秒数。

    "0:00:31.29" → 31.29

    格式不对（不是 3 段，或数字无法解析）时返回 0.0。
    注意 0.0 与真实的 0 秒无法区分，来源不可信时调用方需自行判断。
    """
    parts = time_str.split(":")
    if len(parts) != 3:
        return 0.0

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = float(parts[2])
    except ValueError:
        return 0.0

    return hours * 3600 + minutes * 60 + seconds


def seconds_to_time(seconds: float) -> str:
    """
    秒数转换为时间字符串。

    62.5 → "00:01:02.50"（时、分补齐 2 位，秒固定 SS.CC）
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    return f"{hours:02d}:{minutes:02d}:{secs:05.2f}"
