"""
字幕稳定 ID

ID 只由 (start_time, end_time, text) 决定：
- 同一字幕文件重复解析得到相同的 ID
- 翻译以 ID 为键存储，字幕重新扫描后仍然能对上

ID 格式：<start>-<end>-<base36(abs(hash))>
hash 为 32 位有符号 rolling hash（hash = hash * 31 + code unit），
按 UTF-16 code unit 计算，和已存储的翻译记录保持一致。

禁止使用随机后缀 / 对象 ID，否则重新扫描后翻译会丢失。
"""

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def string_hash(content: str) -> int:
    """32 位有符号 rolling hash（hash * 31 + code unit）。"""
    h = 0
    data = content.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def to_base36(value: int) -> str:
    """非负整数 → base36（小写）。"""
    if value < 0:
        raise ValueError(f"to_base36 expects a non-negative integer, got {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def generate_subtitle_id(start_time: str, end_time: str, text: str) -> str:
    """
    生成稳定的字幕 ID。

    Args:
        start_time: 开始时间（原始文本）
        end_time: 结束时间（原始文本）
        text: 清理后的文本

    Returns:
        "<start>-<end>-<hash>"，如 "0:00:31.29-0:00:33.78-1x2k3b"
    """
    content = f"{start_time}-{end_time}-{text}"
    hash_str = to_base36(abs(string_hash(content)))
    return f"{start_time}-{end_time}-{hash_str}"
