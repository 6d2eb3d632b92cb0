"""
字幕文件编码检测：bytes → str

检测顺序：
1. BOM: FF FE → UTF-16LE，FE FF → UTF-16BE（BOM 本身不输出）
2. 无 BOM：采样前 1000 字节，统计 "ASCII 字符 + 0x00" 的字节对，超过 10 对视为 UTF-16LE
3. 其他情况按 UTF-8 解码（带 UTF-8 BOM 时去掉 BOM）

无法解码的字节替换为 U+FFFD，不抛异常。
"""

_UTF16LE_BOM = b"\xff\xfe"
_UTF16BE_BOM = b"\xfe\xff"

_SNIFF_BYTES = 1000
_UTF16LE_MIN_SCORE = 10


def _utf16le_score(data: bytes) -> int:
    """统计 (0x01-0x7E, 0x00) 字节对的数量。"""
    score = 0
    limit = min(len(data), _SNIFF_BYTES)
    for i in range(0, limit, 2):
        if i + 1 >= len(data):
            break
        if 0x00 < data[i] < 0x7F and data[i + 1] == 0x00:
            score += 1
    return score


def detect_encoding(data: bytes) -> str:
    """返回 Python codec 名：utf-16-le / utf-16-be / utf-8-sig。"""
    if data[:2] == _UTF16LE_BOM:
        return "utf-16-le"
    if data[:2] == _UTF16BE_BOM:
        return "utf-16-be"
    if _utf16le_score(data) > _UTF16LE_MIN_SCORE:
        return "utf-16-le"
    return "utf-8-sig"


def decode_subtitle_bytes(data: bytes) -> str:
    """
    将字幕文件原始字节解码为文本。

    Args:
        data: 文件内容

    Returns:
        解码后的文本（不含 BOM）
    """
    encoding = detect_encoding(data)
    if encoding.startswith("utf-16") and data[:2] in (_UTF16LE_BOM, _UTF16BE_BOM):
        data = data[2:]
    return data.decode(encoding, errors="replace")
