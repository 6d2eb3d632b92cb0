"""测试公共 fixture：示例 ASS 字幕 + 临时字幕库"""
from pathlib import Path

import pytest

SAMPLE_ASS = r"""[Script Info]
; Script generated by Aegisub
Title: K-ON
Original Script: 华盟字幕社
PlayResX: 848
PlayResY: 480

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: zhengwen,MS Gothic,26,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,2,1,2,10,10,10,128
Style: OPJ,MS Gothic,22,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,2,1,8,10,10,10,128

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:31.29,0:00:33.78,zhengwen,NTP,0,0,0,,お姉ちゃん そろそろ起きないと…
Dialogue: 0,0:00:34.10,0:00:35.50,zhengwen,NTP,0,0,0,,{\i1}はッ ８時！{\i0}
Dialogue: 0,0:01:40.00,0:01:44.00,OPJ,,0,0,0,,{\fad(200,200)}キラキラ光る
Dialogue: 0,0:01:45.00,0:01:48.00,zhengwen,,0,0,0,,Yeah yeah yeah
Dialogue: 0,0:05:00.00,0:05:02.00,zhengwen,,0,0,0,,えっ, 本当に？, うん
Dialogue: 0,0:05:03.00,0:05:04.00,zhengwen,,0,0,0,,{\pos(10,10)}
Comment: 0,0:05:05.00,0:05:06.00,zhengwen,,0,0,0,,コメント
Dialogue: 0,0:05:07.00,0:05:08.00
Dialogue: 0,0:10:00.00,0:10:02.00,zhengwen,,0,0,0,,Yeah yeah yeah
Dialogue: 0,0:21:00.00,0:21:04.00,zhengwen,,0,0,0,,♪～
Dialogue: 0,0:21:10.00,0:21:12.00,zhengwen,,0,0,0,,高校生！
"""

# 保留下来的对白（按文件顺序）
SAMPLE_KEPT_TEXTS = [
    "お姉ちゃん そろそろ起きないと…",
    "はッ ８時！",
    "えっ, 本当に？, うん",
    "Yeah yeah yeah",
    "高校生！",
]

KON_DIR = "[CASO&I.G][K-ON!]"
KON_EP01_FILE = "[I.G&CASO][K-ON!][01][BDRIP][1920x1080][x264_FLAC_3][4A9C59D1].JP.ass"
KON_EP02_FILE = "[I.G&CASO][K-ON!][02][BDRIP][1920x1080][x264_FLAC_3][5B0D6AE2].JP.ass"
KON_EP01_ID = "[CASO&I.G][K-ON!]-ep01-1920x1080"
KON_EP02_ID = "[CASO&I.G][K-ON!]-ep02-1920x1080"

LUCKY_DIR = "[Group] Lucky Star [BD]"
LUCKY_EP03_FILE = "Lucky Star EP03.jp.ass"
LUCKY_EP03_ID = "[Group]-Lucky-Star-[BD]-ep03"


@pytest.fixture
def sample_ass() -> str:
    return SAMPLE_ASS


@pytest.fixture
def subtitle_library(tmp_path: Path) -> Path:
    """
    临时字幕库：
      [CASO&I.G][K-ON!]/  ep01 (UTF-16LE + BOM), ep02 (UTF-8), 简体字幕 + 杂项文件（应被忽略）
      [Group] Lucky Star [BD]/  EP03 (UTF-8)
      empty/  没有字幕
    """
    root = tmp_path / "subtitles"

    kon = root / KON_DIR
    kon.mkdir(parents=True)
    (kon / KON_EP01_FILE).write_bytes(b"\xff\xfe" + SAMPLE_ASS.encode("utf-16-le"))
    (kon / KON_EP02_FILE).write_text(SAMPLE_ASS, encoding="utf-8")
    (kon / "[I.G&CASO][K-ON!][01][BDRIP][1920x1080].SC.ass").write_text(SAMPLE_ASS, encoding="utf-8")
    (kon / "notes.txt").write_text("not a subtitle", encoding="utf-8")
    (kon / "Special.JP.ass").write_text(SAMPLE_ASS, encoding="utf-8")

    lucky = root / LUCKY_DIR
    lucky.mkdir()
    (lucky / LUCKY_EP03_FILE).write_text(SAMPLE_ASS, encoding="utf-8")

    (root / "empty").mkdir()
    (root / "readme.txt").write_text("library root", encoding="utf-8")

    return root
