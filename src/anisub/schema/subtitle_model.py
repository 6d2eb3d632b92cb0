"""
Subtitle Model: ASS 字幕解析结果

设计理念：
- 每次读取字幕文件都重新解析，不缓存可变状态
- DialogueEvent.id 只由 (start_time, end_time, text) 决定，重复解析得到相同 ID
- 翻译记录以 id 为键挂在字幕上，字幕文件重新扫描后依然能对上

JSON 输出使用 camelCase 键（startTime / endTime），与前端约定一致。
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class DialogueEvent:
    """
    一条对话（已过滤歌词、已清理格式标签）。

    字段：
    - id: 内容派生的稳定 ID（<start>-<end>-<base36 hash>）
    - start_time: 开始时间（原始文本，如 "0:00:31.29"）
    - end_time: 结束时间（原始文本）
    - text: 清理后的文本（非空）
    - style: style 名称
    - actor: 说话人
    """
    id: str
    start_time: str
    end_time: str
    text: str
    style: str = ""
    actor: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "text": self.text,
            "style": self.style,
            "actor": self.actor,
        }


@dataclass
class ParsedDocument:
    """
    一个 ASS 文件的解析结果。

    字段：
    - info: [Script Info] 元数据（重复 key 后者覆盖）
    - styles: [V4+ Styles] 中的 style 定义（name → {字段: 值}）
    - dialogues: 对话列表，保持文件中的原始顺序
    """
    info: Dict[str, str] = field(default_factory=dict)
    styles: Dict[str, Dict[str, str]] = field(default_factory=dict)
    dialogues: List[DialogueEvent] = field(default_factory=list)

    def dialogue_ids(self) -> List[str]:
        return [d.id for d in self.dialogues]

    def find_dialogue(self, subtitle_id: str) -> DialogueEvent | None:
        for d in self.dialogues:
            if d.id == subtitle_id:
                return d
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "info": dict(self.info),
            "styles": {name: dict(fields) for name, fields in self.styles.items()},
            "dialogues": [d.to_dict() for d in self.dialogues],
        }
