from typing import Dict, Any
from dataclasses import dataclass


@dataclass
class TreeIssue:
    """缩进树构建问题记录

    用于存储构建过程中发现的单个错误或警告信息
    """
    message: str  # 错误消息
    line_num: int  # 行号
    line_content: str  # 行内容
    severity: str = "error"  # error / warning

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "message": self.message,
            "line_num": self.line_num,
            "line_content": self.line_content,
            "severity": self.severity
        }

    def __str__(self) -> str:
        return f"[{self.severity}] Line {self.line_num}: {self.message}"
