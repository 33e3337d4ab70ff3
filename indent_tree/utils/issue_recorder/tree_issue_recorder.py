from typing import List, Dict, Any

from indent_tree.typedef.issue_recorder_types import TreeIssue
from indent_tree.typedef.cmd_data_types import Colors


class TreeIssueRecorder:
    """缩进树构建问题记录器

    用于收集构建过程中出现的错误和警告信息，供上层代码判断结果是否完整。
    """

    def __init__(self):
        self._issues: List[TreeIssue] = []

    def record_issue(self, message: str, line_num: int, line_content: str, severity: str = "error") -> None:
        """记录一个问题

        Args:
            message: 错误消息
            line_num: 行号
            line_content: 行内容
            severity: error 或 warning
        """
        issue = TreeIssue(
            message=message,
            line_num=line_num,
            line_content=line_content,
            severity=severity
        )
        self._issues.append(issue)

    def get_issues(self) -> List[TreeIssue]:
        """获取所有记录的问题"""
        return self._issues.copy()

    def has_issues(self) -> bool:
        """是否有记录的问题"""
        return len(self._issues) > 0

    def has_errors(self) -> bool:
        """是否有error级别的问题"""
        return any(issue.severity == "error" for issue in self._issues)

    def clear(self) -> None:
        """清空所有问题记录"""
        self._issues.clear()

    def get_issue_count(self) -> int:
        """获取问题数量"""
        return len(self._issues)

    def to_dict_list(self) -> List[Dict[str, Any]]:
        """将所有问题转换为字典列表"""
        return [issue.to_dict() for issue in self._issues]

    def print_issues(self) -> None:
        """打印所有问题"""
        for issue in self._issues:
            color = Colors.FAIL if issue.severity == "error" else Colors.WARNING
            print(f"{color}Line {issue.line_num}: {issue.message}{Colors.ENDC}")
            print(f"  {issue.line_content}")
