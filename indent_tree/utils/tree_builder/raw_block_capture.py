from enum import Enum
from typing import List, Optional, Type

from indent_tree.typedef.tree_data_types import TreeNode, create_text_node
from indent_tree.typedef.exception_types import ConfusingIndentationError, BackIndentedBlockError
from indent_tree.lib.debug_print import DEBUG_PRINT, DEBUG_T


CLOSE_MARKER = "}"


class CaptureMode(Enum):
    """原文块吸收模式"""
    EXPLICIT = "EXPLICIT"  # 行尾 { 开启，由缩进回退的 } 结束
    FREE = "FREE"  # 行解析器请求 sublines 开启，由缩进回退的行结束


class CaptureAction(Enum):
    """吸收一行之后构建器需要执行的动作"""
    CONSUMED = "CONSUMED"  # 行已被吸收，继续下一行
    CLOSED = "CLOSED"  # 遇到闭合的 }，该行已被消费，需要输出body
    ENDED = "ENDED"  # 自由模式结束，需要输出body，并把该行当作普通行重新处理


class RawBlockCapture:
    """原文块吸收状态

    第一行非空内容的缩进宽度确定"肩宽"(shoulder)，之后每行都去掉这一宽度的前导空白后原样保存。
    缩进小于肩宽的行结束吸收：显式模式下必须以 } 开头，否则视为错误；自由模式下该行交还给构建器。
    """
    def __init__(
        self,
        owner: TreeNode,
        mode: CaptureMode,
        owner_indent: int = 0,
        start_line_num: int = 0,
        start_line_content: str = ""
    ):
        self.owner = owner
        self.mode = mode
        self.owner_indent = owner_indent
        self.start_line_num = start_line_num
        self.start_line_content = start_line_content
        self.shoulder: Optional[int] = None
        self.body_lines: List[str] = []
        self.pending_blank_lines: List[str] = []  # 尚未确认是否属于块内容的空行

    @property
    def is_explicit(self) -> bool:
        return self.mode == CaptureMode.EXPLICIT

    def feed(self, line: str, line_num: int) -> CaptureAction:
        """吸收一行原始文本，返回构建器需要执行的动作"""
        # 空行（含仅有空白的行）去掉肩宽后暂存，是否计入内容要等到后续出现内容行或 }
        if not line.strip():
            if self.shoulder is not None:
                self.pending_blank_lines.append(line[self.shoulder:] + "\n")
            return CaptureAction.CONSUMED

        content = line.lstrip()
        width = len(line) - len(content)
        if width == 0 and not content.startswith(CLOSE_MARKER) and self.is_explicit:
            raise ConfusingIndentationError(line_num, line)

        if self.shoulder is None:
            # 空块: 第一行就是闭合的 }
            if self.is_explicit and content.startswith(CLOSE_MARKER):
                return CaptureAction.CLOSED
            # 自由模式只吸收比起始行缩进更深的行
            if not self.is_explicit and width <= self.owner_indent:
                return CaptureAction.ENDED
            self.shoulder = width
            DEBUG_PRINT(DEBUG_T, f"Line {line_num}: raw block shoulder fixed at {width}")

        if width < self.shoulder:
            if not self.is_explicit:
                return CaptureAction.ENDED
            if content.startswith(CLOSE_MARKER):
                self._commit_pending_blanks()
                return CaptureAction.CLOSED
            raise BackIndentedBlockError(line_num, line)

        self._commit_pending_blanks()
        self.body_lines.append(line[self.shoulder:] + "\n")
        return CaptureAction.CONSUMED

    def _commit_pending_blanks(self) -> None:
        self.body_lines.extend(self.pending_blank_lines)
        self.pending_blank_lines = []

    def get_body_text(self) -> str:
        """已吸收的原文内容

        显式块 } 之前的空行已计入；自由块结束时尚未确认的空行不计入。
        """
        return "".join(self.body_lines)

    def flush(self, node_class: Type[TreeNode] = TreeNode, body_tag: str = "body") -> TreeNode:
        """把已吸收的内容包装成body节点追加到起始行节点下"""
        body = node_class(tag=body_tag)
        body.append(create_text_node(self.get_body_text()))
        self.owner.append_pretty(body)
        return body
