from typing import List, Optional, Type

from indent_tree.typedef.tree_data_types import TreeNode, LevelFrame, SourceLine
from indent_tree.typedef.exception_types import UnterminatedBlockError
from indent_tree.cfg.builder_config import BuilderConfig
from indent_tree.lib.debug_print import DEBUG_PRINT, DEBUG_T
from indent_tree.utils.tree_builder.line_parser import LineParser, create_line_node, normalize_line_result
from indent_tree.utils.tree_builder.raw_block_capture import (
    RawBlockCapture, CaptureMode, CaptureAction
)


OPEN_MARKER = "{"
COLON_MARKER = ":"


class IndentTreeBuilder:
    """缩进树构建器

    对文本逐行做一次线性扫描：
    - 普通行：去注释、去行尾空白、记录行尾冒号与 {，交给行解析器生成节点，再按缩进放置
    - 原文块：由 { 或行解析器的 wants_sublines 开启，期间的行原样吸收，不做结构解析

    放置规则以游标(上一次放置的行)的缩进宽度为基准：
    更深 -> 游标入栈，成为游标节点的子节点；相同 -> 成为同级；
    更浅 -> 不断出栈直到栈帧缩进不大于当前行，成为该栈帧节点的同级。

    一个构建器实例只用于一次构建。
    """
    def __init__(
        self,
        line_parser: Optional[LineParser] = None,
        root: Optional[TreeNode] = None,
        config: Optional[BuilderConfig] = None,
        node_class: Type[TreeNode] = TreeNode
    ):
        self.config = config or BuilderConfig()
        self.line_parser = line_parser or self._default_line_parser
        self.node_class = node_class
        self.root = root if root is not None else node_class(tag=self.config.root_tag)

        # 根帧的缩进为 -1，低于任何真实行，保证出栈总能终止
        self.cursor = LevelFrame(node=self.root, parent=self.root, indent=-1)
        self.level_stack: List[LevelFrame] = []
        self.capture: Optional[RawBlockCapture] = None
        self.line_num = 0
        self.built = False

    def build(self, text: str) -> TreeNode:
        """构建并返回根节点

        Raises:
            ConfusingIndentationError / BackIndentedBlockError: 原文块缩进错误，已构建的部分保留在self.root中
            UnterminatedBlockError: 显式原文块到文本结束仍未闭合，树已完整构建但该块没有body
        """
        if self.built:
            raise RuntimeError("IndentTreeBuilder instance can only be used once")
        self.built = True

        for line in text.split('\n'):
            self.line_num += 1
            self._process_line(line)

        self._finish()
        return self.root

    def _default_line_parser(self, content: str) -> TreeNode:
        """未提供行解析器时使用：按配置的标签名和节点类生成line节点"""
        return create_line_node(content, self.node_class, self.config.line_tag, self.config.text_attr)

    def _process_line(self, line: str) -> None:
        if self.capture is not None:
            action = self.capture.feed(line, self.line_num)
            if action == CaptureAction.CONSUMED:
                return
            self._flush_capture()
            if action == CaptureAction.CLOSED:
                return
            # 自由模式结束，该行按普通行继续处理

        source_line = self._preprocess(line)
        if source_line is None:
            return
        self._place_line(source_line)

    def _preprocess(self, line: str) -> Optional[SourceLine]:
        """去掉注释、行尾空白、行尾冒号和 {，计算缩进；空行返回None"""
        content = line
        comment_pos = content.find(self.config.comment_prefix)
        if comment_pos >= 0:
            content = content[:comment_pos]
        content = content.rstrip()
        if not content:
            return None

        source_line = SourceLine(line_num=self.line_num, raw=line)

        # 冒号目前只做记录，不影响树结构
        if content.endswith(COLON_MARKER):
            source_line.has_colon = True
            content = content[:-1].rstrip()

        stripped = content.lstrip()
        source_line.indent = len(content) - len(stripped)
        content = stripped

        if content.endswith(OPEN_MARKER):
            source_line.opens_block = True
            content = content[:-1].rstrip()

        source_line.content = content
        return source_line

    def _place_line(self, source_line: SourceLine) -> None:
        raw_result = self.line_parser(source_line.content)
        result = normalize_line_result(
            raw_result,
            source_line.content,
            line_num=source_line.line_num,
            node_class=self.node_class,
            line_tag=self.config.line_tag,
            text_attr=self.config.text_attr
        )
        new_node = result.node

        if source_line.indent > self.cursor.indent:
            # 缩进增加：当前游标入栈，新节点成为游标节点的子节点
            self.level_stack.append(self.cursor)
            parent = self.cursor.node
        else:
            if source_line.indent < self.cursor.indent:
                # 缩进减少：出栈直到栈帧缩进不大于当前行
                while self.level_stack:
                    self.cursor = self.level_stack.pop()
                    if self.cursor.indent <= source_line.indent:
                        break
            parent = self.cursor.parent

        parent.append_pretty(new_node)
        self.cursor = LevelFrame(node=new_node, parent=parent, indent=source_line.indent)

        # 行尾 { 优先于 wants_sublines，以保证闭合的 } 能被识别
        if source_line.opens_block:
            self._start_capture(new_node, CaptureMode.EXPLICIT, source_line)
        elif result.wants_sublines:
            self._start_capture(new_node, CaptureMode.FREE, source_line)

    def _start_capture(self, owner: TreeNode, mode: CaptureMode, source_line: SourceLine) -> None:
        DEBUG_PRINT(DEBUG_T, f"Line {source_line.line_num}: start {mode.value} raw block under <{owner.tag}>")
        self.capture = RawBlockCapture(
            owner=owner,
            mode=mode,
            owner_indent=source_line.indent,
            start_line_num=source_line.line_num,
            start_line_content=source_line.raw
        )

    def _flush_capture(self) -> None:
        capture = self.capture
        self.capture = None
        capture.flush(self.node_class, self.config.body_tag)
        DEBUG_PRINT(DEBUG_T, f"Line {self.line_num}: raw block of <{capture.owner.tag}> closed")

    def _finish(self) -> None:
        if self.capture is None:
            return
        if self.capture.is_explicit:
            # 显式原文块没有闭合：不输出body
            capture = self.capture
            self.capture = None
            raise UnterminatedBlockError(capture.start_line_num, capture.start_line_content)
        # 自由模式遇到文本结束，等同于遇到一个未缩进的行
        self._flush_capture()
