from typing import Optional, Type

from indent_tree.typedef.tree_data_types import TreeNode, BuildResult, BuildStatus
from indent_tree.typedef.exception_types import IndentTreeError, UnterminatedBlockError, LineParserError
from indent_tree.cfg.builder_config import BuilderConfig
from indent_tree.lib.debug_print import DEBUG_PRINT, WARNING_T, INFO_T
from indent_tree.utils.issue_recorder.tree_issue_recorder import TreeIssueRecorder
from indent_tree.utils.tree_builder.line_parser import LineParser
from indent_tree.utils.tree_builder.indent_tree_builder import IndentTreeBuilder


def analyze_indented_text(
    text: str,
    line_parser: Optional[LineParser] = None,
    root: Optional[TreeNode] = None,
    issue_recorder: Optional[TreeIssueRecorder] = None,
    config: Optional[BuilderConfig] = None,
    node_class: Type[TreeNode] = TreeNode
) -> BuildResult:
    """分析缩进文本，返回根节点及构建状态

    Args:
        text: 待分析的缩进文本
        line_parser: 行解析器，为None时使用默认行解析器
        root: 可选的已有根节点，新节点会追加到其下
        issue_recorder: 可选的问题记录器，用于记录构建过程中的错误信息
        config: 构建器配置
        node_class: 合成节点(root/line/body)使用的节点类

    Returns:
        BuildResult: 根节点、COMPLETE/PARTIAL状态以及本次构建记录的问题

    Raises:
        IndentTreeError: 仅在config.strict为True时抛出
        LineParserError: 行解析器返回了无法识别的结果
        其他异常: 非预期错误(包括行解析器自身的异常)直接向上层抛出
    """
    config = config or BuilderConfig()
    recorder = issue_recorder if issue_recorder is not None else TreeIssueRecorder()
    issue_start = recorder.get_issue_count()

    builder = IndentTreeBuilder(line_parser, root=root, config=config, node_class=node_class)
    status = BuildStatus.COMPLETE
    try:
        builder.build(text)
    except LineParserError:
        # 行解析器的使用错误不属于文档错误
        raise
    except IndentTreeError as e:
        if config.strict:
            raise

        # 根据行号，从原始文本中提取行内容
        line_content = e.line_content
        if not line_content and e.line_num > 0:
            lines = text.split('\n')
            if 0 < e.line_num <= len(lines):
                line_content = lines[e.line_num - 1].rstrip()

        unterminated = isinstance(e, UnterminatedBlockError)
        severity = "warning" if unterminated else "error"
        recorder.record_issue(
            message=e.message,
            line_num=e.line_num,
            line_content=line_content,
            severity=severity
        )
        # 未闭合的显式块只是没有输出body，默认不打印
        DEBUG_PRINT(INFO_T if unterminated else WARNING_T, f"Line {e.line_num}: {e.message}, returning partial tree")
        status = BuildStatus.PARTIAL

    issues = recorder.get_issues()[issue_start:]
    return BuildResult(root=builder.root, status=status, issues=issues)


def build(
    text: str,
    line_parser: Optional[LineParser] = None,
    root: Optional[TreeNode] = None,
    config: Optional[BuilderConfig] = None
) -> TreeNode:
    """构建缩进树并返回根节点；遇到原文块错误时返回已构建的部分"""
    return analyze_indented_text(text, line_parser, root=root, config=config).root


class IndentParser:
    """预先绑定行解析器的缩进文本解析器

    parse时未提供行解析器则使用构造时绑定的行解析器，都没有时使用默认行解析器。
    node_class 用于生成 root / line / body 等合成节点。
    """
    def __init__(
        self,
        line_parser: Optional[LineParser] = None,
        node_class: Type[TreeNode] = TreeNode,
        config: Optional[BuilderConfig] = None
    ):
        if not (isinstance(node_class, type) and issubclass(node_class, TreeNode)):
            raise TypeError(f"node_class must be a TreeNode subclass, got {node_class!r}")
        self.line_parser = line_parser
        self.node_class = node_class
        self.config = config or BuilderConfig()

    def parse(self, text: str, line_parser: Optional[LineParser] = None, root: Optional[TreeNode] = None) -> TreeNode:
        return self.parse_with_status(text, line_parser, root).root

    def parse_with_status(
        self,
        text: str,
        line_parser: Optional[LineParser] = None,
        root: Optional[TreeNode] = None,
        issue_recorder: Optional[TreeIssueRecorder] = None
    ) -> BuildResult:
        return analyze_indented_text(
            text,
            line_parser or self.line_parser,
            root=root,
            issue_recorder=issue_recorder,
            config=self.config,
            node_class=self.node_class
        )
