from typing import Any, Callable, Iterable, Optional, Type

from indent_tree.typedef.tree_data_types import (
    TreeNode, LineParseResult, NO_TRANSFORM, RawLineParserResult
)
from indent_tree.typedef.exception_types import LineParserError


# 行解析器：输入已去除缩进、注释和行尾标记的单行文本，返回节点或 (节点, wants_sublines)
LineParser = Callable[[str], RawLineParserResult]


def create_line_node(content: str, node_class: Type[TreeNode] = TreeNode,
                     line_tag: str = "line", text_attr: str = "text") -> TreeNode:
    """生成默认的line节点: <line text="content"/>"""
    node = node_class(tag=line_tag)
    node.set_attr(text_attr, content)
    return node


def default_line_parser(content: str) -> TreeNode:
    """默认行解析器，每一行都转换为line节点"""
    return create_line_node(content)


def passthrough_line_parser(content: str) -> str:
    """原样返回输入，由构建器回退生成默认line节点"""
    return content


def _is_declined(value: Any) -> bool:
    return value is NO_TRANSFORM or value is None or isinstance(value, str)


def normalize_line_result(result: Any, content: str, line_num: int = 0,
                          node_class: Type[TreeNode] = TreeNode,
                          line_tag: str = "line", text_attr: str = "text") -> LineParseResult:
    """将行解析器的返回值统一为 LineParseResult

    行解析器返回 NO_TRANSFORM、None 或任意字符串时视为放弃转换，
    此时生成以原始行内容为text属性的默认line节点。
    """
    wants_sublines = False
    value = result
    if isinstance(result, tuple):
        if len(result) == 0 or len(result) > 2:
            raise LineParserError(f"Expected (node, wants_sublines), got tuple of length {len(result)}", line_num)
        value = result[0]
        if len(result) == 2:
            wants_sublines = bool(result[1])

    if isinstance(value, TreeNode):
        if value.parent is not None:
            raise LineParserError("Line parser returned a node that is already attached to a tree", line_num)
        return LineParseResult(node=value, wants_sublines=wants_sublines)

    if _is_declined(value):
        node = create_line_node(content, node_class, line_tag, text_attr)
        return LineParseResult(node=node, wants_sublines=wants_sublines, declined=True)

    raise LineParserError(f"Unsupported line parser result type: {type(value).__name__}", line_num)


class KeywordLineParser:
    """按行首关键字生成节点的行解析器

    行首第一个词作为标签名，其余内容保存在text属性中；
    sublines_keywords中的关键字会请求吸收后续更深缩进的行作为原文块。
    不是合法标签名的行首词放弃转换，交由构建器生成默认line节点。
    """
    def __init__(self, sublines_keywords: Optional[Iterable[str]] = None, text_attr: str = "text"):
        self.sublines_keywords = frozenset(sublines_keywords or ())
        self.text_attr = text_attr

    def __call__(self, content: str) -> RawLineParserResult:
        return self.parse_line(content)

    def parse_line(self, content: str) -> RawLineParserResult:
        parts = content.split(None, 1)
        if not parts:
            return NO_TRANSFORM

        keyword = parts[0]
        if not self._is_valid_tag(keyword):
            return NO_TRANSFORM

        node = TreeNode(tag=keyword)
        if len(parts) > 1:
            node.set_attr(self.text_attr, parts[1])
        return node, keyword in self.sublines_keywords

    @staticmethod
    def _is_valid_tag(word: str) -> bool:
        return word.replace("-", "_").replace(".", "_").isidentifier()
