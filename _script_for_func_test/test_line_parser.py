"""
测试行解析器结果规范化与内置行解析器
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from indent_tree.typedef.tree_data_types import TreeNode, NO_TRANSFORM, create_node
from indent_tree.typedef.exception_types import LineParserError
from indent_tree.utils.tree_builder.line_parser import (
    normalize_line_result, default_line_parser, passthrough_line_parser,
    KeywordLineParser, create_line_node
)

from func_test_utils import run_tests


def test_normalize_node():
    """测试直接返回节点"""
    node = create_node("cmd")
    result = normalize_line_result(node, "cmd x")
    assert result.node is node
    assert not result.wants_sublines
    assert not result.declined


def test_normalize_tuple():
    """测试返回 (节点, wants_sublines)，以及只有一个元素的元组"""
    node = create_node("cmd")
    result = normalize_line_result((node, 1), "cmd x")
    assert result.node is node
    assert result.wants_sublines is True

    result = normalize_line_result((node,), "cmd x")
    assert result.node is node
    assert result.wants_sublines is False


def test_normalize_declined():
    """测试放弃转换的各种形式生成默认line节点，wants_sublines仍然生效"""
    for declined in (NO_TRANSFORM, None, "cmd x", "other text"):
        result = normalize_line_result(declined, "cmd x")
        assert result.declined
        assert result.node.tag == "line"
        assert result.node.attributes == {"text": "cmd x"}

    result = normalize_line_result(("cmd x", True), "cmd x")
    assert result.declined
    assert result.wants_sublines


def test_normalize_custom_tags():
    """测试默认节点使用指定的节点类和标签名"""
    class Row(TreeNode):
        pass

    result = normalize_line_result(NO_TRANSFORM, "abc", node_class=Row, line_tag="row", text_attr="value")
    assert isinstance(result.node, Row)
    assert result.node.tag == "row"
    assert result.node.get_attr("value") == "abc"


def test_normalize_rejects_unknown():
    """测试无法识别的返回值"""
    for bad in (3.5, ["list"], (), (create_node("a"), False, None), ({"tag": "a"}, True)):
        try:
            normalize_line_result(bad, "x", line_num=7)
        except LineParserError as e:
            assert e.line_num == 7
            assert "Line 7" in str(e)
            continue
        raise AssertionError(f"预期 {bad!r} 抛出 LineParserError")


def test_no_transform_sentinel():
    """测试哨兵为单例且为假值"""
    assert not NO_TRANSFORM
    assert repr(NO_TRANSFORM) == "NO_TRANSFORM"
    assert type(NO_TRANSFORM)() is NO_TRANSFORM


def test_builtin_parsers():
    """测试默认行解析器与透传行解析器"""
    node = default_line_parser("hello world")
    assert node.tag == "line"
    assert node.get_attr("text") == "hello world"
    assert passthrough_line_parser("hello world") == "hello world"
    assert create_line_node("x", line_tag="item").tag == "item"


def test_keyword_line_parser():
    """测试关键字行解析器"""
    parser = KeywordLineParser(["code", "script"])

    node, wants = parser("code run the tests")
    assert node.tag == "code"
    assert node.get_attr("text") == "run the tests"
    assert wants is True

    node, wants = parser("task")
    assert node.tag == "task"
    assert node.attributes == {}
    assert wants is False

    # 不能作为标签名的行首词放弃转换
    assert parser("1st place") is NO_TRANSFORM
    assert parser("") is NO_TRANSFORM

    node, _ = parser.parse_line("some-tag.name value")
    assert node.tag == "some-tag.name"


def main():
    tests = [
        ("节点", test_normalize_node),
        ("元组", test_normalize_tuple),
        ("放弃转换", test_normalize_declined),
        ("自定义标签", test_normalize_custom_tags),
        ("无法识别", test_normalize_rejects_unknown),
        ("哨兵", test_no_transform_sentinel),
        ("内置解析器", test_builtin_parsers),
        ("关键字解析器", test_keyword_line_parser),
    ]
    return run_tests(tests)


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
