"""
测试节点树的序列化：字典、JSON、XML与文本大纲
"""

import sys
import os
import json
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from indent_tree.typedef.tree_data_types import TreeNode, TextNode, create_node, create_text_node
from indent_tree.utils.tree_builder.tree_analyzer import build
from indent_tree.utils.tree_serializer import TreeSerializer

from func_test_utils import run_tests


SAMPLE_CODE = """\
project
  code build {
    make all
  }
  note done
"""


def test_to_dict():
    """测试序列化为字典"""
    root = build(SAMPLE_CODE)
    data = TreeSerializer.to_dict(root)

    assert data["tag"] == "root"
    project = data["children"][0]
    assert project["attributes"] == {"text": "project"}
    code, note = project["children"]
    assert code["children"] == [{"tag": "body", "attributes": {}, "children": [{"text": "make all\n"}]}]
    assert note == {"tag": "line", "attributes": {"text": "note done"}, "children": []}


def test_dict_round_trip_preserves_structure():
    """测试字典反序列化后结构与父节点关系"""
    root = build(SAMPLE_CODE)
    restored = TreeSerializer.from_json(TreeSerializer.to_json(root))

    assert isinstance(restored, TreeNode)
    assert TreeSerializer.to_dict(restored) == TreeSerializer.to_dict(root)
    body = restored.find_all("body")[0]
    assert body.parent.get_attr("text") == "code build"
    assert isinstance(body.children[0], TextNode)


def test_from_dict_rejects_unknown():
    try:
        TreeSerializer.from_dict({"name": "x"})
    except ValueError:
        return
    raise AssertionError("预期抛出 ValueError")


def test_to_json_unicode():
    """测试JSON输出保留非ASCII字符"""
    root = build("任务 一")
    text = TreeSerializer.to_json(root)
    assert "任务 一" in text
    assert json.loads(text)["children"][0]["attributes"]["text"] == "任务 一"


def test_to_xml_pretty():
    """测试XML输出，append_pretty构建的树默认缩进排版"""
    root = build(SAMPLE_CODE)
    xml_text = TreeSerializer.to_xml(root)
    print(xml_text)

    expected = (
        '<root>\n'
        '  <line text="project">\n'
        '    <line text="code build">\n'
        '      <body>make all\n</body>\n'
        '    </line>\n'
        '    <line text="note done" />\n'
        '  </line>\n'
        '</root>'
    )
    assert xml_text == expected


def test_to_xml_compact_and_escaping():
    """测试紧凑输出与特殊字符转义，文本节点映射为text/tail"""
    node = create_node("a")
    node.set_attr("q", 'x "y" <z>')
    node.append(create_text_node("head"))
    node.append(create_node("b"))
    node.append(create_text_node(" & tail"))

    assert not node.pretty
    assert TreeSerializer.to_xml(node) == '<a q="x &quot;y&quot; &lt;z&gt;">head<b /> &amp; tail</a>'


def test_format_tree():
    """测试文本大纲输出"""
    root = build(SAMPLE_CODE)
    outline = TreeSerializer.format_tree(root)
    print(outline)
    assert outline.splitlines() == [
        'root',
        '  line text="project"',
        '    line text="code build"',
        '      body',
        "        'make all\\n'",
        '    line text="note done"',
    ]


def test_node_helpers():
    """测试节点查询与修改接口"""
    root = build("a\n  b\n  c\nd")
    node_a = root.first_child()
    assert node_a.get_attr("text") == "a"
    assert node_a.get_attr("missing", "default") == "default"
    assert [node.get_attr("text") for node in root.iter_nodes() if node is not root] == ["a", "b", "c", "d"]

    node_c = node_a.element_children()[1]
    root.append(node_c)
    assert node_c.parent is root
    assert [n.get_attr("text") for n in node_a.element_children()] == ["b"]
    assert [n.get_attr("text") for n in root.element_children()] == ["a", "d", "c"]

    node_a.set_attr("count", 3)
    assert node_a.get_attr("count") == "3"

    try:
        node_a.append(node_a)
    except ValueError:
        return
    raise AssertionError("预期节点不能添加为自身子节点")


def main():
    tests = [
        ("字典", test_to_dict),
        ("JSON往返", test_dict_round_trip_preserves_structure),
        ("未知格式", test_from_dict_rejects_unknown),
        ("JSON中文", test_to_json_unicode),
        ("XML缩进", test_to_xml_pretty),
        ("XML转义", test_to_xml_compact_and_escaping),
        ("文本大纲", test_format_tree),
        ("节点接口", test_node_helpers),
    ]
    return run_tests(tests)


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
