"""节点树序列化管理器

统一管理节点树的序列化和反序列化操作。

设计说明：
- 字典形式: 元素节点 {"tag", "attributes", "children"}，文本节点 {"text"}
- XML形式: 基于 xml.etree.ElementTree 输出，append_pretty 过的节点按缩进排版
- 文本大纲: 便于在命令行和测试脚本中直接查看树结构
"""
import json
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Type, Union

from indent_tree.typedef.tree_data_types import TreeNode, TextNode


class TreeSerializer:
    """节点树序列化管理器

    提供节点树的序列化和反序列化功能。
    """

    @staticmethod
    def to_dict(node: Union[TreeNode, TextNode]) -> Dict[str, Any]:
        """序列化节点及其所有子节点

        Example:
            >>> node = TreeNode(tag="line", attributes={"text": "hello"})
            >>> TreeSerializer.to_dict(node)
            {'tag': 'line', 'attributes': {'text': 'hello'}, 'children': []}
        """
        if isinstance(node, TextNode):
            return {"text": node.text}
        return {
            "tag": node.tag,
            "attributes": dict(node.attributes),
            "children": [TreeSerializer.to_dict(child) for child in node.children]
        }

    @staticmethod
    def from_dict(node_dict: Dict[str, Any], node_class: Type[TreeNode] = TreeNode) -> Union[TreeNode, TextNode]:
        """反序列化节点

        Raises:
            ValueError: 字典既不是元素节点也不是文本节点
        """
        if "tag" in node_dict:
            node = node_class(tag=node_dict["tag"])
            for key, value in node_dict.get("attributes", {}).items():
                node.set_attr(key, value)
            for child_dict in node_dict.get("children", []):
                node.append(TreeSerializer.from_dict(child_dict, node_class))
            return node
        if "text" in node_dict:
            return TextNode(text=node_dict["text"])
        raise ValueError(f"未知的节点格式: {sorted(node_dict)}")

    @staticmethod
    def to_json(node: TreeNode, indent: Optional[int] = 2) -> str:
        return json.dumps(TreeSerializer.to_dict(node), ensure_ascii=False, indent=indent)

    @staticmethod
    def from_json(json_str: str, node_class: Type[TreeNode] = TreeNode) -> Union[TreeNode, TextNode]:
        return TreeSerializer.from_dict(json.loads(json_str), node_class)

    @staticmethod
    def to_element(node: TreeNode) -> ET.Element:
        """转换为 ElementTree 元素，文本节点映射为 text / tail"""
        element = ET.Element(node.tag, dict(node.attributes))
        last_child: Optional[ET.Element] = None
        for child in node.children:
            if isinstance(child, TextNode):
                if last_child is None:
                    element.text = (element.text or "") + child.text
                else:
                    last_child.tail = (last_child.tail or "") + child.text
            else:
                last_child = TreeSerializer.to_element(child)
                element.append(last_child)
        return element

    @staticmethod
    def to_xml(node: TreeNode, pretty: Optional[bool] = None) -> str:
        """输出XML字符串；pretty为None时按节点是否经过append_pretty决定"""
        if pretty is None:
            pretty = any(n.pretty for n in node.iter_nodes())
        element = TreeSerializer.to_element(node)
        if pretty:
            ET.indent(element)
        return ET.tostring(element, encoding="unicode")

    @staticmethod
    def format_tree(node: TreeNode, indent_unit: str = "  ") -> str:
        """输出文本大纲，每个元素节点一行，文本节点以repr形式展示"""
        lines: List[str] = []
        TreeSerializer._format_node(node, 0, indent_unit, lines)
        return "\n".join(lines)

    @staticmethod
    def _format_node(node: Union[TreeNode, TextNode], level: int, indent_unit: str, lines: List[str]) -> None:
        prefix = indent_unit * level
        if isinstance(node, TextNode):
            lines.append(f"{prefix}{node.text!r}")
            return
        attrs = "".join(f' {key}="{value}"' for key, value in node.attributes.items())
        lines.append(f"{prefix}{node.tag}{attrs}")
        for child in node.children:
            TreeSerializer._format_node(child, level + 1, indent_unit, lines)
