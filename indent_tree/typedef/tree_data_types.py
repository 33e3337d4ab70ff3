from enum import Enum
from typing import List, Dict, Any, Optional, Union, Iterator, Tuple
from dataclasses import dataclass, field


# ====== 节点树 数据类型定义 ======
class NodeType(Enum):
    """节点类型枚举"""
    ELEMENT = "ELEMENT"  # 带标签名的元素节点
    TEXT = "TEXT"  # 文本叶子节点


@dataclass(eq=False)
class TextNode:
    """文本叶子节点"""
    text: str = ""
    parent: Optional['TreeNode'] = field(default=None, repr=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT

    def text_content(self) -> str:
        return self.text

    def __repr__(self):
        preview = self.text[:30] + "..." if len(self.text) > 30 else self.text
        return f"TextNode({preview!r})"


@dataclass(eq=False)
class TreeNode:
    """树元素节点

    每个节点只被其父节点持有；根节点的parent为None。属性按写入顺序保存。
    """
    tag: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[Union['TreeNode', TextNode]] = field(default_factory=list)
    parent: Optional['TreeNode'] = field(default=None, repr=False)
    pretty: bool = False  # 是否以缩进格式输出子节点

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT

    def __repr__(self):
        return f"TreeNode(tag={self.tag}, attributes={self.attributes})"

    def set_attr(self, key: str, value: Any) -> None:
        """设置属性，值统一转换为字符串"""
        self.attributes[key] = str(value)

    def get_attr(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def append(self, child: Union['TreeNode', TextNode]) -> None:
        """在末尾添加子节点"""
        if child is self:
            raise ValueError("节点不能被添加为自身的子节点")
        if child.parent is not None and child.parent is not self:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)

    def append_pretty(self, child: Union['TreeNode', TextNode]) -> None:
        """添加子节点，并标记输出时按缩进格式排版"""
        self.append(child)
        self.pretty = True

    def remove(self, child: Union['TreeNode', TextNode]) -> None:
        """移除子节点"""
        for i, existing in enumerate(self.children):
            if existing is child:
                del self.children[i]
                child.parent = None
                return

    def element_children(self) -> List['TreeNode']:
        """仅返回元素子节点"""
        return [child for child in self.children if isinstance(child, TreeNode)]

    def first_child(self, tag: Optional[str] = None) -> Optional['TreeNode']:
        for child in self.element_children():
            if tag is None or child.tag == tag:
                return child
        return None

    def iter_nodes(self) -> Iterator['TreeNode']:
        """深度优先遍历所有元素节点（包括自身）"""
        yield self
        for child in self.element_children():
            yield from child.iter_nodes()

    def find_all(self, tag: str) -> List['TreeNode']:
        """按文档顺序查找所有指定标签的后代节点（不包括自身）"""
        return [node for node in self.iter_nodes() if node is not self and node.tag == tag]

    def text_content(self) -> str:
        """拼接所有后代文本节点的内容"""
        return "".join(child.text_content() for child in self.children)

    def depth(self) -> int:
        """祖先元素的数量，根节点为0"""
        count = 0
        node = self.parent
        while node is not None:
            count += 1
            node = node.parent
        return count


def create_node(tag: str) -> TreeNode:
    """创建元素节点"""
    return TreeNode(tag=tag)


def create_text_node(text: str) -> TextNode:
    """创建文本节点"""
    return TextNode(text=text)


# ====== 行解析器 数据类型定义 ======
class _NoTransform:
    """行解析器放弃转换时返回的哨兵"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "NO_TRANSFORM"

    def __bool__(self):
        return False


NO_TRANSFORM = _NoTransform()


@dataclass
class LineParseResult:
    """行解析器结果的规范形式"""
    node: TreeNode
    wants_sublines: bool = False
    declined: bool = False  # 行解析器是否放弃了转换（node为默认生成的line节点）


@dataclass
class SourceLine:
    """预处理后的单行信息"""
    line_num: int  # 行号，从1开始
    raw: str  # 原始行内容
    content: str = ""  # 去掉注释、缩进、标记后的内容
    indent: int = 0  # 缩进宽度
    has_colon: bool = False  # 行尾冒号，目前仅记录，不影响树结构
    opens_block: bool = False  # 行尾 { 开启显式原文块


# ====== 构建器 数据类型定义 ======
@dataclass
class LevelFrame:
    """缩进层级帧

    node: 该层级最近一次放置的节点，更深的行将成为它的子节点
    parent: node的父节点，同级行将添加到这里
    indent: 产生该帧的缩进宽度，根帧为 -1
    """
    node: TreeNode
    parent: TreeNode
    indent: int

    def __repr__(self):
        return f"LevelFrame(tag={self.node.tag}, indent={self.indent})"


class BuildStatus(Enum):
    """构建结果状态"""
    COMPLETE = "COMPLETE"  # 完整解析
    PARTIAL = "PARTIAL"  # 遇到错误提前终止，或存在未闭合的原文块


@dataclass
class BuildResult:
    """构建结果：根节点 + 状态 + 问题列表"""
    root: TreeNode
    status: BuildStatus = BuildStatus.COMPLETE
    issues: List[Any] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.status == BuildStatus.COMPLETE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "issues": [issue.to_dict() for issue in self.issues],
        }


# 行解析器可接受的返回值形式
RawLineParserResult = Union[TreeNode, Tuple[Any, bool], str, None, _NoTransform]
