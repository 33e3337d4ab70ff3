"""
缩进树解析包

把Python风格的缩进文本解析为层级节点树，支持以 { } 或行解析器请求的方式吸收原文块。
行内容的语义完全交给可插拔的行解析器处理。
"""

from .typedef.tree_data_types import (
    TreeNode, TextNode, NodeType, NO_TRANSFORM, BuildResult, BuildStatus,
    create_node, create_text_node
)
from .typedef.exception_types import (
    IndentTreeError, ConfusingIndentationError, BackIndentedBlockError,
    UnterminatedBlockError, LineParserError
)
from .cfg.builder_config import BuilderConfig, ConfigLoader
from .utils.tree_builder.line_parser import (
    default_line_parser, passthrough_line_parser, KeywordLineParser
)
from .utils.tree_builder.indent_tree_builder import IndentTreeBuilder
from .utils.tree_builder.tree_analyzer import build, analyze_indented_text, IndentParser
from .utils.issue_recorder.tree_issue_recorder import TreeIssueRecorder
from .utils.tree_serializer import TreeSerializer

__version__ = "0.1.0"

__all__ = [
    'TreeNode', 'TextNode', 'NodeType', 'NO_TRANSFORM', 'BuildResult', 'BuildStatus',
    'create_node', 'create_text_node',
    'IndentTreeError', 'ConfusingIndentationError', 'BackIndentedBlockError',
    'UnterminatedBlockError', 'LineParserError',
    'BuilderConfig', 'ConfigLoader',
    'default_line_parser', 'passthrough_line_parser', 'KeywordLineParser',
    'IndentTreeBuilder', 'build', 'analyze_indented_text', 'IndentParser',
    'TreeIssueRecorder', 'TreeSerializer',
]
