import sys
import argparse

from indent_tree.typedef.cmd_data_types import Colors, OutputFormat, ExitCode
from indent_tree.cfg.builder_config import BuilderConfig, ConfigLoader
from indent_tree.lib.debug_print import set_print_level
from indent_tree.utils.issue_recorder.tree_issue_recorder import TreeIssueRecorder
from indent_tree.utils.tree_builder.line_parser import KeywordLineParser, default_line_parser
from indent_tree.utils.tree_builder.tree_analyzer import analyze_indented_text
from indent_tree.utils.tree_serializer import TreeSerializer
from indent_tree.typedef.exception_types import IndentTreeError


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='indent-tree',
        description='将缩进文本解析为层级节点树'
    )
    parser.add_argument('input', help='输入文件路径，- 表示从标准输入读取')
    parser.add_argument('--format', choices=OutputFormat.ALL, default=OutputFormat.XML, help='输出格式')
    parser.add_argument('--config', type=str, help='JSON格式的构建器配置文件')
    parser.add_argument('--strict', action='store_true', help='遇到构建错误时直接报错退出')
    parser.add_argument('--keyword-tags', action='store_true', help='以行首关键字作为节点标签名')
    parser.add_argument('--sublines', action='append', default=[], metavar='KEYWORD',
                        help='以该关键字开头的行吸收后续缩进行作为原文块，可多次指定（隐含 --keyword-tags）')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='提高输出级别')
    return parser


def _read_input(input_path: str) -> str:
    if input_path == '-':
        return sys.stdin.read()
    with open(input_path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv=None) -> int:
    args = _build_arg_parser().parse_args(argv)

    config = ConfigLoader.load_builder_config(args.config) if args.config else BuilderConfig()
    if args.strict:
        config = config.model_copy(update={'strict': True})
    set_print_level(min(config.print_level + args.verbose, 3))

    try:
        text = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"{Colors.FAIL}错误: 无法读取输入 {args.input}: {e}{Colors.ENDC}", file=sys.stderr)
        return ExitCode.INPUT_ERROR

    if args.keyword_tags or args.sublines:
        line_parser = KeywordLineParser(args.sublines, text_attr=config.text_attr)
    else:
        line_parser = default_line_parser

    issue_recorder = TreeIssueRecorder()
    try:
        result = analyze_indented_text(text, line_parser, issue_recorder=issue_recorder, config=config)
    except IndentTreeError as e:
        print(f"{Colors.FAIL}{e}{Colors.ENDC}", file=sys.stderr)
        return ExitCode.PARTIAL

    if args.format == OutputFormat.JSON:
        print(TreeSerializer.to_json(result.root))
    elif args.format == OutputFormat.TREE:
        print(TreeSerializer.format_tree(result.root))
    else:
        print(TreeSerializer.to_xml(result.root, pretty=True))

    if not result.is_complete:
        return ExitCode.PARTIAL
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
