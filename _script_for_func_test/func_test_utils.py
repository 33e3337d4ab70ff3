"""功能测试脚本的公共工具：树结构打印与测试汇总"""
import traceback

from indent_tree.typedef.tree_data_types import TreeNode
from indent_tree.utils.tree_serializer import TreeSerializer


def print_tree(root: TreeNode) -> None:
    """打印树结构"""
    print(TreeSerializer.format_tree(root))


def run_tests(tests) -> bool:
    """依次运行测试函数并打印汇总，全部通过时返回True"""
    failed = 0
    for test_name, test_func in tests:
        try:
            test_func()
            print(f"{test_name:20} ✓ 通过")
        except AssertionError as e:
            failed += 1
            print(f"{test_name:20} ❌ 失败: {e}")
            traceback.print_exc()

    print("=" * 50)
    print(f"总计: {len(tests) - failed} 通过, {failed} 失败")
    return failed == 0
