import sys

# 全局打印级别，高于该级别的信息不输出；默认只输出错误和警告
PRINT_LEVEL = 1

# 定义打印级别和对应的颜色
LEVELS = {
    0: {"name": "ERROR", "color": "\033[91m"},  # 红色
    1: {"name": "WARNING", "color": "\033[93m"},  # 黄色
    2: {"name": "INFO", "color": "\033[94m"},  # 蓝色
    3: {"name": "DEBUG", "color": "\033[92m"}  # 绿色
}

ERROR_T = 0
WARNING_T = 1
INFO_T = 2
DEBUG_T = 3


def set_print_level(level: int) -> None:
    """修改全局打印级别"""
    global PRINT_LEVEL
    if level not in LEVELS:
        raise ValueError(f"Invalid print level: {level}. Must be one of {sorted(LEVELS)}")
    PRINT_LEVEL = level


def get_print_level() -> int:
    return PRINT_LEVEL


# 自定义条件打印函数，错误和警告输出到stderr，避免污染命令行的正常输出
def DEBUG_PRINT(level, *args, **kwargs):
    # ANSI 转义序列，用于重置颜色
    RESET_COLOR = "\033[0m"
    if level <= PRINT_LEVEL:
        level_info = LEVELS.get(level, {"name": "UNKNOWN", "color": "\033[0m"})
        prefix = f"{level_info['color']}[{level_info['name']}] {RESET_COLOR}"
        if level <= WARNING_T:
            kwargs.setdefault("file", sys.stderr)
        print(prefix, *args, **kwargs)
