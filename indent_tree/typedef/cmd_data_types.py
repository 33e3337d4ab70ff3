class Colors:
    """颜色类"""
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


class OutputFormat:
    """命令行输出格式"""
    XML = "xml"
    JSON = "json"
    TREE = "tree"

    ALL = (XML, JSON, TREE)


class ExitCode:
    """命令行退出码"""
    SUCCESS = 0
    PARTIAL = 1
    INPUT_ERROR = 2
