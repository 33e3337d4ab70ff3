class IndentTreeError(Exception):
    """缩进树构建基础异常类"""
    def __init__(self, message: str, line_num: int = 0, line_content: str = ""):
        self.message = message
        self.line_num = line_num
        self.line_content = line_content
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """格式化错误信息"""
        if self.line_num > 0:
            if self.line_content:
                return (
                    f"Indent Tree Error at Line {self.line_num}\n"
                    f"Line Content: {self.line_content}\n"
                    f"Error: {self.message}\n"
                )
            else:
                return f"Line {self.line_num}: {self.message}"
        return self.message


class ConfusingIndentationError(IndentTreeError):
    """原文块内出现无法识别的缩进形式"""
    def __init__(self, line_num: int = 0, line_content: str = ""):
        super().__init__("Confusing indentation", line_num, line_content)


class BackIndentedBlockError(IndentTreeError):
    """显式原文块内出现缩进回退但没有闭合的 }"""
    def __init__(self, line_num: int = 0, line_content: str = ""):
        super().__init__("Back-indented without closing bracket", line_num, line_content)


class UnterminatedBlockError(IndentTreeError):
    """显式原文块直到文本结束都没有闭合"""
    def __init__(self, line_num: int = 0, line_content: str = ""):
        super().__init__("Unterminated bracket block at end of input", line_num, line_content)


class LineParserError(IndentTreeError):
    """行解析器返回了无法识别的结果"""
    def _format_message(self) -> str:
        if self.line_num > 0:
            return f"Line Parser Error at Line {self.line_num}: {self.message}"
        return f"Line Parser Error: {self.message}"
