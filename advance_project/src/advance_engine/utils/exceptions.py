"""
异常定义

定义Advance引擎的各种异常类型。
"""


class AdvanceError(Exception):
    """
    Advance引擎基础异常

    所有Advance相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class UsageError(AdvanceError):
    """
    命令行用法异常

    参数数量或取值不正确时抛出，此时不进行任何文件读写。
    """

    def __init__(self, reason: str):
        super().__init__(reason, "USAGE_ERROR")
        self.reason = reason


class BoardIOError(AdvanceError):
    """
    棋盘文件读写异常

    当棋盘文件无法读取或写入时抛出。
    """

    def __init__(self, path: str, operation: str, reason: str = ""):
        message = f"棋盘文件{operation}失败: {path}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "BOARD_IO_ERROR")
        self.path = path
        self.operation = operation
        self.reason = reason


class InvalidSideError(AdvanceError):
    """
    非法阵营异常

    阵营字符串不是 'white' 或 'black' 时抛出，属于程序错误。
    """

    def __init__(self, side: str):
        super().__init__(f"非法阵营: {side!r}，必须为 'white' 或 'black'", "INVALID_SIDE")
        self.side = side


class MalformedBoardError(AdvanceError):
    """
    棋盘格式异常

    棋盘为空、各行长度不一致或含有未知符号时抛出。
    """

    def __init__(self, reason: str, line_number: int = None):
        message = f"棋盘格式错误: {reason}"
        if line_number is not None:
            message += f" (第{line_number}行)"
        super().__init__(message, "MALFORMED_BOARD")
        self.reason = reason
        self.line_number = line_number


class InvalidMoveError(AdvanceError):
    """
    非法走法异常

    当尝试执行无法在棋盘上应用的走法时抛出。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class ConfigurationError(AdvanceError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason
