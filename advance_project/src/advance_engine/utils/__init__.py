"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import (
    setup_logger, setup_from_config, reset_logger, get_logger,
    LoggerMixin, PerformanceLogger, performance_logger
)
from .exceptions import (
    AdvanceError, UsageError, BoardIOError, InvalidSideError,
    MalformedBoardError, InvalidMoveError, ConfigurationError
)

__all__ = [
    'setup_logger', 'setup_from_config', 'reset_logger', 'get_logger',
    'LoggerMixin', 'PerformanceLogger', 'performance_logger',
    'AdvanceError', 'UsageError', 'BoardIOError', 'InvalidSideError',
    'MalformedBoardError', 'InvalidMoveError', 'ConfigurationError'
]
