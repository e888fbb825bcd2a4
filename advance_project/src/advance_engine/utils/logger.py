"""
日志系统

所有日志记录器都挂在 'advance' 命名空间下，由命令行入口按配置统一设置。
日志只写标准错误和可选的轮转文件，标准输出留给 'name' 命令。
"""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Dict, Optional

ROOT_LOGGER_NAME = 'advance'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'WARNING',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/advance_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    重复调用时先关闭并移除已有的处理器，再按新参数重建。

    Args:
        name: 日志记录器名称
        level: 日志级别名称，无法识别时使用WARNING
        log_file: 日志文件名，None表示不写文件
        log_dir: 日志目录
        max_size: 单个日志文件最大大小(MB)
        backup_count: 轮转备份数量
        console_output: 是否输出到标准错误

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = reset_logger(name)

    log_level = getattr(logging, str(level).upper(), logging.WARNING)
    logger.setLevel(log_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def setup_from_config(engine_config, debug: bool = False) -> logging.Logger:
    """
    按引擎配置设置 'advance' 日志记录器

    Args:
        engine_config: EngineConfig
        debug: 为True时强制使用DEBUG级别
    """
    return setup_logger(
        name=ROOT_LOGGER_NAME,
        level='DEBUG' if debug else engine_config.log_level,
        log_file=engine_config.log_file,
        log_dir=engine_config.log_dir,
        max_size=engine_config.log_max_size,
        backup_count=engine_config.log_backup_count,
        console_output=engine_config.console_log
    )


def reset_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """关闭并移除日志记录器上的所有处理器"""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)


class LoggerMixin:
    """为类提供 'advance.<类名>' 日志记录器"""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{self.__class__.__name__}')

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)


class PerformanceLogger:
    """
    回合耗时记录器

    按操作名计时，每回合的结果由 log_turn 在INFO级别记录。
    """

    def __init__(self, name: str = 'performance'):
        self.logger = get_logger(f'{ROOT_LOGGER_NAME}.{name}')
        self.start_times: Dict[str, float] = {}

    def start_timer(self, operation: str):
        """记录操作的开始时间"""
        self.start_times[operation] = time.perf_counter()
        self.logger.debug(f"{operation} 计时开始")

    def end_timer(self, operation: str) -> float:
        """
        结束计时

        Returns:
            float: 耗时（秒）；没有对应的开始记录时返回0.0
        """
        started = self.start_times.pop(operation, None)
        if started is None:
            self.logger.warning(f"{operation} 没有对应的开始记录")
            return 0.0

        elapsed = time.perf_counter() - started
        self.logger.debug(f"{operation} 用时 {elapsed:.3f}秒")
        return elapsed

    def log_turn(self, side: str, action: str, elapsed: float):
        """记录一回合的决策结果和耗时"""
        self.logger.info(f"回合统计 - 阵营: {side}, 行动: {action}, 耗时: {elapsed:.3f}秒")


# 回合共用的计时器
performance_logger = PerformanceLogger()
