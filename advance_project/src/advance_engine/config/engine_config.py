"""
引擎配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """引擎配置"""
    bot_name: str = "Chess bot from Wish"   # 'name' 参数输出的标识
    log_level: str = 'WARNING'              # 日志级别
    log_file: Optional[str] = None          # 日志文件，None表示不写文件
    log_dir: str = 'logs/advance_engine'    # 日志目录
    log_max_size: int = 10                  # 日志文件最大大小(MB)
    log_backup_count: int = 5               # 日志备份数量
    console_log: bool = True                # 是否输出日志到控制台
    show_board: bool = False                # 回合结束后是否打印棋盘


@dataclass
class BoardConfig:
    """棋盘读写配置"""
    encoding: str = 'utf-8'                 # 棋盘文件编码
    warn_missing_general: bool = True       # 加载时缺少将军是否警告


# 默认配置实例
DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_BOARD_CONFIG = BoardConfig()
