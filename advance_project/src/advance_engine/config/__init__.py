"""
配置管理模块

包含引擎配置和棋盘读写配置。
"""

from .config_manager import ConfigManager
from .engine_config import EngineConfig, BoardConfig

__all__ = ['ConfigManager', 'EngineConfig', 'BoardConfig']
