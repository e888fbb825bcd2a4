"""
配置管理器

负责从单个YAML文件加载、保存和验证配置。
"""

import copy
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from .engine_config import BoardConfig, EngineConfig, DEFAULT_BOARD_CONFIG, DEFAULT_ENGINE_CONFIG
from ..utils.exceptions import ConfigurationError
from ..utils.logger import get_logger

T = TypeVar('T')

logger = get_logger('advance.ConfigManager')

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigManager:
    """
    配置管理器

    配置文件按节组织（engine、board），缺失的节和字段使用默认值。
    不会自动创建任何文件。
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化配置管理器

        Args:
            config_path: YAML配置文件路径，None表示只用默认配置
        """
        self.config_path = Path(config_path) if config_path else None

        self.default_configs = {
            'engine': DEFAULT_ENGINE_CONFIG,
            'board': DEFAULT_BOARD_CONFIG,
        }
        self.config_types = {
            'engine': EngineConfig,
            'board': BoardConfig,
        }

        self._raw = self._read_file()

    def _read_file(self) -> Dict[str, Any]:
        """读取配置文件，失败时回退到默认配置"""
        if self.config_path is None:
            return {}

        if not self.config_path.exists():
            logger.warning(f"配置文件不存在: {self.config_path}，使用默认配置")
            return {}

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"加载配置文件失败: {self.config_path}, 错误: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"配置文件格式错误: {self.config_path}，顶层必须是映射")
            return {}

        logger.info(f"成功加载配置: {self.config_path}")
        return data

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        section = self._raw.get(config_name)
        if not section:
            return copy.deepcopy(self.default_configs[config_name])

        if not isinstance(section, dict):
            logger.warning(f"配置节 {config_name} 不是映射，使用默认配置")
            return copy.deepcopy(self.default_configs[config_name])

        return self._dict_to_dataclass(section, config_class)

    def get_engine_config(self) -> EngineConfig:
        """获取引擎配置"""
        return self.load_config('engine', EngineConfig)

    def get_board_config(self) -> BoardConfig:
        """获取棋盘配置"""
        return self.load_config('board', BoardConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新内存中的配置（不写文件）

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        if config_name not in self.config_types:
            raise ConfigurationError(config_name, "未知的配置名称")

        section = dict(self._raw.get(config_name) or {})
        field_names = {f.name for f in fields(self.config_types[config_name])}
        for key, value in kwargs.items():
            if key in field_names:
                section[key] = value
            else:
                logger.warning(f"配置项不存在: {key}")
        self._raw[config_name] = section

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])

        if config_name == 'engine':
            return (config.log_level.upper() in VALID_LOG_LEVELS and
                    bool(config.bot_name) and
                    config.log_max_size > 0 and
                    config.log_backup_count >= 0)
        if config_name == 'board':
            return bool(config.encoding)

        return True

    def save_config(self, config_path: str):
        """
        把所有配置保存为YAML文件

        Args:
            config_path: 目标文件路径
        """
        data = {
            name: asdict(self.load_config(name, config_class))
            for name, config_class in self.config_types.items()
        }

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
        except OSError as e:
            logger.error(f"保存配置文件失败: {config_path}, 错误: {e}")
            raise ConfigurationError(str(config_path), str(e)) from e

        logger.info(f"成功保存配置: {config_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """
        将字典转换为数据类对象

        Args:
            data: 字典数据
            dataclass_type: 数据类类型

        Returns:
            数据类对象
        """
        field_names = {f.name for f in fields(dataclass_type)}

        unknown = set(data) - field_names
        if unknown:
            logger.warning(f"忽略未知配置项: {sorted(unknown)}")

        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
