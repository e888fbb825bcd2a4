"""
日志系统测试
"""

import logging

from advance_project.src.advance_engine.config import EngineConfig
from advance_project.src.advance_engine.utils.logger import (
    PerformanceLogger, reset_logger, setup_from_config, setup_logger
)


class TestSetupLogger:
    """日志设置测试"""

    def teardown_method(self):
        reset_logger('advance.test')
        reset_logger('advance')

    def test_repeated_setup_replaces_handlers(self):
        """测试重复设置不会叠加处理器"""
        setup_logger('advance.test', level='INFO')
        logger = setup_logger('advance.test', level='DEBUG')

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_unknown_level(self):
        """测试无法识别的级别回退到WARNING"""
        logger = setup_logger('advance.test', level='LOUD')
        assert logger.level == logging.WARNING

    def test_file_handler(self, tmp_path):
        """测试写入轮转日志文件"""
        logger = setup_logger(
            'advance.test', level='INFO', log_file='bot.log',
            log_dir=str(tmp_path), console_output=False
        )
        logger.info("回合开始")
        reset_logger('advance.test')

        assert "回合开始" in (tmp_path / 'bot.log').read_text(encoding='utf-8')

    def test_setup_from_config(self):
        """测试按引擎配置设置日志"""
        config = EngineConfig(log_level='ERROR', console_log=False)

        assert setup_from_config(config).level == logging.ERROR
        assert setup_from_config(config, debug=True).level == logging.DEBUG
        assert logging.getLogger('advance').handlers == []


class TestPerformanceLogger:
    """耗时记录测试"""

    def test_timer(self):
        """测试计时"""
        perf = PerformanceLogger('test_perf')
        perf.start_timer('turn')

        assert perf.end_timer('turn') >= 0
        assert 'turn' not in perf.start_times

    def test_missing_timer(self):
        """测试没有开始记录的计时"""
        assert PerformanceLogger('test_perf').end_timer('never') == 0.0
