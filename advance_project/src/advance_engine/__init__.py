"""
Advance对弈引擎

在带墙的方格棋盘上为指定阵营选出一步合法走法。
包括规则引擎、将军安全判定、贪心走法选择器和棋盘文件接口。
"""

__version__ = "0.1.0"
__author__ = "Advance Bot Team"

from .rules_engine import GameBoard, Move, RuleEngine, SafetyOracle, Side, PieceKind
from .search_algorithm import GreedyMoveSelector, TurnResult, SelectionAction
from .inference_interface import GameInterface, TurnRecord
from .config import ConfigManager, EngineConfig, BoardConfig
from .utils import setup_logger, get_logger, AdvanceError

__all__ = [
    "__version__", "__author__",
    "GameBoard", "Move", "RuleEngine", "SafetyOracle", "Side", "PieceKind",
    "GreedyMoveSelector", "TurnResult", "SelectionAction",
    "GameInterface", "TurnRecord",
    "ConfigManager", "EngineConfig", "BoardConfig",
    "setup_logger", "get_logger", "AdvanceError"
]
