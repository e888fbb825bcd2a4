"""
Advance规则引擎模块

包含棋盘表示、棋子走法规则、将军安全判定等核心功能。
"""

from .pieces import Side, PieceKind, Piece, MoveEffect, EMPTY, WALL
from .move import Move
from .game_board import GameBoard
from .board_validator import BoardValidator
from .rule_engine import RuleEngine
from .safety_oracle import SafetyOracle, THREAT_SCAN_ORDER

__all__ = [
    'Side', 'PieceKind', 'Piece', 'MoveEffect', 'EMPTY', 'WALL',
    'Move', 'GameBoard', 'BoardValidator', 'RuleEngine',
    'SafetyOracle', 'THREAT_SCAN_ORDER'
]
