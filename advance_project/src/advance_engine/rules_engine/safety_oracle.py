"""
将军安全判定

判定将军是否受到威胁、找出威胁来源，以及在克隆棋盘上模拟走法或建墙后的安全性。
"""

from typing import Iterator, Optional, Tuple

import numpy as np

from .game_board import GameBoard
from .move import Move
from .pieces import PieceKind, Side, symbol_for
from ..utils.logger import get_logger

Position = Tuple[int, int]

# 威胁扫描的棋子种类顺序；对方将军不参与扫描，墙不会移动
THREAT_SCAN_ORDER = (
    PieceKind.DRAGON,
    PieceKind.ZOMBIE,
    PieceKind.SENTINEL,
    PieceKind.MINER,
    PieceKind.BUILDER,
    PieceKind.JESTER,
    PieceKind.CATAPULT,
)

logger = get_logger('advance.SafetyOracle')


class SafetyOracle:
    """
    将军安全判定器

    所有"如果这样走会怎样"的判断都在棋盘克隆上完成，不修改调用方的棋盘。
    扫描敌方棋子时不会再去判定敌方将军的安全，因此模拟只有一层。
    """

    def __init__(self, rule_engine):
        """
        Args:
            rule_engine: 提供 is_legal 的规则引擎
        """
        self.rule_engine = rule_engine

    def _iter_attackers(self, board: GameBoard, side: Side, pos: Position) -> Iterator[Position]:
        """按种类顺序、再按行优先顺序列出能合法走到pos的敌方棋子"""
        enemy = side.opponent
        for kind in THREAT_SCAN_ORDER:
            for row, col in np.argwhere(board.grid == symbol_for(kind, enemy)):
                attacker = (int(row), int(col))
                if self.rule_engine.is_legal(board, attacker, pos):
                    yield attacker

    def is_in_danger(self, board: GameBoard, side: Side, pos: Position) -> bool:
        """
        判定side方位于pos的棋子是否处于危险

        Args:
            board: 棋盘
            side: 被保护的一方
            pos: 被保护棋子的位置（通常是将军）

        Returns:
            bool: 是否有敌方棋子能合法走到pos
        """
        return next(self._iter_attackers(board, side, pos), None) is not None

    def identify_threat(self, board: GameBoard, side: Side, pos: Position) -> Optional[Position]:
        """
        找出第一个威胁pos的敌方棋子

        Returns:
            Optional[Position]: 威胁来源位置，没有威胁返回None
        """
        return next(self._iter_attackers(board, side, pos), None)

    def danger_after_move(self, board: GameBoard, from_pos: Position, to_pos: Position, side: Side) -> bool:
        """
        判定走法执行后side方将军是否处于危险

        Args:
            board: 当前棋盘（不会被修改）
            from_pos: 起点
            to_pos: 终点
            side: 要检查的一方

        Returns:
            bool: 走后将军是否处于危险；没有将军时返回False
        """
        simulated = board.clone()
        simulated.apply(Move(from_pos, to_pos))

        general_pos = simulated.find(PieceKind.GENERAL, side)
        if general_pos is None:
            return False

        return self.is_in_danger(simulated, side, general_pos)

    @staticmethod
    def would_be_protected(sentinel_pos: Position, general_pos: Position) -> bool:
        """
        判定哨兵位置是否在将军的护卫范围内（上下左右相邻一格）
        """
        d_row = abs(sentinel_pos[0] - general_pos[0])
        d_col = abs(sentinel_pos[1] - general_pos[1])
        return d_row + d_col == 1

    def protected_after_wall(self, board: GameBoard, wall_pos: Position, general_pos: Position, side: Side) -> bool:
        """
        判定在wall_pos建墙后将军是否脱离危险

        Args:
            board: 当前棋盘（不会被修改）
            wall_pos: 建墙位置，必须为空格
            general_pos: 将军位置
            side: 将军所属一方

        Returns:
            bool: 建墙后将军是否安全
        """
        simulated = board.clone()
        simulated.build_wall(wall_pos)
        protected = not self.is_in_danger(simulated, side, general_pos)
        logger.debug(f"模拟建墙 {wall_pos}: 将军{'安全' if protected else '仍有危险'}")
        return protected
