"""
贪心走法选择器

每回合按固定优先级选出并执行一步走法：先处理将军受到的威胁，
再在所有己方棋子中做一次常规扫描。不做多层搜索，也不评估局面。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from ..rules_engine import GameBoard, Move, MoveEffect, PieceKind, RuleEngine, Side
from ..utils.logger import LoggerMixin

Position = Tuple[int, int]


class SelectionAction(Enum):
    """本回合采取的行动"""
    CAPTURE_THREAT = "capture_threat"        # 吃掉威胁将军的棋子
    SENTINEL_SHIELD = "sentinel_shield"      # 哨兵移到将军旁护卫
    BUILD_WALL = "build_wall"                # 工匠建墙挡住威胁
    GENERAL_RETREAT = "general_retreat"      # 将军躲避
    JESTER_CONVERSION = "jester_conversion"  # 小丑转化敌子
    CAPTURE = "capture"                      # 常规扫描中的吃子
    NON_CAPTURE = "non_capture"              # 常规扫描中的安全移动
    DANGEROUS = "dangerous"                  # 只剩会让将军陷入危险的走法
    NO_MOVE = "no_move"                      # 没有任何可走的棋


@dataclass
class TurnResult:
    """一回合的决策结果"""
    action: SelectionAction
    move: Optional[Move] = None
    wall: Optional[Position] = None
    effect: Optional[MoveEffect] = None

    @property
    def moved(self) -> bool:
        """棋盘是否被修改"""
        return self.action is not SelectionAction.NO_MOVE

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'action': self.action.value,
            'move': self.move.to_dict() if self.move else None,
            'wall': list(self.wall) if self.wall else None,
            'effect': self.effect.value if self.effect else None,
        }

    def __str__(self) -> str:
        if self.wall is not None:
            return f"{self.action.value} {self.wall}"
        if self.move is not None:
            return f"{self.action.value} {self.move}"
        return self.action.value


class GreedyMoveSelector(LoggerMixin):
    """
    贪心走法选择器

    决策顺序：
    1. 找到己方将军；找不到则直接常规扫描。
    2. 将军受威胁时依次尝试：吃掉威胁、哨兵护卫、工匠建墙、将军躲避。
    3. 常规扫描：每处理一个己方棋子前都重新检查小丑转化；
       遇到安全吃子立即执行，否则按 转化 > 安全移动 > 危险移动 的顺序兜底。

    每次调用最多修改棋盘一次，不在调用之间保留任何状态。
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        self.rule_engine = rule_engine or RuleEngine()
        self.oracle = self.rule_engine.oracle

    def select_and_apply(self, board: GameBoard, side: Union[Side, str]) -> TurnResult:
        """
        为side选出一步走法并在board上执行

        Args:
            board: 棋盘，会被原地修改
            side: 行棋方

        Returns:
            TurnResult: 本回合的行动
        """
        if not isinstance(side, Side):
            side = Side.from_string(side)

        general_pos = board.find(PieceKind.GENERAL, side)
        threat = None

        if general_pos is None:
            self.log_warning(f"{side.value}方没有将军，跳过安全处理")
        elif self.oracle.is_in_danger(board, side, general_pos):
            threat = self.oracle.identify_threat(board, side, general_pos)
            self.log_info(f"{side.value}方将军{general_pos}受到{threat}的威胁")

            result = self._resolve_threat(board, side, general_pos, threat)
            if result is not None:
                return result

            self.log_info("没有找到解除威胁的办法，转入常规扫描")

        return self._generic_search(board, side, threat)

    def preview(self, board: GameBoard, side: Union[Side, str]) -> Tuple[TurnResult, GameBoard]:
        """
        在棋盘副本上决策，不修改原棋盘

        Returns:
            Tuple[TurnResult, GameBoard]: (行动, 执行后的棋盘副本)
        """
        simulated = board.clone()
        result = self.select_and_apply(simulated, side)
        return result, simulated

    # ==================== 威胁处理 ====================

    def _resolve_threat(
        self,
        board: GameBoard,
        side: Side,
        general_pos: Position,
        threat: Position
    ) -> Optional[TurnResult]:
        """按固定顺序尝试解除威胁，第一个成功的结束本回合"""
        for strategy in (
            self._capture_threat,
            self._shield_with_sentinel,
            self._build_wall,
            self._retreat_general,
        ):
            result = strategy(board, side, general_pos, threat)
            if result is not None:
                return result
            self.log_debug(f"{strategy.__name__} 未能解除威胁")
        return None

    def _capture_threat(
        self, board: GameBoard, side: Side, general_pos: Position, threat: Position
    ) -> Optional[TurnResult]:
        """用第一个能安全吃到威胁的己方棋子吃掉它"""
        for pos, _ in board.get_all_pieces(side):
            if (self.rule_engine.is_legal(board, pos, threat) and
                    not self.oracle.danger_after_move(board, pos, threat, side)):
                return self._apply(board, SelectionAction.CAPTURE_THREAT, Move(pos, threat))
        return None

    def _shield_with_sentinel(
        self, board: GameBoard, side: Side, general_pos: Position, threat: Position
    ) -> Optional[TurnResult]:
        """把哨兵移到将军上下左右相邻的格子"""
        for pos, piece in board.get_all_pieces(side):
            if piece.kind is not PieceKind.SENTINEL:
                continue
            for target in self.rule_engine.candidate_moves(board, pos):
                if (self.oracle.would_be_protected(target, general_pos) and
                        not self.oracle.danger_after_move(board, pos, target, side)):
                    return self._apply(board, SelectionAction.SENTINEL_SHIELD, Move(pos, target))
        return None

    def _build_wall(
        self, board: GameBoard, side: Side, general_pos: Position, threat: Position
    ) -> Optional[TurnResult]:
        """让工匠在相邻空格建墙挡住威胁"""
        for pos, piece in board.get_all_pieces(side):
            if piece.kind is not PieceKind.BUILDER:
                continue
            for site in self.rule_engine.wall_sites(board, pos):
                if self.oracle.protected_after_wall(board, site, general_pos, side):
                    board.build_wall(site)
                    self.log_info(f"工匠{pos}在{site}建墙")
                    return TurnResult(SelectionAction.BUILD_WALL, wall=site)
        return None

    def _retreat_general(
        self, board: GameBoard, side: Side, general_pos: Position, threat: Position
    ) -> Optional[TurnResult]:
        """将军走到第一个安全的相邻格"""
        for target in self.rule_engine.candidate_moves(board, general_pos):
            if not self.oracle.danger_after_move(board, general_pos, target, side):
                return self._apply(board, SelectionAction.GENERAL_RETREAT, Move(general_pos, target))
        return None

    # ==================== 常规扫描 ====================

    def _generic_search(self, board: GameBoard, side: Side, threat: Optional[Position]) -> TurnResult:
        """
        常规扫描

        Args:
            board: 棋盘
            side: 行棋方
            threat: 回合开始时威胁将军的棋子位置，没有威胁为None
        """
        conversion_fallback = None
        best_non_capture = None
        best_dangerous = None

        for pos, _ in board.get_all_pieces(side):
            # 每个棋子之前都重新扫描一遍全盘的小丑转化
            conversion, hits_threat = self._scan_jester_conversions(board, side, threat)
            if hits_threat:
                return self._apply(board, SelectionAction.JESTER_CONVERSION, conversion)
            if conversion_fallback is None:
                conversion_fallback = conversion

            for target in self.rule_engine.candidate_moves(board, pos):
                move = Move(pos, target)
                if not self.oracle.danger_after_move(board, pos, target, side):
                    if not board.is_empty(target):
                        return self._apply(board, SelectionAction.CAPTURE, move)
                    # 投石车轰击空格也算不吃子走法，执行后棋盘不变；之后棋子只有吃子能取代它
                    if best_non_capture is None:
                        best_non_capture = move
                elif best_dangerous is None:
                    best_dangerous = move

        if conversion_fallback is not None:
            return self._apply(board, SelectionAction.JESTER_CONVERSION, conversion_fallback)
        if best_non_capture is not None:
            return self._apply(board, SelectionAction.NON_CAPTURE, best_non_capture)
        if best_dangerous is not None:
            self.log_warning(f"只剩危险走法: {best_dangerous}")
            return self._apply(board, SelectionAction.DANGEROUS, best_dangerous)

        self.log_info(f"{side.value}方没有可走的棋")
        return TurnResult(SelectionAction.NO_MOVE)

    def _scan_jester_conversions(
        self, board: GameBoard, side: Side, threat: Optional[Position]
    ) -> Tuple[Optional[Move], bool]:
        """
        扫描所有己方小丑的转化机会

        Returns:
            Tuple[Optional[Move], bool]: (转化走法, 是否正好转化威胁来源)
            命中威胁时返回该走法，否则返回找到的第一个转化。
        """
        first = None
        for pos, piece in board.get_all_pieces(side):
            if piece.kind is not PieceKind.JESTER:
                continue
            for target in self.rule_engine.conversion_targets(board, pos):
                move = Move(pos, target)
                if threat is not None and target == threat:
                    return move, True
                if first is None:
                    first = move
        return first, False

    def _apply(self, board: GameBoard, action: SelectionAction, move: Move) -> TurnResult:
        effect = board.apply(move)
        self.log_info(f"{action.value}: {move} ({effect.value})")
        return TurnResult(action, move=move, effect=effect)
