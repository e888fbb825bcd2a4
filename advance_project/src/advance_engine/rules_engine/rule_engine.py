"""
Advance规则引擎

实现各棋子的走法生成和合法性验证。
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from .game_board import GameBoard
from .move import Move
from .pieces import EMPTY, WALL, Piece, PieceKind, Side

Position = Tuple[int, int]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _is_bombardment_offset(d_row: int, d_col: int) -> bool:
    """投石车的远程轰击距离：直线3格、直线2格或斜向2×2"""
    a_row, a_col = abs(d_row), abs(d_col)
    if a_row == 0:
        return a_col in (2, 3)
    if a_col == 0:
        return a_row in (2, 3)
    return a_row == 2 and a_col == 2


class RuleEngine:
    """
    Advance规则引擎

    每种棋子提供两个操作：is_legal 判定单步走法是否合法，
    candidate_moves 按固定顺序列出通过 is_legal 的目标格。
    候选走法尚未经过"将军安全"过滤，将军自身除外。
    """

    def __init__(self):
        """初始化规则引擎"""
        # 八方向单步：行偏移 -1,0,1 × 列偏移 -1,0,1
        self.step_offsets = [
            (d_row, d_col)
            for d_row in (-1, 0, 1)
            for d_col in (-1, 0, 1)
            if (d_row, d_col) != (0, 0)
        ]
        # 直线方向：右左下上
        self.line_directions = [(0, 1), (0, -1), (1, 0), (-1, 0)]
        # 斜线方向
        self.diagonal_directions = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
        # 哨兵：日字
        self.sentinel_offsets = [
            (-2, 1), (-1, 2), (1, 2), (2, 1),
            (2, -1), (1, -2), (-1, -2), (-2, -1)
        ]
        # 绕一圈的相邻格，用于小丑转化和建墙
        self.adjacent_ring = [
            (-1, 1), (0, 1), (1, 1), (1, 0),
            (1, -1), (0, -1), (-1, -1), (-1, 0)
        ]
        # 投石车：先单步，再远程轰击
        self.catapult_steps = [(0, 1), (0, -1), (1, 0), (-1, 0)]
        self.catapult_patterns = [
            (d_row, d_col)
            for d_row in range(-3, 4)
            for d_col in range(-3, 4)
            if _is_bombardment_offset(d_row, d_col)
        ]

        self._legality: Dict[PieceKind, Callable[[GameBoard, Piece, Position, Position], bool]] = {
            PieceKind.ZOMBIE: self._is_legal_zombie,
            PieceKind.BUILDER: self._is_legal_builder,
            PieceKind.MINER: self._is_legal_miner,
            PieceKind.JESTER: self._is_legal_jester,
            PieceKind.SENTINEL: self._is_legal_sentinel,
            PieceKind.CATAPULT: self._is_legal_catapult,
            PieceKind.DRAGON: self._is_legal_dragon,
            PieceKind.GENERAL: self._is_legal_general,
        }
        self._generators: Dict[PieceKind, Callable[[GameBoard, Piece, Position], List[Position]]] = {
            PieceKind.ZOMBIE: self._generate_zombie_moves,
            PieceKind.BUILDER: self._generate_step_moves,
            PieceKind.MINER: self._generate_miner_moves,
            PieceKind.JESTER: self._generate_step_moves,
            PieceKind.SENTINEL: self._generate_sentinel_moves,
            PieceKind.CATAPULT: self._generate_catapult_moves,
            PieceKind.DRAGON: self._generate_dragon_moves,
            PieceKind.GENERAL: self._generate_step_moves,
        }

        self._oracle = None

    @property
    def oracle(self):
        """将军安全判定器，将军的走法合法性依赖它"""
        if self._oracle is None:
            from .safety_oracle import SafetyOracle
            self._oracle = SafetyOracle(self)
        return self._oracle

    # ==================== 公共接口 ====================

    def is_legal(self, board: GameBoard, from_pos: Position, to_pos: Position) -> bool:
        """
        判定起点棋子走到终点是否合法

        Args:
            board: 当前棋盘
            from_pos: 起点
            to_pos: 终点

        Returns:
            bool: 是否合法；起点为空格或墙时返回False
        """
        if from_pos == to_pos or not board.in_bounds(to_pos):
            return False

        piece = board.piece_at(from_pos)
        if piece is None:
            return False

        return self._legality[piece.kind](board, piece, from_pos, to_pos)

    def candidate_moves(self, board: GameBoard, from_pos: Position) -> List[Position]:
        """
        按该棋子的固定顺序列出所有合法目标格

        Args:
            board: 当前棋盘
            from_pos: 棋子位置

        Returns:
            List[Position]: 目标格列表
        """
        piece = board.piece_at(from_pos)
        if piece is None:
            return []
        return self._generators[piece.kind](board, piece, from_pos)

    def is_valid_conversion(self, board: GameBoard, from_pos: Position, to_pos: Position) -> bool:
        """
        判定小丑能否转化目标格上的棋子

        目标必须与小丑相邻，且是敌方的非将军棋子。
        """
        if not board.in_bounds(to_pos):
            return False

        piece = board.piece_at(from_pos)
        if piece is None or piece.kind is not PieceKind.JESTER:
            return False

        if max(abs(to_pos[0] - from_pos[0]), abs(to_pos[1] - from_pos[1])) != 1:
            return False

        target = board.get(to_pos)
        return piece.is_enemy(target) and target.upper() != PieceKind.GENERAL.value

    def conversion_targets(self, board: GameBoard, from_pos: Position) -> List[Position]:
        """按相邻环顺序列出小丑可转化的目标格"""
        return [
            pos for pos in self._ring(from_pos)
            if self.is_valid_conversion(board, from_pos, pos)
        ]

    def wall_sites(self, board: GameBoard, builder_pos: Position) -> List[Position]:
        """
        按相邻环顺序列出工匠可以建墙的空格

        Args:
            board: 当前棋盘
            builder_pos: 工匠位置

        Returns:
            List[Position]: 可建墙的位置
        """
        piece = board.piece_at(builder_pos)
        if piece is None or piece.kind is not PieceKind.BUILDER:
            return []
        return [
            pos for pos in self._ring(builder_pos)
            if board.in_bounds(pos) and board.is_empty(pos)
        ]

    def generate_legal_moves(self, board: GameBoard, side: Side) -> List[Move]:
        """
        生成指定阵营所有不会让己方将军陷入危险的走法

        Args:
            board: 当前棋盘
            side: 阵营

        Returns:
            List[Move]: 走法列表，行优先顺序
        """
        legal_moves = []
        for pos, _ in board.get_all_pieces(side):
            for target in self.candidate_moves(board, pos):
                if not self.oracle.danger_after_move(board, pos, target, side):
                    legal_moves.append(Move(pos, target))
        return legal_moves

    def get_game_status(self, board: GameBoard, side: Side, sample_size: int = 10) -> Dict[str, Any]:
        """
        获取指定阵营的局面状态

        Args:
            board: 棋盘状态
            side: 阵营
            sample_size: 返回的走法样本数量

        Returns:
            Dict: 局面状态信息
        """
        general_pos = board.find(PieceKind.GENERAL, side)
        in_danger = False
        threat = None
        if general_pos is not None:
            in_danger = self.oracle.is_in_danger(board, side, general_pos)
            if in_danger:
                threat = self.oracle.identify_threat(board, side, general_pos)

        legal_moves = self.generate_legal_moves(board, side)

        return {
            'side': side.value,
            'general_position': general_pos,
            'in_danger': in_danger,
            'threat': threat,
            'legal_moves_count': len(legal_moves),
            'legal_moves': legal_moves[:sample_size],
        }

    # ==================== 合法性判定 ====================

    def _is_legal_zombie(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """僵尸：前进一步或斜进一步；隔一格跳吃必须中间为空且目标为敌子"""
        forward = piece.side.forward
        d_row = to_pos[0] - from_pos[0]
        d_col = to_pos[1] - from_pos[1]
        target = board.get(to_pos)

        if d_row == forward and abs(d_col) <= 1:
            return target == EMPTY or piece.is_enemy(target)

        if d_row == 2 * forward and d_col in (-2, 0, 2):
            middle = (from_pos[0] + forward, from_pos[1] + d_col // 2)
            if not board.is_empty(middle):
                return False
            return piece.is_enemy(target)

        return False

    def _is_legal_builder(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """工匠：八方向一步，目标为空或敌子"""
        if not self._is_adjacent(from_pos, to_pos):
            return False
        target = board.get(to_pos)
        return target == EMPTY or piece.is_enemy(target)

    def _is_legal_miner(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """矿工：直线任意格，路径不能有阻挡，可以走到墙上拆墙"""
        if (from_pos[0] != to_pos[0]) == (from_pos[1] != to_pos[1]):
            return False
        if not self._is_path_clear(board, from_pos, to_pos):
            return False
        target = board.get(to_pos)
        return target in (EMPTY, WALL) or piece.is_enemy(target)

    def _is_legal_jester(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """小丑：八方向一步，空格移动、己方交换、敌方非将军转化"""
        if not self._is_adjacent(from_pos, to_pos):
            return False
        target = board.get(to_pos)
        if target == EMPTY or piece.is_friendly(target):
            return True
        return piece.is_enemy(target) and target.upper() != PieceKind.GENERAL.value

    def _is_legal_sentinel(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """哨兵：日字跳，目标为空或敌子"""
        d_row = abs(to_pos[0] - from_pos[0])
        d_col = abs(to_pos[1] - from_pos[1])
        if (d_row, d_col) not in ((1, 2), (2, 1)):
            return False

        target = board.get(to_pos)
        if target != EMPTY and not piece.is_enemy(target):
            return False

        # 日字偏移不会落在一格直线的护卫范围内，此分支实际不会生效
        if self._in_protection_range(from_pos, to_pos):
            if piece.is_friendly(target) or piece.kind is PieceKind.SENTINEL:
                return False

        return True

    def _is_legal_catapult(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """投石车：直线单步移动，或按轰击距离打击空格；只能落在空格"""
        d_row = to_pos[0] - from_pos[0]
        d_col = to_pos[1] - from_pos[1]

        is_step = abs(d_row) + abs(d_col) == 1
        if not is_step and not _is_bombardment_offset(d_row, d_col):
            return False

        if not self._is_path_clear(board, from_pos, to_pos):
            return False

        return board.is_empty(to_pos)

    def _is_legal_dragon(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """龙：直线或斜线任意格，路径不能有阻挡，目标为空或敌子"""
        d_row = to_pos[0] - from_pos[0]
        d_col = to_pos[1] - from_pos[1]
        if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
            return False
        if not self._is_path_clear(board, from_pos, to_pos):
            return False
        target = board.get(to_pos)
        return target == EMPTY or piece.is_enemy(target)

    def _is_legal_general(self, board: GameBoard, piece: Piece, from_pos: Position, to_pos: Position) -> bool:
        """将军：八方向一步，目标为空或敌子，且走后自身不处于危险"""
        if not self._is_adjacent(from_pos, to_pos):
            return False
        target = board.get(to_pos)
        if target != EMPTY and not piece.is_enemy(target):
            return False
        return not self.oracle.danger_after_move(board, from_pos, to_pos, piece.side)

    # ==================== 候选走法生成 ====================

    def _generate_zombie_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成僵尸的走法：前进、前跳，然后左右两侧的斜进和斜跳"""
        forward = piece.side.forward
        offsets = [(forward, 0), (2 * forward, 0)]
        for side_step in (-1, 1):
            offsets.append((forward, side_step))
            offsets.append((2 * forward, 2 * side_step))
        return self._filter_offsets(board, piece, from_pos, offsets)

    def _generate_step_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成八方向单步走法（工匠、小丑、将军）"""
        return self._filter_offsets(board, piece, from_pos, self.step_offsets)

    def _generate_miner_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成矿工的走法"""
        return self._generate_ray_moves(board, piece, from_pos, self.line_directions)

    def _generate_sentinel_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成哨兵的走法"""
        return self._filter_offsets(board, piece, from_pos, self.sentinel_offsets)

    def _generate_catapult_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成投石车的走法"""
        return self._filter_offsets(board, piece, from_pos, self.catapult_steps + self.catapult_patterns)

    def _generate_dragon_moves(self, board: GameBoard, piece: Piece, from_pos: Position) -> List[Position]:
        """生成龙的走法"""
        return self._generate_ray_moves(
            board, piece, from_pos, self.line_directions + self.diagonal_directions
        )

    def _generate_ray_moves(
        self,
        board: GameBoard,
        piece: Piece,
        from_pos: Position,
        directions: List[Tuple[int, int]]
    ) -> List[Position]:
        """沿各方向由近及远扫描，遇到非空格即停止"""
        moves = []
        for d_row, d_col in directions:
            step = 1
            while True:
                target = (from_pos[0] + d_row * step, from_pos[1] + d_col * step)
                if not board.in_bounds(target):
                    break
                if self._legality[piece.kind](board, piece, from_pos, target):
                    moves.append(target)
                if not board.is_empty(target):
                    break
                step += 1
        return moves

    def _filter_offsets(
        self,
        board: GameBoard,
        piece: Piece,
        from_pos: Position,
        offsets: List[Tuple[int, int]]
    ) -> List[Position]:
        moves = []
        check = self._legality[piece.kind]
        for d_row, d_col in offsets:
            target = (from_pos[0] + d_row, from_pos[1] + d_col)
            if board.in_bounds(target) and check(board, piece, from_pos, target):
                moves.append(target)
        return moves

    # ==================== 辅助方法 ====================

    def _ring(self, center: Position) -> List[Position]:
        return [(center[0] + d_row, center[1] + d_col) for d_row, d_col in self.adjacent_ring]

    @staticmethod
    def _is_adjacent(from_pos: Position, to_pos: Position) -> bool:
        return max(abs(to_pos[0] - from_pos[0]), abs(to_pos[1] - from_pos[1])) == 1

    @staticmethod
    def _in_protection_range(from_pos: Position, to_pos: Position) -> bool:
        """起点到终点是否为一格直线距离"""
        d_row = abs(to_pos[0] - from_pos[0])
        d_col = abs(to_pos[1] - from_pos[1])
        return d_row + d_col == 1

    @staticmethod
    def _is_path_clear(board: GameBoard, from_pos: Position, to_pos: Position) -> bool:
        """检查起点和终点之间（不含两端）是否全为空格"""
        step_row = _sign(to_pos[0] - from_pos[0])
        step_col = _sign(to_pos[1] - from_pos[1])
        row, col = from_pos[0] + step_row, from_pos[1] + step_col
        while (row, col) != to_pos:
            if board.get((row, col)) != EMPTY:
                return False
            row += step_row
            col += step_col
        return True
