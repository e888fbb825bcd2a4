"""
Advance棋盘数据结构

定义棋盘的表示、走法执行、克隆以及文本格式的读写功能。
"""

import copy
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .move import Move
from .pieces import EMPTY, WALL, MoveEffect, Piece, PieceKind, Side, side_of, symbol_for
from ..utils.exceptions import BoardIOError, InvalidMoveError


class GameBoard:
    """
    Advance棋盘类

    维护一个R×C的字符网格，每格一个字符：'.' 空、'#' 墙、字母为棋子。
    行列数在创建时确定，之后不再改变。
    """

    EMPTY = EMPTY
    WALL = WALL

    def __init__(self, grid: np.ndarray):
        """
        初始化棋盘

        Args:
            grid: 二维单字符数组
        """
        self.grid = np.array(grid, dtype='<U1')

    @classmethod
    def empty(cls, rows: int = 9, cols: int = 9) -> 'GameBoard':
        """创建全空棋盘"""
        return cls(np.full((rows, cols), EMPTY, dtype='<U1'))

    @classmethod
    def from_lines(cls, lines: List[str]) -> 'GameBoard':
        """
        从文本行创建棋盘

        Args:
            lines: 每行一个字符串，每个字符对应一格

        Returns:
            GameBoard: 棋盘对象

        Raises:
            MalformedBoardError: 棋盘为空、行宽不一致或含未知符号
        """
        from .board_validator import BoardValidator
        BoardValidator().validate_lines(lines)
        return cls(np.array([list(line) for line in lines], dtype='<U1'))

    def to_lines(self) -> List[str]:
        """转换为文本行"""
        return [''.join(row) for row in self.grid]

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    # ==================== 查询 ====================

    def get(self, pos: Tuple[int, int]) -> str:
        """
        获取指定位置的内容

        调用方负责保证坐标在棋盘范围内。
        """
        row, col = pos
        return str(self.grid[row, col])

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        """检查坐标是否在棋盘内"""
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        """检查指定位置是否为空"""
        return self.get(pos) == EMPTY

    def piece_at(self, pos: Tuple[int, int]) -> Optional[Piece]:
        """获取指定位置的棋子，空格和墙返回None"""
        return Piece.from_symbol(self.get(pos))

    def find(self, kind: PieceKind, side: Side) -> Optional[Tuple[int, int]]:
        """
        按行优先顺序查找第一个指定棋子

        Args:
            kind: 棋子种类
            side: 阵营

        Returns:
            Optional[Tuple[int, int]]: 位置，找不到返回None
        """
        matches = np.argwhere(self.grid == symbol_for(kind, side))
        if len(matches) == 0:
            return None
        row, col = matches[0]
        return (int(row), int(col))

    def positions(self) -> Iterator[Tuple[int, int]]:
        """按行优先顺序遍历所有坐标"""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def get_all_pieces(self, side: Optional[Side] = None) -> List[Tuple[Tuple[int, int], Piece]]:
        """
        获取所有棋子的位置和类型

        Args:
            side: 指定阵营，None表示获取所有棋子

        Returns:
            List[Tuple[Tuple[int, int], Piece]]: [(位置, 棋子), ...]，行优先顺序
        """
        pieces = []
        for pos in self.positions():
            symbol = self.get(pos)
            owner = side_of(symbol)
            if owner is None:
                continue
            if side is None or owner is side:
                pieces.append((pos, Piece.from_symbol(symbol)))
        return pieces

    def count_pieces(self, side: Optional[Side] = None) -> Dict[str, int]:
        """
        统计棋子数量

        Returns:
            Dict[str, int]: {棋子符号: 数量}
        """
        counts = {}
        for _, piece in self.get_all_pieces(side):
            counts[piece.symbol] = counts.get(piece.symbol, 0) + 1
        return counts

    # ==================== 修改 ====================

    def classify(self, move: Move) -> MoveEffect:
        """
        判定走法在当前棋盘上执行时的效果

        Args:
            move: 走法

        Returns:
            MoveEffect: 走法效果

        Raises:
            InvalidMoveError: 走法在结构上无法执行
        """
        if move.from_pos == move.to_pos:
            raise InvalidMoveError(str(move), "起点与终点相同")

        piece = self.piece_at(move.from_pos)
        if piece is None:
            raise InvalidMoveError(str(move), "起点没有可移动的棋子")

        target = self.get(move.to_pos)

        if piece.kind is PieceKind.JESTER:
            if piece.is_friendly(target):
                return MoveEffect.SWAP
            if piece.is_enemy(target):
                if target.upper() == PieceKind.GENERAL.value:
                    raise InvalidMoveError(str(move), "小丑不能转化将军")
                return MoveEffect.CONVERSION
            if target == WALL:
                raise InvalidMoveError(str(move), "目标是墙")
            return MoveEffect.RELOCATION

        if piece.kind is PieceKind.CATAPULT and not _is_single_cardinal_step(move):
            if target != EMPTY:
                raise InvalidMoveError(str(move), "投石车只能轰击空格")
            return MoveEffect.BOMBARDMENT

        if target == WALL:
            if piece.kind is PieceKind.MINER:
                return MoveEffect.DEMOLITION
            raise InvalidMoveError(str(move), "目标是墙")

        if target == EMPTY:
            return MoveEffect.RELOCATION
        if piece.is_enemy(target):
            return MoveEffect.CAPTURE

        raise InvalidMoveError(str(move), "不能吃己方棋子")

    def apply(self, move: Move) -> MoveEffect:
        """
        在棋盘上执行走法

        小丑遇己方棋子交换位置、遇敌方非将军棋子将其转化；
        投石车远程轰击只清空目标格，自身不动；其余棋子覆盖目标格并清空起点。

        Args:
            move: 走法

        Returns:
            MoveEffect: 实际执行的效果
        """
        effect = self.classify(move)
        mover = self.get(move.from_pos)
        target = self.get(move.to_pos)

        if effect is MoveEffect.SWAP:
            self.grid[move.from_pos] = target
            self.grid[move.to_pos] = mover
        elif effect is MoveEffect.CONVERSION:
            self.grid[move.to_pos] = target.swapcase()
        elif effect is MoveEffect.BOMBARDMENT:
            self.grid[move.to_pos] = EMPTY
        else:
            self.grid[move.to_pos] = mover
            self.grid[move.from_pos] = EMPTY

        return effect

    def build_wall(self, pos: Tuple[int, int]) -> None:
        """
        在空格上建墙

        Raises:
            InvalidMoveError: 目标格不为空
        """
        if not self.is_empty(pos):
            raise InvalidMoveError(f"wall@{pos}", "只能在空格上建墙")
        self.grid[pos] = WALL

    # ==================== 实用工具方法 ====================

    def clone(self) -> 'GameBoard':
        """
        创建棋盘的深拷贝

        Returns:
            GameBoard: 独立存储的棋盘副本
        """
        return copy.deepcopy(self)

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 带行列标注的棋盘字符串
        """
        header = "   " + " ".join(chr(ord('a') + col) for col in range(self.cols))
        lines = [header]
        for row, text in enumerate(self.to_lines()):
            lines.append(f"{row:>2} " + " ".join(text))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __eq__(self, other) -> bool:
        if not isinstance(other, GameBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    __hash__ = None

    # ==================== 文件读写 ====================

    @classmethod
    def load_from_file(cls, filepath: str, encoding: str = 'utf-8') -> 'GameBoard':
        """
        从文本文件加载棋盘

        Args:
            filepath: 文件路径
            encoding: 文件编码

        Returns:
            GameBoard: 棋盘对象

        Raises:
            BoardIOError: 文件无法读取
            MalformedBoardError: 文件内容不是合法棋盘
        """
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BoardIOError(str(filepath), "读取", str(e)) from e

        lines = content.splitlines()
        # 文件末尾的空行不计入棋盘
        while lines and lines[-1] == '':
            lines.pop()

        return cls.from_lines(lines)

    def save_to_file(self, filepath: str, encoding: str = 'utf-8') -> None:
        """
        保存棋盘到文本文件，格式与读取时相同

        Raises:
            BoardIOError: 文件无法写入
        """
        try:
            with open(filepath, 'w', encoding=encoding) as f:
                for line in self.to_lines():
                    f.write(line + "\n")
        except OSError as e:
            raise BoardIOError(str(filepath), "写入", str(e)) from e


def _is_single_cardinal_step(move: Move) -> bool:
    d_row = abs(move.to_pos[0] - move.from_pos[0])
    d_col = abs(move.to_pos[1] - move.from_pos[1])
    return d_row + d_col == 1
