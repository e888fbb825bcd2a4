"""
棋盘合法性验证器

提供棋盘文本结构验证和棋局状态报告功能。
"""

from typing import Any, Dict, List, Tuple

from .game_board import GameBoard
from .pieces import VALID_SYMBOLS, PieceKind, Side
from ..utils.exceptions import MalformedBoardError


class BoardValidator:
    """
    棋盘合法性验证器

    文本结构错误（空棋盘、行宽不一致、未知符号）是致命错误；
    棋子层面的问题（缺少将军、将军数量过多）只作为警告报告。
    """

    def validate_lines(self, lines: List[str]) -> None:
        """
        验证棋盘文本行

        Args:
            lines: 棋盘文本行

        Raises:
            MalformedBoardError: 结构不合法
        """
        if not lines:
            raise MalformedBoardError("棋盘为空")

        width = len(lines[0])
        if width == 0:
            raise MalformedBoardError("第一行为空", 1)

        for row, line in enumerate(lines):
            if len(line) != width:
                raise MalformedBoardError(f"行宽{len(line)}与首行宽度{width}不一致", row + 1)

            for col, symbol in enumerate(line):
                if symbol not in VALID_SYMBOLS:
                    raise MalformedBoardError(f"第{col + 1}列出现未知符号 {symbol!r}", row + 1)

    def validate_board_structure(self, board: GameBoard) -> Tuple[bool, List[str]]:
        """
        验证棋盘基本结构

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        if board.grid.ndim != 2 or board.rows == 0 or board.cols == 0:
            errors.append(f"棋盘尺寸错误: {board.grid.shape}")
            return False, errors

        for row, line in enumerate(board.to_lines()):
            for col, symbol in enumerate(line):
                if symbol not in VALID_SYMBOLS:
                    errors.append(f"位置({row}, {col})出现未知符号 {symbol!r}")

        return len(errors) == 0, errors

    def check_generals(self, board: GameBoard) -> List[str]:
        """
        检查双方将军数量

        Returns:
            List[str]: 警告信息列表
        """
        warnings = []
        for side in Side:
            symbol = PieceKind.GENERAL.value if side is Side.WHITE else PieceKind.GENERAL.value.lower()
            count = board.count_pieces(side).get(symbol, 0)
            if count == 0:
                warnings.append(f"{side.value}方没有将军")
            elif count > 1:
                warnings.append(f"{side.value}方有{count}个将军，只有第一个会被识别")
        return warnings

    def get_validation_report(self, board: GameBoard) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Args:
            board: 要验证的棋盘

        Returns:
            Dict[str, Any]: 验证报告
        """
        is_valid, errors = self.validate_board_structure(board)
        warnings = self.check_generals(board) if is_valid else []

        return {
            'is_valid': is_valid,
            'errors': errors,
            'warnings': warnings,
            'size': (board.rows, board.cols),
            'piece_counts': {
                side.value: board.count_pieces(side) for side in Side
            },
            'wall_count': int((board.grid == GameBoard.WALL).sum()) if is_valid else 0,
        }
