"""
游戏接口

把棋盘文件的读取、走法决策和结果写回串成一个回合。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..config.engine_config import BoardConfig, EngineConfig
from ..rules_engine import BoardValidator, GameBoard, Side
from ..search_algorithm import GreedyMoveSelector, TurnResult
from ..utils.logger import get_logger, performance_logger


@dataclass
class TurnRecord:
    """回合记录"""
    side: Side
    result: TurnResult
    input_path: str
    output_path: str
    board: GameBoard
    time_used: float                   # 用时（秒）
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'side': self.side.value,
            'result': self.result.to_dict(),
            'input_path': self.input_path,
            'output_path': self.output_path,
            'board': self.board.to_lines(),
            'time_used': self.time_used,
            'timestamp': self.timestamp.isoformat(),
        }


class GameInterface:
    """
    游戏接口

    读取失败时不做决策；写入失败时丢弃本回合结果，不重试。
    """

    def __init__(
        self,
        engine_config: Optional[EngineConfig] = None,
        board_config: Optional[BoardConfig] = None,
        selector: Optional[GreedyMoveSelector] = None
    ):
        self.engine_config = engine_config or EngineConfig()
        self.board_config = board_config or BoardConfig()
        self.selector = selector or GreedyMoveSelector()
        self.validator = BoardValidator()
        self.logger = get_logger('advance.GameInterface')

    def load_board(self, input_path: str) -> GameBoard:
        """
        加载棋盘文件

        Raises:
            BoardIOError: 文件无法读取
            MalformedBoardError: 文件内容不是合法棋盘
        """
        board = GameBoard.load_from_file(input_path, encoding=self.board_config.encoding)
        self.logger.info(f"已加载棋盘 {input_path}: {board.rows}x{board.cols}")

        if self.board_config.warn_missing_general:
            for warning in self.validator.check_generals(board):
                self.logger.warning(warning)

        return board

    def save_board(self, board: GameBoard, output_path: str) -> None:
        """
        保存棋盘文件

        Raises:
            BoardIOError: 文件无法写入
        """
        board.save_to_file(output_path, encoding=self.board_config.encoding)
        self.logger.info(f"已写入棋盘 {output_path}")

    def play_turn(self, side: Union[Side, str], input_path: str, output_path: str) -> TurnRecord:
        """
        执行一个完整回合：读棋盘、决策、写棋盘

        Args:
            side: 行棋方
            input_path: 输入棋盘文件
            output_path: 输出棋盘文件

        Returns:
            TurnRecord: 回合记录
        """
        if not isinstance(side, Side):
            side = Side.from_string(side)

        performance_logger.start_timer('play_turn')

        board = self.load_board(input_path)
        result = self.selector.select_and_apply(board, side)
        self.save_board(board, output_path)

        time_used = performance_logger.end_timer('play_turn')
        performance_logger.log_turn(side.value, result.action.value, time_used)

        return TurnRecord(
            side=side,
            result=result,
            input_path=str(input_path),
            output_path=str(output_path),
            board=board,
            time_used=time_used,
        )
