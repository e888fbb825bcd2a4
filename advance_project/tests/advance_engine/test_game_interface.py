"""
游戏接口测试

测试棋盘文件读写与一回合决策的串联。
"""

import logging

import pytest

from advance_project.src.advance_engine.config import BoardConfig
from advance_project.src.advance_engine.inference_interface import GameInterface, TurnRecord
from advance_project.src.advance_engine.rules_engine import Move, Side
from advance_project.src.advance_engine.search_algorithm import SelectionAction
from advance_project.src.advance_engine.utils.exceptions import (
    BoardIOError, InvalidSideError, MalformedBoardError
)

# 白方将军受黑方矿工威胁，白方龙可以吃掉矿工
THREATENED_BOARD = [
    "D........",
    ".........",
    ".........",
    ".........",
    "m...G....",
    ".........",
    ".........",
    ".........",
    "........g",
]


def write_board(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding='utf-8')


class TestGameInterface:
    """GameInterface类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.interface = GameInterface()

    def test_play_turn(self, tmp_path):
        """测试完整回合"""
        input_path = tmp_path / "in.txt"
        output_path = tmp_path / "out.txt"
        write_board(input_path, THREATENED_BOARD)

        record = self.interface.play_turn('white', str(input_path), str(output_path))

        assert isinstance(record, TurnRecord)
        assert record.side is Side.WHITE
        assert record.result.action is SelectionAction.CAPTURE_THREAT
        assert record.result.move == Move((0, 0), (4, 0))
        assert record.time_used >= 0

        lines = output_path.read_text(encoding='utf-8').splitlines()
        assert lines[0] == "........."
        assert lines[4] == "D...G...."
        assert lines[8] == "........g"

        # 输入文件保持不变
        assert input_path.read_text(encoding='utf-8').splitlines() == THREATENED_BOARD

    def test_same_input_and_output(self, tmp_path):
        """测试输入和输出为同一文件"""
        board_path = tmp_path / "board.txt"
        write_board(board_path, THREATENED_BOARD)

        self.interface.play_turn(Side.WHITE, str(board_path), str(board_path))

        lines = board_path.read_text(encoding='utf-8').splitlines()
        assert lines[4] == "D...G...."

    def test_no_move_writes_unchanged_board(self, tmp_path):
        """测试没有走法时原样写回"""
        input_path = tmp_path / "in.txt"
        output_path = tmp_path / "out.txt"
        write_board(input_path, ["Z..", "...", "..g"])

        record = self.interface.play_turn('white', str(input_path), str(output_path))

        assert record.result.action is SelectionAction.NO_MOVE
        assert output_path.read_text(encoding='utf-8') == "Z..\n...\n..g\n"

    def test_invalid_side_checked_first(self, tmp_path):
        """测试阵营非法时不读取文件"""
        with pytest.raises(InvalidSideError):
            self.interface.play_turn('red', str(tmp_path / "missing.txt"), str(tmp_path / "out.txt"))

        assert not (tmp_path / "out.txt").exists()

    def test_missing_input(self, tmp_path):
        """测试输入文件不存在"""
        output_path = tmp_path / "out.txt"

        with pytest.raises(BoardIOError):
            self.interface.play_turn('white', str(tmp_path / "missing.txt"), str(output_path))

        assert not output_path.exists()

    def test_malformed_input(self, tmp_path):
        """测试输入文件格式错误"""
        input_path = tmp_path / "in.txt"
        output_path = tmp_path / "out.txt"
        write_board(input_path, ["G..", "..", "..g"])

        with pytest.raises(MalformedBoardError):
            self.interface.play_turn('white', str(input_path), str(output_path))

        assert not output_path.exists()

    def test_unwritable_output(self, tmp_path):
        """测试输出文件无法写入"""
        input_path = tmp_path / "in.txt"
        write_board(input_path, THREATENED_BOARD)

        with pytest.raises(BoardIOError):
            self.interface.play_turn('white', str(input_path), str(tmp_path))

    def test_missing_general_warning(self, tmp_path, caplog):
        """测试缺少将军时记录警告"""
        input_path = tmp_path / "in.txt"
        write_board(input_path, ["B..", "...", "..."])

        with caplog.at_level(logging.WARNING, logger='advance'):
            self.interface.play_turn('white', str(input_path), str(tmp_path / "out.txt"))

        assert any("没有将军" in record.getMessage() for record in caplog.records)

    def test_missing_general_warning_disabled(self, tmp_path, caplog):
        """测试关闭缺少将军的警告"""
        interface = GameInterface(board_config=BoardConfig(warn_missing_general=False))
        input_path = tmp_path / "in.txt"
        write_board(input_path, ["B..", "...", "..g"])

        with caplog.at_level(logging.WARNING, logger='advance.GameInterface'):
            interface.play_turn('white', str(input_path), str(tmp_path / "out.txt"))

        assert not any(
            record.name == 'advance.GameInterface' for record in caplog.records
        )

    def test_turn_record_to_dict(self, tmp_path):
        """测试回合记录转换为字典"""
        input_path = tmp_path / "in.txt"
        output_path = tmp_path / "out.txt"
        write_board(input_path, THREATENED_BOARD)

        record = self.interface.play_turn('white', str(input_path), str(output_path))
        data = record.to_dict()

        assert data['side'] == 'white'
        assert data['result']['action'] == 'capture_threat'
        assert data['board'][4] == "D...G...."
        assert data['input_path'] == str(input_path)
        assert 'timestamp' in data
        assert 'time_used' in data
