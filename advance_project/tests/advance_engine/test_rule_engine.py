"""
测试RuleEngine类的功能

测试各棋子的走法生成、合法性验证和局面状态等功能。
"""

import pytest

from advance_project.src.advance_engine.rules_engine import GameBoard, Move, RuleEngine, Side


def make_board(placements, rows=9, cols=9):
    """在空棋盘上摆放棋子"""
    board = GameBoard.empty(rows, cols)
    for pos, symbol in placements.items():
        board.grid[pos] = symbol
    return board


class TestRuleEngine:
    """RuleEngine类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.rule_engine = RuleEngine()

    def test_rule_engine_creation(self):
        """测试规则引擎创建"""
        assert self.rule_engine is not None
        assert hasattr(self.rule_engine, 'generate_legal_moves')
        assert hasattr(self.rule_engine, 'is_legal')
        assert self.rule_engine.oracle is self.rule_engine.oracle

    def test_is_legal_basic_rejections(self):
        """测试原地、越界和空起点"""
        board = make_board({(4, 4): 'D'})

        assert not self.rule_engine.is_legal(board, (4, 4), (4, 4))
        assert not self.rule_engine.is_legal(board, (4, 4), (4, 9))
        assert not self.rule_engine.is_legal(board, (4, 4), (-1, 4))
        assert not self.rule_engine.is_legal(board, (0, 0), (0, 1))

    def test_wall_never_moves(self):
        """测试墙没有走法"""
        board = make_board({(4, 4): '#'})

        assert self.rule_engine.candidate_moves(board, (4, 4)) == []
        assert not self.rule_engine.is_legal(board, (4, 4), (4, 5))


class TestZombieMoves:
    """僵尸走法测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_leap_capture(self):
        """测试中间为空时隔一格跳吃"""
        board = make_board({(6, 4): 'Z', (4, 4): 'z'})

        moves = self.rule_engine.candidate_moves(board, (6, 4))
        assert moves == [(5, 4), (4, 4), (5, 3), (5, 5)]

    def test_leap_blocked(self):
        """测试中间被挡住时不能跳吃"""
        board = make_board({(6, 4): 'Z', (5, 4): 'B', (4, 4): 'z'})

        moves = self.rule_engine.candidate_moves(board, (6, 4))
        assert (4, 4) not in moves
        assert (5, 4) not in moves
        assert moves == [(5, 3), (5, 5)]

    def test_leap_requires_enemy(self):
        """测试跳跃只能用于吃子"""
        board = make_board({(6, 4): 'Z'})

        assert not self.rule_engine.is_legal(board, (6, 4), (4, 4))
        assert not self.rule_engine.is_legal(board, (6, 4), (4, 2))

    def test_direction_by_side(self):
        """测试黑方僵尸向行号增大方向前进"""
        board = make_board({(2, 2): 'z', (6, 6): 'Z'})

        assert (3, 2) in self.rule_engine.candidate_moves(board, (2, 2))
        assert not self.rule_engine.is_legal(board, (2, 2), (1, 2))
        assert not self.rule_engine.is_legal(board, (6, 6), (7, 6))

    def test_edge_of_board(self):
        """测试棋盘边缘的僵尸"""
        board = make_board({(0, 4): 'Z'})
        assert self.rule_engine.candidate_moves(board, (0, 4)) == []


class TestOtherPieceMoves:
    """其他棋子走法测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_builder_moves(self):
        """测试工匠八方向一步"""
        board = make_board({(4, 4): 'B', (3, 3): 'D', (5, 5): 'z', (3, 5): '#'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert moves == [(3, 4), (4, 3), (4, 5), (5, 3), (5, 4), (5, 5)]

    def test_miner_moves(self):
        """测试矿工直线移动并可走到墙上"""
        board = make_board({(4, 4): 'M', (4, 6): '#', (2, 4): 'b'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert moves[:2] == [(4, 5), (4, 6)]
        assert (4, 7) not in moves
        assert (2, 4) in moves
        assert (1, 4) not in moves
        assert not self.rule_engine.is_legal(board, (4, 4), (5, 5))

    def test_jester_moves(self):
        """测试小丑的移动、交换和转化"""
        board = make_board({(4, 4): 'J', (4, 5): 'B', (3, 4): 'z', (5, 4): 'g', (3, 3): '#'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert (4, 5) in moves
        assert (3, 4) in moves
        assert (5, 4) not in moves
        assert (3, 3) not in moves

        assert self.rule_engine.is_valid_conversion(board, (4, 4), (3, 4))
        assert not self.rule_engine.is_valid_conversion(board, (4, 4), (5, 4))
        assert not self.rule_engine.is_valid_conversion(board, (4, 4), (4, 5))
        assert self.rule_engine.conversion_targets(board, (4, 4)) == [(3, 4)]

    def test_sentinel_moves(self):
        """测试哨兵日字跳且可越过棋子"""
        board = make_board({
            (4, 4): 'S', (2, 5): 'z', (2, 3): 'B',
            (3, 4): 'B', (4, 5): 'B', (5, 4): 'B', (4, 3): 'B'
        })

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert moves[0] == (2, 5)
        assert (2, 3) not in moves
        assert len(moves) == 7

    def test_catapult_moves(self):
        """测试投石车先单步再轰击"""
        board = make_board({(4, 4): 'C'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert moves[:4] == [(4, 5), (4, 3), (5, 4), (3, 4)]
        assert moves[4:] == [
            (1, 4),
            (2, 2), (2, 4), (2, 6),
            (4, 1), (4, 2), (4, 6), (4, 7),
            (6, 2), (6, 4), (6, 6),
            (7, 4),
        ]

    def test_catapult_blocked_and_occupied(self):
        """测试投石车路径被挡或目标不为空"""
        board = make_board({(4, 4): 'C', (4, 5): '#', (2, 4): 'z'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert (4, 5) not in moves
        assert (4, 6) not in moves
        assert (4, 7) not in moves
        assert (2, 4) not in moves
        assert (1, 4) not in moves

    def test_dragon_moves(self):
        """测试龙沿直线和斜线移动"""
        board = make_board({(0, 0): 'D', (0, 3): 'z', (1, 0): 'b'})

        moves = self.rule_engine.candidate_moves(board, (0, 0))
        assert moves[:3] == [(0, 1), (0, 2), (0, 3)]
        assert (0, 4) not in moves
        assert (1, 0) in moves
        assert (2, 0) not in moves
        assert (8, 8) in moves
        assert not self.rule_engine.is_legal(board, (0, 0), (2, 1))

    def test_dragon_adjacent_capture(self):
        """测试龙可以吃相邻的棋子"""
        board = make_board({(4, 4): 'D', (4, 5): 'z'})
        assert self.rule_engine.is_legal(board, (4, 4), (4, 5))

    def test_general_avoids_danger(self):
        """测试将军不能走进被攻击的格子"""
        board = make_board({(4, 4): 'G', (0, 3): 'd'})

        moves = self.rule_engine.candidate_moves(board, (4, 4))
        assert moves == [(3, 4), (3, 5), (4, 5), (5, 4), (5, 5)]


class TestLegalMoveGeneration:
    """合法走法生成和局面状态测试"""

    def setup_method(self):
        self.rule_engine = RuleEngine()

    def test_generate_legal_moves(self):
        """测试生成全部安全走法"""
        board = make_board({(4, 4): 'G'})

        moves = self.rule_engine.generate_legal_moves(board, Side.WHITE)
        assert len(moves) == 8
        assert all(isinstance(move, Move) for move in moves)
        assert self.rule_engine.generate_legal_moves(board, Side.BLACK) == []

    def test_pinned_piece_excluded(self):
        """测试会暴露将军的走法被排除"""
        board = make_board({(4, 4): 'G', (4, 2): 'B', (4, 0): 'd'})

        moves = self.rule_engine.generate_legal_moves(board, Side.WHITE)
        assert Move((4, 2), (3, 2)) not in moves
        assert Move((4, 2), (4, 1)) in moves

    def test_game_status(self):
        """测试局面状态"""
        board = make_board({(0, 0): 'd', (0, 7): 'G'})

        status = self.rule_engine.get_game_status(board, Side.WHITE)
        assert status['side'] == 'white'
        assert status['general_position'] == (0, 7)
        assert status['in_danger'] is True
        assert status['threat'] == (0, 0)
        assert status['legal_moves_count'] > 0
        assert len(status['legal_moves']) <= 10

    def test_game_status_without_general(self):
        """测试没有将军时的局面状态"""
        board = make_board({(0, 0): 'd'})

        status = self.rule_engine.get_game_status(board, Side.WHITE)
        assert status['general_position'] is None
        assert status['in_danger'] is False
        assert status['legal_moves_count'] == 0
