"""
测试SafetyOracle类的功能

测试将军危险判定、威胁来源识别以及走法和建墙的模拟。
"""

from advance_project.src.advance_engine.rules_engine import GameBoard, PieceKind, RuleEngine, SafetyOracle, Side


def make_board(placements, rows=9, cols=9):
    """在空棋盘上摆放棋子"""
    board = GameBoard.empty(rows, cols)
    for pos, symbol in placements.items():
        board.grid[pos] = symbol
    return board


class TestDangerDetection:
    """危险判定测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.oracle = SafetyOracle(RuleEngine())

    def test_dragon_threat(self):
        """测试龙沿整行攻击将军"""
        board = make_board({(0, 0): 'd', (0, 7): 'G'})

        assert self.oracle.is_in_danger(board, Side.WHITE, (0, 7))
        assert self.oracle.identify_threat(board, Side.WHITE, (0, 7)) == (0, 0)

    def test_wall_blocks_threat(self):
        """测试墙挡住威胁"""
        board = make_board({(0, 0): 'd', (0, 3): '#', (0, 7): 'G'})

        assert not self.oracle.is_in_danger(board, Side.WHITE, (0, 7))
        assert self.oracle.identify_threat(board, Side.WHITE, (0, 7)) is None

    def test_scan_order_by_kind(self):
        """测试先按棋子种类再按行优先顺序识别威胁"""
        board = make_board({(3, 3): 'z', (8, 4): 'd', (4, 4): 'G'})
        assert self.oracle.identify_threat(board, Side.WHITE, (4, 4)) == (8, 4)

        board = make_board({(8, 4): 'd', (0, 4): 'd', (4, 4): 'G'})
        assert self.oracle.identify_threat(board, Side.WHITE, (4, 4)) == (0, 4)

    def test_enemy_general_not_a_threat(self):
        """测试对方将军不参与威胁扫描"""
        board = make_board({(3, 3): 'g', (4, 4): 'G'})
        assert not self.oracle.is_in_danger(board, Side.WHITE, (4, 4))

    def test_catapult_not_a_threat(self):
        """测试投石车不能轰击有棋子的格子"""
        board = make_board({(4, 2): 'c', (4, 4): 'G'})
        assert not self.oracle.is_in_danger(board, Side.WHITE, (4, 4))

    def test_clone_gives_same_result(self):
        """测试克隆棋盘上的危险判定结果不变"""
        boards = [
            make_board({(0, 0): 'd', (0, 7): 'G'}),
            make_board({(0, 0): 'd', (0, 3): '#', (0, 7): 'G'}),
            make_board({(6, 5): 'z', (7, 4): 'G', (2, 2): 's'}),
        ]

        for board in boards:
            pos = board.find(PieceKind.GENERAL, Side.WHITE)
            clone = board.clone()
            assert (self.oracle.is_in_danger(board, Side.WHITE, pos) ==
                    self.oracle.is_in_danger(clone, Side.WHITE, pos))
            assert (self.oracle.identify_threat(board, Side.WHITE, pos) ==
                    self.oracle.identify_threat(clone, Side.WHITE, pos))

    def test_black_general(self):
        """测试黑方将军受到白方僵尸威胁"""
        board = make_board({(5, 4): 'Z', (4, 3): 'g'})

        assert self.oracle.is_in_danger(board, Side.BLACK, (4, 3))
        assert self.oracle.identify_threat(board, Side.BLACK, (4, 3)) == (5, 4)


class TestMoveSimulation:
    """走法模拟测试"""

    def setup_method(self):
        self.oracle = SafetyOracle(RuleEngine())

    def test_danger_after_general_move(self):
        """测试将军走后的安全性"""
        board = make_board({(4, 4): 'G', (0, 3): 'd'})

        assert self.oracle.danger_after_move(board, (4, 4), (4, 3), Side.WHITE)
        assert not self.oracle.danger_after_move(board, (4, 4), (4, 5), Side.WHITE)

    def test_danger_after_exposing_move(self):
        """测试挡子离开后暴露将军"""
        board = make_board({(4, 4): 'G', (4, 2): 'B', (4, 0): 'd'})

        assert self.oracle.danger_after_move(board, (4, 2), (3, 2), Side.WHITE)
        assert not self.oracle.danger_after_move(board, (4, 2), (4, 1), Side.WHITE)

    def test_simulation_does_not_mutate(self):
        """测试模拟不修改原棋盘"""
        board = make_board({(4, 4): 'G', (4, 2): 'B', (4, 0): 'd'})
        snapshot = board.clone()

        self.oracle.danger_after_move(board, (4, 2), (3, 2), Side.WHITE)
        self.oracle.danger_after_move(board, (4, 4), (3, 3), Side.WHITE)

        assert board == snapshot

    def test_no_general(self):
        """测试没有将军时不判定为危险"""
        board = make_board({(4, 2): 'B', (4, 0): 'd'})
        assert not self.oracle.danger_after_move(board, (4, 2), (3, 2), Side.WHITE)


class TestProtection:
    """护卫和建墙测试"""

    def setup_method(self):
        self.oracle = SafetyOracle(RuleEngine())

    def test_would_be_protected(self):
        """测试哨兵护卫范围为上下左右一格"""
        assert self.oracle.would_be_protected((4, 5), (4, 4))
        assert self.oracle.would_be_protected((3, 4), (4, 4))
        assert not self.oracle.would_be_protected((5, 5), (4, 4))
        assert not self.oracle.would_be_protected((4, 4), (4, 4))
        assert not self.oracle.would_be_protected((4, 6), (4, 4))

    def test_protected_after_wall(self):
        """测试建墙后将军是否安全"""
        board = make_board({(4, 4): 'G', (4, 0): 'd'})

        assert self.oracle.protected_after_wall(board, (4, 3), (4, 4), Side.WHITE)
        assert not self.oracle.protected_after_wall(board, (3, 3), (4, 4), Side.WHITE)

        # 模拟建墙不修改原棋盘
        assert board.is_empty((4, 3))
        assert board.is_empty((3, 3))
