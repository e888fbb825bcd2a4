"""
Advance Bot

Advance棋盘游戏的对弈机器人：读取棋盘文件，为指定阵营走一步，再写回棋盘文件。
"""

__version__ = "0.1.0"
__author__ = "Advance Bot Team"
__description__ = "Advance对弈机器人 - 规则引擎、将军安全判定和贪心走法选择"

from advance_project.src import advance_engine

__all__ = [
    "advance_engine",
    "__version__",
    "__author__",
    "__description__",
]
