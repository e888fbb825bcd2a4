"""
推理接口模块

提供棋盘文件与走法决策之间的回合接口。
"""

from .game_interface import GameInterface, TurnRecord

__all__ = ['GameInterface', 'TurnRecord']
