"""
走法选择模块

包含每回合的贪心走法选择器。
"""

from .greedy_selector import GreedyMoveSelector, TurnResult, SelectionAction

__all__ = ['GreedyMoveSelector', 'TurnResult', 'SelectionAction']
