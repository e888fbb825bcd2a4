"""
Advance Bot 源代码模块

包含子系统：
- advance_engine: Advance对弈引擎
"""

from . import advance_engine

__all__ = [
    "advance_engine",
]
