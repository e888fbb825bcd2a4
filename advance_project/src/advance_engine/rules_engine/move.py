"""
走法数据结构

定义走法的表示和坐标记法转换功能。
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Move:
    """
    走法类

    只记录起点和终点，走法效果在执行时由棋盘判定。
    """
    from_pos: Tuple[int, int]  # 起始位置 (行, 列)
    to_pos: Tuple[int, int]    # 目标位置 (行, 列)

    def __post_init__(self):
        """初始化后验证数据有效性"""
        for pos in (self.from_pos, self.to_pos):
            row, col = pos
            if row < 0 or col < 0:
                raise ValueError(f"无效的位置坐标: {pos}")

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，列用字母、行用数字，如 "e6e4"
        """
        from_col = chr(ord('a') + self.from_pos[1])
        to_col = chr(ord('a') + self.to_pos[1])
        return f"{from_col}{self.from_pos[0]}{to_col}{self.to_pos[0]}"

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "e6e4"；行号可以多于一位

        Returns:
            Move: Move对象
        """
        if len(notation) < 4 or not notation[0].isalpha():
            raise ValueError(f"无效的坐标记法: {notation}")

        # 第二个字母把字符串分成两半
        split = next((i for i in range(1, len(notation)) if notation[i].isalpha()), None)
        if split is None:
            raise ValueError(f"无效的坐标记法: {notation}")

        first, second = notation[:split], notation[split:]
        try:
            from_pos = (int(first[1:]), ord(first[0]) - ord('a'))
            to_pos = (int(second[1:]), ord(second[0]) - ord('a'))
        except ValueError:
            raise ValueError(f"无效的坐标记法: {notation}") from None

        return cls(from_pos=from_pos, to_pos=to_pos)

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'from_pos': list(self.from_pos),
            'to_pos': list(self.to_pos),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        """从字典创建Move对象"""
        return cls(
            from_pos=tuple(data['from_pos']),
            to_pos=tuple(data['to_pos'])
        )
