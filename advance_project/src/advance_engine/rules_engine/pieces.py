"""
棋子与阵营定义

定义阵营、棋子种类、由符号构造棋子的工厂方法以及走法效果分类。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.exceptions import InvalidSideError


EMPTY = '.'
WALL = '#'


class Side(Enum):
    """阵营枚举"""
    WHITE = "white"     # 白方，大写字母，向行号减小方向前进
    BLACK = "black"     # 黑方，小写字母，向行号增大方向前进

    @classmethod
    def from_string(cls, value: str) -> 'Side':
        """
        从字符串解析阵营

        Args:
            value: 'white' 或 'black'

        Returns:
            Side: 阵营

        Raises:
            InvalidSideError: 字符串不是合法阵营
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidSideError(value) from None

    @property
    def opponent(self) -> 'Side':
        """对方阵营"""
        return Side.BLACK if self is Side.WHITE else Side.WHITE

    @property
    def forward(self) -> int:
        """前进方向的行增量"""
        return -1 if self is Side.WHITE else 1


class PieceKind(Enum):
    """棋子种类枚举，值为大写符号"""
    ZOMBIE = 'Z'
    BUILDER = 'B'
    MINER = 'M'
    JESTER = 'J'
    SENTINEL = 'S'
    CATAPULT = 'C'
    DRAGON = 'D'
    GENERAL = 'G'


class MoveEffect(Enum):
    """走法在执行时的效果"""
    RELOCATION = "relocation"       # 目标为空，普通移动
    CAPTURE = "capture"             # 目标为敌方棋子，被移除
    CONVERSION = "conversion"       # 小丑把相邻敌子变为己方
    SWAP = "swap"                   # 小丑与己方棋子交换位置
    BOMBARDMENT = "bombardment"     # 投石车远程轰击，自身不移动
    DEMOLITION = "demolition"       # 矿工移动到墙上并拆除墙


@dataclass(frozen=True)
class Piece:
    """
    棋子

    不携带位置信息的值对象，只用于回答"该种类的棋子能怎么走"。
    """
    kind: PieceKind
    side: Side

    @property
    def symbol(self) -> str:
        """棋盘符号：白方大写，黑方小写"""
        letter = self.kind.value
        return letter if self.side is Side.WHITE else letter.lower()

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional['Piece']:
        """
        由棋盘符号创建棋子

        Args:
            symbol: 单个字符

        Returns:
            Optional[Piece]: 棋子；空格或墙返回None

        Raises:
            ValueError: 未知符号
        """
        if symbol in (EMPTY, WALL):
            return None

        try:
            kind = PieceKind(symbol.upper())
        except ValueError:
            raise ValueError(f"未知的棋子符号: {symbol!r}") from None

        side = Side.WHITE if symbol.isupper() else Side.BLACK
        return cls(kind, side)

    def is_enemy(self, symbol: str) -> bool:
        """判断符号是否为敌方棋子"""
        return side_of(symbol) is self.side.opponent

    def is_friendly(self, symbol: str) -> bool:
        """判断符号是否为己方棋子"""
        return side_of(symbol) is self.side

    def __str__(self) -> str:
        return self.symbol


def side_of(symbol: str) -> Optional[Side]:
    """返回符号所属阵营，空格和墙返回None"""
    if symbol.isupper():
        return Side.WHITE
    if symbol.islower():
        return Side.BLACK
    return None


def symbol_for(kind: PieceKind, side: Side) -> str:
    """返回指定种类和阵营的棋盘符号"""
    return Piece(kind, side).symbol


VALID_SYMBOLS = frozenset(
    [EMPTY, WALL] + [k.value for k in PieceKind] + [k.value.lower() for k in PieceKind]
)
