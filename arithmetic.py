# arithmetic.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

"""연산 테이블: 이항/단항 연산자 → Decimal 함수

누산기 정밀도(MAX_DIGITS + BUFFER 유효숫자, ROUND_HALF_EVEN)의 전용 컨텍스트에서
계산하고, decimal 신호는 여기서 잡아 표시 가능한 값으로 바꾼다.
"""

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    localcontext,
)
from enum import Enum
from typing import Callable, Dict

from calc_config import BUFFER, MAX_DIGITS

ARITHMETIC_CONTEXT = Context(
    prec=MAX_DIGITS + BUFFER,
    rounding=ROUND_HALF_EVEN,
    traps=[DivisionByZero, InvalidOperation, Overflow],
)

NAN = Decimal('NaN')
INFINITY = Decimal('Infinity')

_ONE = Decimal(1)
_HUNDRED = Decimal(100)


class BinaryOp(Enum):
    """대기 연산자. 값은 식 표시줄에 쓰는 기호."""

    ADD = '+'
    SUB = '−'
    MUL = '×'
    DIV = '÷'

    @property
    def glyph(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> 'BinaryOp':
        """키보드/화면 기호를 연산자로 변환. 모르는 기호는 ValueError."""
        if not isinstance(symbol, str):
            raise ValueError('unknown operator: {!r}'.format(symbol))
        try:
            return _SYMBOLS[symbol]
        except KeyError:
            raise ValueError('unknown operator: {!r}'.format(symbol)) from None


_SYMBOLS = {
    '+': BinaryOp.ADD,
    '-': BinaryOp.SUB,
    '−': BinaryOp.SUB,
    '*': BinaryOp.MUL,
    '×': BinaryOp.MUL,
    '/': BinaryOp.DIV,
    '÷': BinaryOp.DIV,
}

GLYPHS = frozenset(op.glyph for op in BinaryOp)


class UnaryOp(Enum):
    RECIPROCAL = '1/x'
    PERCENT = '%'
    SQRT = '√x'
    SQUARE = 'x²'
    NEGATE = '±'


# 필수 연산
def add(a: Decimal, b: Decimal) -> Decimal:
    return a + b


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return a - b


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return a * b


def divide(a: Decimal, b: Decimal) -> Decimal:
    # 0 나누기는 DivisionByZero(0/0은 InvalidOperation) 트랩으로 올라온다
    return a / b


def reciprocal(x: Decimal) -> Decimal:
    return _ONE / x


def percent(x: Decimal) -> Decimal:
    return x / _HUNDRED


def square_root(x: Decimal) -> Decimal:
    return x.sqrt()


def square(x: Decimal) -> Decimal:
    return x * x


def negate(x: Decimal) -> Decimal:
    return -x


BINARY_TABLE: Dict[BinaryOp, Callable[[Decimal, Decimal], Decimal]] = {
    BinaryOp.ADD: add,
    BinaryOp.SUB: subtract,
    BinaryOp.MUL: multiply,
    BinaryOp.DIV: divide,
}

UNARY_TABLE: Dict[UnaryOp, Callable[[Decimal], Decimal]] = {
    UnaryOp.RECIPROCAL: reciprocal,
    UnaryOp.PERCENT: percent,
    UnaryOp.SQRT: square_root,
    UnaryOp.SQUARE: square,
    UnaryOp.NEGATE: negate,
}


def _guarded(func: Callable[..., Decimal], *args: Decimal) -> Decimal:
    with localcontext(ARITHMETIC_CONTEXT):
        try:
            return func(*args)
        except (DivisionByZero, InvalidOperation):
            # 0 나누기, 0의 역수, 음수의 제곱근 → 불확정 값
            return NAN
        except Overflow:
            return INFINITY


def apply_binary(op: BinaryOp, a: Decimal, b: Decimal) -> Decimal:
    return _guarded(BINARY_TABLE[op], a, b)


def apply_unary(op: UnaryOp, x: Decimal) -> Decimal:
    return _guarded(UNARY_TABLE[op], x)
