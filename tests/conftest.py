"""
Pytest configuration and fixtures.
"""
import os
import sys

import pytest

# 저장소 루트의 모듈을 import할 수 있도록 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from arithmetic import UnaryOp  # noqa: E402
from calculator import Calculator, TokenKind  # noqa: E402

KEYS = {
    '=': (TokenKind.EQUALS, None),
    'AC': (TokenKind.ALL_CLEAR, None),
    'CE': (TokenKind.CLEAR_ENTRY, None),
    'BS': (TokenKind.BACKSPACE, None),
    'MC': (TokenKind.MEMORY_CLEAR, None),
    'MR': (TokenKind.MEMORY_RECALL, None),
    'M+': (TokenKind.MEMORY_ADD, None),
    'M-': (TokenKind.MEMORY_SUBTRACT, None),
    '1/x': (TokenKind.UNARY_OP, UnaryOp.RECIPROCAL),
    '%': (TokenKind.UNARY_OP, UnaryOp.PERCENT),
    'sqrt': (TokenKind.UNARY_OP, UnaryOp.SQRT),
    'sqr': (TokenKind.UNARY_OP, UnaryOp.SQUARE),
    'neg': (TokenKind.UNARY_OP, UnaryOp.NEGATE),
}
KEYS.update({ch: (TokenKind.BINARY_OP, ch) for ch in '+-*/'})


@pytest.fixture
def calc():
    return Calculator()


@pytest.fixture
def press(calc):
    """'123'처럼 숫자 문자열은 한 글자씩 누른다."""
    def _press(*keys):
        for key in keys:
            if key in KEYS:
                calc.handle_token(*KEYS[key])
            else:
                for ch in key:
                    calc.handle_token(TokenKind.DIGIT, ch)
        return calc
    return _press
