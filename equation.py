# equation.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

"""식 표시줄(equation) 문자열 조작"""

from arithmetic import GLYPHS, BinaryOp
from calc_config import EQUATION_PRECISION, OUT_OF_MEMORY
from display_format import format_value


def ends_with_operator(equation: str) -> bool:
    return equation[-1:] in GLYPHS


def replace_operator(equation: str, op: BinaryOp) -> str:
    # 마지막 연산자 기호만 교체, 피연산자는 다시 붙이지 않는다
    return equation[:-1] + op.glyph


def snapshot(primary: str) -> str:
    """식 표시줄에 넣을 피연산자. 디스플레이보다 짧은 자릿수로 자른다."""
    return format_value(primary, EQUATION_PRECISION)


def extend(equation: str, operand: str, op: BinaryOp) -> str:
    if equation == OUT_OF_MEMORY:
        equation = ''
    return equation + operand + op.glyph
