# display_format.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

"""표시 문자열 포맷터

누산기(MAX_DIGITS + BUFFER 자리)에서 나온 값을 고정 폭 디스플레이에 맞게 자른다.
반올림 결과의 소수부 끝이 BUFFER개 이상의 0 또는 9로 끝나면 누산기의 잔여 오차로
보고, 원래 값을 잘라낸(또는 잘라낸 뒤 한 단위 올린) 값을 대신 쓴다.
"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN, localcontext

from arithmetic import ARITHMETIC_CONTEXT, NAN
from calc_config import (
    BUFFER,
    EMPTY_DISPLAY,
    MAX_DIGITS,
    NOT_A_NUMBER,
    OUT_OF_MEMORY,
)

SENTINELS = (OUT_OF_MEMORY, NOT_A_NUMBER)


def to_decimal(text: str) -> Decimal:
    # 입력 중인 문자열에서 Decimal로, 빈 문자열과 '.' 처리
    if text in ('', '.', '-', '-.'):
        return Decimal(0)
    if text == NOT_A_NUMBER:
        return NAN
    return Decimal(text)


def to_literal(value: Decimal) -> str:
    """누산기 값 → MAX_DIGITS + BUFFER 자리로 반올림한 리터럴 문자열"""
    if value.is_nan():
        return NOT_A_NUMBER
    if value.is_infinite() or _integer_digits(value) > MAX_DIGITS:
        return OUT_OF_MEMORY

    places = MAX_DIGITS + BUFFER
    with localcontext(ARITHMETIC_CONTEXT) as ctx:
        ctx.prec = MAX_DIGITS + places + 1
        value = value.quantize(_quantum(places), rounding=ROUND_HALF_EVEN)

    if value.is_zero():
        return '0'
    text = format(value, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_value(literal: str, precision: int) -> str:
    """리터럴을 precision 소수 자리 기준의 표시 문자열로 변환한다.

    결과는 항상 '.'을 포함하고(정수면 끝에 '.'), 숫자 개수가 MAX_DIGITS를
    넘으면 OUT_OF_MEMORY를 돌려준다. 사용자가 입력한 소수부 끝의 0은 유지한다.
    """
    if literal in SENTINELS:
        return literal
    if literal in ('', '.', '0.'):
        return EMPTY_DISPLAY

    value = to_decimal(literal)
    if value.is_nan():
        return NOT_A_NUMBER
    if value.is_infinite():
        return OUT_OF_MEMORY

    int_digits = _integer_digits(value)
    if int_digits > MAX_DIGITS:
        return OUT_OF_MEMORY
    places = max(min(precision, MAX_DIGITS - int_digits), 0)

    with localcontext(ARITHMETIC_CONTEXT) as ctx:
        ctx.prec = MAX_DIGITS + places + BUFFER
        quantum = _quantum(places)
        rounded = value.quantize(quantum, rounding=ROUND_HALF_EVEN)
        exact = rounded == value
        if not exact:
            truncated = value.quantize(quantum, rounding=ROUND_DOWN)
            fraction = format(rounded, 'f').partition('.')[2]
            if fraction.endswith('0' * BUFFER):
                rounded = truncated
            elif fraction.endswith('9' * BUFFER):
                rounded = truncated + quantum.copy_sign(value)

    if rounded.is_zero():
        rounded = rounded.copy_abs()
    integer, _, fraction = format(rounded, 'f').partition('.')
    fraction = fraction.rstrip('0')
    if exact:
        typed = literal.partition('.')[2]
        fraction = fraction.ljust(min(len(typed), places), '0')

    text = integer + '.' + fraction
    if count_digits(text) > MAX_DIGITS:
        return OUT_OF_MEMORY
    return text


def count_digits(text: str) -> int:
    return sum(ch.isdigit() for ch in text)


# 내부 유틸
def _integer_digits(value: Decimal) -> int:
    # 0.x의 앞자리 0도 한 자리로 센다
    if value.is_zero():
        return 1
    return max(value.adjusted() + 1, 1)


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)
