# calculator.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

import logging
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

import equation
from arithmetic import BinaryOp, UnaryOp, apply_binary, apply_unary
from calc_config import EMPTY_DISPLAY, MAX_DIGITS, NOT_A_NUMBER, OUT_OF_MEMORY
from display_format import (
    SENTINELS,
    count_digits,
    format_value,
    to_decimal,
    to_literal,
)

logger = logging.getLogger(__name__)

DIGITS = frozenset('0123456789.')


class TokenKind(Enum):
    DIGIT = 'digit'
    BINARY_OP = 'binary_op'
    UNARY_OP = 'unary_op'
    EQUALS = 'equals'
    ALL_CLEAR = 'all_clear'
    CLEAR_ENTRY = 'clear_entry'
    BACKSPACE = 'backspace'
    MEMORY_CLEAR = 'memory_clear'
    MEMORY_RECALL = 'memory_recall'
    MEMORY_ADD = 'memory_add'
    MEMORY_SUBTRACT = 'memory_subtract'


class CalculatorState:
    """엔진이 소유하는 상태. 어댑터는 읽기만 한다."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.primary = ''  # 입력 중인 숫자 또는 직전 결과(포맷 전)
        self.partial = Decimal(0)  # 대기 연산의 왼쪽 피연산자
        self.memory = Decimal(0)
        self.equation = ''  # 식 표시줄(포맷된 스냅샷만)
        self.pending_operation: Optional[BinaryOp] = None
        self.edit_mode = True  # False면 다음 숫자 입력이 새 값을 시작


class Calculator:
    """연산 엔진: 토큰 처리와 두 표시 문자열"""

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        self.state = state if state is not None else CalculatorState()
        self._handlers = {
            TokenKind.DIGIT: self.input_digit,
            TokenKind.BINARY_OP: self.set_operator,
            TokenKind.UNARY_OP: self.unary_operation,
            TokenKind.EQUALS: self.equal,
            TokenKind.ALL_CLEAR: self.all_clear,
            TokenKind.CLEAR_ENTRY: self.clear_entry,
            TokenKind.BACKSPACE: self.backspace,
            TokenKind.MEMORY_CLEAR: self.memory_clear,
            TokenKind.MEMORY_RECALL: self.memory_recall,
            TokenKind.MEMORY_ADD: self.memory_add,
            TokenKind.MEMORY_SUBTRACT: self.memory_subtract,
        }

    # 어댑터 API
    def handle_token(self, kind: TokenKind,
                     payload: Union[str, BinaryOp, UnaryOp, None] = None) -> None:
        handler = self._handlers.get(kind)
        if handler is None:
            logger.warning('unknown token kind: %r', kind)
            return
        logger.debug('token %s %r', kind.name, payload)

        if kind is TokenKind.DIGIT:
            if not isinstance(payload, str) or payload not in DIGITS:
                logger.warning('ignored digit payload: %r', payload)
                return
            handler(payload)
        elif kind is TokenKind.BINARY_OP:
            try:
                op = payload if isinstance(payload, BinaryOp) else BinaryOp.from_symbol(payload)
            except ValueError:
                logger.warning('ignored operator payload: %r', payload)
                return
            handler(op)
        elif kind is TokenKind.UNARY_OP:
            try:
                op = UnaryOp(payload)
            except ValueError:
                logger.warning('ignored unary payload: %r', payload)
                return
            handler(op)
        else:
            handler()

    def current_primary_text(self) -> str:
        return format_value(self.state.primary, MAX_DIGITS)

    def current_equation_text(self) -> str:
        return self.state.equation or EMPTY_DISPLAY

    # 입력
    def input_digit(self, d: str) -> None:
        s = self.state
        if not s.edit_mode or s.primary in SENTINELS:
            # 결과/오류 직후 새 입력이면 새 값 시작
            s.primary = ''
            if s.equation == OUT_OF_MEMORY:
                s.equation = ''
            s.edit_mode = True

        if d == '.':
            if '.' in s.primary:
                return
            s.primary = (s.primary or '0') + '.'
            return
        if count_digits(s.primary) >= MAX_DIGITS:
            return
        if s.primary == '' and d == '0':
            return
        s.primary += d

    def set_operator(self, op: BinaryOp) -> None:
        s = self.state
        if s.primary == '' and equation.ends_with_operator(s.equation):
            # 피연산자 없이 연산자만 바꾸는 경우
            s.equation = equation.replace_operator(s.equation, op)
            s.pending_operation = op
            return

        if s.pending_operation is not None:
            # 미처리 연산을 먼저 계산하고 이어간다
            self._resolve()

        operand = equation.snapshot(s.primary)
        if operand == OUT_OF_MEMORY:
            self._set_overflow()
            s.equation = OUT_OF_MEMORY
            return

        s.partial = to_decimal(s.primary)
        s.equation = equation.extend(s.equation, operand, op)
        s.primary = ''
        s.pending_operation = op
        s.edit_mode = True

    def unary_operation(self, op: UnaryOp) -> None:
        s = self.state
        if s.primary == '' or s.primary in SENTINELS:
            return
        value = apply_unary(op, to_decimal(s.primary))
        s.primary = format_value(to_literal(value), MAX_DIGITS)
        if s.primary == OUT_OF_MEMORY:
            self._set_overflow()
        elif s.primary == NOT_A_NUMBER:
            logger.warning('indeterminate result from %s', op.name)

    def equal(self) -> None:
        if self.state.pending_operation is None:
            return
        self._resolve()

    # 지우기
    def all_clear(self) -> None:
        # 메모리 레지스터는 유지
        memory = self.state.memory
        self.state.reset()
        self.state.memory = memory

    def clear_entry(self) -> None:
        s = self.state
        s.primary = ''
        if s.equation == OUT_OF_MEMORY:
            s.equation = ''

    def backspace(self) -> None:
        s = self.state
        if not s.edit_mode or s.primary in SENTINELS:
            # 결과 직후의 첫 backspace는 한 글자가 아니라 전체를 지운다
            s.primary = ''
            s.edit_mode = True
            return
        s.primary = s.primary[:-1]
        if s.primary in ('0', '-', '-0'):
            s.primary = ''

    # 메모리
    def memory_clear(self) -> None:
        self.state.memory = Decimal(0)

    def memory_recall(self) -> None:
        s = self.state
        s.primary = format_value(to_literal(s.memory), MAX_DIGITS)
        s.edit_mode = True
        if s.primary == OUT_OF_MEMORY:
            self._set_overflow()

    def memory_add(self) -> None:
        self._update_memory(BinaryOp.ADD)

    def memory_subtract(self) -> None:
        self._update_memory(BinaryOp.SUB)

    # 내부 유틸
    def _update_memory(self, op: BinaryOp) -> None:
        s = self.state
        if s.primary == OUT_OF_MEMORY:
            return
        value = to_decimal(format_value(s.primary, MAX_DIGITS))
        s.memory = apply_binary(op, s.memory, value)
        s.edit_mode = False

    def _resolve(self) -> None:
        s = self.state
        op = s.pending_operation
        s.pending_operation = None
        s.equation = ''
        s.edit_mode = False
        if s.primary == OUT_OF_MEMORY:
            return

        s.partial = apply_binary(op, s.partial, to_decimal(s.primary))
        s.primary = to_literal(s.partial)
        if format_value(s.primary, MAX_DIGITS) == OUT_OF_MEMORY:
            self._set_overflow()
        elif s.primary == NOT_A_NUMBER:
            logger.warning('indeterminate result from %s', op.name)

    def _set_overflow(self) -> None:
        s = self.state
        logger.warning('display overflow, entry frozen until clear')
        s.primary = OUT_OF_MEMORY
        s.equation = ''
        s.pending_operation = None
        s.edit_mode = False
