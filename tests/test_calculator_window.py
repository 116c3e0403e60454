"""
Tests for the PyQt5 adapter helpers (no window is shown).
"""
import logging
import os

import pytest

pytest.importorskip('PyQt5.QtWidgets')

from PyQt5.QtCore import QEvent, Qt  # noqa: E402
from PyQt5.QtGui import QKeyEvent  # noqa: E402

from arithmetic import UnaryOp  # noqa: E402
from calc_config import LOGGER_NAME  # noqa: E402
from calculator import Calculator, TokenKind  # noqa: E402
from calculator_window import (  # noqa: E402
    BUTTON_ROWS,
    BUTTON_TOKENS,
    CalculatorWindow,
    parse_args,
    setup_logger,
    token_for_key,
)


class TestButtons:
    """Tests for the button table."""

    def test_every_button_has_token(self):
        for row in BUTTON_ROWS:
            for label in row:
                assert label in BUTTON_TOKENS

    def test_buttons_drive_engine(self):
        engine = Calculator()
        for label in ['1', '2', '×', '3', '=']:
            engine.handle_token(*BUTTON_TOKENS[label])
        assert engine.current_primary_text() == '36.'

    def test_memory_buttons(self):
        engine = Calculator()
        for label in ['8', 'M+', 'C', 'MR']:
            engine.handle_token(*BUTTON_TOKENS[label])
        assert engine.current_primary_text() == '8.'


class TestKeyMapping:
    """Tests for token_for_key."""

    @pytest.mark.parametrize('key, text, expected', [
        (Qt.Key_5, '5', (TokenKind.DIGIT, '5')),
        (Qt.Key_Period, '.', (TokenKind.DIGIT, '.')),
        (Qt.Key_Asterisk, '*', (TokenKind.BINARY_OP, '*')),
        (Qt.Key_Slash, '/', (TokenKind.BINARY_OP, '/')),
        (Qt.Key_Equal, '=', (TokenKind.EQUALS, None)),
        (Qt.Key_Return, '\r', (TokenKind.EQUALS, None)),
        (Qt.Key_Enter, '\r', (TokenKind.EQUALS, None)),
        (Qt.Key_Backspace, '\b', (TokenKind.BACKSPACE, None)),
        (Qt.Key_Escape, '\x1b', (TokenKind.ALL_CLEAR, None)),
        (Qt.Key_Delete, '\x7f', (TokenKind.CLEAR_ENTRY, None)),
        (Qt.Key_Percent, '%', (TokenKind.UNARY_OP, UnaryOp.PERCENT)),
        (Qt.Key_F9, '', (TokenKind.UNARY_OP, UnaryOp.NEGATE)),
    ])
    def test_mapped_keys(self, key, text, expected):
        assert token_for_key(key, text) == expected

    def test_unmapped_key(self):
        assert token_for_key(Qt.Key_A, 'a') is None

    def test_keys_drive_engine(self):
        engine = Calculator()
        for key, text in [(Qt.Key_9, '9'), (Qt.Key_Minus, '-'), (Qt.Key_4, '4'),
                          (Qt.Key_Return, '\r')]:
            engine.handle_token(*token_for_key(key, text))
        assert engine.current_primary_text() == '5.'


class TestSetup:
    """Tests for CLI and logging setup."""

    def test_parse_args_defaults(self):
        args = parse_args([])
        assert args.log is None
        assert args.debug is False

    def test_parse_args_options(self, tmp_path):
        args = parse_args(['--debug', '--log', str(tmp_path / 'calc.log')])
        assert args.debug is True
        assert args.log.endswith('calc.log')

    def test_setup_logger_is_idempotent(self, tmp_path):
        logger = logging.getLogger(LOGGER_NAME)
        saved = list(logger.handlers)
        logger.handlers.clear()
        try:
            first = setup_logger(str(tmp_path / 'calc.log'), logging.DEBUG)
            assert len(first.handlers) == 2
            second = setup_logger()
            assert second is first
            assert len(second.handlers) == 2
            first.info('hello')
            for handler in first.handlers:
                handler.flush()
            assert 'hello' in (tmp_path / 'calc.log').read_text(encoding='utf-8')
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers[:] = saved
            logger.setLevel(logging.NOTSET)


@pytest.fixture(scope='module')
def qapp():
    os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


def _key(key, text):
    return QKeyEvent(QEvent.KeyPress, key, Qt.NoModifier, text)


class TestKeyDebounce:
    """Tests for keyboard debounce in CalculatorWindow."""

    def test_repeated_key_collapses(self, qapp):
        window = CalculatorWindow()
        window.keyPressEvent(_key(Qt.Key_5, '5'))
        window.keyPressEvent(_key(Qt.Key_5, '5'))
        assert window.engine.state.primary == ''
        window._flush_key()
        assert window.engine.state.primary == '5'
        assert window.display.text() == '5.'

    def test_different_key_flushes_waiting_one(self, qapp):
        window = CalculatorWindow()
        window.keyPressEvent(_key(Qt.Key_5, '5'))
        window.keyPressEvent(_key(Qt.Key_6, '6'))
        assert window.engine.state.primary == '5'
        window._flush_key()
        assert window.engine.state.primary == '56'
        assert window.display.text() == '56.'

    def test_flush_without_pending_key(self, qapp):
        window = CalculatorWindow()
        window._flush_key()
        assert window.display.text() == '0.'
        assert window.equation_display.text() == '0.'
