# calculator_window.py
# Python 3.x, PyQt5
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

import sys
import argparse
import logging
from typing import Optional, Tuple

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication,
    QWidget,
    QGridLayout,
    QVBoxLayout,
    QPushButton,
    QLineEdit,
)

from arithmetic import UnaryOp
from calc_config import KEY_DEBOUNCE_MS, LOGGER_NAME
from calculator import Calculator, TokenKind

Token = Tuple[TokenKind, object]

BUTTON_ROWS = [
    ['MC',  'MR', 'M+', 'M−'],
    ['%',   'CE', 'C',  '⌫'],
    ['1/x', 'x²', '√x', '÷'],
    ['7',   '8',  '9',  '×'],
    ['4',   '5',  '6',  '−'],
    ['1',   '2',  '3',  '+'],
    ['±',   '0',  '.',  '='],
]

BUTTON_TOKENS = {
    'MC': (TokenKind.MEMORY_CLEAR, None),
    'MR': (TokenKind.MEMORY_RECALL, None),
    'M+': (TokenKind.MEMORY_ADD, None),
    'M−': (TokenKind.MEMORY_SUBTRACT, None),
    'CE': (TokenKind.CLEAR_ENTRY, None),
    'C': (TokenKind.ALL_CLEAR, None),
    '⌫': (TokenKind.BACKSPACE, None),
    '=': (TokenKind.EQUALS, None),
}
BUTTON_TOKENS.update({op.value: (TokenKind.UNARY_OP, op) for op in UnaryOp})
BUTTON_TOKENS.update({ch: (TokenKind.BINARY_OP, ch) for ch in '+−×÷'})
BUTTON_TOKENS.update({ch: (TokenKind.DIGIT, ch) for ch in '0123456789.'})

# 키보드 문자 → 토큰
KEY_TEXT_TOKENS = {
    '=': (TokenKind.EQUALS, None),
    '%': (TokenKind.UNARY_OP, UnaryOp.PERCENT),
    'r': (TokenKind.UNARY_OP, UnaryOp.RECIPROCAL),
    '@': (TokenKind.UNARY_OP, UnaryOp.SQRT),
    'q': (TokenKind.UNARY_OP, UnaryOp.SQUARE),
}
KEY_TEXT_TOKENS.update({ch: (TokenKind.BINARY_OP, ch) for ch in '+-*/'})
KEY_TEXT_TOKENS.update({ch: (TokenKind.DIGIT, ch) for ch in '0123456789.'})

KEY_CODE_TOKENS = {
    Qt.Key_Return: (TokenKind.EQUALS, None),
    Qt.Key_Enter: (TokenKind.EQUALS, None),
    Qt.Key_Backspace: (TokenKind.BACKSPACE, None),
    Qt.Key_Escape: (TokenKind.ALL_CLEAR, None),
    Qt.Key_Delete: (TokenKind.CLEAR_ENTRY, None),
    Qt.Key_F9: (TokenKind.UNARY_OP, UnaryOp.NEGATE),
}


def token_for_key(key: int, text: str) -> Optional[Token]:
    """Qt 키 코드/문자를 엔진 토큰으로 변환. 해당 없으면 None"""
    if key in KEY_CODE_TOKENS:
        return KEY_CODE_TOKENS[key]
    return KEY_TEXT_TOKENS.get(text)


def setup_logger(log_path: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """콘솔과 (선택) 파일(UTF-8)로 로그를 남기는 로거를 설정한다."""
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 콘솔
    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(level)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    # 파일(UTF-8)
    if log_path:
        fh = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        fh.setLevel(level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


class CalculatorWindow(QWidget):
    """PyQt5 UI: 버튼/키보드 → Calculator 토큰, 두 줄 표시부 갱신"""

    def __init__(self, engine: Optional[Calculator] = None) -> None:
        super().__init__()
        self.engine = engine if engine is not None else Calculator()
        self._pending_key: Optional[Token] = None

        # 키 반복 입력 디바운스
        self._key_timer = QTimer(self)
        self._key_timer.setSingleShot(True)
        self._key_timer.setInterval(KEY_DEBOUNCE_MS)
        self._key_timer.timeout.connect(self._flush_key)

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        self.setWindowTitle('Calculator')
        root = QVBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)
        self.setLayout(root)

        self.equation_display = QLineEdit()
        self.equation_display.setReadOnly(True)
        self.equation_display.setAlignment(Qt.AlignRight)
        self.equation_display.setFocusPolicy(Qt.NoFocus)
        root.addWidget(self.equation_display)

        self.display = QLineEdit()
        self.display.setReadOnly(True)
        self.display.setAlignment(Qt.AlignRight)
        self.display.setFocusPolicy(Qt.NoFocus)
        font = QFont(self.display.font())
        font.setPointSize(24)
        self.display.setFont(font)
        root.addWidget(self.display)

        grid = QGridLayout()
        grid.setSpacing(6)
        root.addLayout(grid)

        for r, row in enumerate(BUTTON_ROWS):
            for c, label in enumerate(row):
                btn = QPushButton(label)
                btn.setMinimumHeight(52)
                btn.setCursor(Qt.PointingHandCursor)
                # 키 입력은 창에서 받도록 버튼은 포커스를 갖지 않는다
                btn.setFocusPolicy(Qt.NoFocus)
                btn.clicked.connect(lambda checked=False, ch=label: self.on_button(ch))
                grid.addWidget(btn, r, c)

        self.resize(420, 620)

    def on_button(self, label: str) -> None:
        kind, payload = BUTTON_TOKENS[label]
        self.dispatch(kind, payload)

    def dispatch(self, kind: TokenKind, payload: object = None) -> None:
        self.engine.handle_token(kind, payload)
        self.refresh()

    def refresh(self) -> None:
        self.equation_display.setText(self.engine.current_equation_text())
        self.display.setText(self.engine.current_primary_text())

    def keyPressEvent(self, event) -> None:
        token = token_for_key(event.key(), event.text())
        if token is None:
            super().keyPressEvent(event)
            return
        # 다른 키가 대기 중이면 먼저 보내고, 같은 키의 반복은 하나로 합친다
        if self._pending_key is not None and self._pending_key != token:
            self._flush_key()
        self._pending_key = token
        self._key_timer.start()

    def _flush_key(self) -> None:
        self._key_timer.stop()
        if self._pending_key is None:
            return
        kind, payload = self._pending_key
        self._pending_key = None
        self.dispatch(kind, payload)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='한 번에 하나의 대기 연산을 가지는 Decimal 계산기')
    parser.add_argument('--log', default=None,
                        help='로그 파일 경로(기본값: 콘솔만)')
    parser.add_argument('--debug', action='store_true',
                        help='토큰 단위 DEBUG 로그 출력')
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logger = setup_logger(args.log, logging.DEBUG if args.debug else logging.INFO)
    logger.info('[시작] calculator')

    app = QApplication(sys.argv[:1])
    w = CalculatorWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
