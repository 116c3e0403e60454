# calc_config.py
# Python 3.x
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

MAX_DIGITS = 20  # 디스플레이 자릿수 제한(D)
BUFFER = 3  # 누산기가 디스플레이보다 더 가지는 소수 자릿수
EQUATION_PRECISION = 3  # 식 표시줄 스냅샷의 소수 자릿수(E)

# 오류 표시(센티널)
OUT_OF_MEMORY = 'Out of memory'
NOT_A_NUMBER = 'Not a number'

EMPTY_DISPLAY = '0.'

# 어댑터 설정
KEY_DEBOUNCE_MS = 40  # 키 반복 입력 디바운스(ms)
LOGGER_NAME = 'calculator'
