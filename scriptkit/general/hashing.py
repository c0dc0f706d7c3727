"""
scriptkit/general/hashing.py - 문자열 기반 결정적 숫자 생성

같은 입력이면 실행 환경과 관계없이 항상 같은 값을 반환합니다.
(예: 프로젝트 이름으로 에뮬레이터 포트 5600~5800 할당)
"""

from __future__ import annotations

import hashlib


def deterministic_number_from_string(text: str, min_value: int, max_value: int) -> int:
    """text 로부터 [min_value, max_value] 범위의 정수 생성

    Raises:
        ValueError: min_value > max_value
    """
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) must not exceed max_value ({max_value})")

    digest = hashlib.sha256(text.encode("utf-8")).digest()
    number = int.from_bytes(digest[:8], "big")
    return min_value + number % (max_value - min_value + 1)
