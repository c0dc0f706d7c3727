"""
scriptkit/general/validation.py - 입력값 검증 헬퍼
"""

from __future__ import annotations

import json

from scriptkit.exceptions import ScriptError


class InvalidAccountIdError(ScriptError):
    """AWS 계정 ID 형식 오류"""

    def __init__(self, value: str):
        super().__init__(f"Invalid AWS account ID '{value}': expected 12 digits.")
        self.value = value
        self.details["value"] = value


def is_valid_json(text: str) -> bool:
    """JSON 으로 파싱 가능한지 확인"""
    try:
        json.loads(text)
    except (ValueError, TypeError):
        return False
    return True


def require_aws_account_id(value: str) -> str:
    """12자리 숫자 AWS 계정 ID 검증 (앞뒤 공백 제거 후 반환)"""
    candidate = value.strip()
    if len(candidate) != 12 or not (candidate.isascii() and candidate.isdigit()):
        raise InvalidAccountIdError(value)
    return candidate
