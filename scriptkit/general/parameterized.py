"""
scriptkit/general/parameterized.py - 필수 {param} 을 가진 문자열 템플릿

설정 파일 등에서 읽은 템플릿이 선언된 파라미터를 정확히 포함하는지
생성 시점에 검증합니다.

Usage:
    BucketName = define_parameterized_string("BucketName", "env", "region")

    template = BucketName("my-app-{env}-{region}")
    template.get(env="staging", region="eu-west-1")  # "my-app-staging-eu-west-1"
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from scriptkit.exceptions import ScriptError

PARAM_PATTERN = re.compile(r"\{(\w+)\}")


class ParameterizedStringError(ScriptError):
    """템플릿 검증 / 치환 실패"""


class ParameterizedString:
    """파라미터 목록(PARAMS)이 고정된 문자열 템플릿

    Raises:
        ParameterizedStringError: 선언된 파라미터가 없거나 선언되지 않은 파라미터가 있는 경우
    """

    PARAMS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, template: str):
        found = PARAM_PATTERN.findall(template)
        missing = [param for param in self.PARAMS if param not in found]
        unknown = sorted({param for param in found if param not in self.PARAMS})

        if missing:
            raise ParameterizedStringError(
                f"Missing placeholder(s) {', '.join('{' + p + '}' for p in missing)} in '{template}'."
            )
        if unknown:
            raise ParameterizedStringError(
                f"Invalid placeholder(s) {', '.join('{' + p + '}' for p in unknown)} in '{template}'."
            )
        self.template = template

    def get(self, **values: Any) -> str:
        """파라미터 치환"""
        missing = [param for param in self.PARAMS if param not in values]
        if missing:
            raise ParameterizedStringError(f"Missing value(s) for {', '.join(missing)}.")
        return PARAM_PATTERN.sub(lambda m: str(values[m.group(1)]), self.template)

    def __str__(self) -> str:
        return self.template

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.template!r})"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.template == other.template  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.template))


def define_parameterized_string(name: str, *params: str) -> type[ParameterizedString]:
    """PARAMS 가 지정된 ParameterizedString 하위 클래스 생성"""
    return type(name, (ParameterizedString,), {"PARAMS": tuple(params)})
