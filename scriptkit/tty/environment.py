"""
scriptkit/tty/environment.py - 자식 프로세스 환경변수 정책

Executor 생성 시 전달되는 불변 EnvironmentPolicy를 정의합니다.

- inherit_all(): 현재 프로세스 환경 + overrides (기본값)
- sandboxed(): HOME / JAVA_HOME / ANDROID_HOME / FLUTTER_HOME 만 전달하고
  고정된 템플릿으로 PATH를 다시 구성
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# 샌드박스 모드에서 전달되는 변수
INCLUDE_IN_ENV: tuple[str, ...] = ("HOME", "JAVA_HOME", "ANDROID_HOME", "FLUTTER_HOME")

# 샌드박스 모드의 PATH 템플릿 ($VAR 가 정의되지 않은 항목은 제외)
INCLUDE_IN_PATH: tuple[str, ...] = (
    "/usr/local/bin",
    "/usr/bin",
    "/bin",
    "/usr/sbin",
    "/sbin",
    "$JAVA_HOME/bin",
    "$ANDROID_HOME/emulator",
    "$ANDROID_HOME/cmdline-tools/latest/bin",
    "$ANDROID_HOME/platform-tools",
    "$FLUTTER_HOME/bin",
    "$HOME/.cargo/bin",
    "/opt/homebrew/bin",
)

_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

EnvOverlay = Mapping[str, str] | Iterable[tuple[str, str]]


def _freeze(values: EnvOverlay | None) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


def expand_path_template(template: Iterable[str], variables: Mapping[str, str]) -> str:
    """PATH 템플릿 확장

    Args:
        template: "$VAR/..." 형식을 포함할 수 있는 경로 목록
        variables: 치환에 사용할 변수

    Returns:
        os.pathsep 으로 연결된 PATH 문자열
    """
    entries = []
    for entry in template:
        names = _VAR_PATTERN.findall(entry)
        if any(name not in variables for name in names):
            continue
        entries.append(_VAR_PATTERN.sub(lambda m: variables[m.group(1)], entry))
    return os.pathsep.join(entries)


@dataclass(frozen=True)
class EnvironmentPolicy:
    """자식 프로세스 환경 구성 정책 (불변)

    Attributes:
        inherit: True면 현재 프로세스 환경을 그대로 상속
        overrides: 상속 환경 위에 덮어쓸 변수
        include: inherit=False 일 때 전달할 변수 이름
        path_template: inherit=False 일 때 PATH 구성 템플릿
    """

    inherit: bool = True
    overrides: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    include: tuple[str, ...] = INCLUDE_IN_ENV
    path_template: tuple[str, ...] = INCLUDE_IN_PATH

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", _freeze(self.overrides))

    @classmethod
    def inherit_all(cls, overrides: EnvOverlay | None = None) -> EnvironmentPolicy:
        """현재 환경 상속 + overrides"""
        return cls(inherit=True, overrides=_freeze(overrides))

    @classmethod
    def sandboxed(cls, overrides: EnvOverlay | None = None) -> EnvironmentPolicy:
        """허용 목록 기반 환경 (PATH 재구성)"""
        return cls(inherit=False, overrides=_freeze(overrides))

    def build(
        self,
        extra: EnvOverlay | None = None,
        base: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """자식 프로세스에 전달할 환경 생성

        Args:
            extra: 호출 단위로 마지막에 추가 적용할 변수 (ExecuteOptions.env)
            base: 상속 원본 환경 (기본값: os.environ)

        Returns:
            환경변수 딕셔너리
        """
        base = os.environ if base is None else base

        if self.inherit:
            env = dict(base)
            env.update(self.overrides)
        else:
            env = {}
            for name in self.include:
                value = self.overrides.get(name, base.get(name))
                if value is not None:
                    env[name] = value
            env["PATH"] = expand_path_template(self.path_template, env)

        env.update(dict(extra or {}))
        return env
