"""
scriptkit/tty/preferences.py - 사용자 설정 파일 관리

YAML 파일에 스크립트별 설정과 환경변수 오버라이드를 저장합니다.

파일 형식:
    env:
      JAVA_HOME: /opt/java
    scripts:
      deploy:
        last_env: staging

파일 내용이 "redirect: <경로>" 로 시작하면 해당 경로의 파일을 대신 사용합니다.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import questionary
import yaml

from scriptkit.config import get_preferences_path, settings
from scriptkit.exceptions import FileSystemError, InvalidPreferencesFileError, UserCancelledError

logger = logging.getLogger(__name__)

# redirect 최대 단계 (순환 참조 방지)
MAX_REDIRECTS = 8


def resolve_preferences_file(path: str | os.PathLike[str]) -> Path:
    """redirect 를 따라가 실제 설정 파일 경로를 반환

    Raises:
        InvalidPreferencesFileError: 읽기 실패 또는 redirect 순환
    """
    current = Path(path).expanduser()
    for _ in range(MAX_REDIRECTS):
        if not current.is_file():
            return current
        try:
            content = current.read_text(encoding="utf-8")
        except OSError as e:
            raise InvalidPreferencesFileError(str(current), e) from e

        stripped = content.lstrip()
        if not stripped.startswith(settings.PREFERENCES_REDIRECT_PREFIX):
            return current

        rest = stripped[len(settings.PREFERENCES_REDIRECT_PREFIX) :].strip()
        if not rest:
            raise InvalidPreferencesFileError(str(current), ValueError("empty redirect target"))

        target = rest.splitlines()[0].strip()
        logger.debug("preferences redirect: %s -> %s", current, target)
        current = Path(target).expanduser()

    raise InvalidPreferencesFileError(str(path), ValueError("too many redirects"))


class UserPreferences:
    """스크립트별 사용자 설정

    Args:
        script_name: 설정 범위가 되는 스크립트 이름
        path: 설정 파일 경로 (기본값: SCRIPTKIT_PREFERENCES 또는 기본 경로)
    """

    def __init__(self, script_name: str, path: str | os.PathLike[str] | None = None):
        self.script_name = script_name
        self.requested_path = Path(path).expanduser() if path else get_preferences_path()
        self.path = resolve_preferences_file(self.requested_path)
        self.env: dict[str, str] = {}
        self.scripts: dict[str, dict[str, str]] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise InvalidPreferencesFileError(str(self.path), e) from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise InvalidPreferencesFileError(str(self.path), ValueError("top level must be a mapping"))

        env = data.get("env") or {}
        scripts = data.get("scripts") or {}
        if not isinstance(env, dict) or not isinstance(scripts, dict):
            raise InvalidPreferencesFileError(str(self.path), ValueError("'env' and 'scripts' must be mappings"))

        self.env = {str(key): str(value) for key, value in env.items()}
        for name, values in scripts.items():
            if not isinstance(values, dict):
                raise InvalidPreferencesFileError(str(self.path), ValueError(f"scripts.{name} must be a mapping"))
            self.scripts[str(name)] = {str(key): str(value) for key, value in values.items()}

    def _save(self) -> None:
        data: dict[str, Any] = {"env": self.env, "scripts": self.scripts}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(data, sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise FileSystemError(f"Failed to write preferences file '{self.path}'.", str(self.path), e) from e

    # =========================================================================
    # 조회 / 저장
    # =========================================================================

    def get_pref(self, key: str, default: str | None = None) -> str | None:
        """현재 스크립트 범위의 설정값 조회"""
        return self.scripts.get(self.script_name, {}).get(key, default)

    def set_pref(self, key: str, value: str | None) -> None:
        """설정값 저장 (None 이면 삭제) 후 파일에 기록"""
        values = self.scripts.setdefault(self.script_name, {})
        if value is None:
            values.pop(key, None)
            if not values:
                del self.scripts[self.script_name]
        else:
            values[key] = value
        self._save()

    async def ask_pref(self, key: str, prompt: str) -> str | None:
        """저장된 값을 기본값으로 보여주며 사용자에게 입력받음

        빈 입력이면 저장된 값을 그대로 반환하고, 새 값은 저장 후 반환합니다.

        Raises:
            UserCancelledError: 프롬프트 취소 (Ctrl+C)
        """
        current = self.get_pref(key)
        message = f"{prompt} [{current}]:" if current else f"{prompt}:"

        answer = await questionary.text(message).ask_async()
        if answer is None:
            raise UserCancelledError()

        answer = answer.strip()
        if not answer:
            return current

        self.set_pref(key, answer)
        return answer

    def env_overrides(self) -> dict[str, str]:
        """환경변수 오버라이드 사본"""
        return dict(self.env)
