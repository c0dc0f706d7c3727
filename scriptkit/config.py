"""
scriptkit/config.py - 중앙 설정 관리

라이브러리 전역 상수와 환경변수 헬퍼를 정의합니다.

Usage:
    from scriptkit.config import settings, get_env_bool, LogConfig

    chunk = settings.READ_CHUNK_SIZE
    debug = get_env_bool("SCRIPTKIT_DEBUG", False)
    log_config = LogConfig.from_env()
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import metadata
from pathlib import Path

# =============================================================================
# 전역 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """라이브러리 전역 설정 (불변)"""

    # 사용자 설정 파일
    PREFERENCES_ENV_VAR: str = "SCRIPTKIT_PREFERENCES"
    DEFAULT_PREFERENCES_PATH: str = "~/.config/scriptkit/preferences.yaml"
    PREFERENCES_REDIRECT_PREFIX: str = "redirect:"

    # 프로세스 실행
    READ_CHUNK_SIZE: int = 1024
    BACKGROUND_WAIT_NOTICE: str = "Waiting for background process to finish..."

    # 출력
    RULE_WIDTH: int = 80

    # 파일
    BACKUP_SUFFIX: str = ".bak"
    TAR_BUNDLE_NAME: str = "bundle.tar"

    # 네트워크
    PUBLIC_IP_URL: str = "https://api64.ipify.org"
    HTTP_TIMEOUT: int = 10
    DNS_NAME_SERVER: str = "8.8.8.8"
    DNS_TIMEOUT: float = 10.0


settings = Settings()

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False) -> bool:
    """불리언 환경변수 조회

    Args:
        name: 환경변수 이름
        default: 미설정 또는 잘못된 값일 때 기본값

    Returns:
        환경변수 값 (true/1/yes/on → True, false/0/no/off → False)
    """
    value = os.environ.get(name)
    if value is None:
        return default

    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def get_env_int(name: str, default: int = 0) -> int:
    """정수 환경변수 조회 (파싱 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def get_preferences_path() -> Path:
    """사용자 설정 파일 경로

    SCRIPTKIT_PREFERENCES 환경변수가 있으면 우선 사용합니다.
    """
    raw = os.environ.get(settings.PREFERENCES_ENV_VAR) or settings.DEFAULT_PREFERENCES_PATH
    return Path(raw).expanduser()


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 설정 생성"""
        config = cls()
        level = os.environ.get("LOG_LEVEL")
        if level:
            config.level = level.upper()
        log_format = os.environ.get("LOG_FORMAT")
        if log_format:
            config.format = log_format
        return config


# =============================================================================
# 버전
# =============================================================================


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 배포판 버전 (개발 체크아웃이면 0.0.0)"""
    try:
        return metadata.version("scriptkit")
    except metadata.PackageNotFoundError:
        return "0.0.0"
