"""
scriptkit/exceptions.py - 통합 예외 계층 구조

스크립트 전체에서 사용되는 예외 클래스들을 정의합니다.
모든 예외는 사람이 읽을 수 있는 메시지와 NOTE 주석(annotation)을 지원합니다.

예외 계층 구조:
    ScriptError (베이스)
    ├── CriticalError
    ├── FileSystemError (I/O 관련)
    ├── UserCancelledError
    ├── SelectionError
    ├── ExecutorError (프로세스 실행) - scriptkit.tty.executor에서 정의
    │   ├── SpawnFailedError
    │   ├── NonZeroExitError
    │   ├── PathResolutionError (FileSystemError 이기도 함)
    │   ├── BackgroundCommandFailedError
    │   └── MissingCommandError
    ├── MissingDependencyError
    └── InvalidPreferencesFileError

Usage:
    from scriptkit.exceptions import CriticalError

    try:
        ...
    except KeyError as e:
        raise CriticalError("missing key", cause=e).annotate("Check the config file.")
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class ScriptError(Exception):
    """scriptkit 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
        notes: 사용자에게 보여줄 추가 안내 (NOTE)
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        self.notes: list[str] = []

    def annotate(self, note: str) -> ScriptError:
        """NOTE 추가 후 자기 자신 반환 (raise 체이닝용)"""
        self.notes.append(note)
        return self

    def __str__(self) -> str:
        text = self.message
        if self.cause:
            text = f"{text}: {self.cause}"
        for note in self.notes:
            text += f"\n\nNOTE: {note}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
            "notes": list(self.notes),
        }


# =============================================================================
# 일반 예외
# =============================================================================


class CriticalError(ScriptError):
    """예상하지 못한 내부 오류"""

    def __init__(self, details: str, cause: BaseException | None = None):
        super().__init__(f"Unexpected: {details}.", cause)
        self.details["details"] = details


class FileSystemError(ScriptError):
    """파일 시스템 / I/O 관련 예외"""

    def __init__(
        self,
        message: str = "IO error.",
        path: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.path = path
        if path:
            self.details["path"] = path


class UserCancelledError(ScriptError):
    """사용자가 작업을 취소한 경우"""

    def __init__(self, message: str = "User cancelled operation."):
        super().__init__(message)


class SelectionError(ScriptError):
    """선택 프롬프트 실패"""

    def __init__(self, message: str = "Selection failed.", cause: BaseException | None = None):
        super().__init__(message, cause)


# =============================================================================
# 환경 / 설정 관련 예외
# =============================================================================


class MissingDependencyError(ScriptError):
    """필수 외부 도구가 설치되지 않았거나 경로가 설정되지 않은 경우"""

    def __init__(
        self,
        name: str,
        path_var: str,
        preferences_file: str,
        overrides: dict[str, str] | None = None,
    ):
        overrides = overrides or {}
        current = "\n".join(f"{key}={value}" for key, value in sorted(overrides.items()))
        message = (
            f"{name} is required. To set the {name} path, set the {path_var} "
            f"environment variable in '{preferences_file}'.\n\n"
            f"Current overrides:\n{current or '(none)'}"
        )
        super().__init__(message)
        self.name = name
        self.path_var = path_var
        self.preferences_file = preferences_file
        self.details.update({"name": name, "path_var": path_var})


class InvalidPreferencesFileError(ScriptError):
    """사용자 설정 파일을 읽거나 해석할 수 없는 경우"""

    def __init__(self, path: str, cause: BaseException | None = None):
        super().__init__(f"Invalid user preferences file '{path}'", cause)
        self.path = path
        self.details["path"] = path


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: BaseException) -> str:
    """예외를 터미널 출력용 문자열로 변환

    Args:
        error: 변환할 예외

    Returns:
        사용자에게 보여줄 메시지
    """
    if isinstance(error, ScriptError):
        return str(error)
    if isinstance(error, KeyboardInterrupt):
        return str(UserCancelledError())
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__
