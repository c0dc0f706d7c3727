"""
scriptkit/tty/session.py - 스크립트 실행 세션

Executor, Printer, UserPreferences 를 묶어 스크립트 1회 실행의 수명 주기를 관리합니다.

Usage:
    from scriptkit.tty.session import Dependency, Tty

    async def main(tty: Tty) -> None:
        await tty.require(Dependency.JAVA, Dependency.command("git"))
        async with tty.in_named_section("Build"):
            await tty.ex.execute("./gradlew", ["build"])

    raise SystemExit(Tty("build").run(main))
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import ClassVar

from scriptkit.exceptions import (
    MissingDependencyError,
    ScriptError,
    UserCancelledError,
    format_error_for_user,
)
from scriptkit.tty.environment import EnvironmentPolicy
from scriptkit.tty.executor import Executor, ExecutorError, IOMode, MissingCommandError
from scriptkit.tty.preferences import UserPreferences
from scriptkit.tty.printer import Printer, get_logger

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """경과 시간 표시 (예: '4.250s', '2m 5.010s')"""
    total_ms = max(int(seconds * 1000), 0)
    minutes, remainder = divmod(total_ms, 60_000)
    secs, ms = divmod(remainder, 1000)
    if minutes:
        return f"{minutes}m {secs}.{ms:03}s"
    return f"{secs}.{ms:03}s"


@dataclass(frozen=True)
class Dependency:
    """스크립트가 필요로 하는 외부 도구

    Attributes:
        name: 표시 이름
        program: 확인용으로 실행할 프로그램
        probe_args: 확인용 인자
        path_var: 설치 경로를 지정하는 환경변수 (없으면 일반 명령어)
    """

    name: str
    program: str
    probe_args: tuple[str, ...] = ("--help",)
    path_var: str | None = None

    JAVA: ClassVar[Dependency]
    ANDROID_SDK: ClassVar[Dependency]
    FLUTTER: ClassVar[Dependency]

    @classmethod
    def command(cls, program: str) -> Dependency:
        """PATH 에 있어야 하는 일반 명령어"""
        return cls(name=program, program=program)


Dependency.JAVA = Dependency("Java", "java", ("--version",), "JAVA_HOME")
Dependency.ANDROID_SDK = Dependency("Android SDK", "sdkmanager", ("--version",), "ANDROID_HOME")
Dependency.FLUTTER = Dependency("Flutter", "flutter", ("--version",), "FLUTTER_HOME")


class Tty:
    """스크립트 실행 세션

    Args:
        script_name: 스크립트 이름 (사용자 설정 범위)
        preferences_path: 사용자 설정 파일 경로
        policy_factory: 설정 파일의 env 를 받아 EnvironmentPolicy 를 만드는 함수
        printer: 출력기 (기본값: 전역 콘솔)

    Attributes:
        ex: Executor
        printer: Printer
        preferences: UserPreferences
    """

    def __init__(
        self,
        script_name: str,
        preferences_path: str | os.PathLike[str] | None = None,
        policy_factory: Callable[[dict[str, str]], EnvironmentPolicy] = EnvironmentPolicy.inherit_all,
        printer: Printer | None = None,
    ):
        self.script_name = script_name
        self.preferences = UserPreferences(script_name, preferences_path)
        self.printer = printer or Printer()
        self.ex = Executor(policy_factory(self.preferences.env_overrides()))
        self.started_at = time.monotonic()

    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    async def require(self, *dependencies: Dependency) -> None:
        """외부 도구가 실행 가능한지 확인

        Raises:
            MissingDependencyError: 경로 변수가 있는 도구를 찾지 못한 경우
            MissingCommandError: 일반 명령어를 찾지 못한 경우
        """
        for dependency in dependencies:
            try:
                await self.ex.execute(dependency.program, dependency.probe_args, IOMode.MUTE)
            except ExecutorError as e:
                logger.debug("dependency probe failed: %s (%s)", dependency.name, e)
                if dependency.path_var is None:
                    raise MissingCommandError(dependency.program) from e
                raise MissingDependencyError(
                    dependency.name,
                    dependency.path_var,
                    str(self.preferences.path),
                    self.preferences.env_overrides(),
                ) from e

    @asynccontextmanager
    async def in_named_section(self, name: str) -> AsyncIterator[None]:
        """섹션 헤더 출력 후 본문 실행, 결과에 따라 Complete / Error 표시"""
        self.printer.section_open(name)
        try:
            yield
        except BaseException:
            self.printer.section_error()
            raise
        self.printer.section_close()

    def hr(self) -> None:
        self.printer.hr()

    async def close(self, error: BaseException | None = None) -> int:
        """백그라운드 프로세스 정리 후 결과 출력

        Args:
            error: 스크립트 본문에서 발생한 예외

        Returns:
            종료 코드 (성공 0, 실패 1)
        """
        try:
            await self.ex.resolve_background_processes(self.printer)
        except ScriptError as e:
            if error is None:
                error = e
            else:
                self.printer.warn(format_error_for_user(e))

        self.printer.br()
        if error is None:
            self.printer.success("SUCCESS")
            self.printer.info(f"Elapsed: {format_elapsed(self.elapsed())}.")
            return 0

        self.printer.error(format_error_for_user(error))
        return 1

    def run(self, main: Callable[[Tty], Awaitable[None]]) -> int:
        """스크립트 본문을 실행하는 동기 진입점

        본문이 어떻게 끝나든 close() 로 백그라운드 프로세스를 정리합니다.
        ScriptError 와 그 밖의 예외는 출력 후 종료 코드 1 로 변환되며,
        Ctrl+C 와 태스크 취소는 UserCancelledError 로 보고됩니다.

        Returns:
            종료 코드
        """
        get_logger("scriptkit")

        async def runner() -> int:
            try:
                await main(self)
            except ScriptError as e:
                return await self.close(e)
            except (KeyboardInterrupt, asyncio.CancelledError):
                return await self.close(UserCancelledError())
            except Exception as e:
                logger.debug("unhandled error in script body", exc_info=True)
                return await self.close(e)
            return await self.close()

        try:
            return asyncio.run(runner())
        except KeyboardInterrupt:
            self.printer.br()
            self.printer.error(format_error_for_user(UserCancelledError()))
            return 1
