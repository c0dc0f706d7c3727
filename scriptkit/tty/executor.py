"""
scriptkit/tty/executor.py - 외부 프로그램 실행기

외부 프로그램을 자식 프로세스로 실행하고 출력을 수집합니다.
백그라운드로 띄운 프로세스는 resolve_background_processes()에서 일괄 대기합니다.

IO 모드:
    ATTACH        터미널 stdio 상속, 출력 수집 안 함 (반환값 "")
    STREAM_OUTPUT 출력 수집 + stdout/stderr 모두 터미널에 출력
    SILENT        출력 수집 + stderr만 터미널에 출력
    MUTE          출력 수집, 터미널 출력 없음

Usage:
    from scriptkit.tty.executor import Executor, IOMode

    ex = Executor()
    output = await ex.execute("git", ["rev-parse", "HEAD"], IOMode.SILENT)
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from scriptkit.config import settings
from scriptkit.exceptions import FileSystemError, ScriptError
from scriptkit.tty.environment import EnvironmentPolicy, EnvOverlay

if TYPE_CHECKING:
    from scriptkit.tty.printer import Printer

logger = logging.getLogger(__name__)


# =============================================================================
# 타입
# =============================================================================


class IOMode(Enum):
    """자식 프로세스의 표준 스트림 처리 방식"""

    ATTACH = "attach"
    STREAM_OUTPUT = "stream_output"
    SILENT = "silent"
    MUTE = "mute"

    @property
    def captures(self) -> bool:
        return self is not IOMode.ATTACH

    @property
    def echoes_stdout(self) -> bool:
        return self is IOMode.STREAM_OUTPUT

    @property
    def echoes_stderr(self) -> bool:
        return self in (IOMode.STREAM_OUTPUT, IOMode.SILENT)


@dataclass(frozen=True)
class ExecuteOptions:
    """실행 옵션

    Attributes:
        dir: 작업 디렉토리 (기본값: 현재 디렉토리)
        env: 정책 위에 추가로 덮어쓸 환경변수
        trim: 캡처한 출력의 앞뒤 공백 제거 여부 (False 면 원본 그대로)
    """

    dir: str | os.PathLike[str] | None = None
    env: EnvOverlay | None = None
    trim: bool = True


# =============================================================================
# 예외
# =============================================================================


class ExecutorError(ScriptError):
    """프로세스 실행 관련 예외 (베이스)"""


class SpawnFailedError(ExecutorError):
    """프로세스를 시작하거나 대기할 수 없는 경우"""

    def __init__(self, program: str, cause: BaseException | None = None):
        super().__init__(f"Failed to execute command '{program}'.", cause)
        self.program = program
        self.details["program"] = program


class NonZeroExitError(ExecutorError):
    """프로세스가 0이 아닌 코드로 종료된 경우"""

    def __init__(self, program: str, status: int, output: str = ""):
        message = f"[{status}] Command failed."
        if output.strip():
            message = f"{message}\n{output.strip()}"
        super().__init__(message)
        self.program = program
        self.status = status
        self.output = output
        self.details.update({"program": program, "status": status})


class PathResolutionError(ExecutorError, FileSystemError):
    """작업 디렉토리를 절대 경로로 해석할 수 없는 경우"""

    def __init__(self, path: str, cause: BaseException | None = None):
        super().__init__(f"Cannot resolve working directory '{path}'.", path=path, cause=cause)


class BackgroundCommandFailedError(ExecutorError):
    """백그라운드 프로세스가 0이 아닌 코드로 종료된 경우"""

    def __init__(self, program: str, status: int):
        super().__init__(f"[{status}] Background command failed.")
        self.program = program
        self.status = status
        self.details.update({"program": program, "status": status})


class MissingCommandError(ExecutorError):
    """필수 명령어가 PATH에 없는 경우"""

    def __init__(self, program: str):
        super().__init__(f"Required command '{program}' is not installed or not on PATH.")
        self.program = program
        self.details["program"] = program


# =============================================================================
# 헬퍼
# =============================================================================


def resolve_working_dir(directory: str | os.PathLike[str] | None = None) -> Path:
    """작업 디렉토리를 정규화된 절대 경로로 변환

    Raises:
        PathResolutionError: 경로가 없거나 디렉토리가 아닌 경우
    """
    label = os.fspath(directory) if directory is not None else "."
    try:
        target = Path(directory).expanduser() if directory is not None else Path.cwd()
        resolved = target.resolve(strict=True)
    except OSError as e:
        raise PathResolutionError(label, e) from e

    if not resolved.is_dir():
        raise PathResolutionError(label, NotADirectoryError(label))
    return resolved


async def _pump(stream: asyncio.StreamReader, sink: list[str], echo: TextIO | None) -> None:
    """파이프를 청크 단위로 읽어 sink에 추가 (UTF-8 손실 허용 디코딩)"""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = await stream.read(settings.READ_CHUNK_SIZE)
        text = decoder.decode(data, final=not data)
        if text:
            sink.append(text)
            if echo is not None:
                echo.write(text)
                echo.flush()
        if not data:
            return


# =============================================================================
# Executor
# =============================================================================


class Executor:
    """외부 프로그램 실행기

    스크립트 실행 1회당 하나를 생성합니다. 백그라운드 프로세스 목록 외에는
    상태가 없으며, 단일 소유자(하나의 이벤트 루프)에서 사용하는 것을 전제로 합니다.
    """

    def __init__(self, policy: EnvironmentPolicy | None = None):
        self.policy = policy or EnvironmentPolicy.inherit_all()
        self._background: list[tuple[str, asyncio.subprocess.Process]] = []

    @property
    def background_count(self) -> int:
        """아직 대기하지 않은 백그라운드 프로세스 수"""
        return len(self._background)

    async def execute(
        self,
        command: str,
        args: Sequence[str] = (),
        io_mode: IOMode = IOMode.STREAM_OUTPUT,
        options: ExecuteOptions | None = None,
    ) -> str:
        """프로그램 실행 후 종료까지 대기

        Args:
            command: 실행할 프로그램 (PATH 탐색)
            args: 인자 목록
            io_mode: 표준 스트림 처리 방식
            options: 작업 디렉토리 / 환경변수 추가

        Returns:
            stdout + stderr (도착 순서, trim 이면 앞뒤 공백 제거). ATTACH 모드는 항상 ""

        Raises:
            PathResolutionError: 작업 디렉토리 해석 실패
            SpawnFailedError: 프로세스 시작 실패
            NonZeroExitError: 0이 아닌 종료 코드
        """
        options = options or ExecuteOptions()
        cwd = resolve_working_dir(options.dir)
        env = self.policy.build(options.env)
        argv = [str(arg) for arg in args]

        capture = io_mode.captures
        pipe = asyncio.subprocess.PIPE if capture else None
        logger.debug("execute: %s %s (cwd=%s, mode=%s)", command, argv, cwd, io_mode.value)

        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *argv,
                cwd=cwd,
                env=env,
                stdin=asyncio.subprocess.DEVNULL if capture else None,
                stdout=pipe,
                stderr=pipe,
            )
        except OSError as e:
            raise SpawnFailedError(command, e) from e

        chunks: list[str] = []
        try:
            if capture:
                await asyncio.gather(
                    _pump(process.stdout, chunks, sys.stdout if io_mode.echoes_stdout else None),
                    _pump(process.stderr, chunks, sys.stderr if io_mode.echoes_stderr else None),
                )
            returncode = await process.wait()
        except OSError as e:
            raise SpawnFailedError(command, e) from e

        output = "".join(chunks)
        logger.debug("exit: %s -> %s", command, returncode)
        if returncode != 0:
            raise NonZeroExitError(command, returncode, output)
        return output.strip() if options.trim else output

    async def execute_with_options(
        self,
        command: str,
        args: Sequence[str],
        io_mode: IOMode,
        options: ExecuteOptions,
    ) -> str:
        """execute()의 옵션 필수 버전"""
        return await self.execute(command, args, io_mode, options)

    async def execute_background(
        self,
        command: str,
        args: Sequence[str] = (),
        dir: str | os.PathLike[str] | None = None,
    ) -> None:
        """프로세스를 백그라운드로 시작 (대기하지 않음)

        stdout은 버리고 stdin/stderr는 상속합니다.
        종료 상태는 resolve_background_processes()에서 확인합니다.
        """
        cwd = resolve_working_dir(dir)
        argv = [str(arg) for arg in args]
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *argv,
                cwd=cwd,
                env=self.policy.build(),
                stdout=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise SpawnFailedError(command, e) from e

        self._background.append((command, process))
        logger.debug("background: %s %s (pid=%s)", command, argv, process.pid)

    async def resolve_background_processes(self, printer: Printer | None = None) -> None:
        """등록된 백그라운드 프로세스를 등록 순서대로 모두 대기

        시그널로 종료된 프로세스(음수 returncode)는 성공으로 취급합니다.
        에뮬레이터처럼 종료 시 시그널로 정리되는 보조 프로세스가 많기 때문입니다.
        목록은 항상 끝까지 비우고, 첫 번째 실패를 마지막에 발생시킵니다.

        Raises:
            BackgroundCommandFailedError: 양수 종료 코드
            SpawnFailedError: 대기 자체가 OS 오류로 실패
        """
        first_error: ExecutorError | None = None

        while self._background:
            program, process = self._background.pop(0)

            if process.returncode is None:
                if printer is not None:
                    printer.info(settings.BACKGROUND_WAIT_NOTICE)
                else:
                    logger.info(settings.BACKGROUND_WAIT_NOTICE)

            try:
                returncode = await process.wait()
            except OSError as e:
                if first_error is None:
                    first_error = SpawnFailedError(program, e)
                continue

            logger.debug("background exit: %s -> %s", program, returncode)
            if returncode > 0 and first_error is None:
                first_error = BackgroundCommandFailedError(program, returncode)

        if first_error is not None:
            raise first_error

    async def has_command(self, program: str) -> bool:
        """PATH에 프로그램이 있는지 확인 (Windows: where, 그 외: command -v)"""
        if os.name == "nt":
            command, args = "where", [program]
        else:
            command, args = "sh", ["-c", 'command -v "$1"', "sh", program]

        try:
            await self.execute(command, args, IOMode.MUTE)
        except ExecutorError:
            return False
        return True

    async def require_command(self, program: str) -> None:
        """프로그램이 없으면 MissingCommandError 발생"""
        if not await self.has_command(program):
            raise MissingCommandError(program)
