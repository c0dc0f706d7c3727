"""
scriptkit - 대화형 CLI 스크립트 작성용 헬퍼 라이브러리

외부 프로그램 실행(Executor), 터미널 출력(Printer), 사용자 설정(UserPreferences),
사용자 입력, 파일/git 유틸리티를 제공합니다.

Usage:
    from scriptkit import IOMode, Tty

    async def main(tty: Tty) -> None:
        async with tty.in_named_section("Build"):
            await tty.ex.execute("cargo", ["build"], IOMode.STREAM_OUTPUT)

    raise SystemExit(Tty("build").run(main))
"""

from scriptkit.config import get_version
from scriptkit.exceptions import ScriptError
from scriptkit.tty.environment import EnvironmentPolicy
from scriptkit.tty.executor import ExecuteOptions, Executor, IOMode
from scriptkit.tty.printer import Printer
from scriptkit.tty.session import Dependency, Tty

__version__ = get_version()

__all__ = [
    "Dependency",
    "EnvironmentPolicy",
    "ExecuteOptions",
    "Executor",
    "IOMode",
    "Printer",
    "ScriptError",
    "Tty",
    "__version__",
]
