"""
scriptkit/tty/printer.py - Rich 기반 터미널 출력

섹션 헤더, 상태 메시지, 구분선 등 스크립트 출력을 일관된 스타일로 표시합니다.
"""

from __future__ import annotations

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from scriptkit.config import LogConfig, settings

# 상태 심볼
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"
SYMBOL_SECTION_END = "↳"


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def get_logger(name: str = "scriptkit") -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "scriptkit")

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 반환
    if logger.handlers:
        return logger

    config = LogConfig.from_env()
    logger.setLevel(config.level)
    handler = RichHandler(console=err_console, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


class Printer:
    """스크립트 출력기

    Args:
        out: 일반 출력 콘솔 (기본값: 전역 console)
        err: 에러 출력 콘솔 (기본값: 전역 err_console)
    """

    def __init__(self, out: Console | None = None, err: Console | None = None):
        self.console = out if out is not None else console
        self.err_console = err if err is not None else err_console

    # -------------------------------------------------------------------------
    # 섹션
    # -------------------------------------------------------------------------

    def section_open(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold]{escape(title)}[/bold]")

    def section_close(self) -> None:
        self.console.print(f"[dim]{SYMBOL_SECTION_END} Complete[/dim]")

    def section_error(self) -> None:
        self.console.print(f"[red]{SYMBOL_SECTION_END} Error[/red]")

    # -------------------------------------------------------------------------
    # 레이아웃
    # -------------------------------------------------------------------------

    def br(self) -> None:
        self.console.print()

    def hr(self) -> None:
        """구분선 출력 (RULE_WIDTH 개의 '-')"""
        self.console.print(f"[dim]{'-' * settings.RULE_WIDTH}[/dim]")

    # -------------------------------------------------------------------------
    # 메시지
    # -------------------------------------------------------------------------

    def debug(self, message: str) -> None:
        self.console.print(f"[dim italic]{escape(message)}[/dim italic]")

    def info(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def important(self, message: str) -> None:
        self.console.print(f"[bold]{escape(message)}[/bold]")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """에러 메시지 출력 (stderr, 빨간색)"""
        self.err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")
