"""
tests/scriptkit/tty/test_printer.py - scriptkit/tty/printer.py 테스트
"""

import logging

from rich.console import Console

from scriptkit.tty.printer import Printer, console, get_console, get_logger


class TestPrinter:
    """Printer 출력 테스트"""

    def test_default_consoles(self):
        """기본값은 전역 콘솔"""
        assert Printer().console is console

    def test_section(self, printer):
        """섹션 열기/닫기"""
        printer.section_open("Build")
        printer.section_close()
        assert printer.output() == "\nBuild\n↳ Complete\n"

    def test_section_error(self, printer):
        """섹션 에러 표시"""
        printer.section_error()
        assert "↳ Error" in printer.output()

    def test_hr_width(self, printer):
        """구분선은 80자"""
        printer.hr()
        assert printer.output() == "-" * 80 + "\n"

    def test_error_goes_to_err_console(self, printer):
        """에러는 stderr 콘솔"""
        printer.error("boom")
        assert printer.output() == ""
        assert "✗ boom" in printer.errors()

    def test_markup_is_escaped(self, printer):
        """메시지의 [태그] 는 그대로 출력"""
        printer.info("value [bold]x[/bold]")
        assert "value [bold]x[/bold]" in printer.output()

    def test_status_messages(self, printer):
        """상태 메시지 심볼"""
        printer.success("done")
        printer.warn("careful")
        printer.important("note")
        output = printer.output()
        assert "✓ done" in output
        assert "! careful" in output
        assert "note" in output


class TestConsoleHelpers:
    """콘솔 / 로거 헬퍼 테스트"""

    def test_get_console_returns_console(self):
        """get_console 이 Console 반환"""
        assert isinstance(get_console(), Console)

    def test_get_logger_is_idempotent(self):
        """핸들러는 한 번만 추가"""
        logger = get_logger("scriptkit.tests.printer")
        again = get_logger("scriptkit.tests.printer")
        assert logger is again
        assert len(logger.handlers) == 1

    def test_get_logger_level_from_env(self, monkeypatch):
        """LOG_LEVEL 반영"""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        logger = get_logger("scriptkit.tests.printer.debug")
        assert logger.level == logging.DEBUG
