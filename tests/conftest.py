"""
tests/conftest.py - pytest 공통 픽스처

출력 기록용 Printer, Executor, 임시 사용자 설정 파일을 제공합니다.

Usage:
    def test_something(printer, executor, run):
        output = run(executor.execute("echo", ["hi"]))
        assert "hi" in printer.output()
"""

import asyncio
import io
import sys
from pathlib import Path

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput
from rich.console import Console

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from scriptkit.tty.executor import Executor  # noqa: E402
from scriptkit.tty.printer import Printer  # noqa: E402


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path, monkeypatch):
    """테스트 환경 설정 (사용자 홈의 설정 파일을 건드리지 않도록)"""
    monkeypatch.setenv("SCRIPTKIT_PREFERENCES", str(tmp_path / "preferences.yaml"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    yield


# =============================================================================
# 출력 / 실행 픽스처
# =============================================================================


class RecordingPrinter(Printer):
    """출력을 메모리에 기록하는 Printer"""

    def __init__(self):
        super().__init__(
            out=Console(file=io.StringIO(), color_system=None, width=200),
            err=Console(file=io.StringIO(), color_system=None, width=200),
        )

    def output(self) -> str:
        return self.console.file.getvalue()

    def errors(self) -> str:
        return self.err_console.file.getvalue()


@pytest.fixture
def printer():
    """기록용 Printer"""
    return RecordingPrinter()


@pytest.fixture
def executor():
    """기본 정책 Executor"""
    return Executor()


@pytest.fixture
def run():
    """코루틴을 새 이벤트 루프에서 실행"""
    return asyncio.run


@pytest.fixture
def preferences_file(tmp_path):
    """임시 사용자 설정 파일 경로"""
    return tmp_path / "preferences.yaml"


# =============================================================================
# 터미널 입력
# =============================================================================


@pytest.fixture
def terminal_input():
    """questionary 프롬프트에 키 입력을 흘려 넣는 가상 터미널

    Usage:
        terminal_input.send_text("y")
        assert run(yes_no("Deploy?")) is True
    """
    with create_pipe_input() as pipe:
        with create_app_session(input=pipe, output=DummyOutput()):
            yield pipe
