"""
tests/scriptkit/input/test_editor.py - scriptkit/input/editor.py 테스트

vim 실행은 Executor 를 모킹하여 파일 내용을 바꾸는 방식으로 대체합니다.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from scriptkit.input.editor import LINE_WRAP_ARGS, EditorError, vim, vim_custom
from scriptkit.tty.executor import IOMode, NonZeroExitError


def _fake_executor(new_content=None, error=None):
    """vim 대신 임시 파일을 수정하는 Executor"""
    ex = MagicMock()
    seen = {}

    async def execute(command, args, io_mode):
        seen["command"] = command
        seen["args"] = list(args)
        seen["io_mode"] = io_mode
        path = Path(args[-1])
        seen["initial"] = path.read_text()
        if error is not None:
            raise error
        if new_content is not None:
            path.write_text(new_content)
        return ""

    ex.execute = AsyncMock(side_effect=execute)
    return ex, seen


class TestVim:
    """vim 편집 테스트"""

    def test_returns_edited_text(self, run):
        """편집 결과를 공백 제거 후 반환"""
        ex, seen = _fake_executor("  edited text \n\n")
        assert run(vim(ex, "initial")) == "edited text"
        assert seen["command"] == "vim"
        assert seen["io_mode"] is IOMode.ATTACH
        assert seen["initial"] == "initial"

    def test_empty_result_is_none(self, run):
        """빈 결과는 None"""
        ex, _ = _fake_executor("   \n")
        assert run(vim(ex, "text")) is None

    def test_insert_mode_when_empty(self, run):
        """초기 텍스트가 없으면 입력 모드로 시작"""
        ex, seen = _fake_executor("x")
        run(vim(ex))
        assert seen["args"][-3:-1] == ["-c", "startinsert"]

    def test_line_wrap_args(self, run):
        """줄 감싸기 인자"""
        ex, seen = _fake_executor("x")
        run(vim_custom(ex, "text", extra_args=["-n"]))
        assert seen["args"][0] == "-n"
        assert seen["args"][1 : 1 + len(LINE_WRAP_ARGS)] == list(LINE_WRAP_ARGS)
        assert "startinsert" not in seen["args"]

    def test_without_line_wrap(self, run):
        """줄 감싸기 끄기"""
        ex, seen = _fake_executor("x")
        run(vim_custom(ex, "text", line_wrap=False))
        assert len(seen["args"]) == 1

    def test_temp_file_removed(self, run):
        """임시 파일은 삭제"""
        ex, seen = _fake_executor("x")
        run(vim(ex, "text"))
        assert not Path(seen["args"][-1]).exists()

    def test_vim_failure(self, run):
        """vim 실패는 EditorError"""
        ex, _ = _fake_executor(error=NonZeroExitError("vim", 1))
        with pytest.raises(EditorError) as exc_info:
            run(vim(ex, "text"))
        assert str(exc_info.value).startswith("Vim error: vim exited with an error.")
