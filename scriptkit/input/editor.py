"""
scriptkit/input/editor.py - vim 편집기로 텍스트 입력받기

임시 파일에 초기 텍스트를 쓰고 vim 을 터미널에 붙여 실행한 뒤,
저장된 내용을 읽어 반환합니다.
"""

from __future__ import annotations

from collections.abc import Sequence

from scriptkit.exceptions import ScriptError
from scriptkit.files.temporary import with_written_to_tmp_file
from scriptkit.tty.executor import Executor, ExecutorError, IOMode

# 긴 줄을 화면 폭에 맞춰 감싸고 j/k 를 화면 줄 단위로 이동
LINE_WRAP_ARGS: tuple[str, ...] = (
    "+windo set wrap",
    "+set textwidth=0",
    "+set wrapmargin=0",
    "+set linebreak",
    "+noremap j gj",
    "+noremap k gk",
)


class EditorError(ScriptError):
    """vim 실행 또는 결과 읽기 실패"""

    def __init__(self, details: str, cause: BaseException | None = None):
        super().__init__(f"Vim error: {details}.", cause)


async def vim_custom(
    ex: Executor,
    text: str | None = None,
    extra_args: Sequence[str] = (),
    line_wrap: bool = True,
    start_insert_mode_if_empty: bool = True,
) -> str | None:
    """vim 으로 텍스트 편집

    Args:
        ex: Executor
        text: 초기 텍스트
        extra_args: vim 추가 인자
        line_wrap: 줄 감싸기 설정 적용 여부
        start_insert_mode_if_empty: 초기 텍스트가 비어 있으면 입력 모드로 시작

    Returns:
        편집 결과 (앞뒤 공백 제거). 비어 있으면 None
    """
    text = text or ""
    with with_written_to_tmp_file(text) as path:
        args = [*extra_args]
        if line_wrap:
            args.extend(LINE_WRAP_ARGS)
        if start_insert_mode_if_empty and not text.strip():
            args.extend(["-c", "startinsert"])
        args.append(str(path))

        try:
            await ex.execute("vim", args, IOMode.ATTACH)
        except ExecutorError as e:
            raise EditorError("vim exited with an error", e) from e

        try:
            result = path.read_text(encoding="utf-8", errors="replace").strip()
        except OSError as e:
            raise EditorError("failed to read edited file", e) from e

    return result or None


async def vim(ex: Executor, text: str | None = None) -> str | None:
    """기본 설정으로 vim 편집"""
    return await vim_custom(ex, text)
