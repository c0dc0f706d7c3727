"""
scriptkit/input/basic.py - 기본 확인 프롬프트

모든 프롬프트는 코루틴이며 Tty.run 이벤트 루프 안에서 await 로 호출합니다.
"""

from __future__ import annotations

import questionary

from scriptkit.exceptions import UserCancelledError


async def yes_no(prompt: str, default: bool = False) -> bool:
    """예/아니오 질문

    Raises:
        UserCancelledError: 프롬프트 취소 (Ctrl+C)
    """
    answer = await questionary.confirm(prompt, default=default).ask_async()
    if answer is None:
        raise UserCancelledError()
    return bool(answer)


async def confirm(prompt: str = "Are you sure?") -> None:
    """계속 진행할지 확인 (거절하거나 취소하면 UserCancelledError)"""
    if not await yes_no(prompt):
        raise UserCancelledError()


async def continue_after_enter(prompt: str = "Press Enter to continue...") -> None:
    """Enter 입력까지 대기"""
    if await questionary.text(prompt, qmark="").ask_async() is None:
        raise UserCancelledError()
