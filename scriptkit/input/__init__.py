"""
scriptkit/input - 사용자 입력 헬퍼

questionary 기반 확인/선택 프롬프트와 vim 편집기 호출을 제공합니다.

Usage:
    async def main(tty: Tty) -> None:
        env = await select(DeploymentEnv)
        await confirm(f"Deploy to {env}?")
"""

from scriptkit.input.basic import confirm, continue_after_enter, yes_no
from scriptkit.input.editor import EditorError, vim, vim_custom
from scriptkit.input.select import multi_select, select

__all__ = [
    "EditorError",
    "confirm",
    "continue_after_enter",
    "multi_select",
    "select",
    "vim",
    "vim_custom",
    "yes_no",
]
