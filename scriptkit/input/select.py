"""
scriptkit/input/select.py - 목록 선택 프롬프트

표시 가능한 아무 객체 목록을 받아 사용자가 고른 원래 객체를 반환합니다.
두 함수 모두 코루틴이며 Tty.run 이벤트 루프 안에서 await 로 호출합니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

import questionary

from scriptkit.exceptions import SelectionError

T = TypeVar("T")


def _build_choices(items: list[T]) -> list[questionary.Choice]:
    return [questionary.Choice(title=str(item), value=index) for index, item in enumerate(items)]


def _default_message(items: list[T], plural: bool) -> str:
    type_name = type(items[0]).__name__
    return f"Select {type_name}s:" if plural else f"Select {type_name}:"


async def select(items: Iterable[T], message: str | None = None) -> T:
    """단일 선택

    Args:
        items: 선택지 (str() 로 표시)
        message: 프롬프트 (기본값: 항목 타입 이름)

    Returns:
        선택된 항목

    Raises:
        SelectionError: 선택지가 없거나 선택이 취소된 경우
    """
    items = list(items)
    if not items:
        raise SelectionError("Selection failed: nothing to select from.")

    index = await questionary.select(
        message or _default_message(items, plural=False),
        choices=_build_choices(items),
    ).ask_async()
    if index is None:
        raise SelectionError()
    return items[index]


async def multi_select(items: Iterable[T], message: str | None = None) -> list[T]:
    """다중 선택 (선택 순서가 아닌 목록 순서로 반환)"""
    items = list(items)
    if not items:
        raise SelectionError("Selection failed: nothing to select from.")

    indexes = await questionary.checkbox(
        message or _default_message(items, plural=True),
        choices=_build_choices(items),
    ).ask_async()
    if indexes is None:
        raise SelectionError()
    return [items[index] for index in sorted(indexes)]
