"""
scriptkit/files/placeholders.py - 템플릿 파일의 {{Key}} 치환
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

from scriptkit.exceptions import FileSystemError, ScriptError

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class UnreplacedPlaceholdersError(ScriptError):
    """치환되지 않은 placeholder 가 남아 있는 경우"""

    def __init__(self, file: str, unreplaced: list[str]):
        super().__init__(f"Unexpected placeholders remain in file '{file}': {', '.join(unreplaced)}.")
        self.file = file
        self.unreplaced = unreplaced
        self.details.update({"file": file, "unreplaced": unreplaced})


def replace_placeholders(text: str, placeholders: Mapping[str, str]) -> tuple[str, list[str]]:
    """텍스트의 {{Key}} 를 치환

    Returns:
        (치환된 텍스트, 남은 placeholder 이름 목록 - 등장 순서, 중복 제거)
    """
    unreplaced: list[str] = []

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in placeholders:
            return str(placeholders[key])
        if key not in unreplaced:
            unreplaced.append(key)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, text), unreplaced


def replace_all_placeholders_in_file(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    placeholders: Mapping[str, str],
    error_if_unreplaced: bool = True,
) -> None:
    """src 를 읽어 placeholder 를 치환한 결과를 dst 에 기록

    Args:
        src: 템플릿 파일
        dst: 결과 파일 (src 와 같아도 됨)
        placeholders: 치환 값
        error_if_unreplaced: 남은 placeholder 가 있으면 기록하지 않고 에러

    Raises:
        UnreplacedPlaceholdersError: 남은 placeholder 가 있는 경우
        FileSystemError: 읽기/쓰기 실패
    """
    try:
        text = Path(src).read_text(encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to read '{os.fspath(src)}'.", os.fspath(src), e) from e

    result, unreplaced = replace_placeholders(text, placeholders)
    if unreplaced and error_if_unreplaced:
        raise UnreplacedPlaceholdersError(os.fspath(src), unreplaced)

    try:
        Path(dst).write_text(result, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to write '{os.fspath(dst)}'.", os.fspath(dst), e) from e
