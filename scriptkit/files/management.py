"""
scriptkit/files/management.py - 기본 파일 조작

shutil / pathlib 호출을 감싸 OSError 를 FileSystemError 로 변환합니다.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from scriptkit.exceptions import FileSystemError

PathLike = str | os.PathLike[str]


@contextmanager
def _wrap_os_error(action: str, path: PathLike) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise FileSystemError(f"Failed to {action} '{os.fspath(path)}'.", os.fspath(path), e) from e


def cp(src: PathLike, dst: PathLike) -> None:
    """파일 복사 (디렉토리면 하위까지 복사)"""
    with _wrap_os_error("copy", src):
        if Path(src).is_dir():
            shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(src, dst)


def mv(src: PathLike, dst: PathLike) -> None:
    with _wrap_os_error("move", src):
        shutil.move(os.fspath(src), os.fspath(dst))


def rm(path: PathLike) -> None:
    """파일 삭제 (없으면 에러)"""
    with _wrap_os_error("remove", path):
        Path(path).unlink()


def rm_rf(path: PathLike) -> None:
    """파일/디렉토리 재귀 삭제 (없으면 무시)"""
    target = Path(path)
    with _wrap_os_error("remove", path):
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink(missing_ok=True)


def mkdir_p(path: PathLike) -> None:
    with _wrap_os_error("create directory", path):
        Path(path).mkdir(parents=True, exist_ok=True)


def rmdir(path: PathLike) -> None:
    """빈 디렉토리 삭제"""
    with _wrap_os_error("remove directory", path):
        Path(path).rmdir()


def ln_s(src: PathLike, dst: PathLike) -> None:
    """dst 에 src 를 가리키는 심볼릭 링크 생성"""
    with _wrap_os_error("link", dst):
        Path(dst).symlink_to(src)
