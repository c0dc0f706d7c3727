"""
scriptkit/files/temporary.py - 임시 파일 헬퍼

with 블록이 끝나면 항상 정리되는 임시 파일 / 임시 수정을 제공합니다.

Usage:
    with with_written_to_tmp_file("key: value") as path:
        await ex.execute("tool", ["--config", str(path)])

    with with_tmp_edits_to_file(printer, "pubspec.yaml", lambda s: s.replace("0.1", "0.2")):
        await ex.execute("flutter", ["build", "apk"])
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from scriptkit.config import settings
from scriptkit.exceptions import FileSystemError
from scriptkit.tty.printer import Printer

logger = logging.getLogger(__name__)


class TemporaryFileError(FileSystemError):
    """임시 파일 생성/정리 실패"""

    def __init__(self, details: str, path: str | None = None, cause: BaseException | None = None):
        super().__init__(f"Temporary file error: {details}.", path, cause)


@contextmanager
def with_tmp_file(suffix: str = "") -> Iterator[Path]:
    """빈 임시 파일 경로 제공 (블록 종료 시 삭제)"""
    try:
        fd, name = tempfile.mkstemp(prefix="scriptkit_", suffix=suffix)
        os.close(fd)
    except OSError as e:
        raise TemporaryFileError("failed to create temporary file", cause=e) from e

    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


@contextmanager
def with_written_to_tmp_file(content: str, suffix: str = "") -> Iterator[Path]:
    """내용이 기록된 임시 파일 경로 제공 (블록 종료 시 삭제)"""
    with with_tmp_file(suffix) as path:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise TemporaryFileError("failed to write temporary file", str(path), e) from e
        yield path


@contextmanager
def with_written_to_tmp_file_at_path(
    printer: Printer,
    content: str,
    path: str | os.PathLike[str],
) -> Iterator[Path]:
    """지정 경로에 임시 파일을 가리키는 심볼릭 링크를 만들어 제공

    Raises:
        TemporaryFileError: 경로에 이미 파일이 있거나 링크 생성 실패
    """
    target = Path(path)
    if target.exists() or target.is_symlink():
        raise TemporaryFileError(f"'{target}' already exists", str(target))

    with with_written_to_tmp_file(content) as tmp_path:
        try:
            target.symlink_to(tmp_path)
        except OSError as e:
            raise TemporaryFileError(f"failed to link '{target}'", str(target), e) from e

        try:
            yield target
        finally:
            try:
                target.unlink()
            except OSError as e:
                printer.warn(f"Failed to remove temporary link '{target}': {e}")


@contextmanager
def with_tmp_edits_to_file(
    printer: Printer,
    path: str | os.PathLike[str],
    edit: Callable[[str], str],
) -> Iterator[Path]:
    """파일을 임시로 수정하고 블록 종료 시 원래 내용으로 복원

    원본은 "<이름>.bak" 으로 백업되며, 블록에서 예외가 나도 복원됩니다.

    Raises:
        TemporaryFileError: 파일이 없거나 백업/수정 실패
    """
    target = Path(path)
    if not target.is_file():
        raise TemporaryFileError(f"file '{target}' does not exist", str(target))

    backup = target.with_name(target.name + settings.BACKUP_SUFFIX)
    try:
        original = target.read_text(encoding="utf-8")
        shutil.copy2(target, backup)
    except OSError as e:
        raise TemporaryFileError(f"failed to back up '{target}'", str(target), e) from e

    try:
        try:
            target.write_text(edit(original), encoding="utf-8")
        except OSError as e:
            raise TemporaryFileError(f"failed to edit '{target}'", str(target), e) from e
        yield target
    finally:
        try:
            os.replace(backup, target)
        except OSError as e:
            logger.debug("restore failed: %s -> %s", backup, target, exc_info=True)
            printer.error(f"Failed to restore '{target}' from '{backup}': {e}")
