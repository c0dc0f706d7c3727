"""
scriptkit/git/ls_files.py - git 추적 파일 조회 및 복제

git CLI 를 Executor 로 호출합니다.

Usage:
    root = await find_git_root(ex, ".")
    files = await list_git_tracked_files(ex, root, filter_subpath="src")

    async with with_repo_temporarily_cloned_to(ex, printer, ".", "/tmp/build") as path:
        await ex.execute("docker", ["build", str(path)])
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from scriptkit.exceptions import FileSystemError, ScriptError
from scriptkit.files.management import cp, mkdir_p, rm_rf
from scriptkit.tty.executor import (
    ExecuteOptions,
    Executor,
    IOMode,
    NonZeroExitError,
    PathResolutionError,
)
from scriptkit.tty.printer import Printer

logger = logging.getLogger(__name__)


class NotAGitRepositoryError(ScriptError):
    """git 저장소가 아닌 경로"""

    def __init__(self, path: str, cause: BaseException | None = None):
        super().__init__(f"The given path '{path}' is not a git repository.", cause)
        self.path = path
        self.details["path"] = path


class FileCannotBeCanonicalizedError(FileSystemError):
    """경로를 정규화할 수 없는 경우 (대부분 존재하지 않음)"""

    def __init__(self, path: str, cause: BaseException | None = None):
        super().__init__(
            f"The file path '{path}' cannot be canonicalized. Most likely it does not exist.",
            path,
            cause,
        )


async def find_git_root(ex: Executor, path: str | os.PathLike[str]) -> Path:
    """path 를 포함하는 저장소의 작업 디렉토리 루트

    Raises:
        NotAGitRepositoryError: 저장소를 찾지 못한 경우
    """
    start = Path(path)
    if start.is_file():
        start = start.parent

    try:
        output = await ex.execute(
            "git",
            ["rev-parse", "--show-toplevel"],
            IOMode.MUTE,
            ExecuteOptions(dir=start),
        )
    except (NonZeroExitError, PathResolutionError) as e:
        raise NotAGitRepositoryError(os.fspath(path), e) from e

    if not output:
        raise NotAGitRepositoryError(os.fspath(path))
    return Path(output).resolve()


async def list_git_tracked_files(
    ex: Executor,
    path: str | os.PathLike[str],
    filter_subpath: str | None = None,
    include_submodules: bool = False,
) -> list[Path]:
    """저장소의 추적 파일 절대 경로 목록

    Args:
        ex: Executor
        path: 저장소 안의 아무 경로
        filter_subpath: 저장소 루트 기준 하위 경로로 제한
        include_submodules: 서브모듈 파일 포함 여부

    Raises:
        NotAGitRepositoryError: 저장소가 아닌 경우
        FileCannotBeCanonicalizedError: filter_subpath 가 존재하지 않는 경우
    """
    root = await find_git_root(ex, path)

    subpath: Path | None = None
    if filter_subpath:
        candidate = root / filter_subpath
        try:
            subpath = candidate.resolve(strict=True)
        except OSError as e:
            raise FileCannotBeCanonicalizedError(str(candidate), e) from e

    args = ["ls-files", "-z"]
    if include_submodules:
        args.append("--recurse-submodules")
    output = await ex.execute("git", args, IOMode.MUTE, ExecuteOptions(dir=root, trim=False))

    files = [root / entry for entry in output.split("\0") if entry]
    if subpath is not None:
        files = [file for file in files if file.is_relative_to(subpath)]
    return files


async def clone_repo_to(
    ex: Executor,
    printer: Printer,
    path: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    filter_subpath: str | None = None,
    include_submodules: bool = False,
) -> None:
    """추적 파일만 destination 으로 복사 (상대 경로 유지)

    개별 파일 복사 실패는 경고만 출력합니다.
    """
    root = await find_git_root(ex, path)
    destination = Path(destination)
    if filter_subpath:
        printer.info(f"Cloning repo at '{root}' to '{destination}' (subpath: '{filter_subpath}')...")
    else:
        printer.info(f"Cloning repo at '{root}' to '{destination}'...")

    files = await list_git_tracked_files(ex, root, filter_subpath, include_submodules)
    for file in files:
        relative = file.relative_to(root)
        target = destination / relative
        try:
            mkdir_p(target.parent)
            cp(file, target)
        except FileSystemError:
            logger.debug("copy failed: %s", file, exc_info=True)
            printer.warn(f"File '{relative}' not copied.")


@asynccontextmanager
async def with_repo_temporarily_cloned_to(
    ex: Executor,
    printer: Printer,
    path: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    filter_subpath: str | None = None,
    include_submodules: bool = False,
) -> AsyncIterator[Path]:
    """저장소를 임시로 복제하고 블록 종료 시 삭제"""
    printer.info("Temporarily cloning repository...")
    try:
        await clone_repo_to(ex, printer, path, destination, filter_subpath, include_submodules)
        yield Path(destination)
    finally:
        printer.info("Cleaning up temporary clone...")
        rm_rf(destination)
