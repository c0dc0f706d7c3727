"""
scriptkit/files/archive.py - tar 번들 생성
"""

from __future__ import annotations

import logging
import os
import tarfile
from pathlib import Path

from scriptkit.config import settings
from scriptkit.exceptions import FileSystemError

logger = logging.getLogger(__name__)


class TarBundleError(FileSystemError):
    """tar 번들 생성 실패"""

    def __init__(self, details: str, path: str | None = None, cause: BaseException | None = None):
        super().__init__(f"Failed to build tar bundle: {details}.", path, cause)


def _arcname_within(src: Path, bundle: Path) -> str | None:
    """bundle 이 src 안에 있으면 tar 내부 이름 ("./..."), 아니면 None"""
    try:
        relative = bundle.resolve().relative_to(src.resolve())
    except ValueError:
        return None
    return f"./{relative.as_posix()}"


def build_tar_bundle(src_dir: str | os.PathLike[str], dst_dir: str | os.PathLike[str]) -> Path:
    """src_dir 내용을 "." 기준으로 담은 dst_dir/bundle.tar 생성

    dst_dir 이 src_dir 안에 있어도 번들 자신은 포함되지 않습니다.

    Returns:
        생성된 번들 경로
    """
    src = Path(src_dir)
    if not src.is_dir():
        raise TarBundleError(f"'{src}' is not a directory", str(src))

    dst = Path(dst_dir)
    bundle = dst / settings.TAR_BUNDLE_NAME
    try:
        dst.mkdir(parents=True, exist_ok=True)
        skip = _arcname_within(src, bundle)
        with tarfile.open(bundle, "w") as tar:
            tar.add(src, arcname=".", filter=lambda info: None if info.name == skip else info)
    except (OSError, tarfile.TarError) as e:
        raise TarBundleError(str(e), str(bundle), e) from e

    logger.debug("tar bundle created: %s", bundle)
    return bundle
