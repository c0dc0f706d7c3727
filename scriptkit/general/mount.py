"""
scriptkit/general/mount.py - 마운트 해제
"""

from __future__ import annotations

import logging
import os

from scriptkit.tty.executor import Executor, IOMode, NonZeroExitError

logger = logging.getLogger(__name__)

NOT_MOUNTED_MARKERS = ("not mounted", "not currently mounted")
PERMISSION_MARKERS = ("permission denied", "operation not permitted")


async def umount(ex: Executor, path: str | os.PathLike[str], sudo_fallback: bool = False) -> None:
    """경로 마운트 해제

    이미 마운트되어 있지 않으면 성공으로 취급합니다.
    권한 오류이고 sudo_fallback 이면 sudo 로 다시 시도합니다
    (비밀번호 입력을 위해 터미널에 붙여 실행).

    Raises:
        NonZeroExitError: 그 외 실패
    """
    target = os.fspath(path)
    try:
        await ex.execute("umount", [target], IOMode.STREAM_OUTPUT)
    except NonZeroExitError as e:
        output = e.output.lower()
        if any(marker in output for marker in NOT_MOUNTED_MARKERS):
            logger.debug("already unmounted: %s", target)
            return
        if sudo_fallback and any(marker in output for marker in PERMISSION_MARKERS):
            logger.debug("retrying umount with sudo: %s", target)
            await ex.execute("sudo", ["umount", target], IOMode.ATTACH)
            return
        raise
