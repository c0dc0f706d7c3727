"""
scriptkit/networking/sockets.py - 포트 점유 프로세스 정리

로컬 서버를 띄우기 전에 같은 포트를 잡고 있는 프로세스를 종료합니다.
"""

from __future__ import annotations

import logging

import psutil

from scriptkit.exceptions import ScriptError
from scriptkit.tty.printer import Printer

logger = logging.getLogger(__name__)


class GetSocketInfoError(ScriptError):
    """열린 소켓 목록 조회 실패"""

    def __init__(self, cause: BaseException | None = None):
        super().__init__("Failed to get info on currently open sockets.", cause)


class FailedToCloseSocketError(ScriptError):
    """포트를 점유한 프로세스 종료 실패"""

    def __init__(self, pid: int, port: int, cause: BaseException | None = None):
        super().__init__(f"Failed to kill PID {pid} to free port {port}.", cause)
        self.pid = pid
        self.port = port


def _pids_on_port(port: int) -> list[int]:
    try:
        connections = psutil.net_connections(kind="tcp")
    except psutil.Error as e:
        raise GetSocketInfoError(e) from e

    pids: list[int] = []
    for connection in connections:
        if not connection.laddr or connection.laddr.port != port:
            continue
        if connection.pid and connection.pid not in pids:
            pids.append(connection.pid)
    return pids


def close_open_sockets_on_port(printer: Printer, port: int) -> None:
    """port 에 TCP 소켓(IPv4/IPv6)을 연 프로세스를 강제 종료

    Raises:
        GetSocketInfoError: 소켓 목록 조회 실패 (권한 부족 등)
        FailedToCloseSocketError: 프로세스 종료 실패
    """
    for pid in _pids_on_port(port):
        printer.warn(f"WARNING: Closing existing connection on port {port} (PID: {pid})...")
        try:
            psutil.Process(pid).kill()
        except psutil.NoSuchProcess:
            logger.debug("process already exited: %s", pid)
        except psutil.Error as e:
            raise FailedToCloseSocketError(pid, port, e) from e
