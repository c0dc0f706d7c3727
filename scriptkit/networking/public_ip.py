"""
scriptkit/networking/public_ip.py - 공인 IP 조회 (ipify)
"""

from __future__ import annotations

import logging

import requests

from scriptkit.config import settings
from scriptkit.exceptions import ScriptError

logger = logging.getLogger(__name__)


class PublicIpError(ScriptError):
    """공인 IP 조회 요청 실패"""

    def __init__(self, cause: BaseException | None = None):
        super().__init__("Failed to determine public IP address.", cause)


class PublicIpInvalidResponseError(ScriptError):
    """조회 서버의 응답이 올바르지 않은 경우"""

    def __init__(self, details: str | None = None):
        super().__init__(
            "The server used to determine the machine's public IP address returned an invalid response.",
            details={"response": details} if details else None,
        )


def get_public_ip(timeout: int = settings.HTTP_TIMEOUT) -> str:
    """현재 머신의 공인 IP 주소

    Raises:
        PublicIpError: 요청 실패
        PublicIpInvalidResponseError: 2xx 가 아니거나 빈 응답
    """
    try:
        response = requests.get(settings.PUBLIC_IP_URL, timeout=timeout)
    except requests.RequestException as e:
        raise PublicIpError(e) from e

    if not response.ok:
        raise PublicIpInvalidResponseError(f"HTTP {response.status_code}")

    ip = response.text.strip()
    if not ip:
        raise PublicIpInvalidResponseError("empty body")

    logger.debug("public ip: %s", ip)
    return ip
