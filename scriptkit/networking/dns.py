"""
scriptkit/networking/dns.py - DNS 레코드 조회

시스템 resolver 설정과 무관하게 공용 네임서버(settings.DNS_NAME_SERVER)에 TCP 로 질의합니다.

Usage:
    ip = await dns_query_a_record("api.example.com")
"""

from __future__ import annotations

import logging

import dns.asyncresolver
import dns.exception
import dns.name
import dns.resolver

from scriptkit.config import settings
from scriptkit.exceptions import ScriptError

logger = logging.getLogger(__name__)


class DnsConnectionError(ScriptError):
    """네임서버 연결 / 질의 실패"""

    def __init__(self, details: str, cause: BaseException | None = None):
        super().__init__(f"Failed to establish a connection to the DNS server: {details}.", cause)


class InvalidDnsRequestError(ScriptError):
    """질의할 이름이 올바르지 않은 경우"""

    def __init__(self, details: str, cause: BaseException | None = None):
        super().__init__(f"Failed to send DNS request: {details}.", cause)


class DnsRecordNotFoundError(ScriptError):
    """응답에 요청한 타입의 레코드가 없는 경우"""

    def __init__(self, rtype: str, cause: BaseException | None = None):
        super().__init__(f"No {rtype} record found for the given address.", cause)
        self.rtype = rtype


def _build_resolver() -> dns.asyncresolver.Resolver:
    resolver = dns.asyncresolver.Resolver(configure=False)
    resolver.nameservers = [settings.DNS_NAME_SERVER]
    resolver.lifetime = settings.DNS_TIMEOUT
    return resolver


async def _query(address: str, rtype: str) -> dns.resolver.Answer:
    try:
        name = dns.name.from_text(address)
    except dns.exception.DNSException as e:
        raise InvalidDnsRequestError("could not parse address", e) from e

    logger.debug("dns query: %s %s @%s", address, rtype, settings.DNS_NAME_SERVER)
    try:
        return await _build_resolver().resolve(name, rtype, tcp=True)
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as e:
        raise DnsRecordNotFoundError(rtype, e) from e
    except dns.exception.DNSException as e:
        raise DnsConnectionError("could not send query", e) from e


async def dns_query_a_record(address: str) -> str:
    """address 의 첫 번째 A 레코드 (IPv4 주소)

    Raises:
        InvalidDnsRequestError: 이름 형식 오류
        DnsRecordNotFoundError: A 레코드 없음
        DnsConnectionError: 네임서버 연결 / 질의 실패
    """
    answer = await _query(address, "A")
    return answer[0].address


async def dns_query_cname_record(address: str) -> str:
    """address 의 첫 번째 CNAME 대상 (끝의 '.' 포함)"""
    answer = await _query(address, "CNAME")
    return answer[0].target.to_text()
