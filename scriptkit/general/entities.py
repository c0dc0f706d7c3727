"""
scriptkit/general/entities.py - 배포 스크립트 공통 타입
"""

from __future__ import annotations

from enum import Enum


class DeploymentEnv(str, Enum):
    """배포 환경"""

    SANDBOX = "sandbox"
    STAGING = "staging"
    PRODUCTION = "production"

    def __str__(self) -> str:
        return self.value


class DeploymentColor(str, Enum):
    """블루/그린 배포 색상"""

    BLUE = "blue"
    GREEN = "green"

    def __str__(self) -> str:
        return self.value
