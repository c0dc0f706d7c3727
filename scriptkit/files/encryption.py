"""
scriptkit/files/encryption.py - 비밀번호 기반 파일 암호화

Argon2id 로 비밀번호에서 키를 만들고 AES-256-GCM 으로 암호화합니다.

파일 형식:
    salt (16 bytes) | nonce (12 bytes) | SHA-256(평문) (32 bytes) | ciphertext + tag

평문 해시가 함께 저장되어 있어 비밀번호 없이도 내용이 바뀌었는지 확인할 수 있습니다.

Usage:
    write_encrypted_file(".secrets/keystore.enc", keystore, password)
    if not encrypted_file_matches_content(".secrets/keystore.enc", keystore):
        ...
    keystore = read_encrypted_file(".secrets/keystore.enc", password)
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

from argon2.exceptions import Argon2Error
from argon2.low_level import Type, hash_secret_raw
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from scriptkit.exceptions import FileSystemError

logger = logging.getLogger(__name__)

SALT_SIZE = 16
NONCE_SIZE = 12
HASH_SIZE = 32
KEY_SIZE = 32
HEADER_SIZE = SALT_SIZE + NONCE_SIZE + HASH_SIZE

# Argon2id v19 기본 파라미터 (m=19 MiB, t=2, p=1)
ARGON2_TIME_COST = 2
ARGON2_MEMORY_COST = 19 * 1024
ARGON2_PARALLELISM = 1


class FileEncryptionError(FileSystemError):
    """파일 암호화/복호화 실패"""

    def __init__(self, details: str, path: str | None = None, cause: BaseException | None = None):
        super().__init__(f"File encryption error: {details}.", path, cause)


def _derive_key(password: str, salt: bytes) -> bytes:
    try:
        return hash_secret_raw(
            secret=password.encode("utf-8"),
            salt=salt,
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST,
            parallelism=ARGON2_PARALLELISM,
            hash_len=KEY_SIZE,
            type=Type.ID,
        )
    except Argon2Error as e:
        raise FileEncryptionError("failed to derive key", cause=e) from e


def _read_encrypted(path: Path) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileEncryptionError("failed to open file", str(path), e) from e
    if len(data) < HEADER_SIZE:
        raise FileEncryptionError("file is too short to be encrypted", str(path))
    return data


def write_encrypted_file(path: str | os.PathLike[str], content: str, password: str) -> None:
    """content 를 암호화하여 path 에 기록 (기존 파일은 덮어씀)

    Raises:
        FileEncryptionError: 키 생성 또는 파일 쓰기 실패
    """
    path = Path(path)
    data = content.encode("utf-8")
    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)

    ciphertext = AESGCM(_derive_key(password, salt)).encrypt(nonce, data, None)
    digest = hashlib.sha256(data).digest()

    try:
        path.write_bytes(salt + nonce + digest + ciphertext)
    except OSError as e:
        raise FileEncryptionError("failed to write file", str(path), e) from e
    logger.debug("encrypted %d bytes to %s", len(data), path)


def read_encrypted_file(path: str | os.PathLike[str], password: str) -> str:
    """write_encrypted_file 로 만든 파일을 복호화

    Raises:
        FileEncryptionError: 파일 읽기 실패, 잘못된 비밀번호 또는 손상된 파일
    """
    path = Path(path)
    data = _read_encrypted(path)
    salt = data[:SALT_SIZE]
    nonce = data[SALT_SIZE : SALT_SIZE + NONCE_SIZE]
    ciphertext = data[HEADER_SIZE:]

    try:
        plaintext = AESGCM(_derive_key(password, salt)).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise FileEncryptionError("failed to decrypt ciphertext", str(path), e) from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileEncryptionError("failed to convert decrypted bytes to string", str(path), e) from e


def encrypted_file_matches_content(path: str | os.PathLike[str], content: str) -> bool:
    """암호화된 파일의 평문이 content 와 같은지 (저장된 해시 비교, 복호화하지 않음)

    Raises:
        FileEncryptionError: 파일 읽기 실패
    """
    path = Path(path)
    data = _read_encrypted(path)
    stored = data[SALT_SIZE + NONCE_SIZE : HEADER_SIZE]
    return stored == hashlib.sha256(content.encode("utf-8")).digest()
