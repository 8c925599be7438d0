"""
서비스 연결 설정 암호화

AES-256-GCM, 저장 형식은 "iv:authTag:ciphertext" (모두 hex)
"""

import json
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from career_digest.core.config import settings
from career_digest.core.exceptions import SecretDecryptError

IV_LENGTH = 12
TAG_LENGTH = 16


def _get_key(key_hex: str | None = None) -> bytes:
    key_hex = key_hex if key_hex is not None else settings.encryption_key
    if not key_hex:
        raise RuntimeError("ENCRYPTION_KEY가 설정되지 않았습니다")
    return bytes.fromhex(key_hex)


def encrypt(plaintext: str, key_hex: str | None = None) -> str:
    """문자열 암호화"""
    iv = os.urandom(IV_LENGTH)
    sealed = AESGCM(_get_key(key_hex)).encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
    return f"{iv.hex()}:{tag.hex()}:{ciphertext.hex()}"


def decrypt(token: str, key_hex: str | None = None) -> str:
    """encrypt 결과 복호화

    Raises:
        SecretDecryptError: 형식이 잘못됐거나 키/태그가 맞지 않는 경우
    """
    try:
        iv_hex, tag_hex, ciphertext_hex = token.split(":")
        iv = bytes.fromhex(iv_hex)
        sealed = bytes.fromhex(ciphertext_hex) + bytes.fromhex(tag_hex)
        plaintext = AESGCM(_get_key(key_hex)).decrypt(iv, sealed, None)
    except (ValueError, InvalidTag) as e:
        raise SecretDecryptError(detail=type(e).__name__) from e
    return plaintext.decode("utf-8")


def encrypt_json(data: dict, key_hex: str | None = None) -> str:
    return encrypt(json.dumps(data, ensure_ascii=False), key_hex)


def decrypt_json(token: str, key_hex: str | None = None) -> dict:
    return json.loads(decrypt(token, key_hex))
