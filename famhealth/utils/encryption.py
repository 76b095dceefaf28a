"""Column types that keep health data encrypted at rest."""
import base64
import hashlib
import json
import logging
import os
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.types import Text, TypeDecorator

logger = logging.getLogger("famhealth")


def _build_cipher() -> Fernet:
    """Derive a stable Fernet key from ENCRYPTION_SECRET (or the dev fallback)."""
    secret = os.getenv("ENCRYPTION_SECRET", "dev-secret-key-change-me").encode("utf-8")
    key = base64.urlsafe_b64encode(hashlib.sha256(secret).digest())
    return Fernet(key)


_CIPHER = _build_cipher()


def _decrypt(value: str) -> str | None:
    try:
        return _CIPHER.decrypt(value.encode("utf-8")).decode("utf-8")
    except InvalidToken:
        # written with another ENCRYPTION_SECRET
        logger.warning({"function": "decrypt", "status": "invalid_token"})
        return None


class EncryptedText(TypeDecorator):
    """Encrypts/decrypts text values transparently using Fernet."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        if not isinstance(value, str):
            value = str(value)
        return _CIPHER.encrypt(value.encode("utf-8")).decode("utf-8")

    def process_result_value(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        return _decrypt(value)


class EncryptedJSON(TypeDecorator):
    """Encrypts/decrypts JSON-serializable values (lists of conditions, medications)."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        payload = json.dumps(value, ensure_ascii=False)
        return _CIPHER.encrypt(payload.encode("utf-8")).decode("utf-8")

    def process_result_value(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        raw = _decrypt(value)
        if raw is None:
            return None
        return json.loads(raw)
