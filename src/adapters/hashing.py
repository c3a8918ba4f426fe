"""Digests sobre la representación UTF-8 del texto (hex en minúsculas)."""

from __future__ import annotations

import hashlib


def sha2_256_hash(plaintext: str) -> str:
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def md5_hash(plaintext: str) -> str:
    return hashlib.md5(plaintext.encode("utf-8")).hexdigest()  # nosec - uso forense, no criptográfico
