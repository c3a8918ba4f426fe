"""Codecs de texto: base64 y rot13.

Transformaciones puras sin estado. Solo `base64_decode` puede fallar.
"""

from __future__ import annotations

import base64
import binascii
import codecs

from core.errors import DecodeError


def base64_decode(encoded: str) -> str:
    """Decodifica base64 estándar (alfabeto y padding estrictos).

    Los bytes resultantes se interpretan como UTF-8 con reemplazo: un payload
    binario no es un error de decodificación base64.
    """

    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid base64 input: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


def base64_encode(plaintext: str) -> str:
    return base64.b64encode(plaintext.encode("utf-8")).decode("ascii")


def rot13_decode(encoded: str) -> str:
    # El codec rot13 de la stdlib solo rota letras ASCII; el resto pasa tal cual.
    return codecs.encode(encoded, "rot13")
