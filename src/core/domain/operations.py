"""Operaciones soportadas por grupo de capacidad.

Por qué enums cerrados:
- Cada grupo (decode, encode, hash, ...) declara sus variantes en un único
  sitio; el dispatch se resuelve contra el enum, no contra strings sueltos.
- Un string desconocido solo puede venir de input externo (CLI/llamador) y se
  rechaza con `UnsupportedOperationError` en `parse`.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from core.errors import UnsupportedOperationError

_OpT = TypeVar("_OpT", bound="_Operation")


class _Operation(str, Enum):
    """Base común: parseo tolerante a mayúsculas/espacios."""

    @classmethod
    def group(cls) -> str:
        return cls.__name__.removesuffix("Operation").lower()

    @classmethod
    def parse(cls: type[_OpT], value: "str | _OpT") -> _OpT:
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedOperationError(cls.group(), str(value))

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


class DecodeOperation(_Operation):
    BASE64 = "base64"
    ROT13 = "rot13"


class EncodeOperation(_Operation):
    BASE64 = "base64"


class HashOperation(_Operation):
    SHA2_256 = "sha2_256"
    MD5 = "md5"


class HexOperation(_Operation):
    HEX_DUMP = "hex_dump"


class MaliciousOperation(_Operation):
    STATUS = "status"


class ExtraOperation(_Operation):
    INTERNAL_IP = "internal_ip"
    SYSTEM_INFO = "system_info"
    DEFANG = "defang"
    WHOIS = "whois"


class SystemInfoField(_Operation):
    """Campos seleccionables de `extra system_info`."""

    HOSTNAME = "hostname"
    CPU_CORES = "cpu_cores"
    CPU_SPEED = "cpu_speed"
    OS_RELEASE = "os_release"
    PROC = "proc"
    ALL = "all"

    @classmethod
    def group(cls) -> str:
        return "system_info"
