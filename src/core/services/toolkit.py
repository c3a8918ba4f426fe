"""Dispatch tipado de las operaciones de Mercy.

Este módulo es la superficie "grupo + operación + payload -> str" que usan la
CLI y cualquier llamador externo. Cada grupo resuelve su operación contra un
enum cerrado (`core.domain.operations`) y delega en el adaptador concreto.

Los errores de los adaptadores se propagan tal cual; el único error propio de
esta capa es `UnsupportedOperationError` para nombres desconocidos.
"""

from __future__ import annotations

from importlib import metadata

from adapters import hashing, hexdump, host_info, network, text_codecs
from adapters.ioc_lookup import malicious_domain_status
from core.config import AppSettings
from core.domain.models import SourceInfo
from core.domain.operations import (
    DecodeOperation,
    EncodeOperation,
    ExtraOperation,
    HashOperation,
    HexOperation,
    MaliciousOperation,
)

PACKAGE_NAME = "mercy"
VERSION = "1.2.17"
AUTHOR = "Catherine Framework (https://github.com/CatherineFramework)"
DOCUMENTATION_URL = "https://docs.rs/crate/mercy/latest"


def source_info() -> SourceInfo:
    """Autor, versión y documentación del paquete."""

    try:
        version = metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        version = VERSION
    return SourceInfo(
        name=PACKAGE_NAME,
        version=version,
        author=AUTHOR,
        documentation=DOCUMENTATION_URL,
    )


def decode(operation: DecodeOperation | str, payload: str) -> str:
    op = DecodeOperation.parse(operation)
    if op is DecodeOperation.BASE64:
        return text_codecs.base64_decode(payload)
    return text_codecs.rot13_decode(payload)


def encode(operation: EncodeOperation | str, payload: str) -> str:
    EncodeOperation.parse(operation)
    return text_codecs.base64_encode(payload)


def hash_text(operation: HashOperation | str, payload: str) -> str:
    op = HashOperation.parse(operation)
    if op is HashOperation.SHA2_256:
        return hashing.sha2_256_hash(payload)
    return hashing.md5_hash(payload)


def hex_dump(operation: HexOperation | str, path: str, settings: AppSettings | None = None) -> str:
    HexOperation.parse(operation)
    settings = settings or AppSettings()
    return hexdump.collect_file_hex(path, width=settings.hexdump_width)


def malicious(operation: MaliciousOperation | str, domain: str, settings: AppSettings | None = None) -> str:
    MaliciousOperation.parse(operation)
    return malicious_domain_status(domain, settings).value


def extra(operation: ExtraOperation | str, payload: str = "", settings: AppSettings | None = None) -> str:
    """Operaciones misceláneas.

    `payload` depende de la operación: campo para `system_info`, URL/IP para
    `defang`, dominio para `whois`; `internal_ip` lo ignora.
    """

    op = ExtraOperation.parse(operation)
    if op is ExtraOperation.INTERNAL_IP:
        return network.internal_ip(settings)
    if op is ExtraOperation.SYSTEM_INFO:
        return host_info.system_info(payload)
    if op is ExtraOperation.DEFANG:
        return network.defang(payload)
    return network.whois_lookup(payload, settings)
