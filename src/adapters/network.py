"""Utilidades de red: IP interna, defang y WHOIS.

Estos helpers están en adapters porque son I/O puro (sockets), salvo
`defang`, que vive aquí por afinidad (URLs/IPs).
"""

from __future__ import annotations

import logging
import socket

from core.config import AppSettings
from core.errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)

_WHOIS_CHUNK = 4096


def internal_ip(settings: AppSettings | None = None) -> str:
    """IP local usada para salir a internet.

    El `connect` de un socket UDP no envía datagramas: solo fija la ruta, y
    `getsockname()` revela la dirección de la interfaz elegida por el SO.
    """

    settings = settings or AppSettings()
    probe = (settings.ip_probe_host, settings.ip_probe_port)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.settimeout(settings.socket_timeout_seconds)
            sock.bind(("0.0.0.0", 0))
            sock.connect(probe)
            address = sock.getsockname()[0]
    except OSError as exc:
        logger.warning("Internal IP discovery via %s:%s failed: %s", *probe, exc)
        raise NetworkError(f"Unable to determine internal IP address: {exc}") from exc
    return str(address)


def defang(ip_or_url: str) -> str:
    """Sustituye cada `.` por `[.]` (URLs, dominios, IPs)."""

    return ip_or_url.replace(".", "[.]")


def whois_lookup(domain: str, settings: AppSettings | None = None) -> str:
    """Consulta WHOIS cruda (RFC 3912): `<dominio>\\r\\n` y lectura hasta EOF."""

    settings = settings or AppSettings()
    server = (settings.whois_server, settings.whois_port)
    logger.debug("WHOIS query for %r against %s:%s", domain, *server)

    chunks: list[bytes] = []
    try:
        with socket.create_connection(server, timeout=settings.whois_timeout_seconds) as sock:
            sock.sendall(f"{domain}\r\n".encode("utf-8"))
            while True:
                chunk = sock.recv(_WHOIS_CHUNK)
                if not chunk:
                    break
                chunks.append(chunk)
    except OSError as exc:
        logger.warning("WHOIS query to %s:%s failed: %s", *server, exc)
        raise NetworkError(f"WHOIS query to {server[0]}:{server[1]} failed: {exc}") from exc

    raw = b"".join(chunks)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"WHOIS response is not valid UTF-8: {exc}") from exc
