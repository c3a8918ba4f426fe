"""Volcado hexadecimal de ficheros.

Formato (estilo `hexdump -C`):

    00000000  4d 65 72 63 79 0a 00 01  02 03 04 05 06 07 08 09  |Mercy...........|
    00000010  ff                                                |.|
    00000011

- Offset de 8 dígitos hex, dos grupos de bytes, columna ASCII imprimible.
- La última línea es la longitud total del fichero.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.errors import ArtifactIOError, NotFoundError

logger = logging.getLogger(__name__)

_DEFAULT_WIDTH = 16


def read_file_bytes(path: str | Path) -> bytes:
    """Lee el fichero completo en memoria."""

    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except FileNotFoundError as exc:
        raise NotFoundError(f"Unable to locate the file specified: {file_path}", path=file_path) from exc
    except IsADirectoryError as exc:
        raise ArtifactIOError(f"Path is a directory, not a file: {file_path}") from exc
    except OSError as exc:
        raise ArtifactIOError(f"Unable to read {file_path}: {exc}") from exc

    logger.debug("Read %d bytes from %s", len(data), file_path)
    return data


def _ascii_column(chunk: bytes) -> str:
    return "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)


def render_hexdump(data: bytes, *, width: int = _DEFAULT_WIDTH) -> str:
    if width < 1:
        raise ValueError("width must be >= 1")

    half = (width + 1) // 2
    # Ancho fijo de la zona hex para que la columna ASCII quede alineada.
    hex_area = half * 3 - 1
    if width > half:
        hex_area += 2 + (width - half) * 3 - 1

    lines: list[str] = []
    for offset in range(0, len(data), width):
        chunk = data[offset : offset + width]
        left = " ".join(f"{b:02x}" for b in chunk[:half])
        right = " ".join(f"{b:02x}" for b in chunk[half:])
        hex_part = f"{left}  {right}" if right else left
        lines.append(f"{offset:08x}  {hex_part.ljust(hex_area)}  |{_ascii_column(chunk)}|")
    lines.append(f"{len(data):08x}")
    return "\n".join(lines)


def collect_file_hex(path: str | Path, *, width: int = _DEFAULT_WIDTH) -> str:
    return render_hexdump(read_file_bytes(path), width=width)
