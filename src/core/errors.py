"""Taxonomía de errores de Mercy.

Por qué una jerarquía propia:
- Cada paso falible (red, fichero, parseo) se reporta al llamador con un tipo
  distinto, en lugar de abortar el proceso o degradar a un valor por defecto.
- La CLI puede capturar `MercyError` en un único punto y decidir el exit code.

Regla: los adaptadores encadenan la excepción original (`raise ... from exc`).
"""

from __future__ import annotations

from pathlib import Path


class MercyError(Exception):
    """Base de todos los errores recuperables de la librería."""


class DecodeError(MercyError):
    """Entrada codificada inválida (base64 mal formado, bytes no UTF-8)."""


class NotFoundError(MercyError):
    """El fichero o ruta referenciado no existe."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NetworkError(MercyError):
    """Fallo de transporte (conexión, DNS, timeout) o status HTTP no exitoso."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(MercyError):
    """La respuesta no es un documento válido o le falta un campo esperado."""


class ArtifactIOError(MercyError):
    """No se pudo crear, escribir o borrar el artefacto temporal."""


class UnsupportedOperationError(MercyError):
    """El nombre de operación no corresponde a ninguna variante conocida."""

    def __init__(self, group: str, operation: str) -> None:
        super().__init__(f"Unsupported {group} operation: {operation!r}")
        self.group = group
        self.operation = operation


class HostInfoUnavailableError(MercyError):
    """El sistema operativo no expone el dato solicitado."""
