"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/sockets/artefactos) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "mercy"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mercy"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mercy"
    return Path.home() / ".config" / "mercy"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="MERCY_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request HTTP (segundos).",
    )
    user_agent: str = Field(
        default="mercy/1.2 (+https://docs.rs/crate/mercy/latest)",
        min_length=1,
        description="User-Agent para peticiones al servicio IOC.",
    )
    ioc_base_url: str = Field(
        default="https://labs.inquest.net",
        min_length=8,
        description="Base URL del servicio de búsqueda de IOCs (InQuest Labs).",
    )

    whois_server: str = Field(
        default="whois.verisign-grs.com",
        min_length=1,
        description="Servidor WHOIS consultado por `extra whois`.",
    )
    whois_port: int = Field(
        default=43,
        ge=1,
        le=65535,
        description="Puerto TCP del servidor WHOIS.",
    )
    whois_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de conexión/lectura WHOIS (segundos).",
    )

    ip_probe_host: str = Field(
        default="8.8.8.8",
        min_length=1,
        description="Dirección pública usada para descubrir la IP interna (no se envían datos).",
    )
    ip_probe_port: int = Field(
        default=80,
        ge=1,
        le=65535,
        description="Puerto de la dirección de sondeo UDP.",
    )
    socket_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout para el socket UDP de descubrimiento.",
    )

    artifact_dir: Path | None = Field(
        default=None,
        description="Directorio para el artefacto temporal de la búsqueda IOC (None => tempdir del sistema).",
    )
    hexdump_width: int = Field(
        default=16,
        ge=1,
        le=64,
        description="Bytes por fila en el volcado hexadecimal.",
    )

    log_level: str = Field(
        default="WARNING",
        pattern=r"(?i)^(debug|info|warning|error|critical)$",
        description="Nivel de logging por defecto de la CLI.",
    )
