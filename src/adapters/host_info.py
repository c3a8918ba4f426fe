"""Información del host local (psutil + platform + socket).

Cada dato se consulta por separado: si el SO no expone uno (p.ej. frecuencia
de CPU en algunos contenedores), solo ese campo falla con
`HostInfoUnavailableError`.
"""

from __future__ import annotations

import logging
import platform
import socket

import psutil

from core.domain.models import HostInfo
from core.domain.operations import SystemInfoField
from core.errors import HostInfoUnavailableError

logger = logging.getLogger(__name__)


def get_hostname() -> str:
    name = socket.gethostname()
    if not name:
        raise HostInfoUnavailableError("Hostname is not available")
    return name


def get_cpu_cores() -> int:
    count = psutil.cpu_count(logical=True)
    if not count:
        raise HostInfoUnavailableError("Logical CPU count is not available")
    return int(count)


def get_cpu_speed_mhz() -> int:
    try:
        freq = psutil.cpu_freq()
    except (NotImplementedError, OSError) as exc:
        raise HostInfoUnavailableError(f"CPU frequency is not available: {exc}") from exc
    if freq is None or not freq.current:
        raise HostInfoUnavailableError("CPU frequency is not available")
    return int(round(freq.current))


def get_os_release() -> str:
    release = platform.release()
    if not release:
        raise HostInfoUnavailableError("OS release is not available")
    return release


def get_process_count() -> int:
    try:
        return len(psutil.pids())
    except (psutil.Error, OSError) as exc:
        raise HostInfoUnavailableError(f"Process list is not available: {exc}") from exc


_LABELS: dict[SystemInfoField, str] = {
    SystemInfoField.HOSTNAME: "Hostname: {}",
    SystemInfoField.CPU_CORES: "Number of CPU cores: {}",
    SystemInfoField.CPU_SPEED: "CPU Speed: {} MHz",
    SystemInfoField.OS_RELEASE: "Operating System Release Version: {}",
    SystemInfoField.PROC: "Number of Processes: {}",
}

_GETTERS = {
    SystemInfoField.HOSTNAME: get_hostname,
    SystemInfoField.CPU_CORES: get_cpu_cores,
    SystemInfoField.CPU_SPEED: get_cpu_speed_mhz,
    SystemInfoField.OS_RELEASE: get_os_release,
    SystemInfoField.PROC: get_process_count,
}


def collect_host_info() -> HostInfo:
    """Best-effort: los campos no disponibles quedan en `None`."""

    values: dict[SystemInfoField, object] = {}
    for field, getter in _GETTERS.items():
        try:
            values[field] = getter()
        except HostInfoUnavailableError as exc:
            logger.warning("%s", exc)
            values[field] = None

    return HostInfo(
        hostname=values[SystemInfoField.HOSTNAME],
        cpu_cores=values[SystemInfoField.CPU_CORES],
        cpu_speed_mhz=values[SystemInfoField.CPU_SPEED],
        os_release=values[SystemInfoField.OS_RELEASE],
        process_count=values[SystemInfoField.PROC],
    )


def system_info(field: SystemInfoField | str) -> str:
    """Texto para `extra system_info <campo>`.

    `all` es estricto: si algún campo falla, falla la llamada entera.
    """

    selected = SystemInfoField.parse(field)
    if selected is SystemInfoField.ALL:
        lines = [_LABELS[f].format(getter()) for f, getter in _GETTERS.items()]
        return "\n".join(lines)
    return _LABELS[selected].format(_GETTERS[selected]())
