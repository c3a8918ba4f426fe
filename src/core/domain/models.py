"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- La respuesta del servicio IOC se valida contra un esquema explícito; un
  cuerpo con forma inesperada es un error, no una clasificación.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Classification(str, Enum):
    """Veredicto que el servicio IOC asigna a un dominio."""

    MALICIOUS = "Malicious"
    UNKNOWN = "Unknown"
    SUSPICIOUS = "Suspicious"
    UNCLASSIFIED = "Unclassified"

    @classmethod
    def from_service_value(cls, value: object) -> "Classification":
        """Mapea el valor crudo del servicio por coincidencia exacta."""

        return _SERVICE_VALUES.get(value, cls.UNCLASSIFIED) if isinstance(value, str) else cls.UNCLASSIFIED


_SERVICE_VALUES: dict[str, Classification] = {
    "MALICIOUS": Classification.MALICIOUS,
    "UNKNOWN": Classification.UNKNOWN,
    "SUSPICIOUS": Classification.SUSPICIOUS,
}


class IocRecord(BaseModel):
    """Un registro del array `data` devuelto por el servicio IOC."""

    model_config = ConfigDict(extra="allow")

    # Sin tipo estricto: un valor no textual (número, objeto) no invalida la
    # respuesta, solo termina como UNCLASSIFIED en `from_service_value`.
    classification: object | None = Field(
        default=None,
        description="Clasificación cruda (MALICIOUS/UNKNOWN/SUSPICIOUS u otra).",
    )


class IocSearchResponse(BaseModel):
    """Documento JSON de la búsqueda de IOCs por dominio."""

    model_config = ConfigDict(extra="ignore")

    data: list[IocRecord] = Field(
        ...,
        description="Registros encontrados para el keyword consultado.",
    )

    def first_classification(self) -> Classification:
        """Clasificación del primer registro; `UNCLASSIFIED` si no hay registros."""

        if not self.data:
            return Classification.UNCLASSIFIED
        return Classification.from_service_value(self.data[0].classification)


class LookupResult(BaseModel):
    """Resultado completo de una búsqueda de dominio.

    Por qué además de la clasificación:
    - Conserva los registros para que el llamador pueda auditar o agregar
      (el servicio puede devolver varios registros con veredictos distintos).
    """

    domain: str = Field(..., description="Dominio consultado tal cual lo pasó el llamador.")
    classification: Classification = Field(..., description="Veredicto derivado del primer registro.")
    records: list[IocRecord] = Field(default_factory=list, description="Registros devueltos por el servicio.")
    url: str = Field(..., description="URL efectiva de la consulta.")


class HostInfo(BaseModel):
    """Datos básicos del host local."""

    hostname: str | None = None
    cpu_cores: int | None = Field(default=None, ge=0)
    cpu_speed_mhz: int | None = Field(default=None, ge=0)
    os_release: str | None = None
    process_count: int | None = Field(default=None, ge=0)


class SourceInfo(BaseModel):
    """Información sobre el propio paquete (autor, versión, documentación)."""

    name: str
    version: str
    author: str
    documentation: str

    def render(self) -> str:
        return f"Author: {self.author}\nVersion: {self.version}\nDocumentation: {self.documentation}"
