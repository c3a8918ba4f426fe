"""Contrato de clasificadores de dominios.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el servicio IOC (InQuest u otro) o inyectar un stub en
  tests sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Classification, LookupResult


@runtime_checkable
class DomainClassifier(Protocol):
    """Contrato mínimo para un servicio de clasificación.

    Reglas de diseño:
    - `lookup` es asíncrono porque típicamente hará I/O (HTTP).
    - Un fallo se señala con una excepción de `core.errors`, nunca con
      `Classification.UNCLASSIFIED`.
    """

    async def lookup(self, domain: str) -> LookupResult:
        """Consulta el servicio y devuelve el resultado con sus registros."""

        ...

    async def classify(self, domain: str) -> Classification:
        """Atajo: solo el veredicto."""

        ...
