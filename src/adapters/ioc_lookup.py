"""Clasificación de dominios vía InQuest Labs (búsqueda de IOCs).

Responsabilidad:
- Consultar `/api/dfi/search/ioc/domain?keyword=<dominio>`.
- Persistir el cuerpo en un artefacto temporal único por llamada, recargarlo
  y validarlo contra `IocSearchResponse`.
- Derivar la `Classification` del primer registro.

Política de errores:
- Cualquier paso que falle se propaga como error tipado (`core.errors`); un
  fallo nunca se convierte en `Classification.UNCLASSIFIED`.
- `{"data": []}` es una respuesta válida sin registros => `UNCLASSIFIED`.
- No hay reintentos: la política de reintento es del llamador.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import Classification, IocSearchResponse, LookupResult
from core.errors import ArtifactIOError, NetworkError, NotFoundError, ParseError
from core.interfaces.classifier import DomainClassifier

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "mercy_domain_review_"
ARTIFACT_SUFFIX = ".json"


def parse_search_response(text: str) -> IocSearchResponse:
    """Valida el cuerpo crudo como documento de búsqueda de IOCs."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"IOC response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseError(f"IOC response must be a JSON object, got {type(payload).__name__}")

    try:
        return IocSearchResponse.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(f"IOC response has an unexpected shape: {exc.error_count()} error(s)") from exc


@contextmanager
def scoped_artifact(body: str, directory: Path | None = None) -> Iterator[Path]:
    """Escribe `body` en un fichero temporal único y lo borra al salir.

    - Nombre aleatorio (`mkstemp`): llamadas concurrentes nunca comparten ruta.
    - Si el bloque falla, el borrado es best-effort y se propaga el error original.
    - Si el bloque termina bien, un fallo al borrar es `ArtifactIOError`.
    """

    try:
        fd, name = tempfile.mkstemp(
            prefix=ARTIFACT_PREFIX,
            suffix=ARTIFACT_SUFFIX,
            dir=str(directory) if directory is not None else None,
        )
    except OSError as exc:
        raise ArtifactIOError(f"Unable to create temporary artifact: {exc}") from exc

    path = Path(name)
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(body)
        except OSError as exc:
            raise ArtifactIOError(f"Unable to write temporary artifact {path}: {exc}") from exc
        logger.debug("Wrote %d chars to artifact %s", len(body), path)
        yield path
    except BaseException:
        try:
            path.unlink(missing_ok=True)
        except OSError as cleanup_exc:
            logger.warning("Could not remove artifact %s after failure: %s", path, cleanup_exc)
        raise

    try:
        path.unlink()
    except OSError as exc:
        raise ArtifactIOError(f"Unable to remove temporary artifact {path}: {exc}") from exc
    logger.debug("Removed artifact %s", path)


def read_artifact(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"Temporary artifact disappeared: {path}", path=path) from exc
    except OSError as exc:
        raise ArtifactIOError(f"Unable to read temporary artifact {path}: {exc}") from exc


class InQuestDomainClassifier(DomainClassifier):
    """Clasificador de dominios respaldado por InQuest Labs."""

    _search_path = "/api/dfi/search/ioc/domain"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._settings.ioc_base_url.rstrip("/") + self._search_path

    async def _fetch(self, domain: str) -> tuple[str, str]:
        async with build_async_client(self._settings, transport=self._transport) as client:
            try:
                response = await client.get(self.endpoint, params={"keyword": domain})
            except httpx.RequestError as exc:
                logger.warning("IOC lookup for %r failed: %s", domain, exc)
                raise NetworkError(f"IOC lookup request failed: {exc}") from exc

        url = str(response.url)
        if not response.is_success:
            logger.warning("IOC lookup for %r returned HTTP %s", domain, response.status_code)
            raise NetworkError(
                f"IOC lookup returned HTTP {response.status_code} for {url}",
                status_code=response.status_code,
            )
        return response.text, url

    async def lookup(self, domain: str) -> LookupResult:
        body, url = await self._fetch(domain)

        with scoped_artifact(body, self._settings.artifact_dir) as artifact:
            content = read_artifact(artifact)
            document = parse_search_response(content)

        classification = document.first_classification()
        if len(document.data) > 1:
            logger.debug("IOC lookup for %r returned %d records; using the first", domain, len(document.data))
        logger.info("Domain %r classified as %s", domain, classification.value)

        return LookupResult(
            domain=domain,
            classification=classification,
            records=document.data,
            url=url,
        )

    async def classify(self, domain: str) -> Classification:
        result = await self.lookup(domain)
        return result.classification


def malicious_domain_status(
    domain: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Classification:
    """Entrada síncrona: un event loop nuevo por llamada (bloquea al llamador)."""

    classifier = InQuestDomainClassifier(settings, transport=transport)
    return asyncio.run(classifier.classify(domain))
