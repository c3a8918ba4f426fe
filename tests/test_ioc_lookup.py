"""Tests for adapters.ioc_lookup -- domain classification via the IOC service.

Covers the classification mapping, the empty-vs-malformed policy, network
failures, artifact lifecycle (create/read/remove) and concurrent lookups.
"""

from __future__ import annotations

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import httpx
import pytest

from adapters import ioc_lookup
from adapters.ioc_lookup import (
    InQuestDomainClassifier,
    malicious_domain_status,
    parse_search_response,
    read_artifact,
    scoped_artifact,
)
from conftest import ioc_body, static_transport
from core.config import AppSettings
from core.domain.models import Classification
from core.errors import ArtifactIOError, NetworkError, NotFoundError, ParseError
from core.interfaces.classifier import DomainClassifier


# ---------------------------------------------------------------------------
# Classification mapping
# ---------------------------------------------------------------------------


class TestClassificationMapping:
    """Exact-match mapping of the first record's classification."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("MALICIOUS", Classification.MALICIOUS),
            ("UNKNOWN", Classification.UNKNOWN),
            ("SUSPICIOUS", Classification.SUSPICIOUS),
            ("malicious", Classification.UNCLASSIFIED),
            ("BENIGN", Classification.UNCLASSIFIED),
            (None, Classification.UNCLASSIFIED),
        ],
    )
    def test_mapping(self, settings: AppSettings, raw: str | None, expected: Classification) -> None:
        result = malicious_domain_status("example.com", settings, transport=static_transport(ioc_body(raw)))
        assert result is expected

    @pytest.mark.parametrize("raw", [1, 0.5, True, {"label": "MALICIOUS"}, ["MALICIOUS"]])
    def test_non_string_classification_is_unclassified(self, settings: AppSettings, raw: object) -> None:
        body = json.dumps({"data": [{"classification": raw}]})
        result = malicious_domain_status("example.com", settings, transport=static_transport(body))
        assert result is Classification.UNCLASSIFIED

    def test_empty_data_is_unclassified(self, settings: AppSettings) -> None:
        """An empty record list is a valid answer, not an error."""
        body = json.dumps({"data": []})
        result = malicious_domain_status("example.com", settings, transport=static_transport(body))
        assert result is Classification.UNCLASSIFIED

    def test_only_first_record_is_used(self, settings: AppSettings) -> None:
        body = ioc_body("UNKNOWN", "MALICIOUS")
        result = malicious_domain_status("example.com", settings, transport=static_transport(body))
        assert result is Classification.UNKNOWN

    def test_lookup_keeps_all_records(self, settings: AppSettings) -> None:
        classifier = InQuestDomainClassifier(settings, transport=static_transport(ioc_body("SUSPICIOUS", "MALICIOUS")))
        result = asyncio.run(classifier.lookup("example.com"))

        assert result.classification is Classification.SUSPICIOUS
        assert [r.classification for r in result.records] == ["SUSPICIOUS", "MALICIOUS"]
        assert result.domain == "example.com"

    def test_classifier_satisfies_protocol(self, settings: AppSettings) -> None:
        assert isinstance(InQuestDomainClassifier(settings), DomainClassifier)


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------


class TestRequest:
    """The outgoing request targets the search endpoint with the keyword."""

    def test_keyword_query_parameter(self, settings: AppSettings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=ioc_body("MALICIOUS"))

        classifier = InQuestDomainClassifier(settings, transport=httpx.MockTransport(handler))
        result = asyncio.run(classifier.lookup("evil.example"))

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "ioc.test"
        assert request.url.path == "/api/dfi/search/ioc/domain"
        assert request.url.params["keyword"] == "evil.example"
        assert result.url.startswith("https://ioc.test/api/dfi/search/ioc/domain?keyword=")

    def test_endpoint_strips_trailing_slash(self, artifact_dir: Path) -> None:
        settings = AppSettings(_env_file=None, ioc_base_url="https://ioc.test/", artifact_dir=artifact_dir)
        assert InQuestDomainClassifier(settings).endpoint == "https://ioc.test/api/dfi/search/ioc/domain"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    """Every failing step surfaces as a typed error."""

    @pytest.mark.parametrize("body", ["not json", "[1, 2]", '{"results": []}', '{"data": "nope"}'])
    def test_malformed_body_is_parse_error(self, settings: AppSettings, body: str) -> None:
        with pytest.raises(ParseError):
            malicious_domain_status("example.com", settings, transport=static_transport(body))

    def test_http_error_status(self, settings: AppSettings) -> None:
        with pytest.raises(NetworkError) as excinfo:
            malicious_domain_status("example.com", settings, transport=static_transport("oops", status_code=503))
        assert excinfo.value.status_code == 503

    def test_transport_failure(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as excinfo:
            malicious_domain_status("example.com", settings, transport=httpx.MockTransport(handler))
        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    def test_redirect_loop_is_network_error(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": str(request.url)})

        with pytest.raises(NetworkError) as excinfo:
            malicious_domain_status("example.com", settings, transport=httpx.MockTransport(handler))
        assert isinstance(excinfo.value.__cause__, httpx.TooManyRedirects)

    def test_corrupt_gzip_body_is_network_error(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"Content-Encoding": "gzip"},
                stream=httpx.ByteStream(b"not gzip"),
            )

        with pytest.raises(NetworkError) as excinfo:
            malicious_domain_status("example.com", settings, transport=httpx.MockTransport(handler))
        assert isinstance(excinfo.value.__cause__, httpx.DecodingError)

    def test_missing_artifact_dir_is_artifact_error(self, tmp_path: Path) -> None:
        settings = AppSettings(
            _env_file=None,
            ioc_base_url="https://ioc.test",
            artifact_dir=tmp_path / "does-not-exist",
        )
        with pytest.raises(ArtifactIOError):
            malicious_domain_status("example.com", settings, transport=static_transport(ioc_body("MALICIOUS")))


# ---------------------------------------------------------------------------
# Artifact lifecycle
# ---------------------------------------------------------------------------


class TestArtifactLifecycle:
    """The temporary artifact never outlives the call."""

    def test_removed_after_success(self, settings: AppSettings, artifact_dir: Path) -> None:
        malicious_domain_status("example.com", settings, transport=static_transport(ioc_body("MALICIOUS")))
        assert list(artifact_dir.iterdir()) == []

    def test_removed_after_parse_failure(self, settings: AppSettings, artifact_dir: Path) -> None:
        with pytest.raises(ParseError):
            malicious_domain_status("example.com", settings, transport=static_transport("{broken"))
        assert list(artifact_dir.iterdir()) == []

    def test_scoped_artifact_roundtrip(self, artifact_dir: Path) -> None:
        with scoped_artifact('{"data": []}', artifact_dir) as path:
            assert path.parent == artifact_dir
            assert path.name.startswith(ioc_lookup.ARTIFACT_PREFIX)
            assert path.suffix == ".json"
            assert read_artifact(path) == '{"data": []}'
        assert not path.exists()

    def test_scoped_artifact_paths_are_unique(self, artifact_dir: Path) -> None:
        with scoped_artifact("a", artifact_dir) as first, scoped_artifact("b", artifact_dir) as second:
            assert first != second
            assert read_artifact(first) == "a"
            assert read_artifact(second) == "b"

    def test_delete_failure_is_reported(self, artifact_dir: Path) -> None:
        with pytest.raises(ArtifactIOError):
            with scoped_artifact("{}", artifact_dir) as path:
                path.unlink()

    def test_body_error_wins_over_cleanup(self, artifact_dir: Path) -> None:
        """When the block fails, its error propagates even if cleanup has nothing to remove."""
        with pytest.raises(ParseError):
            with scoped_artifact("{}", artifact_dir) as path:
                path.unlink()
                raise ParseError("boom")

    def test_read_vanished_artifact(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            read_artifact(tmp_path / "gone.json")
        assert excinfo.value.path == tmp_path / "gone.json"


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


def _per_domain_transport() -> httpx.MockTransport:
    verdicts = {"bad.example": "MALICIOUS", "odd.example": "SUSPICIOUS"}

    def handler(request: httpx.Request) -> httpx.Response:
        keyword = request.url.params["keyword"]
        return httpx.Response(200, text=ioc_body(verdicts.get(keyword, "UNKNOWN")))

    return httpx.MockTransport(handler)


class TestConcurrency:
    """Simultaneous lookups for different domains never share results."""

    def test_gathered_lookups_use_distinct_artifacts(
        self, settings: AppSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        reads: list[tuple[Path, str]] = []
        original = ioc_lookup.read_artifact

        def spy(path: Path) -> str:
            content = original(path)
            reads.append((path, content))
            return content

        monkeypatch.setattr(ioc_lookup, "read_artifact", spy)
        classifier = InQuestDomainClassifier(settings, transport=_per_domain_transport())

        async def both() -> list[Classification]:
            return await asyncio.gather(
                classifier.classify("bad.example"),
                classifier.classify("odd.example"),
            )

        assert asyncio.run(both()) == [Classification.MALICIOUS, Classification.SUSPICIOUS]
        assert len({path for path, _ in reads}) == 2

    def test_threaded_lookups(self, settings: AppSettings, artifact_dir: Path) -> None:
        domains = ["bad.example", "odd.example", "new.example"] * 4
        expected = {
            "bad.example": Classification.MALICIOUS,
            "odd.example": Classification.SUSPICIOUS,
            "new.example": Classification.UNKNOWN,
        }

        def run(domain: str) -> tuple[str, Classification]:
            return domain, malicious_domain_status(domain, settings, transport=_per_domain_transport())

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(run, domains))

        for domain, verdict in results:
            assert verdict is expected[domain]
        assert list(artifact_dir.iterdir()) == []


# ---------------------------------------------------------------------------
# parse_search_response
# ---------------------------------------------------------------------------


class TestParseSearchResponse:
    """Schema validation of the raw body."""

    def test_extra_fields_are_tolerated(self) -> None:
        document = parse_search_response('{"data": [{"classification": "MALICIOUS", "ioc": "x"}], "success": true}')
        assert document.first_classification() is Classification.MALICIOUS

    def test_record_without_classification(self) -> None:
        document = parse_search_response('{"data": [{"ioc": "x"}]}')
        assert document.first_classification() is Classification.UNCLASSIFIED
