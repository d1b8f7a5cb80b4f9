"""HTTP level tests for /ready and /v1/submit."""
import pytest
from fastapi.testclient import TestClient

from app import create_app
from common.exceptions import DocumentStoreInitializationException
from config.config import Settings
from dependencies import get_telemetry_service


def test_ready_returns_ok(make_client, store):
    client = make_client(store)

    response = client.get("/ready")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["content-type"].startswith("text/plain")


def test_ready_does_not_depend_on_store_health(make_client, failing_store):
    client = make_client(failing_store)

    response = client.get("/ready")

    assert response.status_code == 200
    assert response.text == "ok"
    assert failing_store.create_calls == 0


def test_submit_persists_valid_telemetry(make_client, store):
    client = make_client(store)

    response = client.post("/v1/submit", json={
        "version": "v2.0.42",
        "installedScanTypes": ["nmap", "sslyze"],
    })

    assert response.status_code == 200
    assert response.text == "ok"
    assert store.documents == [(
        "telemetry-2023",
        {
            "@timestamp": "2023-05-17T09:30:00Z",
            "version": "v2.0.42",
            "installedScanTypes": ["nmap", "sslyze"],
        },
    )]


def test_submit_rejects_unofficial_scan_types(make_client, store):
    client = make_client(store)

    response = client.post("/v1/submit", json={
        "version": "v2.0.42",
        "installedScanTypes": ["fooooobarrrrrrrrr"],
    })

    assert response.status_code == 400
    assert "Invalid ScanType 'fooooobarrrrrrrrr'" in response.text
    assert response.headers["X-Error-Code"] == "INVALID_SCAN_TYPE"
    assert store.create_calls == 0


def test_submit_reports_store_failure_generically(make_client, failing_store):
    client = make_client(failing_store)

    response = client.post("/v1/submit", json={
        "version": "v2.0.42",
        "installedScanTypes": ["nmap", "sslyze"],
    })

    assert response.status_code == 500
    assert response.text == "elasticsearch connection failed"
    assert "401" not in response.text


def test_submit_accepts_other(make_client, store):
    client = make_client(store)

    response = client.post("/v1/submit", json={
        "version": "v1.0.0",
        "installedScanTypes": ["other"],
    })

    assert response.status_code == 200
    assert store.documents[0][1]["installedScanTypes"] == ["other"]


def test_submit_accepts_empty_scan_type_list(make_client, store):
    client = make_client(store)

    response = client.post("/v1/submit", json={"version": "v1.0.0", "installedScanTypes": []})

    assert response.status_code == 200
    assert store.create_calls == 1


@pytest.mark.parametrize("body", [
    {"version": "v2.0.42"},
    {"installedScanTypes": ["nmap"]},
    {"version": "", "installedScanTypes": ["nmap"]},
    {"version": "v2.0.42", "installedScanTypes": None},
    {"version": "v2.0.42", "installedScanTypes": "nmap"},
    {"version": "v2.0.42", "installed_scan_types": ["nmap"]},
])
def test_submit_rejects_malformed_bodies(make_client, store, body):
    client = make_client(store)

    response = client.post("/v1/submit", json=body)

    assert response.status_code == 400
    assert response.text
    assert store.create_calls == 0


def test_missing_field_is_named_in_error(make_client, store):
    client = make_client(store)

    response = client.post("/v1/submit", json={"version": "v2.0.42"})

    assert response.status_code == 400
    assert "installedScanTypes" in response.text


def test_submit_rejects_invalid_json(make_client, store):
    client = make_client(store)

    response = client.post(
        "/v1/submit",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert store.create_calls == 0


def test_every_response_has_request_id(make_client, store):
    client = make_client(store)

    first = client.get("/ready")
    second = client.post("/v1/submit", json={"version": "v1", "installedScanTypes": ["nope"]})

    assert first.headers["X-Request-ID"]
    assert second.headers["X-Request-ID"]
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


def test_unexpected_errors_become_plain_500(make_client, store):
    class BrokenService:
        async def ingest(self, submission):
            raise ValueError("boom")

    client = make_client(store)
    client.app.dependency_overrides[get_telemetry_service] = lambda: BrokenService()

    response = client.post("/v1/submit", json={"version": "v1", "installedScanTypes": ["nmap"]})

    assert response.status_code == 500
    assert response.text == "internal server error"
    assert "boom" not in response.text


def test_startup_fails_fast_without_elasticsearch_url():
    app = create_app(app_settings=Settings(elastic_url="", document_store_backend="elasticsearch"))

    with pytest.raises(DocumentStoreInitializationException):
        with TestClient(app):
            pass


def test_memory_backend_starts_without_elasticsearch():
    app = create_app(app_settings=Settings(elastic_url="", document_store_backend="memory"))

    with TestClient(app) as client:
        response = client.post("/v1/submit", json={"version": "v1", "installedScanTypes": ["nmap"]})

    assert response.status_code == 200
    assert client.app.state.document_store.create_calls == 1
