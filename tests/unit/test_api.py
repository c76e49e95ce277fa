"""Tests for the HTTP surface using FastAPI's TestClient."""

from __future__ import annotations

import inspect
import json
from unittest.mock import patch

import pytest
from fastapi.concurrency import run_in_threadpool
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from hirefeed.api.app import create_app
from hirefeed.core.config import AppSettings, StorageConfig
from hirefeed.core.exceptions import StorageError
from tests.fakes import TRACKING, VALID_EMPLOYEE, MemoryKeyValueStore, build_csv, employee_row


@pytest.fixture
def client():
    with TestClient(create_app(AppSettings(), store=MemoryKeyValueStore())) as c:
        yield c


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready(self, client):
        resp = client.get("/ready")
        assert resp.status_code == 200
        assert resp.json()["storage"] == "memory"

    def test_not_ready_when_store_fails(self):
        class FailingStore(MemoryKeyValueStore):
            def get(self, key):
                raise StorageError("down")

        with TestClient(create_app(AppSettings(), store=FailingStore())) as c:
            assert c.get("/ready").status_code == 503


class TestBatches:
    def test_run_batch(self, client):
        text = build_csv([employee_row(), employee_row(employee_id="E2", record_sequence="2", dob="bad")])
        resp = client.post("/batches", content=text, headers={"Content-Type": "text/csv"})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["processing"]["processed_employees"]) == 2
        assert [e["field"] for e in body["processing"]["errors"]] == ["dob"]
        assert body["parse"]["header_field_order"][0] == "record_type"

        errors = client.get("/errors").json()
        assert len(errors) == 1

    def test_empty_batch_rejected(self, client):
        resp = client.post("/batches", content="")
        assert resp.status_code == 400
        assert resp.json()["error"] == "BatchReadError"


class TestRecords:
    def test_validate(self, client):
        resp = client.post("/records/validate", json={"record": {**VALID_EMPLOYEE, "dob": "13/45/2025"}})
        assert resp.status_code == 200
        errors = resp.json()
        assert len(errors) == 1
        assert errors[0]["value"] == "13/45/2025"

    def test_validate_detail_checks_tracking(self, client):
        record = {**TRACKING, **VALID_EMPLOYEE, "company_id": ""}
        errors = client.post("/records/validate", json={"record": record}).json()
        assert [e["field"] for e in errors] == ["company_id"]

    def test_compliance(self, client):
        record = {**VALID_EMPLOYEE, "i9_status": "Pending_Section_2"}
        body = client.post("/records/compliance", json={"record": record}).json()
        assert body["compliant"] is False
        assert "Pending_Section_2" in body["reason"]

    def test_transform(self, client):
        body = client.post("/records/transform/ADP", json={"record": VALID_EMPLOYEE}).json()
        assert body["output"]["PayRate"] == "4615.38"

    def test_transform_unknown_provider(self, client):
        resp = client.post("/records/transform/Gusto", json={"record": VALID_EMPLOYEE})
        assert resp.status_code == 404


class TestMappings:
    def test_get_default(self, client):
        body = client.get("/mappings/ADP").json()
        assert body["customized"] is False
        assert body["mapping"]["provider"] == "ADP"
        assert "fieldMappings" in body["mapping"]

    def test_replace_and_reset(self, client):
        doc = {"provider": "ADP", "fieldMappings": [{"sourceField": "employee_id", "targetField": "ID"}]}
        assert client.put("/mappings/ADP", json=doc).status_code == 200
        assert client.get("/mappings/ADP").json()["customized"] is True

        out = client.post("/records/transform/ADP", json={"record": VALID_EMPLOYEE}).json()
        assert out["output"] == {"ID": "E1001"}

        assert client.delete("/mappings/ADP").json()["customized"] is False

    def test_put_unknown_transformation(self, client):
        doc = {"provider": "ADP", "transformations": {"X": "nope"}}
        assert client.put("/mappings/ADP", json=doc).status_code == 422

    def test_export_import(self, client):
        exported = client.get("/mappings/QuickBooks/export")
        assert exported.status_code == 200
        assert "attachment" in exported.headers["content-disposition"]

        resp = client.post("/mappings/QuickBooks/import", content=exported.text)
        assert resp.status_code == 200
        assert resp.json()["mapping"] == json.loads(exported.text)

    def test_import_invalid(self, client):
        resp = client.post("/mappings/ADP/import", content="not json")
        assert resp.status_code == 422
        assert resp.json()["error"] == "MappingImportError"

    def test_list_transformations(self, client):
        names = client.get("/transformations").json()["transformations"]
        assert "per_paycheck_rate" in names


class TestErrors:
    @pytest.fixture
    def error_id(self, client):
        text = build_csv([employee_row(dob="13/45/2025")])
        client.post("/batches", content=text)
        return client.get("/errors").json()[0]["id"]

    def test_correction_flow(self, client, error_id):
        resp = client.post(f"/errors/{error_id}/corrections", json={"corrected_value": "1990-05-15"})
        assert resp.status_code == 201
        assert resp.json()["original_value"] == "13/45/2025"

        history = client.get(f"/errors/{error_id}/corrections").json()
        assert [c["corrected_value"] for c in history] == ["1990-05-15"]

        report = client.get("/errors/report")
        assert report.headers["content-type"].startswith("text/csv")
        assert "1990-05-15" in report.text

    def test_unknown_error(self, client):
        resp = client.post("/errors/error_missing/corrections", json={"corrected_value": "x"})
        assert resp.status_code == 404

    def test_reset(self, client, error_id):
        assert client.delete("/errors").json() == {"status": "cleared"}
        assert client.get("/errors").json() == []


def test_persisted_ledger_shared_through_store():
    store = MemoryKeyValueStore()
    settings = AppSettings(storage=StorageConfig(persist_ledger=True))
    with TestClient(create_app(settings, store=store)) as c:
        c.post("/batches", content=build_csv([employee_row(ssn="1")]))
    with TestClient(create_app(settings, store=store)) as c:
        assert [e["field"] for e in c.get("/errors").json()] == ["ssn"]


class TestBlockingWorkOffEventLoop:
    STORE_BACKED_PATHS = ("/mappings", "/transformations", "/errors", "/records/transform")

    def test_store_backed_endpoints_are_sync(self, client):
        checked = [
            route for route in client.app.routes
            if isinstance(route, APIRoute) and route.path.startswith(self.STORE_BACKED_PATHS)
        ]
        assert checked
        for route in checked:
            if route.path.endswith("/import"):
                continue
            assert not inspect.iscoroutinefunction(route.endpoint), route.path

    def test_batch_runs_in_threadpool(self, client):
        calls = []

        async def recording(func, *args, **kwargs):
            calls.append(func.__name__)
            return await run_in_threadpool(func, *args, **kwargs)

        with patch("hirefeed.api.routes.batches.run_in_threadpool", side_effect=recording):
            resp = client.post("/batches", content=build_csv([employee_row()]))
        assert resp.status_code == 200
        assert calls == ["run_batch"]

    def test_import_runs_in_threadpool(self, client):
        exported = client.get("/mappings/ADP/export").text
        calls = []

        async def recording(func, *args, **kwargs):
            calls.append(func.__name__)
            return await run_in_threadpool(func, *args, **kwargs)

        with patch("hirefeed.api.routes.mappings.run_in_threadpool", side_effect=recording):
            resp = client.post("/mappings/ADP/import", content=exported)
        assert resp.status_code == 200
        assert calls == ["import_"]
