# src/messaging/tests/test_logging/test_middleware.py
import json
import logging
import uuid
from types import SimpleNamespace

from fastapi import FastAPI
from starlette.testclient import TestClient

from messaging.core.logging.builder import setup_logging
from messaging.core.logging.filters import get_request_id
from messaging.core.logging.middleware import REQUEST_ID_HEADER, RequestIDMiddleware


def make_app():
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    async def hello():
        logging.getLogger("messaging").info("handling hello")
        return {"request_id": get_request_id()}

    return app


def test_generates_request_id_and_exposes_it_to_handlers():
    client = TestClient(make_app())
    resp = client.get("/hello")
    assert resp.status_code == 200
    rid = resp.headers[REQUEST_ID_HEADER]
    assert uuid.UUID(rid)
    assert resp.json()["request_id"] == rid


def test_reuses_incoming_uuid():
    incoming = str(uuid.uuid4())
    resp = TestClient(make_app()).get("/hello", headers={REQUEST_ID_HEADER: incoming})
    assert resp.headers[REQUEST_ID_HEADER] == incoming


def test_replaces_non_uuid_header():
    resp = TestClient(make_app()).get("/hello", headers={REQUEST_ID_HEADER: "evil\nvalue"})
    rid = resp.headers[REQUEST_ID_HEADER]
    assert rid != "evil\nvalue"
    assert uuid.UUID(rid)


def test_request_id_in_json_logs(tmp_path, capsys):
    settings = SimpleNamespace(
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        LOG_DIR=tmp_path / "logs",
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENV="production",
        ENABLE_SQL_LOGGING=False,
    )
    setup_logging(settings)

    resp = TestClient(make_app()).get("/hello")
    rid = resp.headers[REQUEST_ID_HEADER]

    # StreamHandler writes to stderr; each line is one JSON object
    lines = capsys.readouterr().err.strip().splitlines()
    records = []
    for line in lines:
        try:
            records.append(json.loads(line))
        except ValueError:
            continue
    assert any(r.get("request_id") == rid and r["message"] == "handling hello" for r in records)
