from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError

from solvinghub.config import Config
from solvinghub.errors import (
    ConflictException,
    format_validation_errors,
    register_exception_handlers,
    sqlstate_of,
)


class FakePgError(Exception):
    def __init__(self, sqlstate):
        super().__init__(f"pg error {sqlstate}")
        self.sqlstate = sqlstate


def build_app():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/duplicate")
    async def duplicate():
        raise IntegrityError("INSERT ...", {}, FakePgError("23505"))

    @app.get("/missing-reference")
    async def missing_reference():
        raise IntegrityError("INSERT ...", {}, FakePgError("23503"))

    @app.get("/check")
    async def check():
        raise IntegrityError("INSERT ...", {}, FakePgError("23514"))

    @app.get("/database")
    async def database():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    @app.get("/conflict")
    async def conflict():
        raise ConflictException()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    return app


def test_integrity_errors_are_mapped():
    client = TestClient(build_app())

    response = client.get("/duplicate")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "Duplicate entry", "code": "23505"}

    response = client.get("/missing-reference")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "23503"

    response = client.get("/check")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Data validation failed"


def test_database_error():
    client = TestClient(build_app())

    response = client.get("/database")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"] == "Database error occurred"
    assert "connection refused" in response.json()["details"]


def test_conflict_exception():
    response = TestClient(build_app()).get("/conflict")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "Duplicate entry"}


def test_unexpected_error(monkeypatch):
    client = TestClient(build_app(), raise_server_exceptions=False)

    response = client.get("/boom")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error", "details": "secret internals"}

    monkeypatch.setattr(Config, "ENVIRONMENT", "production")
    response = client.get("/boom")
    assert response.json() == {"error": "Internal server error"}


def test_sqlstate_from_message():
    exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: problem_votes.user_id"))

    assert sqlstate_of(exc) == "23505"


def test_format_validation_errors():
    errors = [
        {"loc": ("body", "title"), "msg": "Title too short", "type": "value_error"},
        {"loc": ("query", "limit"), "msg": "bad", "type": "int_parsing"},
    ]

    assert format_validation_errors(errors) == [
        {"field": "title", "message": "Title too short", "code": "value_error"},
        {"field": "limit", "message": "bad", "code": "int_parsing"},
    ]
