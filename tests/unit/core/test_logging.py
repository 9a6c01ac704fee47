"""
Tests for structured logging middleware and PII masking.
"""

import json
import logging
import sys

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from unittest.mock import Mock

from core.middleware.logging import (
    StructuredFormatter,
    StructuredLoggingMiddleware,
    get_client_ip,
    get_logger,
    is_sensitive_field,
    mask_headers,
    mask_pii,
    mask_sensitive_data,
    should_log_request,
)


class TestSensitiveFieldDetection:

    @pytest.mark.parametrize("field_name,expected", [
        ("password", True),
        ("smtp_password", True),
        ("access_token", True),
        ("X-API-Key", True),
        ("client_secret", True),
        ("Authorization", True),
        ("cookie", True),
        ("session_id", True),
        ("phone", True),
        ("linkedin_url", True),
        ("candidate_name", False),
        ("email", False),
        ("status", False),
        ("job_posting_id", False),
    ])
    def test_sensitive_field_patterns(self, field_name, expected):
        assert is_sensitive_field(field_name) is expected


class TestPIIMasking:

    def test_email_masking(self):
        assert mask_pii("Applied: ada@example.com") == "Applied: [EMAIL]"

    @pytest.mark.parametrize("text", ["555-010-0100", "555.010.0100", "5550100100", "+44 20 7946 0958"])
    def test_phone_number_masking(self, text):
        assert "[PHONE]" in mask_pii(f"Call {text}")

    def test_ip_address_masking(self):
        assert mask_pii("from 192.168.1.20") == "from [IP]"

    def test_multiple_pii_types(self):
        masked = mask_pii("ada@example.com called from 555-010-0100 at 10.0.0.1")

        assert "ada@example.com" not in masked
        assert "555-010-0100" not in masked
        assert "10.0.0.1" not in masked


class TestDataStructureMasking:

    def test_dict_masking(self):
        masked = mask_sensitive_data({
            "candidate_name": "Ada Lovelace",
            "email": "ada@example.com",
            "phone": "555-0100",
            "linkedin_url": "https://linkedin.com/in/ada",
        })

        assert masked == {
            "candidate_name": "Ada Lovelace",
            "email": "[EMAIL]",
            "phone": "[REDACTED]",
            "linkedin_url": "[REDACTED]",
        }

    def test_nested_structures(self):
        masked = mask_sensitive_data({
            "emails": ["a@example.com", "b@example.com"],
            "settings": {"smtp": {"smtp_password": "hunter2", "port": 587}},
        })

        assert masked["emails"] == ["[EMAIL]", "[EMAIL]"]
        assert masked["settings"]["smtp"] == {"smtp_password": "[REDACTED]", "port": 587}

    def test_max_depth_protection(self):
        data = current = {}
        for _ in range(15):
            current["child"] = {}
            current = current["child"]

        assert "[MAX_DEPTH_EXCEEDED]" in json.dumps(mask_sensitive_data(data))

    @pytest.mark.parametrize("value", [None, 42, 3.5, True])
    def test_scalars_pass_through(self, value):
        assert mask_sensitive_data(value) == value


class TestHeaderMasking:

    def test_authorization_keeps_scheme(self):
        masked = mask_headers({"Authorization": "Bearer abc.def.ghi"})
        assert masked["Authorization"] == "Bearer [REDACTED]"

    def test_other_sensitive_headers(self):
        masked = mask_headers({
            "X-API-Key": "key",
            "Cookie": "session=abc",
            "Content-Type": "application/json",
            "X-User-Id": "2",
        })

        assert masked == {
            "X-API-Key": "[REDACTED]",
            "Cookie": "[REDACTED]",
            "Content-Type": "application/json",
            "X-User-Id": "2",
        }


class TestRequestFiltering:

    @pytest.mark.parametrize("path,expected", [
        ("/health", False),
        ("/ready", False),
        ("/api/v1/recruitment/candidates", True),
    ])
    def test_should_log_request(self, path, expected):
        assert should_log_request(path) is expected


class TestClientIPExtraction:

    def _request(self, host=None, forwarded=None):
        request = Mock(spec=Request)
        request.headers = {"x-forwarded-for": forwarded} if forwarded else {}
        request.client = Mock(host=host) if host else None
        return request

    def test_direct_client_ip(self):
        assert get_client_ip(self._request(host="192.168.1.100")) == "192.168.1.xxx"

    def test_forwarded_for_header_wins(self):
        request = self._request(host="10.0.0.1", forwarded="203.0.113.7, 10.0.0.1")
        assert get_client_ip(request) == "203.0.113.xxx"

    def test_no_client_info(self):
        assert get_client_ip(self._request()) == "unknown"

    def test_non_ipv4(self):
        assert get_client_ip(self._request(host="testclient")) == "unknown"


class TestStructuredLoggingMiddleware:

    @pytest.fixture
    def app(self):
        app = FastAPI()
        app.add_middleware(StructuredLoggingMiddleware, log_request_body=True)

        @app.post("/apply")
        async def apply(request: Request):
            return {"request_id": request.state.request_id}

        @app.get("/missing")
        async def missing():
            from fastapi import HTTPException
            raise HTTPException(status_code=404, detail="Not found")

        @app.get("/health")
        async def health():
            return {"status": "healthy"}

        return app

    @pytest.fixture
    def client(self, app):
        return TestClient(app)

    def _events(self, caplog):
        events = []
        for record in caplog.records:
            if record.name != "core.middleware.logging":
                continue
            try:
                events.append(json.loads(record.getMessage()))
            except json.JSONDecodeError:
                continue
        return events

    def test_logs_started_and_completed(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            response = client.post("/apply", json={"email": "ada@example.com", "phone": "555"})

        assert response.status_code == 200
        started, completed = self._events(caplog)
        assert started["event"] == "request_started"
        assert started["body"] == {"email": "[EMAIL]", "phone": "[REDACTED]"}
        assert completed["event"] == "request_completed"
        assert completed["status_code"] == 200
        assert completed["duration_ms"] >= 0
        assert started["request_id"] == completed["request_id"] == response.json()["request_id"]

    def test_multipart_body_is_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            client.post("/apply", files={"resume": ("cv.pdf", b"%PDF secret", "application/pdf")})

        started = self._events(caplog)[0]
        assert started["body"] == {"_content_type": "multipart/form-data"}
        assert "secret" not in caplog.text

    def test_request_id_generated_and_preserved(self, client):
        assert client.post("/apply", json={}).headers["x-request-id"]

        response = client.post("/apply", json={}, headers={"x-request-id": "req-7"})
        assert response.headers["x-request-id"] == "req-7"

    def test_client_errors_logged_as_warning(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            client.get("/missing")

        completed = [
            r for r in caplog.records
            if r.name == "core.middleware.logging" and "request_completed" in r.getMessage()
        ]
        assert completed[0].levelno == logging.WARNING

    def test_health_check_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            response = client.get("/health")

        assert response.headers["x-request-id"]
        assert self._events(caplog) == []


class TestStructuredFormatter:

    def test_formats_json(self):
        record = logging.LogRecord("hrms", logging.INFO, __file__, 1, "hello %s", ("ada",), None)
        record.request_id = "req-1"

        data = json.loads(StructuredFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "hrms"
        assert data["message"] == "hello ada"
        assert data["request_id"] == "req-1"

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "hrms", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(StructuredFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "boom"


def test_get_logger():
    assert get_logger("api.services.recruitment").name == "api.services.recruitment"
