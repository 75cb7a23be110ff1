"""
Tests for health checks and logging setup.
"""

import json
import logging

from app.core.logging_config import CustomJsonFormatter, build_formatter


class TestHealthCheck:
    """Test health check endpoints"""

    def test_root(self, client):
        response = client.get("/")
        assert response.json()["status"] == "healthy"

    def test_health_check(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["timestamp"].endswith("Z")

    def test_detailed_health_check(self, client, db_session):
        response = client.get("/api/v1/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"


class TestLogFormatting:
    """Test JSON log output"""

    def make_record(self, level):
        return logging.LogRecord(
            name="app.crud.company",
            level=level,
            pathname=__file__,
            lineno=42,
            msg="Created company %s",
            args=("c1",),
            exc_info=None,
            func="create",
        )

    def test_json_fields(self):
        formatter = build_formatter(json_logs=True)
        assert isinstance(formatter, CustomJsonFormatter)

        entry = json.loads(formatter.format(self.make_record(logging.INFO)))
        assert entry["message"] == "Created company c1"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "app.crud.company"
        assert entry["function"] == "create"
        assert "line" not in entry

    def test_warning_includes_location(self):
        entry = json.loads(build_formatter(json_logs=True).format(self.make_record(logging.WARNING)))
        assert entry["line"] == 42

    def test_plain_formatter(self):
        formatter = build_formatter(json_logs=False)
        assert not isinstance(formatter, CustomJsonFormatter)
        assert "Created company c1" in formatter.format(self.make_record(logging.INFO))
