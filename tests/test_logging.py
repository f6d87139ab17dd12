"""
Tests for log formatting and per-request access records.
"""

import json
import logging

from jobly.core.logging_config import JoblyJsonFormatter, log_request


def make_record(level=logging.INFO, **extra):
    record = logging.LogRecord("jobly.access", level, __file__, 10, "GET /jobs/ -> 200 (1.0ms)", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Tests for JoblyJsonFormatter"""

    def test_service_and_level_fields(self):
        formatter = JoblyJsonFormatter("%(message)s", service="jobly-test")
        payload = json.loads(formatter.format(make_record()))

        assert payload["service"] == "jobly-test"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "jobly.access"
        assert payload["message"] == "GET /jobs/ -> 200 (1.0ms)"
        assert "location" not in payload

    def test_request_fields_emitted(self):
        formatter = JoblyJsonFormatter("%(message)s")
        record = make_record(method="GET", path="/jobs/", status_code=200, duration_ms=1.0)
        payload = json.loads(formatter.format(record))

        assert payload["method"] == "GET"
        assert payload["path"] == "/jobs/"
        assert payload["status_code"] == 200
        assert payload["service"] == "jobly-api"

    def test_location_on_warning(self):
        formatter = JoblyJsonFormatter("%(message)s")
        payload = json.loads(formatter.format(make_record(level=logging.WARNING)))

        assert payload["location"].endswith(":10")


class TestAccessLog:
    """Tests for the access record written for every request"""

    def test_log_request_fields(self, caplog):
        with caplog.at_level(logging.INFO, logger="jobly.access"):
            log_request("DELETE", "/jobs/3", 404, 2.345, username="u4")

        record = caplog.records[-1]
        assert record.name == "jobly.access"
        assert record.status_code == 404
        assert record.duration_ms == 2.3
        assert record.username == "u4"
        assert record.levelno == logging.INFO

    def test_server_error_logged_as_warning(self, caplog):
        with caplog.at_level(logging.INFO, logger="jobly.access"):
            log_request("GET", "/jobs/", 500, 1.0)

        assert caplog.records[-1].levelno == logging.WARNING

    def test_request_produces_access_record(self, client, seed, caplog):
        with caplog.at_level(logging.INFO, logger="jobly.access"):
            response = client.get("/jobs/", params={"title": "j1"})

        assert response.status_code == 200
        records = [r for r in caplog.records if r.name == "jobly.access"]
        assert len(records) == 1
        assert records[0].method == "GET"
        assert records[0].path == "/jobs/"
        assert records[0].status_code == 200

    def test_rejected_request_logged(self, client, seed, caplog):
        with caplog.at_level(logging.INFO, logger="jobly.access"):
            client.post("/jobs/", json={"title": "x", "salary": 1, "equity": 0, "companyHandle": "c1"})

        assert [r.status_code for r in caplog.records if r.name == "jobly.access"] == [401]
