"""
Unit tests for the access log middleware.
"""

import logging

import pytest

from expressive import access_log, parse
from expressive.middleware import AccessLogMiddleware, RequestLog
from expressive.routing import Pipeline

from conftest import dispatch


@pytest.fixture
def pipeline() -> Pipeline:
    pipeline = Pipeline()

    @pipeline.get("/users/:id")
    def get_user(request, response):
        response.send_json({"id": request.param("id")})

    @pipeline.get("/fail")
    def fail(request, response):
        raise RuntimeError("broken")

    return pipeline


class TestAccessLog:
    """Tests for AccessLogMiddleware."""

    def test_logs_text_line(self, pipeline: Pipeline, caplog):
        """Test the text access log line."""
        pipeline.use(access_log())

        with caplog.at_level(logging.INFO, logger="expressive.access"):
            response = dispatch(
                pipeline, "GET", "/users/42",
                headers={"User-Agent": "pytest"},
                client_address=("10.0.0.1", 5000),
            )

        assert response.body == b'{"id": "42"}'
        [record] = [r for r in caplog.records if r.name == "expressive.access"]
        assert record.getMessage().startswith("10.0.0.1 - - [")
        assert '"GET /users/42" 200 12 ' in record.getMessage()

    def test_logs_json_line(self, pipeline: Pipeline, caplog):
        """Test the JSON access log line."""
        pipeline.use(access_log(log_format="json"))

        with caplog.at_level(logging.INFO, logger="expressive.access"):
            dispatch(pipeline, "GET", "/users/7")

        [record] = [r for r in caplog.records if r.name == "expressive.access"]
        entry = parse(record.getMessage())
        assert entry["method"] == "GET"
        assert entry["path"] == "/users/7"
        assert entry["status_code"] == 200
        assert entry["user_agent"] == "-"

    def test_request_id_header(self, pipeline: Pipeline):
        """Test X-Request-ID is added."""
        pipeline.use(access_log())

        response = dispatch(pipeline, "GET", "/users/1")
        assert len(response.get_header("X-Request-ID")) == 8

    def test_request_id_can_be_disabled(self, pipeline: Pipeline):
        """Test X-Request-ID can be turned off."""
        pipeline.use(access_log(include_request_id=False))

        response = dispatch(pipeline, "GET", "/users/1")
        assert response.get_header("X-Request-ID") is None

    def test_skip_paths(self, pipeline: Pipeline, caplog):
        """Test skipped paths are not logged."""
        pipeline.use(access_log(skip_paths=["/users/1"]))

        with caplog.at_level(logging.INFO, logger="expressive.access"):
            dispatch(pipeline, "GET", "/users/1")

        assert not [r for r in caplog.records if r.name == "expressive.access"]

    def test_failure_is_logged_and_reraised(self, pipeline: Pipeline, caplog):
        """Test handler failures are logged and re-raised."""
        pipeline.use(access_log())

        with caplog.at_level(logging.INFO, logger="expressive.access"):
            with pytest.raises(RuntimeError):
                dispatch(pipeline, "GET", "/fail")

        [record] = [r for r in caplog.records if r.name == "expressive.access"]
        assert record.levelno == logging.ERROR
        assert "RuntimeError: broken" in record.getMessage()

    def test_unknown_format(self):
        """Test an unknown log format is rejected."""
        with pytest.raises(ValueError):
            AccessLogMiddleware(log_format="xml")


class TestRequestLog:
    """Tests for RequestLog rendering."""

    def test_to_json_field_order(self):
        """Test RequestLog rendering in both formats."""
        entry = RequestLog(
            request_id="abc", method="GET", path="/", client_ip="-",
            user_agent="-", status_code=404, content_length=0,
            duration_ms=1.5, timestamp="now",
        )

        assert entry.to_json().startswith('{"request_id": "abc", "method": "GET"')
        assert entry.to_text() == '- - - [now] "GET /" 404 0 1.50ms'
