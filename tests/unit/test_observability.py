"""
Unit tests for logging and metrics setup.
"""

import logging

import pytest
import structlog

from unique_jobs.observability.logging import setup_logging
from unique_jobs.observability.metrics import MetricsCollector


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_exposition_contains_metrics(self, metrics: MetricsCollector):
        metrics.record_submission("created")
        metrics.record_registry_operation("read", "ok", 0.002)

        output = metrics.get_metrics().decode()

        assert 'unique_jobs_submitted_total{outcome="created"} 1.0' in output
        assert "unique_registry_operation_seconds_bucket" in output
        assert metrics.get_content_type().startswith("text/plain")


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers = handlers
        root.setLevel(level)
        structlog.reset_defaults()

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_installs_structlog_formatter(self, fmt):
        setup_logging(level="debug", fmt=fmt)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_unknown_level_defaults_to_info(self):
        setup_logging(level="chatty", fmt="json")

        assert logging.getLogger().level == logging.INFO


class TestSetupTracing:
    """Tests for setup_tracing."""

    def test_returns_package_tracer(self):
        from unique_jobs.observability import tracing

        tracer = tracing.setup_tracing()

        assert tracing.get_tracer() is tracer
        with tracer.start_as_current_span("submit") as span:
            assert span.is_recording()
