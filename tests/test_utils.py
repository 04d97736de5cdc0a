"""
Tests for ID generation, metrics collection, configuration helpers and logging.
"""
import pytest
from loguru import logger

from colorcraft.config import Config
from colorcraft.utils.ids import generate_palette_id, generate_request_id
from colorcraft.utils.logging import StructuredLogger
from colorcraft.utils.metrics import MetricsCollector


class TestIds:
    """Test request and palette IDs."""

    def test_request_id_format(self):
        request_id = generate_request_id("extract")
        prefix, timestamp, suffix = request_id.split("-")
        assert prefix == "extract"
        assert len(timestamp) == 14
        assert len(suffix) == 8
        assert timestamp.isdigit()

    def test_palette_ids_unique(self):
        ids = {generate_palette_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(i.startswith("palette_") for i in ids)


class TestMetricsCollector:
    """Test in-process metrics."""

    def test_counters(self):
        metrics = MetricsCollector()
        metrics.increment_request_count("extract")
        metrics.increment_request_count("extract")
        metrics.increment_failure_count("extract", "ValueError")
        assert metrics.get_counters() == {"extract_requests_total": 2, "extract_failed_total_ValueError": 1}

    def test_timing_stats(self):
        metrics = MetricsCollector()
        for ms in (10.0, 20.0, 30.0):
            metrics.record_timing("harmony", ms)
        stats = metrics.get_timing_stats()["harmony_duration_ms"]
        assert stats["count"] == 3
        assert stats["mean"] == 20.0
        assert stats["p50"] == 20.0
        assert stats["max"] == 30.0

    def test_windows_are_bounded(self):
        metrics = MetricsCollector(window=5)
        for i in range(20):
            metrics.record_timing("extract", float(i))
            metrics.record_sample_count(i)
        stats = metrics.get_timing_stats()["extract_duration_ms"]
        assert stats["count"] == 5
        assert stats["min"] == 15.0
        assert metrics.get_sample_count_stats()["count"] == 5

    def test_sample_counts_and_reset(self):
        metrics = MetricsCollector()
        assert metrics.get_sample_count_stats() == {}
        metrics.record_sample_count(100)
        assert metrics.get_sample_count_stats()["mean"] == 100
        metrics.reset()
        assert metrics.get_summary()["counters"] == {}
        assert metrics.get_sample_count_stats() == {}


class TestConfig:
    """Test configuration validators."""

    def test_stride_validation(self):
        assert Config.validate_stride(16)
        assert Config.validate_stride(20)
        assert not Config.validate_stride(0)
        assert not Config.validate_stride(6)

    def test_storage_backend_validation(self):
        assert Config.validate_storage_backend("redis")
        assert not Config.validate_storage_backend("s3")

    def test_allowed_origins(self):
        class OriginConfig(Config):
            ALLOWED_ORIGINS = "http://a.test, http://b.test,,"

        assert OriginConfig.allowed_origins() == ["http://a.test", "http://b.test"]

    def test_loaded_settings_are_valid(self):
        Config.validate_settings()

    def test_invalid_settings_are_reported_together(self):
        class BadConfig(Config):
            SAMPLE_STRIDE_FINE = 10
            MAX_EDGE = 8
            STORAGE_BACKEND = "s3"

        with pytest.raises(ValueError) as exc:
            BadConfig.validate_settings()
        message = str(exc.value)
        assert "SAMPLE_STRIDE_FINE" in message
        assert "MAX_EDGE" in message
        assert "STORAGE_BACKEND" in message
        assert "SAMPLE_STRIDE_COARSE" not in message

    def test_defaults(self):
        assert Config.ALPHA_CUTOFF == 125
        assert Config.SAMPLE_STRIDE_COARSE == 20
        assert Config.SAMPLE_STRIDE_FINE == 16
        assert Config.MAX_SAVED_PALETTES == 50


class TestStructuredLogger:
    """Test context binding on the logging wrapper."""

    def test_bind_merges_context(self):
        log = StructuredLogger().bind(request_id="r1").bind(mode="simple")
        assert log.context == {"request_id": "r1", "mode": "simple"}

    def test_extras_reach_sink(self):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
        try:
            StructuredLogger().bind(request_id="r1").info("hello", extra={"samples": 2})
        finally:
            logger.remove(sink_id)

        assert records[-1]["message"] == "hello"
        assert records[-1]["extra"] == {"request_id": "r1", "samples": 2}
        assert records[-1]["function"] == "test_extras_reach_sink"
