"""
tests/unit/test_config.py - Configuration loading and logging setup
"""

import json
import logging

import pytest

from venueplan.bootstrap.config import (
    DocumentConfig,
    ScaleConfig,
    VenuePlanConfig,
    get_config,
    load_config,
    reset_config,
)
from venueplan.bootstrap.logging_setup import JSONFormatter, setup_logging, setup_logging_from_config


class TestDefaults:
    """Tests for built-in defaults."""

    def test_scale_defaults(self):
        """Test scale defaults."""
        config = ScaleConfig()

        assert config.padding == 0.9
        assert (config.min_zoom, config.max_zoom) == (0.5, 5.0)
        assert config.clean_scales[0] == 10
        assert config.snap_to_clean_scale is False

    def test_document_defaults(self):
        """Test default tab name and prefixes."""
        config = DocumentConfig()

        assert config.default_tab_name == "Main Layout"
        assert config.tab_id_prefix == "tab"

    def test_clean_scales_sorted(self):
        """Test clean scales are kept sorted."""
        assert ScaleConfig(clean_scales=[100, 10, 50]).clean_scales == [10, 50, 100]

    def test_invalid_padding(self):
        """Test padding outside (0, 1] is rejected."""
        with pytest.raises(AssertionError):
            ScaleConfig(padding=1.5)


class TestEnvironment:
    """Tests for environment overrides."""

    def test_from_env(self, monkeypatch):
        """Test VENUEPLAN_* variables override defaults."""
        monkeypatch.setenv("VENUEPLAN_SCALE_PADDING", "0.8")
        monkeypatch.setenv("VENUEPLAN_DEFAULT_TAB_NAME", "Floor 1")
        monkeypatch.setenv("VENUEPLAN_PIXEL_DECIMALS", "2")

        config = VenuePlanConfig.from_env()

        assert config.scale.padding == 0.8
        assert config.document.default_tab_name == "Floor 1"
        assert config.display.pixel_decimals == 2

    def test_get_config_caches(self):
        """Test get_config returns the same instance until reset."""
        first = get_config()

        assert get_config() is first
        reset_config()
        assert get_config() is not first


class TestConfigFile:
    """Tests for JSON config files."""

    def test_file_overrides(self, tmp_path):
        """Test file values layer over defaults."""
        path = tmp_path / "venueplan.json"
        path.write_text(json.dumps({
            "environment": "test",
            "scale": {"padding": 1.0},
            "document": {"default_tab_name": "Reception"},
        }))

        config = load_config(str(path))

        assert config.environment == "test"
        assert config.scale.padding == 1.0
        assert config.document.default_tab_name == "Reception"
        assert get_config() is config

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        """Test unknown keys are logged and ignored."""
        path = tmp_path / "venueplan.json"
        path.write_text(json.dumps({"scale": {"warp_factor": 9}}))

        with caplog.at_level(logging.WARNING, logger="venueplan.bootstrap.config"):
            config = VenuePlanConfig.from_file(str(path))

        assert not hasattr(config.scale, "warp_factor")
        assert "scale.warp_factor" in caplog.text

    def test_missing_file_falls_back(self, tmp_path):
        """Test a missing file gives environment defaults."""
        config = VenuePlanConfig.from_file(str(tmp_path / "nope.json"))

        assert config.scale.padding == 0.9

    def test_to_dict(self):
        """Test config serializes to plain data."""
        data = VenuePlanConfig().to_dict()

        assert data["document"]["default_tab_name"] == "Main Layout"
        json.dumps(data)


class TestLoggingSetup:
    """Tests for host-side logging setup."""

    def test_setup_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        package_logger = setup_logging(level="DEBUG")
        setup_logging(level="DEBUG")

        ours = [h for h in package_logger.handlers if getattr(h, "_venueplan_handler", False)]
        assert len(ours) == 1
        assert package_logger.level == logging.DEBUG

    def test_setup_with_file(self, tmp_path):
        """Test file handler writes records."""
        log_file = tmp_path / "venueplan.log"
        package_logger = setup_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("venueplan.tests").info("hello layout")
        for handler in package_logger.handlers:
            handler.flush()

        assert "hello layout" in log_file.read_text()
        setup_logging(level="WARNING")

    def test_json_formatter(self):
        """Test JSON formatter output."""
        record = logging.LogRecord("venueplan.x", logging.INFO, __file__, 1, "msg %s", ("a",), None)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "msg a"
        assert data["logger"] == "venueplan.x"

    def test_setup_from_config(self):
        """Test logging config drives setup."""
        get_config().logging.level = "ERROR"

        package_logger = setup_logging_from_config()

        assert package_logger.level == logging.ERROR
