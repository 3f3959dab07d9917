"""
bootstrap/config.py - Engine configuration v1.0

Provides configuration loading from files, environment variables, and defaults.
Precedence: JSON file > environment (VENUEPLAN_*) > built-in defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from venueplan.core import constants

logger = logging.getLogger("venueplan.bootstrap.config")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ScaleConfig:
    """Scale converter defaults."""

    padding: float = constants.DEFAULT_PADDING
    min_zoom: float = constants.MIN_ZOOM
    max_zoom: float = constants.MAX_ZOOM
    zoom_step: float = constants.ZOOM_STEP
    grid_size_m: float = constants.DEFAULT_GRID_SIZE_M
    snap_precision_m: float = constants.DEFAULT_SNAP_PRECISION_M
    clean_scales: List[int] = field(default_factory=lambda: list(constants.CLEAN_SCALES))
    snap_to_clean_scale: bool = False

    def __post_init__(self):
        """Validate configuration."""
        assert 0 < self.padding <= 1, "padding must be in (0, 1]"
        assert 0 < self.min_zoom <= self.max_zoom, "zoom limits must satisfy 0 < min <= max"
        assert self.clean_scales, "clean_scales must not be empty"
        self.clean_scales = sorted(self.clean_scales)

    @classmethod
    def from_env(cls) -> "ScaleConfig":
        scales = os.getenv("VENUEPLAN_CLEAN_SCALES")
        return cls(
            padding=float(os.getenv("VENUEPLAN_SCALE_PADDING", str(constants.DEFAULT_PADDING))),
            min_zoom=float(os.getenv("VENUEPLAN_MIN_ZOOM", str(constants.MIN_ZOOM))),
            max_zoom=float(os.getenv("VENUEPLAN_MAX_ZOOM", str(constants.MAX_ZOOM))),
            zoom_step=float(os.getenv("VENUEPLAN_ZOOM_STEP", str(constants.ZOOM_STEP))),
            grid_size_m=float(os.getenv("VENUEPLAN_GRID_SIZE_M", str(constants.DEFAULT_GRID_SIZE_M))),
            snap_precision_m=float(
                os.getenv("VENUEPLAN_SNAP_PRECISION_M", str(constants.DEFAULT_SNAP_PRECISION_M))
            ),
            clean_scales=(
                [int(s) for s in scales.split(",") if s.strip()]
                if scales else list(constants.CLEAN_SCALES)
            ),
            snap_to_clean_scale=_env_bool("VENUEPLAN_SNAP_TO_CLEAN_SCALE", "false"),
        )


@dataclass
class DocumentConfig:
    """Layout document defaults."""

    default_tab_name: str = constants.DEFAULT_TAB_NAME
    tab_id_prefix: str = constants.TAB_ID_PREFIX
    element_id_prefix: str = constants.ELEMENT_ID_PREFIX

    @classmethod
    def from_env(cls) -> "DocumentConfig":
        return cls(
            default_tab_name=os.getenv("VENUEPLAN_DEFAULT_TAB_NAME", constants.DEFAULT_TAB_NAME),
            tab_id_prefix=os.getenv("VENUEPLAN_TAB_ID_PREFIX", constants.TAB_ID_PREFIX),
            element_id_prefix=os.getenv("VENUEPLAN_ELEMENT_ID_PREFIX", constants.ELEMENT_ID_PREFIX),
        )


@dataclass
class DisplayConfig:
    """Display-time rounding of pixel geometry."""

    pixel_decimals: int = constants.DEFAULT_PIXEL_DECIMALS

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        return cls(
            pixel_decimals=int(
                os.getenv("VENUEPLAN_PIXEL_DECIMALS", str(constants.DEFAULT_PIXEL_DECIMALS))
            ),
        )


@dataclass
class StorageConfig:
    """Storage paths for the file-backed persistence gateway."""

    base_dir: str = "./storage"
    documents_dir: str = "./storage/layouts"

    @classmethod
    def from_env(cls) -> "StorageConfig":
        base = os.getenv("VENUEPLAN_STORAGE_DIR", "./storage")
        return cls(
            base_dir=base,
            documents_dir=os.getenv("VENUEPLAN_DOCUMENTS_DIR", f"{base}/layouts"),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("VENUEPLAN_LOG_LEVEL", "INFO"),
            format=os.getenv(
                "VENUEPLAN_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            log_file=os.getenv("VENUEPLAN_LOG_FILE"),
            json_logs=_env_bool("VENUEPLAN_JSON_LOGS", "false"),
        )


@dataclass
class VenuePlanConfig:
    """Root configuration for the layout engine."""

    environment: str = "development"
    version: str = "1.0.0"

    scale: ScaleConfig = field(default_factory=ScaleConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "VenuePlanConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("VENUEPLAN_ENVIRONMENT", "development"),
            scale=ScaleConfig.from_env(),
            document=DocumentConfig.from_env(),
            display=DisplayConfig.from_env(),
            storage=StorageConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "VenuePlanConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "VenuePlanConfig":
        """Create config from dictionary, layered over the environment."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]

        for section in ("scale", "document", "display", "storage", "logging"):
            if section not in data:
                continue
            target = getattr(config, section)
            for key, value in data[section].items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Unknown config key ignored: {section}.{key}")

        # Re-run section validation after file overrides
        config.scale.__post_init__()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "version": self.version,
            "scale": {
                "padding": self.scale.padding,
                "min_zoom": self.scale.min_zoom,
                "max_zoom": self.scale.max_zoom,
                "zoom_step": self.scale.zoom_step,
                "grid_size_m": self.scale.grid_size_m,
                "snap_precision_m": self.scale.snap_precision_m,
                "clean_scales": list(self.scale.clean_scales),
                "snap_to_clean_scale": self.scale.snap_to_clean_scale,
            },
            "document": {
                "default_tab_name": self.document.default_tab_name,
                "tab_id_prefix": self.document.tab_id_prefix,
                "element_id_prefix": self.document.element_id_prefix,
            },
            "display": {
                "pixel_decimals": self.display.pixel_decimals,
            },
            "storage": {
                "base_dir": self.storage.base_dir,
                "documents_dir": self.storage.documents_dir,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[VenuePlanConfig] = None


def load_config(filepath: str = None) -> VenuePlanConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        VenuePlanConfig instance
    """
    global _config

    if filepath:
        _config = VenuePlanConfig.from_file(filepath)
    else:
        default_paths = [
            "./venueplan.json",
            "./config/venueplan.json",
            os.path.expanduser("~/.venueplan/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = VenuePlanConfig.from_file(path)
                return _config

        _config = VenuePlanConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> VenuePlanConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration (tests, reconfiguration)."""
    global _config
    _config = None
