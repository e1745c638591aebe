"""
Config loader: flat JSON/YAML mapping -> frozen GridConfig, validated against JSON Schema.

Schema: config/grid_config.schema.json (shipped with the package).
``*.json`` files are read as JSON, anything else as YAML.

Usage:
    from config import load_config
    cfg = load_config("config.yaml")
    cfg.grid_spacing  # -> 10.0
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from grid_core.errors import GridError

logger = logging.getLogger("grid.config")

SCHEMA_PATH = Path(__file__).resolve().parent / "grid_config.schema.json"

DEFAULT_PRICE_FEED_URL = "https://api.binance.com/api/v3/ticker/price"


class ConfigError(GridError):
    """Raised when config loading or validation fails. Fatal."""


@dataclass(frozen=True)
class GridConfig:
    trading_pair: str
    grid_count: int
    grid_spacing: float
    min_order_quantity: float
    initial_investment: float
    max_position_size: float
    max_drawdown_percent: float
    max_loss_per_trade_percent: float  # carried, not enforced
    update_interval_seconds: int
    infinite_grid: bool  # display only
    log_file_path: str = "data/grid_trading.log.jsonl"
    data_file_path: str = "data/grid_data.dat"
    chart_output_path: str = "data/grid_chart.png"
    tolerance_fraction: float = 0.1
    price_feed_url: str = DEFAULT_PRICE_FEED_URL
    request_timeout_seconds: float = 10.0
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 60.0
    structured_logs: bool = True
    webhook_url: str = ""


def _read(path: Path) -> Any:
    try:
        with open(path) as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config is not valid JSON: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {exc}") from exc


def _validate_schema(data: dict[str, Any], schema_path: Path) -> None:
    if not schema_path.exists():
        raise ConfigError(f"Schema file not found: {schema_path}")
    with open(schema_path) as f:
        schema = json.load(f)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigError(f"Config validation failed at {where}: {exc.message}") from exc


def _build_config(data: dict[str, Any]) -> GridConfig:
    """Convert a raw mapping (already validated) into GridConfig. Unknown keys are ignored."""
    return GridConfig(
        trading_pair=data["trading_pair"],
        grid_count=int(data["grid_count"]),
        grid_spacing=float(data["grid_spacing"]),
        min_order_quantity=float(data["min_order_quantity"]),
        initial_investment=float(data["initial_investment"]),
        max_position_size=float(data["max_position_size"]),
        max_drawdown_percent=float(data["max_drawdown_percent"]),
        max_loss_per_trade_percent=float(data["max_loss_per_trade_percent"]),
        update_interval_seconds=int(data["update_interval_seconds"]),
        infinite_grid=bool(data["infinite_grid"]),
        log_file_path=data.get("log_file_path", "data/grid_trading.log.jsonl"),
        data_file_path=data.get("data_file_path", "data/grid_data.dat"),
        chart_output_path=data.get("chart_output_path", "data/grid_chart.png"),
        tolerance_fraction=float(data.get("tolerance_fraction", 0.1)),
        price_feed_url=data.get("price_feed_url", DEFAULT_PRICE_FEED_URL),
        request_timeout_seconds=float(data.get("request_timeout_seconds", 10.0)),
        backoff_base_seconds=float(data.get("backoff_base_seconds", 1.0)),
        backoff_max_seconds=float(data.get("backoff_max_seconds", 60.0)),
        structured_logs=bool(data.get("structured_logs", True)),
        webhook_url=str(data.get("webhook_url", "")),
    )


def load_config(
    path: str | Path = "config.yaml",
    schema_path: str | Path | None = None,
) -> GridConfig:
    """Load and validate grid configuration.

    Parameters
    ----------
    path:
        JSON (``.json``) or YAML file holding a flat mapping of settings.
    schema_path:
        JSON Schema to validate against. Defaults to the packaged schema.

    Raises
    ------
    ConfigError
        If the file is missing, unparseable, not a mapping, or fails schema
        validation.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Config file not found: {cfg_path}")

    raw = _read(cfg_path)
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a mapping, got {type(raw).__name__}")

    _validate_schema(raw, Path(schema_path) if schema_path else SCHEMA_PATH)

    cfg = _build_config(raw)
    logger.info("Loaded config from %s (%s)", cfg_path, cfg.trading_pair)
    return cfg
