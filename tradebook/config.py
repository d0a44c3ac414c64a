"""
Configuration module for Tradebook.

Dataclass-based configuration with YAML loading. Brokerage and stamp duty
preferences can also come from the environment (or a .env file):

- TRADEBOOK_STAMP_DUTY_STATE
- TRADEBOOK_BROKERAGE_PER_ORDER
- TRADEBOOK_LOG_LEVEL
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional
import logging
import os

import yaml

from .charges.rates import TAX_RATES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "tradebook.yaml"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={value!r}")
        return default


@dataclass
class SystemConfig:
    """Core system settings."""
    log_level: str = field(default_factory=lambda: os.getenv("TRADEBOOK_LOG_LEVEL", "INFO"))


@dataclass
class ChargeConfig:
    """Brokerage and stamp duty preferences used when pricing trades."""
    brokerage_per_order: float = field(
        default_factory=lambda: _env_float("TRADEBOOK_BROKERAGE_PER_ORDER", 20.0)
    )
    number_of_orders: int = 2  # entry + exit
    # None means unspecified, which prices stamp duty at the 'Other' rate
    default_stamp_duty_state: Optional[str] = field(
        default_factory=lambda: os.getenv("TRADEBOOK_STAMP_DUTY_STATE") or None
    )


@dataclass
class ReportingConfig:
    """Reporting and visualization configuration."""
    output_dir: Path = field(default_factory=lambda: Path("reports"))
    chart_format: str = "png"
    dpi: int = 150
    default_days: int = 30


@dataclass
class Config:
    """Main configuration container."""
    name: str = "Tradebook"
    system: SystemConfig = field(default_factory=SystemConfig)
    charges: ChargeConfig = field(default_factory=ChargeConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)

    def __post_init__(self):
        self.reporting.output_dir = Path(self.reporting.output_dir)

    def validate(self) -> List[str]:
        """Validate configuration. Returns list of issues."""
        issues = []
        if self.charges.brokerage_per_order < 0:
            issues.append("brokerage_per_order should not be negative")
        if self.charges.number_of_orders < 1:
            issues.append("number_of_orders should be at least 1")
        state = self.charges.default_stamp_duty_state
        if state is not None and state not in TAX_RATES.stamp_duty:
            issues.append(
                f"Unknown stamp duty state '{state}' (the 'Other' rate will be used)"
            )
        if not isinstance(logging.getLevelName(self.system.log_level.upper()), int):
            issues.append(f"Unknown log level '{self.system.log_level}'")
        return issues


def load_config(config_path: str = None) -> Config:
    """
    Load configuration from YAML file or use defaults.

    Searches for config in order:
    1. Provided path
    2. ./tradebook.yaml
    3. Defaults

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        Config object with all settings
    """
    search_paths = []
    if config_path:
        search_paths.append(Path(config_path))
    search_paths.append(Path(DEFAULT_CONFIG_FILE))

    for path in search_paths:
        if path.exists():
            logger.debug(f"Loading config from {path}")
            return _load_from_yaml(path)

    return Config()


def _load_from_yaml(path: Path) -> Config:
    """Parse YAML file into Config."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = Config()
    if 'name' in raw:
        config.name = raw['name']

    _update_dataclass(config.system, raw.get("system", {}))
    _update_dataclass(config.charges, raw.get("charges", {}))
    _update_dataclass(config.reporting, raw.get("reporting", {}))

    config.__post_init__()
    return config


def _update_dataclass(obj, data: dict):
    """Update dataclass fields from a dictionary."""
    for key, value in (data or {}).items():
        if hasattr(obj, key):
            setattr(obj, key, value)
        else:
            logger.warning(f"Ignoring unknown config key '{key}'")


def save_config(config: Config, config_path: str):
    """Save configuration to YAML file."""
    config_dict = asdict(config)
    config_dict['reporting']['output_dir'] = str(config.reporting.output_dir)
    with open(config_path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
