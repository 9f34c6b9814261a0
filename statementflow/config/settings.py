"""Application settings loader from YAML configuration."""
import yaml
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from statementflow.utils.exceptions import ConfigError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"


@dataclass
class InsightThresholds:
    """Thresholds used by the insights engine."""
    comparison_min_change_percent: Decimal = Decimal("15")
    comparison_warning_percent: Decimal = Decimal("50")
    budget_months: int = 3
    budget_min_data_points: int = 2
    budget_multiplier: Decimal = Decimal("1.2")
    budget_volatility_ratio: Decimal = Decimal("0.3")
    unusual_spending_multiplier: Decimal = Decimal("2")
    unusual_spending_min_months: int = 2
    large_transaction_multiplier: Decimal = Decimal("3")
    large_transaction_warning_multiplier: Decimal = Decimal("5")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "InsightThresholds":
        """Build thresholds from a config section, keeping defaults for missing keys."""
        defaults = cls()
        kwargs = {}
        for name, default in vars(defaults).items():
            if name not in values:
                continue
            raw = values[name]
            # YAML floats go through str() so 1.2 stays 1.2
            kwargs[name] = Decimal(str(raw)) if isinstance(default, Decimal) else int(raw)
        return cls(**kwargs)


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str = "StatementFlow"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_max_file_size_mb: int = 10
    log_backup_count: int = 30

    # Extraction
    description_max_length: int = 50
    min_line_length: int = 10

    # Insights
    insights: InsightThresholds = field(default_factory=InsightThresholds)

    # Export
    ledger_account: str = "Checking"
    default_language: str = "en"

    # Summary
    top_merchants_limit: int = 8
    merchant_name_length: int = 30

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration file {config_path}: {e}")

        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "AppSettings":
        """Build settings from parsed YAML sections; empty sections keep defaults."""
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(config).__name__}")

        defaults = cls()
        app = cls._section(config, "app")
        logging_cfg = cls._section(config, "logging")
        extraction = cls._section(config, "extraction")
        export = cls._section(config, "export")
        summary = cls._section(config, "summary")
        insights = cls._section(config, "insights")

        try:
            return cls(
                app_name=app.get("name", defaults.app_name),
                app_version=str(app.get("version", defaults.app_version)),
                log_level=logging_cfg.get("level", defaults.log_level),
                log_max_file_size_mb=int(logging_cfg.get("max_file_size_mb", defaults.log_max_file_size_mb)),
                log_backup_count=int(logging_cfg.get("backup_count", defaults.log_backup_count)),
                description_max_length=int(extraction.get("description_max_length", defaults.description_max_length)),
                min_line_length=int(extraction.get("min_line_length", defaults.min_line_length)),
                insights=InsightThresholds.from_dict(insights),
                ledger_account=export.get("ledger_account", defaults.ledger_account),
                default_language=export.get("default_language", defaults.default_language),
                top_merchants_limit=int(summary.get("top_merchants_limit", defaults.top_merchants_limit)),
                merchant_name_length=int(summary.get("merchant_name_length", defaults.merchant_name_length))
            )
        except (TypeError, ValueError, ArithmeticError) as e:
            raise ConfigError(f"Invalid configuration value: {e}")

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Configuration section '{name}' must be a mapping")
        return section


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
