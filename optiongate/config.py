"""Configuration management for optiongate.

Two config sections:
- engine: trigger timing and context detection
- cli: logging level for command-line use

Config resolution order (highest priority first):
1. Programmatic (OptionGateConfig constructed in code)
2. Environment variables (OPTIONGATE_RECHECK_DELAY, etc.)
3. Config file (~/.config/optiongate/config.json, managed by `optiongate config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "optiongate"
CONFIG_FILE = CONFIG_DIR / "config.json"

VALID_CONTEXTS = ("settings-page", "embedded")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class EngineConfig:
    """Visibility engine timing and context detection.

    - recheck_delay: seconds between a save action and the one-shot re-check
    - settings_page_marker: URL fragment that identifies the settings page
    - default_context: context used when no URL is available
    """

    recheck_delay: float = 0.6
    settings_page_marker: str = "page=social-warfare"
    default_context: str = "settings-page"


@dataclass
class CLIConfig:
    """Command-line behaviour."""

    log_level: str = "WARNING"


@dataclass
class OptionGateConfig:
    """Top-level optiongate configuration.

    Examples:
        # Package use, no files needed
        config = OptionGateConfig(engine=EngineConfig(recheck_delay=0.2))

        # CLI use, loads from ~/.config/optiongate/config.json
        config = OptionGateConfig.load()
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    @classmethod
    def load(cls) -> "OptionGateConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError, ValueError, TypeError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("OPTIONGATE_RECHECK_DELAY"):
            try:
                config.engine.recheck_delay = _parse_delay(val)
            except ValueError:
                logger.warning("Invalid OPTIONGATE_RECHECK_DELAY=%r, ignoring", val)
        if val := os.environ.get("OPTIONGATE_SETTINGS_MARKER"):
            config.engine.settings_page_marker = val
        if val := os.environ.get("OPTIONGATE_DEFAULT_CONTEXT"):
            if val in VALID_CONTEXTS:
                config.engine.default_context = val
            else:
                logger.warning("Invalid OPTIONGATE_DEFAULT_CONTEXT=%r, ignoring", val)
        if val := os.environ.get("OPTIONGATE_LOG_LEVEL"):
            if val.upper() in VALID_LOG_LEVELS:
                config.cli.log_level = val.upper()
            else:
                logger.warning("Invalid OPTIONGATE_LOG_LEVEL=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/optiongate/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "engine": asdict(self.engine),
            "cli": asdict(self.cli),
        }


# =============================================================================
# Config dict application
# =============================================================================


def _parse_delay(value: Any) -> float:
    delay = float(value)
    if delay < 0:
        raise ValueError(f"Delay must be >= 0, got {delay}")
    return delay


def _apply_dict(config: OptionGateConfig, data: dict) -> None:
    """Apply a dict of values onto an OptionGateConfig."""
    if "engine" in data and isinstance(data["engine"], dict):
        for k, v in data["engine"].items():
            if hasattr(config.engine, k):
                if k == "recheck_delay":
                    v = _parse_delay(v)
                setattr(config.engine, k, v)
    if "cli" in data and isinstance(data["cli"], dict):
        for k, v in data["cli"].items():
            if hasattr(config.cli, k):
                setattr(config.cli, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: OptionGateConfig | None = None


def get_config() -> OptionGateConfig:
    """Get the global OptionGateConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = OptionGateConfig.load()
    return _config


def configure(config: OptionGateConfig) -> None:
    """Set the global OptionGateConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
