"""
Configuration management for hpi-requirements.

Only the ambient behaviour (logging) is configurable. What gets extracted
from the pom and how it is printed is fixed.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console

from .error_handling import ErrorCategory, get_error_handler

# stdout is reserved for generated code
console = Console(stderr=True)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging and error handling configuration."""

    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_json: bool = True


@dataclass
class GeneratorConfig:
    """Main configuration containing all subsections."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)


_global_config: Optional[GeneratorConfig] = None


def validate_config_values(config: GeneratorConfig) -> List[str]:
    """
    Validate configuration values and return any errors.

    Returns:
        List[str]: List of validation errors (empty if valid)
    """
    errors = []

    if str(config.logging.log_level).upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"logging.log_level must be one of {', '.join(VALID_LOG_LEVELS)}"
        )
    if not isinstance(config.logging.enable_json, bool):
        errors.append("logging.enable_json must be a boolean")

    log_format = config.logging.log_format
    if not isinstance(log_format, str):
        errors.append("logging.log_format must be a string")
    else:
        try:
            logging.Formatter(log_format)
        except (ValueError, TypeError) as e:
            errors.append(f"logging.log_format is not a valid format: {e}")

    return errors


def load_config_file(config_path: Path) -> Optional[Dict[str, Any]]:
    """Load config from a JSON or YAML file."""
    if not config_path.exists():
        return None

    try:
        with open(config_path, encoding="utf-8") as f:
            if config_path.suffix.lower() in [".yaml", ".yml"]:
                return yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(
            f"⚠️  Error loading config from {config_path}: {e}", style="yellow"
        )

    return None


def find_config_file() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / ".hpi-requirements.json",
        Path.cwd() / ".hpi-requirements.yaml",
        Path.cwd() / ".hpi-requirements.yml",
        Path.home() / ".config" / "hpi-requirements" / "config.json",
        Path.home() / ".config" / "hpi-requirements" / "config.yaml",
    ]

    for location in locations:
        if location.exists():
            return location

    return None


def load_environment_overrides(config: GeneratorConfig) -> None:
    """Load environment variable overrides."""

    def get_env_bool(key: str, default: bool = False) -> bool:
        value = os.environ.get(key, "").lower()
        return value in ["true", "1", "yes", "on"] if value else default

    if log_level := os.environ.get("HPI_REQUIREMENTS_LOG_LEVEL"):
        config.logging.log_level = log_level.upper()

    config.logging.enable_json = get_env_bool(
        "HPI_REQUIREMENTS_LOG_JSON", config.logging.enable_json
    )


def apply_config_section(
    config: Any, section_data: Dict[str, Any], section_name: str
) -> None:
    """Apply configuration from dictionary to config section."""
    for key, value in section_data.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            console.print(
                f"⚠️  Unknown config key in {section_name}: {key}", style="yellow"
            )


def load_config() -> GeneratorConfig:
    """Load configuration from file and environment."""
    global _global_config

    if _global_config is not None:
        return _global_config

    config = GeneratorConfig()

    config_file = find_config_file()
    if config_file:
        file_config = load_config_file(config_file)
        if isinstance(file_config, dict) and isinstance(file_config.get("logging"), dict):
            apply_config_section(config.logging, file_config["logging"], "logging")

    load_environment_overrides(config)

    validation_errors = validate_config_values(config)
    if validation_errors:
        console.print("⚠️  Configuration validation errors:", style="red")
        for error in validation_errors:
            console.print(f"  • {error}", style="red")
        console.print("Using default values for invalid settings.", style="yellow")
        get_error_handler().warning(
            ErrorCategory.CONFIGURATION,
            "Invalid configuration, using defaults",
            "cli_config",
            "load_config",
            details={
                "config_file": config_file.name if config_file else None,
                "errors": validation_errors,
            },
        )
        config = GeneratorConfig()

    _global_config = config
    return config


def get_config() -> GeneratorConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _global_config
    _global_config = None
