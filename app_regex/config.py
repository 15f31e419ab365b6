"""
Analyzer configuration.

Settings can be read from a JSON file:

    {
        "verbose": false,
        "recursive_aar": true,
        "boundary_aware": false,
        "separator": ":"
    }

Unknown keys are ignored; keys with the wrong type are reported and left at
their defaults.
"""

import json
import os
from dataclasses import dataclass, fields, replace

from .log import log


@dataclass(frozen=True)
class AnalyzerConfig:
    """Options for package extraction and reduction"""

    verbose: bool = False
    # Also read libs/*.jar inside AAR files, not just classes.jar
    recursive_aar: bool = True
    # Only let com.foo cover com.foo.bar, not com.foobar
    boundary_aware: bool = False
    # Joins the patterns of get_app_regex()
    separator: str = ":"

    def with_overrides(self, **overrides):
        """Return a copy with the given non-None values replaced"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


DEFAULT_CONFIG = AnalyzerConfig()


def config_from_dict(data):
    """Build an AnalyzerConfig from parsed JSON, skipping invalid values"""
    values = {}
    for field in fields(AnalyzerConfig):
        if field.name not in data:
            continue
        value = data[field.name]
        if not isinstance(value, field.type):
            log(f"Config key '{field.name}' should be {field.type.__name__}, "
                f"got {type(value).__name__}; using default", "WARNING")
            continue
        if field.name == "separator" and not value:
            log("Config key 'separator' must not be empty; using default", "WARNING")
            continue
        values[field.name] = value
    return AnalyzerConfig(**values)


def load_config(config_path):
    """
    Load analyzer configuration from a JSON file

    Args:
        config_path: Path to the JSON file, or None

    Returns:
        AnalyzerConfig; the defaults when the file is missing or invalid
    """
    if not config_path or not os.path.exists(config_path):
        if config_path:
            log(f"Configuration file not found: {config_path}", "WARNING")
        return DEFAULT_CONFIG

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        log(f"Invalid JSON in configuration file {config_path}: {e}", "ERROR")
        return DEFAULT_CONFIG

    if not isinstance(data, dict):
        log(f"Configuration file {config_path} must contain a JSON object", "ERROR")
        return DEFAULT_CONFIG

    config = config_from_dict(data)
    log(f"Loaded configuration from {config_path}")
    return config
