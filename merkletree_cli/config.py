"""
CLI Configuration

Locates and loads the YAML configuration file, then overlays environment
variables (MERKLETREE_* prefix, .env supported).
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "merkletree.yaml",
        Path.cwd() / ".merkletree.yaml",
        Path.home() / ".config" / "merkletree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. An explicit path must
    exist; without one, the first default location that exists is used.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()
