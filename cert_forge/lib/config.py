"""Configuration dataclasses and the on-disk JSON configuration file."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .logging_config import LOGGER

CONFIG_DIR = Path.home() / ".tcf"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CONFIG: dict[str, dict[str, str]] = {
    "stepCa": {
        "url": "https://ca.local",
        "root": "",
        "provisioner": "admin",
    },
    "domain": {
        "suffix": "local",
    },
    "npm": {
        "url": "http://localhost:81",
        "email": "",
        "password": "",
    },
}


@dataclass(frozen=True)
class IssuerConfig:
    """step-ca connection settings."""

    url: str = DEFAULT_CONFIG["stepCa"]["url"]
    root: str = DEFAULT_CONFIG["stepCa"]["root"]
    provisioner: str = DEFAULT_CONFIG["stepCa"]["provisioner"]


@dataclass(frozen=True)
class RegistryConfig:
    """Nginx Proxy Manager API settings."""

    url: str = DEFAULT_CONFIG["npm"]["url"]
    email: str = DEFAULT_CONFIG["npm"]["email"]
    password: str = field(default=DEFAULT_CONFIG["npm"]["password"], repr=False)


@dataclass(frozen=True)
class AppConfig:
    """Complete configuration, loaded once per run and passed explicitly."""

    step_ca: IssuerConfig = field(default_factory=IssuerConfig)
    domain_suffix: str = DEFAULT_CONFIG["domain"]["suffix"]
    npm: RegistryConfig = field(default_factory=RegistryConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """Build config from the JSON layout, merging defaults per section."""
        merged = _merge_defaults(data)
        return cls(
            step_ca=IssuerConfig(
                url=merged["stepCa"]["url"],
                root=merged["stepCa"]["root"],
                provisioner=merged["stepCa"]["provisioner"],
            ),
            domain_suffix=merged["domain"]["suffix"],
            npm=RegistryConfig(
                url=merged["npm"]["url"],
                email=merged["npm"]["email"],
                password=merged["npm"]["password"],
            ),
        )

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Serialize back to the JSON layout."""
        return {
            "stepCa": {
                "url": self.step_ca.url,
                "root": self.step_ca.root,
                "provisioner": self.step_ca.provisioner,
            },
            "domain": {"suffix": self.domain_suffix},
            "npm": {
                "url": self.npm.url,
                "email": self.npm.email,
                "password": self.npm.password,
            },
        }


def _merge_defaults(data: dict[str, Any]) -> dict[str, dict[str, str]]:
    merged: dict[str, dict[str, str]] = {}
    for section, defaults in DEFAULT_CONFIG.items():
        values = data.get(section)
        if not isinstance(values, dict):
            values = {}
        merged[section] = {
            key: str(values[key]) if values.get(key) is not None else default
            for key, default in defaults.items()
        }
    return merged


def ensure_config_exists(config_file: Path = CONFIG_FILE) -> None:
    """Create the config directory (0700) and a default file (0600) if absent."""
    config_dir = config_file.parent
    if not config_dir.exists():
        config_dir.mkdir(mode=0o700, parents=True)
    if not config_file.exists():
        _write_private(config_file, DEFAULT_CONFIG)


def load_config(config_file: Path = CONFIG_FILE) -> AppConfig:
    """Load configuration from disk.

    A missing file is created with defaults. An unreadable or malformed file
    is reported and the defaults are used instead.

    Args:
        config_file: Path to the JSON configuration file

    Returns:
        AppConfig with defaults merged under explicit values
    """
    ensure_config_exists(config_file)
    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        LOGGER.error("Error loading configuration from %s: %s", config_file, e)
        return AppConfig()

    if not isinstance(data, dict):
        LOGGER.error("Error loading configuration from %s: expected a JSON object", config_file)
        return AppConfig()

    return AppConfig.from_dict(data)


def save_config(config: AppConfig, config_file: Path = CONFIG_FILE) -> None:
    """Write configuration to disk with owner-only permissions."""
    ensure_config_exists(config_file)
    _write_private(config_file, config.to_dict())


def _write_private(path: Path, data: dict[str, Any]) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2)
    path.chmod(0o600)
