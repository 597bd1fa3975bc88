"""Tests for config module."""

import json
import stat
from pathlib import Path
from unittest.mock import patch

from cert_forge.lib.config import (
    DEFAULT_CONFIG,
    AppConfig,
    IssuerConfig,
    RegistryConfig,
    ensure_config_exists,
    load_config,
    save_config,
)


class TestEnsureConfigExists:
    """Tests for ensure_config_exists."""

    def test_creates_private_dir_and_default_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".tcf" / "config.json"

        ensure_config_exists(config_file)

        assert stat.S_IMODE(config_file.parent.stat().st_mode) == 0o700
        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600
        assert json.loads(config_file.read_text()) == DEFAULT_CONFIG

    def test_leaves_existing_file_alone(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text('{"domain": {"suffix": "lan"}}')

        ensure_config_exists(config_file)

        assert json.loads(config_file.read_text()) == {"domain": {"suffix": "lan"}}


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_yields_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / ".tcf" / "config.json")

        assert config == AppConfig()
        assert config.step_ca.url == "https://ca.local"
        assert config.step_ca.provisioner == "admin"
        assert config.domain_suffix == "local"
        assert config.npm.url == "http://localhost:81"

    def test_explicit_values_override_defaults_per_section(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "stepCa": {"root": "/root_ca.crt"},
                    "npm": {"email": "admin@example.com", "password": "pw"},
                }
            )
        )

        config = load_config(config_file)

        assert config.step_ca == IssuerConfig(
            url="https://ca.local", root="/root_ca.crt", provisioner="admin"
        )
        assert config.npm == RegistryConfig(
            url="http://localhost:81", email="admin@example.com", password="pw"
        )
        assert config.domain_suffix == "local"

    def test_malformed_file_reports_and_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with patch("cert_forge.lib.config.LOGGER") as mock_logger:
            config = load_config(config_file)

        assert config == AppConfig()
        mock_logger.error.assert_called_once()

    def test_non_object_reports_and_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("[1, 2]")

        with patch("cert_forge.lib.config.LOGGER") as mock_logger:
            config = load_config(config_file)

        assert config == AppConfig()
        mock_logger.error.assert_called_once()


class TestSaveConfig:
    """Tests for save_config."""

    def test_roundtrip_through_disk(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config = AppConfig(
            step_ca=IssuerConfig(url="https://ca.lan:9000", root="/r.crt", provisioner="ops"),
            domain_suffix="lan",
            npm=RegistryConfig(url="https://npm.lan", email="me@lan", password="s3cret"),
        )

        save_config(config, config_file)

        assert load_config(config_file) == config
        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600
        assert json.loads(config_file.read_text())["npm"]["password"] == "s3cret"

    def test_tightens_existing_file_mode(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")
        config_file.chmod(0o644)

        save_config(AppConfig(), config_file)

        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600


def test_password_hidden_from_repr() -> None:
    assert "s3cret" not in repr(RegistryConfig(password="s3cret"))
