"""Test fixtures for cert_forge tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from npm_fakes import FakeServer, write_certificate_files

from cert_forge.lib.config import AppConfig, IssuerConfig, RegistryConfig
from cert_forge.lib.models import CertificateFiles


@pytest.fixture
def fake_server() -> Generator[FakeServer]:
    """Patch the transport's connection factory with a FakeServer."""
    server = FakeServer()
    with patch("cert_forge.lib.transport._open_connection", side_effect=server.connect):
        yield server


@pytest.fixture
def issuer_config() -> IssuerConfig:
    """Return step-ca settings with a root certificate path."""
    return IssuerConfig(url="https://ca.test:9000", root="/etc/step/root_ca.crt", provisioner="admin")


@pytest.fixture
def registry_config() -> RegistryConfig:
    """Return NPM settings with credentials."""
    return RegistryConfig(url="http://npm.test:81", email="admin@example.com", password="changeme")


@pytest.fixture
def app_config(issuer_config: IssuerConfig, registry_config: RegistryConfig) -> AppConfig:
    """Return complete configuration with the 'local' suffix."""
    return AppConfig(step_ca=issuer_config, domain_suffix="local", npm=registry_config)


@pytest.fixture
def certificate_files(tmp_path: Path) -> CertificateFiles:
    """Return a real certificate/key pair for svc.local on disk."""
    return write_certificate_files(tmp_path, "svc.local")

