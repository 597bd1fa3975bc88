"""Nginx Proxy Manager token exchange."""

import json

from .config import RegistryConfig
from .errors import AuthenticationFailed, ConfigurationError
from .transport import request, resolve_request

TOKENS_PATH = "/api/tokens"


def authenticate(config: RegistryConfig, timeout: float | None = None) -> str:
    """Exchange the configured email/password for a bearer token.

    Args:
        config: NPM URL and credentials
        timeout: Socket timeout in seconds; None waits indefinitely

    Returns:
        Bearer token, held in memory for the rest of the run

    Raises:
        ConfigurationError: If URL, email or password is not set
        AuthenticationFailed: If the response carries no token
        RequestFailed: If the credentials are rejected
    """
    if not config.url or not config.email or not config.password:
        raise ConfigurationError("Missing NPM configuration. Please run: tcf configure")

    descriptor = resolve_request(
        config.url,
        TOKENS_PATH,
        method="POST",
        headers={"Content-Type": "application/json"},
    )
    data = request(
        descriptor,
        json.dumps({"identity": config.email, "secret": config.password}),
        timeout=timeout,
    )

    token = data.get("token") if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        raise AuthenticationFailed("Authentication failed: No token received")

    return token
