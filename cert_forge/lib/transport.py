"""Raw HTTP transport over http.client, including multipart/form-data uploads."""

import http.client
import json
import ssl
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlsplit

from .errors import ArtifactMissing, ConfigurationError, NetworkError, RequestFailed
from .logging_config import LOGGER
from .models import MultipartBody, RequestDescriptor

DEFAULT_PORTS = {"https": 443, "http": 80}
CRLF = "\r\n"


def resolve_request(
    base_url: str,
    path: str,
    method: str = "GET",
    headers: dict[str, str] | None = None,
) -> RequestDescriptor:
    """Resolve an API path against a base URL into a RequestDescriptor.

    An absolute ``path`` replaces whatever path the base URL carries, so
    ``http://npm:81/ui`` plus ``/api/tokens`` targets ``/api/tokens``.

    Args:
        base_url: Service root, e.g. http://localhost:81
        path: Absolute API path
        method: HTTP method
        headers: Request headers

    Returns:
        RequestDescriptor with host, port (defaulted from scheme) and path

    Raises:
        ConfigurationError: If the URL is not http(s) or has no host
    """
    parts = urlsplit(urljoin(base_url, path))
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise ConfigurationError(f"unsupported URL scheme in {base_url!r}; expected http or https")
    if not parts.hostname:
        raise ConfigurationError(f"URL {base_url!r} has no host")

    try:
        port = parts.port or DEFAULT_PORTS[scheme]
    except ValueError as e:
        raise ConfigurationError(f"invalid port in {base_url!r}") from e

    target = parts.path or "/"
    if parts.query:
        target = f"{target}?{parts.query}"

    return RequestDescriptor(
        scheme=scheme,
        host=parts.hostname,
        port=port,
        path=target,
        method=method,
        headers=dict(headers or {}),
    )


def bearer_headers(token: str, **extra: str) -> dict[str, str]:
    """Build headers carrying the bearer token."""
    return {"Authorization": f"Bearer {token}", **extra}


def _open_connection(
    descriptor: RequestDescriptor, timeout: float | None
) -> http.client.HTTPConnection:
    """Open a connection for the descriptor's scheme (extracted for testing)."""
    if descriptor.scheme == "https":
        return http.client.HTTPSConnection(
            descriptor.host,
            descriptor.port,
            timeout=timeout,
            context=ssl.create_default_context(),
        )
    return http.client.HTTPConnection(descriptor.host, descriptor.port, timeout=timeout)


def parse_body(raw: bytes) -> Any:
    """Decode a response body as JSON, falling back to its text."""
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def request(
    descriptor: RequestDescriptor,
    body: bytes | str | None = None,
    timeout: float | None = None,
) -> Any:
    """Execute one HTTP request and interpret its response.

    Args:
        descriptor: Resolved request target
        body: Optional request body; str is sent as UTF-8
        timeout: Socket timeout in seconds; None waits indefinitely

    Returns:
        Parsed JSON for 2xx responses, or the raw text if it is not JSON

    Raises:
        RequestFailed: If the status is outside [200, 300)
        NetworkError: If no HTTP response could be obtained
    """
    payload = body.encode("utf-8") if isinstance(body, str) else body

    conn = _open_connection(descriptor, timeout)
    try:
        conn.request(descriptor.method, descriptor.path, body=payload, headers=descriptor.headers)
        response = conn.getresponse()
        status = response.status
        raw = response.read()
    except (OSError, http.client.HTTPException) as e:
        LOGGER.debug("%s %s failed: %s", descriptor.method, descriptor.url, e)
        raise NetworkError(e) from e
    finally:
        conn.close()

    LOGGER.debug("%s %s -> %d", descriptor.method, descriptor.url, status)

    if not 200 <= status < 300:
        raise RequestFailed(status, raw.decode("utf-8", errors="replace"))

    return parse_body(raw)


def _new_boundary() -> str:
    return "-" * 24 + format(time.time_ns() // 1_000_000, "x")


def build_multipart(parts: Sequence[tuple[str, str | Path]]) -> MultipartBody:
    """Build a multipart/form-data body from files on disk.

    Args:
        parts: Ordered (field_name, file_path) pairs

    Returns:
        MultipartBody with the materialized bytes, boundary and exact length

    Raises:
        ArtifactMissing: If a file cannot be read
    """
    boundary = _new_boundary()
    chunks: list[bytes] = []

    for field_name, file_path in parts:
        path = Path(file_path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ArtifactMissing(f"cannot read {path}: {e}") from e

        header = (
            f"--{boundary}{CRLF}"
            f'Content-Disposition: form-data; name="{field_name}"; filename="{path.name}"{CRLF}'
            f"Content-Type: application/octet-stream{CRLF}{CRLF}"
        )
        chunks.append(header.encode("utf-8"))
        chunks.append(content)
        chunks.append(CRLF.encode("utf-8"))

    chunks.append(f"--{boundary}--{CRLF}".encode("utf-8"))

    body = b"".join(chunks)
    return MultipartBody(body=body, boundary=boundary, content_length=len(body))


def request_multipart(
    descriptor: RequestDescriptor,
    parts: Sequence[tuple[str, str | Path]],
    timeout: float | None = None,
) -> Any:
    """Upload files as multipart/form-data and interpret the response."""
    multipart = build_multipart(parts)
    headers = {
        **descriptor.headers,
        "Content-Type": multipart.content_type,
        "Content-Length": str(multipart.content_length),
    }
    upload = RequestDescriptor(
        scheme=descriptor.scheme,
        host=descriptor.host,
        port=descriptor.port,
        path=descriptor.path,
        method=descriptor.method,
        headers=headers,
    )
    return request(upload, multipart.body, timeout=timeout)
