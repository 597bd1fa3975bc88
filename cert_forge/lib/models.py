"""Value and result models for certificate issuance and publication."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class CertificateFiles:
    """Certificate/key pair written by the certificate authority CLI."""

    certificate_path: Path
    key_path: Path


@dataclass(frozen=True)
class CertificateRecord:
    """Certificate entry as listed by Nginx Proxy Manager."""

    id: int | str
    nice_name: str
    provider: str = ""


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved target of a single HTTP request."""

    scheme: str
    host: str
    port: int
    path: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.path}"


@dataclass(frozen=True)
class MultipartBody:
    """Materialized multipart/form-data payload."""

    body: bytes
    boundary: str
    content_length: int

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


@dataclass(frozen=True)
class CertificateSummary:
    """Human-relevant details read back from an issued certificate."""

    common_name: str | None
    dns_names: list[str]
    serial_number: str
    not_before: datetime
    not_after: datetime


@dataclass
class ProvisionResult:
    """Result from a full issue-and-publish run.

    Contains the full domain, the local certificate files and the id of the
    Nginx Proxy Manager record they were uploaded to.
    """

    domain: str
    files: CertificateFiles
    record_id: int | str
    reused: bool = False
