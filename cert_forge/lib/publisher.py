"""Publication of an issued certificate to Nginx Proxy Manager."""

import os

from .certificate_registry import CERTIFICATES_PATH, CertificateRegistry
from .config import RegistryConfig
from .errors import ArtifactMissing
from .logging_config import LOGGER
from .models import CertificateFiles
from .transport import bearer_headers, request_multipart, resolve_request

VALIDATE_PATH = f"{CERTIFICATES_PATH}/validate"


def upload_path(record_id: int | str) -> str:
    return f"{CERTIFICATES_PATH}/{record_id}/upload"


def _form_parts(files: CertificateFiles) -> list[tuple[str, str]]:
    return [
        ("certificate", str(files.certificate_path)),
        ("certificate_key", str(files.key_path)),
    ]


class CertificatePublisher:
    """Validates and uploads a certificate/key pair."""

    def __init__(
        self,
        config: RegistryConfig,
        registry: CertificateRegistry | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize publisher.

        Args:
            config: NPM URL and credentials
            registry: Record lookup; defaults to one bound to config.url
            timeout: Socket timeout in seconds; None waits indefinitely
        """
        self.config = config
        self.timeout = timeout
        self.registry = registry or CertificateRegistry(config.url, timeout=timeout)

    def validate(self, files: CertificateFiles, token: str) -> None:
        """Ask NPM to validate the pair; a non-2xx answer raises RequestFailed."""
        descriptor = resolve_request(
            self.config.url, VALIDATE_PATH, method="POST", headers=bearer_headers(token)
        )
        request_multipart(descriptor, _form_parts(files), timeout=self.timeout)

    def upload(self, record_id: int | str, files: CertificateFiles, token: str) -> None:
        """Upload the pair to an existing record."""
        descriptor = resolve_request(
            self.config.url, upload_path(record_id), method="POST", headers=bearer_headers(token)
        )
        request_multipart(descriptor, _form_parts(files), timeout=self.timeout)

    def publish(self, domain: str, files: CertificateFiles, token: str) -> int | str:
        """Validate, resolve the record id, then upload.

        Each step runs only if the previous one succeeded. A failed upload
        leaves any record created in this run in place.

        Args:
            domain: Record nice_name
            files: Issued certificate/key pair
            token: Bearer token from authenticate()

        Returns:
            Id of the record the pair was uploaded to

        Raises:
            ArtifactMissing: If either file is not readable
            RequestFailed: If NPM rejects validation or upload
            RegistryError: If the record cannot be resolved
        """
        for path in (files.certificate_path, files.key_path):
            if not path.is_file() or not os.access(path, os.R_OK):
                raise ArtifactMissing(f"certificate file is not readable: {path}")

        LOGGER.info("Validating certificate for %s", domain)
        self.validate(files, token)

        record_id = self.registry.resolve_or_create(domain, token)

        LOGGER.info("Uploading certificate to record %s", record_id)
        self.upload(record_id, files, token)
        return record_id
