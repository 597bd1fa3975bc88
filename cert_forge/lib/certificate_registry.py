"""Certificate records in Nginx Proxy Manager."""

import json

from .errors import RegistryError
from .logging_config import LOGGER
from .models import CertificateRecord
from .transport import bearer_headers, request, resolve_request

CERTIFICATES_PATH = "/api/nginx/certificates"
CUSTOM_PROVIDER = "other"


class CertificateRegistry:
    """Finds or creates NPM certificate records by nice_name.

    The lookup and the creation are two separate API calls. Two runs for the
    same name at the same time can both miss and both create; NPM offers no
    create-if-absent operation to close that gap.
    """

    def __init__(self, base_url: str, timeout: float | None = None) -> None:
        self.base_url = base_url
        self.timeout = timeout

    def list_certificates(self, token: str) -> list[CertificateRecord]:
        """List all certificate records.

        Raises:
            RegistryError: If the listing is not a JSON array
        """
        descriptor = resolve_request(
            self.base_url, CERTIFICATES_PATH, method="GET", headers=bearer_headers(token)
        )
        data = request(descriptor, timeout=self.timeout)
        if not isinstance(data, list):
            raise RegistryError("unexpected certificate listing: expected a JSON array")

        return [
            CertificateRecord(
                id=item["id"],
                nice_name=item["nice_name"],
                provider=item.get("provider", ""),
            )
            for item in data
            if isinstance(item, dict) and "id" in item and "nice_name" in item
        ]

    def find(self, logical_name: str, token: str) -> CertificateRecord | None:
        """Return the first record whose nice_name equals logical_name exactly."""
        for record in self.list_certificates(token):
            if record.nice_name == logical_name:
                return record
        return None

    def create(self, logical_name: str, token: str) -> int | str:
        """Create a custom-provider record and return its id.

        Raises:
            RegistryError: If the response carries no id
        """
        descriptor = resolve_request(
            self.base_url,
            CERTIFICATES_PATH,
            method="POST",
            headers=bearer_headers(token, **{"Content-Type": "application/json"}),
        )
        data = request(
            descriptor,
            json.dumps({"nice_name": logical_name, "provider": CUSTOM_PROVIDER}),
            timeout=self.timeout,
        )

        record_id = data.get("id") if isinstance(data, dict) else None
        if record_id is None:
            raise RegistryError("creation failed: no certificate id in response")

        LOGGER.info("Created certificate record %s for %s", record_id, logical_name)
        return record_id

    def resolve_or_create(self, logical_name: str, token: str) -> int | str:
        """Return the id of the record named logical_name, creating it if absent."""
        existing = self.find(logical_name, token)
        if existing is not None:
            LOGGER.info("Using existing certificate record %s for %s", existing.id, logical_name)
            return existing.id
        return self.create(logical_name, token)
