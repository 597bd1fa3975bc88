"""Certificate inspection helpers for issued PEM files."""

from pathlib import Path

from cryptography import x509

from .errors import ArtifactMissing
from .models import CertificateSummary


def deserialize_certificate(pem_data: bytes) -> x509.Certificate:
    """Deserialize certificate from PEM bytes."""
    return x509.load_pem_x509_certificate(pem_data)


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def get_dns_names(cert: x509.Certificate) -> list[str]:
    """Return the subjectAltName DNS entries, or [] when there is no SAN."""
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []
    return san.value.get_values_for_type(x509.DNSName)


def summarize_certificate(cert: x509.Certificate) -> CertificateSummary:
    """Extract the fields worth reporting after issuance."""
    cn_attrs = cert.subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)
    common_name = cn_attrs[0].value if cn_attrs else None
    if isinstance(common_name, bytes):
        common_name = common_name.decode("utf-8", errors="replace")

    return CertificateSummary(
        common_name=common_name,
        dns_names=get_dns_names(cert),
        serial_number=get_certificate_serial_hex(cert),
        not_before=cert.not_valid_before_utc,
        not_after=cert.not_valid_after_utc,
    )


def read_certificate_summary(path: Path) -> CertificateSummary:
    """Load a PEM certificate from disk and summarize it.

    Raises:
        ArtifactMissing: If the file cannot be read
        ValueError: If the file is not a PEM certificate
    """
    try:
        pem_data = path.read_bytes()
    except OSError as e:
        raise ArtifactMissing(f"cannot read {path}: {e}") from e
    return summarize_certificate(deserialize_certificate(pem_data))
