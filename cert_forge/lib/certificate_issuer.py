"""Certificate issuance through the step CLI."""

from pathlib import Path

from .config import IssuerConfig
from .errors import ArtifactMissing, ConfigurationError
from .logging_config import LOGGER
from .models import CertificateFiles
from .process_runner import run_process

STEP_SUBCOMMAND = ("ca", "certificate")
# 365 days * 24 hours * 10 years
NOT_AFTER = "87600h"
FILE_MODE = 0o644


def normalize_permissions(files: CertificateFiles) -> None:
    """Set owner read/write, group/other read on both files."""
    files.certificate_path.chmod(FILE_MODE)
    files.key_path.chmod(FILE_MODE)


class CertificateIssuer:
    """Requests leaf certificates from step-ca and normalizes the output files."""

    def __init__(
        self,
        config: IssuerConfig,
        executable: str = "step",
        output_dir: Path = Path("."),
        timeout: float | None = None,
    ) -> None:
        """Initialize issuer.

        Args:
            config: step-ca URL, root certificate and provisioner
            executable: step binary name or path
            output_dir: Directory the .crt/.key pair is written to
            timeout: Seconds to wait for step; None waits indefinitely
        """
        self.config = config
        self.executable = executable
        self.output_dir = output_dir
        self.timeout = timeout

    def output_files(self, domain: str) -> CertificateFiles:
        """Return the deterministic output paths for a domain."""
        return CertificateFiles(
            certificate_path=self.output_dir / f"{domain}.crt",
            key_path=self.output_dir / f"{domain}.key",
        )

    def existing(self, domain: str) -> CertificateFiles | None:
        """Return the domain's files, normalized to 0644, if both already exist."""
        files = self.output_files(domain)
        if not (files.certificate_path.is_file() and files.key_path.is_file()):
            return None
        normalize_permissions(files)
        return files

    def build_args(self, domain: str, files: CertificateFiles) -> list[str]:
        """Build the fixed step argument list."""
        return [
            *STEP_SUBCOMMAND,
            domain,
            str(files.certificate_path),
            str(files.key_path),
            f"--not-after={NOT_AFTER}",
            "--ca-url",
            self.config.url,
            "--root",
            self.config.root,
        ]

    def issue(self, domain: str) -> CertificateFiles:
        """Issue a certificate for domain and return the written files.

        Args:
            domain: Fully qualified domain, e.g. svc.local

        Returns:
            CertificateFiles for <domain>.crt and <domain>.key

        Raises:
            ConfigurationError: If the CA URL or root certificate is not set
            ProcessError: If step cannot be started or fails
            ArtifactMissing: If step succeeded without writing both files
        """
        if not self.config.url or not self.config.root:
            raise ConfigurationError("Missing Step CA configuration. Please run: tcf configure")

        files = self.output_files(domain)
        run_process(self.executable, self.build_args(domain, files), timeout=self.timeout)

        missing = [
            str(path)
            for path in (files.certificate_path, files.key_path)
            if not path.is_file()
        ]
        if missing:
            raise ArtifactMissing(f"Certificate files were not generated: {', '.join(missing)}")

        normalize_permissions(files)

        LOGGER.info("Certificate written to %s", files.certificate_path)
        return files
