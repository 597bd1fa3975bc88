#!/usr/bin/env python3
"""Issue a certificate from step-ca and publish it to Nginx Proxy Manager."""

import argparse
import sys
from pathlib import Path

from cert_forge.lib.auth_client import authenticate
from cert_forge.lib.cert_utils import read_certificate_summary
from cert_forge.lib.certificate_issuer import CertificateIssuer
from cert_forge.lib.config import CONFIG_FILE, AppConfig, load_config
from cert_forge.lib.domain import full_domain, is_valid_domain
from cert_forge.lib.errors import CertForgeError
from cert_forge.lib.logging_config import LOGGER, set_verbose
from cert_forge.lib.models import ProvisionResult
from cert_forge.lib.publisher import CertificatePublisher
from cert_forge.scripts import configure

CONFIGURE_COMMAND = "configure"


class PublicationError(CertForgeError):
    """Publishing failed after the certificate files were written."""

    def __init__(self, domain: str, cause: Exception) -> None:
        self.domain = domain
        self.cause = cause
        super().__init__(str(cause))


def provision_certificate(
    domain: str,
    config: AppConfig,
    issuer: CertificateIssuer,
    publisher: CertificatePublisher,
    reuse_existing: bool = False,
    timeout: float | None = None,
) -> ProvisionResult:
    """Issue, authenticate, validate, resolve and upload, in that order.

    1. Issue <domain>.crt/.key via step (or reuse them if asked and present)
    2. Exchange NPM credentials for a bearer token
    3. Validate the pair, resolve or create the record, upload

    Args:
        domain: Fully qualified domain
        config: Loaded configuration
        issuer: Certificate issuer
        publisher: NPM publisher
        reuse_existing: Skip step when both files already exist
        timeout: HTTP timeout for authentication; None waits indefinitely

    Returns:
        ProvisionResult with files and record id

    Raises:
        CertForgeError: From the first stage that fails, wrapped in
            PublicationError once the files exist
    """
    files = issuer.existing(domain) if reuse_existing else None
    reused = files is not None
    if files is not None:
        LOGGER.info("Reusing existing certificate files for %s", domain)
    else:
        LOGGER.info("Generating certificate for %s...", domain)
        files = issuer.issue(domain)

    try:
        summary = read_certificate_summary(files.certificate_path)
    except ValueError as e:
        LOGGER.warning("Could not parse %s: %s", files.certificate_path, e)
    else:
        LOGGER.info(
            "Certificate CN=%s SAN=%s serial=%s expires %s",
            summary.common_name,
            ",".join(summary.dns_names),
            summary.serial_number,
            summary.not_after.isoformat(),
        )

    try:
        LOGGER.info("Authenticating with NPM...")
        token = authenticate(config.npm, timeout=timeout)

        LOGGER.info("Uploading certificate to NPM...")
        record_id = publisher.publish(domain, files, token)
    except CertForgeError as e:
        raise PublicationError(domain, e) from e

    return ProvisionResult(domain=domain, files=files, record_id=record_id, reused=reused)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcf",
        description="Generate a step-ca certificate and upload it to Nginx Proxy Manager",
        epilog=(
            "examples:\n"
            "  tcf example    # certificate for example.<domain suffix>\n"
            "  tcf configure  # configure settings"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("subdomain", help="Subdomain to certify, or 'configure'")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"Configuration file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--reuse-existing",
        action="store_true",
        help="Skip issuance when <domain>.crt and <domain>.key already exist",
    )
    parser.add_argument("--step-bin", default="step", help="step CLI executable (default: step)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument(
        "--step-timeout",
        type=float,
        default=None,
        help="step CLI timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log HTTP exchanges")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Provision and publish a certificate.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == CONFIGURE_COMMAND:
        return configure.main(argv[1:])

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 0 for --help and 2 for usage errors
        return 0 if e.code == 0 else 1

    set_verbose(args.verbose)

    if not is_valid_domain(args.subdomain):
        LOGGER.error("Invalid domain format: %s", args.subdomain)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config(args.config)
        domain = full_domain(args.subdomain, config.domain_suffix)

        issuer = CertificateIssuer(
            config.step_ca, executable=args.step_bin, timeout=args.step_timeout
        )
        publisher = CertificatePublisher(config.npm, timeout=args.timeout)

        result = provision_certificate(
            domain,
            config,
            issuer,
            publisher,
            reuse_existing=args.reuse_existing,
            timeout=args.timeout,
        )

        LOGGER.info(
            "Certificate for %s successfully generated and uploaded to record %s!",
            result.domain,
            result.record_id,
        )
        return 0

    except PublicationError as e:
        LOGGER.error("Certificate for %s was issued but not published: %s", e.domain, e)
        return 1
    except CertForgeError as e:
        LOGGER.error("%s", e)
        return 1
    except Exception as e:
        LOGGER.error("Unhandled error: %s", e)
        return 1


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
