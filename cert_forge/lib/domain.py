"""Subdomain validation and full domain composition."""

import re

LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
DOMAIN_RE = re.compile(rf"^{LABEL}(?:\.{LABEL})*$")


def is_valid_domain(name: str | None) -> bool:
    """Return True for dot-separated labels of letters, digits and inner hyphens."""
    return bool(name) and DOMAIN_RE.match(name) is not None


def full_domain(subdomain: str, suffix: str) -> str:
    """Join subdomain and configured suffix, e.g. ("svc", "local") -> "svc.local"."""
    suffix = suffix.strip(".")
    if not suffix:
        return subdomain
    return f"{subdomain}.{suffix}"
