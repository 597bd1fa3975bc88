#!/usr/bin/env python3
"""Interactive configuration of step-ca and Nginx Proxy Manager settings."""

import argparse
import getpass
import sys
from collections.abc import Callable
from pathlib import Path

from cert_forge.lib.config import (
    CONFIG_FILE,
    AppConfig,
    IssuerConfig,
    RegistryConfig,
    load_config,
    save_config,
)
from cert_forge.lib.logging_config import LOGGER

Prompt = Callable[[str], str]


def _ask(prompt: Prompt, label: str, current: str) -> str:
    answer = prompt(f"{label} [{current}]: ").strip()
    return answer or current


def _ask_secret(secret_prompt: Prompt, label: str, current: str) -> str:
    shown = "********" if current else ""
    answer = secret_prompt(f"{label} [{shown}]: ").strip()
    return answer or current


def configure_interactive(
    config: AppConfig,
    prompt: Prompt | None = None,
    secret_prompt: Prompt | None = None,
) -> AppConfig:
    """Prompt for every setting; empty input keeps the current value.

    Args:
        config: Current configuration, shown as defaults
        prompt: Line reader for plain values (default: input)
        secret_prompt: Non-echoing line reader for the password (default: getpass)

    Returns:
        Updated configuration (not yet saved)
    """
    prompt = prompt or input
    secret_prompt = secret_prompt or getpass.getpass

    print("Press Enter to keep current value\n")

    print("Step CA Configuration:")
    step_ca = IssuerConfig(
        url=_ask(prompt, "Step CA URL", config.step_ca.url),
        root=_ask(prompt, "Path to Step CA Root file", config.step_ca.root),
        provisioner=_ask(prompt, "Step CA Provisioner", config.step_ca.provisioner),
    )

    print("\nDomain Configuration:")
    suffix = _ask(prompt, "Domain Suffix", config.domain_suffix)

    print("\nNginx Proxy Manager Configuration:")
    npm = RegistryConfig(
        url=_ask(prompt, "NPM URL", config.npm.url),
        email=_ask(prompt, "NPM Email", config.npm.email),
        password=_ask_secret(secret_prompt, "NPM Password", config.npm.password),
    )

    return AppConfig(step_ca=step_ca, domain_suffix=suffix, npm=npm)


def main(argv: list[str] | None = None) -> int:
    """Run interactive configuration.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(prog="tcf configure", description="Configure settings")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"Configuration file (default: {CONFIG_FILE})",
    )
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 0 for --help and 2 for usage errors
        return 0 if e.code == 0 else 1

    try:
        current = load_config(args.config)
        updated = configure_interactive(current)
        save_config(updated, args.config)
        LOGGER.info("Configuration saved to %s", args.config)
        return 0

    except (EOFError, KeyboardInterrupt):
        LOGGER.error("Configuration aborted; nothing saved")
        return 1
    except Exception as e:
        LOGGER.error("Configuration failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
