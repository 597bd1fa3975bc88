"""Tests for the configure script."""

import json
from pathlib import Path
from unittest.mock import patch

from cert_forge.lib.config import AppConfig, IssuerConfig, RegistryConfig
from cert_forge.scripts.configure import configure_interactive, main


def _scripted(answers: list[str]):
    prompts: list[str] = []

    def _prompt(text: str) -> str:
        prompts.append(text)
        return answers.pop(0)

    return _prompt, prompts


class TestConfigureInteractive:
    """Tests for configure_interactive."""

    def test_empty_answers_keep_current_values(self) -> None:
        current = AppConfig(npm=RegistryConfig(email="me@lan", password="pw"))
        prompt, _ = _scripted([""] * 6)
        secret, _ = _scripted([""])

        assert configure_interactive(current, prompt, secret) == current

    def test_answers_replace_values(self) -> None:
        prompt, prompts = _scripted(
            ["https://ca.lan:9000", "/r.crt", "ops", "lan", "https://npm.lan", "me@lan"]
        )
        secret, secret_prompts = _scripted(["s3cret"])

        updated = configure_interactive(AppConfig(), prompt, secret)

        assert updated == AppConfig(
            step_ca=IssuerConfig(url="https://ca.lan:9000", root="/r.crt", provisioner="ops"),
            domain_suffix="lan",
            npm=RegistryConfig(url="https://npm.lan", email="me@lan", password="s3cret"),
        )
        assert prompts[0] == "Step CA URL [https://ca.local]: "
        assert secret_prompts == ["NPM Password []: "]

    def test_current_password_masked(self) -> None:
        prompt, _ = _scripted([""] * 6)
        secret, secret_prompts = _scripted([""])

        configure_interactive(AppConfig(npm=RegistryConfig(password="pw")), prompt, secret)

        assert secret_prompts == ["NPM Password [********]: "]


class TestMain:
    """Tests for configure.main."""

    def test_saves_answers(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".tcf" / "config.json"
        answers = ["", "/root_ca.crt", "", "", "", "admin@example.com"]

        with (
            patch("builtins.input", side_effect=answers),
            patch("cert_forge.scripts.configure.getpass.getpass", return_value="pw"),
        ):
            assert main(["--config", str(config_file)]) == 0

        saved = json.loads(config_file.read_text())
        assert saved["stepCa"]["root"] == "/root_ca.crt"
        assert saved["npm"]["email"] == "admin@example.com"
        assert saved["npm"]["password"] == "pw"

    def test_unknown_option_exits_one(self) -> None:
        """Usage errors map to exit code 1, not argparse's 2."""
        assert main(["--bogus"]) == 1

    def test_help_exits_zero(self) -> None:
        assert main(["--help"]) == 0

    def test_eof_aborts_without_saving(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"

        with patch("builtins.input", side_effect=EOFError):
            assert main(["--config", str(config_file)]) == 1

        assert json.loads(config_file.read_text())["npm"]["email"] == ""
