"""Exception hierarchy for certificate issuance and publication."""


class CertForgeError(Exception):
    """Base class for every failure the pipeline reports to the operator."""


class ConfigurationError(CertForgeError):
    """A required URL or credential is missing or malformed."""


class ProcessError(CertForgeError):
    """The certificate authority CLI could not be run to completion."""


class ProcessSpawnError(ProcessError):
    """The executable could not be started at all."""

    def __init__(self, executable: str, cause: OSError) -> None:
        self.executable = executable
        self.cause = cause
        super().__init__(f"Execution error: could not start {executable}: {cause}")


class ProcessExitError(ProcessError):
    """The executable ran and exited with a non-zero status."""

    def __init__(self, executable: str, exit_code: int) -> None:
        self.executable = executable
        self.exit_code = exit_code
        super().__init__(f"Command {executable} failed with exit code {exit_code}")


class ProcessTimeoutError(ProcessError):
    """The executable outlived an explicitly requested timeout."""

    def __init__(self, executable: str, timeout: float) -> None:
        self.executable = executable
        self.timeout = timeout
        super().__init__(f"Command {executable} timed out after {timeout}s")


class ArtifactMissing(CertForgeError):
    """An expected certificate or key file is absent or unreadable."""


class AuthenticationFailed(CertForgeError):
    """The token endpoint answered without a token."""


class RequestFailed(CertForgeError):
    """The server answered with a status outside [200, 300)."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed with status {status_code}: {body}")


class NetworkError(CertForgeError):
    """The request never produced an HTTP response."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class RegistryError(CertForgeError):
    """The certificate registry returned something unusable."""
