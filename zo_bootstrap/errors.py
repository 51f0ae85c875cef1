"""
Error taxonomy for the bootstrap.

Every error is terminal: the sequencer logs it and exits with ``exit_code``.
Messages name the offending configuration key and never carry credential values.
"""

from typing import Optional


class BootstrapError(Exception):
    """Base class for all bootstrap failures."""

    exit_code = 1


class MissingEnvError(BootstrapError):
    """A required environment variable is unset or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required environment variable {name} is not set.")


class ComposeError(BootstrapError):
    """Base class for failures while composing the child environment."""


class SecretFetchError(ComposeError):
    """The secret store could not return a value for a reference."""

    def __init__(self, secret_id: str, detail: str):
        self.secret_id = secret_id
        self.detail = detail
        super().__init__(
            f"Failed to retrieve secret {secret_id} from Secrets Manager: {detail}"
        )


class ParseError(ComposeError):
    """A configuration blob is not a well-formed JSON object."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"Invalid JSON format in {source}: {detail}")


class MissingFieldError(ComposeError):
    """A required field is absent (or null) in a configuration blob."""

    def __init__(self, source: str, field: str):
        self.source = source
        self.field = field
        super().__init__(f"Field '{field}' is missing from {source}.")


class InvalidCredentialError(ComposeError):
    """The admin credential record failed validation."""

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            "Failed to extract user_email or password from admin credentials "
            f"(invalid: {', '.join(self.fields)})."
        )


class UnsupportedStorageError(ComposeError):
    """The declared storage backend is not S3."""

    def __init__(self, kind: str, message: Optional[str] = None):
        self.kind = kind
        super().__init__(
            message or f"Invalid ZO_STORAGE_TYPE '{kind}'. Must be 's3'."
        )


class InvalidMetastoreConfigError(ComposeError):
    """The Postgres metastore configuration is incomplete."""

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            "Invalid PostgreSQL configuration. Please check ZO_POSTGRES_CONFIG "
            f"(invalid: {', '.join(self.fields)})."
        )


class ProcessLaunchError(BootstrapError):
    """A child process could not be started."""

    def __init__(self, command, detail: str):
        self.command = list(command)
        super().__init__(f"Failed to launch {' '.join(self.command)}: {detail}")
