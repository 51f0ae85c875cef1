"""
Presence and shape checks run over the bootstrap configuration.
"""

from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from . import constants as C
from .errors import (
    InvalidCredentialError,
    InvalidMetastoreConfigError,
    MissingEnvError,
    UnsupportedStorageError,
)
from .models import CredentialRecord, PostgresConfig


def _invalid_fields(error: ValidationError):
    return [str(err["loc"][0]) for err in error.errors() if err["loc"]]


def validate_required_present(environ: Mapping[str, str], names: Iterable[str]) -> None:
    """Raise MissingEnvError for the first name that is unset or empty."""
    for name in names:
        if not environ.get(name):
            raise MissingEnvError(name)


def validate_credential(fields: Mapping[str, Optional[str]]) -> CredentialRecord:
    """
    Build a CredentialRecord from extracted ``user_email``/``password`` fields.

    Raises:
        InvalidCredentialError: If either value is empty or the null sentinel
    """
    try:
        return CredentialRecord(
            email=fields.get("user_email") or "",
            password=fields.get("password") or "",
        )
    except ValidationError as e:
        # Report field names only; input values stay out of the message
        raise InvalidCredentialError(_invalid_fields(e)) from None


def validate_storage_type(kind: str) -> None:
    """Only S3 is supported; every other backend is rejected."""
    if kind == C.STORAGE_S3:
        return
    if kind == C.STORAGE_GCS:
        raise UnsupportedStorageError(
            kind, "GCS storage type not supported in AWS App Runner environment."
        )
    raise UnsupportedStorageError(kind)


def validate_postgres_fields(fields: Mapping[str, Optional[str]]) -> PostgresConfig:
    """
    Build a PostgresConfig from extracted fields.

    Raises:
        InvalidMetastoreConfigError: If host, port, user or password is empty
    """
    params = {k: v for k, v in fields.items() if v is not None}
    if "username" in params:
        params["user"] = params.pop("username")
    try:
        return PostgresConfig(**params)
    except ValidationError as e:
        raise InvalidMetastoreConfigError(_invalid_fields(e)) from None
