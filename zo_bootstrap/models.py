"""
Pydantic models for the bootstrap inputs and the descriptors derived from them.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config
from . import constants as C


def _env(environ: Mapping[str, str], name: str, default: Optional[str] = None):
    """Read a variable, treating empty values as unset (shell ``${VAR:-default}``)."""
    value = environ.get(name)
    return value if value else default


class BootstrapInputs(BaseModel):
    """Raw external configuration, read once from the process environment."""

    model_config = ConfigDict(frozen=True)

    auth_json: str = Field(..., description="Literal admin JSON or secret ARN")
    storage_type: str = Field(..., description="Object storage backend kind")
    bucket_name: str = Field(..., description="Bucket holding ingested data")
    postgres_config: Optional[str] = Field(
        None, description="Literal Postgres JSON or secret ARN"
    )
    http_port: str = config.DEFAULT_HTTP_PORT
    grpc_port: str = config.DEFAULT_GRPC_PORT
    meta_store: str = config.DEFAULT_META_STORE
    lock_timeout: str = config.DEFAULT_META_TRANSACTION_LOCK_TIMEOUT
    retries: str = config.DEFAULT_META_TRANSACTION_RETRIES
    s3_region_name: Optional[str] = None
    aws_region: str = config.DEFAULT_AWS_REGION

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "BootstrapInputs":
        """Build inputs from an environment snapshot, applying documented defaults."""
        return cls(
            auth_json=_env(environ, C.ZO_AUTH_JSON, ""),
            storage_type=_env(environ, C.ZO_STORAGE_TYPE, ""),
            bucket_name=_env(environ, C.ZO_BUCKET_NAME, ""),
            postgres_config=_env(environ, C.ZO_POSTGRES_CONFIG),
            http_port=_env(environ, C.ZO_HTTP_PORT, config.DEFAULT_HTTP_PORT),
            grpc_port=_env(environ, C.ZO_GRPC_PORT, config.DEFAULT_GRPC_PORT),
            meta_store=_env(environ, C.ZO_META_STORE, config.DEFAULT_META_STORE),
            lock_timeout=_env(
                environ,
                C.ZO_META_TRANSACTION_LOCK_TIMEOUT,
                config.DEFAULT_META_TRANSACTION_LOCK_TIMEOUT,
            ),
            retries=_env(
                environ,
                C.ZO_META_TRANSACTION_RETRIES,
                config.DEFAULT_META_TRANSACTION_RETRIES,
            ),
            s3_region_name=_env(environ, C.ZO_S3_REGION_NAME),
            aws_region=_env(environ, C.AWS_REGION, config.DEFAULT_AWS_REGION),
        )


class CredentialRecord(BaseModel):
    """Root user credentials for the ingestion server."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def reject_blank_or_null(cls, v):
        if not v or v == C.NULL_SENTINEL:
            raise ValueError("must be a non-empty, non-null string")
        return v


class StorageDescriptor(BaseModel):
    """S3-compatible object storage settings."""

    model_config = ConfigDict(frozen=True)

    kind: str = C.STORAGE_S3
    server_url: str = C.S3_SERVER_URL
    region: str
    bucket_name: str
    provider: str = C.S3_PROVIDER
    http1_only: bool = True


class PostgresConfig(BaseModel):
    """Connection parameters for the Postgres metastore."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: str
    user: str
    password: str
    database: str = config.DEFAULT_POSTGRES_DATABASE

    @field_validator("host", "port", "user", "password", "database")
    @classmethod
    def reject_blank(cls, v):
        if not v:
            raise ValueError("must be a non-empty string")
        return v

    @property
    def dsn(self) -> str:
        # Field order and delimiters are what the server's DSN parser expects
        return (
            f"{C.POSTGRES_SCHEME}://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class MetastoreDescriptor(BaseModel):
    """Metastore kind plus connection parameters when the kind needs them."""

    model_config = ConfigDict(frozen=True)

    kind: str = C.META_STORE_POSTGRES
    postgres: Optional[PostgresConfig] = None

    @property
    def requires_dsn(self) -> bool:
        return self.kind == C.META_STORE_POSTGRES

    @property
    def dsn(self) -> Optional[str]:
        return self.postgres.dsn if self.postgres else None


@dataclass(frozen=True)
class EnvironmentSet:
    """Flattened environment handed to the proxy and the server."""

    values: Mapping[str, str] = field(default_factory=dict)

    def as_environ(self) -> Dict[str, str]:
        return dict(self.values)

    def child_environ(self, base: Mapping[str, str]) -> Dict[str, str]:
        """Overlay the composed values on top of the inherited environment."""
        merged = dict(base)
        merged.update(self.values)
        return merged

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __contains__(self, name: str) -> bool:
        return name in self.values
