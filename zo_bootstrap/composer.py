"""
Derives the complete child-process environment from validated inputs.
"""

import logging
from types import MappingProxyType
from typing import Dict, Optional

from . import config
from . import constants as C
from .json_extractor import FieldSpec, extract
from .models import (
    BootstrapInputs,
    CredentialRecord,
    EnvironmentSet,
    MetastoreDescriptor,
    StorageDescriptor,
)
from .secret_store import SecretResolver
from .stage_tracking import track_stage
from .validators import (
    validate_credential,
    validate_postgres_fields,
    validate_storage_type,
)

logger = logging.getLogger(__name__)

AUTH_FIELDS = (
    FieldSpec("user_email"),
    FieldSpec("password"),
)

POSTGRES_FIELDS = (
    FieldSpec("host"),
    FieldSpec("port"),
    FieldSpec("username", alias="user"),
    FieldSpec("password"),
    FieldSpec("database", required=False, default=config.DEFAULT_POSTGRES_DATABASE),
)


class EnvironmentComposer:
    """Builds an EnvironmentSet; any failing step aborts the whole composition."""

    def __init__(self, resolver: SecretResolver):
        self.resolver = resolver

    def compose(self, inputs: BootstrapInputs) -> EnvironmentSet:
        credentials = self.resolve_credentials(inputs.auth_json)
        storage = self.derive_storage(inputs)
        metastore = self.derive_metastore(inputs)

        values: Dict[str, str] = {
            C.RUST_BACKTRACE: "1",
            C.ZO_ROOT_USER_EMAIL: credentials.email,
            C.ZO_ROOT_USER_PASSWORD: credentials.password,
            C.ZO_HTTP_PORT: inputs.http_port,
            C.ZO_GRPC_PORT: inputs.grpc_port,
            C.ZO_S3_BUCKET_NAME: storage.bucket_name,
            C.ZO_S3_SERVER_URL: storage.server_url,
            C.ZO_S3_REGION_NAME: storage.region,
            C.ZO_S3_PROVIDER: storage.provider,
            C.ZO_S3_FEATURE_HTTP1_ONLY: "true" if storage.http1_only else "false",
            C.AWS_EC2_METADATA_DISABLED: "false",
            C.ZO_META_STORE: metastore.kind,
            C.ZO_META_TRANSACTION_LOCK_TIMEOUT: inputs.lock_timeout,
            C.ZO_META_TRANSACTION_RETRIES: inputs.retries,
        }
        if metastore.dsn:
            values[C.ZO_META_POSTGRES_DSN] = metastore.dsn

        return EnvironmentSet(values=MappingProxyType(values))

    @track_stage("credentials")
    def resolve_credentials(self, auth_json: str) -> CredentialRecord:
        """Resolve ZO_AUTH_JSON into validated root user credentials."""
        blob = self.resolver.resolve(auth_json)
        fields = extract(blob, AUTH_FIELDS, source=C.ZO_AUTH_JSON)
        return validate_credential(fields)

    @track_stage("storage")
    def derive_storage(self, inputs: BootstrapInputs) -> StorageDescriptor:
        validate_storage_type(inputs.storage_type)
        # Access keys are left unset so the AWS SDK picks up the instance IAM role
        logger.info("Using IAM role for S3 authentication")
        return StorageDescriptor(
            region=inputs.s3_region_name or inputs.aws_region,
            bucket_name=inputs.bucket_name,
        )

    @track_stage("metastore")
    def derive_metastore(self, inputs: BootstrapInputs) -> MetastoreDescriptor:
        """Resolve the Postgres connection when the metastore kind needs one."""
        metastore = MetastoreDescriptor(kind=inputs.meta_store)
        if not metastore.requires_dsn:
            return metastore

        logger.info("Fetching PostgreSQL credentials...")
        postgres = self._resolve_postgres(inputs.postgres_config)
        logger.info(
            "PostgreSQL configuration set (host=%s, port=%s, user=%s, database=%s)",
            postgres.host,
            postgres.port,
            postgres.user,
            postgres.database,
        )
        return MetastoreDescriptor(kind=metastore.kind, postgres=postgres)

    def _resolve_postgres(self, postgres_config: Optional[str]):
        blob = self.resolver.resolve(postgres_config or "")
        fields = extract(blob, POSTGRES_FIELDS, source=C.ZO_POSTGRES_CONFIG)
        return validate_postgres_fields(fields)

