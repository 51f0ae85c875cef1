"""
Environment variable names and fixed values for the OpenObserve bootstrap.
"""

# Inputs
ZO_HTTP_PORT = "ZO_HTTP_PORT"
ZO_GRPC_PORT = "ZO_GRPC_PORT"
ZO_AUTH_JSON = "ZO_AUTH_JSON"
ZO_STORAGE_TYPE = "ZO_STORAGE_TYPE"
ZO_BUCKET_NAME = "ZO_BUCKET_NAME"
ZO_POSTGRES_CONFIG = "ZO_POSTGRES_CONFIG"
ZO_META_STORE = "ZO_META_STORE"
ZO_META_TRANSACTION_LOCK_TIMEOUT = "ZO_META_TRANSACTION_LOCK_TIMEOUT"
ZO_META_TRANSACTION_RETRIES = "ZO_META_TRANSACTION_RETRIES"
ZO_S3_REGION_NAME = "ZO_S3_REGION_NAME"
AWS_REGION = "AWS_REGION"

# Checked in this order, before any secret is resolved
REQUIRED_VARS = (
    ZO_AUTH_JSON,
    ZO_STORAGE_TYPE,
    ZO_BUCKET_NAME,
    ZO_POSTGRES_CONFIG,
)

# Outputs
ZO_ROOT_USER_EMAIL = "ZO_ROOT_USER_EMAIL"
ZO_ROOT_USER_PASSWORD = "ZO_ROOT_USER_PASSWORD"
ZO_S3_BUCKET_NAME = "ZO_S3_BUCKET_NAME"
ZO_S3_SERVER_URL = "ZO_S3_SERVER_URL"
ZO_S3_PROVIDER = "ZO_S3_PROVIDER"
ZO_S3_FEATURE_HTTP1_ONLY = "ZO_S3_FEATURE_HTTP1_ONLY"
AWS_EC2_METADATA_DISABLED = "AWS_EC2_METADATA_DISABLED"
ZO_META_POSTGRES_DSN = "ZO_META_POSTGRES_DSN"
RUST_BACKTRACE = "RUST_BACKTRACE"

# Secret references
SECRETS_MANAGER_ARN_PREFIX = "arn:aws:secretsmanager:"
NULL_SENTINEL = "null"

# Storage
STORAGE_S3 = "s3"
STORAGE_GCS = "gcs"
S3_SERVER_URL = "https://s3.amazonaws.com"
S3_PROVIDER = "s3"

# Metastore
META_STORE_POSTGRES = "postgres"
POSTGRES_SCHEME = "postgres"
