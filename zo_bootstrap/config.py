"""
Bootstrap configuration - Non-sensitive defaults safe to commit.
"""

# Listener ports
DEFAULT_HTTP_PORT = "5080"
DEFAULT_GRPC_PORT = "5081"

# AWS region used for Secrets Manager lookups and as the S3 region fallback
DEFAULT_AWS_REGION = "us-east-1"

# Metastore defaults
DEFAULT_META_STORE = "postgres"
DEFAULT_META_TRANSACTION_LOCK_TIMEOUT = "600"
DEFAULT_META_TRANSACTION_RETRIES = "3"
DEFAULT_POSTGRES_DATABASE = "openobserve"

# Child processes
PROXY_COMMAND = ["nginx"]
SERVER_COMMAND = ["openobserve"]

# Logging - overridden by ZO_BOOTSTRAP_LOG_LEVEL (environment or .env) or --log-level
LOG_LEVEL_ENV = "ZO_BOOTSTRAP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
