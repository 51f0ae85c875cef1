"""
Secret resolution: literal values pass through, Secrets Manager ARNs are fetched.
"""

import logging
from typing import Callable, Dict, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from . import config
from .constants import SECRETS_MANAGER_ARN_PREFIX
from .errors import SecretFetchError
from .factory import get_secrets_client

logger = logging.getLogger(__name__)


def is_secret_reference(value: str) -> bool:
    """True if ``value`` is a Secrets Manager ARN rather than a literal."""
    return value.startswith(SECRETS_MANAGER_ARN_PREFIX)


class SecretStore(Protocol):
    def fetch(self, secret_id: str, region: str) -> str:
        ...


class AwsSecretsManagerStore:
    """Secret store backed by AWS Secrets Manager."""

    def __init__(self, client_for_region: Callable[[str], object] = get_secrets_client):
        self._client_for_region = client_for_region

    def fetch(self, secret_id: str, region: str) -> str:
        """
        Get the ``SecretString`` of a secret.

        Args:
            secret_id: Secret ARN
            region: AWS region hosting the secret

        Returns:
            The secret string

        Raises:
            SecretFetchError: If the call fails or the secret has no string value
        """
        try:
            client = self._client_for_region(region)
            response = client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise SecretFetchError(
                secret_id, f"{error.get('Code', 'ClientError')}: {error.get('Message', e)}"
            ) from e
        except BotoCoreError as e:
            raise SecretFetchError(secret_id, str(e)) from e

        return response.get("SecretString") or ""


class SecretResolver:
    """Resolves configuration values that may point at a secret store entry."""

    def __init__(self, store: Optional[SecretStore] = None, region: Optional[str] = None):
        self.store = store if store is not None else AwsSecretsManagerStore()
        self.region = region or config.DEFAULT_AWS_REGION
        self._cache: Dict[str, str] = {}

    def resolve(self, value: str) -> str:
        """Return the literal for ``value``, fetching it when it is a reference."""
        if not is_secret_reference(value):
            return value

        if value in self._cache:
            return self._cache[value]

        logger.info("Fetching secret %s from region %s", value, self.region)
        secret = self.store.fetch(value, self.region)
        if not secret:
            raise SecretFetchError(value, "secret has no string value")

        self._cache[value] = secret
        return secret
