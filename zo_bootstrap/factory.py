"""
Factory for AWS clients with singleton behavior per region.
"""

from typing import Any, Dict

import boto3


class AwsClientFactory:
    """Creates and caches boto3 clients so each region gets one client."""

    _clients: Dict[str, Any] = {}

    @classmethod
    def get_secrets_client(cls, region: str):
        """Get or create a Secrets Manager client for ``region``."""
        key = f"secretsmanager_{region}"

        if key not in cls._clients:
            cls._clients[key] = boto3.client("secretsmanager", region_name=region)

        return cls._clients[key]

    @classmethod
    def clear(cls):
        """Drop cached clients."""
        cls._clients.clear()


def get_secrets_client(region: str):
    """Get Secrets Manager client instance."""
    return AwsClientFactory.get_secrets_client(region)
