"""
Unit tests - Secret resolution (fake store and stubbed boto3 client)
"""

import boto3
import pytest
from botocore.stub import Stubber

ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:zo-admin-AbCdEf"


class TestSecretReferenceDetection:
    """Literal vs Secrets Manager ARN classification"""

    def test_arn_is_reference(self):
        from zo_bootstrap.secret_store import is_secret_reference

        assert is_secret_reference(ARN)

    def test_literals_are_not_references(self):
        from zo_bootstrap.secret_store import is_secret_reference

        for value in ['{"user_email":"a@b.com"}', "arn:aws:ssm:us-east-1:1:parameter/x", ""]:
            assert not is_secret_reference(value), value


class TestSecretResolver:
    """Resolution through the secret store capability"""

    def test_literal_returned_unchanged_without_fetch(self, fake_store):
        from zo_bootstrap.secret_store import SecretResolver

        resolver = SecretResolver(store=fake_store, region="eu-west-1")
        literal = '{"user_email":"a@b.com","password":"x"}'

        assert resolver.resolve(literal) == literal
        assert fake_store.calls == []

    def test_reference_fetched_once_with_region(self, make_store):
        from zo_bootstrap.secret_store import SecretResolver

        store = make_store({ARN: '{"k":"v"}'})
        resolver = SecretResolver(store=store, region="eu-west-1")

        assert resolver.resolve(ARN) == '{"k":"v"}'
        assert resolver.resolve(ARN) == '{"k":"v"}'
        assert store.calls == [(ARN, "eu-west-1")]

    def test_default_region(self, make_store):
        from zo_bootstrap.secret_store import SecretResolver

        store = make_store({ARN: "value"})
        SecretResolver(store=store).resolve(ARN)

        assert store.calls == [(ARN, "us-east-1")]

    def test_empty_secret_is_a_fetch_error(self, make_store):
        from zo_bootstrap.errors import SecretFetchError
        from zo_bootstrap.secret_store import SecretResolver

        resolver = SecretResolver(store=make_store({ARN: ""}))

        with pytest.raises(SecretFetchError):
            resolver.resolve(ARN)

    def test_store_failure_is_not_retried(self, make_store):
        from zo_bootstrap.errors import SecretFetchError
        from zo_bootstrap.secret_store import SecretResolver

        store = make_store(error=SecretFetchError(ARN, "AccessDeniedException"))
        resolver = SecretResolver(store=store)

        with pytest.raises(SecretFetchError) as exc_info:
            resolver.resolve(ARN)

        assert "AccessDeniedException" in str(exc_info.value)
        assert len(store.calls) == 1

    def test_secret_value_never_logged(self, make_store, caplog):
        from zo_bootstrap.secret_store import SecretResolver

        store = make_store({ARN: "super-secret-value"})
        with caplog.at_level("DEBUG"):
            SecretResolver(store=store).resolve(ARN)

        assert ARN in caplog.text
        assert "super-secret-value" not in caplog.text


class TestAwsSecretsManagerStore:
    """boto3-backed store, exercised with botocore's Stubber"""

    @pytest.fixture
    def client(self):
        return boto3.client(
            "secretsmanager",
            region_name="us-east-1",
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
        )

    def test_returns_secret_string(self, client):
        from zo_bootstrap.secret_store import AwsSecretsManagerStore

        stubber = Stubber(client)
        stubber.add_response(
            "get_secret_value",
            {"ARN": ARN, "Name": "zo-admin", "SecretString": '{"a":"b"}'},
            {"SecretId": ARN},
        )
        store = AwsSecretsManagerStore(client_for_region=lambda region: client)

        with stubber:
            assert store.fetch(ARN, "us-east-1") == '{"a":"b"}'

        stubber.assert_no_pending_responses()

    def test_client_error_becomes_fetch_error(self, client):
        from zo_bootstrap.errors import SecretFetchError
        from zo_bootstrap.secret_store import AwsSecretsManagerStore

        stubber = Stubber(client)
        stubber.add_client_error(
            "get_secret_value",
            service_error_code="ResourceNotFoundException",
            service_message="Secrets Manager can't find the specified secret.",
        )
        store = AwsSecretsManagerStore(client_for_region=lambda region: client)

        with stubber, pytest.raises(SecretFetchError) as exc_info:
            store.fetch(ARN, "us-east-1")

        assert "ResourceNotFoundException" in str(exc_info.value)
        assert exc_info.value.secret_id == ARN

    def test_client_creation_failure_becomes_fetch_error(self):
        from botocore.exceptions import InvalidRegionError

        from zo_bootstrap.errors import SecretFetchError
        from zo_bootstrap.secret_store import AwsSecretsManagerStore

        def client_for_region(region):
            raise InvalidRegionError(region_name=region)

        store = AwsSecretsManagerStore(client_for_region=client_for_region)

        with pytest.raises(SecretFetchError) as exc_info:
            store.fetch(ARN, "us east 1")

        assert "us east 1" in str(exc_info.value)

    def test_client_chosen_by_region(self, client):
        from zo_bootstrap.secret_store import AwsSecretsManagerStore

        regions = []

        def client_for_region(region):
            regions.append(region)
            return client

        stubber = Stubber(client)
        stubber.add_response("get_secret_value", {"SecretString": "x"}, {"SecretId": ARN})
        with stubber:
            AwsSecretsManagerStore(client_for_region=client_for_region).fetch(
                ARN, "ap-south-1"
            )

        assert regions == ["ap-south-1"]


class TestAwsClientFactory:
    """Client caching per region"""

    def test_one_client_per_region(self, monkeypatch):
        from zo_bootstrap.factory import AwsClientFactory

        created = []
        monkeypatch.setattr(
            "zo_bootstrap.factory.boto3.client",
            lambda service, region_name: created.append((service, region_name)) or object(),
        )
        AwsClientFactory.clear()

        first = AwsClientFactory.get_secrets_client("us-east-1")
        again = AwsClientFactory.get_secrets_client("us-east-1")
        other = AwsClientFactory.get_secrets_client("eu-west-1")
        AwsClientFactory.clear()

        assert first is again
        assert first is not other
        assert created == [("secretsmanager", "us-east-1"), ("secretsmanager", "eu-west-1")]
