"""
Shared fakes for bootstrap tests.
"""

import pytest



class FakeSecretStore:
    """Records fetches and serves canned secrets (or a failure)."""

    def __init__(self, secrets=None, error=None):
        self.secrets = dict(secrets or {})
        self.error = error
        self.calls = []

    def fetch(self, secret_id, region):
        self.calls.append((secret_id, region))
        if self.error is not None:
            raise self.error
        return self.secrets.get(secret_id, "")


class FakeLauncher:
    """Stands in for Popen / execvpe."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def __call__(self, command, env):
        self.calls.append((list(command), dict(env)))
        if self.error is not None:
            raise self.error
        return "launched"


@pytest.fixture
def base_environ():
    return {
        "PATH": "/usr/bin",
        "ZO_AUTH_JSON": '{"user_email":"a@b.com","password":"x"}',
        "ZO_STORAGE_TYPE": "s3",
        "ZO_BUCKET_NAME": "zo-data",
        "ZO_POSTGRES_CONFIG": (
            '{"host":"h","port":"5432","username":"u","password":"p","database":"d"}'
        ),
    }


@pytest.fixture
def fake_store():
    return FakeSecretStore()


@pytest.fixture
def make_store():
    return FakeSecretStore


@pytest.fixture
def make_launcher():
    return FakeLauncher
