import json

from social_server import env_bootstrap


class FakeSecretsClient:
    def __init__(self, payload):
        self.payload = payload
        self.requested = []

    def get_secret_value(self, SecretId):
        self.requested.append(SecretId)
        return {"SecretString": json.dumps(self.payload)}


def test_secrets_fill_missing_env_only(monkeypatch):
    client = FakeSecretsClient({"REDIS_URL": "redis://cache:6379/1", "DJANGO_LOG_LEVEL": "DEBUG", "UNSET": None})
    monkeypatch.setattr(env_bootstrap.boto3, "client", lambda service, region_name: client)
    # setenv first so the teardown restores REDIS_URL to its prior state
    monkeypatch.setenv("REDIS_URL", "")
    monkeypatch.delenv("REDIS_URL")
    monkeypatch.setenv("DJANGO_LOG_LEVEL", "WARNING")

    loaded = env_bootstrap.load_secrets_from_aws("social-live/server-secrets")

    assert loaded == 2
    assert client.requested == ["social-live/server-secrets"]
    assert env_bootstrap.os.environ["REDIS_URL"] == "redis://cache:6379/1"
    assert env_bootstrap.os.environ["DJANGO_LOG_LEVEL"] == "WARNING"
