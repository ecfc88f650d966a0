"""
Load environment variables from AWS Secrets Manager before Django settings are loaded.
Import this module first in manage.py, asgi.py, and wsgi.py so os.environ is populated
before social_server.settings (and any _env / _env_bool / _env_csv) are evaluated.

Secret name: set SECRETS_NAME (e.g. "social-live/server-secrets"). When it is unset
nothing is fetched, so local runs and tests never reach AWS.
Uses setdefault so existing env vars override secret values.
"""
import json
import logging
import os

import boto3

logger = logging.getLogger(__name__)


def load_secrets_from_aws(secret_name: str) -> int:
    region = os.environ.get("AWS_REGION", "us-east-2")
    client = boto3.client("secretsmanager", region_name=region)
    response = client.get_secret_value(SecretId=secret_name)
    secret_str = response.get("SecretString")
    if not secret_str:
        raise RuntimeError(f"Secret {secret_name!r} has no SecretString")
    data = json.loads(secret_str)
    loaded = 0
    for key, value in data.items():
        if value is not None:
            os.environ.setdefault(key, str(value))
            loaded += 1
    return loaded


_secret_name = os.environ.get("SECRETS_NAME", "").strip()
if _secret_name:
    count = load_secrets_from_aws(_secret_name)
    logger.info("Loaded %d values from secret %s", count, _secret_name)
