"""
With these settings, tests run without Redis or an external database.
"""

import os

os.environ.setdefault("DJANGO_DEBUG", "1")
os.environ.setdefault("CHANNEL_LAYER", "memory")
os.environ.pop("DATABASE_URL", None)

from .settings import *  # noqa: E402,F403

DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}

CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SECURE_SSL_REDIRECT = False
