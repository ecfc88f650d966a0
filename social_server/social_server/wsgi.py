"""
WSGI config for the social server (admin and JSON history endpoints only).

For more information on this file, see
https://docs.djangoproject.com/en/5.0/howto/deployment/wsgi/
"""
# Load secrets (if configured) before Django settings are loaded
import social_server.env_bootstrap  # noqa: F401

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'social_server.settings')

application = get_wsgi_application()
