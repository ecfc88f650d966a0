from __future__ import annotations

import time

from django.http import JsonResponse

from realtime.relay import relay_service
from social_server.config import config


def health(request):
    """
    Load balancer health check endpoint.

    No DB query and no channel layer call; a storage outage shows up as relay
    `error` frames, not as a failing health check.
    """

    return JsonResponse(
        {
            "status": "ok",
            "ts": int(time.time()),
            "instance_id": config.INSTANCE_ID or "unknown-instance",
            "online_users": len(relay_service.registry),
        }
    )
