from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from .relay import relay_service


@require_http_methods(["GET"])
def online_users(request):
    """GET /api/online/ - usernames with a registered connection."""
    names = sorted(relay_service.registry.online())
    return JsonResponse({"count": len(names), "users": names})
