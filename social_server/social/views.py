"""
Read-only JSON history for content created over the realtime relay, plus the
user directory used to pick a private-chat partner.
"""

from __future__ import annotations

from typing import Optional

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods

from . import services
from .schemas import BlogCommentOut, BlogOut, GroupChatOut, GroupOut, PrivateChatOut, UserOut


def _int_param(request: HttpRequest, name: str) -> Optional[int]:
    raw = (request.GET.get(name) or "").strip()
    try:
        return int(raw)
    except ValueError:
        return None


def _missing(*names: str) -> JsonResponse:
    return JsonResponse({"detail": f"Query parameter(s) required: {', '.join(names)}"}, status=400)


@require_http_methods(["GET"])
def blog_list(request):
    """GET /api/blogs/ - newest first."""
    return JsonResponse(BlogOut.dump_many(services.list_blogs()), safe=False)


@require_http_methods(["GET"])
def group_list(request):
    """GET /api/groups/ - newest first."""
    return JsonResponse(GroupOut.dump_many(services.list_groups()), safe=False)


@require_http_methods(["GET"])
def blog_comment_list(request):
    """GET /api/blogcomments/?blogId=<id> - oldest first."""
    blog_id = _int_param(request, "blogId")
    if blog_id is None:
        return _missing("blogId")
    return JsonResponse(BlogCommentOut.dump_many(services.blog_comments(blog_id)), safe=False)


@require_http_methods(["GET"])
def private_chat_list(request):
    """GET /api/privatechats/?user1=<name>&user2=<name> - both directions, oldest first."""
    user1 = (request.GET.get("user1") or "").strip()
    user2 = (request.GET.get("user2") or "").strip()
    if not user1 or not user2:
        return _missing("user1", "user2")
    return JsonResponse(PrivateChatOut.dump_many(services.private_history(user1, user2)), safe=False)


@require_http_methods(["GET"])
def group_chat_list(request):
    """GET /api/groupchats/?groupId=<id> - oldest first."""
    group_id = _int_param(request, "groupId")
    if group_id is None:
        return _missing("groupId")
    return JsonResponse(GroupChatOut.dump_many(services.group_history(group_id)), safe=False)


@require_http_methods(["GET"])
def user_list(request):
    """GET /api/users/ - active accounts by username; no credentials are exposed."""
    return JsonResponse(UserOut.dump_many(services.list_users()), safe=False)


@require_http_methods(["GET"])
def user_search(request):
    """GET /api/users/search/?q=<text> - substring match on username."""
    query = (request.GET.get("q") or "").strip()
    if not query:
        return _missing("q")
    return JsonResponse(UserOut.dump_many(services.search_users(query)), safe=False)
