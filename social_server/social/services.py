"""
Synchronous ORM operations behind the realtime relay and the history API.

Callers in async code go through `realtime.gateway`, which runs these in the
database thread.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Q, QuerySet
from django.utils import timezone

from .models import Blog, BlogComment, BlogLike, Group, GroupChat, PrivateChat

logger = logging.getLogger(__name__)


def save_private_message(sender: str, receiver: str, message: str) -> PrivateChat:
    return PrivateChat.objects.create(sender=sender, receiver=receiver, message=message)


def save_group_message(group_id: int, username: str, message: str) -> GroupChat:
    group = Group.objects.get(pk=group_id)
    return GroupChat.objects.create(group=group, username=username, message=message)


def create_blog(username: str, content: str, image: Optional[str] = None) -> Blog:
    return Blog.objects.create(username=username, content=content, image=image or None)


def toggle_blog_like(blog_id: int, username: str) -> Blog:
    """
    Like the blog for `username`, or remove the like if one exists.

    The blog row is locked for the duration so concurrent toggles on the same
    post serialize, and the counter moves by exactly one per toggle.
    """
    with transaction.atomic():
        blog = Blog.objects.select_for_update().get(pk=blog_id)
        deleted, _ = BlogLike.objects.filter(blog=blog, username=username).delete()
        now = timezone.now()
        if deleted:
            Blog.objects.filter(pk=blog.pk, likes__gt=0).update(likes=F("likes") - 1, updated_at=now)
            logger.debug("Blog %s unliked by %s", blog.pk, username)
        else:
            BlogLike.objects.create(blog=blog, username=username)
            Blog.objects.filter(pk=blog.pk).update(likes=F("likes") + 1, updated_at=now)
            logger.debug("Blog %s liked by %s", blog.pk, username)
        blog.refresh_from_db()
    return blog


def add_blog_comment(blog_id: int, username: str, comment: str) -> BlogComment:
    blog = Blog.objects.get(pk=blog_id)
    return BlogComment.objects.create(blog=blog, username=username, comment=comment)


def create_group(group_name: str, created_by: str) -> Group:
    return Group.objects.create(group_name=group_name, created_by=created_by)


# History (read side)


def list_users() -> QuerySet:
    return get_user_model().objects.filter(is_active=True).order_by("username")


def search_users(query: str) -> QuerySet:
    """Active users whose username contains `query`, case-insensitively."""
    return list_users().filter(username__icontains=query)


def list_blogs() -> QuerySet[Blog]:
    return Blog.objects.order_by("-id")


def list_groups() -> QuerySet[Group]:
    return Group.objects.order_by("-id")


def blog_comments(blog_id: int) -> QuerySet[BlogComment]:
    return BlogComment.objects.filter(blog_id=blog_id).order_by("created_at", "id")


def private_history(user1: str, user2: str) -> QuerySet[PrivateChat]:
    """Messages exchanged between two users, in both directions, oldest first."""
    return PrivateChat.objects.filter(
        Q(sender=user1, receiver=user2) | Q(sender=user2, receiver=user1)
    ).order_by("created_at", "id")


def group_history(group_id: int) -> QuerySet[GroupChat]:
    return GroupChat.objects.filter(group_id=group_id).order_by("created_at", "id")
