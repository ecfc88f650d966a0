"""
Persisted social content.

Authors and chat participants are stored as plain usernames: the realtime layer
receives identities from the client and never resolves them to accounts.
"""

from __future__ import annotations

from django.db import models


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Blog(TimestampedModel):
    username = models.CharField(max_length=150)
    content = models.TextField()
    image = models.CharField(max_length=500, blank=True, null=True)
    # Maintained by toggle_blog_like; equals the number of BlogLike rows.
    likes = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-id"]

    def __str__(self) -> str:
        return f"Blog #{self.pk} by {self.username}"


class BlogLike(TimestampedModel):
    blog = models.ForeignKey(Blog, on_delete=models.CASCADE, related_name="like_records")
    username = models.CharField(max_length=150)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["blog", "username"], name="unique_blog_like_per_user"),
        ]

    def __str__(self) -> str:
        return f"{self.username} likes blog #{self.blog_id}"


class BlogComment(TimestampedModel):
    blog = models.ForeignKey(Blog, on_delete=models.CASCADE, related_name="comments")
    username = models.CharField(max_length=150)
    comment = models.TextField()

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.username} on blog #{self.blog_id}"


class PrivateChat(TimestampedModel):
    sender = models.CharField(max_length=150)
    receiver = models.CharField(max_length=150)
    message = models.TextField()

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [models.Index(fields=["sender", "receiver"], name="privatechat_pair_idx")]

    def __str__(self) -> str:
        return f"{self.sender} -> {self.receiver}"


class Group(TimestampedModel):
    group_name = models.CharField(max_length=150)
    created_by = models.CharField(max_length=150)

    class Meta:
        ordering = ["-id"]

    def __str__(self) -> str:
        return self.group_name


class GroupChat(TimestampedModel):
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name="messages")
    username = models.CharField(max_length=150)
    message = models.TextField()

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.username} in {self.group_id}"
