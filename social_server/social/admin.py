from django.contrib import admin

from .models import Blog, BlogComment, BlogLike, Group, GroupChat, PrivateChat


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "likes", "created_at")
    search_fields = ("username", "content")


@admin.register(BlogComment)
class BlogCommentAdmin(admin.ModelAdmin):
    list_display = ("id", "blog", "username", "created_at")
    search_fields = ("username", "comment")


@admin.register(BlogLike)
class BlogLikeAdmin(admin.ModelAdmin):
    list_display = ("id", "blog", "username", "created_at")


@admin.register(PrivateChat)
class PrivateChatAdmin(admin.ModelAdmin):
    list_display = ("id", "sender", "receiver", "created_at")
    search_fields = ("sender", "receiver", "message")


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ("id", "group_name", "created_by", "created_at")
    search_fields = ("group_name",)


@admin.register(GroupChat)
class GroupChatAdmin(admin.ModelAdmin):
    list_display = ("id", "group", "username", "created_at")
