from django.apps import AppConfig


class SocialConfig(AppConfig):
    """Blogs, comments, likes, groups and chat history."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "social"
