from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    """Channels consumer, presence registry and event relay."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "realtime"
