"""
URL configuration for the social server.

HTTP serves the admin, the health check and read-only history; all writes go
through the realtime relay at /ws/social/ (see realtime.routing).
"""
from django.contrib import admin
from django.urls import include, path

from realtime.views import online_users
from .health import health

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health),
    path("api/online/", online_users),
    path("api/", include("social.urls")),
]
