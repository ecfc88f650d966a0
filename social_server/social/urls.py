from django.urls import path

from . import views

urlpatterns = [
    path("users/", views.user_list),
    path("users/search/", views.user_search),
    path("blogs/", views.blog_list),
    path("groups/", views.group_list),
    path("blogcomments/", views.blog_comment_list),
    path("privatechats/", views.private_chat_list),
    path("groupchats/", views.group_chat_list),
]
