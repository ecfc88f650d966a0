from http import HTTPStatus

import pytest
from django.core.management import call_command

from realtime.relay import relay_service
from social import services


@pytest.mark.django_db
def test_health_reports_online_users(client):
    relay_service.registry.register("alice", "chan.a")

    resp = client.get("/health/")

    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert data["status"] == "ok"
    assert data["online_users"] == 1


def test_online_users_lists_registered_names(client):
    relay_service.registry.register("bob", "chan.b")
    relay_service.registry.register("alice", "chan.a")

    resp = client.get("/api/online/")

    assert resp.json() == {"count": 2, "users": ["alice", "bob"]}


@pytest.mark.django_db
def test_blog_and_group_listings(client):
    services.create_blog("alice", "old")
    services.create_blog("bob", "new")
    services.create_group("hikers", "alice")

    blogs = client.get("/api/blogs/").json()
    groups = client.get("/api/groups/").json()

    assert [b["content"] for b in blogs] == ["new", "old"]
    assert {"id", "username", "content", "image", "likes", "createdAt", "updatedAt"} == set(blogs[0])
    assert groups[0]["groupName"] == "hikers"
    assert groups[0]["createdBy"] == "alice"


@pytest.mark.django_db
def test_blog_comments_endpoint(client):
    blog = services.create_blog("alice", "post")
    services.add_blog_comment(blog.id, "bob", "first!")

    resp = client.get("/api/blogcomments/", {"blogId": blog.id})

    assert resp.status_code == HTTPStatus.OK
    [comment] = resp.json()
    assert comment["blogId"] == blog.id
    assert comment["comment"] == "first!"


@pytest.mark.django_db
def test_private_chat_history_endpoint(client):
    services.save_private_message("alice", "bob", "hi")
    services.save_private_message("bob", "alice", "hello")

    resp = client.get("/api/privatechats/", {"user1": "alice", "user2": "bob"})

    assert [m["message"] for m in resp.json()] == ["hi", "hello"]


@pytest.mark.django_db
def test_group_chat_history_endpoint(client):
    group = services.create_group("hikers", "alice")
    services.save_group_message(group.id, "alice", "hi all")

    resp = client.get("/api/groupchats/", {"groupId": group.id})

    assert resp.json()[0]["groupId"] == group.id


@pytest.mark.django_db
def test_user_directory_hides_credentials(client, django_user_model):
    django_user_model.objects.create_user("bob", email="bob@example.com", password="pw-bob")
    django_user_model.objects.create_user("alice", email="alice@example.com", password="pw-alice")
    django_user_model.objects.create_user("mallory", password="pw", is_active=False)

    users = client.get("/api/users/").json()

    assert [u["username"] for u in users] == ["alice", "bob"]
    assert set(users[0]) == {"id", "username", "isStaff", "dateJoined"}


@pytest.mark.django_db
def test_user_search_matches_substring_case_insensitively(client, django_user_model):
    for name in ("Alice", "malice", "bob"):
        django_user_model.objects.create_user(name, password="pw")

    resp = client.get("/api/users/search/", {"q": "ALI"})

    assert resp.status_code == HTTPStatus.OK
    assert [u["username"] for u in resp.json()] == ["Alice", "malice"]


@pytest.mark.parametrize(
    "url",
    [
        "/api/users/search/",
        "/api/blogcomments/",
        "/api/blogcomments/?blogId=abc",
        "/api/privatechats/?user1=alice",
        "/api/groupchats/",
    ],
)
def test_history_endpoints_require_parameters(client, url):
    resp = client.get(url)
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "required" in resp.json()["detail"]


def test_history_endpoints_are_read_only(client):
    resp = client.post("/api/blogs/", {})
    assert resp.status_code in (HTTPStatus.FORBIDDEN, HTTPStatus.METHOD_NOT_ALLOWED)


@pytest.mark.django_db
def test_seed_admin_is_idempotent(django_user_model):
    call_command("seed_admin", "--password", "s3cret-pass")
    call_command("seed_admin")

    admin = django_user_model.objects.get(username="admin")
    assert admin.is_superuser
    assert admin.check_password("s3cret-pass")
    assert django_user_model.objects.filter(username="admin").count() == 1
