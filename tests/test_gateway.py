import pytest

from realtime.events import ErrorCode
from realtime.gateway import DjangoPersistenceGateway, PersistenceError
from social.models import BlogComment, PrivateChat

pytestmark = [pytest.mark.asyncio, pytest.mark.django_db(transaction=True)]


async def test_create_blog_returns_wire_payload():
    gateway = DjangoPersistenceGateway()

    blog = await gateway.create_blog("alice", "hello", None)

    assert blog["username"] == "alice"
    assert blog["likes"] == 0
    assert blog["image"] is None
    assert {"id", "createdAt", "updatedAt"} <= set(blog)


async def test_toggle_like_round_trip():
    gateway = DjangoPersistenceGateway()
    blog = await gateway.create_blog("alice", "hello", None)

    first = await gateway.toggle_blog_like(blog["id"], "bob")
    second = await gateway.toggle_blog_like(blog["id"], "bob")

    assert (first["likes"], second["likes"]) == (1, 0)


async def test_missing_blog_maps_to_not_found():
    gateway = DjangoPersistenceGateway()

    with pytest.raises(PersistenceError) as excinfo:
        await gateway.add_blog_comment(404, "bob", "hello?")

    assert excinfo.value.code == ErrorCode.NOT_FOUND
    assert await BlogComment.objects.acount() == 0


async def test_group_payload_uses_camel_case():
    gateway = DjangoPersistenceGateway()

    group = await gateway.create_group("hikers", "alice")
    message = await gateway.save_group_message(group["id"], "alice", "hi")

    assert group["groupName"] == "hikers"
    assert group["createdBy"] == "alice"
    assert message["groupId"] == group["id"]


async def test_private_message_is_stored():
    gateway = DjangoPersistenceGateway()

    row = await gateway.save_private_message("alice", "bob", "hi")

    assert row["sender"] == "alice" and row["receiver"] == "bob"
    assert await PrivateChat.objects.filter(sender="alice").acount() == 1


async def test_unencodable_text_maps_to_invalid_payload():
    gateway = DjangoPersistenceGateway()

    with pytest.raises(PersistenceError) as excinfo:
        await gateway.save_private_message("alice", "bob", "\ud800")

    assert excinfo.value.code == ErrorCode.INVALID_PAYLOAD
    assert await PrivateChat.objects.acount() == 0
