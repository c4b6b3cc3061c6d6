import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def test_group(client: AsyncClient, auth_header, test_user2):
    response = await client.post(
        "/api/v1/groups/",
        headers=auth_header,
        json={"name": "Test Group", "member_ids": [test_user2.id]},
    )
    assert response.status_code == 200
    return response.json()


async def test_create_group(client: AsyncClient, test_group, test_user, test_user2):
    assert test_group["name"] == "Test Group"
    assert test_group["admin_id"] == test_user.id
    assert sorted(test_group["member_ids"]) == sorted([test_user.id, test_user2.id])
    assert "created_at" in test_group


async def test_create_group_blank_name(client: AsyncClient, auth_header):
    response = await client.post(
        "/api/v1/groups/", headers=auth_header, json={"name": "  "}
    )
    assert response.status_code == 422


async def test_read_groups(client: AsyncClient, auth_header2, test_group):
    response = await client.get("/api/v1/groups/", headers=auth_header2)
    assert response.status_code == 200
    assert [g["id"] for g in response.json()] == [test_group["id"]]


async def test_read_group(client: AsyncClient, auth_header, test_group):
    response = await client.get(f"/api/v1/groups/{test_group['id']}", headers=auth_header)
    assert response.status_code == 200
    assert response.json()["name"] == "Test Group"


async def test_read_missing_group(client: AsyncClient, auth_header):
    response = await client.get("/api/v1/groups/999999", headers=auth_header)
    assert response.status_code == 404


async def test_group_messages(client: AsyncClient, auth_header, auth_header2, test_group):
    for headers, content in ((auth_header, "hello"), (auth_header2, "hi back")):
        response = await client.post(
            "/api/v1/messages/",
            headers=headers,
            json={"content": content, "group_id": test_group["id"]},
        )
        assert response.status_code == 200

    response = await client.get(
        f"/api/v1/groups/{test_group['id']}/messages", headers=auth_header
    )
    assert response.status_code == 200
    assert [m["content"] for m in response.json()] == ["hello", "hi back"]


async def test_messages_of_missing_group(client: AsyncClient, auth_header):
    response = await client.get("/api/v1/groups/999999/messages", headers=auth_header)
    assert response.status_code == 404


async def test_add_and_remove_members(
    client: AsyncClient, auth_header, test_group, make_user, test_user2
):
    newcomer = await make_user("newcomer")

    response = await client.post(
        f"/api/v1/groups/{test_group['id']}/members",
        headers=auth_header,
        json={"member_ids": [newcomer.id, test_user2.id]},
    )
    assert response.status_code == 200
    assert newcomer.id in response.json()["member_ids"]
    assert len(response.json()["member_ids"]) == 3

    response = await client.delete(
        f"/api/v1/groups/{test_group['id']}/members/{test_user2.id}",
        headers=auth_header,
    )
    assert response.status_code == 200
    assert test_user2.id not in response.json()["member_ids"]


async def test_add_members_to_missing_group(client: AsyncClient, auth_header, test_user2):
    response = await client.post(
        "/api/v1/groups/999999/members",
        headers=auth_header,
        json={"member_ids": [test_user2.id]},
    )
    assert response.status_code == 404


async def test_delete_group_as_member(client: AsyncClient, auth_header2, test_group):
    response = await client.delete(
        f"/api/v1/groups/{test_group['id']}", headers=auth_header2
    )
    assert response.status_code == 403

    missing = await client.delete("/api/v1/groups/999999", headers=auth_header2)
    assert missing.status_code == 403
    assert missing.json() == response.json()


async def test_delete_group_as_admin(client: AsyncClient, auth_header, test_group):
    await client.post(
        "/api/v1/messages/",
        headers=auth_header,
        json={"content": "soon gone", "group_id": test_group["id"]},
    )

    response = await client.delete(
        f"/api/v1/groups/{test_group['id']}", headers=auth_header
    )
    assert response.status_code == 204

    response = await client.get(f"/api/v1/groups/{test_group['id']}", headers=auth_header)
    assert response.status_code == 404
    response = await client.get("/api/v1/groups/", headers=auth_header)
    assert response.json() == []
