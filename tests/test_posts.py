"""Post API tests."""

import uuid
from datetime import datetime


def create_post(client, headers, title="Hi", body="World"):
    response = client.post("/api/v1/posts", headers=headers, json={"title": title, "body": body})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_post(client, auth_headers):
    """Test creating a post."""
    response = client.post(
        "/api/v1/posts", headers=auth_headers, json={"title": "Hi", "body": "World"}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Post 'Hi' created successfully"
    data = body["data"]
    assert data["title"] == "Hi"
    assert data["body"] == "World"
    assert data["owner_id"] == auth_headers.user_id
    assert data["author"] == {"id": auth_headers.user_id, "name": "Alice"}


def test_create_post_requires_token(client):
    response = client.post("/api/v1/posts", json={"title": "Hi", "body": "World"})
    assert response.status_code == 401
    assert response.json()["error"] == "Unauthenticated"


def test_create_post_ignores_client_supplied_owner(client, auth_headers, other_auth_headers):
    response = client.post(
        "/api/v1/posts",
        headers=auth_headers,
        json={"title": "Hi", "body": "World", "owner_id": other_auth_headers.user_id},
    )
    assert response.status_code == 201
    assert response.json()["data"]["owner_id"] == auth_headers.user_id


def test_create_post_rejects_blank_title(client, auth_headers):
    response = client.post(
        "/api/v1/posts", headers=auth_headers, json={"title": "  ", "body": "World"}
    )
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "InvalidInput"
    assert "Post title cannot be empty" in body["message"]


def test_create_post_rejects_missing_body(client, auth_headers):
    response = client.post("/api/v1/posts", headers=auth_headers, json={"title": "Hi"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidInput"


def test_list_posts_is_public_and_includes_everyone(client, auth_headers, other_auth_headers):
    create_post(client, auth_headers, title="Alice post")
    create_post(client, other_auth_headers, title="Bob post")

    response = client.get("/api/v1/posts")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Retrieved 2 posts"
    assert {post["title"] for post in body["data"]} == {"Alice post", "Bob post"}


def test_list_posts_empty(client):
    response = client.get("/api/v1/posts")
    assert response.status_code == 200
    assert response.json() == {"message": "Retrieved 0 posts", "data": []}


def test_my_posts_only_returns_callers_posts(client, auth_headers, other_auth_headers):
    create_post(client, auth_headers, title="Mine 1")
    create_post(client, auth_headers, title="Mine 2")
    create_post(client, other_auth_headers, title="Theirs")

    response = client.get("/api/v1/posts/my", headers=auth_headers)
    assert response.status_code == 200
    posts = response.json()["data"]
    assert {post["title"] for post in posts} == {"Mine 1", "Mine 2"}
    assert all(post["owner_id"] == auth_headers.user_id for post in posts)


def test_my_posts_requires_token(client):
    response = client.get("/api/v1/posts/my")
    assert response.status_code == 401


def test_get_post_is_public(client, auth_headers):
    post = create_post(client, auth_headers)

    response = client.get(f"/api/v1/posts/{post['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == post["id"]


def test_get_missing_post(client):
    response = client.get(f"/api/v1/posts/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "NotFound", "message": "Post not found"}


def test_get_post_with_malformed_id(client):
    response = client.get("/api/v1/posts/not-a-uuid")
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidInput"


def test_update_post_by_owner(client, auth_headers):
    post = create_post(client, auth_headers)

    response = client.put(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"title": "Hello"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Hello"
    assert data["body"] == "World"
    assert datetime.fromisoformat(data["updated_at"]) >= datetime.fromisoformat(post["updated_at"])


def test_update_post_null_and_absent_fields_are_no_ops(client, auth_headers):
    post = create_post(client, auth_headers)

    response = client.put(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"title": None}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Hi"
    assert data["body"] == "World"


def test_update_post_by_other_user_is_forbidden(client, auth_headers, other_auth_headers):
    post = create_post(client, auth_headers)

    response = client.put(
        f"/api/v1/posts/{post['id']}", headers=other_auth_headers, json={"title": "Pwned"}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"

    unchanged = client.get(f"/api/v1/posts/{post['id']}").json()["data"]
    assert unchanged["title"] == "Hi"


def test_update_missing_post_is_not_found(client, auth_headers):
    response = client.put(
        f"/api/v1/posts/{uuid.uuid4()}", headers=auth_headers, json={"title": "Nope"}
    )
    assert response.status_code == 404


def test_update_post_requires_token(client, auth_headers):
    post = create_post(client, auth_headers)

    response = client.put(f"/api/v1/posts/{post['id']}", json={"title": "Anon"})
    assert response.status_code == 401


def test_delete_post_by_owner(client, auth_headers):
    post = create_post(client, auth_headers)

    response = client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully", "data": None}

    assert client.get(f"/api/v1/posts/{post['id']}").status_code == 404


def test_delete_post_by_other_user_is_forbidden(client, auth_headers, other_auth_headers):
    post = create_post(client, auth_headers)

    response = client.delete(f"/api/v1/posts/{post['id']}", headers=other_auth_headers)
    assert response.status_code == 403
    assert client.get(f"/api/v1/posts/{post['id']}").status_code == 200


def test_delete_missing_post_is_not_found(client, auth_headers):
    response = client.delete(f"/api/v1/posts/{uuid.uuid4()}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_twice_is_not_found(client, auth_headers):
    post = create_post(client, auth_headers)
    client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers)

    response = client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_owner_scenario(client, register):
    """Alice posts, Bob cannot edit it, Alice deletes it."""
    alice = register("Alice", "a@x.com", "Secret123")
    login = client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "Secret123"})
    alice_token = {"Authorization": f"Bearer {login.json()['data']['access_token']}"}

    post = create_post(client, alice_token, title="Hi", body="World")
    assert post["owner_id"] == alice.user_id

    bob = register("Bob", "b@x.com", "Hunter2go")
    response = client.put(f"/api/v1/posts/{post['id']}", headers=bob, json={"title": "Mine now"})
    assert response.status_code == 403

    response = client.delete(f"/api/v1/posts/{post['id']}", headers=alice_token)
    assert response.status_code == 200

    response = client.get(f"/api/v1/posts/{post['id']}")
    assert response.status_code == 404
