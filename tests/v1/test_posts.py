# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status


def test_create_link_post(client, auth_token, test_user) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Interesting", "url": "https://example.com/x"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["kind"] == "link"
    assert body["author_id"] == test_user.id
    assert body["points"] == 0


def test_create_post_with_url_and_text(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Both", "url": "https://example.com", "text": "body"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts/", json={"title": "Anon", "text": "hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_post(client, test_post) -> None:
    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == test_post.title


def test_list_posts_top(client, auth_token, other_auth_token, test_post) -> None:
    second = client.post(
        "/api/v1/posts/",
        json={"title": "Newer", "text": "body"},
        headers=auth_token,
    ).json()
    client.post(
        "/api/v1/votes/",
        json={"target_id": test_post.id, "target_kind": "post", "direction": 1},
        headers=other_auth_token,
    )

    newest = client.get("/api/v1/posts/", params={"sort": "new"}).json()
    assert [item["id"] for item in newest["items"]] == [second["id"], test_post.id]

    top = client.get("/api/v1/posts/", params={"sort": "top"}).json()
    assert [item["id"] for item in top["items"]] == [test_post.id, second["id"]]
    assert top["total"] == 2
    assert top["pages"] == 1


def test_list_posts_rejects_unknown_sort(client) -> None:
    response = client.get("/api/v1/posts/", params={"sort": "hot"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_posts_best_and_search(client, auth_token, other_auth_token, test_post) -> None:
    other = client.post(
        "/api/v1/posts/",
        json={"title": "Another LINK roundup", "text": "body"},
        headers=auth_token,
    ).json()
    client.post(
        "/api/v1/posts/",
        json={"title": "Unrelated", "text": "body"},
        headers=auth_token,
    )
    client.post(
        "/api/v1/votes/",
        json={"target_id": other["id"], "target_kind": "post", "direction": 1},
        headers=other_auth_token,
    )

    found = client.get("/api/v1/posts/", params={"sort": "best", "search": "link"}).json()

    assert [item["id"] for item in found["items"]] == [other["id"], test_post.id]
    assert found["total"] == 2
