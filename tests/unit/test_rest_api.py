"""Unit tests for the REST gateway."""

from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from post_service.adapters.inbound.rest_api import create_app
from post_service.application.post_service import PostService

OWNER = str(uuid.uuid4())


@pytest.fixture
def client(service: PostService) -> TestClient:
    return TestClient(create_app(service))


@pytest.mark.unit
class TestRestApi:
    """Tests for the HTTP endpoints."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_and_get_post(self, client: TestClient) -> None:
        response = client.post(
            "/posts", json={"title": "First post", "url": "google.com", "userUid": OWNER}
        )
        assert response.status_code == 201
        created = response.json()
        assert created["userUid"] == OWNER
        assert created["categoryUid"] == ""
        assert created["createdAt"] == created["modifiedAt"]

        fetched = client.get(f"/posts/{created['uid']}").json()
        assert fetched == created

    def test_create_post_without_title(self, client: TestClient) -> None:
        response = client.post("/posts", json={"userUid": OWNER})
        assert response.status_code == 400
        assert response.json()["detail"] == "post title is required"

    def test_get_invalid_uid(self, client: TestClient) -> None:
        assert client.get("/posts/not-a-uuid").status_code == 400

    def test_get_missing_post(self, client: TestClient) -> None:
        response = client.get(f"/posts/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"] == "post not found"

    def test_update_and_delete(self, client: TestClient) -> None:
        uid = client.post("/posts", json={"title": "First post", "userUid": OWNER}).json()["uid"]

        assert client.patch(f"/posts/{uid}", json={"title": "Renamed"}).status_code == 204
        assert client.get(f"/posts/{uid}").json()["title"] == "Renamed"
        assert client.get(f"/posts/{uid}/owner").json() == {"ownerUid": OWNER}

        assert client.delete(f"/posts/{uid}").status_code == 204
        assert client.get(f"/posts/{uid}/exists").json() == {"exists": False}
        assert client.delete(f"/posts/{uid}").status_code == 404

    def test_list_posts_paging(self, client: TestClient) -> None:
        for i in range(5):
            client.post("/posts", json={"title": f"post {i}", "userUid": OWNER})

        body = client.get("/posts", params={"pageSize": 2, "pageNumber": 1}).json()
        assert body["pageSize"] == 2
        assert body["pageNumber"] == 1
        assert [p["title"] for p in body["posts"]] == ["post 2", "post 1"]

        assert client.get("/posts").json()["pageSize"] == 10

    def test_categories(self, client: TestClient) -> None:
        response = client.post("/categories", json={"name": "news", "userUid": OWNER})
        assert response.status_code == 201
        category = response.json()

        listed = client.get("/categories").json()
        assert listed["categories"] == [category]

        post = client.post(
            "/posts", json={"title": "Headline", "userUid": OWNER, "categoryUid": category["uid"]}
        ).json()
        in_category = client.get("/posts", params={"categoryUid": category["uid"]}).json()
        assert [p["uid"] for p in in_category["posts"]] == [post["uid"]]

    def test_create_category_without_name(self, client: TestClient) -> None:
        response = client.post("/categories", json={"userUid": OWNER})
        assert response.status_code == 400
