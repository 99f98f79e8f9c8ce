"""Tests for the HTTP surface of the posts API."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from miniblog.apps.blog.repositories.post_repository import PostRepository
from miniblog.core.bases.base_repository import RepositoryError
from miniblog.core.config import Settings
from miniblog.core.database import Database
from miniblog.main import AppContext, create_app


def parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestHealth:
    def test_health_reports_identity_and_time(self, client, clock):
        response = client.get("/api")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Blog API is running!"
        assert body["service"] == "Blog API"
        assert parse(body["timestamp"]) == clock.now


class TestPostLifecycle:
    def test_create_update_delete_scenario(self, client, clock):
        created = client.post("/api/posts", json={"title": "Hello", "content": "World"})
        assert created.status_code == 201
        post = created.json()
        assert post["title"] == "Hello"
        assert post["content"] == "World"
        assert post["id"]
        assert post["createdAt"] == post["updatedAt"]

        clock.advance(1)
        updated = client.put(
            f"/api/posts/{post['id']}", json={"title": "Hello2", "content": "World"}
        )
        assert updated.status_code == 200
        body = updated.json()
        assert body["id"] == post["id"]
        assert body["title"] == "Hello2"
        assert body["createdAt"] == post["createdAt"]
        assert parse(body["updatedAt"]) > parse(post["updatedAt"])

        deleted = client.delete(f"/api/posts/{post['id']}")
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Post deleted successfully"
        assert deleted.json()["success"] is True

        listed = client.get("/api/posts")
        assert listed.status_code == 200
        assert post["id"] not in [p["id"] for p in listed.json()]

    def test_fields_are_trimmed_before_storage(self, client):
        response = client.post("/api/posts", json={"title": "  Hi  ", "content": " there "})

        assert response.json()["title"] == "Hi"
        assert response.json()["content"] == "there"

    def test_list_is_empty_array_when_no_posts(self, client):
        response = client.get("/api/posts")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_is_newest_first(self, client, clock):
        titles = []
        for title in ("first", "second", "third"):
            clock.advance(60)
            client.post("/api/posts", json={"title": title, "content": "."})
            titles.append(title)

        response = client.get("/api/posts")

        assert [p["title"] for p in response.json()] == ["third", "second", "first"]


class TestValidation:
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "content": "x"},
            {"title": "x", "content": "  "},
            {"content": "x"},
            {"title": 5, "content": "x"},
        ],
    )
    def test_create_with_bad_fields_is_400_and_stores_nothing(self, client, payload):
        response = client.post("/api/posts", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["message"] == "Title and content are required"
        assert client.get("/api/posts").json() == []

    def test_create_without_body_is_400(self, client):
        response = client.post("/api/posts")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_update_with_missing_field_is_400(self, client):
        post = client.post("/api/posts", json={"title": "a", "content": "b"}).json()

        response = client.put(f"/api/posts/{post['id']}", json={"title": "only"})

        assert response.status_code == 400
        assert client.get("/api/posts").json()[0]["title"] == "a"


class TestNotFound:
    def test_update_unknown_id_is_404(self, client):
        client.post("/api/posts", json={"title": "a", "content": "b"})

        response = client.put("/api/posts/nope", json={"title": "x", "content": "y"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"
        assert response.json()["message"] == "Post not found"
        assert [p["title"] for p in client.get("/api/posts").json()] == ["a"]

    def test_delete_unknown_id_is_404(self, client):
        response = client.delete("/api/posts/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    @pytest.mark.parametrize(
        "method,path",
        [("GET", "/api/nothing"), ("GET", "/api/posts/a/b"), ("PATCH", "/api/posts/abc")],
    )
    def test_unmatched_api_route_is_distinct_from_entity_miss(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.json()["error_code"] == "ROUTE_NOT_FOUND"
        assert response.json()["message"] == "API endpoint not found"


class TestPersistenceFaults:
    @pytest.fixture
    def broken_list(self, monkeypatch):
        async def fail(self):
            raise RepositoryError("Database error during list: connection lost")

        monkeypatch.setattr(PostRepository, "list_newest_first", fail)

    def test_fault_is_500_with_detail_outside_production(self, client, broken_list):
        response = client.get("/api/posts")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["message"] == "Failed to fetch posts"
        assert "connection lost" in body["error_details"][0]["message"]

    def test_fault_detail_hidden_in_production(self, database_url, clock, broken_list):
        settings = Settings(DATABASE_URL=database_url, ENVIRONMENT="production", _env_file=None)
        app = create_app(
            AppContext(settings=settings, database=Database(database_url), clock=clock)
        )

        with TestClient(app) as client:
            response = client.get("/api/posts")

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch posts"
        assert response.json()["error_details"] == []


class TestCors:
    def test_allowed_origin_is_echoed(self, client):
        response = client.get("/api/posts", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unknown_origin_gets_no_grant(self, client):
        response = client.get("/api/posts", headers={"Origin": "http://evil.example"})

        assert "access-control-allow-origin" not in response.headers

    def test_preflight_for_allowed_origin(self, client):
        response = client.options(
            "/api/posts",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "PUT",
            },
        )

        assert response.status_code == 200
        assert "PUT" in response.headers["access-control-allow-methods"]

    def test_request_without_origin_is_served(self, client):
        response = client.get("/api/posts")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers
