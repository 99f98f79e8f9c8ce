"""Tests for the HTTP client, using httpx.MockTransport."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from miniblog.client.api import ApiError, PostsClient, RemotePost, parse_timestamp

POST_JSON = {
    "id": "abc123",
    "title": "Hello",
    "content": "World",
    "createdAt": "2026-01-01T12:00:00Z",
    "updatedAt": "2026-01-01T12:00:00Z",
}


def make_client(handler) -> PostsClient:
    return PostsClient("http://testserver/api", transport=httpx.MockTransport(handler))


class TestRemotePost:
    def test_from_json(self):
        post = RemotePost.from_json(POST_JSON)

        assert post.id == "abc123"
        assert post.created_at == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
        assert post.was_edited is False

    def test_accepts_underscore_id(self):
        payload = dict(POST_JSON)
        payload["_id"] = payload.pop("id")

        assert RemotePost.from_json(payload).id == "abc123"

    def test_edited_when_timestamps_differ(self):
        payload = dict(POST_JSON, updatedAt="2026-01-02T08:00:00+00:00")

        assert RemotePost.from_json(payload).was_edited is True


def test_parse_timestamp_assumes_utc_for_naive_values():
    assert parse_timestamp("2026-01-01T12:00:00") == datetime(
        2026, 1, 1, 12, tzinfo=timezone.utc
    )


class TestPostsClient:
    def test_list_posts(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json=[POST_JSON])

        with make_client(handler) as client:
            posts = client.list_posts()

        assert seen["url"] == "http://testserver/api/posts"
        assert [p.title for p in posts] == ["Hello"]

    def test_list_posts_accepts_data_envelope(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": [POST_JSON]})

        with make_client(handler) as client:
            assert len(client.list_posts()) == 1

    def test_create_sends_title_and_content(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=POST_JSON)

        with make_client(handler) as client:
            post = client.create_post("Hello", "World")

        assert seen == {"method": "POST", "body": {"title": "Hello", "content": "World"}}
        assert post.id == "abc123"

    def test_update_targets_post_url(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            return httpx.Response(200, json=dict(POST_JSON, title="Hello2"))

        with make_client(handler) as client:
            post = client.update_post("abc123", "Hello2", "World")

        assert seen == {"method": "PUT", "path": "/api/posts/abc123"}
        assert post.title == "Hello2"

    def test_delete_returns_confirmation(self):
        def handler(request):
            assert request.method == "DELETE"
            return httpx.Response(200, json={"success": True, "message": "Post deleted successfully"})

        with make_client(handler) as client:
            assert client.delete_post("abc123") == "Post deleted successfully"

    def test_health_hits_api_root(self):
        def handler(request):
            assert request.url.path == "/api"
            return httpx.Response(200, json={"message": "Blog API is running!", "timestamp": "t"})

        with make_client(handler) as client:
            assert client.health()["message"] == "Blog API is running!"

    def test_error_status_carries_server_message(self):
        def handler(request):
            return httpx.Response(404, json={"success": False, "message": "Post not found"})

        with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                client.delete_post("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Post not found"

    def test_error_without_json_body(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        with make_client(handler) as client:
            with pytest.raises(ApiError, match="HTTP 502"):
                client.list_posts()

    def test_transport_failure_is_api_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                client.list_posts()

        assert exc_info.value.status_code is None
