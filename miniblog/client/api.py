"""
API Client Module

HTTP client for the blog API. Calls are fire-and-wait: no retries, no
cancellation, transport default timeouts. Every failure is raised as
:class:`ApiError` carrying the server's message when there is one.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from miniblog.core.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """A request to the blog API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class RemotePost:
    """A post as returned by the API."""
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "RemotePost":
        return cls(
            id=str(payload.get("id") or payload["_id"]),
            title=payload["title"],
            content=payload["content"],
            created_at=parse_timestamp(payload["createdAt"]),
            updated_at=parse_timestamp(payload["updatedAt"]),
        )

    @property
    def was_edited(self) -> bool:
        return self.updated_at != self.created_at


class PostsClient:
    """
    HTTP client for the posts endpoints.

    Args:
        base_url: API root, e.g. ``http://localhost:5000/api``.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, transport=transport)
        logger.debug("api_client_initialized", base_url=self.base_url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PostsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("api_unreachable", method=method, path=path, error=str(e))
            raise ApiError(f"Could not reach {self.base_url}: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "api_request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                "Unexpected response from server", status_code=response.status_code
            ) from e

    def health(self) -> Dict[str, Any]:
        # Absolute URL: merging "" onto base_url would add a trailing slash.
        return self._request("GET", self.base_url)

    def list_posts(self) -> List[RemotePost]:
        payload = self._request("GET", "/posts")
        # Tolerate both a bare list and a {"data": [...]} envelope.
        if isinstance(payload, dict):
            payload = payload.get("data") or []
        return [RemotePost.from_json(item) for item in payload]

    def create_post(self, title: str, content: str) -> RemotePost:
        payload = self._request("POST", "/posts", json={"title": title, "content": content})
        return RemotePost.from_json(payload)

    def update_post(self, post_id: str, title: str, content: str) -> RemotePost:
        payload = self._request(
            "PUT", f"/posts/{post_id}", json={"title": title, "content": content}
        )
        return RemotePost.from_json(payload)

    def delete_post(self, post_id: str) -> str:
        payload = self._request("DELETE", f"/posts/{post_id}")
        return payload.get("message", "Post deleted successfully")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
