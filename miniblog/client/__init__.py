"""Blog client: API client, view state, controller and CLI."""

from miniblog.client.api import ApiError, PostsClient, RemotePost
from miniblog.client.controller import BlogController
from miniblog.client.state import BlogState, Draft

__all__ = [
    "ApiError",
    "BlogController",
    "BlogState",
    "Draft",
    "PostsClient",
    "RemotePost",
]
