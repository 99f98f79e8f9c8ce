"""Blog app."""

from miniblog.apps.blog.routers.post_router import build_post_router, get_post_service

__all__ = ["build_post_router", "get_post_service"]
