"""Post router."""

from datetime import datetime
from typing import Callable, Optional

from fastapi import APIRouter

from miniblog.core.bases.base_router import BaseRouter
from miniblog.core.database import Database
from miniblog.apps.blog.services.post_service import PostService
from miniblog.apps.blog.repositories.post_repository import PostRepository
from miniblog.apps.blog.schemas.post import PostCreate, PostRead, PostUpdate


def get_post_repository(database: Database) -> PostRepository:
    """Get post repository instance."""
    return PostRepository(database.get_session)


def get_post_service(
    database: Database,
    clock: Optional[Callable[[], datetime]] = None,
    expose_errors: bool = True,
) -> PostService:
    """Get post service instance."""
    repository = get_post_repository(database)
    return PostService(repository, clock=clock, expose_errors=expose_errors)


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self, service: PostService):
        super().__init__(
            service=service,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            response_schema=PostRead,
            prefix="/posts",
            tags=["Posts"],
            entity_name="Post",
        )


def build_post_router(service: PostService) -> APIRouter:
    return PostRouter(service).get_router()
