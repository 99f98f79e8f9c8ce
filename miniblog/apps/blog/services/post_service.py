"""Post service."""

from typing import Any, Dict, List

from miniblog.core import exceptions
from miniblog.core.bases.base_repository import RepositoryError
from miniblog.core.bases.base_service import BaseService
from miniblog.core.logging import get_logger
from miniblog.apps.blog.models.post import Post, clean_fields
from miniblog.apps.blog.schemas.post import PostCreate, PostUpdate

logger = get_logger(__name__)


class PostService(BaseService[Post]):
    """Post service class."""

    not_found_message = "Post not found"

    async def get_list(self) -> List[Post]:
        """All posts, newest first."""
        try:
            return await self.repository.list_newest_first()  # type: ignore[attr-defined]
        except RepositoryError as e:
            raise self._internal_error(e, "Failed to fetch posts", "list") from e

    async def create(self, item_data: PostCreate) -> Post:
        create_data = item_data.model_dump()
        await self._validate_create(create_data)

        post = Post.new(create_data["title"], create_data["content"], now=self.clock())
        try:
            created = await self.repository.create(post)
        except RepositoryError as e:
            raise self._internal_error(e, "Failed to create post", "create") from e

        logger.info("post_created", post_id=created.id)
        return created

    async def update(self, item_id: str, item_data: PostUpdate) -> Post:
        update_data = item_data.model_dump()
        # Missing fields are reported before the lookup.
        clean_fields(update_data["title"], update_data["content"])

        existing = await self.get_existing(item_id, "Failed to update post")
        await self._validate_update(item_id, update_data, existing)
        existing.revise(update_data["title"], update_data["content"], now=self.clock())

        try:
            updated = await self.repository.update(
                item_id,
                {
                    "title": existing.title,
                    "content": existing.content,
                    "updated_at": existing.updated_at,
                },
            )
        except RepositoryError as e:
            raise self._internal_error(e, "Failed to update post", "update") from e

        # Deleted between the lookup and the write.
        if updated is None:
            raise exceptions.NotFoundException(self.not_found_message)

        logger.info("post_updated", post_id=item_id)
        return updated

    async def delete(self, item_id: str) -> None:
        try:
            deleted = await self.repository.delete(item_id)
        except RepositoryError as e:
            raise self._internal_error(e, "Failed to delete post", "delete") from e

        if not deleted:
            raise exceptions.NotFoundException(self.not_found_message)

        logger.info("post_deleted", post_id=item_id)

    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        clean_fields(create_data.get("title"), create_data.get("content"))
