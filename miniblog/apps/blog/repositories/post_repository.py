"""Post repository."""

from typing import List

from miniblog.core.bases.base_repository import BaseRepository
from miniblog.apps.blog.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post

    async def list_newest_first(self) -> List[Post]:
        return await self.get_many(order_by=Post.created_at.desc())  # type: ignore
