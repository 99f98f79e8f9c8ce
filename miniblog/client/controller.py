"""Drives BlogState from the outcome of API calls."""

import time
from typing import Callable, Optional

from miniblog.client.api import ApiError, PostsClient, RemotePost
from miniblog.client.state import CONFIRM_DELETE, BlogState, UpdateIntent
from miniblog.core.logging import get_logger

logger = get_logger(__name__)


class BlogController:
    """
    Glue between the view, the state machine and the API client.

    Args:
        client: API client used for every request.
        confirm: Asked before a delete is sent; returning False aborts it.
        clock: Monotonic seconds, used for banner timing.
    """

    def __init__(
        self,
        client: PostsClient,
        confirm: Callable[[str], bool],
        state: Optional[BlogState] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.confirm = confirm
        self.state = state or BlogState()
        self.clock = clock

    def tick(self) -> None:
        self.state.tick(self.clock())

    def mount(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        self.state.begin_loading()
        try:
            posts = self.client.list_posts()
        except ApiError as e:
            logger.error("fetch_posts_failed", error=e.message)
            self.state.load_failed(self.clock())
            return
        self.state.posts_loaded(posts)

    def edit(self, post: RemotePost) -> None:
        self.state.begin_edit(post)

    def cancel(self) -> None:
        self.state.cancel_edit()

    def update_draft(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        self.state.set_draft(title=title, content=content)

    def submit(self) -> bool:
        """Create or update from the draft. Returns True when the request succeeded."""
        intent = self.state.submit(self.clock())
        if intent is None:
            return False

        try:
            if isinstance(intent, UpdateIntent):
                self.client.update_post(intent.post_id, intent.title, intent.content)
            else:
                self.client.create_post(intent.title, intent.content)
        except ApiError as e:
            logger.error("submit_failed", intent=type(intent).__name__, error=e.message)
            self.state.submit_failed(intent, self.clock())
            return False

        self.state.submit_succeeded(intent, self.clock())
        self.refresh()
        return True

    def delete(self, post: RemotePost) -> bool:
        """Delete after confirmation. Returns True when the post was deleted."""
        if not self.confirm(CONFIRM_DELETE):
            return False

        try:
            self.client.delete_post(post.id)
        except ApiError as e:
            logger.error("delete_failed", post_id=post.id, error=e.message)
            self.state.delete_failed(self.clock())
            return False

        self.state.delete_succeeded(self.clock())
        self.refresh()
        return True
