"""
UI state for the single blog view.

``BlogState`` is a small explicit state machine over the posts list, the
draft, the post being edited, the banner and the loading flag. It performs
no I/O: the controller asks it what to do (``submit`` returns an intent),
performs the request, then reports the outcome back. Time is passed in, so
banner expiry is testable without sleeping.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from miniblog.client.api import RemotePost

BANNER_TIMEOUT = 3.0

MSG_FETCH_FAILED = "Failed to fetch posts. Make sure the backend server is running."
MSG_INCOMPLETE_DRAFT = "Please fill in both title and content"
MSG_CREATED = "Post created successfully!"
MSG_CREATE_FAILED = "Failed to create post. Check your connection."
MSG_UPDATED = "Post updated successfully!"
MSG_UPDATE_FAILED = "Failed to update post."
MSG_DELETED = "Post deleted successfully!"
MSG_DELETE_FAILED = "Failed to delete post."
CONFIRM_DELETE = "Are you sure you want to delete this post?"


@dataclass(frozen=True)
class Draft:
    title: str = ""
    content: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip()) and bool(self.content.strip())

    @classmethod
    def from_post(cls, post: RemotePost) -> "Draft":
        return cls(title=post.title, content=post.content)


@dataclass(frozen=True)
class Banner:
    kind: str  # "error" or "success"
    message: str
    shown_at: float

    def expired(self, now: float) -> bool:
        return now - self.shown_at >= BANNER_TIMEOUT


@dataclass(frozen=True)
class CreateIntent:
    title: str
    content: str


@dataclass(frozen=True)
class UpdateIntent:
    post_id: str
    title: str
    content: str


SubmitIntent = Union[CreateIntent, UpdateIntent]


@dataclass
class BlogState:
    posts: List[RemotePost] = field(default_factory=list)
    draft: Draft = field(default_factory=Draft)
    editing_target: Optional[RemotePost] = None
    banner: Optional[Banner] = None
    loading: bool = True

    # ---------------------------
    # Derived
    # ---------------------------
    @property
    def is_editing(self) -> bool:
        return self.editing_target is not None

    @property
    def can_submit(self) -> bool:
        return self.draft.is_complete

    # ---------------------------
    # Banner
    # ---------------------------
    def show_error(self, message: str, now: float) -> None:
        self.banner = Banner("error", message, now)

    def show_success(self, message: str, now: float) -> None:
        self.banner = Banner("success", message, now)

    def clear_banner(self) -> None:
        self.banner = None

    def tick(self, now: float) -> None:
        """Drop the banner once it has been visible for BANNER_TIMEOUT seconds."""
        if self.banner is not None and self.banner.expired(now):
            self.banner = None

    # ---------------------------
    # Loading the list
    # ---------------------------
    def begin_loading(self) -> None:
        self.loading = True

    def posts_loaded(self, posts: List[RemotePost]) -> None:
        self.posts = list(posts)
        self.loading = False
        # A good fetch clears a stale fetch error, but keeps success banners.
        if self.banner is not None and self.banner.kind == "error":
            self.banner = None

    def load_failed(self, now: float) -> None:
        self.loading = False
        self.show_error(MSG_FETCH_FAILED, now)

    # ---------------------------
    # Draft and edit mode
    # ---------------------------
    def set_draft(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        self.draft = Draft(
            title=self.draft.title if title is None else title,
            content=self.draft.content if content is None else content,
        )

    def begin_edit(self, post: RemotePost) -> None:
        self.editing_target = post
        self.draft = Draft.from_post(post)
        self.clear_banner()

    def cancel_edit(self) -> None:
        self.editing_target = None
        self.draft = Draft()
        self.clear_banner()

    # ---------------------------
    # Submit
    # ---------------------------
    def submit(self, now: float) -> Optional[SubmitIntent]:
        """Return the request to issue, or None when the draft is incomplete."""
        if not self.can_submit:
            self.show_error(MSG_INCOMPLETE_DRAFT, now)
            return None
        if self.editing_target is not None:
            return UpdateIntent(
                post_id=self.editing_target.id,
                title=self.draft.title,
                content=self.draft.content,
            )
        return CreateIntent(title=self.draft.title, content=self.draft.content)

    def submit_succeeded(self, intent: SubmitIntent, now: float) -> None:
        self.draft = Draft()
        if isinstance(intent, UpdateIntent):
            self.editing_target = None
            self.show_success(MSG_UPDATED, now)
        else:
            self.show_success(MSG_CREATED, now)

    def submit_failed(self, intent: SubmitIntent, now: float) -> None:
        if isinstance(intent, UpdateIntent):
            self.show_error(MSG_UPDATE_FAILED, now)
        else:
            self.show_error(MSG_CREATE_FAILED, now)

    # ---------------------------
    # Delete
    # ---------------------------
    def delete_succeeded(self, now: float) -> None:
        self.show_success(MSG_DELETED, now)

    def delete_failed(self, now: float) -> None:
        self.show_error(MSG_DELETE_FAILED, now)
