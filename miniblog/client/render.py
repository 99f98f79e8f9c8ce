"""Plain-text rendering of the blog view."""

from datetime import datetime
from typing import List, Optional

from miniblog.client.api import RemotePost
from miniblog.client.state import BlogState

APP_TITLE = "Blog Platform"
RULE = "-" * 60


def format_date(value: datetime, tz=None) -> str:
    """Format like ``October 17, 2026, 03:04 PM`` in local time (or ``tz``)."""
    local = value.astimezone(tz)
    return f"{local:%B} {local.day}, {local:%Y}, {local:%I:%M %p}"


def format_dates(post: RemotePost, tz=None) -> str:
    line = f"Created: {format_date(post.created_at, tz)}"
    if post.was_edited:
        line += f" • Updated: {format_date(post.updated_at, tz)}"
    return line


def render_post(post: RemotePost, index: Optional[int] = None, tz=None) -> List[str]:
    heading = post.title if index is None else f"[{index}] {post.title}"
    return [
        heading,
        f"    {format_dates(post, tz)}",
        f"    id: {post.id}",
        *(f"    {line}" for line in post.content.splitlines() or [""]),
    ]


def render_posts(posts: List[RemotePost], numbered: bool = False, tz=None) -> List[str]:
    if not posts:
        return [
            "No Posts Yet",
            "Create your first blog post above to get started!",
        ]
    lines: List[str] = []
    for i, post in enumerate(posts, start=1):
        if lines:
            lines.append("")
        lines.extend(render_post(post, index=i if numbered else None, tz=tz))
    return lines


def render_view(state: BlogState, tz=None) -> str:
    lines = [APP_TITLE, RULE]

    if state.banner is not None:
        marker = "✅" if state.banner.kind == "success" else "❌"
        lines += [f"{marker} {state.banner.message}", ""]

    lines.append("Edit Post" if state.is_editing else "Create New Post")
    lines.append(f"  Title:   {state.draft.title}")
    lines.append(f"  Content: {state.draft.content}")
    action = "Update Post" if state.is_editing else "Add Post"
    if not state.can_submit:
        action += " (disabled)"
    lines.append(f"  [{action}]" + ("  [Cancel]" if state.is_editing else ""))
    lines.append(RULE)

    if state.loading:
        lines.append("Loading posts...")
    else:
        lines.extend(render_posts(state.posts, numbered=True, tz=tz))

    return "\n".join(lines)
