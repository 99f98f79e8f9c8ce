import typer
from typing import NoReturn, Optional

from miniblog.client.api import ApiError, PostsClient, RemotePost
from miniblog.client.controller import BlogController
from miniblog.client.render import format_dates, render_post, render_posts, render_view
from miniblog.client.state import CONFIRM_DELETE, MSG_CREATED, MSG_DELETED, MSG_UPDATED
from miniblog.core.config import ClientSettings
from miniblog.core.logging import configure_client_logging

app = typer.Typer(help="Blog publishing tool: run the API or manage posts against it.")


# ---------------------------
# Helpers
# ---------------------------
def make_client(api_url: str) -> PostsClient:
    return PostsClient(api_url)


def fail(message: str) -> NoReturn:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(1)


def resolve_post(posts: list[RemotePost], ref: str) -> Optional[RemotePost]:
    """Find a post by list position (1-based) or by id."""
    if ref.isdigit() and 1 <= int(ref) <= len(posts):
        return posts[int(ref) - 1]
    return next((post for post in posts if post.id == ref), None)


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="API root URL (defaults to BLOG_API_URL)."
    ),
):
    """Blog publishing tool."""
    configure_client_logging()
    ctx.obj = api_url or ClientSettings().BLOG_API_URL


# ---------------------------
# Server
# ---------------------------
@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST)."),
    port: Optional[int] = typer.Option(None, help="Port (defaults to PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
):
    """Run the blog API server."""
    from miniblog.core.exceptions import ConfigurationError
    from miniblog.main import run

    try:
        run(host=host, port=port, reload=reload)
    except ConfigurationError as e:
        fail(str(e))


# ---------------------------
# Posts
# ---------------------------
@app.command()
def health(ctx: typer.Context):
    """Check that the API is up."""
    with make_client(ctx.obj) as client:
        try:
            payload = client.health()
        except ApiError as e:
            fail(e.message)
    typer.echo(f"✅ {payload.get('message')} ({payload.get('timestamp')})")


@app.command("list")
def list_posts(ctx: typer.Context):
    """List all posts, newest first."""
    with make_client(ctx.obj) as client:
        try:
            posts = client.list_posts()
        except ApiError as e:
            fail(f"Failed to fetch posts: {e.message}")
    typer.echo("\n".join(render_posts(posts)))


@app.command()
def create(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t", help="Post title."),
    content: str = typer.Option(..., "--content", "-c", help="Post content."),
):
    """Create a post."""
    if not title.strip() or not content.strip():
        fail("Please fill in both title and content")
    with make_client(ctx.obj) as client:
        try:
            post = client.create_post(title, content)
        except ApiError as e:
            fail(f"Failed to create post: {e.message}")
    typer.echo(f"✅ {MSG_CREATED}")
    typer.echo("\n".join(render_post(post)))


@app.command()
def edit(
    ctx: typer.Context,
    post_id: str,
    title: str = typer.Option(..., "--title", "-t", help="New title."),
    content: str = typer.Option(..., "--content", "-c", help="New content."),
):
    """Replace a post's title and content."""
    if not title.strip() or not content.strip():
        fail("Please fill in both title and content")
    with make_client(ctx.obj) as client:
        try:
            post = client.update_post(post_id, title, content)
        except ApiError as e:
            fail(f"Failed to update post: {e.message}")
    typer.echo(f"✅ {MSG_UPDATED}")
    typer.echo(f"{post.title}\n    {format_dates(post)}")


@app.command()
def delete(
    ctx: typer.Context,
    post_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
):
    """Delete a post permanently."""
    if not yes and not typer.confirm(CONFIRM_DELETE):
        typer.echo("Aborted.")
        raise typer.Exit(0)
    with make_client(ctx.obj) as client:
        try:
            client.delete_post(post_id)
        except ApiError as e:
            fail(f"Failed to delete post: {e.message}")
    typer.echo(f"✅ {MSG_DELETED}")


# ---------------------------
# Interactive view
# ---------------------------
SHELL_HELP = (
    "t=title  c=content  s=submit  e N=edit  d N=delete  x=cancel  r=refresh  q=quit"
)


@app.command()
def shell(ctx: typer.Context):
    """Interactive single-page view of the blog."""
    with make_client(ctx.obj) as client:
        controller = BlogController(client, confirm=typer.confirm)
        controller.mount()

        while True:
            controller.tick()
            typer.echo("")
            typer.echo(render_view(controller.state))
            typer.echo(SHELL_HELP)
            command, _, arg = typer.prompt(">", default="", show_default=False).strip().partition(" ")
            arg = arg.strip()

            if command == "q":
                break
            elif command == "t":
                controller.update_draft(title=arg or typer.prompt("Title", default=""))
            elif command == "c":
                controller.update_draft(content=arg or typer.prompt("Content", default=""))
            elif command == "s":
                controller.submit()
            elif command == "x":
                controller.cancel()
            elif command == "r":
                controller.refresh()
            elif command in ("e", "d"):
                post = resolve_post(controller.state.posts, arg)
                if post is None:
                    typer.echo(f"No post matches '{arg}'.")
                elif command == "e":
                    controller.edit(post)
                else:
                    controller.delete(post)
            elif command:
                typer.echo(f"Unknown command '{command}'.")


if __name__ == "__main__":
    app()
