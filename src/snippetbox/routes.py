"""The route table."""

from pathlib import Path

from snippetbox.app import Application
from snippetbox.routing.router import Router
from snippetbox.static import FileServer, strip_prefix


def routes(app: Application, static_dir: str | Path) -> Router:
    """Register every route and return the compiled router."""
    router = Router()

    file_server = FileServer(static_dir)
    router.handle("GET /static/", strip_prefix("/static", file_server), name="static")

    router.handle("GET /{$}", app.home)
    router.handle("GET /snippet/view/{id}", app.snippet_view)
    router.handle("GET /snippet/create", app.snippet_create)
    router.handle("POST /snippet/create", app.snippet_create_post)

    router.compile()
    return router
