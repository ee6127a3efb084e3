"""End-to-end tests for the route table through the in-process client."""

import pytest

from snippetbox.server.handler import Mux
from snippetbox.testing import TestClient


class TestHome:
    async def test_root(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "Hello from Snippetbox"
            assert response.content_type == "text/plain; charset=utf-8"

    @pytest.mark.parametrize("path", ["/missing", "/foo/", "/index.html"])
    async def test_root_matches_nothing_deeper(self, mux: Mux, path: str) -> None:
        async with TestClient(mux) as client:
            response = await client.get(path)
            assert response.status == 404
            assert response.text == "404 Not Found\n"

    async def test_head_root(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.head("/")
            assert response.status == 200
            assert response.body == b""
            assert response.header("content-length") == str(len("Hello from Snippetbox"))

    async def test_post_root_is_method_not_allowed(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.post("/")
            assert response.status == 405
            assert response.header("allow") == "GET, HEAD"


class TestSnippetView:
    async def test_captures_id(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/snippet/view/123")
            assert response.status == 200
            assert response.text == "Display a specific snippet with ID 123"

    async def test_id_is_passed_as_string(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/snippet/view/abc-1")
            assert response.text.endswith("ID abc-1")

    @pytest.mark.parametrize(
        "path",
        ["/snippet/view/", "/snippet/view", "/snippet/view/1/", "/snippet/view/1/2"],
    )
    async def test_requires_exactly_one_segment(self, mux: Mux, path: str) -> None:
        async with TestClient(mux) as client:
            response = await client.get(path)
            assert response.status == 404


class TestSnippetCreate:
    async def test_get_shows_form(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/snippet/create")
            assert response.status == 200
            assert response.text == "Display a form for creating a new snippet"

    async def test_post_saves(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.post("/snippet/create", body=b"title=hi")
            assert response.status == 201
            assert response.text == "Save a new snippet..."

    async def test_other_method_is_not_allowed(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.request("DELETE", "/snippet/create")
            assert response.status == 405
            assert response.header("allow") == "GET, HEAD, POST"


class TestStaticRoute:
    async def test_serves_file_bytes(self, mux: Mux, static_dir) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/static/css/main.css")
            assert response.status == 200
            assert response.body == (static_dir / "css" / "main.css").read_bytes()
            assert response.content_type.startswith("text/css")

    async def test_missing_file(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/static/css/missing.css")
            assert response.status == 404

    async def test_directory_is_not_listed(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            assert (await client.get("/static/")).status == 404
            assert (await client.get("/static/css/")).status == 404

    @pytest.mark.parametrize(
        "path",
        ["/static/../secret.txt", "/static/css/../../secret.txt", "/static//../secret.txt"],
    )
    async def test_traversal_never_leaves_root(self, mux: Mux, path: str) -> None:
        async with TestClient(mux) as client:
            response = await client.get(path)
            assert response.status == 404
            assert b"top secret" not in response.body

    async def test_bare_prefix_redirects(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/static?v=2")
            assert response.status == 301
            assert response.header("location") == "/static/?v=2"

    async def test_post_is_not_allowed(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.post("/static/css/main.css")
            assert response.status == 405


class TestRequestErrorsAreNotLogged:
    async def test_not_found_writes_no_log(self, mux: Mux, log_records) -> None:
        async with TestClient(mux) as client:
            await client.get("/nope")
            await client.get("/static/nope.css")
            await client.request("PUT", "/")
        assert log_records() == []
