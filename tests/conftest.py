import asyncio
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

PDF_BYTES = b"%PDF-1.4\n" + b"0123456789abcdef" * 512


class FakeDatatracker:
    """
    A local stand-in for the datatracker and the PDF archive.

    Serves agenda payloads under /agenda/<name> and documents under
    /pdf/<identifier>.pdf.
    """

    def __init__(self):
        self.documents: dict[str, bytes] = {}
        self.agendas: dict[str, tuple[str, str]] = {}
        self.slow: set[str] = set()
        self.truncated: set[str] = set()
        self.delay = 0.0
        self.requests: list[str] = []
        self.active = 0
        self.peak_active = 0
        self._release: asyncio.Event | None = None

    def add_document(self, identifier: str, body: bytes = PDF_BYTES) -> None:
        self.documents[f"{identifier}.pdf"] = body

    def add_agenda(self, name: str, body: str, content_type: str) -> None:
        self.agendas[name] = (body, content_type)

    def release(self) -> None:
        if self._release is not None:
            self._release.set()

    async def _serve_document(self, request: web.Request) -> web.StreamResponse:
        filename = request.match_info["filename"]
        self.requests.append(filename)
        self.active += 1
        self.peak_active = max(self.peak_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if filename in self.slow:
                try:
                    await asyncio.wait_for(self._release.wait(), timeout=5)
                except asyncio.TimeoutError:
                    pass
            body = self.documents.get(filename)
            if body is None:
                raise web.HTTPNotFound()
            if filename in self.truncated:
                return await self._serve_truncated(request, body)
            return web.Response(body=body, content_type="application/pdf")
        finally:
            self.active -= 1

    async def _serve_truncated(
        self, request: web.Request, body: bytes
    ) -> web.StreamResponse:
        """Promises more bytes than it sends, then drops the connection."""
        response = web.StreamResponse(headers={"Content-Type": "application/pdf"})
        response.content_length = len(body) * 10
        await response.prepare(request)
        await response.write(body)
        request.transport.close()
        return response

    async def _serve_agenda(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        if name == "error":
            raise web.HTTPInternalServerError()
        if name not in self.agendas:
            raise web.HTTPNotFound()
        body, content_type = self.agendas[name]
        return web.Response(text=body, content_type=content_type)

    @asynccontextmanager
    async def running(self):
        """Starts the server and yields its base URL."""
        self._release = asyncio.Event()
        app = web.Application()
        app.router.add_get("/pdf/{filename}", self._serve_document)
        app.router.add_get("/agenda/{name}", self._serve_agenda)
        async with TestServer(app) as server:
            try:
                yield str(server.make_url("/"))
            finally:
                self.release()


@pytest.fixture
def datatracker():
    return FakeDatatracker()


@pytest.fixture
def agenda_json():
    return """
    {
        "telechat-date": "2024-01-11",
        "as_of": "2024-01-05 10:00:00",
        "page-counts": {"2024-01-11": 120},
        "sections": {
            "1": {"title": "Administrivia"},
            "2.1.1": {
                "title": "New Items",
                "docs": [
                    {"docname": "draft-ietf-foo-bar", "rev": "05", "intended-std-level": "Proposed Standard"},
                    {"docname": "draft-ietf-baz-qux", "rev": "12"}
                ]
            },
            "3.1.1": {
                "title": "Returning Items",
                "docs": [
                    {"docname": "draft-ietf-foo-bar", "rev": "05"},
                    {"docname": "draft-smith-widgets", "rev": "00"}
                ]
            }
        }
    }
    """


@pytest.fixture
def agenda_html():
    return """
    <html>
    <body>
      <h1>Documents on future IESG telechat agendas</h1>
      <h2>IESG telechat 2024-01-11</h2>
      <table>
        <tr><td><a href="/doc/draft-ietf-foo-bar/">draft-ietf-foo-bar-05</a></td>
            <td><a href="/person/someone@example.com">Some One</a></td></tr>
        <tr><td><a href="/doc/draft-ietf-baz-qux/">draft-ietf-baz-qux-12</a></td></tr>
        <tr><td><a href="/doc/draft-ietf-foo-bar/">draft-ietf-foo-bar-05</a></td></tr>
      </table>
      <h2>IESG telechat 2024-01-25.</h2>
      <table>
        <tr><td><a href="/doc/draft-ietf-foo-bar/">draft-ietf-foo-bar-05</a></td></tr>
        <tr><td><a href="/doc/charter-ietf-thing/">charter-ietf-thing-01</a></td></tr>
      </table>
    </body>
    </html>
    """
