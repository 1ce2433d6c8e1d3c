"""
Shared test fixtures for arxiv-vault tests.
"""

import json
from pathlib import Path
from typing import Optional

import httpx
import pymupdf
import pytest

from arxiv_vault.config import Settings
from arxiv_vault.plugin import Capabilities
from arxiv_vault.resources import FileSystemVault


FULL_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:arxiv="http://arxiv.org/schemas/atom"
      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">
  <id>http://arxiv.org/api/abc</id>
  <title type="html">ArXiv Query: id_list=2404.16260</title>
  <opensearch:totalResults>1</opensearch:totalResults>
  <entry>
    <id>http://arxiv.org/abs/2404.16260v1</id>
    <updated>2024-04-25T01:23:45Z</updated>
    <published>2024-04-24T17:59:59Z</published>
    <title>
      Neural Paper Notes: A Study
    </title>
    <summary>
  We study note taking.
  Notes are   useful.

  This is the second line.
    </summary>
    <author>
      <name>Alice Kim</name>
      <arxiv:affiliation>KAIST</arxiv:affiliation>
    </author>
    <author>
      <name>Bob Lee</name>
    </author>
    <link href="http://arxiv.org/abs/2404.16260v1" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2404.16260v1" rel="related" type="application/pdf"/>
    <arxiv:primary_category term="cs.CL" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
</feed>
"""

SPARSE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="html">ArXiv Query: id_list=2404.16260</title>
  <entry>
    <id>http://arxiv.org/abs/2404.16260v1</id>
    <author><name>Alice Kim</name></author>
  </entry>
</feed>
"""

EMPTY_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="html">ArXiv Query: id_list=9999.99999</title>
  <opensearch:totalResults xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">0</opensearch:totalResults>
</feed>
"""


def s2_paper(paper_id: str, title: str, influential: bool, **extra) -> dict:
    """Build a paper record shaped like the Semantic Scholar v1 API."""
    paper = {
        "paperId": paper_id,
        "title": title,
        "url": f"https://www.semanticscholar.org/paper/{paper_id}",
        "venue": "ACL",
        "year": 2024,
        "authors": [{"authorId": "1", "name": "Carol Park"}, {"authorId": "2", "name": "Dan Choi"}],
        "arxivId": None,
        "doi": None,
        "isInfluential": influential,
        "citationCount": 12,
        "intent": ["methodology"],
    }
    paper.update(extra)
    return paper


@pytest.fixture
def s2_response() -> dict:
    """A Semantic Scholar response with one influential citation of three."""
    return {
        "paperId": "abc123",
        "numCitedBy": 3,
        "numCiting": 2,
        "citations": [
            s2_paper("c1", "Plain Citation", False),
            s2_paper("c2", "Influential Citation", True, arxivId="2405.00001", doi="10.1/xyz"),
            s2_paper("c3", "Another Plain Citation", False),
        ],
        "references": [
            s2_paper("r1", "Influential Reference", True, year=2020),
            s2_paper("r2", "Plain Reference", False),
        ],
    }


class FakeApi:
    """
    Stand-in for the arXiv and Semantic Scholar endpoints.

    Responses are configured per host; every request is recorded.
    """

    def __init__(self):
        self.feed_status = 200
        self.feed_body = FULL_FEED
        self.s2_status = 200
        self.s2_body: Optional[str] = None
        self.fail_host: Optional[str] = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == self.fail_host:
            raise httpx.ConnectError("connection refused", request=request)
        if request.url.host == "export.arxiv.org":
            return httpx.Response(self.feed_status, text=self.feed_body)
        if request.url.host == "api.semanticscholar.org":
            return httpx.Response(self.s2_status, text=self.s2_body or "{}")
        return httpx.Response(404)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@pytest.fixture
def fake_api(s2_response: dict) -> FakeApi:
    api = FakeApi()
    api.s2_body = json.dumps(s2_response)
    return api


@pytest.fixture
def http_client(fake_api: FakeApi) -> httpx.AsyncClient:
    """An httpx client routed to the fake API."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler))


class FakeClipboard:
    """Host clipboard holding a fixed string."""

    def __init__(self, text: str = ""):
        self.text = text

    async def read_text(self) -> str:
        return self.text


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard("https://arxiv.org/abs/2404.16260v1")


@pytest.fixture
def notices() -> list[str]:
    """Collects notices shown to the user."""
    return []


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def vault(vault_path: Path) -> FileSystemVault:
    return FileSystemVault(vault_path)


@pytest.fixture
def settings(vault_path: Path) -> Settings:
    """Create settings with a temporary vault."""
    return Settings(VAULT_PATH=vault_path)


@pytest.fixture
def capabilities(
    vault: FileSystemVault,
    http_client: httpx.AsyncClient,
    clipboard: FakeClipboard,
    notices: list[str],
) -> Capabilities:
    return Capabilities(
        storage=vault,
        notifier=notices.append,
        http=http_client,
        clipboard=clipboard,
    )


def make_pdf(*pages: str) -> bytes:
    """Create an in-memory PDF with one text line per page."""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf("First page text", "Second page text")
