# tests/test_run_extract.py
import json

import pytest

import run_extract
from core.exceptions import UpstreamHTTPError
from models.extraction import ExtractionResult

RESULT = ExtractionResult(
    title="Hello",
    content="<p>Hello <b>world</b></p><p>Second paragraph</p>",
    thumbnailUrl="https://example.com/cover.jpg",
)


class _FakeExtractor:
    def __init__(self, outcome):
        self.outcome = outcome
        self.urls = []

    async def extract(self, url):
        self.urls.append(url)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def test_to_markdown():
    markdown = run_extract.to_markdown(RESULT)

    assert markdown.startswith("# Hello\n")
    assert "![thumbnail](https://example.com/cover.jpg)" in markdown
    assert "Hello **world**" in markdown
    assert "Second paragraph" in markdown


@pytest.mark.asyncio
async def test_main_prints_json(monkeypatch, capsys):
    fake = _FakeExtractor(RESULT)
    monkeypatch.setattr(run_extract, "ContentExtractor", lambda: fake)

    code = await run_extract.main(["https://example.com/post", "--log-level", "ERROR"])

    assert code == 0
    assert fake.urls == ["https://example.com/post"]
    printed = json.loads(capsys.readouterr().out)
    assert printed == {
        "title": "Hello",
        "content": RESULT.content_html,
        "thumbnailUrl": "https://example.com/cover.jpg",
    }


@pytest.mark.asyncio
async def test_main_prints_markdown(monkeypatch, capsys):
    monkeypatch.setattr(run_extract, "ContentExtractor", lambda: _FakeExtractor(RESULT))

    code = await run_extract.main(["https://example.com/post", "--markdown", "--log-level", "ERROR"])

    assert code == 0
    assert capsys.readouterr().out.startswith("# Hello")


@pytest.mark.asyncio
async def test_main_reports_errors(monkeypatch, capsys):
    monkeypatch.setattr(run_extract, "ContentExtractor", lambda: _FakeExtractor(UpstreamHTTPError(404, "Not Found")))

    code = await run_extract.main(["https://example.com/missing", "--log-level", "ERROR"])

    assert code == 1
    error = json.loads(capsys.readouterr().err)
    assert error["kind"] == "upstream_http_error"
    assert error["status"] == 404
