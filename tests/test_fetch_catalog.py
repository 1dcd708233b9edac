import json

import requests

from scripts import fetch_catalog


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append(params)
        return self.pages.pop(0)


def test_retry_session_mounts_adapters():
    session = fetch_catalog.create_retry_session()

    adapter = session.get_adapter("https://example.com")
    assert adapter.max_retries.total == 5
    assert 429 in adapter.max_retries.status_forcelist


def test_extract_rows_accepts_list_or_wrapped():
    assert fetch_catalog.extract_rows([{"a": 1}]) == [{"a": 1}]
    assert fetch_catalog.extract_rows({"courses": [{"a": 1}]}) == [{"a": 1}]
    assert fetch_catalog.extract_rows("nope") == []


def test_fetch_all_pages_until_short_page():
    session = FakeSession([
        FakeResponse([{"title": "a"}, {"title": "b"}]),
        FakeResponse({"courses": [{"title": "c"}]}),
    ])

    rows = fetch_catalog.fetch_all(session, "https://example.com/catalog", page_size=2, delay=0)

    assert [r["title"] for r in rows] == ["a", "b", "c"]
    assert [c["page"] for c in session.calls] == [1, 2]


def test_run_without_source_url(tmp_path):
    assert fetch_catalog.run(source_url="", output_file=tmp_path / "raw.json") == 1


def test_run_writes_output(tmp_path, monkeypatch):
    session = FakeSession([FakeResponse([{"title": "a"}])])
    monkeypatch.setattr(fetch_catalog, "create_retry_session", lambda: session)
    out = tmp_path / "nested" / "raw.json"

    assert fetch_catalog.run(source_url="https://example.com/catalog", output_file=out) == 0
    assert json.loads(out.read_text()) == [{"title": "a"}]


def test_run_reports_http_failure(tmp_path, monkeypatch):
    session = FakeSession([FakeResponse({}, status=503)])
    monkeypatch.setattr(fetch_catalog, "create_retry_session", lambda: session)

    assert fetch_catalog.run(source_url="https://example.com/catalog", output_file=tmp_path / "raw.json") == 1
