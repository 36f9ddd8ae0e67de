import asyncio
import json

import pytest
import requests

from service.climate.base.errors import DataFetchError

from . import fetch


class _FakeResponse:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def test_file_fetcher(tmp_path):
    (tmp_path / "2016.json").write_text(json.dumps({"rain": []}), encoding="utf-8")
    f = fetch.make_fetcher(str(tmp_path))
    assert isinstance(f, fetch.FileFetcher)
    assert asyncio.run(f(2016)) == {"rain": []}


def test_file_fetcher_missing_file(tmp_path):
    f = fetch.FileFetcher(tmp_path)
    with pytest.raises(DataFetchError) as exc:
        asyncio.run(f(2016))
    assert "2016.json" in str(exc.value)


def test_read_json_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataFetchError):
        fetch.read_json(path)


def test_http_fetcher(monkeypatch):
    urls = []

    def fake_get(url, timeout):
        urls.append(url)
        return _FakeResponse({"rain": []})

    monkeypatch.setattr(fetch.requests, "get", fake_get)
    f = fetch.make_fetcher("https://example.com/data/")
    assert isinstance(f, fetch.HttpFetcher)
    assert asyncio.run(f(2017)) == {"rain": []}
    assert urls == ["https://example.com/data/2017.json"]


def test_fetch_json_http_error(monkeypatch):
    monkeypatch.setattr(
        fetch.requests, "get", lambda url, timeout: _FakeResponse(None, status=404)
    )
    with pytest.raises(DataFetchError) as exc:
        fetch.fetch_json("https://example.com/2017.json")
    assert exc.value.source == "https://example.com/2017.json"


def test_load_schema_from_dir(tmp_path):
    (tmp_path / fetch.SCHEMA_FILENAME).write_text(
        json.dumps([{"year": 2016, "stations": []}]), encoding="utf-8"
    )
    assert fetch.load_schema(str(tmp_path)).years() == [2016]


def test_load_schema_from_url(monkeypatch):
    monkeypatch.setattr(
        fetch.requests,
        "get",
        lambda url, timeout: _FakeResponse([{"year": 2018, "stations": []}]),
    )
    assert fetch.load_schema("http://example.com").years() == [2018]
