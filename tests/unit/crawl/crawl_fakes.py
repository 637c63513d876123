"""In-memory HTTP doubles for the crawler tests."""

import json

import requests


def make_response(body=b"", status=200, url="https://example.test/"):
    """Build a fully-read requests.Response carrying `body`."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    resp.url = url
    resp.encoding = "utf-8"
    resp._content = body
    resp._content_consumed = True
    return resp


def json_response(doc, url="https://example.test/"):
    return make_response(json.dumps(doc), url=url)


class FakeSession:
    """Session stand-in; `handler(url, params)` returns a response or raises."""

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def get(self, url, params=None, timeout=None, stream=False):
        self.calls.append((url, dict(params) if params else None))
        return self.handler(url, params)

    def close(self):
        pass


class BrokenStream:
    """Streaming response that dies after the first chunk."""

    def __init__(self, first=b"\x89PNG"):
        self.first = first
        self.closed = False

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        yield self.first
        raise requests.ConnectionError("connection reset")

    def close(self):
        self.closed = True
