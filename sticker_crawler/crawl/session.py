"""
HTTP helpers shared by the lister, the extractor and the downloader.

All helpers raise :class:`RequestError` on any transport problem or non-2xx
status. Nothing here retries; a failed request fails the caller.
"""

from typing import Any, Dict, Optional

import requests

from sticker_crawler.crawl.errors import DecodeError, RequestError
from sticker_crawler.crawl.settings import HEADERS


def build_session() -> requests.Session:
    """Create an HTTP session with browser-like headers.

    Returns
    -------
    requests.Session
        A session with a desktop user-agent. No retry adapter is mounted.
    """
    # 中文说明：构造带有常见浏览器 UA 的会话；不挂载重试适配器，失败即终止
    sess = requests.Session()
    sess.headers.update(HEADERS)
    return sess


def _get(
    sess: requests.Session,
    url: str,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    stream: bool = False,
) -> requests.Response:
    try:
        resp = sess.get(url, params=params, timeout=timeout, stream=stream)
    except requests.RequestException as exc:
        raise RequestError(f"failed to get {url}: {exc}") from exc
    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        resp.close()
        raise RequestError(f"failed to get {url}: {exc}") from exc
    return resp


def fetch_text(
    sess: requests.Session,
    url: str,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> str:
    """Fetch a page and return its decoded body."""
    resp = _get(sess, url, params=params, timeout=timeout)
    return resp.text


def fetch_json(
    sess: requests.Session,
    url: str,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Fetch a JSON document.

    Raises
    ------
    RequestError
        Transport failure or non-2xx status.
    DecodeError
        The body is not valid JSON.
    """
    resp = _get(sess, url, params=params, timeout=timeout)
    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(f"failed to decode body from {url}: {exc}") from exc


def open_stream(
    sess: requests.Session,
    url: str,
    timeout: Optional[float] = None,
) -> requests.Response:
    """Open a streaming GET; the caller must close the response."""
    return _get(sess, url, timeout=timeout, stream=True)
