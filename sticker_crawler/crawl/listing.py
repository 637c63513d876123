"""
Package lister: turn an emotion query or a showcase page into package IDs.

Two modes exist and a run uses exactly one of them:

- query mode hits the JSON search API once per emotion;
- page mode scrapes the showcase HTML page by page number.
"""

from typing import Any, List, Optional

import requests

from sticker_crawler.crawl.errors import DecodeError
from sticker_crawler.crawl.markup import extract_between
from sticker_crawler.crawl.session import fetch_json, fetch_text
from sticker_crawler.crawl.settings import (
    LIMIT,
    PACKAGE_HOST,
    PACKAGE_PREFIX,
    PACKAGE_SUFFIX,
    SEARCH_PARAMS,
    SHOWCASE_HOST,
)


def package_ids_from_query(doc: Any) -> List[str]:
    """Pull the ordered package IDs out of a search API response.

    Parameters
    ----------
    doc : Any
        Decoded JSON, expected shape ``{"items": [{"id": str}, ...]}``.

    Returns
    -------
    List[str]
        Package IDs in response order. A missing ``items`` field means none.

    Raises
    ------
    DecodeError
        The document does not have the expected shape.
    """
    if not isinstance(doc, dict):
        raise DecodeError(f"expected a JSON object, got {type(doc).__name__}")
    items = doc.get("items") or []
    if not isinstance(items, list):
        raise DecodeError("field 'items' is not a list")

    ids: List[str] = []
    for i, item in enumerate(items):
        pid = item.get("id") if isinstance(item, dict) else None
        if not isinstance(pid, str):
            raise DecodeError(f"item {i} has no string 'id'")
        ids.append(pid)
    return ids


def parse_packages(
    sess: requests.Session,
    emotion: str,
    limit: int = LIMIT,
    timeout: Optional[float] = None,
) -> List[str]:
    """Search at most `limit` packages for one emotion (query mode)."""
    # 中文说明：固定查询参数 + limit + query=<情绪>，返回 items[].id 列表
    params = dict(SEARCH_PARAMS)
    params["limit"] = str(limit)
    params["query"] = emotion
    doc = fetch_json(sess, PACKAGE_HOST, params=params, timeout=timeout)
    ids = package_ids_from_query(doc)
    print(f"[{emotion}] package crawled {len(ids)}")
    return ids


def parse_showcase(
    sess: requests.Session,
    page: int,
    timeout: Optional[float] = None,
) -> List[str]:
    """Scrape package IDs from one showcase page (page mode, 1-based)."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    body = fetch_text(sess, SHOWCASE_HOST, params={"page": str(page)}, timeout=timeout)
    ids = extract_between(body, PACKAGE_PREFIX, PACKAGE_SUFFIX)
    print(f"[page {page}] package crawled {len(ids)}")
    return ids
