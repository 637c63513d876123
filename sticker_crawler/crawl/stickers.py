"""Sticker-page extractor: list the sticker IDs shown on a package page."""

from typing import List, Optional

import requests

from sticker_crawler.crawl.markup import extract_between
from sticker_crawler.crawl.session import fetch_text
from sticker_crawler.crawl.settings import STICKER_HOST, STICKER_PREFIX, STICKER_SUFFIX


def sticker_page_url(package_id: str) -> str:
    return STICKER_HOST.format(package_id)


def parse_stickers(
    sess: requests.Session,
    package_id: str,
    timeout: Optional[float] = None,
) -> List[str]:
    """Fetch a package detail page and extract its sticker IDs.

    Parameters
    ----------
    sess : requests.Session
        HTTP session.
    package_id : str
        Opaque package identifier from the lister.
    timeout : Optional[float]
        Request timeout; ``None`` waits indefinitely.

    Returns
    -------
    List[str]
        Sticker IDs in page order, duplicates included.
    """
    # 中文说明：详情页中每个贴图对应一行 <span class="mdCMN09Image" ...>，按行截取贴图 ID
    body = fetch_text(sess, sticker_page_url(package_id), timeout=timeout)
    ids = extract_between(body, STICKER_PREFIX, STICKER_SUFFIX)
    print(f"package {package_id} crawled")
    return ids
