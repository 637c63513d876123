"""
Endpoints, scraping literals and default paths for the LINE sticker crawler.

The prefix/suffix pairs below are the extraction contract with the store's
markup. A scraped line only yields an identifier when, after trimming, it
starts with the prefix AND ends with the suffix; do not loosen them.
"""

from pathlib import Path


# 中文说明：搜索接口（query 模式），每个情绪只取前 LIMIT 个贴图包
PACKAGE_HOST = "https://store.line.me/api/search/sticker"
LIMIT = 5
SEARCH_PARAMS = {
    "limit": str(LIMIT),
    "offset": "0",
    "type": "ALL",
    "includeFacets": "false",
}

# 中文说明：展示页（page 模式），按页码翻页抓取贴图包 ID
SHOWCASE_HOST = "https://store.line.me/stickershop/showcase/top/zh-Hant"
PACKAGE_PREFIX = '<a href="/stickershop/product/'
PACKAGE_SUFFIX = '/zh-Hant">'

STICKER_HOST = "https://store.line.me/stickershop/product/{}/zh-Hant"
STICKER_PREFIX = (
    '<span class="mdCMN09Image" style="background-image:url('
    "https://stickershop.line-scdn.net/stickershop/v1/sticker/"
)
STICKER_SUFFIX = '/iPhone/sticker@2x.png);"></span>'
STICKER_IMAGE = "https://stickershop.line-scdn.net/stickershop/v1/sticker/{}/iPhone/sticker@2x.png"

EMOTIONS = ("Happy", "Sad", "Fearful", "Angry", "Surprised", "Disgusted")

REPO_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_DIR = REPO_ROOT / "output"
IMAGE_SUBDIR = "image"
LABEL_FILE = "label.csv"

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/127.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "zh-TW,zh;q=0.9,en;q=0.8",
}

CHUNK_SIZE = 8192
