"""
Image downloader.

Each sticker is stored as ``<package_id>-<sticker_id>.png``. A file that is
already present counts as downloaded, whatever its content; this is the only
way a rerun resumes work.
"""

from pathlib import Path
from typing import Callable, Optional

import requests

from sticker_crawler.crawl.errors import RequestError, StorageError
from sticker_crawler.crawl.session import open_stream
from sticker_crawler.crawl.settings import CHUNK_SIZE, STICKER_IMAGE


def filename(package_id: str, sticker_id: str) -> str:
    """Deterministic image file name for a (package, sticker) pair."""
    return f"{package_id}-{sticker_id}.png"


def sticker_image_url(sticker_id: str) -> str:
    return STICKER_IMAGE.format(sticker_id)


def ensure_dir(path: Path) -> None:
    """Create directory if it does not exist."""
    # 中文说明：确保目录存在，若不存在则创建
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"failed to mkdir {path}: {exc}") from exc


def download_sticker(
    sess: requests.Session,
    package_id: str,
    sticker_id: str,
    image_dir: Path,
    timeout: Optional[float] = None,
    log: Callable[[str], None] = print,
) -> bool:
    """Make sure the sticker image exists under `image_dir`.

    Parameters
    ----------
    sess : requests.Session
        HTTP session.
    package_id, sticker_id : str
        Identifiers of the sticker.
    image_dir : Path
        Destination directory, created when missing.
    timeout : Optional[float]
        Request timeout; ``None`` waits indefinitely.
    log : Callable[[str], None]
        Sink for progress lines (``tqdm.write`` while a bar is shown).

    Returns
    -------
    bool
        True if the file was downloaded, False if it already existed.

    Raises
    ------
    RequestError
        The image could not be fetched.
    StorageError
        The file could not be checked, created or written.
    """
    path = image_dir / filename(package_id, sticker_id)
    ensure_dir(path.parent)

    # 中文说明：文件已存在则跳过（不做内容校验）
    try:
        if path.exists():
            log(f"{path} existed!")
            return False
    except OSError as exc:
        raise StorageError(f"failed to check {path} exist: {exc}") from exc

    url = sticker_image_url(sticker_id)
    resp = open_stream(sess, url, timeout=timeout)
    try:
        with path.open("wb") as f:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except requests.RequestException as exc:
        path.unlink(missing_ok=True)
        raise RequestError(f"failed to read {url}: {exc}") from exc
    except OSError as exc:
        # 中文说明：写入中途失败时删除残缺文件，避免下次运行误判为已下载
        path.unlink(missing_ok=True)
        raise StorageError(f"failed to copy to {path}: {exc}") from exc
    finally:
        resp.close()

    log(f"{path} download successfully.")
    return True
