"""
Crawl pipeline: list -> resolve -> download -> (query mode) label.

Phases run strictly one after another and hand their output to the next
phase explicitly. The first error aborts the whole run; images already on
disk stay there and are skipped by the next run.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import requests
from tqdm import tqdm

from sticker_crawler.crawl.download import download_sticker
from sticker_crawler.crawl.errors import CrawlError
from sticker_crawler.crawl.labels import build_label_matrix, label_rows, write_csv
from sticker_crawler.crawl.listing import parse_packages, parse_showcase
from sticker_crawler.crawl.settings import EMOTIONS, IMAGE_SUBDIR, LABEL_FILE, LIMIT
from sticker_crawler.crawl.stickers import parse_stickers


def _wrap(exc: CrawlError, context: str) -> CrawlError:
    # 中文说明：保留原异常类型，只在消息前补充正在处理的对象
    return type(exc)(f"{context}: {exc}")


def list_by_emotion(
    sess: requests.Session,
    emotions: Sequence[str],
    limit: int = LIMIT,
    timeout: Optional[float] = None,
) -> Dict[str, List[str]]:
    """Phase 1 (query mode): emotion -> at most `limit` package IDs each."""
    emotion_packages: Dict[str, List[str]] = {}
    for emotion in emotions:
        try:
            packages = parse_packages(sess, emotion, limit=limit, timeout=timeout)
        except CrawlError as exc:
            raise _wrap(exc, f"failed to parse {emotion}") from exc
        emotion_packages.setdefault(emotion, []).extend(packages)
    return emotion_packages


def list_by_page(
    sess: requests.Session,
    pages: Iterable[int],
    timeout: Optional[float] = None,
) -> List[str]:
    """Phase 1 (page mode): package IDs of all pages, flattened in page order."""
    package_ids: List[str] = []
    for page in pages:
        try:
            package_ids.extend(parse_showcase(sess, page, timeout=timeout))
        except CrawlError as exc:
            raise _wrap(exc, f"failed to parse page {page}") from exc
    return package_ids


def resolve_stickers(
    sess: requests.Session,
    package_ids: Iterable[str],
    timeout: Optional[float] = None,
) -> Dict[str, List[str]]:
    """Phase 2: package ID -> sticker IDs. Each package page is fetched once."""
    sticker_ids: Dict[str, List[str]] = {}
    for package_id in package_ids:
        if package_id in sticker_ids:
            continue
        try:
            sticker_ids[package_id] = parse_stickers(sess, package_id, timeout=timeout)
        except CrawlError as exc:
            raise _wrap(exc, f"failed to parse sticker for package {package_id}") from exc
    return sticker_ids


def download_all(
    sess: requests.Session,
    sticker_ids: Mapping[str, Sequence[str]],
    image_dir: Path,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> Tuple[int, int]:
    """Phase 3: make sure every (package, sticker) image is on disk.

    Returns
    -------
    Tuple[int, int]
        (downloaded, skipped) counts.
    """
    total = sum(len(v) for v in sticker_ids.values())
    downloaded, skipped = 0, 0
    with tqdm(total=total, desc="download", unit="img", disable=not progress) as bar:
        for package_id, stickers in sticker_ids.items():
            for sticker_id in stickers:
                try:
                    fetched = download_sticker(
                        sess,
                        package_id,
                        sticker_id,
                        image_dir,
                        timeout=timeout,
                        log=tqdm.write,
                    )
                except CrawlError as exc:
                    raise _wrap(exc, f"failed to download sticker {package_id}") from exc
                if fetched:
                    downloaded += 1
                else:
                    skipped += 1
                bar.update(1)
    return downloaded, skipped


def run_query(
    sess: requests.Session,
    out_dir: Path,
    emotions: Sequence[str] = EMOTIONS,
    limit: int = LIMIT,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> Dict[str, Any]:
    """Run the emotion-query pipeline and write the label CSV.

    Images go to ``<out_dir>/image/`` and labels to ``<out_dir>/label.csv``.

    Returns
    -------
    Dict[str, Any]
        Keys: packages, stickers, downloaded, skipped, label_path.
    """
    print(f"[List] querying {len(emotions)} emotions")
    emotion_packages = list_by_emotion(sess, emotions, limit=limit, timeout=timeout)

    # 中文说明：按情绪顺序展开包 ID，去重由 resolve_stickers 负责
    package_ids = [p for ids in emotion_packages.values() for p in ids]
    print(f"[Resolve] resolving {len(package_ids)} packages")
    sticker_ids = resolve_stickers(sess, package_ids, timeout=timeout)

    print("[Download] fetching sticker images")
    downloaded, skipped = download_all(
        sess, sticker_ids, out_dir / IMAGE_SUBDIR, timeout=timeout, progress=progress
    )

    matrix = build_label_matrix(emotion_packages, sticker_ids, emotions)
    label_path = out_dir / LABEL_FILE
    write_csv(label_path, label_rows(matrix))
    print(f"[Label] {label_path} generated!")

    return {
        "packages": emotion_packages,
        "stickers": sticker_ids,
        "downloaded": downloaded,
        "skipped": skipped,
        "label_path": label_path,
    }


def run_showcase(
    sess: requests.Session,
    out_dir: Path,
    pages: Iterable[int],
    flat: bool = True,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> Dict[str, Any]:
    """Run the showcase-page pipeline. No labels are produced in this mode.

    With `flat` the images land directly in `out_dir`, otherwise under
    ``<out_dir>/image/``.
    """
    pages = list(pages)
    print(f"[List] crawling showcase pages {pages}")
    package_ids = list_by_page(sess, pages, timeout=timeout)

    print(f"[Resolve] resolving {len(package_ids)} packages")
    sticker_ids = resolve_stickers(sess, package_ids, timeout=timeout)

    image_dir = out_dir if flat else out_dir / IMAGE_SUBDIR
    print("[Download] fetching sticker images")
    downloaded, skipped = download_all(
        sess, sticker_ids, image_dir, timeout=timeout, progress=progress
    )

    return {
        "packages": package_ids,
        "stickers": sticker_ids,
        "downloaded": downloaded,
        "skipped": skipped,
        "label_path": None,
    }
