"""
Crawl LINE sticker packages and download their images.

Two modes:

- query (default): search packages for each emotion, download every sticker
  to ``<out>/image/`` and write ``<out>/label.csv`` with one
  ``image,emotion,0|1`` row per (image, emotion) pair;
- page: walk the showcase pages ``start_page .. start_page+max_pages-1`` and
  download every sticker found, without labels.

Usage:
    python -m sticker_crawler.crawl.main
    python -m sticker_crawler.crawl.main --mode page --max-pages 3 --flat
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sticker_crawler.crawl.errors import CrawlError
from sticker_crawler.crawl.pipeline import run_query, run_showcase
from sticker_crawler.crawl.session import build_session
from sticker_crawler.crawl.settings import EMOTIONS, LIMIT, OUTPUT_DIR, REPO_ROOT


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for the crawler.

    Returns
    -------
    argparse.Namespace
        Parsed arguments including mode, emotions, pages and output dir.
    """
    # 中文说明：命令行参数：抓取模式、情绪列表、翻页范围、输出目录与请求超时
    p = argparse.ArgumentParser(description="Crawl LINE sticker images by emotion or showcase page")
    p.add_argument("--mode", type=str, choices=["query", "page"], default="query", help="query=emotion search with labels, page=showcase pages")
    p.add_argument("--emotions", type=str, nargs="+", default=list(EMOTIONS), help="Emotion queries (query mode); also the label columns")
    p.add_argument("--limit", type=int, default=LIMIT, help="Max packages per emotion search (query mode)")
    p.add_argument("--start-page", type=int, default=1, help="First showcase page, 1-based (page mode)")
    p.add_argument("--max-pages", type=int, default=1, help="Number of showcase pages to crawl (page mode)")
    p.add_argument("--flat", action="store_true", help="Page mode: save images directly in the output dir instead of image/")
    p.add_argument("--out-dir", type=str, default=None, help="Output directory (relative paths resolve against the repo root)")
    p.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: wait indefinitely)")
    p.add_argument("--no-progress", action="store_true", help="Disable the download progress bar")
    args = p.parse_args(argv)
    if args.start_page < 1:
        p.error("--start-page must be >= 1")
    if args.limit < 1:
        p.error("--limit must be >= 1")
    if args.max_pages < 1:
        p.error("--max-pages must be >= 1")
    return args


def resolve_out_dir(out_dir: Optional[str]) -> Path:
    """Default to ``<repo>/output``; relative paths are taken from the repo root."""
    if not out_dir:
        return OUTPUT_DIR
    path = Path(out_dir)
    if not path.is_absolute():
        path = REPO_ROOT / path
    return path


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point: run the selected pipeline, exit 1 on the first failure."""
    args = parse_args(argv)
    out_dir = resolve_out_dir(args.out_dir)
    sess = build_session()
    progress = not args.no_progress

    try:
        if args.mode == "query":
            result = run_query(sess, out_dir, emotions=args.emotions, limit=args.limit, timeout=args.timeout, progress=progress)
        else:
            pages = range(args.start_page, args.start_page + args.max_pages)
            result = run_showcase(sess, out_dir, pages, flat=args.flat, timeout=args.timeout, progress=progress)
    except CrawlError as exc:
        print(f"[Error] {exc}")
        sys.exit(1)
    finally:
        sess.close()

    print(
        f"[Done] packages={len(result['stickers'])} | downloaded={result['downloaded']} "
        f"| skipped={result['skipped']} | output={out_dir}"
    )


if __name__ == "__main__":
    main()
