"""
Summarize a label.csv produced by the query-mode crawl.

Reads the headerless ``image,emotion,flag`` rows, prints per-emotion positive
counts and writes ``label_counts.csv`` (emotion, count, proportion) next to
the input. With ``--plot`` a bar chart ``label_counts.png`` is saved too.

Usage:
    python -m sticker_crawler.crawl.label_stats [--labels output/label.csv] [--plot]
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from sticker_crawler.crawl.settings import LABEL_FILE, OUTPUT_DIR

COLUMNS = ["image", "emotion", "flag"]


def load_labels(path: Path) -> pd.DataFrame:
    """Load label rows; `flag` is read as int (0/1)."""
    # 中文说明：label.csv 无表头，按固定三列读取；flag 统一转为整数
    df = pd.read_csv(path, header=None, names=COLUMNS, dtype={"image": str, "emotion": str, "flag": int})
    if df.empty:
        raise ValueError(f"no label rows in {path}")
    return df


def summarize(df: pd.DataFrame) -> Dict[str, Any]:
    """Compute image count, per-emotion positives and multi-label images."""
    positives = df[df["flag"] == 1]
    # 中文说明：保留所有情绪（即使计数为 0），按计数降序、同计数按名称排序
    counts = (
        positives.groupby("emotion").size()
        .reindex(sorted(df["emotion"].unique()), fill_value=0)
    )
    counts = counts.sort_values(ascending=False, kind="stable")
    per_image = positives.groupby("image").size()
    total = int(counts.sum())
    return {
        "images": int(df["image"].nunique()),
        "counts": counts,
        "proportions": counts / total if total else counts.astype(float),
        "multi_label": int((per_image > 1).sum()),
    }


def write_counts(summary: Dict[str, Any], out_csv: Path) -> None:
    counts_df = summary["counts"].rename_axis("emotion").reset_index(name="count")
    counts_df["proportion"] = summary["proportions"].values
    counts_df.to_csv(out_csv, index=False, encoding="utf-8")


def plot_counts(summary: Dict[str, Any], out_png: Path) -> None:
    # 延迟导入：只有需要画图时才加载 matplotlib
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    counts = summary["counts"]
    plt.figure(figsize=(8, 5))
    plt.bar(list(counts.index), list(counts.values))
    plt.title(f"Stickers per emotion ({summary['images']} images)")
    plt.ylabel("images")
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Summarize sticker emotion labels")
    p.add_argument("--labels", type=str, default=str(OUTPUT_DIR / LABEL_FILE), help="Path to label.csv")
    p.add_argument("--plot", action="store_true", help="Also save a bar chart next to the labels")
    return p.parse_args(argv)


def main(argv: Optional[list] = None) -> None:
    args = parse_args(argv)
    path = Path(args.labels)
    try:
        summary = summarize(load_labels(path))
    except (OSError, ValueError) as exc:
        # 中文说明：空文件或缺失文件与爬虫 CLI 一致，打印错误并以状态码 1 退出
        print(f"[Error] {exc}")
        sys.exit(1)

    print(f"[Stats] images: {summary['images']} | multi-label: {summary['multi_label']}")
    for emotion, count in summary["counts"].items():
        print(f"  {emotion}: {int(count)}")

    out_csv = path.parent / "label_counts.csv"
    write_counts(summary, out_csv)
    print(f"[Stats] counts CSV: {out_csv}")
    if args.plot:
        out_png = path.parent / "label_counts.png"
        plot_counts(summary, out_png)
        print(f"[Stats] chart: {out_png}")


if __name__ == "__main__":
    main()
