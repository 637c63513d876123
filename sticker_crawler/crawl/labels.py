"""
Label aggregation for query mode.

Builds, for every enumerated sticker image, a full row of emotion flags and
writes it out as ``image,emotion,flag`` CSV rows without a header.
"""

import csv
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from sticker_crawler.crawl.download import ensure_dir, filename
from sticker_crawler.crawl.errors import StorageError

LabelMatrix = Dict[str, Dict[str, bool]]


def format_bool(b: bool) -> str:
    """Convert a boolean to "1" or "0"."""
    return "1" if b else "0"


def build_label_matrix(
    emotion_packages: Mapping[str, Sequence[str]],
    sticker_ids: Mapping[str, Sequence[str]],
    emotions: Optional[Sequence[str]] = None,
) -> LabelMatrix:
    """Map each image name to its presence flag under every emotion.

    Parameters
    ----------
    emotion_packages : Mapping[str, Sequence[str]]
        Emotion -> package IDs, as produced by the listing phase.
    sticker_ids : Mapping[str, Sequence[str]]
        Package ID -> sticker IDs, as produced by the resolve phase.
    emotions : Optional[Sequence[str]]
        The full emotion set (matrix columns). Defaults to the keys of
        `emotion_packages`.

    Returns
    -------
    LabelMatrix
        Image name -> {emotion: flag}. Every row carries every emotion.
    """
    columns = list(emotions) if emotions is not None else list(emotion_packages)
    unknown = [e for e in emotion_packages if e not in columns]
    if unknown:
        raise ValueError(f"emotions not in label set: {unknown}")

    matrix: LabelMatrix = {}
    for emotion, package_ids in emotion_packages.items():
        for package_id in package_ids:
            for sticker_id in sticker_ids.get(package_id, []):
                image = filename(package_id, sticker_id)
                # 中文说明：首次出现的图片先补齐全部情绪为 False，保证矩阵是满的
                if image not in matrix:
                    matrix[image] = {e: False for e in columns}
                matrix[image][emotion] = True
    return matrix


def label_rows(matrix: LabelMatrix) -> List[List[str]]:
    """Flatten the matrix into rows sorted by (image, emotion)."""
    rows = [
        [image, emotion, format_bool(flag)]
        for image, flags in matrix.items()
        for emotion, flag in flags.items()
    ]
    rows.sort(key=lambda r: (r[0], r[1]))
    return rows


def write_csv(path: Path, rows: List[List[str]]) -> None:
    """Write all rows to `path` (no header)."""
    ensure_dir(path.parent)
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f, lineterminator="\n").writerows(rows)
    except OSError as exc:
        raise StorageError(f"failed to write csv to {path}: {exc}") from exc
