"""Line-based substring extraction used on the store's HTML pages."""

from typing import List


def extract_between(body: str, prefix: str, suffix: str) -> List[str]:
    """Collect the text enclosed by `prefix` and `suffix` on each line.

    Parameters
    ----------
    body : str
        Raw response body, split on ``\\n``.
    prefix, suffix : str
        Literals the trimmed line must start and end with, respectively.

    Returns
    -------
    List[str]
        Extracted values in line order. Duplicates are kept.
    """
    # 中文说明：逐行去除首尾空白后，仅当同时以前缀开头、以后缀结尾时截取中间部分
    found: List[str] = []
    min_len = len(prefix) + len(suffix)
    for line in body.split("\n"):
        s = line.strip()
        # 前后缀重叠的短行不算匹配
        if len(s) < min_len:
            continue
        if s.startswith(prefix) and s.endswith(suffix):
            found.append(s[len(prefix):len(s) - len(suffix)])
    return found
