"""Line-based prefix/suffix extraction."""

import unittest

from sticker_crawler.crawl.markup import extract_between
from sticker_crawler.crawl.settings import STICKER_PREFIX, STICKER_SUFFIX


def sticker_line(sid, indent="    "):
    return f"{indent}{STICKER_PREFIX}{sid}{STICKER_SUFFIX}"


class TestExtractBetween(unittest.TestCase):

    def test_valid_lines_extracted_in_order_and_decoys_ignored(self):
        lines = [
            "<html>",
            sticker_line("111"),
            f"{STICKER_PREFIX}decoy_prefix_only\">",
            sticker_line("222", indent="\t"),
            f"<div>decoy_suffix_only{STICKER_SUFFIX}",
            f"<li>{STICKER_PREFIX}decoy_inside{STICKER_SUFFIX}</li>",
            "plain text decoy_neither",
            sticker_line("333", indent=""),
            "</html>",
        ]
        ids = extract_between("\n".join(lines), STICKER_PREFIX, STICKER_SUFFIX)
        self.assertEqual(ids, ["111", "222", "333"])
        for got in ids:
            self.assertNotIn("decoy", got)

    def test_duplicates_are_kept(self):
        body = "\n".join([sticker_line("7"), sticker_line("8"), sticker_line("7")])
        self.assertEqual(extract_between(body, STICKER_PREFIX, STICKER_SUFFIX), ["7", "8", "7"])

    def test_crlf_and_trailing_whitespace_are_trimmed(self):
        body = sticker_line("42") + "  \r\n" + sticker_line("43") + "\r\n"
        self.assertEqual(extract_between(body, STICKER_PREFIX, STICKER_SUFFIX), ["42", "43"])

    def test_overlapping_prefix_and_suffix_do_not_match(self):
        self.assertEqual(extract_between("<ab>", "<ab", "b>"), [])

    def test_adjacent_prefix_and_suffix_give_empty_id(self):
        self.assertEqual(extract_between("<a></a>", "<a>", "</a>"), [""])

    def test_empty_body(self):
        self.assertEqual(extract_between("", STICKER_PREFIX, STICKER_SUFFIX), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
