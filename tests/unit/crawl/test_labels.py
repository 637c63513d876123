"""Label matrix and CSV rows."""

import tempfile
import unittest
from pathlib import Path

from sticker_crawler.crawl.labels import build_label_matrix, format_bool, label_rows, write_csv
from sticker_crawler.crawl.settings import EMOTIONS


class TestLabelMatrix(unittest.TestCase):

    def test_image_under_two_emotions_gets_six_rows(self):
        emotion_packages = {e: [] for e in EMOTIONS}
        emotion_packages["Happy"] = ["P"]
        emotion_packages["Sad"] = ["P"]
        sticker_ids = {"P": ["X"]}

        rows = label_rows(build_label_matrix(emotion_packages, sticker_ids, EMOTIONS))

        x_rows = [r for r in rows if r[0] == "P-X.png"]
        self.assertEqual(len(x_rows), 6)
        flags = {r[1]: r[2] for r in x_rows}
        self.assertEqual(flags["Happy"], "1")
        self.assertEqual(flags["Sad"], "1")
        for emotion in ("Fearful", "Angry", "Surprised", "Disgusted"):
            self.assertEqual(flags[emotion], "0")

    def test_matrix_is_rectangular_and_only_has_enumerated_images(self):
        emotion_packages = {"Happy": ["A"], "Sad": ["B"], "Angry": []}
        sticker_ids = {"A": ["1", "2"], "B": ["3"]}

        matrix = build_label_matrix(emotion_packages, sticker_ids, ["Happy", "Sad", "Angry"])

        self.assertEqual(set(matrix), {"A-1.png", "A-2.png", "B-3.png"})
        for flags in matrix.values():
            self.assertEqual(set(flags), {"Happy", "Sad", "Angry"})
        self.assertEqual(matrix["B-3.png"], {"Happy": False, "Sad": True, "Angry": False})

    def test_package_without_stickers_adds_no_rows(self):
        matrix = build_label_matrix({"Happy": ["A"]}, {"A": []}, ["Happy"])
        self.assertEqual(matrix, {})

    def test_columns_default_to_listed_emotions(self):
        matrix = build_label_matrix({"Happy": ["A"], "Sad": []}, {"A": ["1"]})
        self.assertEqual(matrix, {"A-1.png": {"Happy": True, "Sad": False}})

    def test_unknown_emotion_rejected(self):
        with self.assertRaises(ValueError):
            build_label_matrix({"Bored": ["A"]}, {"A": ["1"]}, ["Happy"])

    def test_rows_sorted_by_image_then_emotion(self):
        matrix = {
            "b.png": {"Sad": True, "Happy": False},
            "a.png": {"Sad": False, "Happy": True},
        }
        self.assertEqual(
            label_rows(matrix),
            [
                ["a.png", "Happy", "1"],
                ["a.png", "Sad", "0"],
                ["b.png", "Happy", "0"],
                ["b.png", "Sad", "1"],
            ],
        )

    def test_format_bool(self):
        self.assertEqual(format_bool(True), "1")
        self.assertEqual(format_bool(False), "0")


class TestWriteCsv(unittest.TestCase):

    def test_headerless_rows(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "label.csv"
            write_csv(path, [["a.png", "Happy", "1"], ["a.png", "Sad", "0"]])
            self.assertEqual(path.read_text(encoding="utf-8"), "a.png,Happy,1\na.png,Sad,0\n")


if __name__ == "__main__":
    unittest.main(verbosity=2)
