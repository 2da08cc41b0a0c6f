import tempfile
import unittest
from pathlib import Path

from textnet.etl.normalizers import normalize_line, strip_gutenberg_lines
from textnet.etl.readers import iter_text_files, read_lines
from textnet.shared.errors import MalformedInputError


class TestGutenbergStrip(unittest.TestCase):
    def test_slices_between_markers(self):
        lines = [
            "The Project Gutenberg eBook of Something",
            "*** START OF THE PROJECT GUTENBERG EBOOK SOMETHING ***",
            "CHAPTER I",
            "Body text.",
            "*** END OF THE PROJECT GUTENBERG EBOOK SOMETHING ***",
            "License boilerplate",
        ]
        self.assertEqual(strip_gutenberg_lines(lines), ["CHAPTER I", "Body text."])

    def test_plain_text_passes_through(self):
        lines = ["just", "text"]
        self.assertEqual(strip_gutenberg_lines(lines), lines)


class TestNormalizeLine(unittest.TestCase):
    def test_nfkc_and_rstrip(self):
        self.assertEqual(normalize_line("\ufb01ne day   "), "fine day")


class TestReaders(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_read_lines_utf8_with_bom(self):
        p = self.root / "novel.txt"
        p.write_bytes("\ufeffCHAPTER I\nIt was a dark night.\n".encode("utf-8"))
        self.assertEqual(read_lines(p), ["CHAPTER I", "It was a dark night."])

    def test_read_lines_rejects_invalid_utf8(self):
        p = self.root / "bad.txt"
        p.write_bytes(b"ok line\n\xff\xfe\xfa\n")
        with self.assertRaises(MalformedInputError):
            read_lines(p)

    def test_iter_text_files(self):
        (self.root / "b.txt").write_text("b", encoding="utf-8")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "notes.md").write_text("x", encoding="utf-8")
        names = [p.name for p in iter_text_files(self.root)]
        self.assertEqual(sorted(names), ["a.txt", "b.txt"])

    def test_iter_text_files_empty_dir_raises(self):
        with self.assertRaises(MalformedInputError):
            iter_text_files(self.root)


if __name__ == "__main__":
    unittest.main()
