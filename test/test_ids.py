"""Tests for arXiv identifier normalization."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ArxivQuery.sources.arxiv.ids import normalize_arxiv_id


class TestNormalizeArxivId(unittest.TestCase):
    def test_abs_url(self) -> None:
        self.assertEqual(normalize_arxiv_id("http://arxiv.org/abs/2401.00001v2"), "2401.00001")

    def test_pdf_url_keeps_version_when_asked(self) -> None:
        self.assertEqual(
            normalize_arxiv_id("https://arxiv.org/pdf/2401.00001v3.pdf", keep_version=True),
            "2401.00001v3",
        )

    def test_old_style_id(self) -> None:
        self.assertEqual(normalize_arxiv_id("http://arxiv.org/abs/hep-th/9901001v1"), "hep-th/9901001")

    def test_bare_id(self) -> None:
        self.assertEqual(normalize_arxiv_id(" 2401.00001v1 "), "2401.00001")

    def test_empty(self) -> None:
        self.assertEqual(normalize_arxiv_id(""), "")


if __name__ == "__main__":
    unittest.main()
