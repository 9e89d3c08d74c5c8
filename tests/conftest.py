"""
Shared fixtures for pdfdedup tests.
Provides synthetic page images, an in-memory renderer and real PDF files.
"""
import os
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple, Union

import fitz  # PyMuPDF
import pytest
from PIL import Image

# Add src/ to sys.path so 'pdfdedup' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from pdfdedup.core.models import RenderError


def bits_image(bits: int) -> Image.Image:
    """
    8x8 grayscale image whose average hash is exactly `bits`:
    pixel i is white when bit i is set, black otherwise.
    (All 64 bits set hashes to 0, like any uniform image.)
    """
    img = Image.new("L", (8, 8), 0)
    img.putdata([255 if bits >> i & 1 else 0 for i in range(64)])
    return img


def banded_image(top: int, middle: int, bottom: int) -> Image.Image:
    """8x24 image whose three 8x8 bands hash to top, middle and bottom."""
    img = Image.new("L", (8, 24), 0)
    for offset, bits in enumerate((top, middle, bottom)):
        img.paste(bits_image(bits), (0, offset * 8))
    return img


class FakeRenderer:
    """In-memory PageRenderer keyed by file name."""

    def __init__(self, pages: Dict[str, Union[Image.Image, Exception]]):
        self.pages = pages
        self.calls: List[Tuple[str, int]] = []

    def render(self, path: str, page_index: int = 0) -> Image.Image:
        name = os.path.basename(path)
        self.calls.append((name, page_index))
        page = self.pages.get(name)
        if page is None:
            raise RenderError(path, "no such page")
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def pdf_folder(temp_dir):
    """
    Factory writing placeholder .pdf files (content irrelevant, used with FakeRenderer).
    Returns the folder path.
    """
    def _make(names: List[str]) -> Path:
        for name in names:
            (temp_dir / name).write_bytes(b"%PDF-1.4 placeholder")
        return temp_dir
    return _make


@pytest.fixture
def make_pdf():
    """
    Factory writing a real one-page PDF (200x300 pt, white) with black
    filled rectangles given as (x0, y0, x1, y1) in points.
    """
    def _make(path: Path, rects: List[Tuple[float, float, float, float]]) -> Path:
        doc = fitz.open()
        page = doc.new_page(width=200, height=300)
        for rect in rects:
            page.draw_rect(fitz.Rect(*rect), color=None, fill=(0, 0, 0))
        doc.save(str(path))
        doc.close()
        return path
    return _make


@pytest.fixture
def sample_pdfs(temp_dir, make_pdf):
    """
    a.pdf and b.pdf render identically (black block in the top third),
    c.pdf differs (black block in the bottom third).
    """
    source = temp_dir / "source"
    source.mkdir()
    make_pdf(source / "a.pdf", [(20, 10, 180, 90)])
    make_pdf(source / "b.pdf", [(20, 10, 180, 90)])
    make_pdf(source / "c.pdf", [(20, 210, 180, 290)])
    return source
