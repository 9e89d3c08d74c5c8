"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/renderer.py
Renders a PDF page to a Pillow image with PyMuPDF.
"""

import logging

import fitz  # PyMuPDF
from PIL import Image

from pdfdedup.core.interfaces import PageRenderer
from pdfdedup.core.models import DEFAULT_DPI, RenderError

logger = logging.getLogger(__name__)


class PyMuPdfRenderer(PageRenderer):
    """
    Rasterizes pages at a fixed DPI into RGB images.
    Every PyMuPDF failure (corrupt file, missing page, I/O) surfaces as RenderError.
    """

    def __init__(self, dpi: int = DEFAULT_DPI):
        if dpi <= 0:
            raise ValueError("DPI must be positive")
        self.dpi = dpi

    def render(self, path: str, page_index: int = 0) -> Image.Image:
        try:
            with fitz.open(path) as doc:
                if page_index >= doc.page_count:
                    raise RenderError(path, f"page {page_index} out of range ({doc.page_count} pages)")
                page = doc.load_page(page_index)
                zoom = self.dpi / 72
                pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
                img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(path, str(e) or type(e).__name__) from e

        logger.debug(f"Rendered {path} page {page_index} at {self.dpi} DPI: {img.size[0]}x{img.size[1]}")
        return img
