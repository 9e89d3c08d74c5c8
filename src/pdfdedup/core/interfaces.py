"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the fingerprinting pipeline.
Structural typing keeps the engine independent from PDF parsing, so tests can
feed synthetic in-memory images instead of real documents.

Key Components:
---------------
- PageRenderer: Renders one page of a PDF to a Pillow image.
- FileScanner: Enumerates the PDF files of a folder in a stable order.
- FingerprintGrouper: Partitions fingerprint indexes into duplicate groups.
"""

from typing import Callable, Dict, List, Optional, Protocol

from PIL import Image

from pdfdedup.core.models import (
    ClusteringMode,
    DuplicateGroup,
    FileHashIndex,
    RegionHashIndex,
)


# ===== Interfaces =====

class PageRenderer(Protocol):
    """
    Interface for rasterizing a PDF page.

    Implementations must raise RenderError instead of leaking parser-specific
    exceptions into the batch loop.
    """
    def render(self, path: str, page_index: int = 0) -> Image.Image:
        ...


class FileScanner(Protocol):
    """
    Interface for enumerating candidate PDF files.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[str]:
        """
        Returns:
            Paths of the PDF files, sorted by file name.
        """
        ...


class FingerprintGrouper(Protocol):
    """
    Interface for grouping files by fingerprint similarity.
    """
    def group_duplicates(
        self,
        index: FileHashIndex,
        threshold: int,
        clustering: ClusteringMode = ClusteringMode.GREEDY
    ) -> Dict[str, DuplicateGroup]:
        """Group whole-page hashes within a Hamming threshold, keyed by seed."""
        ...

    def group_region_wise(
        self,
        index: RegionHashIndex,
        clustering: ClusteringMode = ClusteringMode.GREEDY
    ) -> List[DuplicateGroup]:
        """Group files whose three region hashes are all identical."""
        ...
