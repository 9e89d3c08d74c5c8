"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Builds fingerprint indexes (file name -> fingerprint) for a list of PDF files.

Each file is rendered once through the injected PageRenderer. A file that
fails to render or to fingerprint is logged and left out of the index; the
batch carries on. With workers > 1 files are fingerprinted on a thread pool,
but the index is always assembled in the input order.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

from PIL import Image

from pdfdedup.core.fingerprint import average_hash64, region_hashes
from pdfdedup.core.interfaces import PageRenderer
from pdfdedup.core.models import FileHashIndex, RegionHashIndex

logger = logging.getLogger(__name__)


class FingerprintIndexer:
    """
    Computes whole-page and region-wise fingerprint indexes.

    Attributes:
        renderer: PageRenderer used to rasterize pages
        page_index: Page to fingerprint (0 = first page)
        workers: Number of files fingerprinted concurrently
    """

    def __init__(self, renderer: PageRenderer, page_index: int = 0, workers: int = 1):
        if workers < 1:
            raise ValueError("Workers must be at least 1")
        self.renderer = renderer
        self.page_index = page_index
        self.workers = workers
        self.skipped: List[str] = []

    def build_page_index(
            self,
            paths: List[str],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> FileHashIndex:
        """Map of file name to whole-page average hash."""
        return self._build(paths, average_hash64, 'page-hash', stopped_flag, progress_callback)

    def build_region_index(
            self,
            paths: List[str],
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> RegionHashIndex:
        """Map of file name to {top, middle, bottom} average hashes."""
        return self._build(paths, region_hashes, 'region-hash', stopped_flag, progress_callback)

    def _build(
            self,
            paths: List[str],
            compute: Callable[[Image.Image], Any],
            stage: str,
            stopped_flag: Optional[Callable[[], bool]],
            progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> Dict[str, Any]:
        self.skipped = []
        index: Dict[str, Any] = {}
        total = len(paths)

        def task(path: str) -> Tuple[str, Any]:
            if stopped_flag and stopped_flag():
                return path, None
            return path, self._fingerprint(path, compute)

        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(task, paths))
        else:
            results = []
            for path in paths:
                results.append(task(path))
                if progress_callback:
                    progress_callback(stage, len(results), total)

        if stopped_flag and stopped_flag():
            logger.debug(f"{stage} cancelled by user")
            return {}

        for path, fingerprint in results:
            name = os.path.basename(path)
            if fingerprint is None:
                self.skipped.append(name)
                continue
            index[name] = fingerprint

        if progress_callback and self.workers > 1:
            progress_callback(stage, total, total)

        logger.debug(f"{stage}: indexed {len(index)} of {total} files, skipped {len(self.skipped)}")
        return index

    def _fingerprint(self, path: str, compute: Callable[[Image.Image], Any]) -> Optional[Any]:
        try:
            img = self.renderer.render(path, self.page_index)
            return compute(img)
        except Exception as e:
            logger.error(f"Failed to process {os.path.basename(path)}: {e}")
            return None
