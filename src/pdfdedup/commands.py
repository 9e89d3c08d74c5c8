"""
Unified command orchestrator for PDF deduplication.
This is the single source of business logic for both the CLI and library callers.
"""
import logging
import os
from typing import Callable, Dict, List, Optional

from pdfdedup.core.grouper import FingerprintGrouperImpl
from pdfdedup.core.hasher import FingerprintIndexer
from pdfdedup.core.interfaces import PageRenderer
from pdfdedup.core.models import (
    DEFAULT_DPI, ClusteringMode, DeduplicationParams, DeduplicationResult,
    DuplicateGroup, DuplicateLookup, FileHashIndex, MatchMode, RegionHashIndex)
from pdfdedup.core.renderer import PyMuPdfRenderer
from pdfdedup.core.scanner import PdfScannerImpl
from pdfdedup.services.duplicate_service import DuplicateService
from pdfdedup.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the whole workflow:
    1. List the PDF files of the source folder (sorted by name)
    2. Fingerprint the configured page of each file
    3. Group the fingerprints
    4. Copy one representative per group to the output folder

    Usage:
        params = DeduplicationParams(source_dir="~/scans/2021-01")
        command = DeduplicationCommand()
        result = command.execute(params)

        # Tests inject an in-memory renderer:
        command = DeduplicationCommand(renderer=FakeRenderer(images))
    """

    def __init__(self, renderer: Optional[PageRenderer] = None):
        self._renderer = renderer
        self._grouper = FingerprintGrouperImpl()
        self._skipped: List[str] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> DeduplicationResult:
        """
        Run the end-to-end flow.

        Args:
            params: Validated run parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            DeduplicationResult with groups, copied and skipped file names

        Raises:
            CopyError: If any representative cannot be copied. Nothing is rolled back.
        """
        indexer = self._indexer(params.dpi, params.page_index, params.workers)
        paths = PdfScannerImpl(params.source_dir).scan(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        if params.match_mode == MatchMode.PAGE:
            page_index = indexer.build_page_index(paths, stopped_flag, progress_callback)
            by_seed = self._grouper.group_duplicates(page_index, params.threshold, params.clustering)
            groups = list(by_seed.values())
            selected = DuplicateService.get_originals(page_index, by_seed)
        else:
            region_index = indexer.build_region_index(paths, stopped_flag, progress_callback)
            groups = self._grouper.group_region_wise(region_index, params.clustering)
            selected = DuplicateService.select_distinct(groups)
        self._skipped = list(indexer.skipped)

        copied = []
        if stopped_flag and stopped_flag():
            logger.debug("Run cancelled before copying")
        elif params.dry_run:
            logger.debug(f"Dry run: {len(selected)} files would be copied to {params.output_dir}")
        elif selected:
            copied = self.copy_distinct(params.source_dir, params.output_dir, selected)

        return DeduplicationResult(
            groups=groups,
            selected=selected,
            copied=copied,
            skipped=list(self._skipped),
            output_dir=params.output_dir
        )

    @staticmethod
    def copy_distinct(source_dir: str, output_dir: str, names: List[str]) -> List[str]:
        """
        Copies each named file from source_dir to output_dir, overwriting.
        A name is copied at most once. The first failure aborts the copy.
        """
        FileService.ensure_dir(output_dir)
        copied = []
        for name in names:
            if name in copied:
                continue
            FileService.copy_file(
                os.path.join(source_dir, name),
                os.path.join(output_dir, name),
                overwrite=True
            )
            copied.append(name)
            logger.debug(f"Copied {name} to {output_dir}")
        return copied

    def compute_pdf_hashes(
            self,
            folder: str,
            dpi: int = DEFAULT_DPI,
            page_index: int = 0,
            workers: int = 1
    ) -> FileHashIndex:
        """Whole-page fingerprint of one page (the first by default) of every PDF in folder."""
        indexer = self._indexer(dpi, page_index, workers)
        index = indexer.build_page_index(PdfScannerImpl(folder).scan())
        self._skipped = list(indexer.skipped)
        return index

    def compute_region_hashes(
            self,
            folder: str,
            dpi: int = DEFAULT_DPI,
            page_index: int = 0,
            workers: int = 1
    ) -> RegionHashIndex:
        """Region fingerprints of one page (the first by default) of every PDF in folder."""
        indexer = self._indexer(dpi, page_index, workers)
        index = indexer.build_region_index(PdfScannerImpl(folder).scan())
        self._skipped = list(indexer.skipped)
        return index

    def find_duplicates_for_file(
            self,
            folder: str,
            name: str,
            threshold: int,
            clustering: ClusteringMode = ClusteringMode.GREEDY,
            dpi: int = DEFAULT_DPI,
            page_index: int = 0,
            workers: int = 1
    ) -> List[str]:
        """
        Returns the whole-page duplicate group containing `name`, seed first.

        An empty list means either that the file has no duplicates or that it
        is not in the folder (or failed to render). Use lookup_file to tell
        those apart.
        """
        return self.lookup_file(folder, name, threshold, clustering, dpi, page_index, workers).files

    def lookup_file(
            self,
            folder: str,
            name: str,
            threshold: int,
            clustering: ClusteringMode = ClusteringMode.GREEDY,
            dpi: int = DEFAULT_DPI,
            page_index: int = 0,
            workers: int = 1
    ) -> DuplicateLookup:
        index = self.compute_pdf_hashes(folder, dpi, page_index, workers)
        groups: Dict[str, DuplicateGroup] = self._grouper.group_duplicates(index, threshold, clustering)
        return DuplicateService.lookup(index, groups, name)

    def get_skipped(self) -> List[str]:
        """Names of files that failed to render in the last run."""
        return self._skipped.copy()

    def _indexer(self, dpi: int, page_index: int = 0, workers: int = 1) -> FingerprintIndexer:
        renderer = self._renderer or PyMuPdfRenderer(dpi)
        return FingerprintIndexer(renderer, page_index=page_index, workers=workers)
