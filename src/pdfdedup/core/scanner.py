"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Enumerates the PDF files of a single folder.
Features:
- Uses pathlib.Path for cross-platform path handling
- Case-insensitive ".pdf" suffix filter
- Non-recursive: only the folder's own files are candidates
- Results sorted by file name, so grouping is reproducible across platforms
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from pdfdedup.core.interfaces import FileScanner

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


class PdfScannerImpl(FileScanner):
    """
    Lists PDF files in a folder.

    Attributes:
        root_dir: Folder to list
    """

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[str]:
        """
        Returns the paths of all PDF files in root_dir, sorted by name.
        A missing or unreadable folder yields an empty list.
        """
        logger.debug(f"Scanning directory: {self.root_dir}")

        if stopped_flag and stopped_flag():
            logger.debug("Scan cancelled before start")
            return []

        root_path = Path(self.root_dir)
        if not root_path.is_dir():
            logger.warning(f"Not a directory or does not exist: {self.root_dir}")
            return []

        found_files = []
        try:
            for path in root_path.iterdir():
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    return []
                if self._is_pdf(path):
                    found_files.append(path)
        except PermissionError as pe:
            logger.warning(f"Permission denied during scan: {pe}")
            return []

        found_files.sort(key=lambda p: p.name)

        if progress_callback:
            progress_callback('scanning', len(found_files), None)

        if not found_files:
            logger.warning(f"No PDF files found in {self.root_dir}")
        logger.debug(f"Scan completed. Found {len(found_files)} PDF files.")
        return [str(p) for p in found_files]

    @staticmethod
    def _is_pdf(path: Path) -> bool:
        try:
            return path.suffix.lower() == PDF_EXTENSION and path.is_file()
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return False
