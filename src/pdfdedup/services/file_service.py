"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File operations for the distinct-files output folder.
"""
import shutil
from pathlib import Path

from pdfdedup.core.models import CopyError


class FileService:
    """
    Filesystem side effects of a run. Failures are raised as CopyError.
    """

    @staticmethod
    def ensure_dir(dir_path: str) -> Path:
        """Creates the directory (and parents) if it does not exist."""
        path = Path(dir_path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CopyError(f"Failed to create output directory {path}: {e}") from e
        return path

    @staticmethod
    def copy_file(src: str, dest: str, overwrite: bool = True) -> Path:
        """
        Copies src to dest, keeping file metadata.

        Raises:
            CopyError: If src is missing, dest exists and overwrite is False,
                or the copy itself fails.
        """
        src_path = Path(src)
        dest_path = Path(dest)

        if not src_path.is_file():
            raise CopyError(f"File not found: {src_path}")

        if dest_path.exists() and not overwrite:
            raise CopyError(f"Destination already exists: {dest_path}")

        try:
            shutil.copy2(src_path, dest_path)
        except OSError as e:
            raise CopyError(f"Failed to copy {src_path.name}: {e}") from e
        return dest_path
