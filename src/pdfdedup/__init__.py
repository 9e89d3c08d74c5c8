"""
pdfdedup — find near-duplicate PDF documents by first-page fingerprint.

Core features:
- 64-bit average hash (aHash) of the rendered first page
- Two criteria: whole-page Hamming threshold, or exact match of the top, middle and bottom thirds
- Deterministic greedy grouping over name-sorted files, with an optional transitive mode
- Copies one representative per group to a separate folder; source files are never touched
- CLI interface for headless usage
"""

# Get version
from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("pdfdedup")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from pdfdedup.commands import DeduplicationCommand
from pdfdedup.core import (
    DeduplicationParams, DeduplicationResult, DuplicateGroup, DuplicateLookup,
    MatchMode, ClusteringMode, LookupStatus, RenderError, CopyError)
from pdfdedup.services import DuplicateService
from pdfdedup.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationResult",
    "DuplicateGroup",
    "DuplicateLookup",
    "MatchMode",
    "ClusteringMode",
    "LookupStatus",
    "RenderError",
    "CopyError",
    "DuplicateService",
    "FileService",
    "__version__",
]
