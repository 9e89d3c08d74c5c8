"""
Core fingerprinting engine: scanner, renderer, fingerprints, indexer and grouper.

This package contains the algorithmic foundation of pdfdedup:
- PdfScannerImpl: name-sorted enumeration of the PDF files of a folder
- PyMuPdfRenderer: first-page rasterization through PyMuPDF
- average_hash64 / hamming_distance / region_hashes: 64-bit aHash fingerprints
- FingerprintIndexer: file name -> fingerprint indexes, skipping unrenderable files
- FingerprintGrouperImpl: greedy (or transitive) duplicate grouping
- Models: DuplicateGroup, DeduplicationParams and errors

Nothing here prints to the console; reporting belongs to the CLI.
"""

from .scanner import PdfScannerImpl
from .renderer import PyMuPdfRenderer
from .fingerprint import (
    average_hash64, hamming_distance, split_regions, region_hashes,
    compare_region_hashes, regions_match)
from .hasher import FingerprintIndexer
from .grouper import FingerprintGrouperImpl, find_group
from .models import (
    Region, MatchMode, ClusteringMode, LookupStatus, DuplicateGroup, DuplicateLookup,
    DeduplicationParams, DeduplicationResult, PdfDedupError, RenderError, CopyError)

__all__ = [
    "PdfScannerImpl",
    "PyMuPdfRenderer",
    "average_hash64",
    "hamming_distance",
    "split_regions",
    "region_hashes",
    "compare_region_hashes",
    "regions_match",
    "FingerprintIndexer",
    "FingerprintGrouperImpl",
    "find_group",
    "Region",
    "MatchMode",
    "ClusteringMode",
    "LookupStatus",
    "DuplicateGroup",
    "DuplicateLookup",
    "DeduplicationParams",
    "DeduplicationResult",
    "PdfDedupError",
    "RenderError",
    "CopyError",
]
