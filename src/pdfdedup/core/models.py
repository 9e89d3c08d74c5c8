"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models, enums and errors for PDF fingerprinting and duplicate grouping.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


# =============================
# Enums
# =============================

class Region(str, Enum):
    """Vertical bands of a rendered page."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @classmethod
    def get_all(cls):
        return [cls.TOP, cls.MIDDLE, cls.BOTTOM]


class MatchMode(Enum):
    """
    Match criterion used by the end-to-end flow.
    """
    REGION = "region"
    PAGE = "page"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            MatchMode.REGION: "Region-wise (exact)",
            MatchMode.PAGE: "Whole page (threshold)",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            MatchMode.REGION:
                "Top, middle and bottom bands must all match exactly",
            MatchMode.PAGE:
                "Whole-page hashes within the Hamming threshold",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ClusteringMode(Enum):
    """
    GREEDY: every match is tested against the group seed only, in index order.
    TRANSITIVE: connected components of the similarity graph.
    """
    GREEDY = "greedy"
    TRANSITIVE = "transitive"

    def __repr__(self) -> str:
        return self.value


class LookupStatus(Enum):
    FOUND = "found"
    NO_DUPLICATES = "no-duplicates"
    NOT_FOUND = "not-found"


# =============================
# Errors
# =============================

class PdfDedupError(Exception):
    """Base class for all pdfdedup errors."""


class RenderError(PdfDedupError):
    """A PDF page could not be rendered to an image."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{os.path.basename(path)}: {message}")


class CopyError(PdfDedupError):
    """A representative file could not be copied to the output directory."""


# ======================
#  Core Data Models
# ======================

# 64-bit average hash stored as a plain int
Fingerprint = int
RegionFingerprintSet = Dict[str, Fingerprint]
FileHashIndex = Dict[str, Optional[Fingerprint]]
RegionHashIndex = Dict[str, Optional[RegionFingerprintSet]]


@dataclass
class DuplicateGroup:
    """
    An ordered group of file names. The first file is the seed (the original),
    the rest matched it.
    """
    files: List[str] = field(default_factory=list)

    @property
    def seed(self) -> Optional[str]:
        return self.files[0] if self.files else None

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    def add_file(self, name: str) -> None:
        if name in self.files:
            raise ValueError(f"{name} is already in this group.")
        self.files.append(name)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def __contains__(self, name: object) -> bool:
        return name in self.files

    def __repr__(self):
        return f"<DuplicateGroup seed={self.seed}, count={len(self.files)}>"


@dataclass
class DuplicateLookup:
    """Result of looking up the duplicate group of a single file."""
    status: LookupStatus
    files: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status != LookupStatus.NOT_FOUND


@dataclass
class DeduplicationResult:
    """Outcome of one end-to-end run."""
    groups: List[DuplicateGroup]
    selected: List[str]
    copied: List[str]
    skipped: List[str]
    output_dir: str

    @property
    def duplicate_groups(self) -> List[DuplicateGroup]:
        """Only the groups that actually collapsed two or more files."""
        return [g for g in self.groups if g.is_duplicate()]


"""
DTO for deduplication parameters with built-in validation.
Interface-agnostic, shared by the CLI and library callers.
"""

DEFAULT_THRESHOLD = 5
DEFAULT_DPI = 150
DISTINCT_DIR_NAME = "distinct_files"


@dataclass
class DeduplicationParams:
    """Parameters for one deduplication run with validation."""
    source_dir: str
    output_dir: Optional[str] = None
    threshold: int = DEFAULT_THRESHOLD
    dpi: int = DEFAULT_DPI
    page_index: int = 0
    match_mode: MatchMode = MatchMode.REGION
    clustering: ClusteringMode = ClusteringMode.GREEDY
    workers: int = 1
    dry_run: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source_dir:
            raise ValueError("Source directory cannot be empty")

        if self.threshold < 0:
            raise ValueError("Threshold cannot be negative")

        if self.dpi <= 0:
            raise ValueError("DPI must be positive")

        if self.page_index < 0:
            raise ValueError("Page index cannot be negative")

        if self.workers < 1:
            raise ValueError("Workers must be at least 1")

        if not self.output_dir:
            # Sibling of the source folder, as in <parent>/distinct_files
            parent = os.path.dirname(os.path.abspath(self.source_dir))
            self.output_dir = os.path.join(parent, DISTINCT_DIR_NAME)
