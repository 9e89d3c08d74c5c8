#!/usr/bin/env python3
"""
pdfdedup CLI — find visually duplicate PDFs and copy one file per group.
Source files are never modified or deleted; representatives are copied to a
separate output folder.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from pdfdedup.aliases import (
    CLUSTERING_ALIASES, CLUSTERING_CHOICES, CLUSTERING_HELP_TEXT,
    EPILOG_TEXT, MATCH_MODE_ALIASES, MATCH_MODE_CHOICES, MATCH_MODE_HELP_TEXT
)
from pdfdedup.commands import DeduplicationCommand
from pdfdedup.core.interfaces import PageRenderer
from pdfdedup.core.models import (
    DEFAULT_DPI, DEFAULT_THRESHOLD, CopyError, DeduplicationParams,
    DeduplicationResult, DuplicateGroup, LookupStatus, MatchMode)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, renderer: Optional[PageRenderer] = None):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.renderer = renderer

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure") and (stream.encoding or "").lower() != "utf-8":
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="pdfdedup — find near-duplicate PDFs by first-page fingerprint",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Folder with the PDF files to compare"
        )
        parser.add_argument(
            "--output", "-o",
            default=None,
            type=str,
            help="Folder receiving one file per group. Default: <parent of input>/distinct_files"
        )

        # Matching options
        parser.add_argument(
            "--mode",
            choices=MATCH_MODE_CHOICES,
            default="region",
            type=str,
            help=MATCH_MODE_HELP_TEXT
        )
        parser.add_argument(
            "--threshold", "-t",
            default=DEFAULT_THRESHOLD,
            type=int,
            metavar='',
            help=f"Maximum differing bits for whole-page matches (0-64). Default: {DEFAULT_THRESHOLD}"
        )
        parser.add_argument(
            "--clustering",
            choices=CLUSTERING_CHOICES,
            default="greedy",
            type=str,
            help=CLUSTERING_HELP_TEXT
        )
        parser.add_argument(
            "--dpi",
            default=DEFAULT_DPI,
            type=int,
            metavar='',
            help=f"Rendering resolution. Default: {DEFAULT_DPI}"
        )
        parser.add_argument(
            "--page",
            default=0,
            type=int,
            metavar='',
            help="Page to fingerprint, 0-based. Default: 0"
        )
        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='',
            help="Files fingerprinted in parallel. Default: 1"
        )

        # Actions
        parser.add_argument(
            "--find",
            default=None,
            type=str,
            metavar='NAME',
            help="Print the whole-page duplicate group of one file and exit"
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report groups without copying anything"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and progress"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if not 0 <= args.threshold <= 64:
            self.error_exit("Threshold must be between 0 and 64")
        if args.dpi <= 0:
            self.error_exit("DPI must be positive")
        if args.page < 0:
            self.error_exit("Page index cannot be negative")
        if args.workers < 1:
            self.error_exit("Workers must be at least 1")

        # A missing folder is not fatal: it simply yields no files
        root_path = Path(args.input).expanduser().resolve()
        if not root_path.exists():
            self.warning(f"Directory not found: {args.input}")
        elif not root_path.is_dir():
            self.warning(f"Path is not a directory: {args.input}")

        if args.output:
            out_path = Path(args.output).expanduser().resolve()
            if out_path == root_path:
                self.error_exit("Output directory must differ from the input directory")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                source_dir=str(Path(args.input).expanduser().resolve()),
                output_dir=str(Path(args.output).expanduser().resolve()) if args.output else None,
                threshold=args.threshold,
                dpi=args.dpi,
                page_index=args.page,
                match_mode=MATCH_MODE_ALIASES[args.mode],
                clustering=CLUSTERING_ALIASES[args.clustering],
                workers=args.workers,
                dry_run=args.dry_run
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def run_deduplication(self, params: DeduplicationParams) -> DeduplicationResult:
        """Execute the deduplication workflow. A failed copy is fatal."""
        command = DeduplicationCommand(renderer=self.renderer)
        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except CopyError as e:
            self.error_exit(f"Copy failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
        return result

    def output_groups(self, groups: List[DuplicateGroup], params: DeduplicationParams) -> None:
        """Print every group that collapses two or more files."""
        if self.quiet:
            return

        if params.match_mode == MatchMode.PAGE:
            print(f"Whole-page duplicate groups (threshold {params.threshold}):\n")
        else:
            print("Region-wise duplicate groups (all regions must match):\n")

        if not any(g.is_duplicate() for g in groups):
            print("No duplicate groups found.")
            return

        # Numbering counts every group, single-file groups included
        for idx, group in enumerate(groups, 1):
            if group.is_duplicate():
                print(f"Group {idx} ({len(group)}): [{', '.join(group.files)}]")

    def output_copied(self, result: DeduplicationResult, params: DeduplicationParams) -> None:
        if self.quiet:
            return

        if params.dry_run:
            print(f"\nDry run: {len(result.selected)} distinct files would be copied to '{result.output_dir}':")
            for name in result.selected:
                print(f"  {name}")
            return

        print(f"\nCopying distinct files to '{result.output_dir}'...")
        print("Copied files:")
        for name in result.copied:
            print(f"  {name}")

    def output_skipped(self, result: DeduplicationResult) -> None:
        if result.skipped:
            self.warning(f"{len(result.skipped)} file(s) could not be rendered and were ignored: "
                         f"{', '.join(result.skipped)}")

    def run_find(self, args: argparse.Namespace, params: DeduplicationParams) -> None:
        """Print the duplicate group of a single file."""
        command = DeduplicationCommand(renderer=self.renderer)
        lookup = command.lookup_file(
            params.source_dir, args.find, params.threshold, params.clustering,
            dpi=params.dpi, page_index=params.page_index, workers=params.workers
        )

        if lookup.status == LookupStatus.FOUND:
            print(f"Duplicates of {args.find} ({len(lookup.files)}):")
            for name in lookup.files:
                print(f"  {name}")
        elif lookup.status == LookupStatus.NO_DUPLICATES:
            print(f"No duplicates found for {args.find}.")
        else:
            self.warning(f"File not found or could not be rendered: {args.find}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if args.find:
            self.run_find(args, params)
            return

        if not self.quiet:
            print(f"Scanning directory: {params.source_dir}")

        result = self.run_deduplication(params)
        self.output_groups(result.groups, params)
        self.output_copied(result, params)
        self.output_skipped(result)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
