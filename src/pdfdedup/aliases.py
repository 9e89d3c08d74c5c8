from pdfdedup.core.models import ClusteringMode, MatchMode

MATCH_MODE_ALIASES = {
    "region": MatchMode.REGION,
    "page": MatchMode.PAGE,
}

MATCH_MODE_CHOICES = list(MATCH_MODE_ALIASES.keys())

MATCH_MODE_HELP_TEXT = (
    "Duplicate criterion:\n"
    "  region     : Top, middle and bottom thirds of the first page must match exactly\n"
    "  page       : Whole first page within --threshold differing bits\n"
    "Example    : %(prog)s -i ~/scans --mode page -t 8\n"
)

CLUSTERING_ALIASES = {
    "greedy": ClusteringMode.GREEDY,
    "transitive": ClusteringMode.TRANSITIVE,
}

CLUSTERING_CHOICES = list(CLUSTERING_ALIASES.keys())

CLUSTERING_HELP_TEXT = (
    "How matches form groups:\n"
    "  greedy     : Each file is compared with the group's first file only (default)\n"
    "  transitive : Files joined by any chain of matches share a group\n"
)

EPILOG_TEXT = """
Examples:
  Copy one file per group of visually identical PDFs to <parent>/distinct_files
  %(prog)s -i ~/scans/2021-01

  Use whole-page hashes with a tolerance of 8 bits and a custom output folder
  %(prog)s -i ~/scans/2021-01 -o ~/scans/unique --mode page -t 8

  Only report groups, copy nothing
  %(prog)s -i ~/scans/2021-01 --dry-run

  Show the duplicate group of one file
  %(prog)s -i ~/scans/2021-01 --find invoice.pdf -t 5
"""
