"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partitions fingerprint indexes into duplicate groups.

Grouping is defined over the iteration order of the index. In the default
GREEDY mode each not-yet-consumed file seeds a group and absorbs every later
unconsumed file that matches the seed. Matches are never chained, so
a~b and b~c with a!~c still puts b with a and leaves c to seed its own group.
TRANSITIVE mode merges connected components of the match graph instead.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pdfdedup.core.fingerprint import hamming_distance, regions_match
from pdfdedup.core.interfaces import FingerprintGrouper
from pdfdedup.core.models import (
    ClusteringMode,
    DuplicateGroup,
    FileHashIndex,
    RegionHashIndex,
)

logger = logging.getLogger(__name__)


class FingerprintGrouperImpl(FingerprintGrouper):
    """
    Groups files by whole-page hash distance or by exact region-wise match.
    """

    def group_duplicates(
        self,
        index: FileHashIndex,
        threshold: int,
        clustering: ClusteringMode = ClusteringMode.GREEDY
    ) -> Dict[str, DuplicateGroup]:
        """
        Groups files whose whole-page hashes are within `threshold` bits.

        Returns:
            Dict[seed, DuplicateGroup], only groups with 2+ files.
        """
        if threshold < 0:
            raise ValueError("Threshold cannot be negative")

        groups = self._cluster(
            index,
            lambda a, b: hamming_distance(a, b) <= threshold,
            clustering
        )
        result = {g.seed: g for g in groups if g.is_duplicate()}
        logger.debug(f"Whole-page grouping (threshold={threshold}): {len(result)} duplicate groups")
        return result

    def group_region_wise(
        self,
        index: RegionHashIndex,
        clustering: ClusteringMode = ClusteringMode.GREEDY
    ) -> List[DuplicateGroup]:
        """
        Groups files whose top, middle and bottom hashes are all identical.

        Returns:
            List[DuplicateGroup] covering every fingerprinted file, singletons included.
        """
        groups = self._cluster(index, regions_match, clustering)
        logger.debug(f"Region-wise grouping: {len(groups)} groups")
        return groups

    @staticmethod
    def _cluster(
        index: Dict[str, Any],
        matches: Callable[[Any, Any], bool],
        clustering: ClusteringMode
    ) -> List[DuplicateGroup]:
        """
        Helper dispatching to the selected clustering policy.
        Files without a fingerprint (None) are dropped before clustering.
        """
        names = [name for name, fp in index.items() if fp is not None]
        if clustering == ClusteringMode.TRANSITIVE:
            return FingerprintGrouperImpl._transitive(names, index, matches)
        return FingerprintGrouperImpl._greedy(names, index, matches)

    @staticmethod
    def _greedy(
        names: List[str],
        index: Dict[str, Any],
        matches: Callable[[Any, Any], bool]
    ) -> List[DuplicateGroup]:
        seen = [False] * len(names)
        groups = []
        for i, a in enumerate(names):
            if seen[i]:
                continue
            group = DuplicateGroup(files=[a])
            seen[i] = True
            for j in range(i + 1, len(names)):
                if seen[j]:
                    continue
                b = names[j]
                if matches(index[a], index[b]):
                    group.add_file(b)
                    seen[j] = True
            groups.append(group)
        return groups

    @staticmethod
    def _transitive(
        names: List[str],
        index: Dict[str, Any],
        matches: Callable[[Any, Any], bool]
    ) -> List[DuplicateGroup]:
        parent = list(range(len(names)))

        def find(x: int) -> int:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        for i in range(len(names)):
            for j in range(i + 1, len(names)):
                if matches(index[names[i]], index[names[j]]):
                    root_i, root_j = find(i), find(j)
                    if root_i != root_j:
                        # Lowest index stays root so the seed is the earliest file
                        parent[max(root_i, root_j)] = min(root_i, root_j)

        by_root: Dict[int, DuplicateGroup] = {}
        for i, name in enumerate(names):
            root = find(i)
            if root not in by_root:
                by_root[root] = DuplicateGroup(files=[])
            by_root[root].add_file(name)
        return list(by_root.values())


def find_group(groups: List[DuplicateGroup], name: str) -> Optional[DuplicateGroup]:
    """Returns the group containing `name`, or None."""
    for group in groups:
        if name in group:
            return group
    return None
