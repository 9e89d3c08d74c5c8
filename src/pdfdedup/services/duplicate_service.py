"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Selection logic on top of duplicate groups: originals, duplicates and the
representatives copied to the output folder.
"""
from typing import Dict, Iterable, List

from pdfdedup.core.models import DuplicateGroup, DuplicateLookup, LookupStatus


class DuplicateService:
    @staticmethod
    def get_originals(index: Dict[str, object], groups: Dict[str, DuplicateGroup]) -> List[str]:
        """
        Returns every group seed plus every file that belongs to no group.

        Order is first-seen: seeds in group order, then unclaimed files in
        index order. No name appears twice.

        Args:
            index (Dict[str, object]): File name index (FileHashIndex).
            groups (Dict[str, DuplicateGroup]): Whole-page groups keyed by seed.

        Returns:
            List[str]: Original file names.
        """
        originals = dict.fromkeys(groups.keys())
        claimed = {name for group in groups.values() for name in group}
        for name in index:
            if name not in claimed:
                originals.setdefault(name)
        return list(originals)

    @staticmethod
    def get_duplicates(index: Dict[str, object], groups: Dict[str, DuplicateGroup]) -> List[str]:
        """
        Complement of get_originals: files of the index that matched some seed.
        """
        originals = set(DuplicateService.get_originals(index, groups))
        return [name for name in index if name not in originals]

    @staticmethod
    def select_distinct(groups: Iterable[DuplicateGroup]) -> List[str]:
        """
        Picks the first file of each group, once.
        A name already selected is never selected again.
        """
        selected = []
        seen = set()
        for group in groups:
            if not group.files:
                continue
            name = group.files[0]
            if name in seen:
                continue
            seen.add(name)
            selected.append(name)
        return selected

    @staticmethod
    def lookup(index: Dict[str, object], groups: Dict[str, DuplicateGroup], name: str) -> DuplicateLookup:
        """
        Finds the group of `name`, telling apart a file without duplicates
        from a file that is not in the index at all.
        """
        for group in groups.values():
            if name in group:
                return DuplicateLookup(status=LookupStatus.FOUND, files=list(group.files))
        if name in index:
            return DuplicateLookup(status=LookupStatus.NO_DUPLICATES)
        return DuplicateLookup(status=LookupStatus.NOT_FOUND)
