"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/fingerprint.py
Average-hash (aHash) fingerprints of rendered pages and their Hamming distance.

Bit layout: bit i of the 64-bit value is pixel i of the 8x8 grayscale
thumbnail in row-major order, set when the pixel is strictly brighter than
the floor mean of all 64 pixels.
"""

from typing import Dict, Tuple

import imagehash
from PIL import Image

from pdfdedup.core.models import Fingerprint, Region, RegionFingerprintSet

HASH_SIZE = 8
HASH_BITS = HASH_SIZE * HASH_SIZE
MISSING_REGION = -1


def average_hash64(img: Image.Image) -> Fingerprint:
    """
    Compute a 64-bit average hash of an image.

    Args:
        img: Any Pillow image convertible to grayscale.

    Returns:
        int: Fingerprint in [0, 2**64). A uniform image hashes to 0.
    """
    # Samples are integers, so "above the float mean" equals "above the floor mean"
    bits = imagehash.average_hash(img, hash_size=HASH_SIZE).hash.flatten()

    value = 0
    for i, bit in enumerate(bits):
        if bit:
            value |= 1 << i
    return value


def hamming_distance(a: Fingerprint, b: Fingerprint) -> int:
    """Number of differing bits between two fingerprints."""
    return bin(a ^ b).count("1")


def band_heights(height: int) -> Tuple[int, int, int]:
    """Heights of the top, middle and bottom bands. The bottom band takes the remainder."""
    region_height = height // 3
    return region_height, region_height, height - 2 * region_height


def split_regions(img: Image.Image) -> Dict[str, Image.Image]:
    """
    Split a page into three full-width vertical bands with no overlap and no gap.

    Raises:
        ValueError: If the page is too short to give every band at least one row.
    """
    width, height = img.size
    top_h, middle_h, _ = band_heights(height)
    if top_h == 0:
        raise ValueError(f"Page height {height}px is too small to split into regions")

    bounds = (0, top_h, top_h + middle_h, height)
    return {
        region.value: img.crop((0, bounds[i], width, bounds[i + 1]))
        for i, region in enumerate(Region.get_all())
    }


def region_hashes(img: Image.Image) -> RegionFingerprintSet:
    """Fingerprint each band of a page independently."""
    return {name: average_hash64(band) for name, band in split_regions(img).items()}


def compare_region_hashes(
        hash_a: RegionFingerprintSet,
        hash_b: RegionFingerprintSet
) -> Dict[str, int]:
    """
    Per-region Hamming distances between two region sets.
    A region of hash_a missing from hash_b gets MISSING_REGION (-1).
    """
    distances = {}
    for region, ha in hash_a.items():
        hb = hash_b.get(region)
        if ha is not None and hb is not None:
            distances[region] = hamming_distance(ha, hb)
        else:
            distances[region] = MISSING_REGION
    return distances


def regions_match(hash_a: RegionFingerprintSet, hash_b: RegionFingerprintSet) -> bool:
    """True when every region distance is exactly 0."""
    return all(dist == 0 for dist in compare_region_hashes(hash_a, hash_b).values())
