"""Best-variant selection by resolution first, then seed count."""

from __future__ import annotations

from collections.abc import Sequence

from reelscout.shared.models import Variant

QUALITY_RANK = {
    "2160p": 3,
    "1080p": 2,
    "720p": 1,
}

# One quality tier outweighs up to this many seeders.
TIER_WEIGHT = 1000


def quality_rank(label: str) -> int:
    """Priority of a resolution label; unknown labels rank 0."""
    return QUALITY_RANK.get(label.strip().lower(), 0)


def score(variant: Variant) -> int:
    return quality_rank(variant.quality_label) * TIER_WEIGHT + variant.seed_count


def index_of_best(variants: Sequence[Variant]) -> int:
    """Position of the highest-scoring variant, or -1 for an empty sequence.

    The first occurrence wins ties.
    """
    best_idx = -1
    best_score = 0
    for idx, variant in enumerate(variants):
        current = score(variant)
        if best_idx < 0 or current > best_score:
            best_idx, best_score = idx, current
    return best_idx


def select_best(variants: Sequence[Variant]) -> Variant | None:
    """Pick the variant with the best quality, breaking ties by seed count."""
    idx = index_of_best(variants)
    if idx < 0:
        return None
    return variants[idx]
