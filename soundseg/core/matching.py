"""
Correlation-based ad identification for SoundSeg.
The array helpers are pure (no side effects) and operate on numpy arrays.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np
from scipy.signal import correlate

from .config import IDENTIFY_CONFIG
from .types import CorrelationArray, MatchSpan, SampleArray

if TYPE_CHECKING:
    from .track import Track


def cross_correlation(a: SampleArray, b: SampleArray) -> float:
    """
    Unnormalized similarity of two equally long sample runs.

    Args:
        a: First run of samples
        b: Second run of samples (same length as `a`)

    Returns:
        Sum of the sample-wise products as a double
    """
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def auto_correlation(a: SampleArray) -> float:
    """Reference energy of a run: its cross-correlation with itself."""
    return cross_correlation(a, a)


def sliding_correlation(target: SampleArray, ad: SampleArray) -> CorrelationArray:
    """
    Cross-correlation of `ad` against every window of `target`.

    Entry `o` equals cross_correlation(target[o:o+len(ad)], ad).
    Direct summation keeps integer-valued sums exact.
    """
    return correlate(
        np.asarray(target, dtype=np.float64),
        np.asarray(ad, dtype=np.float64),
        mode="valid",
        method="direct",
    )


def find_matches(
    target: SampleArray,
    ad: SampleArray,
    threshold_ratio: float = IDENTIFY_CONFIG.threshold_ratio
) -> list[MatchSpan]:
    """
    Locate non-overlapping occurrences of `ad` inside `target`.

    A window matches when its correlation with the ad reaches
    `threshold_ratio` of the ad's auto-correlation. The scan is greedy:
    after a match the next candidate starts just past its last sample.

    Args:
        target: Samples to search
        ad: Samples to look for
        threshold_ratio: Fraction of the ad's energy a window must reach

    Returns:
        Inclusive (start, end) index pairs in ascending order
    """
    ad_len, target_len = len(ad), len(target)
    if ad_len == 0 or target_len == 0 or ad_len > target_len:
        return []

    threshold = threshold_ratio * auto_correlation(ad)
    scores = sliding_correlation(target, ad)

    matches: list[MatchSpan] = []
    offset = 0
    while offset < len(scores):
        if scores[offset] >= threshold:
            matches.append((offset, offset + ad_len - 1))
            offset += ad_len
        else:
            offset += 1
    return matches


def format_matches(matches: list[MatchSpan]) -> str:
    """Render matches as newline-separated "start,end" lines, no trailing newline."""
    return "\n".join(f"{start},{end}" for start, end in matches)


def identify(target: "Track", ad: "Track") -> str:
    """Report every occurrence of the `ad` track's samples inside `target`."""
    if len(target) == 0 or len(ad) == 0 or len(ad) > len(target):
        return ""
    return format_matches(find_matches(target.read(0, len(target)), ad.read(0, len(ad))))
