"""Byte accounting for consolidated patterns."""

from __future__ import annotations

from typing import Iterable, Sequence

from .types import ConsolidationCandidate

# ".cp-a {\n}\n" plus slack for longer names.
CSS_BASE_OVERHEAD = 15
# "  display: flex;\n" averages out to about this much per class.
CSS_PER_CLASS_OVERHEAD = 20


def calculate_bytes_saved(
    original: str,
    hash_name: str,
    frequency: int,
    excluded_classes: Sequence[str],
) -> int:
    """Net bytes removed from the output by replacing ``original``.

    Only the included classes are replaced; excluded classes stay in place,
    so their text and the space separating them are not counted. The result
    is negative when the name is longer than what it replaces.
    """
    excluded_length = len(" ".join(excluded_classes))
    separator = 1 if excluded_classes else 0
    included_length = len(original) - excluded_length - separator
    return (included_length - len(hash_name)) * frequency


def pattern_css_overhead(classes: Sequence[str]) -> int:
    return CSS_BASE_OVERHEAD + len(classes) * CSS_PER_CLASS_OVERHEAD


def estimate_css_overhead(candidates: Iterable[ConsolidationCandidate]) -> int:
    return sum(pattern_css_overhead(candidate.classes) for candidate in candidates)


def calculate_net_savings(candidate: ConsolidationCandidate) -> int:
    return candidate.bytes_saved - pattern_css_overhead(candidate.classes)


def has_net_positive_savings(candidate: ConsolidationCandidate) -> bool:
    return calculate_net_savings(candidate) > 0
