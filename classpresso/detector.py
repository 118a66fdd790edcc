"""Selection of class patterns worth consolidating."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import AbstractSet, Iterable, Mapping
import warnings

from .config import ConsolidationConfig
from .exclusion import contains_dynamic_prefix
from .hydration import is_hydration_safe
from .naming import generate_sequential_name
from .savings import calculate_bytes_saved, pattern_css_overhead
from .types import ClassOccurrence, ConsolidationCandidate, PatternSummary
from .validation import validate_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Preliminary:
    occurrence: ClassOccurrence
    css_overhead: int


def _is_eligible(
    occurrence: ClassOccurrence,
    config: ConsolidationConfig,
    mergeable_patterns: AbstractSet[str] | None,
) -> bool:
    key = occurrence.normalized_key
    if occurrence.count < config.min_occurrences:
        return False
    if len(occurrence.classes) < config.min_classes:
        return False
    if config.ssr:
        if not config.force_all and not is_hydration_safe(occurrence):
            logger.debug("Skipping %r: not seen in both server and client output", key)
            return False
        if mergeable_patterns and key in mergeable_patterns:
            logger.debug("Skipping %r: mergeable pattern", key)
            return False
    # "hidden md:flex" would become "cp-a md:flex" and the consolidated
    # display:none could win over the responsive variant.
    if config.skip_patterns_with_excluded_classes and occurrence.excluded_classes:
        logger.debug("Skipping %r: has excluded classes", key)
        return False
    if config.exclude_dynamic_patterns and contains_dynamic_prefix(occurrence.classes, config.dynamic_prefixes):
        logger.debug("Skipping %r: contains render-time library classes", key)
        return False
    return True


def meets_savings_thresholds(bytes_saved: int, css_overhead: int, config: ConsolidationConfig) -> bool:
    """Whether a pattern saving ``bytes_saved`` passes the byte filters of ``config``."""
    if bytes_saved < config.min_bytes_saved:
        return False
    if not config.force_all and bytes_saved <= css_overhead:
        return False
    return True


def _placeholder_length(config: ConsolidationConfig) -> int:
    if config.naming == "hash":
        return len(config.hash_prefix) + config.hash_length
    # Names shorter than this are only handed out to the first 36 patterns.
    return len(config.hash_prefix) + 1


def _passes_byte_filter(item: _Preliminary, config: ConsolidationConfig) -> bool:
    occurrence = item.occurrence
    estimated = calculate_bytes_saved(
        occurrence.class_string,
        "x" * _placeholder_length(config),
        occurrence.count,
        occurrence.excluded_classes,
    )
    return meets_savings_thresholds(estimated, item.css_overhead, config)


def detect_consolidatable_patterns(
    occurrences: Mapping[str, ClassOccurrence],
    config: ConsolidationConfig,
    mergeable_patterns: AbstractSet[str] | None = None,
) -> list[ConsolidationCandidate]:
    """Choose and name the patterns to consolidate.

    Eligible patterns are ranked by frequency so the most frequent ones get
    the shortest sequential names, filtered on estimated savings, named, and
    finally returned sorted by their actual byte savings.

    ``mergeable_patterns`` holds normalized keys that must not be touched in
    SSR mode. It is ignored otherwise.
    """
    issues = validate_config(config)
    if issues:
        for issue in issues:
            warnings.warn(issue.message, RuntimeWarning)
        return []

    preliminary = [
        _Preliminary(occurrence, pattern_css_overhead(occurrence.classes))
        for occurrence in occurrences.values()
        if _is_eligible(occurrence, config, mergeable_patterns)
    ]
    # Stable sort: ties keep scan order.
    preliminary.sort(key=lambda item: item.occurrence.count, reverse=True)

    survivors = [item for item in preliminary if _passes_byte_filter(item, config)]

    candidates: list[ConsolidationCandidate] = []
    for idx, item in enumerate(survivors):
        occurrence = item.occurrence
        hash_name = generate_sequential_name(idx, config.hash_prefix)
        candidates.append(
            ConsolidationCandidate(
                class_string=occurrence.class_string,
                normalized_key=occurrence.normalized_key,
                frequency=occurrence.count,
                bytes_saved=calculate_bytes_saved(
                    occurrence.class_string,
                    hash_name,
                    occurrence.count,
                    occurrence.excluded_classes,
                ),
                classes=tuple(occurrence.classes),
                excluded_classes=tuple(occurrence.excluded_classes),
                hash_name=hash_name,
            )
        )

    logger.info(
        "Selected %d of %d patterns (%d eligible)",
        len(candidates),
        len(occurrences),
        len(preliminary),
    )
    candidates.sort(key=lambda candidate: candidate.bytes_saved, reverse=True)
    return candidates


def get_pattern_summary(candidates: Iterable[ConsolidationCandidate]) -> PatternSummary:
    items = list(candidates)
    total_patterns = len(items)
    total_occurrences = sum(c.frequency for c in items)
    total_bytes_saved = sum(c.bytes_saved for c in items)
    total_classes = sum(len(c.classes) for c in items)
    return PatternSummary(
        total_patterns=total_patterns,
        total_occurrences=total_occurrences,
        total_bytes_saved=total_bytes_saved,
        avg_frequency=total_occurrences / total_patterns if total_patterns else 0,
        avg_classes_per_pattern=total_classes / total_patterns if total_patterns else 0,
    )
