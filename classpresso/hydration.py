"""Hydration safety checks.

A pattern that reaches the page both through server-rendered markup and
through client script must be rewritten identically on both paths, or the
client's first render will not match the server HTML. Two hazards are
detected here:

* mergeable patterns: a script-only pattern whose classes are a strict
  subset of a markup-only pattern. The runtime merges the script pattern
  into a larger class list (e.g. icon components adding ``lucide
  lucide-copy``), so the two never match as whole strings.
* dynamic bases: a markup pattern equal to, or a superset of, the static
  prefix of a ``className`` template literal whose suffix is computed at
  runtime.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from .types import CLIENT_SOURCES, SERVER_SOURCES, ClassOccurrence, DynamicBasePattern

logger = logging.getLogger(__name__)


def _seen_on_server(occurrence: ClassOccurrence) -> bool:
    return bool(occurrence.source_types and occurrence.source_types & SERVER_SOURCES)


def _seen_on_client(occurrence: ClassOccurrence) -> bool:
    return bool(occurrence.source_types and occurrence.source_types & CLIENT_SOURCES)


def is_hydration_safe(occurrence: ClassOccurrence) -> bool:
    """True when the pattern was observed in both server and client output.

    Occurrences without source tracking are treated as unsafe.
    """
    return _seen_on_server(occurrence) and _seen_on_client(occurrence)


def is_client_only(occurrence: ClassOccurrence) -> bool:
    return _seen_on_client(occurrence) and not _seen_on_server(occurrence)


def is_server_only(occurrence: ClassOccurrence) -> bool:
    return _seen_on_server(occurrence) and not _seen_on_client(occurrence)


def is_proper_subset(subset: Iterable[str], superset: Iterable[str]) -> bool:
    return set(subset) < set(superset)


def detect_mergeable_patterns(occurrences: Mapping[str, ClassOccurrence]) -> set[str]:
    """Return normalized keys of client-only patterns nested in server-only ones."""
    client_only: list[ClassOccurrence] = []
    server_only_by_size: dict[int, list[frozenset[str]]] = defaultdict(list)
    for occurrence in occurrences.values():
        if is_client_only(occurrence):
            client_only.append(occurrence)
        elif is_server_only(occurrence):
            server_only_by_size[len(occurrence.classes)].append(frozenset(occurrence.classes))

    if not client_only or not server_only_by_size:
        return set()

    sizes = sorted(server_only_by_size)
    mergeable: set[str] = set()
    for occurrence in client_only:
        classes = frozenset(occurrence.classes)
        found = False
        for size in sizes:
            if size <= len(classes):
                continue
            for server_classes in server_only_by_size[size]:
                if classes < server_classes:
                    found = True
                    break
            if found:
                break
        if found:
            logger.debug("Pattern %r is merged into a larger server pattern", occurrence.normalized_key)
            mergeable.add(occurrence.normalized_key)
    return mergeable


def matches_dynamic_base(classes: Iterable[str], bases: Iterable[DynamicBasePattern]) -> bool:
    class_set = set(classes)
    return any(class_set == set(base.base_classes) for base in bases)


def is_superset_of_dynamic_base(classes: Iterable[str], bases: Iterable[DynamicBasePattern]) -> bool:
    class_set = set(classes)
    return any(class_set > set(base.base_classes) for base in bases)


def detect_dynamic_base_conflicts(
    occurrences: Mapping[str, ClassOccurrence],
    bases: Iterable[DynamicBasePattern],
) -> set[str]:
    """Return normalized keys of server patterns that overlap a dynamic base."""
    base_sets = [frozenset(base.base_classes) for base in bases if base.base_classes]
    if not base_sets:
        return set()
    conflicts: set[str] = set()
    for occurrence in occurrences.values():
        if not _seen_on_server(occurrence):
            continue
        classes = frozenset(occurrence.classes)
        if any(base <= classes for base in base_sets):
            logger.debug("Pattern %r overlaps a dynamic template base", occurrence.normalized_key)
            conflicts.add(occurrence.normalized_key)
    return conflicts
