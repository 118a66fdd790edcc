"""Shared types for pattern detection."""

from __future__ import annotations

from dataclasses import dataclass, field

SOURCE_HTML = "html"
SOURCE_JS = "js"
SOURCE_RSC = "rsc"

# Contexts produced on the server; "js" is the only client-side context.
SERVER_SOURCES = frozenset({SOURCE_HTML, SOURCE_RSC})
CLIENT_SOURCES = frozenset({SOURCE_JS})


@dataclass(frozen=True)
class FileLocation:
    file_path: str
    line: int | None = None


@dataclass
class ClassOccurrence:
    """One normalized class pattern aggregated across all scanned files.

    ``classes`` and ``excluded_classes`` partition the whitespace-split tokens
    of ``class_string``. ``classes`` is kept sorted so that
    ``normalized_key == " ".join(classes)``.
    """

    class_string: str
    normalized_key: str
    classes: tuple[str, ...]
    excluded_classes: tuple[str, ...] = ()
    count: int = 1
    locations: list[FileLocation] = field(default_factory=list)
    source_types: set[str] | None = None


@dataclass
class ConsolidationCandidate:
    class_string: str
    normalized_key: str
    frequency: int
    bytes_saved: int
    classes: tuple[str, ...]
    excluded_classes: tuple[str, ...]
    hash_name: str


@dataclass(frozen=True)
class DynamicBasePattern:
    base_classes: tuple[str, ...]
    normalized_key: str
    locations: tuple[FileLocation, ...] = ()


@dataclass(frozen=True)
class PatternSummary:
    total_patterns: int
    total_occurrences: int
    total_bytes_saved: int
    avg_frequency: float
    avg_classes_per_pattern: float
