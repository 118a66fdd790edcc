"""Optimization metrics and formatting helpers for reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .scanner import FileStats
from .types import ConsolidationCandidate

TOP_CONSOLIDATIONS = 10
# Rough browser cost of class parsing: 0.1ms per KB, render about half that.
PARSE_MS_PER_KB = 0.1
RENDER_TO_PARSE_RATIO = 0.5


@dataclass(frozen=True)
class TopConsolidation:
    original: str
    consolidated: str
    frequency: int
    bytes_saved: int


@dataclass(frozen=True)
class OptimizationMetrics:
    total_files_scanned: int
    total_class_strings_found: int
    unique_class_patterns: int
    consolidated_patterns: int
    total_occurrences_replaced: int
    original_total_bytes: int
    optimized_total_bytes: int
    bytes_saved: int
    percentage_reduction: float
    consolidated_css_bytes: int
    estimated_parse_time_saved_ms: float
    estimated_render_time_saved_ms: float
    top_consolidations: tuple[TopConsolidation, ...] = ()

    @property
    def net_bytes_saved(self) -> int:
        return self.bytes_saved - self.consolidated_css_bytes

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OptimizationMetrics:
        values = dict(data)
        values["top_consolidations"] = tuple(TopConsolidation(**item) for item in values.get("top_consolidations", ()))
        return cls(**values)


def calculate_metrics(
    candidates: Sequence[ConsolidationCandidate],
    files: Iterable[FileStats],
    css_overhead: int,
) -> OptimizationMetrics:
    files = list(files)
    total_bytes_saved = sum(c.bytes_saved for c in candidates)
    total_occurrences = sum(c.frequency for c in candidates)
    net_savings = total_bytes_saved - css_overhead
    original_total_bytes = sum(f.original_size for f in files)
    parse_ms = max(0.0, net_savings / 1024 * PARSE_MS_PER_KB)
    return OptimizationMetrics(
        total_files_scanned=len(files),
        total_class_strings_found=total_occurrences,
        unique_class_patterns=len(candidates),
        consolidated_patterns=sum(1 for c in candidates if c.frequency >= 2),
        total_occurrences_replaced=total_occurrences,
        original_total_bytes=original_total_bytes,
        optimized_total_bytes=original_total_bytes - net_savings,
        bytes_saved=total_bytes_saved,
        percentage_reduction=net_savings / original_total_bytes * 100 if original_total_bytes else 0.0,
        consolidated_css_bytes=css_overhead,
        estimated_parse_time_saved_ms=parse_ms,
        estimated_render_time_saved_ms=parse_ms * RENDER_TO_PARSE_RATIO,
        top_consolidations=tuple(
            TopConsolidation(c.class_string, c.hash_name, c.frequency, c.bytes_saved)
            for c in candidates[:TOP_CONSOLIDATIONS]
        ),
    )


def format_bytes(value: int) -> str:
    if value == 0:
        return "0 B"
    sign = "-" if value < 0 else ""
    size = abs(value)
    if size < 1024:
        return f"{sign}{size} B"
    if size < 1024 * 1024:
        return f"{sign}{size / 1024:.2f} KB"
    return f"{sign}{size / (1024 * 1024):.2f} MB"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def format_time(ms: float) -> str:
    if ms < 1:
        return f"{ms * 1000:.2f}μs"
    if ms < 1000:
        return f"{ms:.2f}ms"
    return f"{ms / 1000:.2f}s"
