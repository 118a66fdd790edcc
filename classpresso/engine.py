"""Analysis pipeline: scan result in, named candidates out."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import warnings

from .config import ConsolidationConfig
from .detector import detect_consolidatable_patterns, get_pattern_summary, meets_savings_thresholds
from .hydration import detect_dynamic_base_conflicts, detect_mergeable_patterns
from .naming import generate_hash_name, resolve_collisions
from .savings import calculate_bytes_saved, pattern_css_overhead
from .scanner import ScanResult, scan_build_output, scan_contents
from .types import ConsolidationCandidate, PatternSummary
from .validation import validate_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    scan: ScanResult
    candidates: list[ConsolidationCandidate]
    summary: PatternSummary
    mergeable_patterns: frozenset[str] = frozenset()
    dynamic_conflicts: frozenset[str] = frozenset()
    issues: tuple[str, ...] = ()


def _apply_hash_names(candidates: list[ConsolidationCandidate], config: ConsolidationConfig) -> list[ConsolidationCandidate]:
    for candidate in candidates:
        candidate.hash_name = generate_hash_name(candidate.normalized_key, config.hash_prefix, config.hash_length)
    resolve_collisions(candidates)
    for candidate in candidates:
        candidate.bytes_saved = calculate_bytes_saved(
            candidate.class_string,
            candidate.hash_name,
            candidate.frequency,
            candidate.excluded_classes,
        )
    # Collision suffixes can push a name past the length the detector assumed.
    kept = [
        candidate
        for candidate in candidates
        if meets_savings_thresholds(candidate.bytes_saved, pattern_css_overhead(candidate.classes), config)
    ]
    if len(kept) < len(candidates):
        logger.debug("Dropped %d patterns after hash naming", len(candidates) - len(kept))
    kept.sort(key=lambda candidate: candidate.bytes_saved, reverse=True)
    return kept


@dataclass(frozen=True)
class ConsolidationEngine:
    config: ConsolidationConfig

    def analyze(self, scan: ScanResult) -> AnalysisResult:
        cfg = self.config
        messages = tuple(issue.message for issue in validate_config(cfg))
        for message in messages:
            warnings.warn(message, RuntimeWarning)
        if messages:
            return AnalysisResult(scan=scan, candidates=[], summary=get_pattern_summary([]), issues=messages)

        mergeable: set[str] = set()
        conflicts: set[str] = set()
        if cfg.ssr:
            mergeable = detect_mergeable_patterns(scan.occurrences)
            conflicts = detect_dynamic_base_conflicts(scan.occurrences, scan.dynamic_bases.values())
            logger.info(
                "SSR mode: %d mergeable patterns, %d dynamic base conflicts",
                len(mergeable),
                len(conflicts),
            )

        candidates = detect_consolidatable_patterns(scan.occurrences, cfg, mergeable | conflicts)
        if cfg.naming == "hash":
            candidates = _apply_hash_names(candidates, cfg)

        return AnalysisResult(
            scan=scan,
            candidates=candidates,
            summary=get_pattern_summary(candidates),
            mergeable_patterns=frozenset(mergeable),
            dynamic_conflicts=frozenset(conflicts),
        )

    def analyze_contents(self, contents: dict[str, str]) -> AnalysisResult:
        return self.analyze(scan_contents(contents, self.config))

    def analyze_build(self) -> AnalysisResult:
        return self.analyze(scan_build_output(self.config))


def default_engine(config: ConsolidationConfig | None = None) -> ConsolidationEngine:
    return ConsolidationEngine(config or ConsolidationConfig())
