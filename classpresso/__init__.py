"""Classpresso: consolidate repeated utility-class patterns in build output."""

from .config import DEFAULT_DYNAMIC_PREFIXES, DEFAULT_EXCLUDE, ConsolidationConfig, ExcludeRules, load_config
from .consolidator import (
    ClassMapping,
    Manifest,
    build_replacement_map,
    create_class_mappings,
    load_mapping_manifest,
    save_mapping_manifest,
)
from .detector import detect_consolidatable_patterns, get_pattern_summary
from .engine import AnalysisResult, ConsolidationEngine, default_engine
from .exclusion import contains_dynamic_prefix, normalize_class_string, should_exclude_class
from .hydration import (
    detect_dynamic_base_conflicts,
    detect_mergeable_patterns,
    is_hydration_safe,
    is_proper_subset,
    is_superset_of_dynamic_base,
    matches_dynamic_base,
)
from .metrics import OptimizationMetrics, calculate_metrics, format_bytes, format_percentage, format_time
from .naming import (
    generate_hash_name,
    generate_sequential_name,
    generate_sequential_names,
    min_name_length,
    resolve_collisions,
)
from .savings import (
    calculate_bytes_saved,
    calculate_net_savings,
    estimate_css_overhead,
    has_net_positive_savings,
    pattern_css_overhead,
)
from .scanner import ScanResult, extract_class_strings, extract_dynamic_base_strings, scan_build_output, scan_contents
from .types import ClassOccurrence, ConsolidationCandidate, DynamicBasePattern, FileLocation, PatternSummary
from .validation import ValidationIssue, validate_config

__all__ = [
    "ConsolidationConfig",
    "ExcludeRules",
    "DEFAULT_EXCLUDE",
    "DEFAULT_DYNAMIC_PREFIXES",
    "load_config",
    "validate_config",
    "ValidationIssue",
    "ClassOccurrence",
    "ConsolidationCandidate",
    "DynamicBasePattern",
    "FileLocation",
    "PatternSummary",
    "should_exclude_class",
    "normalize_class_string",
    "contains_dynamic_prefix",
    "is_hydration_safe",
    "is_proper_subset",
    "detect_mergeable_patterns",
    "matches_dynamic_base",
    "is_superset_of_dynamic_base",
    "detect_dynamic_base_conflicts",
    "calculate_bytes_saved",
    "pattern_css_overhead",
    "estimate_css_overhead",
    "calculate_net_savings",
    "has_net_positive_savings",
    "generate_sequential_name",
    "generate_sequential_names",
    "generate_hash_name",
    "min_name_length",
    "resolve_collisions",
    "detect_consolidatable_patterns",
    "get_pattern_summary",
    "ScanResult",
    "scan_contents",
    "scan_build_output",
    "extract_class_strings",
    "extract_dynamic_base_strings",
    "ConsolidationEngine",
    "AnalysisResult",
    "default_engine",
    "ClassMapping",
    "create_class_mappings",
    "build_replacement_map",
    "save_mapping_manifest",
    "load_mapping_manifest",
    "Manifest",
    "OptimizationMetrics",
    "calculate_metrics",
    "format_bytes",
    "format_percentage",
    "format_time",
]
