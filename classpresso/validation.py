"""Configuration validation."""

from __future__ import annotations

from dataclasses import dataclass

from .config import NAMING_MODES, ConsolidationConfig


@dataclass(frozen=True)
class ValidationIssue:
    option: str
    message: str


def validate_config(config: ConsolidationConfig) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if config.min_occurrences < 1:
        issues.append(ValidationIssue("minOccurrences", "minOccurrences must be at least 1"))
    if config.min_classes < 1:
        issues.append(ValidationIssue("minClasses", "minClasses must be at least 1"))
    if config.min_bytes_saved < 0:
        issues.append(ValidationIssue("minBytesSaved", "minBytesSaved must not be negative"))
    if config.hash_length < 3:
        issues.append(ValidationIssue("hashLength", "hashLength must be at least 3"))
    if config.hash_length > 32:
        issues.append(ValidationIssue("hashLength", "hashLength must be at most 32"))
    if not config.hash_prefix:
        issues.append(ValidationIssue("hashPrefix", "hashPrefix must not be empty"))
    if config.naming not in NAMING_MODES:
        issues.append(ValidationIssue("naming", f"naming must be one of: {', '.join(NAMING_MODES)}"))
    return issues


def is_valid_config(config: ConsolidationConfig) -> bool:
    return not validate_config(config)
