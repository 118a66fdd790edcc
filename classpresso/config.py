"""Configuration for class pattern consolidation."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
import logging
from pathlib import Path
import re
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExcludeRules:
    prefixes: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_strings(
        cls,
        prefixes: Iterable[str] = (),
        suffixes: Iterable[str] = (),
        classes: Iterable[str] = (),
        patterns: Iterable[str | re.Pattern[str]] = (),
    ) -> ExcludeRules:
        compiled = tuple(p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns)
        return cls(tuple(prefixes), tuple(suffixes), tuple(classes), compiled)


DEFAULT_EXCLUDE = ExcludeRules.from_strings(
    prefixes=("js-", "data-", "qa-", "test-"),
    suffixes=("-handler", "-trigger", "-hook"),
    patterns=(r"^\[.+\]$", r"^group/", r"^peer/"),
)

# Entries ending in "-" match as prefixes, the rest match whole tokens.
DEFAULT_DYNAMIC_PREFIXES: tuple[str, ...] = (
    "lucide",
    "lucide-",
    "fa",
    "fas",
    "far",
    "fab",
    "fa-",
    "heroicon",
    "heroicon-",
    "material-icons",
    "material-symbols-",
    "mdi",
    "mdi-",
    "bi",
    "bi-",
    "ri-",
)

DEFAULT_INCLUDE: tuple[str, ...] = (
    "static/chunks/**/*.js",
    "server/app/**/*.html",
    "server/app/**/*.rsc",
)

NAMING_MODES = ("sequential", "hash")


@dataclass(frozen=True)
class ConsolidationConfig:
    min_occurrences: int = 2
    min_classes: int = 2
    min_bytes_saved: int = 10
    hash_prefix: str = "cp-"
    hash_length: int = 5
    exclude: ExcludeRules = DEFAULT_EXCLUDE
    ssr: bool = False
    force_all: bool = False
    skip_patterns_with_excluded_classes: bool = False
    exclude_dynamic_patterns: bool = False
    dynamic_prefixes: tuple[str, ...] = DEFAULT_DYNAMIC_PREFIXES
    naming: str = "sequential"
    build_dir: str = ".next"
    include: tuple[str, ...] = DEFAULT_INCLUDE
    manifest: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: ConsolidationConfig | None = None) -> ConsolidationConfig:
        """Build a config from a camelCase or snake_case mapping.

        Keys missing from ``data`` keep the value from ``base`` (or the
        defaults). Unknown keys raise ``ValueError``.
        """
        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in known:
                raise ValueError(f"Unknown configuration option: {key}")
            if name == "exclude":
                value = _exclude_from_mapping(value)
            elif name in ("include", "dynamic_prefixes"):
                value = tuple(value)
            updates[name] = value
        return replace(base or cls(), **updates)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _exclude_from_mapping(value: Any) -> ExcludeRules:
    if isinstance(value, ExcludeRules):
        return value
    if not isinstance(value, Mapping):
        raise ValueError("exclude must be a mapping of prefixes/suffixes/classes/patterns.")
    unknown = set(value) - {"prefixes", "suffixes", "classes", "patterns"}
    if unknown:
        raise ValueError(f"Unknown exclude option(s): {', '.join(sorted(unknown))}")
    return ExcludeRules.from_strings(
        prefixes=value.get("prefixes", ()),
        suffixes=value.get("suffixes", ()),
        classes=value.get("classes", ()),
        patterns=value.get("patterns", ()),
    )


def load_config(path: str | Path, base: ConsolidationConfig | None = None) -> ConsolidationConfig:
    config_path = Path(path)
    if not config_path.exists():
        logger.debug("Config file %s does not exist, using defaults", config_path)
        return base or ConsolidationConfig()
    with config_path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object.")
    logger.debug("Loaded config from %s", config_path)
    return ConsolidationConfig.from_mapping(data, base)
