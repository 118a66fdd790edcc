"""Class mappings and the on-disk manifest."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from .config import ConsolidationConfig
from .metrics import OptimizationMetrics
from .types import ConsolidationCandidate

logger = logging.getLogger(__name__)

MANIFEST_NAME = "classpresso-manifest.json"
MANIFEST_VERSION = "1.0.0"


@dataclass(frozen=True)
class ClassMapping:
    original: str
    consolidated: str
    classes: tuple[str, ...]
    excluded_classes: tuple[str, ...]
    frequency: int
    bytes_saved: int


@dataclass(frozen=True)
class Replacement:
    consolidated: str
    excluded_classes: tuple[str, ...]

    def render(self) -> str:
        return " ".join((self.consolidated, *self.excluded_classes))


def create_class_mappings(candidates: Iterable[ConsolidationCandidate]) -> list[ClassMapping]:
    return [
        ClassMapping(
            original=c.class_string,
            consolidated=c.hash_name,
            classes=tuple(c.classes),
            excluded_classes=tuple(c.excluded_classes),
            frequency=c.frequency,
            bytes_saved=c.bytes_saved,
        )
        for c in candidates
    ]


def build_replacement_map(mappings: Iterable[ClassMapping]) -> dict[str, Replacement]:
    """Lookup from normalized key (sorted included classes) to replacement."""
    return {
        " ".join(sorted(m.classes)): Replacement(m.consolidated, m.excluded_classes)
        for m in mappings
    }


def _mapping_from_dict(data: dict[str, Any]) -> ClassMapping:
    return ClassMapping(
        original=data["original"],
        consolidated=data["consolidated"],
        classes=tuple(data["classes"]),
        excluded_classes=tuple(data.get("excluded_classes", ())),
        frequency=int(data["frequency"]),
        bytes_saved=int(data["bytes_saved"]),
    )


@dataclass(frozen=True)
class Manifest:
    version: str
    tool: str
    build_dir: str
    created: str
    config: dict[str, Any]
    mappings: tuple[ClassMapping, ...]
    metrics: OptimizationMetrics

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _manifest_from_dict(data: dict[str, Any]) -> Manifest:
    return Manifest(
        version=data["version"],
        tool=data["tool"],
        build_dir=data["build_dir"],
        created=data["created"],
        config=dict(data["config"]),
        mappings=tuple(_mapping_from_dict(item) for item in data["mappings"]),
        metrics=OptimizationMetrics.from_dict(data["metrics"]),
    )


def save_mapping_manifest(
    mappings: Iterable[ClassMapping],
    metrics: OptimizationMetrics,
    config: ConsolidationConfig,
    path: str | Path | None = None,
) -> Path:
    manifest = Manifest(
        version=MANIFEST_VERSION,
        tool="classpresso",
        build_dir=config.build_dir,
        created=datetime.now(timezone.utc).isoformat(),
        config={
            "min_occurrences": config.min_occurrences,
            "min_classes": config.min_classes,
            "hash_prefix": config.hash_prefix,
            "hash_length": config.hash_length,
            "naming": config.naming,
            "ssr": config.ssr,
        },
        mappings=tuple(mappings),
        metrics=metrics,
    )
    manifest_path = Path(path) if path is not None else Path(config.build_dir) / MANIFEST_NAME
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with manifest_path.open("w", encoding="utf-8") as handle:
        json.dump(manifest.to_dict(), handle, indent=2)
    logger.info("Wrote %d mappings to %s", len(manifest.mappings), manifest_path)
    return manifest_path


def load_mapping_manifest(build_dir: str | Path) -> Manifest | None:
    """Manifest from a previous run, or None if there is no usable manifest."""
    manifest_path = Path(build_dir) / MANIFEST_NAME
    try:
        with manifest_path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        return _manifest_from_dict(data)
    except FileNotFoundError:
        return None
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring unreadable manifest %s: %s", manifest_path, exc)
        return None
