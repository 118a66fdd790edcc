"""Extraction of class strings from build output."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
from typing import Iterable, Iterator, Mapping

from .config import ConsolidationConfig
from .exclusion import normalize_class_string
from .types import SOURCE_HTML, SOURCE_JS, SOURCE_RSC, ClassOccurrence, DynamicBasePattern, FileLocation

logger = logging.getLogger(__name__)

CLASS_PATTERNS: tuple[re.Pattern[str], ...] = (
    # JSX: className="..." / className='...'
    re.compile(r'className\s*=\s*"([^"]+)"'),
    re.compile(r"className\s*=\s*'([^']+)'"),
    # createElement props: className:"..." / className:'...'
    re.compile(r'className\s*:\s*"([^"]+)"'),
    re.compile(r"className\s*:\s*'([^']+)'"),
    # minified: "className","..."
    re.compile(r'"className"\s*,\s*"([^"]+)"'),
    # RSC payload / JSON props: "className":"..."
    re.compile(r'"className"\s*:\s*"([^"]+)"'),
    # HTML: class="..." / class='...'
    re.compile(r'\bclass\s*=\s*"([^"]+)"'),
    re.compile(r"\bclass\s*=\s*'([^']+)'"),
)

# Static text before the first placeholder of a className template literal.
DYNAMIC_BASE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"className\s*:\s*`([^`$]*)\$\{"),
    re.compile(r"className\s*=\s*`([^`$]*)\$\{"),
    re.compile(r"className\s*=\s*\{\s*`([^`$]*)\$\{"),
)

_CALL = re.compile(r"\w+\s*\(")
_IDENTIFIER = re.compile(r"[a-z][a-zA-Z0-9]*")


def is_dynamic_class_string(class_string: str) -> bool:
    if "${" in class_string:
        return True
    if "?" in class_string and ":" in class_string:
        return True
    if _CALL.search(class_string):
        return True
    # A bare camelCase word is more likely a variable than a class list.
    return bool(_IDENTIFIER.fullmatch(class_string)) and "-" not in class_string


def _line_of(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


@dataclass(frozen=True)
class ClassMatch:
    class_string: str
    line: int


class ClassMatches:
    """Lazy matches of class attribute values in ``content``.

    Every iteration starts from the beginning of the text.
    """

    def __init__(self, content: str, patterns: Iterable[re.Pattern[str]] = CLASS_PATTERNS) -> None:
        self.content = content
        self.patterns = tuple(patterns)

    def __iter__(self) -> Iterator[ClassMatch]:
        for pattern in self.patterns:
            for match in pattern.finditer(self.content):
                raw = match.group(1)
                if not raw.strip() or is_dynamic_class_string(raw):
                    continue
                yield ClassMatch(raw.strip(), _line_of(self.content, match.start()))


def extract_class_strings(content: str, file_path: str) -> list[tuple[str, FileLocation]]:
    """Class strings in ``content``, each reported once per file."""
    results: list[tuple[str, FileLocation]] = []
    seen: set[str] = set()
    for match in ClassMatches(content):
        if match.class_string in seen:
            continue
        seen.add(match.class_string)
        results.append((match.class_string, FileLocation(file_path, match.line)))
    return results


def iter_dynamic_base_strings(content: str) -> Iterator[str]:
    for pattern in DYNAMIC_BASE_PATTERNS:
        for match in pattern.finditer(content):
            base = match.group(1).strip()
            if base:
                yield base


def extract_dynamic_base_strings(content: str) -> list[str]:
    return list(iter_dynamic_base_strings(content))


def source_type_for(path: str | Path) -> str | None:
    suffix = Path(path).suffix.lower()
    if suffix in (".js", ".mjs", ".cjs"):
        return SOURCE_JS
    if suffix in (".html", ".htm"):
        return SOURCE_HTML
    if suffix == ".rsc":
        return SOURCE_RSC
    return None


@dataclass(frozen=True)
class FileStats:
    path: str
    original_size: int
    source_type: str


@dataclass
class ScanResult:
    occurrences: dict[str, ClassOccurrence] = field(default_factory=dict)
    dynamic_bases: dict[str, DynamicBasePattern] = field(default_factory=dict)
    files: list[FileStats] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class OccurrenceCollector:
    """Aggregates scanned class strings by normalized key."""

    def __init__(self, config: ConsolidationConfig) -> None:
        self.config = config
        self.result = ScanResult()

    def add(self, class_string: str, location: FileLocation, source_type: str | None = None) -> ClassOccurrence | None:
        normalized = normalize_class_string(class_string, self.config.exclude)
        if not normalized.classes or len(normalized.classes) < self.config.min_classes:
            return None
        occurrence = self.result.occurrences.get(normalized.normalized)
        if occurrence is None:
            occurrence = ClassOccurrence(
                class_string=class_string,
                normalized_key=normalized.normalized,
                classes=normalized.classes,
                excluded_classes=normalized.excluded_classes,
                count=0,
                source_types=set(),
            )
            self.result.occurrences[normalized.normalized] = occurrence
        occurrence.count += 1
        occurrence.locations.append(location)
        if source_type is not None:
            occurrence.source_types.add(source_type)
        return occurrence

    def add_dynamic_base(self, base_string: str, location: FileLocation) -> DynamicBasePattern | None:
        normalized = normalize_class_string(base_string, self.config.exclude)
        if not normalized.classes:
            return None
        existing = self.result.dynamic_bases.get(normalized.normalized)
        locations = (existing.locations if existing else ()) + (location,)
        pattern = DynamicBasePattern(normalized.classes, normalized.normalized, locations)
        self.result.dynamic_bases[normalized.normalized] = pattern
        return pattern

    def add_content(self, file_path: str, content: str, source_type: str | None = None) -> None:
        for class_string, location in extract_class_strings(content, file_path):
            self.add(class_string, location, source_type)
        if source_type == SOURCE_JS:
            for base in iter_dynamic_base_strings(content):
                self.add_dynamic_base(base, FileLocation(file_path))


def scan_contents(contents: Mapping[str, str], config: ConsolidationConfig) -> ScanResult:
    """Scan in-memory ``{path: text}`` output. Unknown file types are skipped."""
    collector = OccurrenceCollector(config)
    for file_path, content in contents.items():
        source_type = source_type_for(file_path)
        if source_type is None:
            continue
        collector.result.files.append(FileStats(file_path, len(content.encode("utf-8")), source_type))
        collector.add_content(file_path, content, source_type)
    return collector.result


def find_files(build_dir: str | Path, patterns: Iterable[str]) -> list[Path]:
    root = Path(build_dir)
    found: dict[Path, None] = {}
    for pattern in patterns:
        for path in sorted(root.glob(pattern)):
            if path.is_file():
                found.setdefault(path, None)
    return list(found)


def scan_build_output(config: ConsolidationConfig) -> ScanResult:
    files = find_files(config.build_dir, config.include)
    logger.info("Found %d files to scan in %s", len(files), config.build_dir)
    collector = OccurrenceCollector(config)
    for path in files:
        source_type = source_type_for(path)
        if source_type is None:
            continue
        try:
            content = path.read_text(encoding="utf-8")
            size = path.stat().st_size
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error scanning %s: %s", path, exc)
            collector.result.errors.append(f"Error scanning {path}: {exc}")
            continue
        collector.result.files.append(FileStats(str(path), size, source_type))
        collector.add_content(str(path), content, source_type)
    result = collector.result
    logger.info(
        "Scanned %d files: %d distinct patterns, %d dynamic bases",
        len(result.files),
        len(result.occurrences),
        len(result.dynamic_bases),
    )
    return result
