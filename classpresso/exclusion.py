"""Exclusion rules and class string normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .config import ExcludeRules


@dataclass(frozen=True)
class NormalizedClassString:
    normalized: str
    classes: tuple[str, ...]
    excluded_classes: tuple[str, ...]


def should_exclude_class(token: str, rules: ExcludeRules) -> bool:
    """Return True if ``token`` must be preserved verbatim.

    Prefixes and suffixes are literal ``startswith``/``endswith`` checks,
    ``classes`` are exact matches and ``patterns`` are regular expressions
    searched anywhere in the token.
    """
    if any(token.startswith(prefix) for prefix in rules.prefixes):
        return True
    if any(token.endswith(suffix) for suffix in rules.suffixes):
        return True
    if token in rules.classes:
        return True
    return any(pattern.search(token) for pattern in rules.patterns)


def normalize_class_string(class_string: str, rules: ExcludeRules) -> NormalizedClassString:
    included: list[str] = []
    excluded: list[str] = []
    for token in class_string.split():
        if should_exclude_class(token, rules):
            excluded.append(token)
        else:
            included.append(token)
    classes = tuple(sorted(included))
    return NormalizedClassString(
        normalized=" ".join(classes),
        classes=classes,
        excluded_classes=tuple(excluded),
    )


def contains_dynamic_prefix(classes: Iterable[str], prefixes: Iterable[str]) -> bool:
    """Detect classes that a component library adds at render time (icons)."""
    markers = tuple(prefixes)
    for cls in classes:
        for marker in markers:
            if marker.endswith("-"):
                if cls.startswith(marker):
                    return True
            elif cls == marker:
                return True
    return False
