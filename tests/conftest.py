import pytest

from classpresso import ClassOccurrence, ConsolidationConfig, ExcludeRules


def _make_occurrence(class_string, count=1, excluded=(), source_types=None):
    excluded = tuple(excluded)
    classes = tuple(sorted(token for token in class_string.split() if token not in excluded))
    return ClassOccurrence(
        class_string=class_string,
        normalized_key=" ".join(classes),
        classes=classes,
        excluded_classes=excluded,
        count=count,
        source_types=set(source_types) if source_types is not None else None,
    )


def _occurrence_map(*occurrences):
    return {occ.normalized_key: occ for occ in occurrences}


@pytest.fixture
def make_occurrence():
    return _make_occurrence


@pytest.fixture
def occurrence_map():
    return _occurrence_map


@pytest.fixture
def base_config():
    return ConsolidationConfig(
        min_occurrences=2,
        min_classes=2,
        min_bytes_saved=10,
        hash_prefix="cp-",
        hash_length=5,
        exclude=ExcludeRules(),
    )


@pytest.fixture
def lucide_occurrences():
    return _occurrence_map(
        _make_occurrence("h-4 w-4", count=6, source_types={"js"}),
        _make_occurrence("lucide lucide-copy h-4 w-4", count=6, source_types={"html"}),
    )
