import json
from pathlib import Path

from classpresso import (
    ConsolidationCandidate,
    ConsolidationConfig,
    build_replacement_map,
    calculate_metrics,
    create_class_mappings,
    load_mapping_manifest,
    save_mapping_manifest,
)
from classpresso.consolidator import MANIFEST_NAME
from classpresso.scanner import FileStats


def _candidates():
    return [
        ConsolidationCandidate(
            class_string="items-center flex gap-2 js-open",
            normalized_key="flex gap-2 items-center",
            frequency=12,
            bytes_saved=228,
            classes=("flex", "gap-2", "items-center"),
            excluded_classes=("js-open",),
            hash_name="cp-a",
        ),
        ConsolidationCandidate(
            class_string="px-4 py-2",
            normalized_key="px-4 py-2",
            frequency=8,
            bytes_saved=40,
            classes=("px-4", "py-2"),
            excluded_classes=(),
            hash_name="cp-b",
        ),
    ]


def test_replacement_map_keeps_excluded_classes():
    replacements = build_replacement_map(create_class_mappings(_candidates()))
    assert set(replacements) == {"flex gap-2 items-center", "px-4 py-2"}
    assert replacements["flex gap-2 items-center"].render() == "cp-a js-open"
    assert replacements["px-4 py-2"].render() == "cp-b"


def test_manifest_round_trip(tmp_path: Path):
    candidates = _candidates()
    mappings = create_class_mappings(candidates)
    config = ConsolidationConfig(build_dir=str(tmp_path))
    metrics = calculate_metrics(candidates, [FileStats("server/app/page.html", 4096, "html")], 150)
    path = save_mapping_manifest(mappings, metrics, config)
    assert path == tmp_path / MANIFEST_NAME

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["tool"] == "classpresso"
    assert data["metrics"]["bytes_saved"] == 268
    assert data["metrics"]["top_consolidations"][0]["consolidated"] == "cp-a"

    manifest = load_mapping_manifest(tmp_path)
    assert manifest is not None
    assert list(manifest.mappings) == mappings
    assert manifest.metrics == metrics
    assert manifest.build_dir == str(tmp_path)


def test_missing_or_broken_manifest(tmp_path: Path):
    assert load_mapping_manifest(tmp_path) is None
    (tmp_path / MANIFEST_NAME).write_text("{not json", encoding="utf-8")
    assert load_mapping_manifest(tmp_path) is None
    (tmp_path / MANIFEST_NAME).write_text('{"mappings": [{"original": "x"}]}', encoding="utf-8")
    assert load_mapping_manifest(tmp_path) is None

