from pathlib import Path

from classpresso import ConsolidationConfig, ExcludeRules
from classpresso.scanner import (
    ClassMatches,
    extract_class_strings,
    extract_dynamic_base_strings,
    is_dynamic_class_string,
    scan_build_output,
    scan_contents,
    source_type_for,
)


def _strings(content, path="test.js"):
    return [text for text, _ in extract_class_strings(content, path)]


def test_extracts_all_attribute_styles():
    assert _strings('<div className="flex gap-2">x</div>') == ["flex gap-2"]
    assert _strings("<div className='flex gap-2'>x</div>") == ["flex gap-2"]
    assert _strings('e("div",{className:"flex gap-2"})') == ["flex gap-2"]
    assert _strings('"className","flex gap-2"') == ["flex gap-2"]
    assert _strings('{"className":"flex gap-2"}') == ["flex gap-2"]
    assert _strings('<div class="flex gap-2">x</div>', "test.html") == ["flex gap-2"]
    assert _strings("<div class='flex gap-2'>x</div>", "test.html") == ["flex gap-2"]


def test_skips_dynamic_expressions():
    assert _strings('className={`flex ${isActive ? "active" : ""}`}') == []
    assert is_dynamic_class_string("flex ${x}")
    assert is_dynamic_class_string("a ? b : c")
    assert is_dynamic_class_string("cn(base)")
    assert is_dynamic_class_string("styles")
    assert not is_dynamic_class_string("flex gap-2 hover:bg-blue-500")


def test_deduplicates_within_a_file_and_tracks_lines():
    content = '<div className="flex gap-2">\n<span className="text-lg font-bold">\n<div className="flex gap-2">'
    results = extract_class_strings(content, "page.js")
    assert [text for text, _ in results] == ["flex gap-2", "text-lg font-bold"]
    assert [loc.line for _, loc in results] == [1, 2]


def test_matches_can_be_iterated_again():
    matches = ClassMatches('<a class="flex gap-2"></a><b class="p-4 m-2"></b>')
    assert [m.class_string for m in matches] == [m.class_string for m in matches]
    assert len(list(matches)) == 2


def test_dynamic_base_strings():
    assert extract_dynamic_base_strings('className:`px-4 py-2 rounded-lg ${active ? "a" : "b"}`') == [
        "px-4 py-2 rounded-lg"
    ]
    assert extract_dynamic_base_strings('className=`flex gap-2 ${isOpen ? "visible" : "hidden"}`') == ["flex gap-2"]
    assert extract_dynamic_base_strings("className:  `  flex   gap-2  ${dynamic}`") == ["flex   gap-2"]
    multi = extract_dynamic_base_strings("className:`px-4 py-2 ${a}`,className:`text-lg font-bold ${b}`")
    assert sorted(multi) == ["px-4 py-2", "text-lg font-bold"]
    assert extract_dynamic_base_strings("className:`flex gap-2`") == []
    assert extract_dynamic_base_strings('className:"flex gap-2"') == []


def test_source_types():
    assert source_type_for("chunks/app.js") == "js"
    assert source_type_for("chunks/app.mjs") == "js"
    assert source_type_for("server/app/index.html") == "html"
    assert source_type_for("server/app/index.rsc") == "rsc"
    assert source_type_for("static/css/app.css") is None


def test_scan_contents_aggregates_by_normalized_key():
    config = ConsolidationConfig(exclude=ExcludeRules.from_strings(prefixes=["js-"]))
    result = scan_contents(
        {
            "server/app/page.html": '<div class="flex gap-2 js-open">a</div><p class="text-sm">b</p>',
            "static/chunks/page.js": 'e("div",{className:"gap-2 flex"})',
            "static/css/app.css": ".flex{display:flex}",
        },
        config,
    )
    assert list(result.occurrences) == ["flex gap-2"]
    occurrence = result.occurrences["flex gap-2"]
    assert occurrence.count == 2
    assert occurrence.class_string == "flex gap-2 js-open"
    assert occurrence.excluded_classes == ("js-open",)
    assert occurrence.source_types == {"html", "js"}
    assert [loc.file_path for loc in occurrence.locations] == ["server/app/page.html", "static/chunks/page.js"]
    assert len(result.files) == 2


def test_scan_collects_dynamic_bases_from_scripts():
    result = scan_contents(
        {"static/chunks/a.js": 'className:`py-2 px-4 ${on ? "x" : "y"}`'},
        ConsolidationConfig(),
    )
    assert list(result.dynamic_bases) == ["px-4 py-2"]
    assert result.dynamic_bases["px-4 py-2"].base_classes == ("px-4", "py-2")


def test_scan_build_output(tmp_path: Path):
    html_dir = tmp_path / "server" / "app"
    js_dir = tmp_path / "static" / "chunks"
    html_dir.mkdir(parents=True)
    js_dir.mkdir(parents=True)
    (html_dir / "index.html").write_text('<div class="flex items-center gap-2"></div>', encoding="utf-8")
    (js_dir / "main.js").write_text('className:"flex items-center gap-2"', encoding="utf-8")
    (js_dir / "broken.js").write_bytes(b"\xff\xfe\xfa")

    result = scan_build_output(ConsolidationConfig(build_dir=str(tmp_path)))
    occurrence = result.occurrences["flex gap-2 items-center"]
    assert occurrence.count == 2
    assert occurrence.source_types == {"html", "js"}
    assert len(result.files) == 2
    assert len(result.errors) == 1
    assert "broken.js" in result.errors[0]
