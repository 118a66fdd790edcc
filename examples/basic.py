"""Basic usage example for classpresso."""

from classpresso import ConsolidationConfig, default_engine, detect_consolidatable_patterns, scan_contents


def main():
    # Example 1: Detection over a scanned build
    print("=" * 60)
    print("Example 1: Basic Detection")
    print("=" * 60)

    card = '<div class="flex items-center justify-between gap-4 rounded-lg border p-4"></div>'
    contents = {f"server/app/page{idx}.html": card * 3 for idx in range(8)}
    contents["static/chunks/app.js"] = 'e("div",{className:"flex items-center justify-between gap-4 rounded-lg border p-4"})'

    config = ConsolidationConfig()
    scan = scan_contents(contents, config)
    candidates = detect_consolidatable_patterns(scan.occurrences, config)

    print(f"Files scanned:     {len(scan.files)}")
    print(f"Distinct patterns: {len(scan.occurrences)}")
    for candidate in candidates:
        print(f"  {candidate.hash_name} <- {candidate.class_string!r} "
              f"(x{candidate.frequency}, {candidate.bytes_saved} bytes)")

    # Example 2: SSR mode and a merged icon pattern
    print("\n" + "=" * 60)
    print("Example 2: SSR Mode")
    print("=" * 60)

    icon_contents = {
        "server/app/page.html": '<svg class="lucide lucide-copy h-4 w-4"></svg>',
        "static/chunks/page.js": 'e(Copy,{className:"h-4 w-4"})',
    }
    for ssr in (False, True):
        cfg = ConsolidationConfig(ssr=ssr, min_occurrences=1, force_all=True, min_bytes_saved=0)
        result = default_engine(cfg).analyze_contents(icon_contents)
        print(f"ssr={ssr!s:5s}: {sorted(c.normalized_key for c in result.candidates)} "
              f"mergeable={sorted(result.mergeable_patterns)}")


if __name__ == "__main__":
    main()
