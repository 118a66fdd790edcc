"""Command line entry point."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
import sys
from typing import Sequence

from .config import ConsolidationConfig, load_config
from .consolidator import Manifest, create_class_mappings, load_mapping_manifest, save_mapping_manifest
from .engine import ConsolidationEngine
from .metrics import calculate_metrics, format_bytes, format_percentage, format_time
from .savings import estimate_css_overhead

REPORT_MAPPINGS = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="classpresso", description="Find repeated utility-class patterns in build output")
    sub = parser.add_subparsers(dest="command", required=True)
    analyze = sub.add_parser("analyze", help="Report patterns that would be consolidated")
    analyze.add_argument("build_dir", nargs="?", default=None)
    analyze.add_argument("--config", default="classpresso.config.json")
    analyze.add_argument("--ssr", action="store_true", default=None, help="Only consolidate hydration-safe patterns")
    analyze.add_argument("--force-all", action="store_true", default=None)
    analyze.add_argument("--min-occurrences", type=int, default=None)
    analyze.add_argument("--naming", choices=("sequential", "hash"), default=None)
    analyze.add_argument("--top", type=int, default=10)
    analyze.add_argument("--manifest", action="store_true", help="Write the mapping manifest")
    analyze.add_argument("-v", "--verbose", action="store_true")

    report = sub.add_parser("report", help="Show the manifest written by a previous run")
    report.add_argument("build_dir", nargs="?", default=ConsolidationConfig().build_dir)
    report.add_argument("--format", choices=("text", "json"), default="text")
    report.add_argument("-v", "--verbose", action="store_true")
    return parser


def _config_from_args(args: argparse.Namespace) -> ConsolidationConfig:
    config = load_config(args.config)
    overrides = {
        "build_dir": args.build_dir,
        "ssr": args.ssr,
        "force_all": args.force_all,
        "min_occurrences": args.min_occurrences,
        "naming": args.naming,
    }
    return replace(config, **{key: value for key, value in overrides.items() if value is not None})


def run_analyze(args: argparse.Namespace) -> int:
    try:
        config = _config_from_args(args)
    except ValueError as exc:
        print(f"config error: {exc}")
        return 2
    result = ConsolidationEngine(config).analyze_build()
    if result.issues:
        for issue in result.issues:
            print(f"config error: {issue}")
        return 2

    summary = result.summary
    metrics = calculate_metrics(result.candidates, result.scan.files, estimate_css_overhead(result.candidates))
    print(f"Files scanned:       {metrics.total_files_scanned}")
    print(f"Distinct patterns:   {len(result.scan.occurrences)}")
    print(f"Consolidated:        {summary.total_patterns}")
    print(f"Occurrences:         {summary.total_occurrences}")
    print(f"Bytes saved:         {format_bytes(metrics.bytes_saved)}")
    print(f"CSS overhead:        {format_bytes(metrics.consolidated_css_bytes)}")
    print(f"Net savings:         {format_bytes(metrics.net_bytes_saved)}")
    if metrics.original_total_bytes:
        print(f"Reduction:           {format_percentage(metrics.percentage_reduction)}")
    print(f"Parse time saved:    {format_time(metrics.estimated_parse_time_saved_ms)}")
    if config.ssr:
        print(f"Mergeable skipped:   {len(result.mergeable_patterns)}")
        print(f"Dynamic conflicts:   {len(result.dynamic_conflicts)}")
    for candidate in result.candidates[: args.top]:
        print(f"  {candidate.hash_name:<10} x{candidate.frequency:<5} {format_bytes(candidate.bytes_saved):>10}  {candidate.class_string}")
    for error in result.scan.errors:
        print(f"warning: {error}")

    if args.manifest:
        path = save_mapping_manifest(create_class_mappings(result.candidates), metrics, config)
        print(f"Manifest written to {path}")
    return 0


def _truncate(text: str, limit: int = 50) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def print_text_report(manifest: Manifest) -> None:
    metrics = manifest.metrics
    print("CLASSPRESSO REPORT")
    print(f"Generated: {manifest.created}")
    print(f"Build:     {manifest.build_dir}")
    print()
    print("Summary")
    print(f"  Files scanned:     {metrics.total_files_scanned}")
    print(f"  Patterns found:    {metrics.unique_class_patterns}")
    print(f"  Patterns applied:  {metrics.consolidated_patterns}")
    print()
    print("Size impact")
    print(f"  Bytes saved:       {format_bytes(metrics.bytes_saved)}")
    print(f"  CSS overhead:      {format_bytes(metrics.consolidated_css_bytes)}")
    print(f"  Net reduction:     {format_bytes(metrics.net_bytes_saved)}")
    print(f"  Percentage:        {format_percentage(metrics.percentage_reduction)}")
    print()
    print("Browser impact")
    print(f"  Parse time saved:  {format_time(metrics.estimated_parse_time_saved_ms)}")
    print(f"  Render time saved: {format_time(metrics.estimated_render_time_saved_ms)}")
    if metrics.top_consolidations:
        print()
        print("Top consolidations")
        for rank, top in enumerate(metrics.top_consolidations, start=1):
            print(f"  {rank}. {top.consolidated} ({top.frequency}x) saves {format_bytes(top.bytes_saved)}")
    print()
    print("Mappings")
    for mapping in manifest.mappings[:REPORT_MAPPINGS]:
        print(f"  {mapping.consolidated} <- {_truncate(mapping.original)}")
    if len(manifest.mappings) > REPORT_MAPPINGS:
        print(f"  ... and {len(manifest.mappings) - REPORT_MAPPINGS} more")


def run_report(args: argparse.Namespace) -> int:
    manifest = load_mapping_manifest(args.build_dir)
    if manifest is None:
        print(f"No classpresso manifest found in {args.build_dir}", file=sys.stderr)
        print('Run "classpresso analyze --manifest" first to generate one.', file=sys.stderr)
        return 1
    if args.format == "json":
        print(json.dumps(manifest.to_dict(), indent=2))
    else:
        print_text_report(manifest)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if args.command == "analyze":
        return run_analyze(args)
    if args.command == "report":
        return run_report(args)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
