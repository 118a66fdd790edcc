import argparse
import random
import statistics

from classpresso import ClassOccurrence, ConsolidationConfig, detect_consolidatable_patterns, get_pattern_summary
from classpresso.savings import estimate_css_overhead

UTILITIES = [
    "flex", "grid", "block", "hidden", "items-center", "justify-between", "gap-2", "gap-4",
    "px-4", "py-2", "p-4", "rounded-lg", "border", "shadow", "text-sm", "text-lg",
    "font-bold", "font-medium", "text-gray-700", "bg-white", "w-full", "h-4", "w-4",
]


def generate_occurrences(patterns: int, seed: int) -> dict[str, ClassOccurrence]:
    rng = random.Random(seed)
    occurrences: dict[str, ClassOccurrence] = {}
    while len(occurrences) < patterns:
        classes = tuple(sorted(rng.sample(UTILITIES, rng.randint(2, 7))))
        key = " ".join(classes)
        if key in occurrences:
            continue
        shuffled = list(classes)
        rng.shuffle(shuffled)
        occurrences[key] = ClassOccurrence(
            class_string=" ".join(shuffled),
            normalized_key=key,
            classes=classes,
            count=int(rng.paretovariate(1.2)),
        )
    return occurrences


def main() -> None:
    parser = argparse.ArgumentParser(description="Pattern consolidation savings benchmark")
    parser.add_argument("--patterns", type=int, default=1000)
    parser.add_argument("--runs", type=int, default=10)
    parser.add_argument("--min-occurrences", type=int, default=2)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    selected: list[int] = []
    net_savings: list[int] = []

    for offset in range(args.runs):
        occurrences = generate_occurrences(args.patterns, args.seed + offset)
        cfg = ConsolidationConfig(min_occurrences=args.min_occurrences)
        candidates = detect_consolidatable_patterns(occurrences, cfg)
        summary = get_pattern_summary(candidates)
        selected.append(summary.total_patterns)
        net_savings.append(summary.total_bytes_saved - estimate_css_overhead(candidates))

    print(f"Runs: {args.runs}")
    print(f"Distinct patterns: {args.patterns}")
    print(f"Mean patterns selected: {statistics.mean(selected):.1f}")
    print(f"Mean net bytes saved: {statistics.mean(net_savings):.1f}")


if __name__ == "__main__":
    main()
