#!/usr/bin/env python3
"""Time `parse` or `check` over every .gabc file under a directory."""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass
import logging
from pathlib import Path
import statistics
import time

from tqdm import tqdm

from gabcpy import check, parse


@dataclass(frozen=True, slots=True)
class PassResult:
    seconds: float
    syllables: int
    codes: Counter[str]


def _time_pass(sources: dict[Path, str], mode: str, *, progress: bool) -> PassResult:
    codes: Counter[str] = Counter()
    syllables = 0
    started = time.perf_counter()
    for path, source in tqdm(sources.items(), desc=mode, unit="file", disable=not progress):
        if mode == "parse":
            document = parse(source)
            diagnostics = document.errors
        else:
            result = check(source)
            document, diagnostics = result.document, result.diagnostics
        syllables += len(document.syllables)
        codes.update(diagnostic.code for diagnostic in diagnostics)
        logging.debug("%s: %d finding(s)", path, len(diagnostics))
    return PassResult(time.perf_counter() - started, syllables, codes)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("root", type=Path, help="Directory searched recursively for .gabc files")
    parser.add_argument("--mode", choices=("parse", "check"), default="check")
    parser.add_argument("--repeat", type=int, default=3, help="Timed passes over the corpus")
    parser.add_argument("--quiet", action="store_true", help="Hide progress bars")
    parser.add_argument("--verbose", action="store_true", help="Log per-file finding counts")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    sources = {path: path.read_text(encoding="utf-8-sig") for path in sorted(args.root.rglob("*.gabc"))}
    if not sources:
        raise SystemExit(f"No .gabc files found under {args.root}")

    passes = [_time_pass(sources, args.mode, progress=not args.quiet) for _ in range(max(args.repeat, 1))]
    seconds = [result.seconds for result in passes]
    median = statistics.median(seconds)
    last = passes[-1]

    print(f"{len(sources)} file(s), {last.syllables} syllable(s), mode={args.mode}")
    print(f"median {median:.4f}s  min {min(seconds):.4f}s  max {max(seconds):.4f}s")
    print(f"{len(sources) / median:.1f} files/s, {last.syllables / median:.1f} syllables/s")
    for code, count in last.codes.most_common():
        print(f"  {count:6d}  {code}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
