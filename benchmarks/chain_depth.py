#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import math
import statistics
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "python"))

from deferchain import defer  # noqa: E402


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        raise ValueError("no values to summarize")
    if percentile <= 0.0:
        return sorted_values[0]
    if percentile >= 1.0:
        return sorted_values[-1]
    index = (len(sorted_values) - 1) * percentile
    low = int(math.floor(index))
    high = int(math.ceil(index))
    if low == high:
        return sorted_values[low]
    weight = index - low
    return sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight


def _nested(depth: int) -> dict:
    value: dict = {"leaf": depth}
    for _ in range(depth):
        value = {"next": value}
    return value


async def _resolve_once(data: dict, depth: int) -> float:
    async def source():
        return data

    start = time.perf_counter()
    node = defer(source())
    for _ in range(depth):
        node = node.next
    result = await node.leaf
    end = time.perf_counter()
    if result != depth:
        raise RuntimeError(f"chain resolved to {result!r}, expected {depth}")
    return (end - start) * 1000.0


async def _run(depth: int, warmup: int, iterations: int) -> list[float]:
    data = _nested(depth)
    for _ in range(warmup):
        await _resolve_once(data, depth)
    samples: list[float] = []
    for _ in range(iterations):
        samples.append(await _resolve_once(data, depth))
    return samples


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark building and awaiting a deep attribute chain.",
    )
    parser.add_argument("--depth", type=int, default=100)
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--warmup", type=int, default=5)
    args = parser.parse_args(argv)

    if args.depth <= 0:
        parser.error("--depth must be positive")
    if args.iterations <= 0:
        parser.error("--iterations must be positive")
    if args.warmup < 0:
        parser.error("--warmup cannot be negative")

    samples = asyncio.run(_run(args.depth, args.warmup, args.iterations))

    samples.sort()
    mean = statistics.fmean(samples)
    median = statistics.median(samples)
    p95 = _percentile(samples, 0.95)
    stdev = statistics.pstdev(samples)

    print(f"depth: {args.depth}")
    print(f"warmup: {args.warmup} iterations: {args.iterations}")
    print(f"mean: {mean:.3f} ms")
    print(f"median: {median:.3f} ms")
    print(f"p95: {p95:.3f} ms")
    print(f"stdev: {stdev:.3f} ms")
    print(f"min: {samples[0]:.3f} ms")
    print(f"max: {samples[-1]:.3f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
