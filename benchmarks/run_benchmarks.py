#!/usr/bin/env python3
"""Benchmark suite for pyskip comparing against sortedcontainers.SortedList."""

import argparse
import json
import logging
import random
import time
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np
import plotly.graph_objects as go
from sortedcontainers import SortedList
from tqdm import tqdm

from pyskip import SkipList

logger = logging.getLogger("pyskip.benchmarks")


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.lookup_latencies: List[float] = []
        self.delete_latencies: List[float] = []
        self.final_level: int = 0

    def to_dict(self) -> Dict:
        return {
            name: {
                "p50": float(np.percentile(lat, 50)),
                "p95": float(np.percentile(lat, 95)),
                "p99": float(np.percentile(lat, 99)),
                "mean": float(np.mean(lat)),
            }
            for name, lat in (
                ("insert_latencies", self.insert_latencies),
                ("lookup_latencies", self.lookup_latencies),
                ("delete_latencies", self.delete_latencies),
            )
        } | {"final_level": self.final_level}

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()

        for name, lat in (
            ("Insert Latency", self.insert_latencies),
            ("Lookup Latency", self.lookup_latencies),
            ("Delete Latency", self.delete_latencies),
        ):
            fig.add_trace(go.Box(y=lat, name=name, boxpoints="outliers"))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)


def _timed(op: Callable[[int], object], keys: List[int], sink: List[float], desc: str):
    for k in tqdm(keys, desc=desc):
        start = time.perf_counter()
        op(k)
        sink.append((time.perf_counter() - start) * 1e6)


class BenchmarkSuite:
    def __init__(self, num_entries: int, seed: int):
        self.num_entries = num_entries
        rnd = random.Random(seed)
        self._keys = list(range(num_entries))
        rnd.shuffle(self._keys)
        self._lookups = rnd.sample(self._keys, len(self._keys))
        self._deletes = rnd.sample(self._keys, len(self._keys))
        self._seed = seed

    def run_pyskip_benchmark(self) -> Metrics:
        sl: SkipList[int] = SkipList(seed=self._seed)
        metrics = Metrics()
        _timed(sl.insert, self._keys, metrics.insert_latencies, "pyskip Insert")
        metrics.final_level = sl.level
        logger.info("pyskip reached level %d with %d items", sl.level, len(sl))
        _timed(sl.exists, self._lookups, metrics.lookup_latencies, "pyskip Lookup")
        _timed(sl.delete, self._deletes, metrics.delete_latencies, "pyskip Delete")
        return metrics

    def run_sortedlist_benchmark(self) -> Metrics:
        sl = SortedList()
        metrics = Metrics()
        _timed(sl.add, self._keys, metrics.insert_latencies, "SortedList Insert")
        _timed(
            sl.__contains__,
            self._lookups,
            metrics.lookup_latencies,
            "SortedList Lookup",
        )
        _timed(
            sl.discard, self._deletes, metrics.delete_latencies, "SortedList Delete"
        )
        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument(
        "--seed", type=int, default=0, help="Seed for keys and tower heights"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark_results"),
        help="Output directory",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.seed)
    pyskip_metrics = suite.run_pyskip_benchmark()
    baseline_metrics = suite.run_sortedlist_benchmark()

    pyskip_metrics.plot_latencies(
        "pyskip Latency Distribution",
        args.output / "pyskip_latencies.html"
    )
    baseline_metrics.plot_latencies(
        "SortedList Latency Distribution",
        args.output / "sortedlist_latencies.html"
    )

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "pyskip": pyskip_metrics.to_dict(),
            "sortedlist": baseline_metrics.to_dict(),
        }, f, indent=2)
    logger.info("results written to %s", args.output)


if __name__ == "__main__":
    main()
